# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals raised by Optline takers.

Signals are not errors. They stop a parse on purpose, e.g. after the help
taker has printed the option table.

Signals:
- HelpSignal: Help was rendered; the process should exit with `EXIT_HELP`.
"""

EXIT_HELP = 1


class HelpSignal(SystemExit):
    """Raised by the help taker after rendering help.

    Subclasses `SystemExit` so an uncaught signal terminates the process with
    a non-zero status, while library callers can still catch it explicitly.
    """

    def __init__(self, code: int = EXIT_HELP):
        super().__init__(code)
