# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `OptionCompleter`, a Prompt Toolkit completer for the aliases
registered on an `OptionParser`.

Completions come from `OptionParser.suggest()`. Values are left alone: only a
word that starts with a dash is completed.
"""

from __future__ import annotations

import os
import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

if TYPE_CHECKING:
    from optline.parser.option_parser import OptionParser


class OptionCompleter(Completer):
    """
    Prompt Toolkit completer for option aliases.

    Args:
        parser (OptionParser): The parser whose aliases are offered.
    """

    def __init__(self, parser: "OptionParser"):
        self.parser = parser

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = text.endswith((" ", "\t")) or not text

        stub = "" if cursor_at_end_of_token or not tokens else tokens[-1]
        if stub and not stub.startswith("-"):
            return
        if "=" in stub:
            return
        yield from self._yield_lcp_completions(self.parser.suggest(stub), stub)

    def _ensure_quote(self, text: str) -> str:
        """Quote a suggestion containing whitespace."""
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(self, suggestions, stub):
        """
        Yield completions for the current stub using longest-common-prefix logic.

        Behavior:
        - If only one match → yield it fully.
        - If multiple matches share a longer prefix → insert the prefix, but also
            display all matches in the menu.
        - If no shared prefix → list all matches individually.
        """
        matches = [s for s in suggestions if s.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
        elif len(lcp) > len(stub):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
        else:
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
