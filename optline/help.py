# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Plain-text help layout for registered options.

Every option renders as a left-justified label column followed by its
documentation lines, each word-wrapped:

    -t, --train-file    FILE
                        set variable train_file
    --a-very-long-option-name
                        the label did not fit, so the text starts below

When a parser has no description, the usage text falls back to the `__main__`
module docstring or the leading comment block of the invoking script.
"""
from __future__ import annotations

import sys
import textwrap
from pathlib import Path
from typing import Iterable

LABEL_COLUMN = 20
DOC_WIDTH = 60
DESCRIPTION_WIDTH = 80


def format_option_help(
    label: str,
    doc: Iterable[str],
    column: int = LABEL_COLUMN,
    width: int = DOC_WIDTH,
) -> list[str]:
    """
    Lay out one option.

    Args:
        label (str): Text for the label column (aliases).
        doc (Iterable[str]): Documentation lines; each is wrapped separately.
        column (int): Width of the label column.
        width (int): Wrap width of the documentation text.

    Returns:
        list[str]: Output lines without trailing newlines.
    """
    lines: list[str] = []
    for text in doc:
        wrapped = textwrap.wrap(text, width=width) if text.strip() else []
        lines.extend(wrapped or [""])
    if not label and not lines:
        return []

    indent = " " * column
    if not lines:
        return [label]
    if len(label) <= column - 2:
        output = [f"{label:<{column}}{lines[0]}".rstrip()]
    else:
        output = [label, f"{indent}{lines[0]}".rstrip()]
    output.extend(f"{indent}{line}".rstrip() for line in lines[1:])
    return output


def format_description(text: str, width: int = DESCRIPTION_WIDTH) -> list[str]:
    """Wrap a description paragraph by paragraph, keeping blank lines."""
    output: list[str] = []
    for paragraph in text.strip("\n").split("\n\n"):
        if output:
            output.append("")
        output.extend(textwrap.wrap(" ".join(paragraph.split()), width=width))
    return output


def leading_comment_block(path: str | Path) -> str:
    """
    Return the first block of `#` comment lines of a script, without the `#`.

    A shebang line is skipped. Returns an empty string if the file cannot be
    read or does not start with comments.
    """
    try:
        text = Path(path).read_text(encoding="UTF-8")
    except (OSError, UnicodeDecodeError):
        return ""
    block: list[str] = []
    for number, line in enumerate(text.splitlines()):
        if number == 0 and line.startswith("#!"):
            continue
        if not line.startswith("#"):
            break
        block.append(line[1:].strip())
    return "\n".join(block).strip()


def default_usage() -> str:
    """Usage text of the running program: `__main__` docstring, else its comments."""
    main = sys.modules.get("__main__")
    doc = getattr(main, "__doc__", None)
    if doc and doc.strip():
        return doc.strip()
    script = getattr(main, "__file__", None) or (sys.argv[0] if sys.argv else "")
    if not script:
        return ""
    return leading_comment_block(script)
