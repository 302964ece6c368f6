"""Rewrite fill-in-the-blank shorthand into canonical ``{{cN::text::hint}}`` form.

Three shorthands are recognised:

- brace runs, ``{text}``, ``{{text::hint}}``, ``{{{text}}}``: the group
  number is the smaller of the opening and closing brace counts
- explicit numbers, ``{2:text}`` and ``{2:text:hint}``
- highlights, ``==text==``, always group 1

Text and hint bodies never contain braces, colons or newlines, so an
already-canonical span is never rewrapped.
"""

import re

_BRACE_RUN = re.compile(
    r"(\{+)(?!c\d+::)([^{}\r\n:]+?)(?:::([^{}\r\n:]+?))?(\}+)"
)
_EXPLICIT_NUMBER = re.compile(
    r"(?<!\{)\{(\d+):([^{}\r\n:]+?)(?::([^{}\r\n:]+?))?\}"
)
_HIGHLIGHT = re.compile(r"==([^=\r\n]+?)==")

CANONICAL_CLOZE = re.compile(r"\{\{c\d+::[^}]+\}\}")


def _canonical(number: int | str, text: str, hint: str | None) -> str:
    if hint:
        return f"{{{{c{number}::{text}::{hint}}}}}"
    return f"{{{{c{number}::{text}}}}}"


def _replace_brace_run(match: re.Match[str]) -> str:
    number = min(len(match.group(1)), len(match.group(4)))
    return _canonical(number, match.group(2), match.group(3))


def _replace_explicit(match: re.Match[str]) -> str:
    return _canonical(int(match.group(1)), match.group(2), match.group(3))


def normalize_cloze(text: str, in_code: bool = False, in_math: bool = False) -> str:
    """Convert every cloze shorthand in ``text`` to canonical form.

    Args:
        text: Text to rewrite
        in_code: The text is the body of a code span; highlights are literal
        in_math: The text is the body of a math span; braces belong to the
            math markup and highlights are literal, so nothing is rewritten

    Returns:
        Rewritten text
    """
    if in_math:
        return text

    result = _BRACE_RUN.sub(_replace_brace_run, text)
    result = _EXPLICIT_NUMBER.sub(_replace_explicit, result)
    if not in_code:
        result = _HIGHLIGHT.sub(lambda m: _canonical(1, m.group(1), None), result)
    return result


def is_cloze(text: str) -> bool:
    """Return True if ``text`` holds at least one canonical cloze span."""
    return CANONICAL_CLOZE.search(text) is not None
