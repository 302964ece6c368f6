"""Convert lightweight markdown inside a card field to the store's HTML."""

import re

from notes2anki_core.parsing.cloze import normalize_cloze
from notes2anki_core.parsing.delimiters import scan_segments
from notes2anki_core.schemas.segments import Segment, SegmentKind

_BOLD = re.compile(r"(\*\*|__)(?=\S)(.+?)(?<=\S)\1")
_ITALIC_STAR = re.compile(r"\*(?=[^\s*])(.+?)(?<=[^\s*])\*")
_ITALIC_UNDERSCORE = re.compile(r"(?<!\w)_(?=[^\s_])(.+?)(?<=[^\s_])_(?!\w)")
_STRIKE = re.compile(r"~~(?=\S)(.+?)(?<=\S)~~")
_LINE_BREAK = re.compile(r"\r?\n")

_FENCE_OPEN = re.compile(r"^[ \t]*```[^\n]*\n")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```[ \t]*$")


def format_emphasis(text: str) -> str:
    """Apply bold, italic and strikethrough to plain text."""
    text = _BOLD.sub(r"<b>\2</b>", text)
    text = _ITALIC_STAR.sub(r"<i>\1</i>", text)
    text = _ITALIC_UNDERSCORE.sub(r"<i>\1</i>", text)
    return _STRIKE.sub(r"<s>\1</s>", text)


def _format_code(text: str) -> str:
    if text.startswith("`") and not text.lstrip().startswith("```"):
        body = normalize_cloze(text[1:-1], in_code=True)
        return f"<code>{body}</code>"
    body = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text, count=1), count=1)
    body = normalize_cloze(body, in_code=True)
    return f"<pre><code>{body}</code></pre>"


def _format_math(text: str) -> str:
    if text.startswith("$$"):
        return f"\\[{normalize_cloze(text[2:-2], in_math=True)}\\]"
    return f"\\({normalize_cloze(text[1:-1], in_math=True)}\\)"


def format_segment(segment: Segment) -> str:
    """Render one scanner segment according to its kind."""
    if segment.kind is SegmentKind.CODE:
        return _format_code(segment.text)
    if segment.kind is SegmentKind.MATH:
        return _format_math(segment.text)
    return format_emphasis(normalize_cloze(segment.text))


def format_field(text: str) -> str:
    """Normalize cloze shorthand and markup in a single card field.

    Plain segments get cloze normalization and emphasis, code segments
    lose their backticks and are wrapped in ``<code>``, math segments are
    rewritten to MathJax delimiters. Newlines become ``<br>`` only after
    every segment has been rendered, so fenced blocks are still detected
    on their own lines.

    Args:
        text: Raw field text

    Returns:
        HTML field content
    """
    rendered = "".join(format_segment(segment) for segment in scan_segments(text))
    return _LINE_BREAK.sub("<br>", rendered)
