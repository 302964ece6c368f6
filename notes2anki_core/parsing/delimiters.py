"""Locate code and math spans so formatting can treat them separately.

The scanner returns a complete partition of a text into plain, code and
math segments. Overlapping spans are resolved first-wins: the span that
starts earlier is kept and any span starting inside it is dropped. Code
nested in math (or the reverse) is therefore never recognised.
"""

import re

from notes2anki_core.schemas.segments import Segment, SegmentKind

# ```lang ... ``` with opener and closer each starting a line
_FENCED_CODE = re.compile(
    r"^[ \t]*```[^\n]*\n(?:.*?\n)?[ \t]*```[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
# `code`, but not a piece of a `` or ``` run
_INLINE_CODE = re.compile(r"(?<!`)`(?!`)[^`\n]+?(?<!`)`(?!`)")
_BLOCK_MATH = re.compile(r"\$\$.+?\$\$", re.DOTALL)
# $x$, but not a piece of a $$ pair
_INLINE_MATH = re.compile(r"(?<!\$)\$(?!\$)[^$\n]+?(?<!\$)\$(?!\$)")


def find_code_spans(text: str) -> list[tuple[int, int]]:
    """Return half-open ranges of fenced blocks and inline code spans."""
    spans = [m.span() for m in _FENCED_CODE.finditer(text)]
    spans.extend(m.span() for m in _INLINE_CODE.finditer(text))
    return sorted(spans)


def find_math_spans(text: str) -> list[tuple[int, int]]:
    """Return half-open ranges of display and inline math spans."""
    spans = [m.span() for m in _BLOCK_MATH.finditer(text)]
    spans.extend(m.span() for m in _INLINE_MATH.finditer(text))
    return sorted(spans)


def _resolve_overlaps(
    spans: list[tuple[int, int, SegmentKind]],
) -> list[tuple[int, int, SegmentKind]]:
    # Earlier start wins; for equal starts the longer span is tried first
    ordered = sorted(spans, key=lambda span: (span[0], -span[1]))
    kept: list[tuple[int, int, SegmentKind]] = []
    cursor = 0
    for start, end, kind in ordered:
        if start < cursor:
            continue
        kept.append((start, end, kind))
        cursor = end
    return kept


def scan_segments(text: str) -> list[Segment]:
    """Partition text into ordered plain, code and math segments.

    Args:
        text: Text to scan

    Returns:
        Non-overlapping segments covering every character of ``text``
        exactly once, in document order. Empty input yields no segments.
    """
    special = [(s, e, SegmentKind.CODE) for s, e in find_code_spans(text)]
    special.extend((s, e, SegmentKind.MATH) for s, e in find_math_spans(text))

    segments: list[Segment] = []
    cursor = 0
    for start, end, kind in _resolve_overlaps(special):
        if start > cursor:
            segments.append(
                Segment(
                    kind=SegmentKind.PLAIN,
                    start=cursor,
                    end=start,
                    text=text[cursor:start],
                )
            )
        segments.append(Segment(kind=kind, start=start, end=end, text=text[start:end]))
        cursor = end

    if cursor < len(text):
        segments.append(
            Segment(
                kind=SegmentKind.PLAIN,
                start=cursor,
                end=len(text),
                text=text[cursor:],
            )
        )
    return segments
