"""Group document lines into candidate card blocks."""

import re
from collections.abc import Iterator

from notes2anki_core.schemas.cards import CardBlock

_NEWLINE = re.compile(r"\r?\n")
_NUMBERED_ITEM = re.compile(r"^\d+\.\s")
_BULLET_PREFIXES = ("- ", "* ", "+ ")
_CARD_MARKERS = ("{", "}", "==", "::")


def split_lines(text: str) -> list[str]:
    """Split text on LF or CRLF line endings."""
    return _NEWLINE.split(text)


def front_matter_end(lines: list[str]) -> int:
    """Return the index of the first line after a leading ``---`` block.

    Returns 0 when the document has no front matter.
    """
    if not lines or lines[0].strip() != "---":
        return 0
    for index in range(1, len(lines)):
        if lines[index].strip() == "---":
            return index + 1
    return 0


def _is_continuation(line: str) -> bool:
    stripped = line.strip()
    return (
        stripped.startswith("::")
        or stripped.startswith("^")
        or stripped.startswith(_BULLET_PREFIXES)
        or _NUMBERED_ITEM.match(stripped) is not None
    )


def _toggles_math(stripped: str) -> bool:
    # "$$" alone, an unbalanced opener or closer; "$$x$$" on one line does not toggle
    return stripped.count("$$") % 2 == 1


def iter_blocks(lines: list[str], start: int = 0) -> Iterator[CardBlock]:
    """Yield every closed block of ``lines`` that may hold a card.

    A block keeps growing while its last line ends with ``::``, while a
    fenced code or math region is open, or while the next line starts
    with ``::``, ``^``, a bullet or a numbered item. Closed blocks with
    none of ``{``, ``}``, ``==`` or ``::`` are dropped.

    Args:
        lines: Document lines
        start: Index of the first line to scan

    Yields:
        Candidate blocks with 0-based inclusive line spans
    """
    current: list[str] = []
    block_start = start
    in_code = False
    in_math = False

    for index in range(start, len(lines)):
        line = lines[index]
        if not current:
            block_start = index
        current.append(line)

        stripped = line.strip()
        if not in_math and stripped.startswith("```"):
            in_code = not in_code
        elif not in_code and _toggles_math(stripped):
            in_math = not in_math

        has_next = index + 1 < len(lines)
        if (
            stripped.endswith("::")
            or in_code
            or in_math
            or (has_next and _is_continuation(lines[index + 1]))
        ):
            continue

        body = "\n".join(current)
        current = []
        if any(marker in body for marker in _CARD_MARKERS):
            yield CardBlock(body=body, start_line=block_start, end_line=index)

    # An unterminated fence runs to the end of the document
    if current:
        body = "\n".join(current)
        if any(marker in body for marker in _CARD_MARKERS):
            yield CardBlock(body=body, start_line=block_start, end_line=len(lines) - 1)


def segment_blocks(text: str) -> list[CardBlock]:
    """Split a document into candidate card blocks, skipping front matter."""
    lines = split_lines(text)
    return list(iter_blocks(lines, front_matter_end(lines)))
