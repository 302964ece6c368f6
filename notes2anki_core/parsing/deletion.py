"""Find ``delete ^<id>`` lines that ask for a note to be removed."""

import re

from notes2anki_core.schemas.cards import DeletionMarker

_DELETE_LINE = re.compile(r"^[ \t]*delete\s+\^(\d+)[ \t]*$", re.IGNORECASE)
_LINE = re.compile(r"[^\n]*\n|[^\n]+$")


def find_deletion_markers(text: str) -> list[DeletionMarker]:
    """Collect deletion markers in document order.

    A marker line directly after a line ending in ``::`` is the back of
    a card, not a marker. Each span covers the whole line including its
    line ending.

    Args:
        text: Full document text

    Returns:
        Markers with character offsets into ``text``
    """
    markers: list[DeletionMarker] = []
    previous = ""
    for match in _LINE.finditer(text):
        line = match.group(0).rstrip("\r\n")
        marker = _DELETE_LINE.match(line)
        if marker and not previous.rstrip().endswith("::"):
            markers.append(
                DeletionMarker(
                    note_id=int(marker.group(1)),
                    span_start=match.start(),
                    span_end=match.end(),
                )
            )
        previous = line
    return markers


def excise_markers(text: str, markers: list[DeletionMarker]) -> str:
    """Remove marker spans from ``text``, last first so offsets stay valid.

    Snapshot-level helper for callers holding the document as a plain
    string. ``sync.deletion.delete_marked`` applies the same spans as
    range edits through a document editor instead.
    """
    for marker in sorted(markers, key=lambda m: m.span_start, reverse=True):
        text = text[: marker.span_start] + text[marker.span_end :]
    return text
