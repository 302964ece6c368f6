"""Document parsing: from markdown text to card records."""

from notes2anki_core.parsing.builder import (
    build_card,
    extract_cards,
    find_card_spans,
)
from notes2anki_core.parsing.cloze import is_cloze, normalize_cloze
from notes2anki_core.parsing.deletion import excise_markers, find_deletion_markers
from notes2anki_core.parsing.delimiters import scan_segments
from notes2anki_core.parsing.fields import split_fields
from notes2anki_core.parsing.formatting import format_field
from notes2anki_core.parsing.frontmatter import extract_properties
from notes2anki_core.parsing.segment import segment_blocks

__all__ = [
    "build_card",
    "extract_cards",
    "find_card_spans",
    "is_cloze",
    "normalize_cloze",
    "excise_markers",
    "find_deletion_markers",
    "scan_segments",
    "split_fields",
    "format_field",
    "extract_properties",
    "segment_blocks",
]
