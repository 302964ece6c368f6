"""Data schemas for the card pipeline."""

from notes2anki_core.schemas.cards import (
    CardBlock,
    CardRecord,
    CardType,
    DeletionMarker,
    ExtractedCard,
    SyncResult,
    canonical_deck_name,
)
from notes2anki_core.schemas.segments import Segment, SegmentKind
from notes2anki_core.schemas.templates import DEFAULT_MODELS, NoteModel

__all__ = [
    # Cards
    "CardBlock",
    "CardRecord",
    "CardType",
    "ExtractedCard",
    "canonical_deck_name",
    # Document edits and results
    "DeletionMarker",
    "SyncResult",
    # Text segments
    "Segment",
    "SegmentKind",
    # Store templates
    "DEFAULT_MODELS",
    "NoteModel",
]
