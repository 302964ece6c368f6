"""Flashcard schemas."""

import re
from enum import Enum

from pydantic import BaseModel, Field, model_validator

SOURCE_FIELD = "Source"

_DECK_SEPARATORS = re.compile(r"[\\/]")


class CardType(str, Enum):
    """Pedagogical type of a card; selects the store template."""

    BASIC = "Basic"
    CLOZE = "Cloze"
    REVERSED = "Reversed"


# Template field order per card type, excluding the trailing Source field
FIELD_NAMES: dict[CardType, tuple[str, str]] = {
    CardType.BASIC: ("Front", "Back"),
    CardType.REVERSED: ("Front", "Back"),
    CardType.CLOZE: ("Text", "Back Extra"),
}

MODEL_NAMES: dict[CardType, str] = {
    CardType.BASIC: "ObsidianBasic",
    CardType.REVERSED: "ObsidianReversed",
    CardType.CLOZE: "ObsidianCloze",
}


def canonical_deck_name(name: str) -> str:
    """Replace path separators in a deck name with the store's ``::`` hierarchy."""
    return _DECK_SEPARATORS.sub("::", name)


class CardRecord(BaseModel):
    """A normalized flashcard ready for the card store."""

    id: int | None = Field(None, description="Store-assigned note id")
    deck_name: str = Field(..., description="Target deck")
    type: CardType = Field(..., description="Card type")
    fields: dict[str, str] = Field(..., description="Template fields in order")
    tags: list[str] = Field(default_factory=list, description="Card tags")

    @model_validator(mode="after")
    def _check_field_names(self) -> "CardRecord":
        expected = [*FIELD_NAMES[self.type], SOURCE_FIELD]
        if list(self.fields) != expected:
            raise ValueError(
                f"{self.type.value} card requires fields {expected}, got {list(self.fields)}"
            )
        return self

    @classmethod
    def from_values(
        cls,
        card_type: CardType,
        values: list[str],
        deck_name: str,
        tags: list[str] | None = None,
        note_id: int | None = None,
    ) -> "CardRecord":
        """Build a record, mapping positional field values onto the type's names.

        Missing values become empty strings; extra values are ignored.
        """
        names = FIELD_NAMES[card_type]
        fields = {
            name: values[index] if index < len(values) else ""
            for index, name in enumerate(names)
        }
        fields[SOURCE_FIELD] = ""
        return cls(
            id=note_id,
            deck_name=deck_name,
            type=card_type,
            fields=fields,
            tags=tags or [],
        )

    @property
    def model_name(self) -> str:
        """Name of the store template this card is created with."""
        return MODEL_NAMES[self.type]

    def to_note(self) -> dict:
        """Render the record as a store note payload."""
        note: dict = {
            "deckName": canonical_deck_name(self.deck_name),
            "modelName": self.model_name,
            "fields": dict(self.fields),
            "tags": list(self.tags),
        }
        if self.id is not None:
            note["id"] = self.id
        return note


class CardBlock(BaseModel):
    """A contiguous line range that may hold one flashcard."""

    body: str = Field(..., description="Joined lines of the block")
    start_line: int = Field(..., ge=0, description="0-based first line")
    end_line: int = Field(..., ge=0, description="0-based last line, inclusive")

    @model_validator(mode="after")
    def _check_span(self) -> "CardBlock":
        if self.start_line > self.end_line:
            raise ValueError("start_line must not exceed end_line")
        return self


class ExtractedCard(BaseModel):
    """A card record together with the document span it came from."""

    record: CardRecord
    start_line: int = Field(..., ge=0)
    end_line: int = Field(..., ge=0)
    id_line: int | None = Field(
        None, description="Line holding the stable identifier marker, if any"
    )


class DeletionMarker(BaseModel):
    """A ``delete ^<id>`` line found in a document."""

    note_id: int = Field(..., description="Note id to delete from the store")
    span_start: int = Field(..., ge=0, description="Character offset of the marker")
    span_end: int = Field(..., ge=0, description="Offset just past the marker line")


class SyncResult(BaseModel):
    """Counts reported by one synchronization pass."""

    cards_added: int = 0
    cards_updated: int = 0
    cards_deleted: int = 0
    aborted: bool = Field(
        False, description="True when the store was unreachable and nothing ran"
    )
