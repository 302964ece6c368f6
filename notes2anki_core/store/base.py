"""Card store interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from notes2anki_core.schemas.cards import CardRecord
from notes2anki_core.schemas.templates import NoteModel


class CardStoreError(Exception):
    """Raised when the card store rejects or fails a request."""


class StoreUnavailableError(CardStoreError):
    """Raised when the card store cannot be reached."""


class BaseCardStore(ABC):
    """Abstract base class for card stores.

    Every batch method keeps the order of its input. Implementations raise
    ``CardStoreError`` for failures; callers decide whether a failure is
    fatal.
    """

    @abstractmethod
    async def is_available(self) -> bool:
        """Return True if the store answers and speaks a supported version."""
        pass

    @abstractmethod
    async def find_existing(self, note_ids: Iterable[int]) -> set[int]:
        """Return the subset of ``note_ids`` that the store still holds."""
        pass

    @abstractmethod
    async def create_batch(self, records: list[CardRecord]) -> list[int | None]:
        """Create notes.

        Args:
            records: Records to create

        Returns:
            Assigned ids aligned with ``records``; None where a record failed
        """
        pass

    @abstractmethod
    async def update_batch(self, records: list[CardRecord]) -> list[bool]:
        """Update fields, tags and deck of existing notes.

        Args:
            records: Records carrying store ids

        Returns:
            Per-record success flags aligned with ``records``
        """
        pass

    @abstractmethod
    async def delete_batch(self, note_ids: list[int]) -> None:
        """Delete notes by id."""
        pass

    @abstractmethod
    async def ensure_deck(self, deck_name: str) -> bool:
        """Create the deck if it is missing. Returns True if it exists afterwards."""
        pass

    @abstractmethod
    async def ensure_templates(self, models: Iterable[NoteModel]) -> None:
        """Create any of ``models`` that the store does not have yet."""
        pass

    @abstractmethod
    async def upload_media(self, filename: str, data: bytes) -> bool:
        """Store a media file unless one with that name exists. Returns success."""
        pass
