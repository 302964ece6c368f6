"""Shared fixtures: an in-memory card store."""

from collections.abc import Iterable

import pytest

from notes2anki_core.schemas.cards import CardRecord
from notes2anki_core.schemas.templates import NoteModel
from notes2anki_core.store.base import BaseCardStore, CardStoreError


class FakeCardStore(BaseCardStore):
    """Deterministic card store keeping notes in a dict."""

    def __init__(self, first_id: int = 1000):
        self.available = True
        self.notes: dict[int, CardRecord] = {}
        self.next_id = first_id
        self.decks: set[str] = set()
        self.models: set[str] = set()
        self.media: dict[str, bytes] = {}
        self.deleted: list[int] = []
        # Records whose first field is listed here fail to be created
        self.reject_fronts: set[str] = set()
        # Operation names that raise CardStoreError
        self.failing: set[str] = set()

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise CardStoreError(f"{operation} failed")

    async def is_available(self) -> bool:
        return self.available

    async def find_existing(self, note_ids: Iterable[int]) -> set[int]:
        self._check("find_existing")
        return {note_id for note_id in note_ids if note_id in self.notes}

    async def create_batch(self, records: list[CardRecord]) -> list[int | None]:
        self._check("create_batch")
        ids: list[int | None] = []
        for record in records:
            if next(iter(record.fields.values())) in self.reject_fronts:
                ids.append(None)
                continue
            note_id = self.next_id
            self.next_id += 1
            self.notes[note_id] = record.model_copy(update={"id": note_id}, deep=True)
            ids.append(note_id)
        return ids

    async def update_batch(self, records: list[CardRecord]) -> list[bool]:
        self._check("update_batch")
        outcomes = []
        for record in records:
            if record.id in self.notes:
                self.notes[record.id] = record.model_copy(deep=True)
                outcomes.append(True)
            else:
                outcomes.append(False)
        return outcomes

    async def delete_batch(self, note_ids: list[int]) -> None:
        self._check("delete_batch")
        for note_id in note_ids:
            self.notes.pop(note_id, None)
        self.deleted.extend(note_ids)

    async def ensure_deck(self, deck_name: str) -> bool:
        self._check("ensure_deck")
        self.decks.add(deck_name)
        return True

    async def ensure_templates(self, models: Iterable[NoteModel]) -> None:
        self._check("ensure_templates")
        self.models.update(model.model_name for model in models)

    async def upload_media(self, filename: str, data: bytes) -> bool:
        self._check("upload_media")
        self.media[filename] = data
        return True


@pytest.fixture
def store() -> FakeCardStore:
    """Create an empty fake card store."""
    return FakeCardStore()
