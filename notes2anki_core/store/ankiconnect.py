"""AnkiConnect card store over HTTP."""

import base64
from collections import defaultdict
from collections.abc import Iterable
from typing import Any

import httpx

from notes2anki_core.schemas.cards import CardRecord, canonical_deck_name
from notes2anki_core.schemas.templates import NoteModel
from notes2anki_core.store.base import (
    BaseCardStore,
    CardStoreError,
    StoreUnavailableError,
)
from notes2anki_core.utils.logging import get_logger
from notes2anki_core.utils.retry import RETRYABLE_EXCEPTIONS, with_retry

logger = get_logger(__name__)

DEFAULT_URL = "http://127.0.0.1:8765"
DEFAULT_TIMEOUT = 30.0
API_VERSION = 6


class AnkiConnectStore(BaseCardStore):
    """Card store backed by the AnkiConnect add-on's JSON API."""

    def __init__(
        self,
        url: str = DEFAULT_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 3,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the store.

        Args:
            url: AnkiConnect endpoint
            timeout: Request timeout in seconds
            max_retries: Maximum attempts for transient transport failures
            client: Optional preconfigured HTTP client
        """
        self.url = url
        self.timeout = timeout
        self.max_retries = max_retries
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AnkiConnectStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def request(self, action: str, **params: Any) -> Any:
        """Invoke an AnkiConnect action and return its ``result``.

        Raises:
            StoreUnavailableError: The endpoint could not be reached
            CardStoreError: AnkiConnect answered with an error
        """
        payload = {"action": action, "version": API_VERSION, "params": params}

        async def _post() -> httpx.Response:
            response = await self.client.post(self.url, json=payload)
            response.raise_for_status()
            return response

        try:
            response = await with_retry(
                _post,
                max_attempts=self.max_retries,
                operation_name=f"AnkiConnect {action}",
            )
        except RETRYABLE_EXCEPTIONS as e:
            raise StoreUnavailableError(f"AnkiConnect unreachable at {self.url}") from e
        except httpx.HTTPStatusError as e:
            raise CardStoreError(
                f"AnkiConnect {action} returned HTTP {e.response.status_code}"
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise CardStoreError(f"AnkiConnect {action} returned invalid JSON") from e
        if not isinstance(body, dict) or "result" not in body:
            raise CardStoreError(f"AnkiConnect {action} returned an unexpected payload")
        if body.get("error") is not None:
            raise CardStoreError(f"AnkiConnect {action} failed: {body['error']}")
        return body["result"]

    async def is_available(self) -> bool:
        try:
            version = await self.request("version")
        except CardStoreError as e:
            logger.error(f"AnkiConnect connection failed: {e}")
            return False
        if not isinstance(version, int):
            logger.error(f"AnkiConnect returned unexpected version {version!r}")
            return False
        logger.info(f"AnkiConnect connection successful (version {version})")
        return True

    async def find_existing(self, note_ids: Iterable[int]) -> set[int]:
        ids = list(note_ids)
        if not ids:
            return set()
        infos = await self.request("notesInfo", notes=ids)
        return {
            info["noteId"]
            for info in infos or []
            if isinstance(info, dict) and info.get("noteId") is not None
        }

    async def create_batch(self, records: list[CardRecord]) -> list[int | None]:
        if not records:
            return []
        notes = []
        for record in records:
            note = record.to_note()
            note.pop("id", None)
            note["options"] = {"allowDuplicate": True}
            notes.append(note)
        result = await self.request("addNotes", notes=notes)
        ids = list(result or [])
        # Pad so callers can index by position
        ids.extend([None] * (len(records) - len(ids)))
        return [note_id if isinstance(note_id, int) else None for note_id in ids]

    async def _move_to_decks(self, records: list[CardRecord]) -> None:
        note_ids = [record.id for record in records if record.id is not None]
        infos = await self.request("notesInfo", notes=note_ids)
        cards_by_note = {
            info["noteId"]: info.get("cards", [])
            for info in infos or []
            if isinstance(info, dict) and "noteId" in info
        }
        cards_by_deck: dict[str, list[int]] = defaultdict(list)
        for record in records:
            cards_by_deck[canonical_deck_name(record.deck_name)].extend(
                cards_by_note.get(record.id, [])
            )
        for deck, cards in cards_by_deck.items():
            if cards:
                await self.request("changeDeck", cards=cards, deck=deck)

    async def update_batch(self, records: list[CardRecord]) -> list[bool]:
        if not records:
            return []
        try:
            await self._move_to_decks(records)
        except CardStoreError as e:
            logger.warning(f"Could not move notes to their decks: {e}")

        actions = [
            {
                "action": "updateNote",
                "params": {
                    "note": {
                        "id": record.id,
                        "fields": dict(record.fields),
                        "tags": list(record.tags),
                    }
                },
            }
            for record in records
        ]
        results = list(await self.request("multi", actions=actions) or [])
        outcomes: list[bool] = []
        for index in range(len(records)):
            if index >= len(results):
                outcomes.append(False)
                continue
            item = results[index]
            # multi wraps each result as {"result": ..., "error": ...}
            if isinstance(item, dict) and "error" in item:
                outcomes.append(item["error"] is None)
            else:
                outcomes.append(True)
        return outcomes

    async def delete_batch(self, note_ids: list[int]) -> None:
        if note_ids:
            await self.request("deleteNotes", notes=note_ids)

    async def ensure_deck(self, deck_name: str) -> bool:
        deck_name = canonical_deck_name(deck_name)
        decks = await self.request("deckNames")
        if deck_name in (decks or []):
            return True
        created = await self.request("createDeck", deck=deck_name)
        if created:
            logger.info(f"Created deck: {deck_name}")
        return bool(created)

    async def ensure_templates(self, models: Iterable[NoteModel]) -> None:
        existing = set(await self.request("modelNames") or [])
        for model in models:
            if model.model_name not in existing:
                await self.request("createModel", **model.to_payload())
                logger.info(f"Created model: {model.model_name}")

    async def upload_media(self, filename: str, data: bytes) -> bool:
        present = await self.request("getMediaFilesNames", pattern=filename)
        if present:
            return True
        stored = await self.request(
            "storeMediaFile",
            filename=filename,
            data=base64.b64encode(data).decode("ascii"),
        )
        logger.info(f"Uploaded media file: {filename}")
        return bool(stored)
