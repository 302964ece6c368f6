"""Card store collaborators."""

from notes2anki_core.store.ankiconnect import AnkiConnectStore
from notes2anki_core.store.base import (
    BaseCardStore,
    CardStoreError,
    StoreUnavailableError,
)

__all__ = [
    "AnkiConnectStore",
    "BaseCardStore",
    "CardStoreError",
    "StoreUnavailableError",
]
