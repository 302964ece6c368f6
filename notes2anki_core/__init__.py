"""notes2anki-core: Sync flashcards written in markdown notes with Anki.

Cards are written inline in a note, separated from their answers by
``::`` (``:::`` for cards that are also asked in reverse), or as clozes
using ``{answer}``, ``{2:answer:hint}`` or ``==answer==``. After a sync
each card is followed by a ``^<note id>`` line linking it to its Anki
note, so later syncs update rather than duplicate it.

    >>> from notes2anki_core import AnkiConnectStore, TextDocumentEditor, sync_document
    >>> editor = TextDocumentEditor.from_path("biology.md")
    >>> async with AnkiConnectStore() as store:
    ...     result = await sync_document(editor, store, document_name=editor.name)
    >>> editor.save()

Parsing alone needs no store:

    >>> from notes2anki_core import extract_cards
    >>> cards = extract_cards("Capital of France::Paris")
"""

from notes2anki_core.editor import BaseDocumentEditor, TextDocumentEditor
from notes2anki_core.parsing import extract_cards, find_card_spans
from notes2anki_core.schemas.cards import CardRecord, CardType, SyncResult
from notes2anki_core.store import AnkiConnectStore, BaseCardStore
from notes2anki_core.sync import SyncConfig, sync_document

__version__ = "0.1.0"

__all__ = [
    # Synchronization
    "sync_document",
    "SyncConfig",
    "SyncResult",
    # Parsing
    "extract_cards",
    "find_card_spans",
    # Schemas
    "CardRecord",
    "CardType",
    # Collaborators
    "AnkiConnectStore",
    "BaseCardStore",
    "BaseDocumentEditor",
    "TextDocumentEditor",
]
