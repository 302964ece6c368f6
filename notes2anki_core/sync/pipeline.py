"""Synchronize one document with the card store."""

from urllib.parse import quote

from notes2anki_core.editor.base import BaseDocumentEditor
from notes2anki_core.parsing.builder import extract_cards
from notes2anki_core.parsing.frontmatter import extract_properties
from notes2anki_core.schemas.cards import SOURCE_FIELD, SyncResult
from notes2anki_core.schemas.templates import DEFAULT_MODELS
from notes2anki_core.store.base import BaseCardStore, CardStoreError
from notes2anki_core.sync.config import SyncConfig
from notes2anki_core.sync.deletion import delete_marked
from notes2anki_core.sync.media import attach_media
from notes2anki_core.sync.reconcile import reconcile
from notes2anki_core.utils.logging import get_logger, log_exceptions

logger = get_logger(__name__)


def _encode_uri_component(value: str) -> str:
    return quote(value, safe="-_.!~*'()")


def build_source_link(vault_name: str, document_name: str) -> str:
    """Build the HTML backlink stored in every card's Source field."""
    href = (
        f"obsidian://open?vault={_encode_uri_component(vault_name)}"
        f"&amp;file={_encode_uri_component(document_name)}.md"
    )
    return f'<a href="{href}">{document_name}</a>'


@log_exceptions(logger)
async def sync_document(
    editor: BaseDocumentEditor,
    store: BaseCardStore,
    config: SyncConfig | None = None,
    document_name: str = "unknown",
) -> SyncResult:
    """Run a full synchronization pass over one document.

    The store is checked first; if it is unreachable nothing is edited
    and an aborted result is returned. Otherwise cards are extracted from
    a fresh snapshot of the document, created or updated in the store,
    their ids written back, and deletion markers processed. Store errors
    after the availability check reduce the counts instead of raising.

    Args:
        editor: Document to synchronize
        store: Card store
        config: Synchronization settings
        document_name: Document name used in the Source backlink

    Returns:
        Counts of added, updated and deleted notes
    """
    config = config or SyncConfig()

    try:
        available = await store.is_available()
    except CardStoreError as e:
        logger.error(f"Card store check failed: {e}")
        available = False
    if not available:
        return SyncResult(aborted=True)

    try:
        await store.ensure_templates(DEFAULT_MODELS)
    except CardStoreError as e:
        logger.error(f"Could not ensure note templates: {e}")

    text = editor.read_full_text()
    properties = extract_properties(text)
    deck_name = properties.deck or config.default_deck
    global_tags = [*properties.tags, *config.global_tags]

    try:
        await store.ensure_deck(deck_name)
    except CardStoreError as e:
        logger.error(f"Could not ensure deck {deck_name!r}: {e}")

    cards = extract_cards(text, deck_name=deck_name, global_tags=global_tags)
    logger.info(f"Found {len(cards)} cards in {document_name}")

    source = build_source_link(config.vault_name, document_name)
    for card in cards:
        card.record.fields[SOURCE_FIELD] = source

    await attach_media(cards, store, config.vault_root)

    outcome = await reconcile(cards, store, editor)
    deleted = await delete_marked(editor, store)

    return SyncResult(
        cards_added=outcome.created,
        cards_updated=outcome.updated,
        cards_deleted=deleted,
    )
