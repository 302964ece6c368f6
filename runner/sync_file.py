"""Task for syncing one markdown file in place."""

from __future__ import annotations

from pathlib import Path

import structlog

from notes2anki_core.editor.text import TextDocumentEditor
from notes2anki_core.schemas.cards import SyncResult
from notes2anki_core.store.ankiconnect import AnkiConnectStore
from notes2anki_core.store.base import BaseCardStore
from notes2anki_core.sync.config import SyncConfig
from notes2anki_core.sync.pipeline import sync_document
from runner.config import Settings, settings

logger = structlog.get_logger()


def build_sync_config(path: Path, config: Settings) -> SyncConfig:
    """Derive pass settings for one file; the vault defaults to the file's folder."""
    vault_root = config.vault_root or path.resolve().parent
    return SyncConfig(
        default_deck=config.default_deck,
        global_tags=tuple(config.global_tags),
        vault_root=vault_root,
        vault_name=config.vault_name or vault_root.name,
    )


async def sync_file(
    path: str | Path,
    store: BaseCardStore | None = None,
    config: Settings | None = None,
) -> SyncResult:
    """Sync a markdown file and save the ids written into it.

    Args:
        path: Markdown file to sync
        store: Card store; an AnkiConnect store from settings if omitted
        config: Runner settings

    Returns:
        Counts reported by the sync pass
    """
    config = config or settings
    path = Path(path)
    editor = TextDocumentEditor.from_path(path)
    original = editor.read_full_text()
    logger.info("sync_started", path=str(path))

    owned_store = store is None
    if store is None:
        store = AnkiConnectStore(
            url=config.anki_connect_url,
            timeout=config.request_timeout,
            max_retries=config.max_retries,
        )
    try:
        result = await sync_document(
            editor,
            store,
            build_sync_config(path, config),
            document_name=editor.name,
        )
    finally:
        if owned_store and isinstance(store, AnkiConnectStore):
            await store.aclose()

    if result.aborted:
        logger.warning("store_unavailable", path=str(path), url=config.anki_connect_url)
        return result

    if editor.read_full_text() != original:
        editor.save()
        logger.info("document_saved", path=str(path))

    logger.info(
        "sync_finished",
        path=str(path),
        added=result.cards_added,
        updated=result.cards_updated,
        deleted=result.cards_deleted,
    )
    return result
