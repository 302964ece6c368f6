"""Synchronization of documents with the card store."""

from notes2anki_core.sync.config import SyncConfig
from notes2anki_core.sync.deletion import delete_marked
from notes2anki_core.sync.pipeline import build_source_link, sync_document
from notes2anki_core.sync.reconcile import (
    IdentifierEdit,
    ReconcileResult,
    apply_identifier_edits,
    plan_identifier_edits,
    reconcile,
)

__all__ = [
    "SyncConfig",
    "sync_document",
    "build_source_link",
    "delete_marked",
    "reconcile",
    "plan_identifier_edits",
    "apply_identifier_edits",
    "IdentifierEdit",
    "ReconcileResult",
]
