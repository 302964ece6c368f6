"""Remove ``delete ^<id>`` markers from a document and delete their notes."""

from notes2anki_core.editor.base import BaseDocumentEditor
from notes2anki_core.parsing.deletion import find_deletion_markers
from notes2anki_core.store.base import BaseCardStore, CardStoreError
from notes2anki_core.utils.logging import get_logger

logger = get_logger(__name__)


async def delete_marked(editor: BaseDocumentEditor, store: BaseCardStore) -> int:
    """Excise every deletion marker, then delete the notes in one batch.

    Markers are removed from the last to the first so earlier offsets
    stay valid.

    Args:
        editor: Document to scan and edit
        store: Card store

    Returns:
        Number of notes deleted; 0 if the store rejected the batch
    """
    markers = find_deletion_markers(editor.read_full_text())
    if not markers:
        return 0

    # Positions are computed before any edit so they refer to one snapshot
    positions = [
        (editor.offset_to_position(m.span_start), editor.offset_to_position(m.span_end))
        for m in markers
    ]
    for (start, end) in reversed(positions):
        editor.replace_range(start[0], start[1], end[0], end[1], "")

    note_ids = [marker.note_id for marker in markers]
    try:
        await store.delete_batch(note_ids)
    except CardStoreError as e:
        logger.error(f"Deleting notes {note_ids} failed: {e}")
        return 0
    logger.info(f"Deleted notes: {note_ids}")
    return len(note_ids)
