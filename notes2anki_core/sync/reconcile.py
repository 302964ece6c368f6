"""Match extracted cards with store notes and write new ids back.

Cards without an id, or whose id the store no longer knows, are created
in one batch; the rest are updated in one batch. Newly assigned ids are
written to the document as ``^<id>`` lines: planned against the
document snapshot first, then applied in ascending line order while
counting inserted lines, since each insertion shifts every later line
down by one.

Only one reconciliation may run against a document at a time; callers
are responsible for that.
"""

from typing import NamedTuple

from notes2anki_core.editor.base import BaseDocumentEditor
from notes2anki_core.schemas.cards import ExtractedCard
from notes2anki_core.store.base import BaseCardStore, CardStoreError
from notes2anki_core.utils.logging import get_logger

logger = get_logger(__name__)


class IdentifierEdit(NamedTuple):
    """A pending ``^<id>`` write, positioned in the document snapshot.

    ``replaces`` is the stale id on ``line`` to overwrite; when it is None
    a new line is inserted before ``line``.
    """

    line: int
    note_id: int
    replaces: int | None = None


class ReconcileResult(NamedTuple):
    """Number of notes created and updated."""

    created: int
    updated: int


def plan_identifier_edits(
    cards: list[ExtractedCard],
    assigned_ids: list[int | None],
) -> list[IdentifierEdit]:
    """Plan the id writes for freshly created cards.

    Args:
        cards: Cards sent for creation
        assigned_ids: Ids returned by the store, aligned with ``cards``

    Returns:
        Edits in snapshot line order; cards the store failed to create
        get none
    """
    edits: list[IdentifierEdit] = []
    for card, note_id in zip(cards, assigned_ids):
        if note_id is None:
            continue
        if card.id_line is None:
            edits.append(IdentifierEdit(card.end_line + 1, note_id))
        else:
            edits.append(IdentifierEdit(card.id_line, note_id, card.record.id))
    return sorted(edits, key=lambda edit: edit.line)


def _newline_before(editor: BaseDocumentEditor, line: int) -> str:
    # Match the line ending already used above the insertion point
    if line > 0 and editor.get_line(line - 1).endswith("\r"):
        return "\r\n"
    return "\n"


def apply_identifier_edits(
    editor: BaseDocumentEditor,
    edits: list[IdentifierEdit],
) -> list[int]:
    """Apply planned id writes to the document.

    Args:
        editor: Document to edit; must still match the planning snapshot
        edits: Edits from ``plan_identifier_edits``

    Returns:
        The document line each edit landed on
    """
    inserted = 0
    targets: list[int] = []
    for edit in sorted(edits, key=lambda e: e.line):
        target = edit.line + inserted
        marker = f"^{edit.note_id}"
        if edit.replaces is None:
            if target < editor.line_count():
                newline = _newline_before(editor, target)
                editor.replace_range(target, 0, target, 0, marker + newline)
            else:
                last = editor.line_count() - 1
                end_col = len(editor.get_line(last))
                newline = _newline_before(editor, last)
                editor.replace_range(last, end_col, last, end_col, newline + marker)
                target = last + 1
            inserted += 1
            logger.debug(f"Inserted {marker} at line {target}")
        else:
            current = editor.get_line(target)
            replaced = current.replace(f"^{edit.replaces}", marker, 1)
            editor.replace_range(target, 0, target, len(current), replaced)
            logger.info(
                f"Replaced stale id {edit.replaces} with {edit.note_id} at line {target}"
            )
        targets.append(target)
    return targets


async def reconcile(
    cards: list[ExtractedCard],
    store: BaseCardStore,
    editor: BaseDocumentEditor,
) -> ReconcileResult:
    """Create or update every card and write new ids into the document.

    Store failures never propagate: a failed lookup skips the pass, a
    failed batch counts as zero successes, and any ids that were assigned
    are still written back.

    Args:
        cards: Cards extracted from the editor's current text
        store: Card store
        editor: Document the cards came from

    Returns:
        Created and updated counts
    """
    known_ids = [card.record.id for card in cards if card.record.id is not None]
    try:
        existing = await store.find_existing(known_ids) if known_ids else set()
    except CardStoreError as e:
        logger.error(f"Could not look up existing notes, skipping sync: {e}")
        return ReconcileResult(0, 0)

    new_cards = [card for card in cards if card.record.id not in existing]
    existing_cards = [card for card in cards if card.record.id in existing]

    created = 0
    if new_cards:
        try:
            assigned = await store.create_batch([card.record for card in new_cards])
        except CardStoreError as e:
            logger.error(f"Creating {len(new_cards)} notes failed: {e}")
            assigned = []
        assigned = list(assigned) + [None] * (len(new_cards) - len(assigned))

        apply_identifier_edits(editor, plan_identifier_edits(new_cards, assigned))
        for card, note_id in zip(new_cards, assigned):
            if note_id is not None:
                card.record.id = note_id
                created += 1
        if created < len(new_cards):
            logger.warning(f"{len(new_cards) - created} notes were not created")

    updated = 0
    if existing_cards:
        try:
            outcomes = await store.update_batch([card.record for card in existing_cards])
        except CardStoreError as e:
            logger.error(f"Updating {len(existing_cards)} notes failed: {e}")
            outcomes = []
        updated = sum(1 for ok in outcomes if ok)

    logger.info(f"Created {created} notes, updated {updated} notes")
    return ReconcileResult(created, updated)
