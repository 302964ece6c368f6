"""Configuration for a synchronization pass."""

from dataclasses import dataclass
from pathlib import Path

from notes2anki_core.parsing.builder import DEFAULT_DECK


@dataclass(frozen=True)
class SyncConfig:
    """Values that shape how a document is synchronized.

    Front matter in the document overrides ``default_deck`` and adds to
    ``global_tags``.
    """

    # Deck used when the document does not declare one
    default_deck: str = DEFAULT_DECK

    # Tags added to every card
    global_tags: tuple[str, ...] = ("obsidian",)

    # Media lookup; None disables image uploads
    vault_root: Path | None = None

    # Shown in the Source backlink of every card
    vault_name: str = ""
