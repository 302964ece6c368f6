"""Convert image embeds in card fields and upload the files they reference."""

from pathlib import Path

from notes2anki_core.parsing.media import convert_images, resolve_image
from notes2anki_core.schemas.cards import ExtractedCard
from notes2anki_core.store.base import BaseCardStore, CardStoreError
from notes2anki_core.utils.logging import get_logger

logger = get_logger(__name__)


async def attach_media(
    cards: list[ExtractedCard],
    store: BaseCardStore,
    vault_root: Path | None,
) -> int:
    """Rewrite image embeds as ``<img>`` tags and upload local images.

    Images that cannot be found, or fail to upload, keep their tag and
    are otherwise skipped.

    Args:
        cards: Cards whose fields are rewritten in place
        store: Card store receiving the media
        vault_root: Directory image paths are resolved against; None
            disables uploads

    Returns:
        Number of files uploaded
    """
    uploaded: set[str] = set()
    for card in cards:
        fields = card.record.fields
        for name, value in list(fields.items()):
            if not value:
                continue
            fields[name], references = convert_images(value)
            for reference in references:
                if reference.is_remote or vault_root is None:
                    continue
                if reference.media_name in uploaded:
                    continue
                path = resolve_image(vault_root, reference.path)
                if path is None:
                    logger.warning(f"Could not find image file: {reference.path}")
                    continue
                try:
                    ok = await store.upload_media(reference.media_name, path.read_bytes())
                except (CardStoreError, OSError) as e:
                    logger.warning(f"Uploading {reference.path} failed: {e}")
                    continue
                if ok:
                    uploaded.add(reference.media_name)
    return len(uploaded)
