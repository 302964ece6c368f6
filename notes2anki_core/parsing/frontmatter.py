"""Read the deck name and tags from a document's YAML front matter."""

import re
from typing import NamedTuple

import yaml

from notes2anki_core.utils.logging import get_logger

logger = get_logger(__name__)

_FRONT_MATTER = re.compile(r"\A---\r?\n(.*?)\r?\n---", re.DOTALL)


class DocumentProperties(NamedTuple):
    """Per-document settings declared in front matter."""

    deck: str | None
    tags: list[str]


def extract_properties(text: str) -> DocumentProperties:
    """Parse ``deck`` and ``tags`` from leading ``---`` front matter.

    ``tags`` may be a YAML list or a whitespace-separated string. Anything
    unparsable is ignored and the defaults are returned.

    Args:
        text: Full document text

    Returns:
        Declared deck (or None) and tags (possibly empty)
    """
    match = _FRONT_MATTER.match(text)
    if not match:
        return DocumentProperties(None, [])

    try:
        parsed = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring unparsable front matter: {e}")
        return DocumentProperties(None, [])

    if not isinstance(parsed, dict):
        return DocumentProperties(None, [])

    raw_tags = parsed.get("tags")
    tags: list[str] = []
    if isinstance(raw_tags, list):
        tags = [str(tag).strip() for tag in raw_tags if tag is not None and str(tag).strip()]
    elif isinstance(raw_tags, str):
        tags = raw_tags.split()

    deck = parsed.get("deck")
    return DocumentProperties(str(deck) if deck is not None else None, tags)
