"""Turn candidate blocks into card records.

A block becomes a card when, after normalization, its first field holds
a cloze, or when its body contains a ``::`` field separator. Everything
else is ordinary prose and is dropped without complaint.
"""

import re
from collections.abc import Iterable
from typing import NamedTuple

from notes2anki_core.parsing.cloze import is_cloze
from notes2anki_core.parsing.delimiters import scan_segments
from notes2anki_core.parsing.fields import split_fields
from notes2anki_core.parsing.formatting import format_field
from notes2anki_core.parsing.segment import front_matter_end, iter_blocks, split_lines
from notes2anki_core.schemas.cards import CardBlock, CardRecord, CardType, ExtractedCard
from notes2anki_core.schemas.segments import SegmentKind
from notes2anki_core.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DECK = "Default"

_IDENTIFIER = re.compile(r"(?:^|\s)\^(\d+)(?=\s|$)")
_WIKI_LINK = re.compile(r"(?<!!)\[\[([^\[\]\n]+)\]\]")
# Obsidian tags need at least one non-digit character
_HASHTAG = re.compile(r"(?<!\S)#([\w/-]*[^\W\d][\w/-]*)")
_HEADER = re.compile(r"^(#{1,6})[ \t]+(.*?)[ \t]*$")


class Header(NamedTuple):
    """A markdown heading line."""

    line: int
    level: int
    text: str


def normalize_tag(raw: str) -> str:
    """Turn a hashtag or link target into a store tag (no ``#``, no spaces)."""
    return "_".join(raw.strip().lstrip("#").split())


def unique(tags: Iterable[str]) -> list[str]:
    """Drop empty and repeated tags, keeping first occurrences."""
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def extract_identifier(body: str) -> tuple[int | None, str, int | None]:
    """Find and remove the first ``^<digits>`` marker in a block body.

    Returns:
        The identifier (or None), the body without it, and the 0-based
        line of the body the marker sat on
    """
    match = _IDENTIFIER.search(body)
    if not match:
        return None, body, None
    marker_offset = match.start(1) - 1
    line = body.count("\n", 0, marker_offset)
    stripped = body[: match.start()] + body[match.end() :]
    return int(match.group(1)), stripped, line


def replace_wiki_links(body: str) -> tuple[str, list[str]]:
    """Replace ``[[target|alias]]`` links with their display text.

    Image embeds (``![[...]]``) are left alone.

    Returns:
        The rewritten body and the link targets as tags
    """
    targets: list[str] = []

    def _replace(match: re.Match[str]) -> str:
        target, _, alias = match.group(1).partition("|")
        targets.append(normalize_tag(target))
        return alias or target

    return _WIKI_LINK.sub(_replace, body), targets


def extract_hashtags(body: str) -> tuple[str, list[str]]:
    """Remove ``#tag`` tokens outside code and math spans.

    Returns:
        The body without tags and the tags found
    """
    tags: list[str] = []

    def _collect(match: re.Match[str]) -> str:
        tags.append(normalize_tag(match.group(1)))
        return ""

    parts = []
    for segment in scan_segments(body):
        if segment.kind is SegmentKind.PLAIN:
            parts.append(_HASHTAG.sub(_collect, segment.text))
        else:
            parts.append(segment.text)
    return "".join(parts), tags


def collect_headers(lines: list[str], start: int = 0) -> list[Header]:
    """List the markdown headings of a document, ignoring fenced code."""
    headers: list[Header] = []
    in_code = False
    for index in range(start, len(lines)):
        line = lines[index]
        if line.strip().startswith("```"):
            in_code = not in_code
            continue
        if in_code:
            continue
        match = _HEADER.match(line)
        if match:
            headers.append(Header(index, len(match.group(1)), match.group(2)))
    return headers


def header_tags(headers: list[Header], line: int) -> list[str]:
    """Tags inherited by a block starting at ``line`` from its enclosing headings.

    Walking backward from ``line``, the nearest heading of each strictly
    smaller level is kept, so a deeper heading that appears before a
    shallower one does not apply. Hashtags and wiki links in the kept
    headings become tags.
    """
    tags: list[str] = []
    level_limit = 7
    for header in reversed(headers):
        if header.line >= line:
            continue
        if header.level >= level_limit:
            continue
        level_limit = header.level
        _, link_tags = replace_wiki_links(header.text)
        tags.extend(normalize_tag(m.group(1)) for m in _HASHTAG.finditer(header.text))
        tags.extend(link_tags)
        if level_limit == 1:
            break
    return tags


def build_card(
    block: CardBlock,
    deck_name: str = DEFAULT_DECK,
    global_tags: Iterable[str] = (),
    inherited_tags: Iterable[str] = (),
) -> ExtractedCard | None:
    """Validate a block and build its card record.

    Args:
        block: Candidate block from the segmenter
        deck_name: Deck the card belongs to
        global_tags: Tags applied to every card in the document
        inherited_tags: Tags from enclosing headings

    Returns:
        The extracted card, or None if the block is not a card
    """
    note_id, body, id_offset = extract_identifier(block.body)
    body, link_tags = replace_wiki_links(body)
    body, inline_tags = extract_hashtags(body)
    body = body.strip()

    split = split_fields(body)
    fields = [format_field(value) for value in split.fields]

    if fields and is_cloze(fields[0]):
        card_type = CardType.CLOZE
    elif split.separated:
        card_type = CardType.REVERSED if split.reversed else CardType.BASIC
    else:
        logger.debug(f"Lines {block.start_line}-{block.end_line} are not a card")
        return None

    tags = unique([*inline_tags, *link_tags, *inherited_tags, *global_tags])
    record = CardRecord.from_values(card_type, fields, deck_name, tags, note_id)
    return ExtractedCard(
        record=record,
        start_line=block.start_line,
        end_line=block.end_line,
        id_line=block.start_line + id_offset if id_offset is not None else None,
    )


def extract_cards(
    text: str,
    deck_name: str = DEFAULT_DECK,
    global_tags: Iterable[str] = (),
) -> list[ExtractedCard]:
    """Extract every card from a document.

    Args:
        text: Full document text
        deck_name: Deck assigned to every card
        global_tags: Tags applied to every card

    Returns:
        Cards in document order
    """
    lines = split_lines(text)
    body_start = front_matter_end(lines)
    headers = collect_headers(lines, body_start)
    global_tags = [normalize_tag(tag) for tag in global_tags]

    cards: list[ExtractedCard] = []
    for block in iter_blocks(lines, body_start):
        card = build_card(
            block,
            deck_name=deck_name,
            global_tags=global_tags,
            inherited_tags=header_tags(headers, block.start_line),
        )
        if card is not None:
            cards.append(card)
    return cards


def find_card_spans(text: str) -> list[tuple[int, int]]:
    """Return the ``(start_line, end_line)`` span of every card in a document."""
    return [(card.start_line, card.end_line) for card in extract_cards(text)]
