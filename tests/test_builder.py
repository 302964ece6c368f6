"""Tests for card building and extraction."""

from notes2anki_core.parsing.builder import (
    Header,
    build_card,
    extract_cards,
    extract_identifier,
    find_card_spans,
    header_tags,
    replace_wiki_links,
)
from notes2anki_core.schemas.cards import CardBlock, CardType


class TestExtractCards:
    """Tests for turning documents into card records."""

    def test_basic_card(self) -> None:
        """Test a one-line basic card."""
        cards = extract_cards("Capital of France::Paris")

        assert len(cards) == 1
        record = cards[0].record
        assert record.type == CardType.BASIC
        assert record.fields == {
            "Front": "Capital of France",
            "Back": "Paris",
            "Source": "",
        }
        assert record.deck_name == "Default"
        assert record.id is None
        assert record.model_name == "ObsidianBasic"

    def test_reversed_card(self) -> None:
        """Test that ::: produces a reversed card."""
        record = extract_cards("Front:::Back")[0].record

        assert record.type == CardType.REVERSED
        assert record.model_name == "ObsidianReversed"

    def test_cloze_card(self) -> None:
        """Test a cloze card without a separator."""
        record = extract_cards("The capital of France is {Paris}")[0].record

        assert record.type == CardType.CLOZE
        assert record.fields["Text"] == "The capital of France is {{c1::Paris}}"
        assert record.fields["Back Extra"] == ""

    def test_cloze_with_back_extra(self) -> None:
        """Test that a cloze card keeps its second field as Back Extra."""
        record = extract_cards("{Paris} is the capital::Extra info")[0].record

        assert record.type == CardType.CLOZE
        assert record.fields["Text"] == "{{c1::Paris}} is the capital"
        assert record.fields["Back Extra"] == "Extra info"

    def test_not_a_card(self) -> None:
        """Test that braces without content or separator are not a card."""
        assert extract_cards("x = {}") == []

    def test_multi_line_card_formatting(self) -> None:
        """Test that a multi-line back is formatted with <br>."""
        record = extract_cards("Question::\n- **first**\n- second")[0].record

        assert record.fields["Back"] == "- <b>first</b><br>- second"

    def test_identifier_on_own_line(self) -> None:
        """Test that a trailing ^id line is extracted and stripped."""
        card = extract_cards("Q::A\n^123")[0]

        assert card.record.id == 123
        assert card.record.fields["Back"] == "A"
        assert card.id_line == 1
        assert card.end_line == 1

    def test_identifier_inline(self) -> None:
        """Test an id at the end of the card line."""
        card = extract_cards("Q::A ^42")[0]

        assert card.record.id == 42
        assert card.record.fields["Back"] == "A"
        assert card.id_line == 0

    def test_hashtags_become_tags(self) -> None:
        """Test that hashtags are removed from fields and kept as tags."""
        record = extract_cards("Mitosis::cell division #biology")[0].record

        assert record.fields["Back"] == "cell division"
        assert record.tags == ["biology"]

    def test_hashtag_in_code_is_kept(self) -> None:
        """Test that # inside a fenced block is not a tag."""
        text = "C include::\n```\n#include <stdio.h>\n```"
        record = extract_cards(text)[0].record

        assert record.tags == []
        assert record.fields["Back"] == "<pre><code>#include <stdio.h></code></pre>"

    def test_wiki_links(self) -> None:
        """Test that links become plain text and tags."""
        record = extract_cards("[[Paris]] is the capital of::France")[0].record

        assert record.fields["Front"] == "Paris is the capital of"
        assert record.tags == ["Paris"]

    def test_wiki_link_alias(self) -> None:
        """Test that an aliased link shows the alias and tags the target."""
        record = extract_cards("[[Paris|the city]]::France")[0].record

        assert record.fields["Front"] == "the city"
        assert record.tags == ["Paris"]

    def test_deck_and_global_tags(self) -> None:
        """Test that deck and global tags apply and tags are deduplicated."""
        record = extract_cards(
            "Q::A #x",
            deck_name="Lang/French",
            global_tags=["obsidian", "x"],
        )[0].record

        assert record.deck_name == "Lang/French"
        assert record.tags == ["x", "obsidian"]
        assert record.to_note()["deckName"] == "Lang::French"

    def test_header_tags_are_inherited(self) -> None:
        """Test that enclosing headings contribute their tags."""
        text = "\n".join(
            [
                "# Biology #bio",
                "## Cells",
                "### Old #old",
                "## Genetics #genes",
                "#### Deep #deep",
                "Q::A",
            ]
        )
        record = extract_cards(text)[0].record

        assert record.tags == ["deep", "genes", "bio"]

    def test_front_matter_is_not_a_card(self) -> None:
        """Test that front matter lines are skipped."""
        cards = extract_cards("---\ntags: a::b\n---\nQ::A")

        assert len(cards) == 1
        assert cards[0].start_line == 3


class TestHelpers:
    """Tests for the builder's helper functions."""

    def test_extract_identifier_missing(self) -> None:
        """Test a body without an id."""
        assert extract_identifier("Q::A") == (None, "Q::A", None)

    def test_extract_identifier_needs_whitespace(self) -> None:
        """Test that x^2 is not an id."""
        assert extract_identifier("x^2::four")[0] is None

    def test_image_embeds_are_not_links(self) -> None:
        """Test that ![[...]] is left for media handling."""
        body, tags = replace_wiki_links("see ![[cat.png]] and [[Cats]]")

        assert body == "see ![[cat.png]] and Cats"
        assert tags == ["Cats"]

    def test_header_tags_level_skip(self) -> None:
        """Test that a deeper heading between two shallower ones is ignored."""
        headers = [
            Header(0, 2, "A #a"),
            Header(1, 4, "B #b"),
            Header(2, 2, "C #c"),
        ]

        assert header_tags(headers, 3) == ["c"]

    def test_header_tags_ignore_later_headings(self) -> None:
        """Test that headings after the block do not apply."""
        headers = [Header(5, 1, "Later #later")]

        assert header_tags(headers, 2) == []

    def test_build_card_drops_prose(self) -> None:
        """Test that a block without separator or cloze yields None."""
        block = CardBlock(body="a {} b", start_line=0, end_line=0)

        assert build_card(block) is None


class TestFindCardSpans:
    """Tests for card line spans."""

    def test_spans(self) -> None:
        """Test spans of cards around prose."""
        text = "Q1::A1\n\nnot a card\n\nQ2:::A2\n^5"

        assert find_card_spans(text) == [(0, 0), (4, 5)]
