"""Tests for image conversion and upload."""

import pytest

from notes2anki_core.parsing.builder import extract_cards
from notes2anki_core.parsing.media import convert_images, media_name, resolve_image
from notes2anki_core.sync.media import attach_media


class TestConvertImages:
    """Tests for rewriting image embeds."""

    def test_wiki_embed(self) -> None:
        """Test a wiki-style embed with a size suffix."""
        field, refs = convert_images("see ![[assets/cell.png|200]]")

        assert field == 'see <img src="assets_cell.png">'
        assert [ref.path for ref in refs] == ["assets/cell.png"]

    def test_markdown_image(self) -> None:
        """Test a markdown image keeps its alt text."""
        field, refs = convert_images("![diagram](pics/a.png)")

        assert field == '<img src="pics_a.png" alt="diagram">'
        assert refs[0].media_name == "pics_a.png"

    def test_remote_image_kept(self) -> None:
        """Test that remote URLs are not renamed."""
        field, refs = convert_images("![x](https://example.com/a.png)")

        assert field == '<img src="https://example.com/a.png" alt="x">'
        assert refs[0].is_remote

    def test_media_name(self) -> None:
        """Test flattening of path separators."""
        assert media_name("a/b\\c.png") == "a_b_c.png"


class TestResolveImage:
    """Tests for finding images in a vault."""

    def test_direct_path(self, tmp_path) -> None:
        """Test a path relative to the vault root."""
        (tmp_path / "a.png").write_bytes(b"x")

        assert resolve_image(tmp_path, "a.png") == (tmp_path / "a.png").resolve()

    def test_by_name(self, tmp_path) -> None:
        """Test falling back to a search by file name."""
        (tmp_path / "deep" / "er").mkdir(parents=True)
        (tmp_path / "deep" / "er" / "a.png").write_bytes(b"x")

        expected = (tmp_path / "deep" / "er" / "a.png").resolve()
        assert resolve_image(tmp_path, "a.png") == expected

    def test_missing(self, tmp_path) -> None:
        """Test that a missing image resolves to None."""
        assert resolve_image(tmp_path, "nope.png") is None

    def test_absolute_path_outside_vault(self, tmp_path) -> None:
        """Test that an absolute path cannot reach files outside the vault."""
        vault = tmp_path / "vault"
        vault.mkdir()
        secret = tmp_path / "secret.txt"
        secret.write_bytes(b"hidden")

        assert resolve_image(vault, str(secret.resolve())) is None

    def test_parent_path_outside_vault(self, tmp_path) -> None:
        """Test that ../ cannot climb out of the vault."""
        vault = tmp_path / "vault"
        vault.mkdir()
        (tmp_path / "secret.txt").write_bytes(b"hidden")

        assert resolve_image(vault, "../secret.txt") is None
        assert resolve_image(vault, "..") is None


class TestAttachMedia:
    """Tests for attach_media."""

    @pytest.mark.asyncio
    async def test_uploads_once(self, store, tmp_path) -> None:
        """Test that an image used twice is uploaded once."""
        (tmp_path / "a.png").write_bytes(b"data")
        cards = extract_cards("Q1::![[a.png]]\n\nQ2::![[a.png]]\n")

        uploaded = await attach_media(cards, store, tmp_path)

        assert uploaded == 1
        assert store.media == {"a.png": b"data"}
        assert cards[1].record.fields["Back"] == '<img src="a.png">'

    @pytest.mark.asyncio
    async def test_missing_file_keeps_tag(self, store, tmp_path) -> None:
        """Test that an unresolvable image is skipped."""
        cards = extract_cards("Q::![[gone.png]]\n")

        assert await attach_media(cards, store, tmp_path) == 0
        assert cards[0].record.fields["Back"] == '<img src="gone.png">'

    @pytest.mark.asyncio
    async def test_no_vault_root(self, store) -> None:
        """Test that fields are converted but nothing uploads without a vault."""
        cards = extract_cards("Q::![[a.png]]\n")

        assert await attach_media(cards, store, None) == 0
        assert store.media == {}
        assert cards[0].record.fields["Back"] == '<img src="a.png">'

    @pytest.mark.asyncio
    async def test_upload_failure(self, store, tmp_path) -> None:
        """Test that an upload error is logged and skipped."""
        (tmp_path / "a.png").write_bytes(b"data")
        store.failing.add("upload_media")
        cards = extract_cards("Q::![[a.png]]\n")

        assert await attach_media(cards, store, tmp_path) == 0

    @pytest.mark.asyncio
    async def test_files_outside_vault_not_uploaded(self, store, tmp_path) -> None:
        """Test that references escaping the vault are skipped."""
        vault = tmp_path / "vault"
        vault.mkdir()
        secret = tmp_path / "secret.txt"
        secret.write_bytes(b"hidden")
        cards = extract_cards(f"Q::![x]({secret.resolve()})\n\nQ2::![[../secret.txt]]\n")

        assert await attach_media(cards, store, vault) == 0
        assert store.media == {}
