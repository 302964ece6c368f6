"""Tests for deletion markers."""

import pytest

from notes2anki_core.editor.text import TextDocumentEditor
from notes2anki_core.parsing.deletion import excise_markers, find_deletion_markers
from notes2anki_core.sync.deletion import delete_marked


class TestFindDeletionMarkers:
    """Tests for finding delete lines."""

    def test_single_marker(self) -> None:
        """Test that a marker line is found and excised entirely."""
        text = "delete ^123\n"
        markers = find_deletion_markers(text)

        assert [marker.note_id for marker in markers] == [123]
        assert excise_markers(text, markers) == ""

    def test_case_insensitive_and_last_line(self) -> None:
        """Test mixed case markers, including one without a newline."""
        text = "Q::A\n^1\nDELETE ^2\nDelete  ^3"
        markers = find_deletion_markers(text)

        assert [marker.note_id for marker in markers] == [2, 3]
        assert excise_markers(text, markers) == "Q::A\n^1\n"

    def test_back_of_card_is_not_a_marker(self) -> None:
        """Test that a marker right after a :: line is card content."""
        assert find_deletion_markers("Question::\ndelete ^9") == []

    def test_marker_must_be_alone(self) -> None:
        """Test that other words on the line disable the marker."""
        assert find_deletion_markers("please delete ^9") == []
        assert find_deletion_markers("delete ^9 now") == []


class TestDeleteMarked:
    """Tests for processing markers against a store."""

    @pytest.mark.asyncio
    async def test_removes_markers_and_deletes(self, store) -> None:
        """Test that markers are removed and notes deleted in one batch."""
        editor = TextDocumentEditor("a\ndelete ^7\nb\ndelete ^8\n")

        deleted = await delete_marked(editor, store)

        assert deleted == 2
        assert store.deleted == [7, 8]
        assert editor.read_full_text() == "a\nb\n"

    @pytest.mark.asyncio
    async def test_no_markers(self, store) -> None:
        """Test that nothing happens without markers."""
        editor = TextDocumentEditor("Q::A")

        assert await delete_marked(editor, store) == 0
        assert store.deleted == []

    @pytest.mark.asyncio
    async def test_store_failure_counts_zero(self, store) -> None:
        """Test that a failed delete reports zero deletions."""
        store.failing.add("delete_batch")
        editor = TextDocumentEditor("delete ^7\n")

        assert await delete_marked(editor, store) == 0

    @pytest.mark.asyncio
    async def test_editor_edits_match_excision(self, store) -> None:
        """Test that editor range edits give the same text as excise_markers."""
        text = "Q::A\n^1\ndelete ^2\nNext::card\r\ndelete ^3"
        editor = TextDocumentEditor(text)

        await delete_marked(editor, store)

        expected = excise_markers(text, find_deletion_markers(text))
        assert editor.read_full_text() == expected
