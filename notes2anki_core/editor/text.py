"""In-memory document editor with optional file persistence."""

from pathlib import Path

from notes2anki_core.editor.base import BaseDocumentEditor


class TextDocumentEditor(BaseDocumentEditor):
    """Editor over a string held in memory.

    Lines are separated by ``\\n``; a ``\\r`` before it stays part of the
    line's text.
    """

    def __init__(self, text: str = "", path: Path | None = None):
        self._text = text
        self.path = path

    @classmethod
    def from_path(cls, path: str | Path) -> "TextDocumentEditor":
        """Load a document from disk."""
        path = Path(path)
        with path.open(encoding="utf-8", newline="") as f:
            return cls(f.read(), path)

    @property
    def name(self) -> str:
        """Document name without extension."""
        return self.path.stem if self.path is not None else "untitled"

    def save(self) -> None:
        """Write the document back to the file it was loaded from."""
        if self.path is None:
            raise ValueError("Document has no backing file")
        # newline="" keeps existing line endings untouched
        with self.path.open("w", encoding="utf-8", newline="") as f:
            f.write(self._text)

    def _line_starts(self) -> list[int]:
        starts = [0]
        index = self._text.find("\n")
        while index != -1:
            starts.append(index + 1)
            index = self._text.find("\n", index + 1)
        return starts

    def _offset(self, line: int, col: int) -> int:
        starts = self._line_starts()
        if not 0 <= line < len(starts):
            raise IndexError(f"Line {line} out of range (0-{len(starts) - 1})")
        line_end = starts[line + 1] - 1 if line + 1 < len(starts) else len(self._text)
        return min(starts[line] + col, line_end)

    def read_full_text(self) -> str:
        return self._text

    def replace_range(
        self,
        start_line: int,
        start_col: int,
        end_line: int,
        end_col: int,
        new_text: str,
    ) -> None:
        start = self._offset(start_line, start_col)
        end = self._offset(end_line, end_col)
        if end < start:
            raise ValueError("Range end precedes range start")
        self._text = self._text[:start] + new_text + self._text[end:]

    def get_line(self, line: int) -> str:
        starts = self._line_starts()
        if not 0 <= line < len(starts):
            raise IndexError(f"Line {line} out of range (0-{len(starts) - 1})")
        end = starts[line + 1] - 1 if line + 1 < len(starts) else len(self._text)
        return self._text[starts[line] : end]

    def line_count(self) -> int:
        return self._text.count("\n") + 1

    def offset_to_position(self, offset: int) -> tuple[int, int]:
        if not 0 <= offset <= len(self._text):
            raise IndexError(f"Offset {offset} out of range")
        line = self._text.count("\n", 0, offset)
        line_start = self._text.rfind("\n", 0, offset) + 1
        return line, offset - line_start
