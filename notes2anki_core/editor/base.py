"""Document editor interface."""

from abc import ABC, abstractmethod


class BaseDocumentEditor(ABC):
    """Abstract access to the text of one document.

    Positions are 0-based ``(line, column)`` pairs; ranges are half-open.
    """

    @abstractmethod
    def read_full_text(self) -> str:
        """Return the whole document."""
        pass

    @abstractmethod
    def replace_range(
        self,
        start_line: int,
        start_col: int,
        end_line: int,
        end_col: int,
        new_text: str,
    ) -> None:
        """Replace the text between two positions (an insert when they are equal)."""
        pass

    @abstractmethod
    def get_line(self, line: int) -> str:
        """Return one line without its line ending."""
        pass

    @abstractmethod
    def line_count(self) -> int:
        """Return the number of lines; an empty document has one empty line."""
        pass

    @abstractmethod
    def offset_to_position(self, offset: int) -> tuple[int, int]:
        """Convert a character offset into a ``(line, column)`` position."""
        pass
