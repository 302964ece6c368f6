"""Document editor collaborators."""

from notes2anki_core.editor.base import BaseDocumentEditor
from notes2anki_core.editor.text import TextDocumentEditor

__all__ = ["BaseDocumentEditor", "TextDocumentEditor"]
