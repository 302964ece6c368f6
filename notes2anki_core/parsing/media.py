"""Rewrite image embeds as ``<img>`` tags and resolve them against a vault."""

import re
from pathlib import Path
from typing import NamedTuple

_WIKI_IMAGE = re.compile(r"!\[\[([^\[\]\n]+)\]\]")
_MARKDOWN_IMAGE = re.compile(r"!\[([^\[\]\n]*)\]\(([^()\n]+)\)")
_PATH_SEPARATORS = re.compile(r"[\\/]")


class ImageReference(NamedTuple):
    """An image embedded in a field."""

    path: str
    media_name: str

    @property
    def is_remote(self) -> bool:
        return self.path.startswith(("http://", "https://"))


def media_name(path: str) -> str:
    """Flatten a vault-relative path into a store media file name."""
    return _PATH_SEPARATORS.sub("_", path)


def convert_images(field: str) -> tuple[str, list[ImageReference]]:
    """Replace ``![[path]]`` and ``![alt](path)`` with ``<img>`` tags.

    Local images point at their flattened store name; remote URLs are
    kept verbatim.

    Returns:
        The rewritten field and the images it references
    """
    references: list[ImageReference] = []

    def _reference(path: str) -> str:
        path = path.split("|", 1)[0].strip()
        reference = ImageReference(path, media_name(path))
        references.append(reference)
        return path if reference.is_remote else reference.media_name

    def _wiki(match: re.Match[str]) -> str:
        return f'<img src="{_reference(match.group(1))}">'

    def _markdown(match: re.Match[str]) -> str:
        src = _reference(match.group(2))
        return f'<img src="{src}" alt="{match.group(1)}">'

    field = _WIKI_IMAGE.sub(_wiki, field)
    field = _MARKDOWN_IMAGE.sub(_markdown, field)
    return field, references


def resolve_image(vault_root: Path, path: str) -> Path | None:
    """Locate an image in the vault by relative path, then by file name.

    Paths that resolve outside ``vault_root``, whether absolute or
    climbing out with ``..``, are never returned.

    Returns:
        The file's resolved path, or None if the vault does not contain it
    """
    root = vault_root.resolve()
    direct = (root / path).resolve()
    if direct.is_relative_to(root) and direct.is_file():
        return direct
    name = Path(path).name
    if name in ("", ".", ".."):
        return None
    for candidate in sorted(root.rglob(name)):
        resolved = candidate.resolve()
        if resolved.is_relative_to(root) and resolved.is_file():
            return resolved
    return None
