"""Filesystem operations — discover workspace files and load them.

INVARIANT: Files are truth. A :class:`MarkdownWorkspace` is a snapshot
derived from the files under the workspace root; reload it after
writing converted documents.

Pure parsing utilities live in :mod:`linkfmt.domain.content` and
:mod:`linkfmt.domain.links`. This module handles the actual file I/O.
"""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ruamel.yaml.error import YAMLError

from linkfmt.domain.content import extract_title, parse_frontmatter
from linkfmt.domain.links import extract_links
from linkfmt.domain.model import Resource
from linkfmt.domain.types import ResourceType
from linkfmt.domain.uri import URI
from linkfmt.infrastructure.workspace import MarkdownWorkspace

if TYPE_CHECKING:
    from collections.abc import Iterable

    from linkfmt.config.models import WorkspaceConfig

logger = logging.getLogger(__name__)

# Directories to skip when discovering workspace files.
_SKIP_DIRS = frozenset({".git", ".obsidian", ".foam", ".vscode", "node_modules"})

DEFAULT_NOTE_EXTENSIONS: tuple[str, ...] = (".md", ".markdown")


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_document(path: Path) -> str:
    """Read a document, keeping its line endings untouched."""
    with path.open(encoding="utf-8", newline="") as fh:
        return fh.read()


def write_document(path: Path, content: str) -> None:
    """Write *content* to *path* without newline translation."""
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_workspace_files(root: Path, *, ignore: Iterable[str] = ()) -> list[Path]:
    """Discover all files under *root*, sorted by path.

    Skips ``.git/``, ``.obsidian/``, ``.foam/``, ``.vscode/`` and
    ``node_modules/``, plus any root-relative path matching one of the
    *ignore* glob patterns.
    """
    patterns = list(ignore)
    results: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        rel = path.relative_to(root)
        if any(part in _SKIP_DIRS for part in rel.parts):
            continue
        rel_posix = rel.as_posix()
        if any(fnmatch.fnmatch(rel_posix, pattern) for pattern in patterns):
            continue
        results.append(path)
    return sorted(results)


# ---------------------------------------------------------------------------
# Resource construction
# ---------------------------------------------------------------------------


def parse_note(uri: URI, content: str) -> Resource:
    """Build a note resource from markdown *content*.

    The frontmatter ``type:`` key overrides the ``note`` tag. Invalid
    frontmatter is logged and ignored; the links are still extracted.
    """
    try:
        frontmatter, body = parse_frontmatter(content)
    except YAMLError:
        logger.warning("Invalid frontmatter in %s, ignoring it", uri.path)
        frontmatter, body = {}, content

    resource_type = str(frontmatter.get("type") or ResourceType.NOTE)
    return Resource(
        uri=uri,
        type=resource_type,
        title=extract_title(frontmatter, body) or uri.get_basename(),
        links=tuple(extract_links(content)),
    )


def load_resource(
    path: Path,
    *,
    note_extensions: Iterable[str] = DEFAULT_NOTE_EXTENSIONS,
) -> Resource:
    """Load a single file as a note (by extension) or an attachment."""
    uri = URI.file(path)
    if path.suffix.lower() in {ext.lower() for ext in note_extensions}:
        return parse_note(uri, read_document(path))
    return Resource(uri=uri, type=ResourceType.ATTACHMENT, title=path.name)


def load_workspace(root: Path, config: WorkspaceConfig | None = None) -> MarkdownWorkspace:
    """Read every file under *root* into a new :class:`MarkdownWorkspace`."""
    default_extension = config.default_extension if config else ".md"
    note_extensions = config.note_extensions if config else DEFAULT_NOTE_EXTENSIONS
    ignore = config.ignore if config else ()

    resolved = root.resolve()
    workspace = MarkdownWorkspace(root=URI.file(resolved), default_extension=default_extension)
    for path in find_workspace_files(resolved, ignore=ignore):
        try:
            workspace.set(load_resource(path, note_extensions=note_extensions))
        except UnicodeDecodeError:
            logger.warning("Skipping undecodable file: %s", path)
    logger.debug("Loaded %d resources from %s", len(workspace), resolved)
    return workspace
