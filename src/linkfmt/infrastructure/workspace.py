"""MarkdownWorkspace — in-memory resource graph with link resolution.

Resources are keyed by URI path. Wikilink targets resolve workspace-wide
by identifier (basename or trailing path, with or without the default
extension); inline link urls resolve relative to the containing
resource. Anything that does not exist resolves to a placeholder URI.
"""

from __future__ import annotations

import logging
import posixpath
from urllib.parse import unquote

from linkfmt.domain.links import analyze_link
from linkfmt.domain.model import Resource, ResourceLink
from linkfmt.domain.types import LinkType
from linkfmt.domain.uri import URI

logger = logging.getLogger(__name__)


class MarkdownWorkspace:
    """Snapshot of all resources in a workspace.

    Args:
        root: Workspace root directory; ``/``-prefixed inline urls resolve
            against it. Without a root they are filesystem-absolute.
        default_extension: Canonical note extension used when a target
            omits its extension.
    """

    def __init__(self, *, root: URI | None = None, default_extension: str = ".md") -> None:
        self.root = root
        self._default_extension = default_extension
        self._resources: dict[str, Resource] = {}

    @property
    def default_extension(self) -> str:
        return self._default_extension

    # ------------------------------------------------------------------
    # Resource registry
    # ------------------------------------------------------------------

    def set(self, resource: Resource) -> Resource:
        """Add or replace *resource* (fragments are not part of the key)."""
        self._resources[resource.uri.path] = resource
        return resource

    def delete(self, uri: URI) -> Resource | None:
        return self._resources.pop(uri.path, None)

    def resources(self) -> list[Resource]:
        """All resources ordered by path."""
        return [self._resources[path] for path in sorted(self._resources)]

    def __len__(self) -> int:
        return len(self._resources)

    def find(self, ref: URI | str) -> Resource | None:
        """Look up a resource by URI or by wikilink-style identifier.

        A URI matches its exact path, then the path plus the default
        extension; the fragment is ignored. A string is treated as an
        identifier (see :meth:`find_by_identifier`).
        """
        if isinstance(ref, str):
            return self.find_by_identifier(ref)
        if ref.is_placeholder():
            return None
        found = self._resources.get(ref.path)
        if found is None and self._default_extension and not ref.path.endswith(
            self._default_extension
        ):
            found = self._resources.get(ref.path + self._default_extension)
        return found

    def find_by_identifier(self, identifier: str) -> Resource | None:
        """Resolve a wikilink target such as ``note``, ``sub/note`` or ``note.md``.

        Matches resources whose path ends with the identifier on a path
        boundary, trying the identifier as written and with the default
        extension. Among several matches the shortest path wins, ties
        broken alphabetically.
        """
        identifier = identifier.strip().lstrip("/")
        if not identifier:
            return None
        names = {identifier}
        if self._default_extension and not identifier.endswith(self._default_extension):
            names.add(identifier + self._default_extension)

        matches = [
            path
            for path in self._resources
            if any(path == name or path.endswith(f"/{name}") for name in names)
        ]
        if not matches:
            return None
        matches.sort(key=lambda path: (len(path), path))
        if len(matches) > 1:
            logger.debug(
                "Ambiguous identifier %r, choosing %s from %s", identifier, matches[0], matches
            )
        return self._resources[matches[0]]

    # ------------------------------------------------------------------
    # Link resolution
    # ------------------------------------------------------------------

    def resolve_link(self, resource: Resource, link: ResourceLink) -> URI:
        """Resolve *link* inside *resource* to a resource URI or a placeholder.

        The link's section, if any, becomes the fragment of the result.
        """
        parts = analyze_link(link)
        if link.type == LinkType.WIKILINK:
            target_uri = self._resolve_identifier(resource, parts.target)
        else:
            target_uri = self._resolve_path(resource, unquote(parts.target))
        if parts.section and not target_uri.is_placeholder():
            return target_uri.with_fragment(parts.section)
        return target_uri

    def _resolve_identifier(self, resource: Resource, target: str) -> URI:
        if not target:
            return resource.uri.without_fragment()
        found = self.find_by_identifier(target)
        if found is None:
            return URI.placeholder(target)
        return found.uri

    def _resolve_path(self, resource: Resource, target: str) -> URI:
        if not target:
            return resource.uri.without_fragment()
        if target.startswith("/"):
            base = self.root.path if self.root is not None else "/"
            candidate = URI.file(posixpath.normpath(posixpath.join(base, target.lstrip("/"))))
        else:
            candidate = resource.uri.get_directory().joinpath(target)
        found = self.find(candidate)
        if found is None:
            return URI.placeholder(candidate.path)
        return found.uri
