"""LinkService — inspect the links of a document and how they resolve."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from linkfmt.domain.links import analyze_link
from linkfmt.services.base import BaseService
from linkfmt.services.result import ServiceResult

if TYPE_CHECKING:
    from linkfmt.domain.model import Resource, ResourceLink
    from linkfmt.domain.uri import URI


class LinkService(BaseService):
    """Read-only queries over a document's links."""

    def list_links(self, uri: URI) -> ServiceResult:
        """List every link in the document at *uri* with its resolution.

        Each item carries ``status``: ``resolved`` (target exists),
        ``placeholder`` (target does not exist yet) or ``unresolvable``.
        """
        op = "list_links"
        resource = self._workspace.find(uri)
        if resource is None:
            return ServiceResult.failure(
                op,
                "NOT_FOUND",
                f"No document found at {uri.path}",
                path=uri.path,
            )

        items = [self._describe(resource, link) for link in resource.links]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": resource.uri.path,
                "title": resource.title,
                "count": len(items),
                "items": items,
            },
        )

    def _describe(self, resource: Resource, link: ResourceLink) -> dict[str, Any]:
        parts = analyze_link(link)
        target_uri = self._workspace.resolve_link(resource, link)
        if target_uri is None:
            status, resolved = "unresolvable", None
        elif target_uri.is_placeholder():
            status, resolved = "placeholder", target_uri.path
        else:
            status, resolved = "resolved", str(target_uri)
        return {
            "line": link.range.start.line + 1,
            "column": link.range.start.character + 1,
            "type": str(link.type),
            "text": link.raw_text,
            "embed": link.is_embed,
            "target": parts.target,
            "section": parts.section,
            "alias": parts.alias,
            "status": status,
            "resolved": resolved,
        }
