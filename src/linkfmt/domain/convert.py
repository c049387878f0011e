"""Link format conversion — rewrite one link in the other syntax.

:func:`convert_link_format` resolves a link against a :class:`Workspace`,
decomposes it, and reassembles it as a wikilink or an inline link whose
target and section resolve to the same place. It never edits text; the
caller applies the returned :class:`LinkReplace`.
"""

from __future__ import annotations

from typing import Protocol

from linkfmt.domain.errors import (
    UnknownResourceError,
    UnresolvableLinkError,
    UnsupportedFormatError,
)
from linkfmt.domain.links import LinkParts, analyze_link
from linkfmt.domain.model import LinkReplace, Resource, ResourceLink
from linkfmt.domain.types import LinkType, ResourceType
from linkfmt.domain.uri import URI


class Workspace(Protocol):
    """Read-only view of the resource graph used during conversion."""

    @property
    def default_extension(self) -> str:
        """Canonical note extension (e.g. ``.md``), elided in wikilinks."""
        ...

    def resolve_link(self, resource: Resource, link: ResourceLink) -> URI | None:
        """Target of *link* inside *resource*; a placeholder URI if it does not exist."""
        ...

    def find(self, uri: URI) -> Resource | None: ...


def convert_link_format(
    link: ResourceLink,
    target_format: str,
    workspace: Workspace,
    note: Resource | URI,
) -> LinkReplace:
    """Convert *link* found in *note* to *target_format*.

    Links already in *target_format*, and links whose target is a
    placeholder, come back with their original text.

    Args:
        link: The link occurrence to convert.
        target_format: ``"wikilink"`` or ``"link"``.
        workspace: Resolver used to locate the link's target.
        note: The resource containing *link*, or its URI.

    Raises:
        UnknownResourceError: *note* or the resolved target is not in the workspace.
        UnresolvableLinkError: The workspace could not resolve *link* at all.
        UnsupportedFormatError: *target_format* is not a known link format.
    """
    resource = note
    if isinstance(note, URI):
        resource = workspace.find(note)
        if resource is None:
            raise UnknownResourceError(note)

    target_uri = workspace.resolve_link(resource, link)
    if link.type == target_format or (target_uri is not None and target_uri.is_placeholder()):
        return LinkReplace(new_text=link.raw_text, range=link.range)

    parts = analyze_link(link)

    if target_uri is None:
        raise UnresolvableLinkError(link)
    target_res = workspace.find(target_uri)
    if target_res is None:
        raise UnknownResourceError(target_uri)

    relative_uri = target_res.uri.relative_to(resource.uri.get_directory())

    if target_format == LinkType.WIKILINK:
        new_text = _as_wikilink(link, parts, relative_uri, workspace.default_extension)
    elif target_format == LinkType.LINK:
        in_page = target_res.uri.path == resource.uri.path
        new_text = _as_inline_link(link, parts, relative_uri, target_res, in_page=in_page)
    else:
        raise UnsupportedFormatError(target_format)
    return LinkReplace(new_text=new_text, range=link.range)


def _as_wikilink(
    link: ResourceLink,
    parts: LinkParts,
    relative_uri: URI,
    default_extension: str,
) -> str:
    # Wikilinks resolve by basename workspace-wide, without the canonical extension.
    if default_extension and relative_uri.path.endswith(default_extension):
        relative_uri = relative_uri.change_extension(default_extension, "")
    target = relative_uri.get_basename()

    embed = "!" if link.is_embed else ""
    section = f"#{parts.section}" if parts.section else ""
    alias = f"|{parts.alias}" if parts.alias else ""
    return f"{embed}[[{target}{section}{alias}]]"


def _as_inline_link(
    link: ResourceLink,
    parts: LinkParts,
    relative_uri: URI,
    target_res: Resource,
    *,
    in_page: bool,
) -> str:
    section = f"#{parts.section}" if parts.section else ""

    alias = parts.alias
    if not alias:
        alias = ("" if in_page else parts.target.strip()) + section

    url = ("" if in_page else relative_uri.path) + section
    if " " in url:
        url = f"<{url}>"

    # Inline embeds only make sense for attachments such as images.
    embed = "!" if link.is_embed and target_res.type != ResourceType.NOTE else ""
    return f"{embed}[{alias}]({url})"
