"""Link syntaxes and resource classification enums."""

from __future__ import annotations

from enum import StrEnum


class LinkType(StrEnum):
    """The two textual link syntaxes a link can be written in."""

    WIKILINK = "wikilink"
    LINK = "link"


class ResourceType(StrEnum):
    """Resource tags assigned when a workspace is loaded.

    A note's frontmatter ``type:`` key may carry any other string; only
    ``note`` has special meaning during conversion.
    """

    NOTE = "note"
    ATTACHMENT = "attachment"
