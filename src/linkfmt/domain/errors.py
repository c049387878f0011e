"""Typed errors raised by link conversion.

Each error carries the offending value so callers can report it
without re-parsing the message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linkfmt.domain.model import ResourceLink
    from linkfmt.domain.uri import URI


class LinkFormatError(Exception):
    """Base class for all conversion failures."""


class ResolutionError(LinkFormatError):
    """A link or resource could not be resolved against the workspace."""


class UnresolvableLinkError(ResolutionError):
    """The workspace returned no identifier at all for a link."""

    def __init__(self, link: ResourceLink) -> None:
        self.link = link
        super().__init__(f"Link {link.raw_text!r} is not resolvable")


class UnknownResourceError(ResolutionError):
    """An identifier does not correspond to any resource in the workspace."""

    def __init__(self, uri: URI) -> None:
        self.uri = uri
        super().__init__(f"No resource found for {uri}")


class UnsupportedFormatError(LinkFormatError, ValueError):
    """The requested target link format is not recognized."""

    def __init__(self, target_format: str) -> None:
        self.target_format = target_format
        super().__init__(f"Link format {target_format!r} is not supported")
