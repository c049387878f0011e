"""Core value objects — positions, resources, links, and replacements.

All types are frozen dataclasses. The workspace owns resources; the
conversion layer only reads them and hands back fresh
:class:`LinkReplace` values.
"""

from __future__ import annotations

from dataclasses import dataclass

from linkfmt.domain.types import LinkType, ResourceType
from linkfmt.domain.uri import URI


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line and character offset in a text."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """Half-open ``[start, end)`` span of text."""

    start: Position
    end: Position

    @classmethod
    def create(
        cls,
        start_line: int,
        start_character: int,
        end_line: int | None = None,
        end_character: int | None = None,
    ) -> Range:
        """Build a range; a missing end collapses onto the start."""
        return cls(
            start=Position(start_line, start_character),
            end=Position(
                start_line if end_line is None else end_line,
                start_character if end_character is None else end_character,
            ),
        )

    def overlaps(self, other: Range) -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class ResourceLink:
    """A link occurrence inside a resource's text.

    ``raw_text`` is the exact source substring covered by ``range``,
    including the leading ``!`` of an embed.
    """

    raw_text: str
    type: LinkType
    range: Range
    is_embed: bool = False


@dataclass(frozen=True)
class Resource:
    """A workspace-addressable document."""

    uri: URI
    type: str = ResourceType.NOTE
    title: str | None = None
    links: tuple[ResourceLink, ...] = ()


@dataclass(frozen=True)
class LinkReplace:
    """Text that should replace ``range`` in the source document."""

    new_text: str
    range: Range
