"""Link parsing — find links in markdown text and split them into parts.

Pure functions, no workspace access. :func:`extract_links` is used when
a workspace is loaded; :func:`analyze_link` is the decomposer shared by
the resolver and the format converter.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from linkfmt.domain.content import frontmatter_line_count
from linkfmt.domain.model import Range, ResourceLink
from linkfmt.domain.types import LinkType

# ![[target#section|alias]] or ![alias](url), never across lines. The url may
# hold one level of balanced parentheses, as in [x](f(x).md).
_LINK_PATTERN = re.compile(
    r"(?P<embed>!?)"
    r"(?:\[\[(?P<wiki>[^\[\]\n]+)\]\]"
    r"|\[(?P<alias>[^\[\]\n]*)\]\((?P<url><[^<>\n]*>|(?:[^()\n]|\([^()\n]*\))*)\))"
)

# Decomposition of a single link's raw text.
_WIKILINK_PARTS = re.compile(
    r"^!?\[\[(?P<target>[^#|]*)(?:#(?P<section>[^|]*))?(?:\|(?P<alias>.*))?\]\]$",
    re.DOTALL,
)
_INLINE_PARTS = re.compile(
    r"^!?\[(?P<alias>[^\[\]]*)\]\((?P<url><[^<>]*>|(?:[^()]|\([^()]*\))*)\)$"
)

_FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_CODE_SPAN_PATTERN = re.compile(r"(`+).+?\1")
_URL_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


@dataclass(frozen=True)
class LinkParts:
    """Decomposed link text. Absent components are empty strings."""

    target: str = ""
    section: str = ""
    alias: str = ""


def analyze_link(link: ResourceLink) -> LinkParts:
    """Split *link* into target, section and alias.

    Wikilinks read ``[[target#section|alias]]``; inline links read
    ``[alias](target#section)`` with the url optionally wrapped in
    ``<...>``. Text that matches neither shape yields empty parts.
    """
    if link.type == LinkType.WIKILINK:
        match = _WIKILINK_PARTS.match(link.raw_text)
        if match is None:
            return LinkParts()
        return LinkParts(
            target=match.group("target") or "",
            section=match.group("section") or "",
            alias=match.group("alias") or "",
        )

    match = _INLINE_PARTS.match(link.raw_text)
    if match is None:
        return LinkParts()
    url = match.group("url").strip()
    if url.startswith("<") and url.endswith(">"):
        url = url[1:-1]
    target, _, section = url.partition("#")
    return LinkParts(target=target, section=section, alias=match.group("alias"))


def is_external_url(url: str) -> bool:
    """Whether *url* carries a URI scheme (``https:``, ``mailto:`` ...)."""
    return _URL_SCHEME_PATTERN.match(url) is not None


def extract_links(text: str) -> list[ResourceLink]:
    """Extract all wikilinks and inline links from markdown *text*.

    Skips the leading frontmatter block, fenced code blocks, inline code
    spans, and inline links to external URLs. Ranges are line/character
    positions in *text*, in document order.
    """
    results: list[ResourceLink] = []
    first_line = frontmatter_line_count(text)
    fence: str | None = None

    for line_no, raw_line in enumerate(text.split("\n")):
        if line_no < first_line:
            continue
        line = raw_line.rstrip("\r")

        fence_match = _FENCE_PATTERN.match(line)
        if fence is not None:
            if fence_match and _closes_fence(fence, fence_match.group(1)):
                fence = None
            continue
        if fence_match:
            fence = fence_match.group(1)
            continue

        code_spans = [m.span() for m in _CODE_SPAN_PATTERN.finditer(line)]
        for match in _LINK_PATTERN.finditer(line):
            begin, end = match.span()
            if any(start < end and begin < stop for start, stop in code_spans):
                continue
            if match.group("wiki") is not None:
                link_type = LinkType.WIKILINK
            else:
                if is_external_url(match.group("url").strip("<>")):
                    continue
                link_type = LinkType.LINK
            results.append(
                ResourceLink(
                    raw_text=match.group(0),
                    type=link_type,
                    range=Range.create(line_no, begin, line_no, end),
                    is_embed=bool(match.group("embed")),
                )
            )
    return results


def _closes_fence(opening: str, candidate: str) -> bool:
    return candidate[0] == opening[0] and len(candidate) >= len(opening)
