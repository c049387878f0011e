"""Tests for MarkdownWorkspace — registry lookups and link resolution."""

from __future__ import annotations

import pytest

from linkfmt.domain.model import Range, Resource, ResourceLink
from linkfmt.domain.types import LinkType, ResourceType
from linkfmt.domain.uri import URI
from linkfmt.infrastructure.workspace import MarkdownWorkspace

ROOT = URI.file("/ws")
INDEX = Resource(uri=URI.file("/ws/index.md"))
IDEAS = Resource(uri=URI.file("/ws/notes/ideas.md"))
NESTED_IDEAS = Resource(uri=URI.file("/ws/archive/old/ideas.md"))
SPACED = Resource(uri=URI.file("/ws/my notes/plan.md"))
PICTURE = Resource(uri=URI.file("/ws/img/pic.png"), type=ResourceType.ATTACHMENT)


def _link(raw: str) -> ResourceLink:
    link_type = LinkType.WIKILINK if raw.lstrip("!").startswith("[[") else LinkType.LINK
    return ResourceLink(
        raw_text=raw,
        type=link_type,
        range=Range.create(0, 0, 0, len(raw)),
        is_embed=raw.startswith("!"),
    )


@pytest.fixture
def ws() -> MarkdownWorkspace:
    workspace = MarkdownWorkspace(root=ROOT)
    for resource in (INDEX, IDEAS, NESTED_IDEAS, SPACED, PICTURE):
        workspace.set(resource)
    return workspace


class TestRegistry:
    def test_set_and_len(self, ws: MarkdownWorkspace) -> None:
        assert len(ws) == 5

    def test_set_replaces_same_path(self, ws: MarkdownWorkspace) -> None:
        ws.set(Resource(uri=INDEX.uri, title="Home"))
        assert len(ws) == 5
        assert ws.find(INDEX.uri).title == "Home"

    def test_delete(self, ws: MarkdownWorkspace) -> None:
        assert ws.delete(INDEX.uri) == INDEX
        assert ws.find(INDEX.uri) is None
        assert ws.delete(INDEX.uri) is None

    def test_resources_sorted_by_path(self, ws: MarkdownWorkspace) -> None:
        paths = [res.uri.path for res in ws.resources()]
        assert paths == sorted(paths)

    def test_default_extension(self) -> None:
        assert MarkdownWorkspace().default_extension == ".md"
        assert MarkdownWorkspace(default_extension=".markdown").default_extension == ".markdown"


class TestFind:
    def test_exact_path(self, ws: MarkdownWorkspace) -> None:
        assert ws.find(URI.file("/ws/index.md")) == INDEX

    def test_adds_default_extension(self, ws: MarkdownWorkspace) -> None:
        assert ws.find(URI.file("/ws/index")) == INDEX

    def test_ignores_fragment(self, ws: MarkdownWorkspace) -> None:
        assert ws.find(INDEX.uri.with_fragment("top")) == INDEX

    def test_placeholder_is_never_found(self, ws: MarkdownWorkspace) -> None:
        assert ws.find(URI.placeholder("/ws/index.md")) is None

    def test_string_is_identifier(self, ws: MarkdownWorkspace) -> None:
        assert ws.find("index") == INDEX


class TestFindByIdentifier:
    def test_basename_without_extension(self, ws: MarkdownWorkspace) -> None:
        assert ws.find_by_identifier("index") == INDEX

    def test_basename_with_extension(self, ws: MarkdownWorkspace) -> None:
        assert ws.find_by_identifier("index.md") == INDEX

    def test_attachment_by_full_name(self, ws: MarkdownWorkspace) -> None:
        assert ws.find_by_identifier("pic.png") == PICTURE

    def test_trailing_path(self, ws: MarkdownWorkspace) -> None:
        assert ws.find_by_identifier("old/ideas") == NESTED_IDEAS

    def test_ambiguous_prefers_shortest_path(self, ws: MarkdownWorkspace) -> None:
        assert ws.find_by_identifier("ideas") == IDEAS

    def test_matches_on_path_boundary_only(self, ws: MarkdownWorkspace) -> None:
        assert ws.find_by_identifier("deas") is None

    def test_blank(self, ws: MarkdownWorkspace) -> None:
        assert ws.find_by_identifier("  ") is None


class TestResolveWikilink:
    def test_resolves_by_identifier(self, ws: MarkdownWorkspace) -> None:
        assert ws.resolve_link(INDEX, _link("[[ideas]]")) == IDEAS.uri

    def test_section_becomes_fragment(self, ws: MarkdownWorkspace) -> None:
        uri = ws.resolve_link(INDEX, _link("[[plan#goals|Goals]]"))
        assert uri == SPACED.uri.with_fragment("goals")

    def test_in_page_section(self, ws: MarkdownWorkspace) -> None:
        uri = ws.resolve_link(IDEAS, _link("[[#top]]"))
        assert uri == IDEAS.uri.with_fragment("top")

    def test_embed(self, ws: MarkdownWorkspace) -> None:
        assert ws.resolve_link(INDEX, _link("![[pic.png]]")) == PICTURE.uri

    def test_missing_target_is_placeholder(self, ws: MarkdownWorkspace) -> None:
        uri = ws.resolve_link(INDEX, _link("[[someday#s]]"))
        assert uri.is_placeholder()
        assert uri.path == "someday"
        assert uri.fragment == ""


class TestResolveInlineLink:
    def test_relative_to_containing_directory(self, ws: MarkdownWorkspace) -> None:
        assert ws.resolve_link(IDEAS, _link("[home](../index.md)")) == INDEX.uri

    def test_without_extension(self, ws: MarkdownWorkspace) -> None:
        assert ws.resolve_link(INDEX, _link("[i](notes/ideas)")) == IDEAS.uri

    def test_root_relative(self, ws: MarkdownWorkspace) -> None:
        assert ws.resolve_link(NESTED_IDEAS, _link("[i](/notes/ideas.md)")) == IDEAS.uri

    def test_angle_brackets_with_space(self, ws: MarkdownWorkspace) -> None:
        uri = ws.resolve_link(INDEX, _link("[p](<my notes/plan.md#next>)"))
        assert uri == SPACED.uri.with_fragment("next")

    def test_percent_encoded_space(self, ws: MarkdownWorkspace) -> None:
        assert ws.resolve_link(INDEX, _link("[p](my%20notes/plan.md)")) == SPACED.uri

    def test_in_page_anchor(self, ws: MarkdownWorkspace) -> None:
        uri = ws.resolve_link(INDEX, _link("[top](#top)"))
        assert uri == INDEX.uri.with_fragment("top")

    def test_missing_target_is_placeholder(self, ws: MarkdownWorkspace) -> None:
        uri = ws.resolve_link(IDEAS, _link("[x](missing.md#s)"))
        assert uri == URI.placeholder("/ws/notes/missing.md")

    def test_does_not_resolve_by_basename(self, ws: MarkdownWorkspace) -> None:
        assert ws.resolve_link(INDEX, _link("[i](ideas.md)")).is_placeholder()
