"""Shared pytest fixtures for linkfmt tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from linkfmt.infrastructure.filesystem import load_workspace
from linkfmt.infrastructure.workspace import MarkdownWorkspace

NOTE_A = """\
# Note A

Links to [[note-b#details|the details]] and [[missing]].
See also ![[diagram.png]] and [[#background]].

## Background
"""

NOTE_B = """\
---
title: Note B
---
# Note B

Back to [Note A](note-a.md) and ![diagram](assets/diagram.png).
Nested: [C](<sub dir/note-c.md>)

## Details
"""

NOTE_C = """\
# Note C

Up: [[note-a]]
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Temporary workspace with three notes and one attachment.

    - ``note-a.md``: wikilinks (aliased, placeholder, embed, in-page)
    - ``note-b.md``: inline links, with frontmatter
    - ``sub dir/note-c.md``: wikilink to a note one level up
    - ``assets/diagram.png``: attachment
    """
    (tmp_path / "note-a.md").write_text(NOTE_A, encoding="utf-8")
    (tmp_path / "note-b.md").write_text(NOTE_B, encoding="utf-8")
    (tmp_path / "sub dir").mkdir()
    (tmp_path / "sub dir" / "note-c.md").write_text(NOTE_C, encoding="utf-8")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "diagram.png").write_bytes(b"\x89PNG\r\n")
    return tmp_path


@pytest.fixture
def workspace(workspace_root: Path) -> MarkdownWorkspace:
    """Workspace loaded from :func:`workspace_root`."""
    return load_workspace(workspace_root)


@pytest.fixture
def _isolated_workspace(workspace_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp workspace root so the CLI loads it.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.delenv("LINKFMT_CONFIG", raising=False)
    monkeypatch.chdir(workspace_root)


@pytest.fixture(autouse=True)
def _reset_root_logging() -> Iterator[None]:
    """Drop handlers that CLI invocations attach to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    root.handlers[:] = handlers
