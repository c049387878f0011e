"""Frontmatter and title helpers for markdown notes.

No filesystem access happens here. The workspace loader derives a
resource's ``type`` and ``title`` from these helpers, and link
extraction uses :func:`frontmatter_line_count` to step over the
frontmatter block.
"""

from __future__ import annotations

import re
from typing import Any

from ruamel.yaml import YAML

_FRONTMATTER_DELIMITER = "---"

_HEADING_PATTERN = re.compile(r"^#[ \t]+(.+?)[ \t]*#*[ \t]*$", re.MULTILINE)


def _new_yaml() -> YAML:
    # YAML instances keep parser state between calls, so never share one.
    y = YAML()
    y.preserve_quotes = True
    return y


def _frontmatter_end(lines: list[str]) -> int | None:
    """Index of the closing delimiter line, or None if there is no block."""
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            return i
    return None


def frontmatter_line_count(content: str) -> int:
    """Number of lines taken by a leading frontmatter block, delimiters included.

    Returns 0 when *content* has no complete frontmatter block.
    """
    end_idx = _frontmatter_end(content.replace("\r\n", "\n").split("\n"))
    return 0 if end_idx is None else end_idx + 1


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split *content* into its frontmatter mapping and the body.

    A block counts only if the very first line is ``---`` and a later
    ``---`` line closes it. The body has ``\\n`` line endings and no
    leading blank line. Without a block the mapping is empty and the body
    is *content* unchanged; a block that holds a YAML scalar or list
    also yields an empty mapping.

    Raises:
        ruamel.yaml.error.YAMLError: The block is not valid YAML.
    """
    lines = content.replace("\r\n", "\n").split("\n")
    end_idx = _frontmatter_end(lines)
    if end_idx is None:
        return {}, content

    body = "\n".join(lines[end_idx + 1 :]).removeprefix("\n")
    loaded = _new_yaml().load("\n".join(lines[1:end_idx]))
    return (dict(loaded) if isinstance(loaded, dict) else {}), body


def extract_title(frontmatter: dict[str, Any], body: str) -> str | None:
    """Title from frontmatter ``title:``, else the first level-1 heading."""
    title = frontmatter.get("title")
    if title:
        return str(title)
    match = _HEADING_PATTERN.search(body)
    return match.group(1) if match else None
