"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, linkfmt.toml only contains overrides.
An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from linkfmt.domain.types import LinkType

# --- linkfmt.toml sections ---


class WorkspaceConfig(BaseModel):
    """[workspace] section."""

    model_config = {"frozen": True}

    default_extension: str = ".md"
    note_extensions: list[str] = Field(default_factory=lambda: [".md", ".markdown"])
    ignore: list[str] = Field(default_factory=list)

    @field_validator("default_extension")
    @classmethod
    def _dotted(cls, value: str) -> str:
        if value and not value.startswith("."):
            return f".{value}"
        return value


class ConvertConfig(BaseModel):
    """[convert] section."""

    model_config = {"frozen": True}

    default_format: LinkType = LinkType.LINK
