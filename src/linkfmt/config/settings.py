"""LinkfmtSettings — one frozen object for flags, environment and TOML.

Sources, strongest first:

1. keyword arguments (the CLI's global flags)
2. ``LINKFMT_*`` environment variables, ``__`` for nesting
   (``LINKFMT_CONVERT__DEFAULT_FORMAT=wikilink``)
3. ``linkfmt.toml`` (see :mod:`linkfmt.config.discovery`)
4. the defaults baked into :mod:`linkfmt.config.models`
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from linkfmt.config.discovery import find_config, read_toml
from linkfmt.config.models import ConvertConfig, WorkspaceConfig

# TOML document for the settings object under construction.
_toml_data: ContextVar[dict[str, Any]] = ContextVar("linkfmt_toml_data", default={})


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by an already-parsed TOML document."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        known = self.settings_cls.model_fields
        return {key: value for key, value in self._data.items() if key in known}


class LinkfmtSettings(BaseSettings):
    """Effective configuration of a ``linkfmt`` invocation.

    Attributes:
        workspace_root: Directory holding the config file, else the CWD.
        config_path: Config file in effect, or None.
        workspace: ``[workspace]`` section.
        convert: ``[convert]`` section.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LINKFMT_",
        "env_nested_delimiter": "__",
    }

    workspace_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    convert: ConvertConfig = Field(default_factory=ConvertConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _toml_data.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | Path | None = None,
        workspace_root: Path | None = None,
        **cli_flags: Any,
    ) -> LinkfmtSettings:
        """Build settings for a CLI run.

        An explicit *config_path* skips discovery; otherwise the config
        is looked up from *workspace_root* (or the CWD). Without an
        explicit *workspace_root* the config file's directory becomes the
        workspace root.

        Raises:
            click.ClickException: The config file is not valid TOML.
        """
        toml_path = Path(config_path) if config_path else find_config(workspace_root)
        if toml_path is not None and not toml_path.is_file():
            toml_path = None

        if workspace_root is None:
            workspace_root = toml_path.parent if toml_path else Path.cwd()

        token = _toml_data.set(read_toml(toml_path) if toml_path else {})
        try:
            return cls(workspace_root=workspace_root, config_path=toml_path, **cli_flags)
        finally:
            _toml_data.reset(token)
