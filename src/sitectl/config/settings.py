"""SitectlSettings: one frozen object for flags, environment, and declaration.

Sources, highest precedence first:

1. keyword arguments (the root CLI flags),
2. ``SITECTL_*`` environment variables, nested with ``__``
   (``SITECTL_SOURCE__OAUTH_TOKEN`` carries the repository token),
3. the ``sitectl.toml`` declaration,
4. defaults baked into :mod:`sitectl.config.models`.

Collections declared in TOML (``[branches.*]``, ``[[domains]]``,
``[[rules]]``) replace the defaults wholesale; they are never merged
item by item.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from sitectl.config.discovery import read_toml, resolve_config
from sitectl.config.models import (
    AppConfig,
    BranchConfig,
    BuildConfig,
    DomainConfig,
    FaqEntryConfig,
    PlatformConfig,
    PluginsConfig,
    RuleConfig,
    SourceConfig,
    ZonesConfig,
    default_branches,
    default_domains,
    default_rules,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Top-level tables of the declaration file as a settings source."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._tables: dict[str, Any] = read_toml(toml_path) if toml_path else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return dict(self._tables)


# Declaration path handed from from_cli() to settings_customise_sources().
_pending = threading.local()


class SitectlSettings(BaseSettings):
    """Resolved configuration for one sitectl invocation.

    Held by :class:`~sitectl.commands._context.AppContext` and handed to
    the :class:`~sitectl.infrastructure.workspace.Workspace`.

    Attributes:
        project_root: Directory holding ``sitectl.toml`` (or CWD if none).
        config_path: The TOML file actually loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SITECTL_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    app: AppConfig = Field(default_factory=AppConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    branches: dict[str, BranchConfig] = Field(default_factory=default_branches)
    domains: list[DomainConfig] = Field(default_factory=default_domains)
    rules: list[RuleConfig] = Field(default_factory=default_rules)
    zones: ZonesConfig = Field(default_factory=ZonesConfig)
    platform: PlatformConfig = Field(default_factory=PlatformConfig)
    faq: list[FaqEntryConfig] = Field(default_factory=list)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @property
    def state_dir(self) -> Path:
        """Directory for local platform state and template overrides."""
        return self.project_root / self.platform.state_dir

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
            TomlSettingsSource(settings_cls, getattr(_pending, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> SitectlSettings:
        """Build settings for one CLI invocation.

        *project_root* defaults to the directory holding the declaration,
        so ``.sitectl/`` state lands beside ``sitectl.toml`` even when the
        command runs from a subdirectory.

        Raises:
            click.ClickException: ``--config`` names a missing file, or
                the declaration is not valid TOML.
        """
        toml_path = resolve_config(config_path, project_root)
        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        _pending.toml_path = toml_path
        try:
            return cls(project_root=project_root, config_path=toml_path, **cli_flags)
        finally:
            _pending.toml_path = None
