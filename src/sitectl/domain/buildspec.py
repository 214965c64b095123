"""Build specification: install/build/artifact/cache steps for a frontend.

A single specification is defined once and shared by reference across
every branch environment. Serialization produces the structured document
the hosting platform consumes::

    version: '1.0'
    frontend:
      phases:
        preBuild: {commands: [...]}
        build: {commands: [...]}
      artifacts: {baseDirectory: ..., files: [...]}
      cache: {paths: [...]}

INVARIANT: phases run in fixed order (preBuild before build), and a
specification with no build commands can never be constructed.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from pydantic import BaseModel, Field
from ruamel.yaml import YAML

from sitectl.domain.errors import ConfigurationError

DEFAULT_VERSION = "1.0"


def _new_yaml() -> YAML:
    """Create a fresh block-style YAML emitter.

    ruamel.yaml's YAML object is stateful, so one instance per dump.
    """
    y = YAML()
    y.default_flow_style = False
    y.indent(mapping=2, sequence=4, offset=2)
    return y


def _clean(commands: list[str] | tuple[str, ...], *, field: str) -> tuple[str, ...]:
    cleaned: list[str] = []
    for cmd in commands:
        if not isinstance(cmd, str):
            msg = f"{field} entries must be strings, got {type(cmd).__name__}"
            raise ConfigurationError(msg, field=field)
        if cmd.strip():
            cleaned.append(cmd.strip())
    return tuple(cleaned)


class BuildSpecification(BaseModel):
    """Immutable build specification shared by branch environments."""

    model_config = {"frozen": True}

    install_commands: tuple[str, ...] = ()
    build_commands: tuple[str, ...]
    artifact_dir: str
    artifact_globs: tuple[str, ...] = ("**/*",)
    cache_paths: tuple[str, ...] = ()
    version: str = DEFAULT_VERSION

    @classmethod
    def define(
        cls,
        install_commands: list[str] | tuple[str, ...],
        build_commands: list[str] | tuple[str, ...],
        artifact_dir: str,
        artifact_globs: list[str] | tuple[str, ...] = ("**/*",),
        cache_paths: list[str] | tuple[str, ...] = (),
        *,
        version: str = DEFAULT_VERSION,
    ) -> BuildSpecification:
        """Validate and construct a specification.

        Raises:
            ConfigurationError: *artifact_dir* is blank or *build_commands*
                contains no non-blank command.
        """
        build = _clean(build_commands, field="build_commands")
        if not build:
            msg = "build_commands must contain at least one command"
            raise ConfigurationError(msg, field="build_commands")
        base_dir = (artifact_dir or "").strip()
        if not base_dir:
            raise ConfigurationError("artifact_dir must not be empty", field="artifact_dir")
        globs = _clean(artifact_globs, field="artifact_globs") or ("**/*",)
        return cls(
            install_commands=_clean(install_commands, field="install_commands"),
            build_commands=build,
            artifact_dir=base_dir,
            artifact_globs=globs,
            cache_paths=_clean(cache_paths, field="cache_paths"),
            version=version,
        )

    def to_document(self) -> dict[str, Any]:
        """Return the platform document as plain nested dicts and lists."""
        phases: dict[str, Any] = {}
        if self.install_commands:
            phases["preBuild"] = {"commands": list(self.install_commands)}
        phases["build"] = {"commands": list(self.build_commands)}

        frontend: dict[str, Any] = {
            "phases": phases,
            "artifacts": {
                "baseDirectory": self.artifact_dir,
                "files": list(self.artifact_globs),
            },
        }
        if self.cache_paths:
            frontend["cache"] = {"paths": list(self.cache_paths)}
        return {"version": self.version, "frontend": frontend}

    def to_yaml(self) -> str:
        """Render :meth:`to_document` as block-style YAML."""
        stream = StringIO()
        _new_yaml().dump(self.to_document(), stream)
        return stream.getvalue()
