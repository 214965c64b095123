"""Tests for BuildSpecification construction and serialization."""

from __future__ import annotations

import pytest

from sitectl.domain.buildspec import BuildSpecification
from sitectl.domain.errors import ConfigurationError
from tests.conftest import make_spec


class TestDefine:
    def test_strips_blank_commands(self) -> None:
        spec = make_spec(install_commands=["npm ci", "  ", ""], build_commands=[" npm run build "])
        assert spec.install_commands == ("npm ci",)
        assert spec.build_commands == ("npm run build",)

    def test_empty_build_commands_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            make_spec(build_commands=[])
        assert exc_info.value.field == "build_commands"
        assert exc_info.value.code == "CONFIGURATION_ERROR"

    def test_whitespace_only_build_commands_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            make_spec(build_commands=["   "])

    def test_blank_artifact_dir_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            make_spec(artifact_dir=" ")
        assert exc_info.value.field == "artifact_dir"

    def test_non_string_command_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            make_spec(install_commands=["npm ci", 42])

    def test_default_artifact_globs(self) -> None:
        assert make_spec().artifact_globs == ("**/*",)

    def test_frozen(self) -> None:
        spec = make_spec()
        with pytest.raises(Exception):
            spec.artifact_dir = "build"  # type: ignore[misc]


class TestDocument:
    def test_full_document(self) -> None:
        doc = make_spec().to_document()
        assert doc == {
            "version": "1.0",
            "frontend": {
                "phases": {
                    "preBuild": {"commands": ["npm ci"]},
                    "build": {"commands": ["npm run build"]},
                },
                "artifacts": {"baseDirectory": "dist", "files": ["**/*"]},
                "cache": {"paths": ["node_modules/**/*"]},
            },
        }

    def test_phases_ordered_prebuild_first(self) -> None:
        phases = make_spec().to_document()["frontend"]["phases"]
        assert list(phases) == ["preBuild", "build"]

    def test_optional_sections_omitted(self) -> None:
        spec = BuildSpecification.define([], ["hugo"], "public")
        frontend = spec.to_document()["frontend"]
        assert "preBuild" not in frontend["phases"]
        assert "cache" not in frontend

    def test_deterministic(self) -> None:
        spec = make_spec()
        assert spec.to_document() == spec.to_document()
        assert spec.to_yaml() == spec.to_yaml()
        assert make_spec().to_yaml() == spec.to_yaml()

    def test_yaml_block_style(self) -> None:
        text = make_spec().to_yaml()
        assert "frontend:" in text
        assert "preBuild:" in text
        assert "baseDirectory: dist" in text
        assert "- npm run build" in text
        assert "{" not in text
