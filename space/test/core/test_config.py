"""Tests for space.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from space.core.config import (
    SpaceConfig,
    apply_env_overrides,
    load_config,
    load_config_or_default,
)
from space.core.result import Err, Ok


class TestSpaceConfig:
    def test_defaults(self) -> None:
        config = SpaceConfig()
        assert config.state_dir == ".space"
        assert config.meta_file == "meta"
        assert config.readme_file == "README"
        assert config.release_channel == "experimental"
        assert config.revision_window == 5

    def test_frozen(self) -> None:
        config = SpaceConfig()
        with pytest.raises(AttributeError):
            config.release_channel = "stable"  # type: ignore[misc]

    def test_develop_url(self) -> None:
        config = SpaceConfig(builder_url="https://example.test/builder/")
        assert config.develop_url("p1") == "https://example.test/builder/p1/develop"

    def test_from_dict_partial(self) -> None:
        config = SpaceConfig.from_dict({"space": {"release_channel": "beta", "timeout": 5}})
        assert config.release_channel == "beta"
        assert config.timeout == 5.0
        assert config.state_dir == ".space"

    def test_from_dict_rejects_bad_window(self) -> None:
        with pytest.raises(ValueError):
            SpaceConfig.from_dict({"space": {"revision_window": 0}})


class TestLoadConfig:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[space]\napi_url = "http://localhost:8080"\n', encoding="utf-8")

        result = load_config(path)
        assert isinstance(result, Ok)
        assert result.value.api_url == "http://localhost:8080"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[space\n", encoding="utf-8")

        result = load_config(path)
        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_invalid_structure(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[space]\nrevision_window = -1\n", encoding="utf-8")

        result = load_config(path)
        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message


class TestLoadConfigOrDefault:
    def test_missing_file_gives_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SPACE_API_URL", raising=False)
        monkeypatch.delenv("SPACE_BUILDER_URL", raising=False)

        result = load_config_or_default(tmp_path / "config.toml")
        assert result == Ok(SpaceConfig())

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[space]\napi_url = "http://from-file"\n', encoding="utf-8")
        monkeypatch.setenv("SPACE_API_URL", "http://from-env")

        result = load_config_or_default(path)
        assert isinstance(result, Ok)
        assert result.value.api_url == "http://from-env"

    def test_broken_file_is_err(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("not toml = = =", encoding="utf-8")

        assert isinstance(load_config_or_default(path), Err)


def test_apply_env_overrides_ignores_blank() -> None:
    config = apply_env_overrides(SpaceConfig(), {"SPACE_BUILDER_URL": "  "})
    assert config.builder_url == SpaceConfig().builder_url
