"""Tests for settings loading."""

from pathlib import Path

import pytest

from localmcp.config import ConfigError, ServerSettings, SettingsLoader, load_settings


class TestServerSettings:
    def test_defaults(self) -> None:
        settings = ServerSettings()
        assert settings.name == "polymarket-mcp-server"
        assert settings.version == "1.0.0"
        assert settings.protocol_version == "2024-11-05"
        assert settings.framing == "chunk"
        assert settings.store.backend == "sqlite"
        assert settings.store.path == "data/polymarket.db"
        assert settings.files.encoding == "utf-8"
        assert settings.telemetry.enabled is False

    def test_log_level_normalised(self) -> None:
        assert ServerSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown log level"):
            ServerSettings(log_level="chatty")


class TestSettingsLoader:
    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "localmcp.yaml"
        path.write_text("name: my-server\nframing: line\nstore:\n  backend: memory\n")
        settings = SettingsLoader(path).load()
        assert settings.name == "my-server"
        assert settings.framing == "line"
        assert settings.store.backend == "memory"

    def test_env_vars_expanded(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOCALMCP_DATA", "/srv/data")
        path = tmp_path / "localmcp.yaml"
        path.write_text("store:\n  path: ${LOCALMCP_DATA}/markets.db\n")
        assert SettingsLoader(path).load().store.path == "/srv/data/markets.db"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert SettingsLoader(path).load() == ServerSettings()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            SettingsLoader(tmp_path / "nope.yaml").load()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(ConfigError, match="YAML parse error"):
            SettingsLoader(path).load()

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            SettingsLoader(path).load()

    def test_validation_error(self, tmp_path: Path) -> None:
        path = tmp_path / "framing.yaml"
        path.write_text("framing: bytes\n")
        with pytest.raises(ConfigError, match="framing"):
            SettingsLoader(path).load()


class TestLoadSettings:
    def test_no_file_no_overrides(self) -> None:
        assert load_settings() == ServerSettings()

    def test_overrides_applied(self) -> None:
        settings = load_settings(overrides={"store.path": "x.db", "framing": "line"})
        assert settings.store.path == "x.db"
        assert settings.framing == "line"

    def test_none_overrides_skipped(self, tmp_path: Path) -> None:
        path = tmp_path / "s.yaml"
        path.write_text("store:\n  path: from-file.db\n")
        settings = load_settings(path, {"store.path": None, "log_level": None})
        assert settings.store.path == "from-file.db"
        assert settings.log_level == "INFO"

    def test_invalid_override(self) -> None:
        with pytest.raises(ConfigError):
            load_settings(overrides={"store.backend": "postgres"})
