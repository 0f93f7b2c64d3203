"""Tests for configuration loading (env, YAML file, overrides)."""

import pytest

from hnp_importer.config import load_config
from hnp_importer.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in (
        "HACKNPLAN_API_KEY",
        "HACKNPLAN_PROJECT_ID",
        "HACKNPLAN_API_BASE",
        "HNP_IMPORTER_DEFAULT_CATEGORY",
        "HNP_IMPORTER_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    # Keep the real ~/.hnp_importer out of the way
    monkeypatch.setenv("HNP_IMPORTER_HOME", str(tmp_path / "home"))


class TestEnvironment:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HACKNPLAN_API_KEY", "env_key")
        monkeypatch.setenv("HACKNPLAN_PROJECT_ID", "1234")

        config = load_config()

        assert config.api_key == "env_key"
        assert config.project_id == 1234
        assert config.api_base == "https://api.hacknplan.com/v0"
        assert config.dry_run is False
        assert config.default_category is None
        assert config.project_url == "https://api.hacknplan.com/v0/projects/1234"

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setenv("HACKNPLAN_PROJECT_ID", "1")
        with pytest.raises(ConfigurationError, match="HACKNPLAN_API_KEY"):
            load_config()

    def test_missing_project(self, monkeypatch):
        monkeypatch.setenv("HACKNPLAN_API_KEY", "k")
        with pytest.raises(ConfigurationError, match="HACKNPLAN_PROJECT_ID"):
            load_config()

    def test_non_integer_project(self, monkeypatch):
        monkeypatch.setenv("HACKNPLAN_API_KEY", "k")
        monkeypatch.setenv("HACKNPLAN_PROJECT_ID", "abc")
        with pytest.raises(ConfigurationError, match="integer"):
            load_config()


class TestConfigFile:
    def test_default_file_in_app_home(self, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        (home / "config.yaml").write_text(
            "api_key: file_key\nproject_id: 7\ndefault_category: programming\n"
        )

        config = load_config()

        assert config.api_key == "file_key"
        assert config.project_id == 7
        assert config.default_category == "programming"

    def test_env_beats_file_and_overrides_beat_env(self, monkeypatch, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("api_key: file_key\nproject_id: 7\nboard: Backlog\n")
        monkeypatch.setenv("HACKNPLAN_PROJECT_ID", "8")

        config = load_config(path, project_id=9, board=None, dry_run=True)

        assert config.api_key == "file_key"
        assert config.project_id == 9
        assert config.board == "Backlog"
        assert config.dry_run is True

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("api_key: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_log_level_normalized(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("api_key: k\nproject_id: 1\nlog_level: debug\n")
        assert load_config(path).log_level == "DEBUG"

    def test_unknown_log_level(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("api_key: k\nproject_id: 1\n")
        with pytest.raises(ConfigurationError, match="VERBOSE"):
            load_config(path, log_level="verbose")

    def test_unknown_log_level_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HNP_IMPORTER_LOG_LEVEL", "loud")
        path = tmp_path / "c.yaml"
        path.write_text("api_key: k\nproject_id: 1\n")
        with pytest.raises(ConfigurationError, match="DEBUG, INFO, WARNING, ERROR, CRITICAL"):
            load_config(path)
