"""
Unit tests for configuration management.
"""

import pytest

from ai_code_reviewer.config import AppConfig, ConfigManager


class TestAppConfig:
    """Unit tests for AppConfig."""

    def test_defaults_are_valid(self):
        config = AppConfig()
        config.validate()
        assert config.api.host == "http://localhost:8080"
        assert config.api.endpoint == "/api/v1/query"
        assert config.api.timeout_seconds == 30
        assert config.hook.hook_dir == ".husky"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CODE_REVIEW_HOST", "https://review.example.com")
        monkeypatch.setenv("CODE_REVIEW_TIMEOUT", "45")
        monkeypatch.setenv("CODE_REVIEW_TEMPLATE", "quality")
        monkeypatch.setenv("CODE_REVIEW_DEBUG", "true")

        config = AppConfig.from_env()

        assert config.api.host == "https://review.example.com"
        assert config.api.timeout_seconds == 45.0
        assert config.review.template == "quality"
        assert config.debug is True

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "api:\n  host: http://10.0.0.5:8080\n  timeout_seconds: 10\n"
            "review:\n  file_identity: basename\n"
            "logging:\n",
            encoding="utf-8",
        )

        config = AppConfig.from_yaml(str(path))

        assert config.api.host == "http://10.0.0.5:8080"
        assert config.api.timeout_seconds == 10
        assert config.review.file_identity == "basename"
        assert config.logging.level == "INFO"

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_from_yaml_malformed_document(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.from_yaml(str(path))

    def test_from_yaml_unknown_section_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api:\n  port: 8080\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid config section"):
            AppConfig.from_yaml(str(path))

    def test_validate_collects_all_errors(self):
        config = AppConfig()
        config.api.host = "localhost:8080"
        config.api.timeout_seconds = 0
        config.logging.level = "LOUD"

        with pytest.raises(ValueError) as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert "API host" in message
        assert "timeout" in message
        assert "Invalid log level" in message

    def test_to_dict_round_trip_sections(self):
        data = AppConfig().to_dict()
        assert set(data) == {"api", "review", "hook", "logging", "debug"}
        assert data["api"]["endpoint"] == "/api/v1/query"


class TestConfigManager:
    """Unit tests for ConfigManager."""

    def test_update_config_nested(self):
        manager = ConfigManager(AppConfig())
        manager.update_config(**{"api.host": "http://other:1", "review.template": None})

        assert manager.config.api.host == "http://other:1"
        assert manager.config.review.template is None

    def test_update_config_unknown_key(self):
        manager = ConfigManager(AppConfig())
        with pytest.raises(KeyError):
            manager.update_config(**{"api.port": 8080})

    def test_update_config_validates(self):
        manager = ConfigManager(AppConfig())
        with pytest.raises(ValueError):
            manager.update_config(**{"review.file_identity": "inode"})
