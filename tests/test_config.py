"""
Smoke tests for the configuration layer
"""

import pytest

from vidshare.app.config import (
    Config,
    get_config,
    reload_config,
    reset_config,
    validate_config,
)


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


class TestConfiguration:
    """Test configuration system"""

    def test_config_loads_defaults(self, tmp_path):
        config = Config(str(tmp_path / "missing.yaml"))

        assert config.api.port == 8000
        assert config.auth.cookie_name == "token"
        assert config.database.url.startswith("sqlite+aiosqlite")
        assert config.database.is_sqlite

    def test_singleton(self):
        assert get_config() is get_config()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("API_PORT", "9001")
        monkeypatch.setenv("DB_URL", "postgresql+asyncpg://u:p@db/vidshare")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = reload_config()

        assert config.api.port == 9001
        assert not config.database.is_sqlite
        assert config.logging.level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        with pytest.raises(ValueError):
            Config()

    def test_yaml_dotted_lookup(self, tmp_path):
        path = tmp_path / "app.yaml"
        path.write_text("app:\n  name: vidshare\n  feed:\n    page: 20\n")

        config = Config(str(path))

        assert config.get("app.feed.page") == 20
        assert config.get("app.feed.missing", "x") == "x"
        assert config.get_summary()["app"]["name"] == "vidshare"

    def test_validation_result_shape(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "logs" / "app.log"))

        result = validate_config(Config())

        assert result["valid"] is True
        assert result["errors"] == []
        assert isinstance(result["warnings"], list)

    def test_sync_driver_rejected(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DB_URL", "sqlite:///plain.db")
        monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "app.log"))

        result = validate_config(Config())

        assert result["valid"] is False
        assert "async driver" in result["errors"][0]

    def test_default_jwt_secret_warns(self, tmp_path, monkeypatch):
        monkeypatch.delenv("AUTH_JWT_SECRET", raising=False)
        monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "app.log"))

        result = validate_config(Config())

        assert any("AUTH_JWT_SECRET" in w for w in result["warnings"])
        assert "jwt_secret" not in Config().to_dict()["auth"]
