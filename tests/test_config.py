# ==============================================
# Tests for Configuration
# ==============================================

import pytest

from dualstore.config import LARGE_JSON_BYTES, get_config, reset_config

ENV_VARS = [
    "MYSQL_HOST", "MYSQL_PORT", "MYSQL_USER", "MYSQL_PASSWORD", "MYSQL_DATABASE",
    "MONGO_HOST", "MONGO_PORT", "MONGO_USER", "MONGO_PASSWORD", "MONGO_DATABASE",
    "UPLOAD_DIR", "LARGE_JSON_BYTES",
]


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    # Keep a developer's .env from leaking into the assertions
    monkeypatch.setattr("dualstore.config.load_dotenv", lambda **kwargs: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


class TestGetConfig:
    def test_defaults(self):
        config = get_config()
        assert config.mysql.host == "localhost"
        assert config.mysql.port == 3306
        assert config.mysql.database == "dualstore"
        assert config.mongo.port == 27017
        assert config.mongo.user is None
        assert config.storage.upload_dir == "uploads/"
        assert config.storage.large_json_bytes == LARGE_JSON_BYTES

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MYSQL_HOST", "db.internal")
        monkeypatch.setenv("MYSQL_PORT", "3307")
        monkeypatch.setenv("MONGO_USER", "app")
        monkeypatch.setenv("MONGO_PASSWORD", "secret")
        monkeypatch.setenv("LARGE_JSON_BYTES", "2048")

        config = get_config()
        assert config.mysql.host == "db.internal"
        assert config.mysql.port == 3307
        assert config.mongo.user == "app"
        assert config.mongo.password == "secret"
        assert config.storage.large_json_bytes == 2048

    def test_empty_mongo_credentials_are_none(self, monkeypatch):
        monkeypatch.setenv("MONGO_USER", "")
        assert get_config().mongo.user is None

    def test_singleton(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("MYSQL_HOST", "changed")
        assert get_config() is first
        assert get_config().mysql.host == "localhost"

    def test_reset(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("MYSQL_HOST", "changed")
        reset_config()
        second = get_config()
        assert second is not first
        assert second.mysql.host == "changed"
