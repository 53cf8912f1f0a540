import pytest

from postboard.core.config import Settings


class TestSettings:
    def test_integer_env_values_are_parsed(self, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_SIZE", "1024")
        monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_HOURS", "2")
        settings = Settings()
        assert settings.max_upload_size == 1024
        assert settings.access_token_expire_hours == 2

    def test_empty_env_value_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_FILES", "")
        assert Settings().max_upload_files == 5

    def test_malformed_integer_names_the_variable(self, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_SIZE", "5MB")
        with pytest.raises(ValueError, match="MAX_UPLOAD_SIZE"):
            Settings()

    def test_database_url_fallback(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("DB_NAME", raising=False)
        assert Settings().database_url == "sqlite:///./postboard.db"

    def test_database_url_from_db_parts(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("DB_NAME", "feed")
        monkeypatch.setenv("DB_USER", "app")
        monkeypatch.setenv("DB_PASS", "pw")
        monkeypatch.setenv("DB_HOST", "db")
        monkeypatch.setenv("DB_PORT", "5433")
        assert Settings().database_url == "postgresql://app:pw@db:5433/feed"

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
