import pytest

from social_api.config.settings import Settings
from social_api.validators.config_validators import blank_to_none, to_lowercase, to_uppercase


class TestConfigValidators:
    def test_case_helpers(self):
        assert to_uppercase("debug") == "DEBUG"
        assert to_lowercase("JSON") == "json"
        assert to_uppercase(None) is None

    @pytest.mark.parametrize("value", ["", "  ", "none", "None"])
    def test_blank_to_none(self, value):
        assert blank_to_none(value) is None

    def test_blank_to_none_keeps_values(self):
        assert blank_to_none("serializable") == "serializable"


class TestSettings:
    def _settings(self, **overrides) -> Settings:
        base = {"_env_file": None, "POSTGRES_HOST": None, "POSTGRES_DB": None}
        base.update(overrides)
        return Settings(**base)

    def test_sqlite_fallback(self):
        assert self._settings(SQLITE_URL="sqlite+aiosqlite://").DATABASE_URL == "sqlite+aiosqlite://"

    def test_postgres_url(self):
        settings = self._settings(
            POSTGRES_HOST="db", POSTGRES_DB="social", POSTGRES_USERNAME="u", POSTGRES_PASSWORD="p"
        )
        assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@db:5432/social"

    def test_testing_database_name(self):
        settings = self._settings(
            POSTGRES_HOST="db", POSTGRES_DB="social", TESTING=True, TEST_POSTGRES_DB="social_test",
            POSTGRES_USERNAME="u", POSTGRES_PASSWORD="p",
        )
        assert settings.DATABASE_URL.endswith("/social_test")

    def test_normalization(self):
        settings = self._settings(LOG_LEVEL="debug", LOG_FORMAT="TEXT", ACCOUNT_WRITE_ISOLATION_LEVEL="serializable")
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.LOG_FORMAT == "text"
        assert settings.ACCOUNT_WRITE_ISOLATION_LEVEL == "SERIALIZABLE"

    def test_isolation_override_can_be_disabled(self):
        assert self._settings(ACCOUNT_WRITE_ISOLATION_LEVEL="none").ACCOUNT_WRITE_ISOLATION_LEVEL is None

