# tests/test_settings.py
from __future__ import annotations

import pydantic
import pytest

from catalog.core.settings import Settings

KEY = "0123456789abcdef0123456789abcdef"


def _settings(**kw) -> Settings:
    # fără .env ca testul să nu depindă de mediul local
    return Settings(_env_file=None, **kw)


@pytest.mark.parametrize("key", ["short", KEY + "x", "ă" * 16 + "a"])
def test_encryption_key_must_be_32_bytes(key: str):
    with pytest.raises(pydantic.ValidationError):
        _settings(ENCRYPTION_KEY=key)


def test_multibyte_key_counts_bytes():
    s = _settings(ENCRYPTION_KEY="ă" * 16)
    assert len(s.encryption_key) == 32


def test_database_url_explicit_wins():
    s = _settings(ENCRYPTION_KEY=KEY, DATABASE_URL="sqlite:///./x.db", DB_HOST="db", DB_NAME="n")
    assert s.database_url == "sqlite:///./x.db"


def test_database_url_built_from_parts():
    s = _settings(
        ENCRYPTION_KEY=KEY,
        DATABASE_URL="",
        DB_HOST="db",
        DB_PORT=5432,
        DB_USER="app",
        DB_PASSWORD="secret",
        DB_NAME="catalog",
    )
    assert s.database_url == "postgresql+psycopg://app:secret@db:5432/catalog"


def test_database_url_falls_back_to_sqlite():
    s = _settings(ENCRYPTION_KEY=KEY, DATABASE_URL="")
    assert s.database_url.startswith("sqlite:///")


def test_cors_origins_and_log_level_normalized():
    s = _settings(ENCRYPTION_KEY=KEY, CORS_ORIGINS="http://a, http://b ,", LOG_LEVEL="debug")
    assert s.cors_origins == ["http://a", "http://b"]
    assert s.LOG_LEVEL == "DEBUG"
