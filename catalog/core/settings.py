from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# AES-256 → cheia trebuie să aibă exact 32 de octeți
ENCRYPTION_KEY_BYTES = 32


class Settings(BaseSettings):
    # App
    APP_TITLE: str = Field("catalog-api")
    APP_VERSION: str = Field("0.1.0")
    HOST: str = Field("0.0.0.0")
    PORT: int = Field(4000)
    LOG_LEVEL: str = Field("INFO")
    CORS_ORIGINS: str = Field("*", description="Comma separated; '*' = any origin")

    # DB: fie DATABASE_URL complet, fie bucăți (DB_DRIVER/DB_HOST/DB_NAME + opțional user/parolă/port)
    DATABASE_URL: Optional[str] = None
    DB_DRIVER: str = "postgresql+psycopg"
    DB_HOST: Optional[str] = None
    DB_PORT: Optional[int] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_NAME: Optional[str] = None

    # Cheia pentru criptarea SKU (AES-256-CBC)
    ENCRYPTION_KEY: str = Field(..., description="Exactly 32 bytes (UTF-8)")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("ENCRYPTION_KEY")
    @classmethod
    def _key_length(cls, v: str) -> str:
        if len(v.encode("utf-8")) != ENCRYPTION_KEY_BYTES:
            raise ValueError(f"ENCRYPTION_KEY must be exactly {ENCRYPTION_KEY_BYTES} bytes")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _level_upper(cls, v: str) -> str:
        return v.strip().upper() or "INFO"

    @property
    def database_url(self) -> str:
        """
        Ordinea de rezoluție:
          1) DATABASE_URL
          2) DB_DRIVER + DB_HOST + DB_NAME (+ DB_USER/DB_PASSWORD/DB_PORT)
          3) SQLite local (dev)
        """
        env_url = (self.DATABASE_URL or "").strip()
        if env_url:
            return env_url
        if self.DB_HOST and self.DB_NAME:
            url = URL.create(
                drivername=self.DB_DRIVER,
                username=self.DB_USER or None,
                password=self.DB_PASSWORD or None,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
            )
            return url.render_as_string(hide_password=False)
        return "sqlite:///./catalog.db"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def encryption_key(self) -> bytes:
        return self.ENCRYPTION_KEY.encode("utf-8")


settings = Settings()
