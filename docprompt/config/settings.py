"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads configuration from TWO sources (in priority order):
#
#   1. **Environment variables** -- e.g., OLLAMA_URL=http://gpu-box:11434/api/generate
#      (highest priority, always wins)
#   2. **.env file** -- key=value lines in the working directory's .env file
#
# The mapping is automatic: field name `ollama_url` maps to env var
# `OLLAMA_URL`.  Defaults apply when neither source sets a field.
#
# The Settings object is built once (in the CLI or by the caller) and
# handed to the provider at construction.  Nothing below the CLI reads
# os.environ directly.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """docprompt application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Generation endpoint ===
    ollama_url: str = "http://127.0.0.1:11434/api/generate"
    default_model: str = "mistral"
    # Local models can take minutes on a cold start; the read timeout covers
    # the gap between streamed chunks, not the whole answer.
    request_timeout: float = Field(default=120.0, gt=0)
    connect_timeout: float = Field(default=10.0, gt=0)

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    @field_validator("ollama_url")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        parts = urlsplit(value.strip())
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"ollama_url must be an http(s) URL, got {value!r}")
        return value.strip()

    @property
    def api_base_url(self) -> str:
        """Server root of :attr:`ollama_url` (scheme and host only).

        ``http://127.0.0.1:11434/api/generate`` -> ``http://127.0.0.1:11434``.
        """
        parts = urlsplit(self.ollama_url)
        return urlunsplit((parts.scheme, parts.netloc, "", "", ""))
