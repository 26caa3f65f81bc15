"""
Settings model — where the Gemfile lives, which registry to ask,
and how to run the installer.

Loaded by ``addgem.core.config.loader`` from an optional ``.addgem.yml``,
environment variables and CLI flags. Every component receives the
values it needs at construction; nothing reads globals.
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REGISTRY_URL = "https://rubygems.org/api/v1/gems"
DEFAULT_GEMFILE = "Gemfile"


class Settings(BaseModel):
    """Resolved runtime configuration."""

    model_config = ConfigDict(extra="forbid")

    gemfile: Path = Path(DEFAULT_GEMFILE)
    registry_url: str = DEFAULT_REGISTRY_URL
    registry_timeout: float | None = None
    install_command: list[str] = Field(default_factory=lambda: ["bundle", "install"])
    install_timeout: int | None = None

    @field_validator("registry_url")
    @classmethod
    def _http_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"registry_url must be an http(s) URL, got {v!r}")
        return v

    @field_validator("install_command")
    @classmethod
    def _non_empty_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("install_command must not be empty")
        return v
