"""
Gem models — what the user asked for, what the registry said,
and what the installer did.

The parser and the adapters return these values instead of raising.
Callers branch on the type (``isinstance``) or on ``status``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# ── Specs ───────────────────────────────────────────────────────


class GemSpec(BaseModel):
    """A parsed dependency declaration: a gem name and up to two constraints."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    version_constraints: tuple[str, ...] = ()


class ParseFailure(BaseModel):
    """The raw text matched neither the keyword nor the bare form."""

    model_config = ConfigDict(frozen=True)

    raw: str
    reason: str = "unrecognized gem specification"


# ── Registry lookups ────────────────────────────────────────────


class GemInfo(BaseModel):
    """Projection of the registry's gem metadata. Unknown fields are dropped."""

    model_config = ConfigDict(extra="ignore")

    name: str
    description: str | None = None


class GemNotFound(BaseModel):
    """The registry answered 404 for this name."""

    name: str

    @property
    def message(self) -> str:
        return f"Gem '{self.name}' not found on RubyGems."


class RegistryError(BaseModel):
    """Any lookup failure other than a 404.

    ``status`` and ``reason`` are set when the registry answered with an
    HTTP error. Both are None when no response was received at all.
    """

    name: str
    message: str
    status: int | None = None
    reason: str | None = None


# ── Installer ───────────────────────────────────────────────────


class InstallOutcome(BaseModel):
    """Result of a single installer run.

    ``stderr`` status means the command exited 0 but wrote to stderr.
    That is reported separately and does not count as success.
    """

    status: Literal["ok", "stderr", "failed"] = "ok"
    command: list[str] = Field(default_factory=list)
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    return_code: int | None = None
    duration_ms: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"
