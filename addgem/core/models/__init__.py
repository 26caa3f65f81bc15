"""
Domain models — Pydantic types for add-gem.

    from addgem.core.models import GemSpec, GemInfo, InstallOutcome, Settings
"""

from addgem.core.models.gem import (
    GemInfo,
    GemNotFound,
    GemSpec,
    InstallOutcome,
    ParseFailure,
    RegistryError,
)
from addgem.core.models.settings import Settings

__all__ = [
    "GemInfo",
    "GemNotFound",
    "GemSpec",
    "InstallOutcome",
    "ParseFailure",
    "RegistryError",
    "Settings",
]
