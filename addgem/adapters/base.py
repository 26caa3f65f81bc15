"""
Adapter base — the contracts between the add-gem use case and the
outside world (registry, Gemfile, installer).

The use case only talks to these interfaces, so tests can swap in the
doubles from ``addgem.adapters.mock`` or a store pointed at a temp dir.

Adapters return values, not exceptions: lookups return
``GemInfo | GemNotFound | RegistryError`` and installs return an
``InstallOutcome`` whose status carries the failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from addgem.core.models.gem import GemInfo, GemNotFound, InstallOutcome, RegistryError


class GemRegistry(ABC):
    """Looks gems up by name."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The registry identifier (e.g., 'rubygems')."""

    @abstractmethod
    def lookup(self, gem_name: str) -> GemInfo | GemNotFound | RegistryError:
        """Fetch metadata for ``gem_name``.

        MUST never raise for HTTP or transport failures.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class ManifestStore(ABC):
    """An append-only text file of dependency declarations."""

    @property
    @abstractmethod
    def path(self) -> Path:
        """Where the manifest lives."""

    @abstractmethod
    def exists(self) -> bool:
        """Whether the manifest file is present."""

    @abstractmethod
    def contains(self, gem_name: str) -> bool:
        """Whether ``gem_name`` appears anywhere in the file (substring match).

        May raise OSError; the caller records it against the current entry.
        """

    @abstractmethod
    def append(
        self,
        gem_name: str,
        constraints: Sequence[str] = (),
        description: str | None = None,
    ) -> None:
        """Append a comment line and a declaration line for ``gem_name``."""


class Installer(ABC):
    """Runs the package manager's install step."""

    @property
    @abstractmethod
    def command(self) -> list[str]:
        """The argv this installer runs."""

    @abstractmethod
    def run(self) -> InstallOutcome:
        """Run the install once. MUST never raise."""

    def describe(self) -> str:
        return " ".join(self.command)
