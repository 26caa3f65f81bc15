"""
Mock adapters — test doubles for the registry and the installer.

Configurable per gem name, and they record every call so tests can
assert what was (or was not) looked up and run.
"""

from __future__ import annotations

from addgem.adapters.base import GemRegistry, Installer
from addgem.core.models.gem import GemInfo, GemNotFound, InstallOutcome, RegistryError


class MockRegistry(GemRegistry):
    """In-memory registry.

    By default every gem is "not found". Add gems with ``add_gem`` or
    force specific failures with ``set_error``.
    """

    def __init__(self, gems: dict[str, str | None] | None = None):
        self._responses: dict[str, GemInfo | GemNotFound | RegistryError] = {}
        self._call_log: list[str] = []
        for gem_name, description in (gems or {}).items():
            self.add_gem(gem_name, description)

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[str]:
        """Gem names looked up, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def add_gem(self, gem_name: str, description: str | None = None) -> None:
        self._responses[gem_name] = GemInfo(name=gem_name, description=description)

    def set_error(
        self,
        gem_name: str,
        message: str = "Mock failure",
        status: int | None = None,
        reason: str | None = None,
    ) -> None:
        """Configure a lookup to fail with a transport/HTTP error."""
        self._responses[gem_name] = RegistryError(
            name=gem_name, message=message, status=status, reason=reason,
        )

    def lookup(self, gem_name: str) -> GemInfo | GemNotFound | RegistryError:
        self._call_log.append(gem_name)
        return self._responses.get(gem_name, GemNotFound(name=gem_name))

    def reset(self) -> None:
        """Clear the call log. Configured responses are kept."""
        self._call_log.clear()


class MockInstaller(Installer):
    """Installer that returns a canned outcome."""

    def __init__(self, outcome: InstallOutcome | None = None):
        self._outcome = outcome or InstallOutcome(status="ok", stdout="[mock] installed")
        self._runs = 0

    @property
    def command(self) -> list[str]:
        return ["mock", "install"]

    @property
    def call_count(self) -> int:
        return self._runs

    def run(self) -> InstallOutcome:
        self._runs += 1
        return self._outcome.model_copy(update={"command": self.command})
