"""
Bundler adapter — run ``bundle install`` once and capture its output.

Failures are captured in the returned ``InstallOutcome``; this adapter
never raises.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path

from addgem.adapters.base import Installer
from addgem.core.models.gem import InstallOutcome

logger = logging.getLogger(__name__)


class BundleInstaller(Installer):
    """Run the installer command in the Gemfile's directory.

    Args:
        command: argv to run (default: ``bundle install``).
        cwd: Working directory (default: inherit the process cwd).
        timeout: Seconds before giving up (default: no limit).
    """

    def __init__(
        self,
        command: list[str] | None = None,
        cwd: Path | str | None = None,
        timeout: int | None = None,
    ):
        self._command = list(command) if command else ["bundle", "install"]
        self._cwd = str(cwd) if cwd is not None else None
        self._timeout = timeout

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def run(self) -> InstallOutcome:
        logger.debug("Executing: %s (cwd=%s)", self.describe(), self._cwd or ".")
        start = time.monotonic()

        try:
            result = subprocess.run(
                self._command,
                cwd=self._cwd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            return InstallOutcome(
                status="failed",
                command=self.command,
                error=f"Command timed out after {self._timeout}s",
                duration_ms=_elapsed_ms(start),
            )
        except OSError as e:
            return InstallOutcome(
                status="failed",
                command=self.command,
                error=str(e),
                duration_ms=_elapsed_ms(start),
            )

        stdout = result.stdout or ""
        stderr = result.stderr or ""
        elapsed_ms = _elapsed_ms(start)
        logger.debug("%s exited %d in %dms", self.describe(), result.returncode, elapsed_ms)

        if result.returncode != 0:
            return InstallOutcome(
                status="failed",
                command=self.command,
                stdout=stdout,
                stderr=stderr,
                error=stderr.strip() or f"Command exited with code {result.returncode}",
                return_code=result.returncode,
                duration_ms=elapsed_ms,
            )

        return InstallOutcome(
            status="stderr" if stderr.strip() else "ok",
            command=self.command,
            stdout=stdout,
            stderr=stderr,
            return_code=result.returncode,
            duration_ms=elapsed_ms,
        )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
