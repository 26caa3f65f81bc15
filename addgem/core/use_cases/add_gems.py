"""
Add-gems use case — verify each spec on the registry, append it to the
Gemfile, then run the installer once.

    Validating → per-spec loop → installing → done

A missing Gemfile stops everything before any lookup. After that, every
spec is handled on its own: a bad spec, a duplicate, or a failed lookup
is recorded and the loop moves on. The installer runs once at the end,
whatever happened to the individual entries.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Literal

from addgem.adapters.base import GemRegistry, Installer, ManifestStore
from addgem.core.models.gem import GemNotFound, InstallOutcome, ParseFailure, RegistryError
from addgem.core.services.gem_spec import parse_gem_spec

logger = logging.getLogger(__name__)

EntryStatus = Literal["added", "duplicate", "invalid", "not_found", "error"]

_SKIPPED: frozenset[str] = frozenset({"duplicate"})
_FAILED: frozenset[str] = frozenset({"invalid", "not_found", "error"})


@dataclass
class EntryResult:
    """Outcome for one specification string."""

    raw: str
    status: EntryStatus
    message: str
    name: str | None = None
    version_constraints: tuple[str, ...] = ()
    description: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "added"

    def to_dict(self) -> dict:
        return {
            "spec": self.raw,
            "status": self.status,
            "message": self.message,
            "name": self.name,
            "version_constraints": list(self.version_constraints),
            "description": self.description,
        }


@dataclass
class AddGemsResult:
    """Result of a whole run."""

    gemfile: str = ""
    entries: list[EntryResult] = field(default_factory=list)
    install: InstallOutcome | None = None
    error: str | None = None

    @property
    def added(self) -> int:
        return sum(1 for e in self.entries if e.status == "added")

    @property
    def skipped(self) -> int:
        return sum(1 for e in self.entries if e.status in _SKIPPED)

    @property
    def failed(self) -> int:
        return sum(1 for e in self.entries if e.status in _FAILED)

    def to_dict(self) -> dict:
        return {
            "gemfile": self.gemfile,
            "error": self.error,
            "entries": [e.to_dict() for e in self.entries],
            "summary": {
                "total": len(self.entries),
                "added": self.added,
                "skipped": self.skipped,
                "failed": self.failed,
            },
            "install": self.install.model_dump() if self.install else None,
        }


def _gemfile_error(
    raw: str, name: str, constraints: tuple[str, ...], exc: OSError,
) -> EntryResult:
    logger.debug("Gemfile access failed for %s", name, exc_info=True)
    return EntryResult(
        raw=raw,
        status="error",
        message=f"Cannot access Gemfile: {exc}",
        name=name,
        version_constraints=constraints,
    )


def add_gem(raw: str, store: ManifestStore, registry: GemRegistry) -> EntryResult:
    """Process one spec: parse, duplicate check, lookup, append."""
    parsed = parse_gem_spec(raw)
    if isinstance(parsed, ParseFailure):
        return EntryResult(
            raw=raw,
            status="invalid",
            message=f"Invalid gem specification: '{raw}'.",
        )

    name = parsed.name
    constraints = parsed.version_constraints

    try:
        present = store.contains(name)
    except OSError as e:
        return _gemfile_error(raw, name, constraints, e)

    if present:
        return EntryResult(
            raw=raw,
            status="duplicate",
            message=f"Gem '{name}' is already in the Gemfile.",
            name=name,
            version_constraints=constraints,
        )

    found = registry.lookup(name)
    if isinstance(found, GemNotFound):
        return EntryResult(
            raw=raw,
            status="not_found",
            message=found.message,
            name=name,
            version_constraints=constraints,
        )
    if isinstance(found, RegistryError):
        return EntryResult(
            raw=raw,
            status="error",
            message=f"Error fetching gem info: {found.message}",
            name=name,
            version_constraints=constraints,
        )

    try:
        store.append(name, constraints, found.description)
    except OSError as e:
        return _gemfile_error(raw, name, constraints, e)

    return EntryResult(
        raw=raw,
        status="added",
        message=f"Gem '{name}' added to Gemfile.",
        name=name,
        version_constraints=constraints,
        description=found.description,
    )


def add_gems(
    specs: Iterable[str],
    store: ManifestStore,
    registry: GemRegistry,
    installer: Installer | None = None,
    *,
    on_entry: Callable[[EntryResult], None] | None = None,
    on_install: Callable[[Installer], None] | None = None,
) -> AddGemsResult:
    """Add every spec to the Gemfile, then run the installer once.

    Args:
        specs: Raw specification strings, processed in order.
        store: The Gemfile to check and append to.
        registry: Where gems are looked up.
        installer: Run after the loop; None skips the install step.
        on_entry: Called with each entry as soon as it is decided.
        on_install: Called right before the installer starts.

    Returns:
        AddGemsResult. ``error`` is set only when the Gemfile is missing,
        in which case nothing else happened.
    """
    result = AddGemsResult(gemfile=str(store.path))

    if not store.exists():
        result.error = f"Gemfile not found: {store.path}"
        return result

    for raw in specs:
        entry = add_gem(raw, store, registry)
        logger.info("%s → %s", raw, entry.status)
        result.entries.append(entry)
        if on_entry is not None:
            on_entry(entry)

    if installer is not None:
        if on_install is not None:
            on_install(installer)
        logger.info("Running %s", installer.describe())
        result.install = installer.run()

    return result
