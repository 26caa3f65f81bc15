"""
Gemfile adapter — existence check, substring lookup, and append.

The Gemfile is treated as unstructured text. Nothing here parses Ruby,
rewrites existing lines, or reformats the file.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from addgem.adapters.base import ManifestStore

logger = logging.getLogger(__name__)


def render_entry(
    gem_name: str,
    constraints: Sequence[str] = (),
    description: str | None = None,
) -> str:
    """Build the block appended for one gem: a blank line, a comment, a declaration.

    Example output for ``("nokogiri", ["1.13.0"], "HTML parser")``::

        # Added nokogiri: HTML parser
        gem 'nokogiri', "1.13.0"
    """
    comment = f"# Added {gem_name}"
    if description:
        comment += f": {description}"

    declaration = f"gem '{gem_name}'"
    if constraints:
        declaration += ", " + ", ".join(f'"{c}"' for c in constraints)

    return f"\n{comment}\n{declaration}\n"


class GemfileStore(ManifestStore):
    """A Gemfile on disk.

    ``contains`` is a plain substring test over the whole file: ``rails``
    matches ``gem 'rails-html-sanitizer'`` and even a comment. That is
    the accepted duplicate check, not a bug to tighten here.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read(self) -> str:
        # Undecodable bytes (e.g. a Latin-1 comment) must not break the substring test
        return self._path.read_text(encoding="utf-8", errors="replace")

    def contains(self, gem_name: str) -> bool:
        return gem_name in self.read()

    def append(
        self,
        gem_name: str,
        constraints: Sequence[str] = (),
        description: str | None = None,
    ) -> None:
        entry = render_entry(gem_name, constraints, description)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(entry)
        logger.info("Appended %s to %s", gem_name, self._path)

    def __repr__(self) -> str:
        return f"<GemfileStore path={str(self._path)!r}>"
