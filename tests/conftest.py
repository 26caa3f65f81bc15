"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from addgem.adapters.mock import MockRegistry
from addgem.adapters.shell.gemfile import GemfileStore

GEMFILE_CONTENT = """\
source 'https://rubygems.org'

gem 'rails'
"""


@pytest.fixture
def gemfile(tmp_path: Path) -> Path:
    """A Gemfile that already declares rails."""
    path = tmp_path / "Gemfile"
    path.write_text(GEMFILE_CONTENT)
    return path


@pytest.fixture
def store(gemfile: Path) -> GemfileStore:
    return GemfileStore(gemfile)


@pytest.fixture
def registry() -> MockRegistry:
    """Registry that knows nokogiri and sidekiq; everything else is not found."""
    return MockRegistry({"nokogiri": "HTML parser", "sidekiq": None})


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's ADDGEM_* settings out of the tests."""
    for var in ("ADDGEM_GEMFILE", "ADDGEM_REGISTRY_URL", "ADDGEM_LOG_LEVEL",
                "ADDGEM_LOG_FILE", "ADDGEM_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _restore_addgem_logger():
    """The CLI configures the addgem logger; put it back after each test."""
    logger = logging.getLogger("addgem")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
