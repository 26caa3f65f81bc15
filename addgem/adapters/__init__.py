"""Adapters — bindings for the registry, the Gemfile, and the installer.

Public re-exports for convenient access.
"""

from addgem.adapters.base import GemRegistry, Installer, ManifestStore
from addgem.adapters.mock import MockInstaller, MockRegistry
from addgem.adapters.registry.rubygems import RubyGemsRegistry
from addgem.adapters.shell.bundler import BundleInstaller
from addgem.adapters.shell.gemfile import GemfileStore

__all__ = [
    "BundleInstaller",
    "GemRegistry",
    "GemfileStore",
    "Installer",
    "ManifestStore",
    "MockInstaller",
    "MockRegistry",
    "RubyGemsRegistry",
]
