"""
add-gem — CLI entrypoint.

Usage:
    add-gem 'gem "nokogiri", "~> 1.13"'
    add-gem 'rails, ">= 7.0", "< 8.0"' sidekiq
    python -m addgem.main --help
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from addgem import __version__
from addgem.core.observability.logging_config import configure_logging

USAGE = (
    "Usage: add-gem 'gem \"gem_name\", \"version1\", \"version2\"' "
    "or 'gem_name, \"version1\", \"version2\"'"
)


@click.command()
@click.version_option(version=__version__, prog_name="add-gem")
@click.argument("specs", nargs=-1)
@click.option(
    "--gemfile",
    "-g",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the Gemfile (default: ./Gemfile).",
)
@click.option("--registry-url", default=None, help="Base URL of the gems API.")
@click.option("--skip-install", is_flag=True, help="Don't run 'bundle install' afterwards.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to .addgem.yml (default: auto-detect).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    specs: tuple[str, ...],
    gemfile: str | None,
    registry_url: str | None,
    skip_install: bool,
    as_json: bool,
    config_path: str | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Add gems to the Gemfile after checking they exist on RubyGems.

    Each SPEC is either 'gem "name", "v1", "v2"' or 'name, "v1", "v2"'
    (constraints optional). 'bundle install' runs once at the end.
    """
    if not specs:
        click.echo(USAGE)
        sys.exit(1)

    configure_logging(debug=debug, verbose=verbose, quiet=quiet)

    from addgem.adapters.base import Installer
    from addgem.adapters.registry.rubygems import RubyGemsRegistry
    from addgem.adapters.shell.bundler import BundleInstaller
    from addgem.adapters.shell.gemfile import GemfileStore
    from addgem.core.config.loader import ConfigError, load_settings
    from addgem.core.use_cases.add_gems import EntryResult, add_gems

    try:
        settings = load_settings(
            path=Path(config_path) if config_path else None,
            overrides={"gemfile": gemfile, "registry_url": registry_url},
        )
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    store = GemfileStore(settings.gemfile)
    registry = RubyGemsRegistry(settings.registry_url, timeout=settings.registry_timeout)
    installer = None
    if not skip_install:
        installer = BundleInstaller(
            settings.install_command,
            cwd=settings.gemfile.parent,
            timeout=settings.install_timeout,
        )

    def _report_entry(entry: EntryResult) -> None:
        if entry.status == "added":
            if not quiet:
                click.secho(f"✅ {entry.message}", fg="green")
        elif entry.status == "duplicate":
            if not quiet:
                click.secho(f"⚠️  {entry.message}", fg="yellow")
        else:
            click.secho(f"❌ {entry.message}", fg="red", err=True)

    def _report_install(inst: Installer) -> None:
        if not quiet:
            click.secho(f"📦 Running '{inst.describe()}'...", fg="cyan")

    result = add_gems(
        specs,
        store,
        registry,
        installer,
        on_entry=None if as_json else _report_entry,
        on_install=None if as_json else _report_install,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    outcome = result.install
    if outcome is not None:
        command = " ".join(outcome.command)
        if outcome.failed:
            click.secho(f"❌ Error during {command}: {outcome.error}", fg="red", err=True)
        else:
            if outcome.stdout and not quiet:
                click.echo(outcome.stdout, nl=not outcome.stdout.endswith("\n"))
            if outcome.status == "stderr":
                click.secho(f"⚠️  stderr: {outcome.stderr.strip()}", fg="yellow", err=True)

    # Per-entry and installer failures are reported, not turned into exit codes.
    summary = (
        f"Added {result.added}, skipped {result.skipped}, "
        f"failed {result.failed} of {len(result.entries)}."
    )
    if result.failed:
        click.secho(summary, fg="yellow", bold=True)
    elif not quiet:
        click.secho(summary, fg="green", bold=True)


if __name__ == "__main__":
    cli()
