"""pkgrecipe CLI.

Usage:
    pkgrecipe registry versions <package>        # List published versions
    pkgrecipe registry recipe <package>          # Show the best matching recipe
    pkgrecipe registry recipe <pkg> -c "~>1.2"   # ...for a version constraint
    pkgrecipe registry fetch <pkg> <ver> <dest>  # Download a package archive
    pkgrecipe registry search <query>            # Search the registry

    pkgrecipe config                             # Show configuration
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

import click

from .config import RegistryConfig
from .registry import RegistryClient, RegistryError

T = TypeVar("T")

# Output format options
FORMAT_TABLE = "table"
FORMAT_JSON = "json"


def truncate(text: str | None, max_len: int = 50) -> str:
    """Truncate text for display."""
    if not text:
        return ""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def _run_registry(action: Callable[[RegistryClient], Awaitable[T]]) -> T:
    """Run one registry action, exiting with status 1 on failure."""

    async def run() -> T:
        async with RegistryClient(RegistryConfig.from_env()) as registry:
            return await action(registry)

    try:
        return asyncio.run(run())
    except (RegistryError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show diagnostic output")
def main(verbose: bool) -> None:
    """pkgrecipe - package recipes and registry access."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


@main.command("config")
def show_config() -> None:
    """Show the registry configuration taken from the environment."""
    try:
        config = RegistryConfig.from_env()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Registry:     {config.base_url}")
    click.echo(f"Cache TTL:    {config.cache_ttl:g}s")
    click.echo(f"Max attempts: {config.max_attempts}")
    click.echo(f"Timeout:      {config.timeout:g}s")


# =============================================================================
# Registry Commands
# =============================================================================


@main.group()
def registry() -> None:
    """Query the package registry."""


@registry.command("versions")
@click.argument("package")
def registry_versions(package: str) -> None:
    """List the published versions of PACKAGE, oldest first."""
    versions = _run_registry(lambda r: r.list_versions(package))

    if not versions:
        click.echo(f"Package not found: {package}", err=True)
        sys.exit(1)

    for version in versions:
        click.echo(str(version))


@registry.command("recipe")
@click.argument("package")
@click.option("--constraint", "-c", default="*", help="Version constraint, e.g. '~>1.2'")
@click.option("--pre", "allow_prerelease", is_flag=True, help="Allow pre-release versions")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice([FORMAT_TABLE, FORMAT_JSON]),
    default=FORMAT_TABLE,
    help="Output format",
)
def registry_recipe(package: str, constraint: str, allow_prerelease: bool, output_format: str) -> None:
    """Show the recipe of the best version of PACKAGE.

    Examples:

        # Latest release
        pkgrecipe registry recipe vibe-d

        # Newest 0.9.x, pre-releases included, as JSON
        pkgrecipe registry recipe vibe-d -c "~>0.9.0" --pre --format json
    """
    recipe = _run_registry(lambda r: r.fetch_recipe(package, constraint, allow_prerelease))

    if output_format == FORMAT_JSON:
        click.echo(json.dumps(recipe, indent=2, ensure_ascii=False, default=str))
        return

    click.echo(f"Package:     {recipe.get('name') or package}")
    click.echo(f"Version:     {recipe.get('version')}")
    if recipe.get("description"):
        click.echo(f"Description: {truncate(recipe.get('description'), 60)}")
    if recipe.get("license"):
        click.echo(f"License:     {recipe.get('license')}")
    dependencies = recipe.get("dependencies") or {}
    if dependencies:
        click.echo("Dependencies:")
        for name, spec in dependencies.items():
            click.echo(f"  {name:<30} {spec if isinstance(spec, str) else json.dumps(spec)}")


@registry.command("fetch")
@click.argument("package")
@click.argument("version")
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
def registry_fetch(package: str, version: str, destination: Path) -> None:
    """Download the archive of PACKAGE at VERSION to DESTINATION."""
    path = _run_registry(lambda r: r.fetch_artifact(package, version, destination))
    click.echo(f"Downloaded {package} {version} to {path}")


@registry.command("search")
@click.argument("query")
def registry_search(query: str) -> None:
    """Search the registry for QUERY."""
    results = _run_registry(lambda r: r.search(query))

    if not results:
        click.echo("No packages found.")
        return

    click.echo(f"{'Name':<30} {'Version':<12} {'Description':<40}")
    click.echo("-" * 84)
    for hit in results:
        click.echo(f"{truncate(hit.name, 30):<30} {hit.version:<12} {truncate(hit.description, 40):<40}")

    click.echo(f"\nTotal: {len(results)} package(s)")


if __name__ == "__main__":
    main()
