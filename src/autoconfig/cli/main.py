#!/usr/bin/env python3
"""Inspect and verify capability discovery.

Usage:
    autoconfig scan myservice
    autoconfig manifest myservice -o autoconfig.yaml
    autoconfig verify autoconfig.yaml
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from autoconfig.capabilities import categories_of
from autoconfig.catalog import build_catalog
from autoconfig.errors import AutoConfigError, ManifestMismatchError
from autoconfig.manifest import dump_manifest, generate_manifest, load_manifest, verify_manifest, write_manifest

logger = logging.getLogger(__name__)
console = Console(highlight=False)
app = typer.Typer(rich_markup_mode="rich", help="Capability discovery tooling")


def _extend_path(paths: Optional[List[Path]]) -> None:
    """Make extra source directories importable for scanning."""
    for entry in paths or []:
        resolved = str(entry.resolve())
        if resolved not in sys.path:
            sys.path.insert(0, resolved)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Capability discovery tooling."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@app.command("scan")
def scan(
    namespaces: List[str] = typer.Argument(..., help="Namespace roots to scan"),
    path: Optional[List[Path]] = typer.Option(None, "--path", "-p", help="Extra directory to import from"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Include classes without a capability"),
    lenient: bool = typer.Option(False, "--lenient", help="Skip modules that fail to import"),
):
    """Show discovered classes and their capability categories."""
    _extend_path(path)
    try:
        catalog = build_catalog(namespaces, strict_imports=not lenient)
    except AutoConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Catalog: {', '.join(catalog.namespaces)}")
    table.add_column("Class", style="cyan")
    table.add_column("Categories", style="green")
    table.add_column("Abstract", style="yellow")

    shown = 0
    for descriptor in catalog.sorted():
        categories = categories_of(descriptor)
        if not categories and not show_all:
            continue
        table.add_row(
            descriptor.qualified_name,
            ", ".join(c.value for c in categories) or "-",
            "yes" if descriptor.is_abstract else "",
        )
        shown += 1

    console.print(table)
    console.print(f"{shown} of {len(catalog)} classes shown")


@app.command("manifest")
def manifest(
    namespaces: List[str] = typer.Argument(..., help="Namespace roots to scan"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the manifest to this file"),
    path: Optional[List[Path]] = typer.Option(None, "--path", "-p", help="Extra directory to import from"),
):
    """Generate the capability manifest for namespace roots."""
    _extend_path(path)
    try:
        generated = generate_manifest(build_catalog(namespaces))
    except AutoConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if output is None:
        typer.echo(dump_manifest(generated), nl=False)
        return
    write_manifest(generated, output)
    console.print(f"[green]✓ Wrote manifest to {output}[/green]")


@app.command("verify")
def verify(
    manifest_file: Path = typer.Argument(..., help="Capability manifest to check"),
    path: Optional[List[Path]] = typer.Option(None, "--path", "-p", help="Extra directory to import from"),
):
    """Rescan a manifest's namespaces and fail if the manifest is out of date."""
    _extend_path(path)
    try:
        loaded = load_manifest(manifest_file)
        verify_manifest(loaded, build_catalog(loaded.namespaces))
    except ManifestMismatchError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print("Regenerate with: autoconfig manifest " + " ".join(loaded.namespaces))
        raise typer.Exit(1)
    except AutoConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ {manifest_file} is up to date[/green]")


if __name__ == "__main__":
    app()
