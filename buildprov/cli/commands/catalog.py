from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from buildprov.cli import core

console = Console()


def catalog(
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Catalog file. Defaults to catalog.json in BUILDPROV_ROOT."),
):
    """
    List the packages available in the catalog.
    """
    with core.exit_on_failure():
        packages = core.build_catalog(catalog_path).list_packages()

    if not packages:
        console.print("[yellow]The catalog has no packages.[/yellow]")
        return

    table = Table(title="Available Packages")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Version", style="green")
    table.add_column("File")
    table.add_column("URL", overflow="fold")

    for package in packages:
        table.add_row(package.name, package.version, package.file_name, package.url)
    console.print(table)
