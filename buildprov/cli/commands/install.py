from pathlib import Path
from typing import List, Optional

import typer

from buildprov.cli import core
from buildprov.kernel.artifacts import InstallOutcome


def _report(name: str, outcome: InstallOutcome) -> None:
    if outcome is InstallOutcome.SUCCESS_REBOOT_REQUIRED:
        typer.echo(f"{name} installed successfully (reboot required).")
    elif outcome is InstallOutcome.ALREADY_INSTALLED:
        typer.echo(f"{name} is already installed.")
    else:
        typer.echo(f"{name} installed successfully.")


def install(
    url: str = typer.Argument(..., help="URL of the installer."),
    name: str = typer.Argument(..., help="File name of the installer; .msi packages go through msiexec."),
    arg: Optional[List[str]] = typer.Option(None, "--arg", "-a", help="Installer argument (repeatable). Ignored for .msi packages."),
):
    """
    Download and run a binary installer.
    """
    with core.exit_on_failure():
        outcome = core.build_dispatcher().install_binary(url, name, arg or [])
    _report(name, outcome)


def install_package(
    name: str = typer.Argument(..., help="Package name in the catalog."),
    version: Optional[str] = typer.Option(None, "--version", "-v", help="Package version. Defaults to the newest."),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Catalog file. Defaults to catalog.json in BUILDPROV_ROOT."),
    vs_version: Optional[str] = typer.Option(None, "--vs-version", help="Visual Studio release for catalog entries that are extensions."),
):
    """
    Look up a package in the catalog and install it.

    Entries with a `kind` are Visual Studio extensions and need --vs-version.
    """
    with core.exit_on_failure():
        entry = core.build_catalog(catalog).lookup(name, version)

    if entry.kind is not None and not vs_version:
        typer.echo(f"Error: {entry.name} is a Visual Studio extension; pass --vs-version.", err=True)
        raise typer.Exit(1)

    typer.echo(f"Installing {entry.name} {entry.version}...")
    with core.exit_on_failure():
        if entry.kind is not None:
            outcome = core.build_extension_installer().install_vsix_extension(
                entry.file_name, vs_version, url=entry.url, kind=entry.kind,
            )
        else:
            outcome = core.build_dispatcher().install_binary(entry.url, entry.file_name, entry.arguments)
    _report(entry.file_name, outcome)
