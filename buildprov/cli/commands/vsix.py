from pathlib import Path
from typing import Optional

import typer

from buildprov.cli import core
from buildprov.kernel.artifacts import ArtifactKind


def vsix(
    name: str = typer.Argument(..., help="File name of the extension package."),
    vs_version: str = typer.Option(..., "--vs-version", help="Visual Studio release, e.g. 2019 or 2022."),
    url: Optional[str] = typer.Option(None, "--url", help="Where to download the package from."),
    file: Optional[Path] = typer.Option(None, "--file", help="Pre-staged package to install with --install-only."),
    install_only: bool = typer.Option(False, "--install-only", help="Skip the download and keep the file afterwards."),
    kind: Optional[ArtifactKind] = typer.Option(None, "--kind", help="Run through VSIXInstaller or as a standalone executable. Defaults to vsix when the name contains 'vsix'."),
):
    """
    Install a Visual Studio extension silently.
    """
    if install_only and file is None:
        typer.echo("Error: --file is required with --install-only.", err=True)
        raise typer.Exit(1)
    if not install_only and not url:
        typer.echo("Error: --url is required unless --install-only is set.", err=True)
        raise typer.Exit(1)

    with core.exit_on_failure():
        outcome = core.build_extension_installer().install_vsix_extension(
            name,
            vs_version,
            url=url,
            file_path=file,
            install_only=install_only,
            kind=kind,
        )
    typer.echo(f"{name} installed successfully ({outcome.value}).")
