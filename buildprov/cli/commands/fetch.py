from pathlib import Path
from typing import Optional

import typer

from buildprov.cli import core
from buildprov.internal.constants import DEFAULT_MAX_RETRIES


def fetch(
    url: str = typer.Argument(..., help="URL of the artifact to download."),
    name: str = typer.Argument(..., help="File name to save the artifact as."),
    dest: Optional[Path] = typer.Option(None, "--dest", "-d", help="Directory to download into."),
    retries: int = typer.Option(DEFAULT_MAX_RETRIES, "--retries", "-r", min=1, help="Download attempts before giving up."),
):
    """
    Download an artifact, retrying on transport failures.
    """
    with core.exit_on_failure():
        file_path = core.build_fetcher().fetch(url, name, destination_dir=dest, max_retries=retries)
    typer.echo(str(file_path))
