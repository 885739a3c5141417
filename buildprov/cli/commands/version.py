import typer
import importlib.metadata
from buildprov.internal.logging import get_logger

logger = get_logger(__name__)

def version():
    """
    Show the buildprov version.
    """
    try:
        # Only available once the package is installed
        package_version = importlib.metadata.version("buildprov")
        typer.echo(f"buildprov version: {package_version}")
    except importlib.metadata.PackageNotFoundError:
        typer.echo("buildprov is not installed or version metadata not found.")
        typer.echo("Please install the package first (e.g., pip install . or pip install -e .)")
        logger.warning("buildprov package version not found.")
        raise typer.Exit(1)
