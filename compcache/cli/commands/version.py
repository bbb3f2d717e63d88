import typer
import importlib.metadata
from compcache.internal.logging import get_logger

logger = get_logger(__name__)

def version():
    """
    Show the compcache version.
    """
    try:
        # Read version from installed package metadata
        package_version = importlib.metadata.version("compcache")
        typer.echo(f"compcache version: {package_version}")
    except importlib.metadata.PackageNotFoundError:
        typer.echo("compcache is not installed or version metadata not found.")
        typer.echo("Please install the package first (e.g., pip install . or pip install -e .)")
        logger.warning("compcache package version not found.")
        raise typer.Exit(1)
