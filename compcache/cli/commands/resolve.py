from pathlib import Path
from typing import Optional

import typer

from compcache.cli import core


def files(
    component_id: str = typer.Argument(..., help="Component to resolve."),
    source: Optional[Path] = typer.Option(None, "--from", help="Directory to define the component from when it is missing."),
    cache: bool = typer.Option(False, "--cache", help="Publish a newly defined component to the global cache."),
):
    """
    Print every file of a component, pulling it from the global cache if needed.
    """
    manager = core.build_manager()
    try:
        found = manager.files(component_id, core.missing_policy(manager, component_id, source, cache))
    except core.COMMAND_ERRORS as exc:
        core.fail(exc)
    for path in found:
        typer.echo(str(path))


def file(
    component_id: str = typer.Argument(..., help="Component to resolve."),
    source: Optional[Path] = typer.Option(None, "--from", help="Directory to define the component from when it is missing."),
    cache: bool = typer.Option(False, "--cache", help="Publish a newly defined component to the global cache."),
):
    """
    Print the single file of a component. Fails if it has more than one.
    """
    manager = core.build_manager()
    try:
        found = manager.file(component_id, core.missing_policy(manager, component_id, source, cache))
    except core.COMMAND_ERRORS as exc:
        core.fail(exc)
    typer.echo(str(found))
