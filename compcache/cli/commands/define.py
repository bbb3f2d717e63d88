from pathlib import Path
from typing import List

import typer

from compcache.cli import core


def define(
    component_id: str = typer.Argument(..., help="Component to define."),
    files: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Files making up the component."),
):
    """
    Register files as the local content of a component, replacing any previous files.
    """
    manager = core.build_manager()
    try:
        manager.define(component_id, files)
    except core.COMMAND_ERRORS as exc:
        core.fail(exc)
    core.console.print(f"[green]Defined component '{component_id}' with {len(files)} file(s).[/green]")
