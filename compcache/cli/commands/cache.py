import typer

from compcache.cli import core


def cache(component_id: str = typer.Argument(..., help="Component to publish.")):
    """
    Publish the local file of a component to the global cache.
    """
    manager = core.build_manager()
    try:
        manager.cache(component_id)
    except core.COMMAND_ERRORS as exc:
        core.fail(exc)
    core.console.print(f"[green]Cached component '{component_id}' as {manager.module_id(component_id)}.[/green]")


def clear(component_id: str = typer.Argument(..., help="Component to remove from the global cache.")):
    """
    Remove a component from the global cache. The local cache is left alone.
    """
    manager = core.build_manager()
    try:
        manager.clear_cache(component_id)
    except core.COMMAND_ERRORS as exc:
        core.fail(exc)
    core.console.print(f"[green]Cleared component '{component_id}' from the global cache.[/green]")
