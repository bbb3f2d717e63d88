"""
Wiring shared by the CLI commands: builds a ComponentManager from the
environment-driven paths and renders failures consistently.
"""
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.markup import escape

from compcache.adapters.http_store import HttpGlobalStore
from compcache.adapters.storage_fs import FileSystemComponentProvider, FileSystemGlobalStore
from compcache.internal import paths
from compcache.internal.logging import get_logger
from compcache.kernel.components import FAIL, Define, GlobalStore, InvalidComponent, MissingPolicy
from compcache.kernel.manager import ComponentManager

console = Console()
logger = get_logger(__name__)


def build_global_store() -> GlobalStore:
    url = paths.get_global_cache_url()
    if url:
        return HttpGlobalStore(base_url=url, download_dir=paths.get_downloads_dir())
    return FileSystemGlobalStore(paths.get_global_cache_dir())


def build_manager() -> ComponentManager:
    provider = FileSystemComponentProvider(paths.get_components_dir())
    return ComponentManager(provider=provider, global_store=build_global_store())


def source_files(directory: Path) -> List[Path]:
    if not directory.is_dir():
        raise typer.BadParameter(f"Not a directory: {directory}")
    return sorted((p for p in directory.iterdir() if p.is_file()), key=lambda p: p.name)


def missing_policy(manager: ComponentManager, component_id: str, source_dir: Path | None, cache: bool) -> MissingPolicy:
    """
    FAIL unless a source directory is given, in which case the component is
    defined from the files in that directory when it is missing everywhere.
    """
    if source_dir is None:
        return FAIL

    def define_from_source():
        manager.define(component_id, source_files(source_dir))

    return Define(action=define_from_source, cache=cache)


def fail(exc: Exception) -> None:
    console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
    logger.error("Command failed", error=str(exc), error_type=type(exc).__name__)
    raise typer.Exit(1)


COMMAND_ERRORS = (InvalidComponent, OSError, ValueError)
