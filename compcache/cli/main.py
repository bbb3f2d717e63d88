import typer

from compcache.cli.commands import (
    resolve,
    define,
    cache,
    version,
)
from compcache.internal import paths
from compcache.internal.logging import setup_logging

cli_app = typer.Typer(
    name="compcache",
    help="A two-tier, cross-process-safe component cache.",
    no_args_is_help=True
)


@cli_app.callback()
def main(
    log_level: str = typer.Option("INFO", "--log-level", help="Log level for the log file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also log to stderr."),
):
    setup_logging(log_level_name=log_level, log_file_path=paths.get_log_file(), console_output=verbose)


cli_app.command("files")(resolve.files)
cli_app.command("file")(resolve.file)
cli_app.command("define")(define.define)
cli_app.command("cache")(cache.cache)
cli_app.command("clear")(cache.clear)
cli_app.command("version")(version.version)

if __name__ == "__main__":
    cli_app()
