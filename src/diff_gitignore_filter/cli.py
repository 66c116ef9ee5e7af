"""diff-gitignore-filter CLI: read a diff on stdin, write it back without ignored files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from diff_gitignore_filter import __version__

app = typer.Typer(
    name="diff-gitignore-filter",
    help="Drop the sections of a git diff that touch ignored or VCS-metadata files.",
    add_completion=False,
)

console = Console(stderr=True)


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logger = logging.getLogger("diff_gitignore_filter")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=console, show_path=debug, show_time=debug))
    logger.setLevel(level)
    logger.propagate = False


def _silence_stdout() -> None:
    """Point stdout at /dev/null so the interpreter's final flush cannot fail."""
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, typer.get_binary_stream("stdout").fileno())
        os.close(devnull)
    except (OSError, ValueError):
        pass  # stdout is not a real file descriptor


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"diff-gitignore-filter {__version__}")
        raise typer.Exit()


@app.command()
def main(
    downstream: Optional[str] = typer.Option(
        None, "--downstream", "-d", help="Pipe the filtered diff through this shell command"
    ),
    vcs: Optional[bool] = typer.Option(
        None, "--vcs/--no-vcs", help="Drop version-control metadata such as .git/ (default: on)"
    ),
    vcs_pattern: Optional[str] = typer.Option(
        None, "--vcs-pattern", help="Comma-separated VCS patterns, replacing the defaults"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Report what was kept and dropped"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Filter the git diff on stdin through the repository's .gitignore."""
    from diff_gitignore_filter.config.loader import ConfigError, load_config, parse_cli_vcs_patterns
    from diff_gitignore_filter.config.schema import CliArgs
    from diff_gitignore_filter.filtering.errors import FilterError
    from diff_gitignore_filter.pipeline import process_diff_with_config, spool_input

    _configure_logging(verbose, debug)

    # --- Config ---
    try:
        cli_args = CliArgs(
            downstream=downstream,
            vcs=vcs,
            vcs_patterns=parse_cli_vcs_patterns(vcs_pattern) if vcs_pattern is not None else None,
        )
        cfg = load_config(cli_args)
    except ConfigError as exc:
        console.print(f"[bold red]{exc.category}:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- Filter ---
    stdin = typer.get_binary_stream("stdin")
    stdout = typer.get_binary_stream("stdout")
    try:
        with spool_input(stdin) as store:
            report = process_diff_with_config(store, stdout, cfg, Path.cwd())
    except FilterError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    result = report.result
    if result.broken_pipe and cfg.downstream_command is None:
        _silence_stdout()

    if verbose or debug:
        context = report.context.value if report.context is not None else "unknown"
        console.print(f"[dim]Root: {report.root} ({context})[/dim]")
        console.print(
            f"[dim]Sections: {result.sections} seen, {result.included} kept, {result.excluded} dropped[/dim]"
        )
        for path in result.excluded_paths:
            console.print(f"[dim]  dropped {path}[/dim]")
        if result.binary_passthrough:
            console.print("[dim]Binary input passed through unchanged[/dim]")


if __name__ == "__main__":
    app()
