"""Command line interface for devsetup."""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer

from devsetup.engine import (
    CatalogError,
    CatalogLoader,
    DuplicateIdError,
    ProvisioningEngine,
    RealActionRunner,
    SetupContext,
)
from devsetup.engine.progress import NullProgressReporter, ProgressReporter

EXIT_CONFIG_ERROR = 2

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

app = typer.Typer(
    name="devsetup",
    help="Interactive developer workstation setup for Ubuntu 22.04.",
    add_completion=False,
    no_args_is_help=True,
)


def setup_logging(log_file: Path, verbose: bool = False) -> None:
    """Log everything to ``log_file``; with ``verbose`` also to stderr."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    try:
        file_handler = logging.FileHandler(log_file)
    except OSError as e:
        typer.echo(f"Warning: cannot write log file {log_file}: {e}", err=True)
    else:
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if verbose:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    # Benign diagnostics arrive as UnclassifiedDiagnostic warnings
    logging.captureWarnings(True)


def _context(catalog: Optional[Path], log_file: Optional[Path], verbose: bool) -> SetupContext:
    try:
        context = SetupContext.from_env()
    except CatalogError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR)

    updates = {}
    if catalog is not None:
        updates['catalog_path'] = catalog
    if log_file is not None:
        updates['log_file'] = log_file
    if verbose:
        updates['verbose'] = True
    return context.model_copy(update=updates)


@app.command()
def run(
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to every question (non-interactive)"),
    select: Optional[List[str]] = typer.Option(
        None, "--select", "-s", help="Run only these step ids; other steps are skipped without asking"
    ),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Catalog name or YAML file"),
    no_progress: bool = typer.Option(False, "--no-progress", help="Don't draw progress bars"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log commands and output to stderr"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Where to write the run log"),
):
    """Ask which tools to install, confirm, then install them."""
    context = _context(catalog, log_file, verbose)
    setup_logging(context.log_file, context.verbose)

    runner = RealActionRunner(verbose=context.verbose)
    if no_progress or not sys.stdout.isatty():
        reporter = NullProgressReporter()
    else:
        reporter = ProgressReporter()

    try:
        engine = ProvisioningEngine(runner, context, reporter=reporter)
    except (CatalogError, DuplicateIdError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR)

    answers = None
    if select:
        unknown = [step_id for step_id in select if step_id not in engine.registry]
        if unknown:
            typer.echo(f"Error: unknown step ids: {', '.join(unknown)}", err=True)
            raise typer.Exit(EXIT_CONFIG_ERROR)
        answers = {step.id: step.id in select for step in engine.registry.all()}

    try:
        exit_code = engine.run(answers=answers, assume_yes=yes)
    except (EOFError, KeyboardInterrupt):
        typer.echo("\nInstallation cancelled.")
        raise typer.Exit(1)

    raise typer.Exit(exit_code)


@app.command("list")
def list_steps(
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Catalog name or YAML file"),
):
    """Show the steps a catalog offers."""
    loader = CatalogLoader()
    try:
        spec = loader.load_catalog(catalog)
    except CatalogError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR)

    typer.echo(f"{spec.description} ({spec.name} v{spec.version})")
    typer.echo("")
    typer.echo("Automatic:")
    for step in spec.automatic:
        typer.echo(f"  {step.id:<16} {step.display_label}")
    typer.echo("")
    typer.echo("Optional:")
    for step in spec.steps:
        typer.echo(f"  {step.id:<16} {step.display_label:<26} {step.prompt}")


if __name__ == "__main__":
    app()
