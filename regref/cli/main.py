"""
RegRef command line.

    regref analyze CIRCULAR.pdf      find references and classify them
    regref index                     show the local collection metadata

Exit codes
----------
    0  success
    1  unexpected or configuration error
    2  input file not found
    3  input file is not a PDF
    4  local collection missing or empty
"""

from functools import partial, wraps
from pathlib import Path
from typing import Any, Callable, Optional

import typer
from rich.markup import escape
from rich.table import Table

from regref import __version__
from regref.analysis.analyzer import ReferenceAnalyzer
from regref.cli.console import (
    ErrorRenderer,
    get_console,
    set_verbose_mode,
    success,
    tip,
)
from regref.core.config import Config
from regref.core.config_loaders import load_config
from regref.core.exceptions import CollectionNotFoundError, RegRefError
from regref.core.logging import configure_logging, get_logger
from regref.index.local_index import (
    IndexBuildResult,
    build_local_index,
    discover_collection,
)
from regref.ingest.text_extractor import TextExtractor
from regref.llm.factory import get_generation_config, get_llm_client
from regref.report.console import render_analysis
from regref.report.writer import save_report

logger = get_logger(__name__)

EXIT_ERROR = 1
EXIT_NOT_FOUND = 2
EXIT_NOT_PDF = 3
EXIT_EMPTY_COLLECTION = 4


def handle_errors(operation_name: str) -> Callable[..., Any]:
    """
    Decorator rendering uncaught errors as a panel and exiting with code 1.

    typer.Exit passes through untouched.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except Exception as e:
                ErrorRenderer.render(e, context=f"While running {operation_name}")
                raise typer.Exit(code=EXIT_ERROR)

        return wrapper

    return decorator


app = typer.Typer(
    name="regref",
    help="Find references between SEBI circulars and your local collection",
    add_completion=False,
    pretty_exceptions_enable=False,
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Debug logging and full tracebacks"
    ),
) -> None:
    """RegRef - regulatory reference finder."""
    if version:
        typer.echo(f"RegRef {__version__}")
        raise typer.Exit()

    set_verbose_mode(verbose)
    ctx.obj = {"verbose": verbose}

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_settings(ctx: typer.Context, config_path: Optional[Path]) -> Config:
    """Load config and apply its logging settings."""
    config = load_config(config_path)
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    configure_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.log_file_path,
    )
    return config


def _build_index(config: Config) -> IndexBuildResult:
    """
    Discover and index the local collection.

    Exits with EXIT_EMPTY_COLLECTION when the collection is missing or
    nothing could be indexed.
    """
    console = get_console()
    try:
        entries = discover_collection(
            config.collection_path, config.collection.suffixes
        )
    except CollectionNotFoundError as e:
        ErrorRenderer.render(e)
        raise typer.Exit(code=EXIT_EMPTY_COLLECTION)

    text_source = partial(
        TextExtractor().extract_leading_text,
        max_pages=config.collection.metadata_pages,
    )
    with console.status(f"Indexing {len(entries)} local circulars..."):
        result = build_local_index(
            entries, text_source, max_workers=config.collection.max_workers
        )

    if len(result.index) == 0:
        ErrorRenderer.render_simple(
            f"No local circulars found in {config.collection_path}",
            error_code=CollectionNotFoundError.error_code,
        )
        tip("Place circular PDFs in the collection directory or set REGREF_COLLECTION_DIR")
        raise typer.Exit(code=EXIT_EMPTY_COLLECTION)

    console.print(
        f"[blue]Indexed {result.indexed} local circulars[/blue]"
        + (f" [yellow]({result.skipped} skipped)[/yellow]" if result.skipped else "")
    )
    return result


def _validate_input(pdf_file: Path) -> None:
    if not pdf_file.exists():
        ErrorRenderer.render_simple(f"File '{pdf_file}' not found", "RR-CLI-002")
        raise typer.Exit(code=EXIT_NOT_FOUND)
    if pdf_file.suffix.lower() != ".pdf":
        ErrorRenderer.render_simple(f"'{pdf_file}' is not a PDF file", "RR-CLI-003")
        raise typer.Exit(code=EXIT_NOT_PDF)


@app.command("analyze")
@handle_errors("analyze")
def analyze_command(
    ctx: typer.Context,
    pdf_file: Path = typer.Argument(..., help="Circular PDF to analyze"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config.yaml"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Directory for the JSON report"
    ),
    no_save: bool = typer.Option(False, "--no-save", help="Do not write the JSON report"),
) -> None:
    """Find every regulatory reference in a circular.

    Examples:
        regref analyze circulars/new_circular.pdf
        regref analyze doc.pdf --output-dir reports/
    """
    _validate_input(pdf_file)

    config = _load_settings(ctx, config_path)
    console = get_console()
    console.print("[bold blue]SEBI Reference Finder[/bold blue]")

    index_result = _build_index(config)
    analyzer = ReferenceAnalyzer(
        index=index_result.index,
        llm_client=get_llm_client(config),
        text_extractor=TextExtractor(),
        generation_config=get_generation_config(config),
    )

    with console.status("Running reference analysis..."):
        result = analyzer.analyze(pdf_file)

    render_analysis(result, console)

    if no_save:
        return
    directory = output_dir if output_dir is not None else config.output_path
    report_path = save_report(result, directory, config.output.filename_prefix)
    success(f"\nReport saved to: {report_path}")


@app.command("index")
@handle_errors("index")
def index_command(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config.yaml"
    ),
) -> None:
    """List the metadata extracted from the local collection."""
    config = _load_settings(ctx, config_path)
    result = _build_index(config)

    table = Table(title=f"Local collection: {config.collection_path}")
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Circular No.")
    table.add_column("Date")
    table.add_column("Subject")
    table.add_column("Key terms", style="dim")
    for metadata in result.index.values():
        table.add_row(
            escape(metadata.filename),
            escape(metadata.circular_number or "-"),
            metadata.date or "-",
            escape(metadata.subject or "-"),
            ", ".join(metadata.key_terms) or "-",
        )

    console = get_console()
    console.print(table)
    for filename, reason in result.failures.items():
        console.print(f"  [red]\\[SKIPPED][/red] {escape(filename)}: {escape(reason)}")


def cli_main() -> None:
    """Entry point for console_scripts."""
    app()


if __name__ == "__main__":
    cli_main()
