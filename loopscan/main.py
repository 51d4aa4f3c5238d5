from __future__ import annotations

"""
Typer CLI entry point for the loop detector.

Scans a JavaScript/TypeScript tree for infinite loops, unbounded recursion,
blocking loops, promise deadlocks and listener leaks, prints a Rich summary
and optionally saves the report as JSON.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from loopscan.config import get_default_config
from loopscan.engine import scan_directory
from loopscan.errors import NotFoundError
from loopscan.reporting.console import print_report
from loopscan.reporting.report import write_json_report

logger = logging.getLogger(__name__)

app = typer.Typer(help="loopscan - infinite loop and async hazard detector for JS/TS sources.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def detect(
    target: Path = typer.Option(
        Path("./src"),
        "--target",
        help="Directory to scan.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        help="Save the report to this JSON file.",
    ),
    extended: bool = typer.Option(
        False,
        "--extended",
        help="Also flag unsafe constructs (eval, innerHTML, empty catch) and undocumented modules.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """
    Detect while(true)/for(;;) loops without exits, recursion without base
    cases, blocking loops, promise deadlocks and event listener leaks.
    """
    _configure_logging(verbose)
    console = Console()
    config = get_default_config(extended=extended)
    logger.debug("Enabled rules: %s", ", ".join(rule.id for rule in config.rules))

    try:
        report = scan_directory(target, config)
    except NotFoundError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    print_report(report, console)

    if output is not None:
        write_json_report(report, output)
        console.print(f"\n[green]Report saved to {escape(str(output))}[/green]")


def main() -> None:
    """Entry point for `python -m loopscan.main` and the loopscan script."""
    app()


if __name__ == "__main__":
    main()
