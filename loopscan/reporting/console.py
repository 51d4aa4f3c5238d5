# Rich console output: severity-ordered summary of a ScanReport.

from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from loopscan.findings.models import SEVERITY_ORDER, Finding, ScanReport, Severity

# Code excerpts are cut to this many characters on screen (JSON keeps them whole)
CODE_EXCERPT_WIDTH = 60

SEVERITY_STYLE = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "bold magenta",
    Severity.MEDIUM: "bold yellow",
    Severity.LOW: "bold dim",
}


def truncate_code(code: str, width: int = CODE_EXCERPT_WIDTH) -> str:
    if len(code) <= width:
        return code
    return code[:width] + "..."


def _findings_table(findings: list[Finding]) -> Table:
    table = Table(
        show_header=True,
        header_style="bold magenta",
        box=box.SIMPLE,
        padding=(0, 1),
        expand=False,
    )
    table.add_column("Location", style="cyan", no_wrap=True)
    table.add_column("Type", style="dim", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Code", style="dim")

    for f in findings:
        message = Text(f.description)
        if f.suggestion:
            message.append(f"\nFix: {f.suggestion}", style="green")
        table.add_row(
            Text(f"{f.file}:{f.line}"),
            Text(f"[{f.type.value}]", style="dim"),
            message,
            Text(truncate_code(f.code) if f.code else ""),
        )
    return table


def print_report(report: ScanReport, console: Optional[Console] = None) -> None:
    """
    Print the report: one section per severity (critical first), the skipped
    files as a note, then a summary panel. A clean scan prints a single
    success panel plus any skipped-file note.
    """
    console = console or Console()

    console.print(f"[bold]Loop detection report[/bold] for [cyan]{escape(report.target)}[/cyan]")

    if report.is_clean:
        console.print(
            Panel(
                "[green]No infinite loop patterns detected.[/green]",
                title="loopscan",
                border_style="green",
                box=box.ROUNDED,
            )
        )
        _print_skipped(report, console)
        return

    for severity in SEVERITY_ORDER:
        findings = report.by_severity(severity)
        console.print()
        console.print(
            Text(f"{severity.value.capitalize()}: {len(findings)}", style=SEVERITY_STYLE[severity])
        )
        if findings:
            console.print(_findings_table(findings))

    _print_skipped(report, console)
    _print_summary(report, console)


def _print_skipped(report: ScanReport, console: Console) -> None:
    """Unreadable files are a note, not a finding."""
    if not report.skipped:
        return
    console.print()
    console.print(f"[dim]Note: skipped {len(report.skipped)} unreadable file(s)[/dim]")
    for s in report.skipped:
        console.print(f"  [dim]|-- {escape(s.path)}: {escape(s.reason)}[/dim]")


def _print_summary(report: ScanReport, console: Console) -> None:
    summary = report.summary
    total = summary.total
    parts = [f"[bold]{total} issue{'s' if total != 1 else ''}[/bold]"]
    for severity in SEVERITY_ORDER:
        parts.append(f"[{SEVERITY_STYLE[severity]}]{summary.count(severity)} {severity.value}[/]")

    console.print()
    console.print(
        Panel(
            " | ".join(parts),
            title="Summary",
            border_style="red" if summary.critical else "yellow",
            box=box.ROUNDED,
        )
    )
