"""Console Report - Rich rendering of recorded CORS configurations"""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from core.models import ScanResult, Severity
from core.output import get_console, severity_style
from probes.classifier import CORS_HEADERS
from probes.severity import FLAG_INFO, analyze, highest_severity

SEVERITY_ICONS = {
    "critical": "🚨",
    "high": "⚠️ ",
    "medium": "⚠️ ",
    "low": "ℹ️ ",
    "info": "ℹ️ ",
}


def _header_lines(result: ScanResult) -> list[str]:
    lines = []
    for field_name, header in CORS_HEADERS.items():
        value = getattr(result.headers, field_name)
        if value:
            lines.append(f"[green]✓[/green] {header}: {escape(value)}")
    return lines


def _flag_lines(result: ScanResult) -> list[str]:
    lines = []
    for flag in analyze(result):
        flag_info = FLAG_INFO[flag]
        level = flag_info.severity.value
        style = severity_style(level)
        lines.append(
            f"{SEVERITY_ICONS[level]} [{style}]{level.upper()}[/]: {flag_info.message}"
        )
    return lines


def print_result(result: ScanResult, console: Console | None = None) -> None:
    """Print a single result as it is recorded (verbose mode)"""
    console = console or get_console()
    console.print(f"[cyan]URL:[/cyan] {escape(result.url)}", highlight=False)
    console.print(f"Origin: {escape(result.origin)}", highlight=False)
    for field_name in CORS_HEADERS:
        value = getattr(result.headers, field_name)
        if value:
            console.print(f"{field_name.upper()}: {escape(value)}", highlight=False)
    console.print()


def display_results(results: Sequence[ScanResult], console: Console | None = None) -> None:
    """Display every result with its headers and risk flags"""
    console = console or get_console()

    if not results:
        console.print(Panel("[yellow]No CORS headers found in any responses.[/yellow]",
                            title="Scan Complete"))
        return

    console.print(Panel(
        f"[bold]Found {len(results)} CORS configurations[/bold]",
        title="📊 CORS Scan Results"
    ))

    table = Table(show_lines=True)
    table.add_column("#", style="dim", width=4)
    table.add_column("URL / Origin", style="cyan", overflow="fold")
    table.add_column("CORS Headers", overflow="fold")
    table.add_column("Risk", overflow="fold")

    for index, result in enumerate(results, 1):
        flags = analyze(result)
        top = highest_severity(flags)
        index_cell = f"[{severity_style(top.value)}]{index}[/]" if top else str(index)
        table.add_row(
            index_cell,
            f"{escape(result.url)}\n[dim]Origin:[/dim] {escape(result.origin)}",
            "\n".join(_header_lines(result)),
            "\n".join(_flag_lines(result)) or "[dim]-[/dim]",
        )

    console.print(table)

    critical = sum(
        1 for r in results if highest_severity(analyze(r)) is Severity.CRITICAL
    )
    summary = f"Summary: {len(results)} total CORS configurations found"
    if critical:
        summary += f" ([red]{critical} critical[/red])"
    console.print(summary)
