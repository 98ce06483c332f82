"""
Terminal rendering of scan reports using the rich library.
"""

from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .report import Report, format_bytes


def section_table(section) -> Table:
    """Build a two column table for one report section."""
    table = Table(title=escape(f"[{section.name}]"), show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    for label, value in section.pairs:
        table.add_row(Text(label), Text(value))

    return table


def render_report(report: Report, title: str = None, console: Optional[Console] = None):
    """Print every section of a report as a table, in report order."""
    console = console or Console()

    if title:
        console.print()
        console.print(Panel.fit(f"[bold blue]{escape(title)}[/bold blue]", border_style="blue"))

    for section in report.sections:
        console.print()
        console.print(section_table(section))

    console.print()


def render_runs(runs: List[Dict], console: Optional[Console] = None):
    """Print stored runs as a table."""
    console = console or Console()

    if not runs:
        console.print("\n[yellow]No runs recorded[/yellow]\n")
        return

    table = Table(title="Scan History")
    table.add_column("Run", justify="right", style="cyan")
    table.add_column("Location", style="blue", max_width=50)
    table.add_column("Started", style="magenta")
    table.add_column("Files", justify="right", style="green")
    table.add_column("Size", justify="right", style="yellow")
    table.add_column("Duration", justify="right")

    for r in runs:
        started = r['started_at'].strftime('%Y-%m-%d %H:%M:%S') if r['started_at'] else 'N/A'
        table.add_row(
            str(r['run_id']),
            Text(r['location']),
            started,
            f"{r['total_files'] or 0:,}",
            format_bytes(r['total_bytes'] or 0),
            f"{r['duration'] or 0:.1f}s"
        )

    console.print()
    console.print(table)
    console.print()
