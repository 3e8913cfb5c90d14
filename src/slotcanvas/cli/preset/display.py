"""Display functions for preset commands - pure functions for Rich output."""

from __future__ import annotations

from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...presets import Preset
from ..page.display import show_bind_report, show_orphans
from .service import ExportOutcome


def show_presets_table(console: Console, presets: List[Preset]) -> None:
    """Display table of stored presets."""
    if not presets:
        console.print("[yellow]No presets found.[/yellow]")
        return

    table = Table(title="Presets")
    table.add_column("Preset ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Pages", style="yellow")
    table.add_column("Updated", style="dim")

    for preset in presets:
        table.add_row(
            preset.preset_id,
            preset.preset_name,
            ", ".join(str(n) for n in preset.page_numbers),
            preset.updated_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


def show_saved(console: Console, preset: Preset, page_number: int) -> None:
    console.print(
        f"[green]Saved page {page_number}[/green] to preset "
        f"[cyan]{preset.preset_name}[/cyan] ({preset.preset_id})"
    )


def show_export_results(console: Console, outcome: ExportOutcome) -> None:
    """Display per-page binding outcomes and the written files."""
    show_orphans(console, outcome.orphans)
    for number, report in sorted(outcome.reports.items()):
        console.print(f"[bold]Page {number}[/bold]")
        show_bind_report(console, report)

    written = [u for u in outcome.uploads if u.success]
    failed = [u for u in outcome.uploads if not u.success]
    lines = [str(upload) for upload in written]
    lines.extend(f"[red]{upload}[/red]" for upload in failed)

    console.print(Panel(
        "\n".join(lines) or "[yellow]Nothing exported[/yellow]",
        title=f"Exported {outcome.preset.preset_name}",
        border_style="red" if failed else "green",
    ))
