"""Display functions for page commands - pure functions for Rich output."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...binding import BindReport
from ...exceptions import MediaLoadFailed, OrphanedSlot
from ...layout import ContentSlot, Page, TextConstraints


def _describe_constraints(slot: ContentSlot) -> str:
    c = slot.constraints
    if isinstance(c, TextConstraints):
        return f"{c.max_characters} chars, {c.min_font_size:g}-{c.max_font_size:g}px, {c.font_size_mode.value}"
    mode = "contain (aspect lock)" if c.aspect_lock else c.fit_mode.value
    return f"{mode}, {', '.join(c.allowed_formats)}"


def show_slots_table(console: Console, page: Page) -> None:
    """Display table of a page's content slots."""
    slots = list(page.content_slots)
    if not slots:
        console.print("[yellow]No content slots on this page.[/yellow]")
        return

    table = Table(title=f"Content Slots - {page.page_name} (page {page.page_number})")
    table.add_column("Slot ID", style="cyan")
    table.add_column("Field", style="green")
    table.add_column("Type", style="yellow")
    table.add_column("Constraints")
    table.add_column("Status")

    for slot in slots:
        status = "[red]orphaned[/red]" if slot.orphaned else "[green]ok[/green]"
        table.add_row(
            slot.slot_id,
            f"{slot.field_name}{' *' if slot.required else ''}",
            slot.type.value,
            _describe_constraints(slot),
            status,
        )

    console.print(table)


def show_orphans(console: Console, orphans: list[OrphanedSlot]) -> None:
    for orphan in orphans:
        console.print(
            f"[yellow]Orphaned slot[/yellow] [cyan]{orphan.slot_id}[/cyan]: "
            f"cell {orphan.source_content_id} is missing"
        )


def show_media_failures(console: Console, failures: list[MediaLoadFailed]) -> None:
    for failure in failures:
        console.print(f"[yellow]Media unavailable:[/yellow] {failure}")


def show_bind_report(console: Console, report: BindReport) -> None:
    """Display per-slot outcomes of a fill."""
    for rejection in report.rejections:
        console.print(
            f"[red]Rejected[/red] [cyan]{rejection.slot_id}[/cyan] "
            f"({rejection.reason.value}): {rejection.message}"
        )
    show_orphans(console, report.orphans)
    console.print(f"Applied [green]{len(report.applied)}[/green] value(s)")


def show_render_result(console: Console, output: Path, size: int) -> None:
    console.print(Panel(
        f"[bold green]Rendered[/bold green] [cyan]{output}[/cyan]\n"
        f"Size: [yellow]{size / 1024:.1f} KB[/yellow]",
        title="Complete",
        border_style="green",
    ))
