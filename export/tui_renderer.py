"""Renderer für die Terminal-Anzeige des Wochenrasters.

Wird von `show` und `conflicts` im CLI (Rich) verwendet.
"""

from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from rich.table import Table
    from config.schema import GridConfig
    from models.timetable_slot import TimetableSlot


def render_cell(slot: "TimetableSlot") -> str:
    """Zellinhalt: Kürzel, Lehrkraft, Raum, Zeit; ⚠ bei Konflikten."""
    marker = " ⚠" if slot.has_conflicts else ""
    lines = [
        f"{slot.course_code}{marker}",
        slot.teacher_name,
        slot.classroom_name,
        f"{slot.start_time}–{slot.end_time}",
    ]
    if slot.student_groups:
        lines.append(", ".join(slot.student_groups))
    return "\n".join(lines)


def render_grid_rows(
    slots: Iterable["TimetableSlot"],
    config: Optional["GridConfig"] = None,
    days: Optional[list[int]] = None,
) -> list[list[str]]:
    """Gibt Tabellenzeilen für das Wochenraster zurück.

    Jede Zeile: [Stundenmarke, Tag 0, Tag 1, ...]; leere Zellen als '—'.
    """
    from config.defaults import default_grid
    from timetable.grid import compute_grid

    config = config or default_grid()
    days = days if days is not None else list(range(config.day_count))
    view = compute_grid(slots, config)

    rows: list[list[str]] = []
    for time in config.time_marks:
        cells = [time]
        for day in days:
            slot = view[day][time]
            cells.append("—" if slot is None else render_cell(slot))
        rows.append(cells)
    return rows


def build_grid_table(
    slots: Iterable["TimetableSlot"],
    config: Optional["GridConfig"] = None,
    title: str = "Stundenplan",
    days: Optional[list[int]] = None,
) -> "Table":
    """Rich-Tabelle des Wochenrasters."""
    from rich.table import Table
    from rich import box
    from config.defaults import default_grid

    config = config or default_grid()
    days = days if days is not None else list(range(config.day_count))

    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Zeit", style="bold")
    for day in days:
        table.add_column(config.day_names[day], min_width=12)
    for row in render_grid_rows(slots, config, days):
        table.add_row(*[
            f"[red]{cell}[/red]" if "⚠" in cell else cell
            for cell in row
        ])
    return table
