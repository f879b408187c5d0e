"""Rasterindex: bildet eine Terminliste auf Zellen (Wochentag, Startzeit) ab.

Das Raster ist eine einfache Belegungstabelle: Es zählt nur der exakte
Schlüssel (day_of_week, start_time). Überlappende Termine mit anderer
Startzeit belegen unterschiedliche Zellen; solche Überschneidungen findet
erst die Konfliktprüfung (timetable.conflicts).
"""

import logging
from collections import defaultdict
from typing import Iterable, Optional

from config.defaults import default_grid
from config.schema import GridConfig
from models.timetable_slot import TimetableSlot

logger = logging.getLogger(__name__)

Cell = tuple[int, str]
Grid = dict[Cell, TimetableSlot]


def build_grid(slots: Iterable[TimetableSlot]) -> Grid:
    """Baut die Belegungstabelle in einem Durchlauf.

    Bei mehreren Terminen in derselben Zelle gewinnt der letzte in
    Iterationsreihenfolge. Die Eingabe wird nicht verändert.
    """
    grid: Grid = {}
    for slot in slots:
        key = slot.cell
        previous = grid.get(key)
        if previous is not None:
            logger.warning(
                f"Zelle Tag {key[0]} {key[1]} mehrfach belegt: "
                f"{previous.id} wird durch {slot.id} verdeckt"
            )
        grid[key] = slot
    return grid


def cell_occupant(grid: Grid, day: int, time: str) -> Optional[TimetableSlot]:
    """Termin in der Zelle (day, time) oder None."""
    return grid.get((day, time))


def compute_grid(
    slots: Iterable[TimetableSlot],
    config: Optional[GridConfig] = None,
) -> dict[int, dict[str, Optional[TimetableSlot]]]:
    """Vollständige Rasteransicht: Tag → Stundenmarke → Termin/None.

    Enthält alle 7 Wochentage und alle Marken des Katalogs. Termine mit
    einer Startzeit außerhalb des Katalogs erscheinen hier nicht.
    """
    config = config or default_grid()
    grid = build_grid(slots)
    return {
        day: {time: grid.get((day, time)) for time in config.time_marks}
        for day in range(config.day_count)
    }


def find_cell_collisions(slots: Iterable[TimetableSlot]) -> dict[Cell, list[str]]:
    """Zellen mit mehr als einem Termin (Slot-IDs in Eingabereihenfolge)."""
    by_cell: dict[Cell, list[str]] = defaultdict(list)
    for slot in slots:
        by_cell[slot.cell].append(slot.id)
    return {cell: ids for cell, ids in by_cell.items() if len(ids) > 1}
