"""Konfliktprüfung: Doppelbelegungen von Lehrkräften, Räumen und Gruppen.

Arbeitet auf der vollständigen Terminliste, unabhängig vom Rasterindex.
Zwei Termine kollidieren, wenn sie am selben Tag liegen, sich ihre
halboffenen Zeitintervalle [start, end) überschneiden und sie eine
Ressource teilen:

  teacher        gleiche teacher_id              → error
  classroom      gleiche classroom_id            → error
  student_group  mindestens eine gemeinsame Gruppe → warning

Mit Registry wird zusätzlich jeder Termin in einer für die Lehrkraft
gesperrten Zelle als `availability` (warning, ohne Gegenstück) markiert.

Konflikte sind symmetrisch: beide Termine erhalten einen Eintrag, der auf
den jeweils anderen verweist.
"""

import logging
from collections import defaultdict
from typing import Iterable, Optional

from pydantic import BaseModel

from config.defaults import DAY_NAMES
from models.registry import SchoolRegistry
from models.timetable_slot import ConflictInfo, TimetableSlot
from timetable.errors import ErrorKind, TimetableError
from timetable.timeutil import intervals_overlap, parse_time

logger = logging.getLogger(__name__)


class ConflictReport(BaseModel):
    """Ergebnis der Konfliktprüfung als Seitentabelle (Slot-ID → Konflikte)."""

    conflicts_by_slot: dict[str, list[ConflictInfo]]
    conflicting_pairs: list[tuple[str, str]]   # (slot_id, slot_id), je Paar einmal
    invalid_slots: list[TimetableError]        # InvalidTimeFormat, je Termin einmal

    @property
    def conflict_count(self) -> int:
        return len(self.conflicting_pairs)

    @property
    def is_clean(self) -> bool:
        """True wenn weder Konflikte noch fehlerhafte Uhrzeiten gefunden wurden."""
        return not self.invalid_slots and not any(self.conflicts_by_slot.values())

    def for_slot(self, slot_id: str) -> list[ConflictInfo]:
        return list(self.conflicts_by_slot.get(slot_id, []))

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ KONFLIKTFREI[/bold green]"
            if self.is_clean
            else "[bold red]✗ KONFLIKTE GEFUNDEN[/bold red]"
        )
        lines = [
            status,
            f"Kollidierende Paare: {self.conflict_count} | "
            f"Fehlerhafte Termine: {len(self.invalid_slots)}",
        ]
        console.print(Panel("\n".join(lines), title="Konfliktprüfung", border_style="cyan"))

        if any(self.conflicts_by_slot.values()):
            table = Table(box=box.ROUNDED, show_lines=True)
            table.add_column("Typ", width=8)
            table.add_column("Art", width=14)
            table.add_column("Termin", width=12)
            table.add_column("Beschreibung")
            for slot_id, infos in self.conflicts_by_slot.items():
                for info in infos:
                    color = "red" if info.severity == "error" else "yellow"
                    table.add_row(
                        f"[{color}]{info.severity.upper()}[/{color}]",
                        info.type,
                        slot_id,
                        info.message,
                    )
            console.print(table)

        for err in self.invalid_slots:
            console.print(f"[yellow]• {err.message}[/yellow]")


# ─── Meldungen ────────────────────────────────────────────────────────────────

def _describe(slot: TimetableSlot) -> str:
    return f"{slot.course_code} {slot.course_name} ({slot.start_time}–{slot.end_time})"


def _day_name(day: int) -> str:
    return DAY_NAMES[day] if 0 <= day < len(DAY_NAMES) else f"Tag {day}"


def _teacher_conflict(slot: TimetableSlot, other: TimetableSlot) -> ConflictInfo:
    return ConflictInfo(
        type="teacher",
        severity="error",
        other_slot_id=other.id,
        message=(
            f"Lehrkraft {slot.teacher_name} ist am {_day_name(slot.day_of_week)} "
            f"gleichzeitig in {_describe(other)} eingeplant."
        ),
    )


def _classroom_conflict(slot: TimetableSlot, other: TimetableSlot) -> ConflictInfo:
    return ConflictInfo(
        type="classroom",
        severity="error",
        other_slot_id=other.id,
        message=(
            f"Raum {slot.classroom_name} ist am {_day_name(slot.day_of_week)} "
            f"gleichzeitig durch {_describe(other)} belegt."
        ),
    )


def _group_conflict(
    slot: TimetableSlot, other: TimetableSlot, shared: list[str]
) -> ConflictInfo:
    label = "Gruppe" if len(shared) == 1 else "Gruppen"
    return ConflictInfo(
        type="student_group",
        severity="warning",
        other_slot_id=other.id,
        message=(
            f"{label} {', '.join(shared)} am {_day_name(slot.day_of_week)} "
            f"gleichzeitig in {_describe(other)}."
        ),
    )


def _availability_conflict(slot: TimetableSlot) -> ConflictInfo:
    return ConflictInfo(
        type="availability",
        severity="warning",
        message=(
            f"Lehrkraft {slot.teacher_name} ist am {_day_name(slot.day_of_week)} "
            f"um {slot.start_time} nicht verfügbar."
        ),
    )


# ─── Prüfung ──────────────────────────────────────────────────────────────────

def _parse_interval(slot: TimetableSlot) -> tuple[int, int]:
    """(start, end) in Minuten; ValueError bei fehlerhaften oder leeren Intervallen."""
    start = parse_time(slot.start_time)
    end = parse_time(slot.end_time)
    if end <= start:
        raise ValueError(
            f"Endzeit {slot.end_time} liegt nicht nach Startzeit {slot.start_time}"
        )
    return start, end


def detect_conflicts(
    slots: Iterable[TimetableSlot],
    registry: Optional[SchoolRegistry] = None,
) -> ConflictReport:
    """Berechnet alle Konflikte der Terminliste.

    Termine mit nicht lesbaren Uhrzeiten werden übersprungen und je einmal
    als InvalidTimeFormat gemeldet; die Prüfung der übrigen läuft weiter.
    Bereits vorhandene `conflicts` der Eingabe werden ignoriert. Ohne
    Registry entfällt die Prüfung der Verfügbarkeit.
    """
    slots = list(slots)
    by_slot: dict[str, list[ConflictInfo]] = {s.id: [] for s in slots}
    pairs: list[tuple[str, str]] = []
    invalid: list[TimetableError] = []

    # Nach Tag gruppieren: nur Termine desselben Tages können kollidieren
    by_day: dict[int, list[tuple[TimetableSlot, int, int]]] = defaultdict(list)
    for slot in slots:
        try:
            start, end = _parse_interval(slot)
        except ValueError as e:
            logger.warning(f"Termin {slot.id} übersprungen: {e}")
            invalid.append(TimetableError(
                kind=ErrorKind.INVALID_TIME_FORMAT,
                slot_id=slot.id,
                message=f"Termin {slot.id} ({slot.course_code}): {e}",
            ))
            continue
        by_day[slot.day_of_week].append((slot, start, end))
        if registry is not None:
            teacher = registry.resolve_teacher(slot.teacher_id)
            if teacher is not None and not teacher.is_available(*slot.cell):
                by_slot[slot.id].append(_availability_conflict(slot))

    for day in sorted(by_day):
        day_slots = by_day[day]
        for i, (a, a_start, a_end) in enumerate(day_slots):
            for b, b_start, b_end in day_slots[i + 1:]:
                if not intervals_overlap(a_start, a_end, b_start, b_end):
                    continue
                found = False
                if a.teacher_id == b.teacher_id:
                    by_slot[a.id].append(_teacher_conflict(a, b))
                    by_slot[b.id].append(_teacher_conflict(b, a))
                    found = True
                if a.classroom_id == b.classroom_id:
                    by_slot[a.id].append(_classroom_conflict(a, b))
                    by_slot[b.id].append(_classroom_conflict(b, a))
                    found = True
                b_groups = set(b.student_groups)
                shared = list(dict.fromkeys(g for g in a.student_groups if g in b_groups))
                if shared:
                    by_slot[a.id].append(_group_conflict(a, b, shared))
                    by_slot[b.id].append(_group_conflict(b, a, shared))
                    found = True
                if found:
                    pairs.append((a.id, b.id))

    if pairs:
        logger.info(f"Konfliktprüfung: {len(pairs)} kollidierende Terminpaare")
    return ConflictReport(
        conflicts_by_slot=by_slot,
        conflicting_pairs=pairs,
        invalid_slots=invalid,
    )


def compute_conflicts(
    slots: Iterable[TimetableSlot],
    registry: Optional[SchoolRegistry] = None,
) -> list[TimetableSlot]:
    """Gibt eine neue Terminliste mit frisch berechneten `conflicts` zurück.

    Idempotent; die Eingabe wird nicht verändert.
    """
    slots = list(slots)
    report = detect_conflicts(slots, registry)
    return [
        s.model_copy(update={"conflicts": report.for_slot(s.id)})
        for s in slots
    ]


def count_conflicts(slots: Iterable[TimetableSlot]) -> int:
    """Anzahl kollidierender Terminpaare."""
    return detect_conflicts(slots).conflict_count
