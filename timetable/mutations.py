"""Änderungsprotokoll: Anlegen, Ändern, Löschen und Verschieben von Terminen.

Alle Operationen sind reine Funktionen über einer Terminliste: Die Eingabe
wird nie verändert, das Ergebnis ist immer ein MutationResult mit der neuen
(oder bei Fehlern unveränderten) Liste. Eine Operation wirkt ganz oder gar
nicht.

Die Konflikte werden hier NICHT neu berechnet; das übernimmt der
TimetableEditor nach jeder erfolgreichen Änderung (bzw. der Aufrufer über
timetable.conflicts.compute_conflicts).
"""

import logging
import uuid
from typing import Iterable, Optional

from pydantic import BaseModel

from config.defaults import default_grid
from config.schema import GridConfig
from models.registry import SchoolRegistry
from models.timetable_slot import SlotDraft, TimetableSlot
from timetable.errors import ErrorKind, TimetableError, TimetableOperationError
from timetable.grid import build_grid, cell_occupant
from timetable.timeutil import duration_minutes

logger = logging.getLogger(__name__)


class MutationResult(BaseModel):
    """Ergebnis einer Änderungsoperation."""

    slots: list[TimetableSlot]
    error: Optional[TimetableError] = None
    slot_id: Optional[str] = None     # betroffener Termin

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def slot(self) -> Optional[TimetableSlot]:
        """Der betroffene Termin in der Ergebnisliste (None nach Löschen/Fehler)."""
        if self.slot_id is None:
            return None
        return next((s for s in self.slots if s.id == self.slot_id), None)

    def raise_for_error(self) -> "MutationResult":
        """Wirft TimetableOperationError bei Fehlschlag, sonst self."""
        if self.error is not None:
            raise TimetableOperationError(self.error)
        return self


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def _failure(
    slots: list[TimetableSlot], kind: ErrorKind, message: str,
    slot_id: Optional[str] = None,
) -> MutationResult:
    logger.info(f"Änderung abgelehnt ({kind.value}): {message}")
    return MutationResult(
        slots=slots,
        error=TimetableError(kind=kind, message=message, slot_id=slot_id),
        slot_id=slot_id,
    )


def new_slot_id() -> str:
    """Frische, nie wiederverwendete Termin-ID."""
    return f"slot-{uuid.uuid4().hex}"


def _find_index(slots: list[TimetableSlot], slot_id: str) -> Optional[int]:
    return next((i for i, s in enumerate(slots) if s.id == slot_id), None)


def _denormalize(
    registry: SchoolRegistry, course_id: str, teacher_id: str, classroom_id: str,
) -> tuple[Optional[dict], Optional[str]]:
    """Löst die Referenzen auf.

    Returns:
        (Namensfelder, None) bei Erfolg, sonst (None, Fehlermeldung).
    """
    course = registry.resolve_course(course_id)
    teacher = registry.resolve_teacher(teacher_id)
    classroom = registry.resolve_classroom(classroom_id)

    missing = []
    if course is None:
        missing.append(f"Veranstaltung '{course_id}'")
    if teacher is None:
        missing.append(f"Lehrkraft '{teacher_id}'")
    if classroom is None:
        missing.append(f"Raum '{classroom_id}'")
    if missing:
        return None, f"Unbekannte Referenz: {', '.join(missing)}"

    return {
        "course_name": course.name,
        "course_code": course.code,
        "teacher_name": teacher.name,
        "classroom_name": classroom.name,
    }, None


def _occupied_message(occupant: TimetableSlot, day: int, time: str) -> str:
    return (
        f"Zelle Tag {day} {time} ist bereits belegt durch "
        f"{occupant.course_code} {occupant.course_name} ({occupant.id})"
    )


# ─── Operationen ──────────────────────────────────────────────────────────────

def add_slot(
    slots: Iterable[TimetableSlot],
    draft: SlotDraft,
    registry: SchoolRegistry,
    config: Optional[GridConfig] = None,
) -> MutationResult:
    """Legt einen neuen Termin an.

    Namen und Kürzel werden aus der Registry übernommen, die ID wird neu
    vergeben. Fehler: UnresolvedReference, CellOccupied.
    """
    config = config or default_grid()
    slots = list(slots)

    names, problem = _denormalize(
        registry, draft.course_id, draft.teacher_id, draft.classroom_id
    )
    if problem:
        return _failure(slots, ErrorKind.UNRESOLVED_REFERENCE, problem)

    occupant = cell_occupant(build_grid(slots), draft.day_of_week, draft.start_time)
    if occupant is not None:
        return _failure(
            slots, ErrorKind.CELL_OCCUPIED,
            _occupied_message(occupant, draft.day_of_week, draft.start_time),
        )

    duration = draft.duration
    if duration is None:
        try:
            duration = duration_minutes(draft.start_time, draft.end_time)
        except ValueError:
            duration = 0
        if duration <= 0:
            duration = config.default_duration_minutes

    slot = TimetableSlot(
        id=new_slot_id(),
        course_id=draft.course_id,
        teacher_id=draft.teacher_id,
        classroom_id=draft.classroom_id,
        day_of_week=draft.day_of_week,
        start_time=draft.start_time,
        end_time=draft.end_time,
        duration=duration,
        student_groups=list(draft.student_groups),
        **names,
    )
    logger.info(f"Termin angelegt: {slot.id} {slot}")
    return MutationResult(slots=slots + [slot], slot_id=slot.id)


def update_slot(
    slots: Iterable[TimetableSlot],
    updated: TimetableSlot,
    registry: SchoolRegistry,
) -> MutationResult:
    """Ersetzt den Termin mit gleicher ID.

    Namensfelder werden aus der Registry neu übernommen, übergebene
    `conflicts` ignoriert. Bei geänderter Start- oder Endzeit wird
    `duration` neu berechnet. Fehler: NotFound, UnresolvedReference,
    CellOccupied (neue Zelle von einem anderen Termin belegt).
    """
    slots = list(slots)
    idx = _find_index(slots, updated.id)
    if idx is None:
        return _failure(
            slots, ErrorKind.NOT_FOUND,
            f"Termin '{updated.id}' nicht gefunden", slot_id=updated.id,
        )
    current = slots[idx]

    names, problem = _denormalize(
        registry, updated.course_id, updated.teacher_id, updated.classroom_id
    )
    if problem:
        return _failure(slots, ErrorKind.UNRESOLVED_REFERENCE, problem, slot_id=updated.id)

    if updated.cell != current.cell:
        others = slots[:idx] + slots[idx + 1:]
        occupant = cell_occupant(build_grid(others), *updated.cell)
        if occupant is not None:
            return _failure(
                slots, ErrorKind.CELL_OCCUPIED,
                _occupied_message(occupant, *updated.cell), slot_id=updated.id,
            )

    duration = updated.duration
    if (updated.start_time, updated.end_time) != (current.start_time, current.end_time):
        try:
            recomputed = duration_minutes(updated.start_time, updated.end_time)
        except ValueError:
            recomputed = 0
        if recomputed > 0:
            duration = recomputed

    replacement = updated.model_copy(update={
        **names, "duration": duration, "conflicts": current.conflicts,
    })
    new_slots = list(slots)
    new_slots[idx] = replacement
    logger.info(f"Termin geändert: {replacement.id} {replacement}")
    return MutationResult(slots=new_slots, slot_id=replacement.id)


def delete_slot(slots: Iterable[TimetableSlot], slot_id: str) -> MutationResult:
    """Entfernt einen Termin. Unbekannte ID → NotFound."""
    slots = list(slots)
    idx = _find_index(slots, slot_id)
    if idx is None:
        return _failure(
            slots, ErrorKind.NOT_FOUND,
            f"Termin '{slot_id}' nicht gefunden", slot_id=slot_id,
        )
    logger.info(f"Termin gelöscht: {slot_id}")
    return MutationResult(slots=slots[:idx] + slots[idx + 1:], slot_id=slot_id)


def move_slot(
    slots: Iterable[TimetableSlot],
    slot_id: str,
    new_day: int,
    new_start_time: str,
    config: Optional[GridConfig] = None,
) -> MutationResult:
    """Verschiebt einen Termin in die Zelle (new_day, new_start_time).

    Die Zielzelle wird gegen das Raster ohne den verschobenen Termin
    geprüft; ist sie belegt, wird abgelehnt (kein Tausch, kein Zusammenführen).
    Die Endzeit ist die nächste Stundenmarke, an der letzten Marke die
    Ersatz-Endzeit (19:00).

    Fehler: NotFound, InvalidCell, CellOccupied.
    """
    config = config or default_grid()
    slots = list(slots)
    idx = _find_index(slots, slot_id)
    if idx is None:
        return _failure(
            slots, ErrorKind.NOT_FOUND,
            f"Termin '{slot_id}' nicht gefunden", slot_id=slot_id,
        )

    if not 0 <= new_day < config.day_count:
        return _failure(
            slots, ErrorKind.INVALID_CELL,
            f"Wochentag {new_day} liegt außerhalb 0..{config.day_count - 1}",
            slot_id=slot_id,
        )
    if new_start_time not in config.time_marks:
        return _failure(
            slots, ErrorKind.INVALID_CELL,
            f"Startzeit {new_start_time!r} ist keine Stundenmarke "
            f"({config.time_marks[0]}..{config.time_marks[-1]})",
            slot_id=slot_id,
        )

    others = slots[:idx] + slots[idx + 1:]
    occupant = cell_occupant(build_grid(others), new_day, new_start_time)
    if occupant is not None:
        return _failure(
            slots, ErrorKind.CELL_OCCUPIED,
            _occupied_message(occupant, new_day, new_start_time), slot_id=slot_id,
        )

    end_time = config.next_mark(new_start_time) or config.fallback_end_time
    moved = slots[idx].model_copy(update={
        "day_of_week": new_day,
        "start_time": new_start_time,
        "end_time": end_time,
        "duration": duration_minutes(new_start_time, end_time),
    })
    new_slots = list(slots)
    new_slots[idx] = moved
    logger.info(
        f"Termin verschoben: {slot_id} → {config.day_names[new_day]} {new_start_time}"
    )
    return MutationResult(slots=new_slots, slot_id=slot_id)
