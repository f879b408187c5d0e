"""Rollenbezogene Sichten und Filter auf die Terminliste.

Admins sehen alles, Lehrkräfte ihre eigenen Termine, Studierende die
Termine ihrer belegten Veranstaltungen und Gruppen.
"""

from enum import Enum
from typing import Iterable, Optional

from models.registry import SchoolRegistry
from models.timetable_slot import TimetableSlot
from timetable.timeutil import parse_time


class UserRole(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


def scoped_slots(
    slots: Iterable[TimetableSlot],
    role: UserRole,
    user_id: Optional[str],
    registry: SchoolRegistry,
) -> list[TimetableSlot]:
    """Termine, die für die Rolle sichtbar sind.

    Raises:
        ValueError: bei Lehrkraft/Studierenden ohne oder mit unbekannter user_id.
    """
    slots = list(slots)
    role = UserRole(role)

    if role is UserRole.ADMIN:
        return slots

    if role is UserRole.TEACHER:
        if user_id is None or registry.resolve_teacher(user_id) is None:
            raise ValueError(f"Unbekannte Lehrkraft: {user_id!r}")
        return [s for s in slots if s.teacher_id == user_id]

    if role is UserRole.STUDENT:
        student = registry.resolve_student(user_id) if user_id is not None else None
        if student is None:
            raise ValueError(f"Unbekannte studierende Person: {user_id!r}")
        courses = set(student.enrolled_courses)
        groups = set(student.groups)
        return [
            s for s in slots
            if s.course_id in courses or groups.intersection(s.student_groups)
        ]

    raise ValueError(f"Unbekannte Rolle: {role!r}")


def filter_slots(
    slots: Iterable[TimetableSlot],
    teacher_id: Optional[str] = None,
    classroom_id: Optional[str] = None,
    group: Optional[str] = None,
) -> list[TimetableSlot]:
    """Filter der Gesamtansicht; None = kein Filter."""
    result = []
    for s in slots:
        if teacher_id is not None and s.teacher_id != teacher_id:
            continue
        if classroom_id is not None and s.classroom_id != classroom_id:
            continue
        if group is not None and group not in s.student_groups:
            continue
        result.append(s)
    return result


def slots_for_day(slots: Iterable[TimetableSlot], day: int) -> list[TimetableSlot]:
    """Termine eines Tages, nach Startzeit sortiert (fehlerhafte Zeiten zuletzt)."""

    def _key(slot: TimetableSlot) -> tuple[int, int]:
        try:
            return (0, parse_time(slot.start_time))
        except ValueError:
            return (1, 0)

    return sorted((s for s in slots if s.day_of_week == day), key=_key)
