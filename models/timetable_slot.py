"""Datenmodell für einen Termin im Wochenraster (Pydantic v2)."""

from typing import Literal, Optional

from pydantic import BaseModel, Field


ConflictType = Literal["teacher", "classroom", "student_group", "availability"]
Severity = Literal["warning", "error"]


class ConflictInfo(BaseModel):
    """Eine erkannte Doppelbelegung zwischen zwei Terminen.

    Wird ausschließlich vom Konflikt-Detektor erzeugt.
    """

    type: ConflictType
    message: str
    severity: Severity
    other_slot_id: Optional[str] = None   # Termin, mit dem kollidiert wird


class SlotDraft(BaseModel):
    """Eingabe für einen neuen Termin.

    Enthält nur die Referenz-IDs; Namen und Kürzel werden beim Anlegen aus
    der Registry übernommen, Konflikte immer berechnet.
    """

    course_id: str
    teacher_id: str
    classroom_id: str
    day_of_week: int = Field(ge=0, le=6)   # 0=Montag .. 6=Sonntag
    start_time: str                        # "HH:MM"
    end_time: str                          # "HH:MM"
    duration: Optional[int] = None         # Minuten; None = aus Start/Ende
    student_groups: list[str] = []


class TimetableSlot(BaseModel):
    """Ein einzelner Termin einer Lehrveranstaltung im Wochenraster.

    Die Namensfelder (course_name, course_code, teacher_name, classroom_name)
    sind denormalisierte Kopien aus der Registry. `conflicts` ist abgeleitet
    und wird nach jeder Änderung der Terminliste neu berechnet.

    Uhrzeiten werden hier bewusst nicht validiert: fehlerhafte Werte meldet
    die Konfliktprüfung als InvalidTimeFormat.
    """

    id: str
    course_id: str
    course_name: str
    course_code: str
    teacher_id: str
    teacher_name: str
    classroom_id: str
    classroom_name: str
    day_of_week: int = Field(ge=0, le=6)   # 0=Montag .. 6=Sonntag
    start_time: str                        # "HH:MM"
    end_time: str                          # "HH:MM"
    duration: int                          # Minuten (informativ)
    student_groups: list[str] = []
    conflicts: list[ConflictInfo] = []

    @property
    def cell(self) -> tuple[int, str]:
        """Rasterzelle (day_of_week, start_time)."""
        return (self.day_of_week, self.start_time)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def __str__(self) -> str:
        return (
            f"{self.course_code} {self.course_name} "
            f"(Tag {self.day_of_week}, {self.start_time}–{self.end_time})"
        )
