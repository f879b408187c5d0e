"""SchoolRegistry: Stammdaten (Veranstaltungen, Lehrkräfte, Räume, Studierende)."""

from typing import Optional

from pydantic import BaseModel

from models.course import Course
from models.teacher import Teacher
from models.classroom import Classroom
from models.student import Student


class SchoolRegistry(BaseModel):
    """Nachschlagewerk für die Referenz-Entitäten eines Stundenplans.

    Der Kern liest daraus nur `id`, `name` und `code`, um sie in Termine zu
    übernehmen. Die Pflege der Stammdaten erfolgt über add_*/remove_*.
    """

    courses: list[Course] = []
    teachers: list[Teacher] = []
    classrooms: list[Classroom] = []
    students: list[Student] = []

    # ─── Auflösen ───

    def resolve_course(self, course_id: str) -> Optional[Course]:
        return next((c for c in self.courses if c.id == course_id), None)

    def resolve_teacher(self, teacher_id: str) -> Optional[Teacher]:
        return next((t for t in self.teachers if t.id == teacher_id), None)

    def resolve_classroom(self, classroom_id: str) -> Optional[Classroom]:
        return next((r for r in self.classrooms if r.id == classroom_id), None)

    def resolve_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.students if s.id == student_id), None)

    # ─── Pflege ───

    def add_course(self, course: Course) -> None:
        """Fügt eine Veranstaltung hinzu; teacher_name wird aus der Lehrkraft übernommen."""
        teacher = self.resolve_teacher(course.teacher_id)
        if teacher is not None:
            course = course.model_copy(update={"teacher_name": teacher.name})
        self.courses = [c for c in self.courses if c.id != course.id] + [course]

    def add_teacher(self, teacher: Teacher) -> None:
        self.teachers = [t for t in self.teachers if t.id != teacher.id] + [teacher]

    def add_classroom(self, classroom: Classroom) -> None:
        self.classrooms = [r for r in self.classrooms if r.id != classroom.id] + [classroom]

    def add_student(self, student: Student) -> None:
        self.students = [s for s in self.students if s.id != student.id] + [student]

    def remove_course(self, course_id: str) -> bool:
        """Entfernt eine Veranstaltung. Gibt True zurück wenn etwas entfernt wurde."""
        before = len(self.courses)
        self.courses = [c for c in self.courses if c.id != course_id]
        return len(self.courses) < before

    def remove_teacher(self, teacher_id: str) -> bool:
        before = len(self.teachers)
        self.teachers = [t for t in self.teachers if t.id != teacher_id]
        return len(self.teachers) < before

    def remove_classroom(self, classroom_id: str) -> bool:
        before = len(self.classrooms)
        self.classrooms = [r for r in self.classrooms if r.id != classroom_id]
        return len(self.classrooms) < before

    def remove_student(self, student_id: str) -> bool:
        before = len(self.students)
        self.students = [s for s in self.students if s.id != student_id]
        return len(self.students) < before

    # ─── Übersicht ───

    @property
    def is_complete(self) -> bool:
        """True wenn mindestens eine Lehrkraft, Veranstaltung und ein Raum existieren."""
        return bool(self.teachers and self.courses and self.classrooms)

    def summary(self) -> str:
        """Kurze Übersicht über die Stammdaten."""
        return "\n".join([
            f"Veranstaltungen: {len(self.courses)}",
            f"Lehrkräfte: {len(self.teachers)}",
            f"Räume: {len(self.classrooms)}",
            f"Studierende: {len(self.students)}",
        ])
