"""Demo- und Testdaten für den Stundenplan-Editor.

Zwei Quellen:
  1. demo_registry() / demo_slots(): fester kleiner Datensatz (3 Lehrkräfte,
     3 Veranstaltungen, 3 Räume, 3 Studierende, 2 Termine). Diese Termine
     liefert auch die simulierte Generierung.
  2. FakeDataGenerator: zufälliger, per Seed reproduzierbarer Datensatz
     beliebiger Größe. Termine werden über add_slot angelegt und belegen
     daher nie dieselbe Rasterzelle; Lehrkraft- und Raumkonflikte sind
     dagegen möglich und gewollt.
"""

import random
from typing import Optional

from config.defaults import default_grid
from config.schema import GridConfig
from models.classroom import Classroom
from models.course import Course
from models.registry import SchoolRegistry
from models.student import Student
from models.teacher import Teacher
from models.timetable_data import TimetableData
from models.timetable_slot import SlotDraft, TimetableSlot
from timetable.mutations import add_slot

# ─── Fester Demo-Datensatz ────────────────────────────────────────────────────


def demo_registry() -> SchoolRegistry:
    """Stammdaten des Demo-Datensatzes."""
    registry = SchoolRegistry()
    for teacher in [
        Teacher(id="1", name="Dr. Sarah Johnson", email="sarah.johnson@scheduler.com",
                department="Computer Science",
                specialization="Data Structures & Algorithms", courses=["1"]),
        Teacher(id="2", name="Prof. Michael Chen", email="michael.chen@scheduler.com",
                department="Computer Science",
                specialization="Database Systems", courses=["1", "2"]),
        Teacher(id="3", name="Dr. Emily Davis", email="emily.davis@scheduler.com",
                department="Mathematics",
                specialization="Linear Algebra", courses=["3"]),
    ]:
        registry.add_teacher(teacher)

    for course in [
        Course(id="1", name="Data Structures", code="CS201", credits=3,
               teacher_id="2", color="#3B82F6"),
        Course(id="2", name="Database Systems", code="CS301", credits=4,
               teacher_id="2", color="#10B981"),
        Course(id="3", name="Linear Algebra", code="MATH201", credits=3,
               teacher_id="3", color="#F59E0B"),
    ]:
        registry.add_course(course)

    for room in [
        Classroom(id="1", name="Room A101", capacity=50, room_type="lecture",
                  building="Academic Block A", floor=1),
        Classroom(id="2", name="Lab B201", capacity=30, room_type="lab",
                  building="Engineering Block B", floor=2),
        Classroom(id="3", name="Seminar Hall C301", capacity=25, room_type="seminar",
                  building="Administrative Block C", floor=3),
    ]:
        registry.add_classroom(room)

    for student in [
        Student(id="1", name="Alice Johnson", email="alice.johnson@student.edu",
                student_number="CS2021001", semester=4, department="Computer Science",
                enrolled_courses=["1", "2", "3"], groups=["CS-2A"]),
        Student(id="2", name="Bob Smith", email="bob.smith@student.edu",
                student_number="CS2021002", semester=4, department="Computer Science",
                enrolled_courses=["1", "2"], groups=["CS-2B"]),
        Student(id="3", name="Carol Davis", email="carol.davis@student.edu",
                student_number="MATH2021001", semester=3, department="Mathematics",
                enrolled_courses=["3"], groups=["MA-3A"]),
    ]:
        registry.add_student(student)
    return registry


def demo_slots() -> list[TimetableSlot]:
    """Die zwei festen Demo-Termine (Mo 09:00 CS201, Mi 11:00 CS301)."""
    return [
        TimetableSlot(
            id="1", course_id="1", course_name="Data Structures", course_code="CS201",
            teacher_id="2", teacher_name="Prof. Michael Chen",
            classroom_id="1", classroom_name="Room A101",
            day_of_week=0, start_time="09:00", end_time="10:30", duration=90,
            student_groups=["CS-2A", "CS-2B"],
        ),
        TimetableSlot(
            id="2", course_id="2", course_name="Database Systems", course_code="CS301",
            teacher_id="2", teacher_name="Prof. Michael Chen",
            classroom_id="2", classroom_name="Lab B201",
            day_of_week=2, start_time="11:00", end_time="12:30", duration=90,
            student_groups=["CS-3A"],
        ),
    ]


def demo_timetable() -> TimetableData:
    """Vollständiges Demo-Dokument."""
    return TimetableData(
        name="Demo-Stundenplan",
        semester="WS 2024/25",
        registry=demo_registry(),
        slots=demo_slots(),
    )


# ─── Zufallsgenerator ─────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Anna", "Bernd", "Christine", "Dieter", "Eva", "Franz", "Gabi", "Hans",
    "Iris", "Jürgen", "Kathrin", "Lena", "Markus", "Olga", "Peter", "Sandra",
]

_LAST_NAMES = [
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer", "Wagner",
    "Becker", "Schulz", "Hoffmann", "Koch", "Richter", "Klein", "Wolf",
]

_TITLES = ["Dr.", "Prof.", "Prof. Dr.", ""]

# (Name, Kürzel-Präfix, Fachbereich)
_COURSE_CATALOG = [
    ("Data Structures", "CS", "Computer Science"),
    ("Database Systems", "CS", "Computer Science"),
    ("Operating Systems", "CS", "Computer Science"),
    ("Computer Networks", "CS", "Computer Science"),
    ("Linear Algebra", "MATH", "Mathematics"),
    ("Analysis I", "MATH", "Mathematics"),
    ("Statistics", "MATH", "Mathematics"),
    ("Physics I", "PHY", "Physics"),
    ("Technical English", "ENG", "Languages"),
    ("Software Engineering", "CS", "Computer Science"),
]

_COLORS = ["#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6", "#EC4899"]


class FakeDataGenerator:
    """Erzeugt einen zufälligen, reproduzierbaren Stundenplan-Datensatz."""

    def __init__(
        self,
        seed: int = 42,
        num_teachers: int = 6,
        num_courses: int = 8,
        num_classrooms: int = 4,
        num_students: int = 20,
        groups: Optional[list[str]] = None,
        config: Optional[GridConfig] = None,
    ) -> None:
        self.rng = random.Random(seed)
        self.num_teachers = num_teachers
        self.num_courses = min(num_courses, len(_COURSE_CATALOG))
        self.num_classrooms = num_classrooms
        self.num_students = num_students
        self.groups = groups or ["CS-1A", "CS-2A", "CS-2B", "CS-3A", "MA-2A"]
        self.config = config or default_grid()

    def _person_name(self) -> str:
        title = self.rng.choice(_TITLES)
        name = f"{self.rng.choice(_FIRST_NAMES)} {self.rng.choice(_LAST_NAMES)}"
        return f"{title} {name}".strip()

    def generate_registry(self) -> SchoolRegistry:
        registry = SchoolRegistry()
        for i in range(1, self.num_teachers + 1):
            registry.add_teacher(Teacher(
                id=f"T{i:02d}", name=self._person_name(),
                email=f"teacher{i:02d}@scheduler.example",
                department=self.rng.choice(_COURSE_CATALOG)[2],
            ))

        for i, (name, prefix, _dept) in enumerate(_COURSE_CATALOG[:self.num_courses], 1):
            teacher = self.rng.choice(registry.teachers)
            registry.add_course(Course(
                id=f"C{i:02d}", name=name, code=f"{prefix}{100 + i * 10}",
                credits=self.rng.choice([2, 3, 4, 5]), teacher_id=teacher.id,
                color=_COLORS[i % len(_COLORS)],
            ))
            teacher.courses.append(f"C{i:02d}")

        room_types = ["lecture", "lab", "seminar"]
        for i in range(1, self.num_classrooms + 1):
            room_type = room_types[(i - 1) % len(room_types)]
            registry.add_classroom(Classroom(
                id=f"R{i:02d}", name=f"{room_type.capitalize()} {100 + i}",
                capacity=self.rng.choice([25, 30, 50, 80]), room_type=room_type,
                building=f"Block {chr(ord('A') + (i - 1) % 3)}", floor=(i - 1) % 4,
            ))

        course_ids = [c.id for c in registry.courses]
        for i in range(1, self.num_students + 1):
            registry.add_student(Student(
                id=f"S{i:03d}", name=self._person_name(),
                student_number=f"2024{i:04d}",
                semester=self.rng.randint(1, 8),
                enrolled_courses=sorted(self.rng.sample(
                    course_ids, k=min(3, len(course_ids)))),
                groups=[self.rng.choice(self.groups)],
            ))
        return registry

    def generate_slots(
        self, registry: SchoolRegistry, sessions_per_course: int = 2
    ) -> list[TimetableSlot]:
        """Plant jede Veranstaltung sessions_per_course mal an Unterrichtstagen ein."""
        slots: list[TimetableSlot] = []
        marks = self.config.time_marks
        for course in registry.courses:
            for _ in range(sessions_per_course):
                # Einige Versuche, bis eine freie Zelle gefunden ist
                for _attempt in range(20):
                    start = self.rng.choice(marks)
                    end = self.config.next_mark(start) or self.config.fallback_end_time
                    draft = SlotDraft(
                        course_id=course.id,
                        teacher_id=course.teacher_id,
                        classroom_id=self.rng.choice(registry.classrooms).id,
                        day_of_week=self.rng.choice(self.config.working_days),
                        start_time=start,
                        end_time=end,
                        student_groups=[self.rng.choice(self.groups)],
                    )
                    result = add_slot(slots, draft, registry, self.config)
                    if result.ok:
                        slots = result.slots
                        break
        return slots

    def generate(self) -> TimetableData:
        registry = self.generate_registry()
        return TimetableData(
            name="Zufalls-Stundenplan",
            registry=registry,
            slots=self.generate_slots(registry),
        )

    def print_summary(self, data: TimetableData) -> None:
        """Gibt eine Übersicht der generierten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Generierte Daten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold")
        table.add_column("Anzahl", justify="right")
        table.add_row("Veranstaltungen", str(len(data.registry.courses)))
        table.add_row("Lehrkräfte", str(len(data.registry.teachers)))
        table.add_row("Räume", str(len(data.registry.classrooms)))
        table.add_row("Studierende", str(len(data.registry.students)))
        table.add_row("Termine", str(len(data.slots)))
        console.print(table)
