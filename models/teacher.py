"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from pydantic import BaseModel


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft."""

    id: str
    name: str                   # "Prof. Michael Chen"
    email: str = ""
    department: str = ""
    specialization: str = ""
    courses: list[str] = []     # Course-IDs
    # Gesperrte Rasterzellen (day_of_week, start_time), z.B. (4, "16:00")
    unavailable: list[tuple[int, str]] = []

    def is_available(self, day: int, time: str) -> bool:
        return (day, time) not in self.unavailable
