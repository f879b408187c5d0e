"""Datenmodell für Studierende (Pydantic v2)."""

from pydantic import BaseModel, Field


class Student(BaseModel):
    """Repräsentiert eine studierende Person."""

    id: str
    name: str
    email: str = ""
    student_number: str = ""           # Matrikelnummer
    semester: int = Field(1, ge=1)
    department: str = ""
    enrolled_courses: list[str] = []   # Course-IDs
    groups: list[str] = []             # Gruppen-Labels, z.B. "CS-2A"
