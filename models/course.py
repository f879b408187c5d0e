"""Datenmodell für eine Lehrveranstaltung (Pydantic v2)."""

from pydantic import BaseModel, Field


class Course(BaseModel):
    """Repräsentiert eine Lehrveranstaltung."""

    id: str
    name: str                    # "Data Structures"
    code: str                    # "CS201"
    credits: int = Field(3, ge=1)
    teacher_id: str = ""         # Verantwortliche Lehrkraft
    teacher_name: str = ""
    color: str = "#3B82F6"       # Anzeigefarbe im Raster
