"""Datenmodell für einen Raum (Pydantic v2)."""

from typing import Literal

from pydantic import BaseModel, Field


class Classroom(BaseModel):
    """Repräsentiert einen Hörsaal, ein Labor oder einen Seminarraum."""

    id: str
    name: str                                              # "Room A101"
    capacity: int = Field(30, ge=1)
    room_type: Literal["lecture", "lab", "seminar"] = "lecture"
    building: str = ""
    floor: int = Field(0, ge=0)
