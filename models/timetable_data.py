"""TimetableData: Vollständiges Stundenplan-Dokument inkl. Stammdaten (Pydantic v2)."""

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from models.registry import SchoolRegistry
from models.timetable_slot import TimetableSlot


class TimetableData(BaseModel):
    """Ein Stundenplan mit Kopfdaten, Stammdaten und allen Terminen."""

    name: str = "Stundenplan"
    semester: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    working_days: list[int] = [0, 1, 2, 3, 4]
    registry: SchoolRegistry = Field(default_factory=SchoolRegistry)
    slots: list[TimetableSlot] = []
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        conflicting = sum(1 for s in self.slots if s.has_conflicts)
        lines = [
            f"Stundenplan: {self.name}" + (f" ({self.semester})" if self.semester else ""),
            self.registry.summary(),
            f"Termine: {len(self.slots)}",
            f"Termine mit Konflikten: {conflicting}" if conflicting else "",
        ]
        return "\n".join(line for line in lines if line)

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "TimetableData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
