import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

_TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):[0-5]\d")


def _minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


# ─── WOCHENRASTER ───

class GridConfig(BaseModel):
    """Wochenraster des Stundenplans.

    Das Raster definiert:
    - Die 7 Wochentage (Montag zuerst, 0=Montag .. 6=Sonntag)
    - Den festen Katalog der erlaubten Startzeiten (Stundenmarken)
    - Die Ersatz-Endzeit, wenn nach der letzten Marke keine weitere folgt
    """
    # Namen der Wochentage, Index = day_of_week
    day_names: list[str] = Field(
        default=["Montag", "Dienstag", "Mittwoch", "Donnerstag",
                 "Freitag", "Samstag", "Sonntag"],
        description="Namen der Wochentage (Montag zuerst)")
    # Erlaubte Startzeiten im Format "HH:MM", aufsteigend
    time_marks: list[str] = Field(
        default=["08:00", "09:00", "10:00", "11:00", "12:00", "13:00",
                 "14:00", "15:00", "16:00", "17:00", "18:00"],
        description="Katalog der Stundenmarken (HH:MM, aufsteigend)")
    # Endzeit für eine Stunde, die an der letzten Marke beginnt
    fallback_end_time: str = Field("19:00",
        description="Endzeit nach der letzten Stundenmarke")
    # Dauer neuer Stunden, wenn sie nicht aus Start/Ende ableitbar ist
    default_duration_minutes: int = Field(60, ge=1, le=600,
        description="Standard-Dauer einer Stunde in Minuten")
    # Unterrichtstage (für die Auslastungsstatistik)
    working_days: list[int] = Field(
        default=[0, 1, 2, 3, 4],
        description="Unterrichtstage (0=Montag .. 6=Sonntag)")

    @field_validator("day_names")
    @classmethod
    def _check_day_names(cls, v: list[str]) -> list[str]:
        if len(v) != 7:
            raise ValueError(f"Es müssen genau 7 Wochentage angegeben werden, nicht {len(v)}")
        return v

    @field_validator("working_days")
    @classmethod
    def _check_working_days(cls, v: list[int]) -> list[int]:
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Unterrichtstag {day} liegt außerhalb 0..6")
        return sorted(set(v))

    @model_validator(mode='after')
    def _check_time_marks(self):
        """Stundenmarken müssen gültige HH:MM-Zeiten und streng aufsteigend sein."""
        if not self.time_marks:
            raise ValueError("Der Stundenkatalog darf nicht leer sein")
        for mark in self.time_marks + [self.fallback_end_time]:
            if not _TIME_PATTERN.fullmatch(mark):
                raise ValueError(f"Ungültige Uhrzeit '{mark}' (erwartet HH:MM)")
        values = [_minutes(m) for m in self.time_marks]
        for earlier, later in zip(values, values[1:]):
            if later <= earlier:
                raise ValueError("Stundenmarken müssen streng aufsteigend sein")
        if _minutes(self.fallback_end_time) <= values[-1]:
            raise ValueError(
                f"Ersatz-Endzeit {self.fallback_end_time} liegt nicht nach "
                f"der letzten Marke {self.time_marks[-1]}")
        return self

    @property
    def day_count(self) -> int:
        return len(self.day_names)

    def next_mark(self, time: str) -> Optional[str]:
        """Die auf `time` folgende Stundenmarke, None nach der letzten Marke."""
        idx = self.time_marks.index(time)
        if idx + 1 < len(self.time_marks):
            return self.time_marks[idx + 1]
        return None


# ─── GENERIERUNG ───

class GenerationConfig(BaseModel):
    """Einstellungen der (simulierten) Stundenplan-Generierung."""
    # Künstliche Wartezeit in Sekunden
    delay_seconds: float = Field(3.0, ge=0.0, le=60.0,
        description="Simulierte Rechenzeit (Sekunden)")
    # Erfolgswahrscheinlichkeit eines Laufs (0.0 bis 1.0)
    success_rate: float = Field(0.7, ge=0.0, le=1.0,
        description="Erfolgswahrscheinlichkeit")
    # Zufalls-Seed für reproduzierbare Läufe (None = nicht deterministisch)
    seed: Optional[int] = Field(None,
        description="Zufalls-Seed (leer = zufällig)")


# ─── GESAMT-CONFIG ───

class EditorConfig(BaseModel):
    """Gesamtkonfiguration des Stundenplan-Editors."""
    # Name der Einrichtung (Anzeige)
    institution_name: str = Field("Muster-Hochschule",
        description="Name der Einrichtung")
    # Wochenraster mit Stundenkatalog
    grid: GridConfig = Field(default_factory=GridConfig)
    # Generierungs-Einstellungen
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
