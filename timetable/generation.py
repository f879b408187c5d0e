"""Simulierte Stundenplan-Generierung und Kennzahlen.

Es gibt keinen echten Solver: Die Generierung wartet eine konfigurierbare
Zeit, entscheidet per Zufall über Erfolg oder Fehlschlag und liefert im
Erfolgsfall den festen Demo-Terminsatz samt Kennzahlen. Ein abgebrochener
Lauf braucht keine Aufräumarbeiten.
"""

import logging
import random
import time
from typing import Optional

from pydantic import BaseModel

from config.defaults import default_editor_config
from config.schema import EditorConfig, GridConfig
from models.registry import SchoolRegistry
from models.timetable_slot import TimetableSlot
from timetable.conflicts import compute_conflicts, detect_conflicts

logger = logging.getLogger(__name__)

FAILURE_REASON = (
    "Generierung fehlgeschlagen: Verfügbarkeitskonflikt bei "
    "Prof. Michael Chen am Montag 09:00–10:30"
)


class TimetableStats(BaseModel):
    """Kennzahlen eines Stundenplans."""

    total_courses: int
    total_teachers: int
    total_classrooms: int
    total_students: int
    utilization_rate: float    # Anteil belegter Rasterzellen an Unterrichtstagen, in %
    conflict_count: int        # Anzahl kollidierender Terminpaare


class GenerationResult(BaseModel):
    """Ergebnis eines Generierungslaufs: Erfolg mit Terminen oder Ablehnung mit Grund."""

    success: bool
    slots: list[TimetableSlot] = []
    stats: Optional[TimetableStats] = None
    reason: Optional[str] = None
    elapsed_seconds: float = 0.0


def compute_stats(
    registry: SchoolRegistry,
    slots: list[TimetableSlot],
    config: Optional[GridConfig] = None,
) -> TimetableStats:
    """Berechnet die Kennzahlen aus Stammdaten und Terminen.

    Auslastung = belegte Zellen (Unterrichtstag × Stundenmarke) / alle Zellen.
    """
    config = config or default_editor_config().grid
    cells = {
        s.cell for s in slots
        if s.day_of_week in config.working_days and s.start_time in config.time_marks
    }
    capacity = len(config.working_days) * len(config.time_marks)
    utilization = round(100.0 * len(cells) / capacity, 1) if capacity else 0.0
    return TimetableStats(
        total_courses=len(registry.courses),
        total_teachers=len(registry.teachers),
        total_classrooms=len(registry.classrooms),
        total_students=len(registry.students),
        utilization_rate=utilization,
        conflict_count=detect_conflicts(slots).conflict_count,
    )


class TimetableGenerator:
    """Simulierte Generierung.

    Verwendung:
        generator = TimetableGenerator(config)
        result = generator.generate(registry)
    """

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or default_editor_config()
        gen = self.config.generation
        self.rng = rng or random.Random(gen.seed)

    def generate(self, registry: SchoolRegistry) -> GenerationResult:
        """Führt einen Generierungslauf durch.

        Voraussetzung: mindestens eine Lehrkraft, Veranstaltung und ein Raum.
        """
        if not registry.is_complete:
            reason = (
                "Fehlende Daten: Bitte mindestens eine Lehrkraft, eine "
                "Veranstaltung und einen Raum anlegen."
            )
            logger.warning(reason)
            return GenerationResult(success=False, reason=reason)

        gen = self.config.generation
        t0 = time.time()
        if gen.delay_seconds > 0:
            time.sleep(gen.delay_seconds)

        if self.rng.random() >= gen.success_rate:
            elapsed = time.time() - t0
            logger.warning(f"Generierung fehlgeschlagen nach {elapsed:.1f}s")
            return GenerationResult(
                success=False, reason=FAILURE_REASON, elapsed_seconds=elapsed,
            )

        from data.fake_data import demo_slots
        slots = compute_conflicts(demo_slots(), registry)
        stats = compute_stats(registry, slots, self.config.grid)
        elapsed = time.time() - t0
        logger.info(
            f"Generierung erfolgreich: {len(slots)} Termine in {elapsed:.1f}s"
        )
        return GenerationResult(
            success=True, slots=slots, stats=stats, elapsed_seconds=elapsed,
        )
