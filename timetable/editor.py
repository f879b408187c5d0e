"""TimetableEditor – hält eine Terminliste und wendet Änderungen darauf an.

Jede erfolgreiche Änderung ersetzt die Liste vollständig und berechnet die
Konflikte neu; abgelehnte Änderungen lassen den Zustand unberührt.
"""

from typing import Iterable, Optional

from config.defaults import default_grid
from config.schema import GridConfig
from models.registry import SchoolRegistry
from models.timetable_slot import SlotDraft, TimetableSlot
from timetable.conflicts import ConflictReport, compute_conflicts, detect_conflicts
from timetable.grid import Grid, build_grid
from timetable.mutations import (
    MutationResult,
    add_slot,
    delete_slot,
    move_slot,
    update_slot,
)


class TimetableEditor:
    """Bearbeitungssitzung über einer Terminliste.

    Verwendung:
        editor = TimetableEditor(registry, slots)
        result = editor.move(slot_id, 1, "09:00")
        if not result.ok:
            print(result.error.message)
    """

    def __init__(
        self,
        registry: SchoolRegistry,
        slots: Iterable[TimetableSlot] = (),
        config: Optional[GridConfig] = None,
    ) -> None:
        self.registry = registry
        self.config = config or default_grid()
        self._slots: list[TimetableSlot] = compute_conflicts(slots, registry)

    @property
    def slots(self) -> list[TimetableSlot]:
        """Aktuelle Termine mit berechneten Konflikten (Kopie der Liste)."""
        return list(self._slots)

    def get(self, slot_id: str) -> Optional[TimetableSlot]:
        return next((s for s in self._slots if s.id == slot_id), None)

    def grid(self) -> Grid:
        return build_grid(self._slots)

    def report(self) -> ConflictReport:
        return detect_conflicts(self._slots, self.registry)

    # ─── Änderungen ───

    def add(self, draft: SlotDraft) -> MutationResult:
        return self._commit(add_slot(self._slots, draft, self.registry, self.config))

    def update(self, updated: TimetableSlot) -> MutationResult:
        return self._commit(update_slot(self._slots, updated, self.registry))

    def delete(self, slot_id: str) -> MutationResult:
        return self._commit(delete_slot(self._slots, slot_id))

    def move(self, slot_id: str, new_day: int, new_start_time: str) -> MutationResult:
        return self._commit(
            move_slot(self._slots, slot_id, new_day, new_start_time, self.config)
        )

    def _commit(self, result: MutationResult) -> MutationResult:
        if not result.ok:
            return result
        self._slots = compute_conflicts(result.slots, self.registry)
        return result.model_copy(update={"slots": list(self._slots)})

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"TimetableEditor({len(self._slots)} slots)"
