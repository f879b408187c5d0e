"""Vergleich zweier Stundenpläne (Diff / Changelog).

Gibt strukturierte Unterschiede zurück, die als Rich-Tabelle oder JSON
ausgegeben werden können. Termine werden über ihre stabile ID zugeordnet.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.timetable_data import TimetableData


@dataclass
class SlotChange:
    """Ein Termin, der in beiden Plänen existiert, aber verändert wurde."""

    slot_id: str
    course_code: str
    changes: list[str] = field(default_factory=list)


@dataclass
class SlotDiff:
    """Vollständiger Diff zwischen zwei Stundenplänen."""

    slots_added: list[str] = field(default_factory=list)
    slots_removed: list[str] = field(default_factory=list)
    slots_moved: list[SlotChange] = field(default_factory=list)
    slots_reassigned: list[SlotChange] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Gibt True zurück wenn kein Unterschied gefunden wurde."""
        return (
            not self.slots_added
            and not self.slots_removed
            and not self.slots_moved
            and not self.slots_reassigned
        )

    def to_dict(self) -> dict:
        """Serialisiert den Diff als Dictionary (für JSON-Ausgabe)."""

        def _change(c: SlotChange) -> dict:
            return {"slot_id": c.slot_id, "course_code": c.course_code, "changes": c.changes}

        return {
            "slots_added": self.slots_added,
            "slots_removed": self.slots_removed,
            "slots_moved": [_change(c) for c in self.slots_moved],
            "slots_reassigned": [_change(c) for c in self.slots_reassigned],
        }

    def to_json(self, indent: int = 2) -> str:
        """Gibt den Diff als JSON-String zurück."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


# Felder, deren Änderung als Verschiebung gilt
_TIME_FIELDS = ("day_of_week", "start_time", "end_time")
# Felder, deren Änderung als Umbesetzung gilt
_ASSIGNMENT_FIELDS = ("course_id", "teacher_id", "classroom_id", "student_groups")


def diff_timetables(a: "TimetableData", b: "TimetableData") -> SlotDiff:
    """Vergleicht zwei Stundenpläne und gibt einen strukturierten Diff zurück.

    Vergleicht:
    - Termine (hinzugefügt / entfernt)
    - Verschiebungen (Tag, Start, Ende)
    - Umbesetzungen (Veranstaltung, Lehrkraft, Raum, Gruppen)

    Args:
        a: Erster Stundenplan (Basis / alt).
        b: Zweiter Stundenplan (neu).

    Returns:
        SlotDiff mit allen gefundenen Unterschieden.
    """
    diff = SlotDiff()

    slots_a = {s.id: s for s in a.slots}
    slots_b = {s.id: s for s in b.slots}
    diff.slots_added = sorted(set(slots_b) - set(slots_a))
    diff.slots_removed = sorted(set(slots_a) - set(slots_b))

    for slot_id in sorted(set(slots_a) & set(slots_b)):
        old, new = slots_a[slot_id], slots_b[slot_id]

        moved = [
            f"{name}: {getattr(old, name)!r} → {getattr(new, name)!r}"
            for name in _TIME_FIELDS
            if getattr(old, name) != getattr(new, name)
        ]
        if moved:
            diff.slots_moved.append(SlotChange(slot_id, new.course_code, moved))

        reassigned = [
            f"{name}: {getattr(old, name)!r} → {getattr(new, name)!r}"
            for name in _ASSIGNMENT_FIELDS
            if getattr(old, name) != getattr(new, name)
        ]
        if reassigned:
            diff.slots_reassigned.append(SlotChange(slot_id, new.course_code, reassigned))

    return diff
