"""Tests für die Bearbeitungssitzung (TimetableEditor)."""

import pytest

from data.fake_data import demo_registry, demo_slots
from models.timetable_slot import SlotDraft
from timetable.editor import TimetableEditor
from timetable.errors import ErrorKind


@pytest.fixture
def editor():
    return TimetableEditor(demo_registry(), demo_slots())


def _conflicting_draft() -> SlotDraft:
    """Prof. Chen (2) Mo 10:00–11:00, überlappt mit Termin 1 (09:00–10:30)."""
    return SlotDraft(
        course_id="2", teacher_id="2", classroom_id="3",
        day_of_week=0, start_time="10:00", end_time="11:00",
    )


class TestEditor:
    def test_initial_state(self, editor):
        assert len(editor) == 2
        assert editor.get("1").course_code == "CS201"
        assert editor.get("fehlt") is None
        assert editor.report().is_clean
        assert repr(editor) == "TimetableEditor(2 slots)"

    def test_add_recomputes_conflicts(self, editor):
        """Nach dem Anlegen tragen beide Termine den Lehrkraft-Konflikt."""
        result = editor.add(_conflicting_draft())
        assert result.ok
        assert len(editor) == 3
        assert {c.type for c in editor.get("1").conflicts} == {"teacher"}
        assert {c.type for c in result.slot.conflicts} == {"teacher"}
        assert editor.report().conflict_count == 1

    def test_move_resolves_conflict(self, editor):
        added = editor.add(_conflicting_draft())
        result = editor.move(added.slot_id, 3, "10:00")
        assert result.ok
        assert editor.report().is_clean
        assert all(not s.conflicts for s in editor.slots)

    def test_delete_resolves_conflict(self, editor):
        added = editor.add(_conflicting_draft())
        editor.delete(added.slot_id)
        assert len(editor) == 2
        assert not editor.get("1").conflicts

    def test_failure_leaves_state(self, editor):
        before = editor.slots
        result = editor.move("1", 2, "11:00")
        assert result.error.kind == ErrorKind.CELL_OCCUPIED
        assert editor.slots == before

    def test_update(self, editor):
        slot = editor.get("2")
        result = editor.update(slot.model_copy(update={"classroom_id": "3"}))
        assert result.ok
        assert editor.get("2").classroom_name == "Seminar Hall C301"

    def test_slots_is_copy(self, editor):
        editor.slots.clear()
        assert len(editor) == 2

    def test_grid(self, editor):
        grid = editor.grid()
        assert grid[(0, "09:00")].id == "1"
        assert grid[(2, "11:00")].id == "2"
