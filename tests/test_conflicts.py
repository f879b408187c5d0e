"""Tests für die Konfliktprüfung (timetable/conflicts.py)."""

import pytest

from models.timetable_slot import ConflictInfo, TimetableSlot
from timetable.conflicts import compute_conflicts, count_conflicts, detect_conflicts
from timetable.errors import ErrorKind


def _make_slot(
    slot_id: str,
    day: int = 0,
    start: str = "09:00",
    end: str = "10:00",
    teacher: str = "T1",
    room: str = "R1",
    groups: tuple = (),
) -> TimetableSlot:
    return TimetableSlot(
        id=slot_id,
        course_id=f"C-{slot_id}",
        course_name=f"Kurs {slot_id}",
        course_code=f"K{slot_id}",
        teacher_id=teacher,
        teacher_name=f"Lehrkraft {teacher}",
        classroom_id=room,
        classroom_name=f"Raum {room}",
        day_of_week=day,
        start_time=start,
        end_time=end,
        duration=60,
        student_groups=list(groups),
    )


def _types(slot: TimetableSlot) -> set[str]:
    return {c.type for c in slot.conflicts}


@pytest.fixture
def s1_s2():
    """S1 Mo 09:00–10:30 und S2 Mo 09:00–10:00, gleiche Lehrkraft, andere Räume."""
    s1 = _make_slot("S1", 0, "09:00", "10:30", teacher="T1", room="R1", groups=["G1"])
    s2 = _make_slot("S2", 0, "09:00", "10:00", teacher="T1", room="R2", groups=["G2"])
    return s1, s2


class TestTeacherConflicts:
    def test_s1_s2_teacher_conflict(self, s1_s2):
        """Beide Termine erhalten genau einen Lehrkraft-Konflikt (error)."""
        s1, s2 = compute_conflicts(s1_s2)
        assert _types(s1) == {"teacher"}
        assert _types(s2) == {"teacher"}
        assert s1.conflicts[0].severity == "error"
        assert s1.conflicts[0].other_slot_id == "S2"
        assert s2.conflicts[0].other_slot_id == "S1"

    def test_message_names_teacher_and_day(self, s1_s2):
        s1, _ = compute_conflicts(s1_s2)
        msg = s1.conflicts[0].message
        assert "Lehrkraft T1" in msg
        assert "Montag" in msg
        assert "KS2" in msg

    def test_symmetry(self):
        """Konflikte sind symmetrisch für alle überlappenden Paare."""
        slots = [
            _make_slot("a", 1, "08:00", "10:00", room="R1"),
            _make_slot("b", 1, "09:00", "11:00", room="R2"),
            _make_slot("c", 1, "09:30", "09:45", room="R3"),
        ]
        result = {s.id: s for s in compute_conflicts(slots)}
        for slot in result.values():
            for info in slot.conflicts:
                other = result[info.other_slot_id]
                assert any(
                    c.type == info.type and c.other_slot_id == slot.id
                    for c in other.conflicts
                )
        assert count_conflicts(slots) == 3


class TestNoConflicts:
    def test_different_days(self):
        slots = [_make_slot("a", 0), _make_slot("b", 1)]
        assert all(not s.conflicts for s in compute_conflicts(slots))

    def test_adjacent_intervals(self):
        """10:00–11:00 schließt an 09:00–10:00 an, überlappt aber nicht."""
        slots = [
            _make_slot("a", 0, "09:00", "10:00"),
            _make_slot("b", 0, "10:00", "11:00"),
        ]
        report = detect_conflicts(slots)
        assert report.is_clean
        assert report.conflict_count == 0

    def test_disjoint_resources(self):
        slots = [
            _make_slot("a", 0, teacher="T1", room="R1", groups=["G1"]),
            _make_slot("b", 0, teacher="T2", room="R2", groups=["G2"]),
        ]
        assert count_conflicts(slots) == 0

    def test_empty(self):
        assert compute_conflicts([]) == []


class TestOtherConflictTypes:
    def test_classroom_conflict(self):
        slots = [
            _make_slot("a", 0, teacher="T1", room="R1"),
            _make_slot("b", 0, teacher="T2", room="R1"),
        ]
        a, b = compute_conflicts(slots)
        assert _types(a) == {"classroom"}
        assert a.conflicts[0].severity == "error"
        assert "Raum R1" in a.conflicts[0].message

    def test_group_conflict_is_warning(self):
        slots = [
            _make_slot("a", 0, teacher="T1", room="R1", groups=["G1", "G2"]),
            _make_slot("b", 0, teacher="T2", room="R2", groups=["G2"]),
        ]
        a, b = compute_conflicts(slots)
        assert _types(a) == {"student_group"}
        assert a.conflicts[0].severity == "warning"
        assert "G2" in a.conflicts[0].message
        assert "G1" not in a.conflicts[0].message

    def test_all_three_types_count_one_pair(self):
        slots = [
            _make_slot("a", 0, groups=["G1"]),
            _make_slot("b", 0, start="09:30", end="10:30", groups=["G1"]),
        ]
        report = detect_conflicts(slots)
        assert report.conflict_count == 1
        assert report.conflicting_pairs == [("a", "b")]
        assert {c.type for c in report.for_slot("a")} == {
            "teacher", "classroom", "student_group",
        }


class TestIdempotence:
    def test_compute_twice_same_result(self, s1_s2):
        once = compute_conflicts(s1_s2)
        twice = compute_conflicts(once)
        assert [s.conflicts for s in once] == [s.conflicts for s in twice]

    def test_stale_conflicts_are_replaced(self):
        """Vorhandene Konflikte der Eingabe werden verworfen."""
        stale = _make_slot("a").model_copy(update={"conflicts": [
            ConflictInfo(type="teacher", message="alt", severity="error"),
        ]})
        (result,) = compute_conflicts([stale])
        assert result.conflicts == []

    def test_input_not_modified(self, s1_s2):
        compute_conflicts(s1_s2)
        assert all(not s.conflicts for s in s1_s2)


class TestInvalidTimes:
    def test_malformed_time_reported_once(self):
        """Fehlerhafte Uhrzeit: Termin übersprungen, einmal gemeldet."""
        slots = [
            _make_slot("ok1", 0, "09:00", "10:00"),
            _make_slot("bad", 0, "9 Uhr", "10:00"),
            _make_slot("ok2", 0, "09:30", "10:30", room="R2"),
        ]
        report = detect_conflicts(slots)
        assert [e.slot_id for e in report.invalid_slots] == ["bad"]
        assert report.invalid_slots[0].kind == ErrorKind.INVALID_TIME_FORMAT
        # Die übrigen Termine werden weiter geprüft
        assert report.conflicting_pairs == [("ok1", "ok2")]
        assert report.for_slot("bad") == []
        assert not report.is_clean

    def test_end_before_start_is_invalid(self):
        report = detect_conflicts([_make_slot("x", 0, "10:00", "09:00")])
        assert report.invalid_slots[0].kind == ErrorKind.INVALID_TIME_FORMAT
        assert report.conflict_count == 0

    def test_trailing_newline_is_invalid(self):
        """Uhrzeit mit Zeilenumbruch am Ende ist ungültig und wird nicht geprüft."""
        slots = [
            _make_slot("nl", 0, "09:00\n", "10:00"),
            _make_slot("ok", 0, "09:00", "10:00", room="R2"),
        ]
        report = detect_conflicts(slots)
        assert [e.slot_id for e in report.invalid_slots] == ["nl"]
        assert report.conflicting_pairs == []

    def test_zero_length_is_invalid(self):
        report = detect_conflicts([_make_slot("x", 0, "10:00", "10:00")])
        assert len(report.invalid_slots) == 1


class TestAvailability:
    def _make_registry(self, unavailable):
        from models.registry import SchoolRegistry
        from models.teacher import Teacher

        registry = SchoolRegistry()
        registry.add_teacher(Teacher(id="T1", name="Lehrkraft T1", unavailable=unavailable))
        return registry

    def test_slot_in_blocked_cell(self):
        """Termin in gesperrter Zelle → availability-Warnung ohne Gegenstück."""
        registry = self._make_registry([(0, "09:00")])
        (slot,) = compute_conflicts([_make_slot("a", 0, "09:00", "10:00")], registry)
        assert _types(slot) == {"availability"}
        info = slot.conflicts[0]
        assert info.severity == "warning"
        assert info.other_slot_id is None
        assert "nicht verfügbar" in info.message

    def test_report_not_clean_but_no_pairs(self):
        registry = self._make_registry([(0, "09:00")])
        report = detect_conflicts([_make_slot("a", 0, "09:00", "10:00")], registry)
        assert report.conflict_count == 0
        assert not report.is_clean

    def test_other_cell_is_fine(self):
        registry = self._make_registry([(4, "16:00")])
        report = detect_conflicts([_make_slot("a", 0, "09:00", "10:00")], registry)
        assert report.is_clean

    def test_without_registry_not_checked(self):
        (slot,) = compute_conflicts([_make_slot("a", 0, "09:00", "10:00")])
        assert slot.conflicts == []
