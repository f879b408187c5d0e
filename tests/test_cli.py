"""Smoke-Tests für die Kommandozeile (click CliRunner)."""

import json

import pytest
from click.testing import CliRunner

from main import cli
from models.timetable_data import TimetableData


@pytest.fixture
def paths(tmp_path):
    return tmp_path / "timetable.json", tmp_path / "editor_config.yaml"


def _run(paths, *args):
    data_path, config_path = paths
    runner = CliRunner()
    return runner.invoke(
        cli, ["--data", str(data_path), "--config", str(config_path), *args], obj={},
    )


def _load(paths) -> TimetableData:
    return TimetableData.load_json(paths[0])


class TestCli:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "move" in result.output

    def test_show_without_data(self, paths):
        result = _run(paths, "show")
        assert result.exit_code == 1
        assert "Keine Datendatei" in result.output

    def test_config_init_and_show(self, paths):
        result = _run(paths, "config", "init")
        assert result.exit_code == 0
        assert paths[1].exists()
        result = _run(paths, "config", "show")
        assert result.exit_code == 0
        assert "Muster-Hochschule" in result.output

    def test_demo_and_show(self, paths):
        assert _run(paths, "demo").exit_code == 0
        assert len(_load(paths).slots) == 2
        result = _run(paths, "show")
        assert result.exit_code == 0
        assert "Demo-Stundenplan" in result.output

    def test_show_teacher_view(self, paths):
        _run(paths, "demo")
        result = _run(paths, "show", "--role", "teacher", "--user", "3")
        assert result.exit_code == 0
        assert "Keine Termine" in result.output

    def test_move_and_conflicts(self, paths):
        _run(paths, "demo")
        result = _run(paths, "move", "1", "Di", "09:00")
        assert result.exit_code == 0, result.output
        slot = next(s for s in _load(paths).slots if s.id == "1")
        assert (slot.day_of_week, slot.start_time, slot.end_time) == (1, "09:00", "10:00")
        assert _run(paths, "conflicts").exit_code == 0

    def test_move_onto_occupied_cell(self, paths):
        _run(paths, "demo")
        before = paths[0].read_text(encoding="utf-8")
        result = _run(paths, "move", "1", "2", "11:00")
        assert result.exit_code == 1
        assert "Nicht möglich" in result.output
        assert paths[0].read_text(encoding="utf-8") == before

    def test_add_conflicting_slot(self, paths):
        """Neuer Termin von Prof. Chen Mo 10:00 erzeugt einen Konflikt."""
        _run(paths, "demo")
        result = _run(paths, "add", "--course", "2", "--teacher", "2",
                      "--classroom", "3", "--day", "Mo", "--start", "10:00")
        assert result.exit_code == 0, result.output
        data = _load(paths)
        assert len(data.slots) == 3
        assert any(s.conflicts for s in data.slots)
        assert _run(paths, "conflicts").exit_code == 1

    def test_add_unknown_teacher(self, paths):
        _run(paths, "demo")
        result = _run(paths, "add", "--course", "1", "--teacher", "99",
                      "--classroom", "1", "--day", "1", "--start", "08:00")
        assert result.exit_code == 1
        assert len(_load(paths).slots) == 2

    def test_update_and_delete(self, paths):
        _run(paths, "demo")
        result = _run(paths, "update", "2", "--teacher", "3")
        assert result.exit_code == 0, result.output
        slot = next(s for s in _load(paths).slots if s.id == "2")
        assert slot.teacher_name == "Dr. Emily Davis"

        assert _run(paths, "delete", "2").exit_code == 0
        assert [s.id for s in _load(paths).slots] == ["1"]
        assert _run(paths, "delete", "2").exit_code == 1

    def test_update_start_derives_end(self, paths):
        """--start ohne --end: Ende = nächste Stundenmarke, Dauer passend."""
        _run(paths, "demo")
        result = _run(paths, "update", "1", "--start", "11:00")
        assert result.exit_code == 0, result.output
        slot = next(s for s in _load(paths).slots if s.id == "1")
        assert (slot.start_time, slot.end_time, slot.duration) == ("11:00", "12:00", 60)

    def test_update_start_off_catalog_needs_end(self, paths):
        _run(paths, "demo")
        result = _run(paths, "update", "1", "--start", "11:30")
        assert result.exit_code == 2
        assert _load(paths).slots[0].start_time == "09:00"

    def test_generate(self, paths):
        _run(paths, "demo")
        paths[1].write_text(
            "generation:\n  delay_seconds: 0.0\n  success_rate: 1.0\n", encoding="utf-8",
        )
        result = _run(paths, "generate")
        assert result.exit_code == 0, result.output
        assert "generiert" in result.output

    def test_stats_and_check(self, paths):
        _run(paths, "demo")
        result = _run(paths, "stats")
        assert result.exit_code == 0
        assert "Auslastung" in result.output
        assert _run(paths, "check").exit_code == 0

    def test_diff_json(self, paths, tmp_path):
        _run(paths, "demo")
        old = tmp_path / "alt.json"
        old.write_text(paths[0].read_text(encoding="utf-8"), encoding="utf-8")
        _run(paths, "delete", "1")
        result = CliRunner().invoke(cli, ["diff", str(old), str(paths[0]), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["slots_removed"] == ["1"]
