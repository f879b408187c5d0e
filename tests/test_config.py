"""Tests für das Konfigurationssystem und die Uhrzeit-Hilfsfunktionen."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import (
    DAY_NAMES,
    FALLBACK_END_TIME,
    TIME_CATALOG,
    default_editor_config,
    default_grid,
)
from config.manager import ConfigManager
from config.schema import EditorConfig, GenerationConfig, GridConfig
from timetable.timeutil import (
    duration_minutes,
    format_minutes,
    intervals_overlap,
    parse_time,
)


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_grid_valid(self):
        """Standard-Raster: 7 Tage, 11 Stundenmarken, Ende 19:00."""
        grid = default_grid()
        assert grid.day_count == 7
        assert grid.day_names[0] == "Montag"
        assert grid.day_names[6] == "Sonntag"
        assert len(grid.time_marks) == 11
        assert grid.time_marks[0] == "08:00"
        assert grid.time_marks[-1] == "18:00"
        assert grid.fallback_end_time == "19:00"
        assert grid.working_days == [0, 1, 2, 3, 4]

    def test_catalog_constants(self):
        assert TIME_CATALOG == [
            "08:00", "09:00", "10:00", "11:00", "12:00", "13:00",
            "14:00", "15:00", "16:00", "17:00", "18:00",
        ]
        assert FALLBACK_END_TIME == "19:00"
        assert len(DAY_NAMES) == 7

    def test_default_editor_config(self):
        config = default_editor_config()
        assert config.institution_name == "Muster-Hochschule"
        assert config.generation.success_rate == 0.7
        assert config.generation.delay_seconds == 3.0
        assert config.generation.seed is None

    def test_next_mark(self):
        """next_mark liefert die folgende Marke, nach 18:00 None."""
        grid = default_grid()
        assert grid.next_mark("08:00") == "09:00"
        assert grid.next_mark("17:00") == "18:00"
        assert grid.next_mark("18:00") is None

    def test_next_mark_unknown_raises(self):
        with pytest.raises(ValueError):
            default_grid().next_mark("08:30")


# ─── VALIDIERUNG ──────────────────────────────────────────────────────────────

class TestGridValidation:
    def test_wrong_number_of_days(self):
        """Weniger als 7 Wochentage → Fehler."""
        with pytest.raises(ValidationError):
            GridConfig(day_names=["Mo", "Di", "Mi", "Do", "Fr"])

    def test_marks_not_ascending(self):
        with pytest.raises(ValidationError):
            GridConfig(time_marks=["09:00", "08:00"])

    def test_marks_duplicate(self):
        with pytest.raises(ValidationError):
            GridConfig(time_marks=["08:00", "08:00"])

    def test_invalid_mark_format(self):
        with pytest.raises(ValidationError):
            GridConfig(time_marks=["8 Uhr"])

    def test_trailing_newline_rejected(self):
        """Zeilenumbruch am Ende ist keine gültige Uhrzeit."""
        with pytest.raises(ValidationError):
            GridConfig(time_marks=["08:00\n", "09:00"])
        with pytest.raises(ValidationError):
            GridConfig(fallback_end_time="19:00\n")

    def test_empty_catalog(self):
        with pytest.raises(ValidationError):
            GridConfig(time_marks=[])

    def test_fallback_before_last_mark(self):
        """Ersatz-Endzeit muss nach der letzten Marke liegen."""
        with pytest.raises(ValidationError):
            GridConfig(fallback_end_time="17:00")

    def test_working_day_out_of_range(self):
        with pytest.raises(ValidationError):
            GridConfig(working_days=[0, 7])

    def test_working_days_sorted_unique(self):
        grid = GridConfig(working_days=[4, 0, 0, 2])
        assert grid.working_days == [0, 2, 4]

    def test_success_rate_bounds(self):
        with pytest.raises(ValidationError):
            GenerationConfig(success_rate=1.5)


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Gespeicherte Config lässt sich identisch wieder laden."""
        mgr = ConfigManager(tmp_path / "editor_config.yaml")
        config = default_editor_config()
        config = config.model_copy(update={"institution_name": "TH Test"})
        path = mgr.save(config)
        assert path.exists()
        loaded = mgr.load()
        assert loaded == config

    def test_saved_file_has_comments(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "editor_config.yaml")
        mgr.save(default_editor_config())
        text = (tmp_path / "editor_config.yaml").read_text(encoding="utf-8")
        assert "Stundenplan-Editor" in text
        assert "Wochenraster" in text
        assert "time_marks" in text

    def test_first_run_check(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "editor_config.yaml")
        assert mgr.first_run_check()
        mgr.save(default_editor_config())
        assert not mgr.first_run_check()

    def test_load_nonexistent_raises(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "editor_config.yaml")
        with pytest.raises(FileNotFoundError):
            mgr.load()

    def test_load_or_default_without_file(self, tmp_path: Path):
        """Ohne Datei wird die Standard-Konfiguration verwendet."""
        mgr = ConfigManager(tmp_path / "fehlt.yaml")
        assert mgr.load_or_default() == default_editor_config()

    def test_invalid_file_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "kaputt.yaml"
        path.write_text("grid:\n  time_marks:\n    - '09:00'\n    - '08:00'\n",
                        encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager(path).load()

    def test_partial_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "teil.yaml"
        path.write_text("institution_name: Teil-Schule\n", encoding="utf-8")
        config = ConfigManager(path).load()
        assert isinstance(config, EditorConfig)
        assert config.institution_name == "Teil-Schule"
        assert config.grid.time_marks == TIME_CATALOG


# ─── UHRZEITEN ────────────────────────────────────────────────────────────────

class TestTimeUtil:
    def test_parse_time(self):
        assert parse_time("00:00") == 0
        assert parse_time("09:30") == 570
        assert parse_time("23:59") == 1439

    @pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "", "abc", None, "09:00\n"])
    def test_parse_time_invalid(self, value):
        with pytest.raises(ValueError):
            parse_time(value)

    def test_format_minutes(self):
        assert format_minutes(570) == "09:30"
        assert format_minutes(0) == "00:00"

    def test_half_open_intervals(self):
        """Aneinandergrenzende Intervalle überlappen nicht."""
        assert intervals_overlap(540, 600, 570, 630)
        assert not intervals_overlap(540, 600, 600, 660)
        assert not intervals_overlap(600, 660, 540, 600)
        assert intervals_overlap(540, 660, 570, 600)

    def test_duration_minutes(self):
        assert duration_minutes("09:00", "10:30") == 90
        assert duration_minutes("10:00", "09:00") == -60
