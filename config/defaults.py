from config.schema import EditorConfig, GenerationConfig, GridConfig


# Wochentage, Montag zuerst (Index = day_of_week)
DAY_NAMES = [
    "Montag", "Dienstag", "Mittwoch", "Donnerstag",
    "Freitag", "Samstag", "Sonntag",
]

DAY_SHORT_NAMES = ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"]

# Fester Katalog der Stundenmarken 08:00 .. 18:00 (11 Marken)
TIME_CATALOG = [f"{hour:02d}:00" for hour in range(8, 19)]

# Endzeit für Stunden, die an der letzten Marke (18:00) beginnen
FALLBACK_END_TIME = "19:00"

DEFAULT_DURATION_MINUTES = 60


def default_grid() -> GridConfig:
    """Standard-Wochenraster.

    Wochentage:  Montag .. Sonntag (0..6)
    Stundenmarken: 08:00, 09:00, ..., 18:00 (stündlich, 11 Marken)
    Ende nach 18:00: 19:00
    Unterrichtstage für die Statistik: Montag .. Freitag
    """
    return GridConfig(
        day_names=list(DAY_NAMES),
        time_marks=list(TIME_CATALOG),
        fallback_end_time=FALLBACK_END_TIME,
        default_duration_minutes=DEFAULT_DURATION_MINUTES,
        working_days=[0, 1, 2, 3, 4],
    )


def default_editor_config() -> EditorConfig:
    """Vollständige Standard-Konfiguration."""
    return EditorConfig(
        institution_name="Muster-Hochschule",
        grid=default_grid(),
        generation=GenerationConfig(),
    )
