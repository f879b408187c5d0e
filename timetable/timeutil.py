"""Hilfsfunktionen für Uhrzeiten im Format "HH:MM"."""

import re

_TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")


def parse_time(value: str) -> int:
    """Wandelt "HH:MM" in Minuten seit Mitternacht um.

    Raises:
        ValueError: wenn der Wert keine gültige 24h-Uhrzeit ist.
    """
    match = _TIME_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Ungültige Uhrzeit {value!r} (erwartet HH:MM)")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_minutes(minutes: int) -> str:
    """Minuten seit Mitternacht → "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def intervals_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
    """Halboffene Intervalle [start, end) überlappen sich."""
    return start1 < end2 and start2 < end1


def duration_minutes(start_time: str, end_time: str) -> int:
    """Dauer zwischen zwei Uhrzeiten in Minuten (kann ≤ 0 sein)."""
    return parse_time(end_time) - parse_time(start_time)
