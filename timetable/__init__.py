"""Stundenplan-Kern: Rasterindex, Konfliktprüfung und Änderungsprotokoll."""

from .errors import ErrorKind, TimetableError, TimetableOperationError
from .grid import build_grid, cell_occupant, compute_grid, find_cell_collisions
from .conflicts import ConflictReport, compute_conflicts, count_conflicts, detect_conflicts
from .mutations import MutationResult, add_slot, delete_slot, move_slot, update_slot
from .editor import TimetableEditor
from .generation import GenerationResult, TimetableGenerator, TimetableStats, compute_stats

__all__ = [
    "ErrorKind",
    "TimetableError",
    "TimetableOperationError",
    "build_grid",
    "cell_occupant",
    "compute_grid",
    "find_cell_collisions",
    "ConflictReport",
    "compute_conflicts",
    "count_conflicts",
    "detect_conflicts",
    "MutationResult",
    "add_slot",
    "delete_slot",
    "move_slot",
    "update_slot",
    "TimetableEditor",
    "GenerationResult",
    "TimetableGenerator",
    "TimetableStats",
    "compute_stats",
]
