"""Fehlertypen des Stundenplan-Kerns.

Kern-Operationen geben Fehler als Werte zurück (TimetableError in
MutationResult bzw. ConflictReport). Wer lieber mit Exceptions arbeitet,
nutzt MutationResult.raise_for_error().
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ErrorKind(str, Enum):
    UNRESOLVED_REFERENCE = "unresolved_reference"
    NOT_FOUND = "not_found"
    CELL_OCCUPIED = "cell_occupied"
    INVALID_TIME_FORMAT = "invalid_time_format"
    INVALID_CELL = "invalid_cell"


class TimetableError(BaseModel):
    """Ein typisierter, behebbarer Fehler einer Kern-Operation."""

    kind: ErrorKind
    message: str
    slot_id: Optional[str] = None

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class TimetableOperationError(Exception):
    """Exception-Form eines TimetableError (für CLI und Aufrufer ohne Result-Handling)."""

    def __init__(self, error: TimetableError) -> None:
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind
