"""Error kinds and the success/failure result returned by core operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class ErrorKind(IntEnum):
    """Stable failure codes. Callers branch on these, never on messages."""

    NOT_AUTHORIZED = 100
    INVALID_DATA_HASH = 101
    INVALID_METADATA = 102
    INVALID_LOCATION = 103
    INVALID_CROP_TYPE = 104
    INVALID_CAPTURE_DATE = 105
    INVALID_PRICE = 106
    DATA_ALREADY_EXISTS = 107
    DATA_NOT_FOUND = 108
    NOT_OWNER = 109
    AUTHORITY_NOT_VERIFIED = 110
    INVALID_DATA_TYPE = 111
    INVALID_RESOLUTION = 112
    INVALID_AUTHORITY_CONTRACT = 113
    INVALID_UPDATE_PARAM = 114
    MAX_ENTRIES_EXCEEDED = 115
    INVALID_DATA_FORMAT = 116
    INVALID_COORDINATES = 117
    INVALID_SENSOR_TYPE = 118
    FEE_TRANSFER_FAILED = 119

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``DataAlreadyExists``."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class FeeTransferError(Exception):
    """Raised by a fee sink that cannot move funds."""


@dataclass(frozen=True)
class Result:
    """Outcome of a core operation: either a value or one error kind."""

    ok: bool
    value: Any = None
    error: ErrorKind | None = None

    @classmethod
    def success(cls, value: Any = True) -> "Result":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> "Result":
        return cls(ok=False, error=error)

    def describe(self) -> str:
        if self.ok:
            return f"ok: {self.value}"
        return f"error {int(self.error)} ({self.error.label})"
