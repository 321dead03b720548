"""
Error taxonomy and the success/failure result returned by every board operation.

ValidationError  - bad or missing input, client-correctable (400)
NotFoundError    - lookup by id yielded nothing (404)
PersistenceError - the record store failed for any reason (500)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class TaskflowError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(TaskflowError):
    status_code = 400


class NotFoundError(TaskflowError):
    status_code = 404


class PersistenceError(TaskflowError):
    status_code = 500


def error_for_status(status_code: int, message: str) -> TaskflowError:
    """Map an HTTP error status back onto the taxonomy (used by the API client)."""
    if status_code in (400, 422):
        return ValidationError(message)
    if status_code == 404:
        return NotFoundError(message)
    return PersistenceError(message)


@dataclass(frozen=True)
class Result:
    value: Any = None
    error: Optional[TaskflowError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, error: TaskflowError) -> "Result":
        return cls(error=error)
