"""Domain-level exception primitives with stable machine-readable codes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


TASK_LETTER_NOT_FOUND = "TASK_LETTER_NOT_FOUND"
DUPLICATE_REGISTER_NUMBER = "DUPLICATE_REGISTER_NUMBER"
INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


@dataclass(eq=False)
class DomainError(Exception):
    """Use-case level error with stable code and HTTP mapping."""

    code: str
    http_status: int
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


def task_letter_not_found(task_letter_id: int) -> DomainError:
    return DomainError(
        code=TASK_LETTER_NOT_FOUND,
        http_status=404,
        message="Task letter not found",
        details={"id": task_letter_id},
    )


def duplicate_register_number(register_number: str) -> DomainError:
    return DomainError(
        code=DUPLICATE_REGISTER_NUMBER,
        http_status=409,
        message="Register number already exists",
        details={"register_number": register_number},
    )


def invalid_date_range(message: str, **details: Any) -> DomainError:
    return DomainError(
        code=INVALID_DATE_RANGE,
        http_status=422,
        message=message,
        details={key: value.isoformat() for key, value in details.items()} or None,
    )


def persistence_failure(operation: str) -> DomainError:
    return DomainError(
        code=PERSISTENCE_FAILURE,
        http_status=503,
        message="Failed to persist task letter",
        details={"operation": operation},
    )
