"""Task letter validation and merge rules (no database access)."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from ..domain_errors import (
    duplicate_register_number,
    invalid_date_range,
    task_letter_not_found,
)


CORE_FIELDS: tuple[str, ...] = (
    "register_number",
    "title",
    "recipient_name",
    "recipient_position",
    "destination_place",
    "purpose",
    "start_date",
    "end_date",
    "transportation",
    "advance_money",
    "signatory_name",
    "signatory_position",
    "creation_place",
    "creation_date",
)
OFFICIAL_FIELDS: tuple[str, ...] = (
    "arrival_date",
    "return_date",
    "ticket_taken",
    "official_notes",
)
_PATCHABLE_FIELDS: frozenset[str] = frozenset(CORE_FIELDS + OFFICIAL_FIELDS)


@dataclass(frozen=True)
class OfficialCompletion:
    """Completion details recorded by the official at the destination.

    A value with every member ``None`` means "explicitly cleared"; a letter
    nobody has annotated yet has no completion at all (see
    :func:`official_completion_of`).
    """

    arrival_date: date | None = None
    return_date: date | None = None
    ticket_taken: bool | None = None
    notes: str | None = None

    def as_columns(self) -> dict[str, Any]:
        return {
            "arrival_date": self.arrival_date,
            "return_date": self.return_date,
            "ticket_taken": self.ticket_taken,
            "official_notes": self.notes,
        }


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def official_completion_of(letter: Any) -> OfficialCompletion | None:
    values = {field: getattr(letter, field, None) for field in OFFICIAL_FIELDS}
    if all(value is None for value in values.values()):
        return None
    return OfficialCompletion(
        arrival_date=values["arrival_date"],
        return_date=values["return_date"],
        ticket_taken=values["ticket_taken"],
        notes=values["official_notes"],
    )


def ensure_end_after_start(*, start_date: date, end_date: date) -> None:
    if end_date <= start_date:
        raise invalid_date_range(
            "End date must be after start date",
            start_date=start_date,
            end_date=end_date,
        )


def validate_create(payload: Any, existing_register_numbers: Collection[str]) -> None:
    """Reject a new letter whose register number is taken or whose dates are inverted."""
    if payload.register_number in existing_register_numbers:
        raise duplicate_register_number(payload.register_number)
    ensure_end_after_start(start_date=payload.start_date, end_date=payload.end_date)


def validate_update(
    current: Any | None,
    patch: Mapping[str, Any],
    other_register_numbers: Collection[str],
    *,
    task_letter_id: int | None = None,
) -> None:
    """Check a partial update against the stored letter.

    Re-sending the letter's own register number is always accepted, even
    when ``other_register_numbers`` happens to contain it.

    When only one of the two dates is patched it is compared against the
    stored value of the other one. The check is one-sided:
    a lone ``start_date`` is compared with the current ``end_date`` and a
    lone ``end_date`` with the current ``start_date``.
    """
    if current is None:
        raise task_letter_not_found(task_letter_id)

    register_number = patch.get("register_number")
    if (
        register_number is not None
        and register_number != current.register_number
        and register_number in other_register_numbers
    ):
        raise duplicate_register_number(register_number)

    new_start = patch.get("start_date")
    new_end = patch.get("end_date")

    if new_start is not None and new_end is not None:
        ensure_end_after_start(start_date=new_start, end_date=new_end)
    elif new_start is not None:
        if new_start >= current.end_date:
            raise invalid_date_range(
                "Start date must be before end date",
                start_date=new_start,
                end_date=current.end_date,
            )
    elif new_end is not None:
        if new_end <= current.start_date:
            raise invalid_date_range(
                "End date must be after start date",
                start_date=current.start_date,
                end_date=new_end,
            )


def merge_update(current: Any, patch: Mapping[str, Any], *, at: datetime | None = None) -> Any:
    """Overwrite only the patched fields and bump ``updated_at``."""
    for field, value in patch.items():
        if field in _PATCHABLE_FIELDS:
            setattr(current, field, value)
    current.updated_at = at or now_utc()
    return current


def merge_official_details(
    current: Any,
    completion: OfficialCompletion,
    *,
    at: datetime | None = None,
) -> Any:
    """Replace all four official fields, including with ``None``; core fields are left alone."""
    for field, value in completion.as_columns().items():
        setattr(current, field, value)
    current.updated_at = at or now_utc()
    return current
