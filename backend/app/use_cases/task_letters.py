"""Task letter use-cases used by task letter router endpoints."""
from __future__ import annotations

import logging
from datetime import datetime
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain_errors import (
    duplicate_register_number,
    persistence_failure,
    task_letter_not_found,
)
from ..models import TaskLetter
from ..schemas import TaskLetterCreate
from ..services.document_export import ExportTarget, build_export_target
from ..services.task_letter_rules import (
    OfficialCompletion,
    merge_official_details,
    merge_update,
    now_utc,
    validate_create,
    validate_update,
)

logger = logging.getLogger(__name__)


def _get_task_letter_or_404(*, db: Session, task_letter_id: int) -> TaskLetter:
    task_letter = db.query(TaskLetter).filter(TaskLetter.id == task_letter_id).first()
    if not task_letter:
        raise task_letter_not_found(task_letter_id)
    return task_letter


def _register_numbers_in_use(
    *,
    db: Session,
    register_number: str,
    exclude_id: int | None = None,
) -> set[str]:
    query = db.query(TaskLetter).filter(TaskLetter.register_number == register_number)
    if exclude_id is not None:
        query = query.filter(TaskLetter.id != exclude_id)
    clash = query.first()
    return {clash.register_number} if clash else set()


def _commit(*, db: Session, operation: str, register_number: str | None = None) -> None:
    """Commit, translating store failures into domain errors after rollback."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # The unique constraint is the final word when two writers race on the same number.
        if register_number is not None and "register_number" in str(exc.orig):
            logger.warning("task_letter.%s register_number=%s lost uniqueness race", operation, register_number)
            raise duplicate_register_number(register_number) from exc
        logger.exception("Failed to %s task letter", operation)
        raise persistence_failure(operation) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to %s task letter", operation)
        raise persistence_failure(operation) from exc


def create_task_letter_use_case(
    *,
    db: Session,
    payload: TaskLetterCreate,
    at: datetime | None = None,
) -> TaskLetter:
    """Create a letter; official completion fields start empty."""
    validate_create(
        payload,
        _register_numbers_in_use(db=db, register_number=payload.register_number),
    )

    ts = at or now_utc()
    task_letter = TaskLetter(
        **payload.model_dump(),
        arrival_date=None,
        return_date=None,
        ticket_taken=None,
        official_notes=None,
        created_at=ts,
        updated_at=ts,
    )
    db.add(task_letter)
    _commit(db=db, operation="create", register_number=payload.register_number)
    db.refresh(task_letter)

    logger.info("task_letter.created id=%s register_number=%s", task_letter.id, task_letter.register_number)
    return task_letter


def get_task_letter_use_case(*, db: Session, task_letter_id: int) -> TaskLetter | None:
    """Return the letter or None; a missing id is not an error here."""
    return db.query(TaskLetter).filter(TaskLetter.id == task_letter_id).first()


def list_task_letters_use_case(*, db: Session) -> list[TaskLetter]:
    """All letters, newest first."""
    return (
        db.query(TaskLetter)
        .order_by(TaskLetter.created_at.desc(), TaskLetter.id.desc())
        .all()
    )


def update_task_letter_use_case(
    *,
    db: Session,
    task_letter_id: int,
    patch: Mapping[str, Any],
    at: datetime | None = None,
) -> TaskLetter:
    """Apply a partial update to core (and optionally official) fields."""
    task_letter = _get_task_letter_or_404(db=db, task_letter_id=task_letter_id)

    register_number = patch.get("register_number")
    others: set[str] = set()
    if register_number is not None and register_number != task_letter.register_number:
        others = _register_numbers_in_use(
            db=db,
            register_number=register_number,
            exclude_id=task_letter.id,
        )

    validate_update(task_letter, patch, others, task_letter_id=task_letter_id)
    merge_update(task_letter, patch, at=at)
    _commit(db=db, operation="update", register_number=register_number)
    db.refresh(task_letter)

    logger.info("task_letter.updated id=%s fields=%s", task_letter.id, ",".join(sorted(patch)))
    return task_letter


def update_official_details_use_case(
    *,
    db: Session,
    task_letter_id: int,
    completion: OfficialCompletion,
    at: datetime | None = None,
) -> TaskLetter:
    """Record the destination official's completion details."""
    task_letter = _get_task_letter_or_404(db=db, task_letter_id=task_letter_id)

    merge_official_details(task_letter, completion, at=at)
    _commit(db=db, operation="update_official_details")
    db.refresh(task_letter)

    logger.info("task_letter.official_details_updated id=%s", task_letter.id)
    return task_letter


def delete_task_letter_use_case(*, db: Session, task_letter_id: int) -> bool:
    """Hard delete; returns False when there was nothing to delete."""
    deleted = (
        db.query(TaskLetter)
        .filter(TaskLetter.id == task_letter_id)
        .delete(synchronize_session=False)
    )
    _commit(db=db, operation="delete")

    if deleted:
        logger.info("task_letter.deleted id=%s", task_letter_id)
    return deleted > 0


def export_document_use_case(
    *,
    db: Session,
    task_letter_id: int,
    export_format: str,
) -> ExportTarget:
    """Resolve the download name and URL for a letter export."""
    task_letter = _get_task_letter_or_404(db=db, task_letter_id=task_letter_id)
    return build_export_target(task_letter.register_number, export_format)
