"""Task letter endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas import (
    DeleteResult,
    ExportRequest,
    ExportResponse,
    OfficialDetailsUpdate,
    TaskLetterCreate,
    TaskLetterResponse,
    TaskLetterUpdate,
)
from ..services.task_letter_rules import OfficialCompletion
from ..use_cases.task_letters import (
    create_task_letter_use_case,
    delete_task_letter_use_case,
    export_document_use_case,
    get_task_letter_use_case,
    list_task_letters_use_case,
    update_official_details_use_case,
    update_task_letter_use_case,
)

router = APIRouter(prefix="/task-letters", tags=["task-letters"])


@router.post("", response_model=TaskLetterResponse, status_code=status.HTTP_201_CREATED)
def create_task_letter(
    payload: TaskLetterCreate,
    db: Session = Depends(get_db),
):
    """Create task letter."""
    return create_task_letter_use_case(db=db, payload=payload)


@router.get("", response_model=list[TaskLetterResponse])
def list_task_letters(db: Session = Depends(get_db)):
    """List all task letters, newest first."""
    return list_task_letters_use_case(db=db)


@router.get("/{task_letter_id}", response_model=Optional[TaskLetterResponse])
def get_task_letter(
    task_letter_id: int,
    db: Session = Depends(get_db),
):
    """Get single task letter by ID (null when it does not exist)."""
    return get_task_letter_use_case(db=db, task_letter_id=task_letter_id)


@router.patch("/{task_letter_id}", response_model=TaskLetterResponse)
def update_task_letter(
    task_letter_id: int,
    payload: TaskLetterUpdate,
    db: Session = Depends(get_db),
):
    """Partially update task letter."""
    return update_task_letter_use_case(
        db=db,
        task_letter_id=task_letter_id,
        patch=payload.to_patch(),
    )


@router.put("/{task_letter_id}/official-details", response_model=TaskLetterResponse)
def update_official_details(
    task_letter_id: int,
    payload: OfficialDetailsUpdate,
    db: Session = Depends(get_db),
):
    """Record completion details filled in by the destination official."""
    completion = OfficialCompletion(
        arrival_date=payload.arrival_date,
        return_date=payload.return_date,
        ticket_taken=payload.ticket_taken,
        notes=payload.official_notes,
    )
    return update_official_details_use_case(
        db=db,
        task_letter_id=task_letter_id,
        completion=completion,
    )


@router.delete("/{task_letter_id}", response_model=DeleteResult)
def delete_task_letter(
    task_letter_id: int,
    db: Session = Depends(get_db),
):
    """Delete task letter; success is false when nothing was deleted."""
    return DeleteResult(success=delete_task_letter_use_case(db=db, task_letter_id=task_letter_id))


@router.post("/{task_letter_id}/export", response_model=ExportResponse)
def export_document(
    task_letter_id: int,
    payload: ExportRequest,
    db: Session = Depends(get_db),
):
    """Resolve export file name and URL (document rendering not implemented yet)."""
    target = export_document_use_case(
        db=db,
        task_letter_id=task_letter_id,
        export_format=payload.format,
    )
    return ExportResponse(file_url=target.file_url, filename=target.filename)
