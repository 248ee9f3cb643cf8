"""Pydantic schemas for API."""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Literal, Optional
from datetime import date, datetime
from decimal import Decimal


# Core fields may be omitted from a patch but never sent as explicit null.
CORE_PATCH_FIELDS = (
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


# Task letter schemas
class TaskLetterCreate(BaseModel):
    register_number: str = Field(min_length=1)
    title: str = Field(min_length=1)
    recipient_name: str = Field(min_length=1)
    recipient_position: str = Field(min_length=1)
    destination_place: str = Field(min_length=1)
    purpose: str = Field(min_length=1)
    start_date: date
    end_date: date
    transportation: str = Field(min_length=1)
    advance_money: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    signatory_name: str = Field(min_length=1)
    signatory_position: str = Field(min_length=1)
    creation_place: str = Field(min_length=1)
    creation_date: date


class TaskLetterUpdate(BaseModel):
    """Partial update; only keys present in the request body are applied."""
    register_number: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = Field(None, min_length=1)
    recipient_name: Optional[str] = Field(None, min_length=1)
    recipient_position: Optional[str] = Field(None, min_length=1)
    destination_place: Optional[str] = Field(None, min_length=1)
    purpose: Optional[str] = Field(None, min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    transportation: Optional[str] = Field(None, min_length=1)
    advance_money: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    signatory_name: Optional[str] = Field(None, min_length=1)
    signatory_position: Optional[str] = Field(None, min_length=1)
    creation_place: Optional[str] = Field(None, min_length=1)
    creation_date: Optional[date] = None
    arrival_date: Optional[date] = None
    return_date: Optional[date] = None
    ticket_taken: Optional[bool] = None
    official_notes: Optional[str] = None

    @field_validator(*CORE_PATCH_FIELDS)
    @classmethod
    def _reject_explicit_null(cls, value):
        if value is None:
            raise ValueError("field may be omitted but not set to null")
        return value

    def to_patch(self) -> dict:
        return self.model_dump(exclude_unset=True)


class OfficialDetailsUpdate(BaseModel):
    """Completion details from the destination official; every key is required, null clears it."""
    arrival_date: Optional[date]
    return_date: Optional[date]
    ticket_taken: Optional[bool]
    official_notes: Optional[str]


class TaskLetterResponse(BaseModel):
    id: int
    register_number: str
    title: str
    recipient_name: str
    recipient_position: str
    destination_place: str
    purpose: str
    start_date: date
    end_date: date
    transportation: str
    advance_money: Decimal
    signatory_name: str
    signatory_position: str
    creation_place: str
    creation_date: date
    arrival_date: Optional[date] = None
    return_date: Optional[date] = None
    ticket_taken: Optional[bool] = None
    official_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class DeleteResult(BaseModel):
    success: bool


# Export schemas
class ExportRequest(BaseModel):
    format: Literal["pdf", "docx"]


class ExportResponse(BaseModel):
    file_url: str
    filename: str
