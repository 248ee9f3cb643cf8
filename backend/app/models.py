"""SQLAlchemy models."""
from sqlalchemy import (
    Boolean, Column, Integer, Date, DateTime, Numeric, Text,
    CheckConstraint, Index, UniqueConstraint,
)
from sqlalchemy.sql import func

from .database import Base


class TaskLetter(Base):
    """Travel-authorization letter (surat tugas)."""
    __tablename__ = "task_letters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Human-assigned number printed on the letter; distinct from the primary key.
    register_number = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    recipient_name = Column(Text, nullable=False)
    recipient_position = Column(Text, nullable=False)
    destination_place = Column(Text, nullable=False)
    purpose = Column(Text, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    transportation = Column(Text, nullable=False)
    advance_money = Column(Numeric(12, 2, asdecimal=True), nullable=False)
    signatory_name = Column(Text, nullable=False)
    signatory_position = Column(Text, nullable=False)
    creation_place = Column(Text, nullable=False)
    creation_date = Column(Date, nullable=False)

    # Filled in by the official at the destination; NULL until then.
    arrival_date = Column(Date, nullable=True)
    return_date = Column(Date, nullable=True)
    ticket_taken = Column(Boolean, nullable=True)
    official_notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("register_number", name="uq_task_letters_register_number"),
        CheckConstraint("end_date > start_date", name="chk_task_letters_date_range"),
        CheckConstraint("advance_money >= 0", name="chk_task_letters_advance_money"),
        Index("ix_task_letters_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<TaskLetter id={self.id} register_number={self.register_number!r}>"
