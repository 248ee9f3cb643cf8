from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.domain_errors import DomainError
from app.models import TaskLetter
from app.schemas import TaskLetterCreate
from app.services.task_letter_rules import OfficialCompletion
from app.use_cases.task_letters import (
    create_task_letter_use_case,
    delete_task_letter_use_case,
    export_document_use_case,
    get_task_letter_use_case,
    update_official_details_use_case,
    update_task_letter_use_case,
)


class _QueryStub:
    def __init__(self, *, first_results=(), deleted=0):
        self._first_results = list(first_results)
        self._deleted = deleted

    def filter(self, *_args, **_kwargs):
        return self

    def first(self):
        if not self._first_results:
            return None
        return self._first_results.pop(0)

    def delete(self, synchronize_session=None):
        return self._deleted


class _SessionStub:
    def __init__(self, *, first_results=(), deleted=0, commit_error=None):
        self._query = _QueryStub(first_results=first_results, deleted=deleted)
        self._commit_error = commit_error
        self.added = []
        self.commit_calls = 0
        self.rollback_calls = 0

    def query(self, model):
        if model is TaskLetter:
            return self._query
        raise AssertionError(f"Unexpected query model: {model}")

    def add(self, obj):
        self.added.append(obj)

    def commit(self):
        self.commit_calls += 1
        if self._commit_error is not None:
            raise self._commit_error

    def rollback(self):
        self.rollback_calls += 1

    def refresh(self, _obj):
        return None


def _payload(**overrides) -> TaskLetterCreate:
    values = dict(
        register_number="001/ST/2026",
        title="Field survey",
        recipient_name="Budi Santoso",
        recipient_position="Statistician",
        destination_place="Sleman",
        purpose="Survey supervision",
        start_date=date(2026, 3, 10),
        end_date=date(2026, 3, 15),
        transportation="Car",
        advance_money=Decimal("99999999.99"),
        signatory_name="Siti Rahmawati",
        signatory_position="Head of Office",
        creation_place="Yogyakarta",
        creation_date=date(2026, 3, 1),
    )
    values.update(overrides)
    return TaskLetterCreate(**values)


def _stored(**overrides):
    values = _payload().model_dump()
    values.update(
        id=7,
        arrival_date=None,
        return_date=None,
        ticket_taken=None,
        official_notes=None,
        created_at=datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc),
        updated_at=datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def _unique_violation() -> IntegrityError:
    return IntegrityError(
        "INSERT INTO task_letters ...",
        {},
        Exception("UNIQUE constraint failed: task_letters.register_number"),
    )


def test_create_persists_letter_with_empty_official_details() -> None:
    db = _SessionStub(first_results=[None])
    at = datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)

    letter = create_task_letter_use_case(db=db, payload=_payload(), at=at)

    assert db.added == [letter]
    assert db.commit_calls == 1
    assert letter.register_number == "001/ST/2026"
    assert letter.advance_money == Decimal("99999999.99")
    assert letter.arrival_date is None
    assert letter.return_date is None
    assert letter.ticket_taken is None
    assert letter.official_notes is None
    assert letter.created_at == at
    assert letter.updated_at == at


def test_create_with_existing_register_number_fails_without_writing() -> None:
    db = _SessionStub(first_results=[_stored()])

    with pytest.raises(DomainError) as exc:
        create_task_letter_use_case(db=db, payload=_payload())

    assert exc.value.code == "DUPLICATE_REGISTER_NUMBER"
    assert db.added == []
    assert db.commit_calls == 0


def test_create_with_inverted_dates_fails() -> None:
    db = _SessionStub(first_results=[None])

    with pytest.raises(DomainError) as exc:
        create_task_letter_use_case(
            db=db,
            payload=_payload(start_date=date(2026, 3, 10), end_date=date(2026, 3, 10)),
        )

    assert exc.value.code == "INVALID_DATE_RANGE"
    assert db.commit_calls == 0


def test_create_maps_unique_violation_at_commit_to_duplicate() -> None:
    db = _SessionStub(first_results=[None], commit_error=_unique_violation())

    with pytest.raises(DomainError) as exc:
        create_task_letter_use_case(db=db, payload=_payload())

    assert exc.value.code == "DUPLICATE_REGISTER_NUMBER"
    assert db.rollback_calls == 1


def test_create_surfaces_store_failure_as_persistence_error() -> None:
    error = OperationalError("INSERT INTO task_letters ...", {}, Exception("connection refused"))
    db = _SessionStub(first_results=[None], commit_error=error)

    with pytest.raises(DomainError) as exc:
        create_task_letter_use_case(db=db, payload=_payload())

    assert exc.value.code == "PERSISTENCE_FAILURE"
    assert exc.value.http_status == 503
    assert db.rollback_calls == 1


def test_get_returns_none_for_unknown_id() -> None:
    db = _SessionStub(first_results=[None])

    assert get_task_letter_use_case(db=db, task_letter_id=404) is None


def test_update_unknown_id_is_not_found() -> None:
    db = _SessionStub(first_results=[None])

    with pytest.raises(DomainError) as exc:
        update_task_letter_use_case(db=db, task_letter_id=404, patch={"title": "x"})

    assert exc.value.code == "TASK_LETTER_NOT_FOUND"
    assert exc.value.http_status == 404
    assert db.commit_calls == 0


def test_update_with_own_register_number_skips_uniqueness_lookup() -> None:
    stored = _stored()
    db = _SessionStub(first_results=[stored])
    at = datetime(2026, 3, 3, 9, 0, tzinfo=timezone.utc)

    result = update_task_letter_use_case(
        db=db,
        task_letter_id=stored.id,
        patch={"register_number": "001/ST/2026", "title": "Renamed"},
        at=at,
    )

    assert result is stored
    assert stored.title == "Renamed"
    assert stored.updated_at == at
    assert db.commit_calls == 1


def test_update_to_taken_register_number_fails() -> None:
    stored = _stored()
    other = _stored(id=8, register_number="002/ST/2026")
    db = _SessionStub(first_results=[stored, other])

    with pytest.raises(DomainError) as exc:
        update_task_letter_use_case(
            db=db,
            task_letter_id=stored.id,
            patch={"register_number": "002/ST/2026"},
        )

    assert exc.value.code == "DUPLICATE_REGISTER_NUMBER"
    assert stored.register_number == "001/ST/2026"
    assert db.commit_calls == 0


def test_update_only_start_date_past_current_end_fails() -> None:
    stored = _stored(start_date=date(2026, 3, 10), end_date=date(2026, 3, 15))
    db = _SessionStub(first_results=[stored])

    with pytest.raises(DomainError) as exc:
        update_task_letter_use_case(db=db, task_letter_id=stored.id, patch={"start_date": date(2026, 3, 15)})

    assert exc.value.code == "INVALID_DATE_RANGE"
    assert stored.start_date == date(2026, 3, 10)


def test_update_official_details_keeps_core_fields() -> None:
    stored = _stored()
    db = _SessionStub(first_results=[stored])
    completion = OfficialCompletion(
        arrival_date=date(2026, 3, 10),
        return_date=date(2026, 3, 15),
        ticket_taken=True,
        notes="Completed",
    )

    result = update_official_details_use_case(db=db, task_letter_id=stored.id, completion=completion)

    assert result.arrival_date == date(2026, 3, 10)
    assert result.ticket_taken is True
    assert result.official_notes == "Completed"
    assert result.title == "Field survey"
    assert result.recipient_name == "Budi Santoso"
    assert db.commit_calls == 1


def test_update_official_details_unknown_id_is_not_found() -> None:
    db = _SessionStub(first_results=[None])

    with pytest.raises(DomainError) as exc:
        update_official_details_use_case(db=db, task_letter_id=404, completion=OfficialCompletion())

    assert exc.value.code == "TASK_LETTER_NOT_FOUND"


def test_delete_reports_whether_a_row_was_removed() -> None:
    assert delete_task_letter_use_case(db=_SessionStub(deleted=1), task_letter_id=7) is True
    assert delete_task_letter_use_case(db=_SessionStub(deleted=0), task_letter_id=404) is False


def test_export_uses_sanitized_register_number() -> None:
    db = _SessionStub(first_results=[_stored(register_number="090/ST/BPS/I/2026")])

    target = export_document_use_case(db=db, task_letter_id=7, export_format="docx")

    assert target.filename == "surat-tugas-090-ST-BPS-I-2026.docx"
    assert target.file_url == "/exports/surat-tugas-090-ST-BPS-I-2026.docx"


def test_export_unknown_id_is_not_found() -> None:
    db = _SessionStub(first_results=[None])

    with pytest.raises(DomainError) as exc:
        export_document_use_case(db=db, task_letter_id=404, export_format="pdf")

    assert exc.value.code == "TASK_LETTER_NOT_FOUND"
