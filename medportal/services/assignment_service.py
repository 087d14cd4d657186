import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from medportal.core.errors import (
    CollaboratorError,
    MissingRepresentative,
    NoDoctorsSelected,
    NoProductsSelected,
    RecordNotFound,
)
from medportal.models.orm.assignment import AssignmentORM
from medportal.models.orm.product import ProductORM
from medportal.models.orm.user import UserRole
from medportal.models.schemas.assignment import (
    AssignmentPreviewModel,
    AssignmentRequest,
    AssignmentResponseModel,
    AssignmentSeriesModel,
    AssignmentUpdateModel,
    FormOptionsModel,
    SeriesDeletedModel,
    SeriesUpdateModel,
    WeeklyAssignmentForm,
)
from medportal.models.schemas.user import SessionModel
from medportal.repositories.assignment_repo import AssignmentRepository
from medportal.repositories.base_repo import parse_record, parse_records
from medportal.repositories.catalog_repo import ProductRepository
from medportal.repositories.doctor_repo import DoctorRepository
from medportal.services.directory_service import DirectoryService, clean_ids, manages
from medportal.services.recurrence import next_occurrence, weekday_of, weekly_dates

logger = logging.getLogger(__name__)


def _clean_note(note: Optional[str]) -> Optional[str]:
    return note.strip() if note and note.strip() else None


def _series_record(records: List[AssignmentORM]) -> AssignmentSeriesModel:
    assignments = parse_records(AssignmentResponseModel, records)
    first = assignments[0]
    return AssignmentSeriesModel(
        series_id=first.series_id,
        representative_id=first.representative_id,
        weekday=first.weekday,
        repeat_count=len(assignments),
        start_date=first.scheduled_date,
        dates=[a.scheduled_date for a in assignments],
        assignments=assignments,
    )


def build_assignment_request(
    form: WeeklyAssignmentForm, today: Optional[date] = None
) -> AssignmentRequest:
    """
    Validates the weekly form and shapes it into an AssignmentRequest.

    Rules are checked in order and the first violation is raised:
    representative, then doctors, then products. Weekday and plan length are
    already constrained by the form model. The series itself is not expanded
    here; start_date is the first occurrence of the weekday after `today`.
    """
    representative_id = (form.representative_id or "").strip()
    if not representative_id:
        raise MissingRepresentative()

    doctor_ids = clean_ids(form.doctor_ids)
    if not doctor_ids:
        raise NoDoctorsSelected()

    product_ids = clean_ids(form.product_ids)
    if not product_ids:
        raise NoProductsSelected()

    return AssignmentRequest(
        representative_id=representative_id,
        doctor_ids=doctor_ids,
        product_ids=product_ids,
        weekday=form.weekday,
        repeat_count=form.repeat_count,
        start_date=next_occurrence(form.weekday, today or date.today()),
        note=_clean_note(form.note),
    )


class AssignmentService:
    def __init__(self, db: Session):
        self.assignment_repo = AssignmentRepository(db)
        self.doctor_repo = DoctorRepository(db)
        self.product_repo = ProductRepository(db)
        self.directory_service = DirectoryService(db)

    def preview(
        self, form: WeeklyAssignmentForm, today: Optional[date] = None
    ) -> AssignmentPreviewModel:
        """The dates the form would schedule, without touching the store."""
        start_date = next_occurrence(form.weekday, today or date.today())
        return AssignmentPreviewModel(
            start_date=start_date, dates=weekly_dates(start_date, form.repeat_count)
        )

    def submit(
        self, form: WeeklyAssignmentForm, session: SessionModel, today: Optional[date] = None
    ) -> AssignmentSeriesModel:
        request = build_assignment_request(form, today)

        # Every referenced record must exist before anything is written
        self.directory_service.require_team_member(request.representative_id, session)
        doctors = self.doctor_repo.require_all(request.doctor_ids)
        products = self.product_repo.require_all(request.product_ids)

        try:
            records = self.assignment_repo.create_series(request, doctors, products)
        except CollaboratorError as e:
            logger.error("Weekly assignment submission failed: %s", e.message)
            raise CollaboratorError(f"Failed to create weekly assignments: {e.message}") from e

        return _series_record(records)

    def list_assignments(
        self,
        session: SessionModel,
        representative_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[AssignmentResponseModel]:
        manager_id = None
        if session.role == UserRole.REP:
            if session.representative_id is None:
                return []
            representative_id = session.representative_id
        elif session.role == UserRole.MANAGER:
            if session.manager_id is None:
                return []
            manager_id = session.manager_id

        records = self.assignment_repo.list_assignments(
            representative_id=representative_id,
            date_from=date_from,
            date_to=date_to,
            manager_id=manager_id,
        )
        return parse_records(AssignmentResponseModel, records)

    def get_assignment(self, assignment_id: str, session: SessionModel) -> AssignmentResponseModel:
        return parse_record(AssignmentResponseModel, self._require_visible(assignment_id, session))

    def update_assignment(
        self, assignment_id: str, data: AssignmentUpdateModel, session: SessionModel
    ) -> AssignmentResponseModel:
        """Edits one date of a series; moving it re-derives its weekday."""
        record = self._require_visible(assignment_id, session)

        changes = {}
        if "note" in data.model_fields_set:
            changes["note"] = _clean_note(data.note)
        if data.scheduled_date is not None:
            changes["scheduled_date"] = data.scheduled_date
            changes["weekday"] = weekday_of(data.scheduled_date)

        doctors = products = None
        if data.doctor_ids is not None:
            doctor_ids = clean_ids(data.doctor_ids)
            if not doctor_ids:
                raise NoDoctorsSelected()
            doctors = self.doctor_repo.require_all(doctor_ids)
        if data.product_ids is not None:
            products = self._require_products(data.product_ids)

        record = self.assignment_repo.update_assignment(record, changes, doctors, products)
        return parse_record(AssignmentResponseModel, record)

    def update_series(
        self, series_id: str, data: SeriesUpdateModel, session: SessionModel
    ) -> AssignmentSeriesModel:
        """Applies a note and/or product change to every date of the series at once."""
        records = self._require_series(series_id, session)

        changes = {}
        if "note" in data.model_fields_set:
            changes["note"] = _clean_note(data.note)
        products = None
        if data.product_ids is not None:
            products = self._require_products(data.product_ids)

        records = self.assignment_repo.update_series(records, changes, products)
        logger.info("Updated series %s (%d assignment(s))", series_id, len(records))
        return _series_record(records)

    def delete_assignment(self, assignment_id: str, session: SessionModel) -> None:
        self._require_visible(assignment_id, session)
        self.assignment_repo.delete(assignment_id)

    def delete_series(self, series_id: str, session: SessionModel) -> SeriesDeletedModel:
        self._require_series(series_id, session)
        deleted = self.assignment_repo.delete_series(series_id)
        logger.info("Deleted series %s (%d assignment(s))", series_id, deleted)
        return SeriesDeletedModel(series_id=series_id, deleted=deleted)

    def load_form_options(self, session: SessionModel) -> FormOptionsModel:
        """
        Loads the pick lists for the weekly form. A lookup that fails comes
        back empty and its message is collected; the other lists still load.
        """
        options = FormOptionsModel()

        lookups = (
            ("representatives", lambda: self.directory_service.list_representatives(session)),
            ("doctors", self.directory_service.list_doctors),
            ("products", self.directory_service.list_products),
        )
        for field, load in lookups:
            try:
                setattr(options, field, load())
            except CollaboratorError as e:
                logger.warning("Could not load %s for the assignment form: %s", field, e.message)
                options.errors.append(e.message)

        return options

    def _visible(self, record: AssignmentORM, session: SessionModel) -> bool:
        if session.role == UserRole.REP:
            return record.representative_id == session.representative_id
        return manages(session, record.representative)

    def _require_visible(self, assignment_id: str, session: SessionModel) -> AssignmentORM:
        record = self.assignment_repo.require(assignment_id)
        if not self._visible(record, session):
            # Records out of the session's reach are indistinguishable from missing ones
            raise RecordNotFound("assignment", assignment_id)
        return record

    def _require_series(self, series_id: str, session: SessionModel) -> List[AssignmentORM]:
        records = self.assignment_repo.list_series(series_id)
        if not records or not self._visible(records[0], session):
            raise RecordNotFound("assignment series", series_id)
        return records

    def _require_products(self, product_ids: Iterable[Optional[str]]) -> List[ProductORM]:
        cleaned = clean_ids(product_ids)
        if not cleaned:
            raise NoProductsSelected()
        return self.product_repo.require_all(cleaned)
