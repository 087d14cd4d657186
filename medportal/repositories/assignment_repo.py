# repositories/assignment_repo.py
import logging
import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy import select

from medportal.models.orm.assignment import AssignmentORM
from medportal.models.orm.doctor import DoctorORM
from medportal.models.orm.product import ProductORM
from medportal.models.orm.representative import RepresentativeORM
from medportal.models.schemas.assignment import AssignmentRequest
from medportal.services.recurrence import weekday_name, weekly_dates

from .base_repo import RecordRepository

logger = logging.getLogger(__name__)


class AssignmentRepository(RecordRepository[AssignmentORM]):
    model = AssignmentORM
    label = "assignment"
    order_by = (AssignmentORM.scheduled_date, AssignmentORM.created_at)

    def list_assignments(
        self,
        representative_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        manager_id: Optional[str] = None,
    ) -> List[AssignmentORM]:
        """
        Retrieves assignments, applying optional filters for representative,
        the representative's manager and an inclusive scheduled-date range.
        """
        stmt = select(AssignmentORM)

        if manager_id:
            stmt = stmt.join(
                RepresentativeORM, RepresentativeORM.id == AssignmentORM.representative_id
            ).where(RepresentativeORM.manager_id == manager_id)

        if representative_id:
            stmt = stmt.where(AssignmentORM.representative_id == representative_id)

        if date_from:
            stmt = stmt.where(AssignmentORM.scheduled_date >= date_from)

        if date_to:
            stmt = stmt.where(AssignmentORM.scheduled_date <= date_to)

        return self._scalars(stmt.order_by(*self._ordering()))

    def list_series(self, series_id: str) -> List[AssignmentORM]:
        return self.filter_by(series_id=series_id)

    def create_series(
        self,
        request: AssignmentRequest,
        doctors: List[DoctorORM],
        products: List[ProductORM],
    ) -> List[AssignmentORM]:
        """
        Materializes one assignment record per weekly date of the request.

        All records are written in one commit: either the whole series exists
        afterwards or none of it does.
        """
        series_id = str(uuid.uuid4())
        records = [
            AssignmentORM(
                series_id=series_id,
                representative_id=request.representative_id,
                weekday=request.weekday,
                scheduled_date=scheduled_date,
                note=request.note,
                doctors=list(doctors),
                products=list(products),
            )
            for scheduled_date in weekly_dates(request.start_date, request.repeat_count)
        ]
        self.db.add_all(records)
        self.commit()

        logger.info(
            "Created series %s: %d %s assignment(s) for representative %s",
            series_id,
            len(records),
            weekday_name(request.weekday),
            request.representative_id,
        )
        return self.list_series(series_id)

    def update_assignment(
        self,
        record: AssignmentORM,
        changes: dict,
        doctors: Optional[List[DoctorORM]] = None,
        products: Optional[List[ProductORM]] = None,
    ) -> AssignmentORM:
        for name, value in changes.items():
            setattr(record, name, value)
        if doctors is not None:
            record.doctors = list(doctors)
        if products is not None:
            record.products = list(products)
        self.commit()
        self.db.refresh(record)
        return record

    def update_series(
        self,
        records: List[AssignmentORM],
        changes: dict,
        products: Optional[List[ProductORM]] = None,
    ) -> List[AssignmentORM]:
        """Applies the same edit to every record of a series in one commit."""
        series_id = records[0].series_id
        for record in records:
            for name, value in changes.items():
                setattr(record, name, value)
            if products is not None:
                record.products = list(products)
        self.commit()
        return self.list_series(series_id)

    def delete_series(self, series_id: str) -> int:
        records = self.list_series(series_id)
        for record in records:
            self.db.delete(record)
        self.commit()
        return len(records)
