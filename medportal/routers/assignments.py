from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from starlette import status

from medportal.core.auth import require_permission
from medportal.core.db import get_db
from medportal.models.schemas.assignment import (
    AssignmentPreviewModel,
    AssignmentResponseModel,
    AssignmentSeriesModel,
    AssignmentUpdateModel,
    FormOptionsModel,
    SeriesDeletedModel,
    SeriesUpdateModel,
    WeeklyAssignmentForm,
)
from medportal.models.schemas.user import SessionModel
from medportal.services.assignment_service import AssignmentService
from medportal.services.permissions import Permission

router = APIRouter(prefix="/assignments", tags=["assignments"])

can_create = require_permission(Permission.CREATE_ASSIGNMENT, "create assignments")
can_edit = require_permission(Permission.EDIT_ASSIGNMENT, "edit assignments")
can_delete = require_permission(Permission.DELETE_ASSIGNMENT, "delete assignments")


@router.get(
    "/form-options",
    response_model=FormOptionsModel,
    status_code=status.HTTP_200_OK,
    summary="Pick lists for the weekly assignment form",
)
def get_form_options(
    session: SessionModel = Depends(can_create),
    db: Session = Depends(get_db),
):
    return AssignmentService(db).load_form_options(session)


@router.post(
    "/preview",
    response_model=AssignmentPreviewModel,
    status_code=status.HTTP_200_OK,
    summary="Dates a weekly form would schedule",
    dependencies=[Depends(can_create)],
)
def preview_weekly_assignments(form: WeeklyAssignmentForm, db: Session = Depends(get_db)):
    return AssignmentService(db).preview(form)


@router.post(
    "/weekly",
    response_model=AssignmentSeriesModel,
    status_code=status.HTTP_201_CREATED,
    summary="Create a weekly recurring assignment",
)
def create_weekly_assignments(
    form: WeeklyAssignmentForm,
    session: SessionModel = Depends(can_create),
    db: Session = Depends(get_db),
):
    """
    Validates the form and stores one assignment per weekly date, starting at
    the next occurrence of the chosen weekday. Either the whole series is
    stored or none of it. Managers can only schedule their own team.
    """
    return AssignmentService(db).submit(form, session)


@router.get(
    "",
    response_model=List[AssignmentResponseModel],
    status_code=status.HTTP_200_OK,
    summary="List assignments",
)
def list_assignments(
    representative_id: str | None = Query(None),
    date_from: date | None = Query(None, description="Inclusive lower bound on scheduled_date."),
    date_to: date | None = Query(None, description="Inclusive upper bound on scheduled_date."),
    session: SessionModel = Depends(
        require_permission(Permission.VIEW_ASSIGNMENTS, "view assignments")
    ),
    db: Session = Depends(get_db),
):
    return AssignmentService(db).list_assignments(
        session, representative_id=representative_id, date_from=date_from, date_to=date_to
    )


@router.patch(
    "/series/{series_id}",
    response_model=AssignmentSeriesModel,
    status_code=status.HTTP_200_OK,
    summary="Change the note or products of every assignment in a series",
)
def update_series(
    data: SeriesUpdateModel,
    series_id: str = Path(..., description="The series shared by one submission."),
    session: SessionModel = Depends(can_edit),
    db: Session = Depends(get_db),
):
    return AssignmentService(db).update_series(series_id, data, session)


@router.delete(
    "/series/{series_id}",
    response_model=SeriesDeletedModel,
    status_code=status.HTTP_200_OK,
    summary="Delete every assignment of a series",
)
def delete_series(
    series_id: str = Path(..., description="The series shared by one submission."),
    session: SessionModel = Depends(can_delete),
    db: Session = Depends(get_db),
):
    return AssignmentService(db).delete_series(series_id, session)


@router.get(
    "/{assignment_id}",
    response_model=AssignmentResponseModel,
    status_code=status.HTTP_200_OK,
)
def get_assignment(
    assignment_id: str = Path(..., description="The ID of the assignment."),
    session: SessionModel = Depends(
        require_permission(Permission.VIEW_ASSIGNMENTS, "view assignments")
    ),
    db: Session = Depends(get_db),
):
    return AssignmentService(db).get_assignment(assignment_id, session)


@router.patch(
    "/{assignment_id}",
    response_model=AssignmentResponseModel,
    status_code=status.HTTP_200_OK,
    summary="Edit one assignment date",
)
def update_assignment(
    data: AssignmentUpdateModel,
    assignment_id: str = Path(..., description="The ID of the assignment."),
    session: SessionModel = Depends(can_edit),
    db: Session = Depends(get_db),
):
    return AssignmentService(db).update_assignment(assignment_id, data, session)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_assignment(
    assignment_id: str = Path(..., description="The ID of the assignment."),
    session: SessionModel = Depends(can_delete),
    db: Session = Depends(get_db),
):
    AssignmentService(db).delete_assignment(assignment_id, session)
