from datetime import date, datetime
from typing import List, Literal, Optional, Tuple, get_args

from pydantic import BaseModel, ConfigDict, Field

from .directory import (
    DoctorResponseModel,
    ProductResponseModel,
    RepresentativeResponseModel,
)

# Plan lengths offered by the weekly form, in weeks (26 = six months, 52 = one year)
PlanLength = Literal[1, 2, 4, 8, 12, 26, 52]
SUPPORTED_PLAN_LENGTHS = get_args(PlanLength)


class WeeklyAssignmentForm(BaseModel):
    """
    Raw state of the weekly assignment form. Selection rules (representative,
    doctors, products) are checked by the request builder, not here, so that
    each missing selection surfaces as its own error.
    """

    representative_id: Optional[str] = None
    doctor_ids: List[str] = Field(default_factory=list)
    product_ids: List[str] = Field(default_factory=list)
    weekday: int = Field(1, ge=0, le=6, description="0=Sunday .. 6=Saturday.")
    repeat_count: PlanLength = Field(4, description="Number of weekly occurrences.")
    note: Optional[str] = None


class AssignmentRequest(BaseModel):
    """A validated form, ready for the persistence layer."""

    model_config = ConfigDict(frozen=True)

    representative_id: str
    doctor_ids: Tuple[str, ...]
    product_ids: Tuple[str, ...]
    weekday: int
    repeat_count: int
    start_date: date = Field(..., description="First scheduled date of the series.")
    note: Optional[str] = None


class AssignmentPreviewModel(BaseModel):
    start_date: date
    dates: List[date]


class AssignmentResponseModel(BaseModel):
    """Data model for one persisted assignment date."""

    id: str
    series_id: str
    representative_id: str
    weekday: int
    scheduled_date: date
    note: Optional[str] = None
    doctor_ids: List[str]
    product_ids: List[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AssignmentSeriesModel(BaseModel):
    series_id: str
    representative_id: str
    weekday: int
    repeat_count: int
    start_date: date
    dates: List[date]
    assignments: List[AssignmentResponseModel]


class AssignmentUpdateModel(BaseModel):
    """Edits to one assignment date. Omitted fields are left as they are."""

    scheduled_date: Optional[date] = None
    note: Optional[str] = None
    doctor_ids: Optional[List[str]] = None
    product_ids: Optional[List[str]] = None


class SeriesUpdateModel(BaseModel):
    """Edits applied to every date of a series."""

    note: Optional[str] = None
    product_ids: Optional[List[str]] = None


class SeriesDeletedModel(BaseModel):
    series_id: str
    deleted: int


class FormOptionsModel(BaseModel):
    """Everything the weekly form needs on open. Failed lookups come back empty."""

    representatives: List[RepresentativeResponseModel] = Field(default_factory=list)
    doctors: List[DoctorResponseModel] = Field(default_factory=list)
    products: List[ProductResponseModel] = Field(default_factory=list)
    plan_lengths: List[int] = Field(default_factory=lambda: list(SUPPORTED_PLAN_LENGTHS))
    errors: List[str] = Field(default_factory=list)
