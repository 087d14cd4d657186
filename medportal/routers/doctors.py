from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from starlette import status

from medportal.core.auth import require_permission
from medportal.core.db import get_db
from medportal.models.schemas.directory import (
    DoctorCreateModel,
    DoctorResponseModel,
    DoctorUpdateModel,
    SpecializationCreateModel,
    SpecializationResponseModel,
    SpecializationUpdateModel,
)
from medportal.services.directory_service import DirectoryService
from medportal.services.permissions import Permission

router = APIRouter(tags=["doctors"])


@router.get(
    "/doctors",
    response_model=List[DoctorResponseModel],
    status_code=status.HTTP_200_OK,
    summary="List doctors",
    dependencies=[Depends(require_permission(Permission.VIEW_DOCTORS, "view doctors"))],
)
def list_doctors(
    clinic_id: str | None = Query(None, description="Only doctors working at this clinic."),
    specialization_id: str | None = Query(None),
    q: str | None = Query(None, description="Search by name or specialty."),
    db: Session = Depends(get_db),
):
    directory = DirectoryService(db)
    if q:
        return directory.search_doctors(q)
    return directory.list_doctors(clinic_id=clinic_id, specialization_id=specialization_id)


@router.post(
    "/doctors",
    response_model=DoctorResponseModel,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.CREATE_DOCTOR, "create doctors"))],
)
def create_doctor(data: DoctorCreateModel, db: Session = Depends(get_db)):
    return DirectoryService(db).create_doctor(data)


@router.get(
    "/doctors/{doctor_id}",
    response_model=DoctorResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.VIEW_DOCTORS, "view doctors"))],
)
def get_doctor(
    doctor_id: str = Path(..., description="The ID of the doctor."),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).get_doctor(doctor_id)


@router.patch(
    "/doctors/{doctor_id}",
    response_model=DoctorResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.EDIT_DOCTOR, "edit doctors"))],
)
def update_doctor(
    data: DoctorUpdateModel,
    doctor_id: str = Path(..., description="The ID of the doctor."),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).update_doctor(doctor_id, data)


@router.delete(
    "/doctors/{doctor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.DELETE_DOCTOR, "delete doctors"))],
)
def delete_doctor(
    doctor_id: str = Path(..., description="The ID of the doctor."),
    db: Session = Depends(get_db),
):
    DirectoryService(db).delete_doctor(doctor_id)


@router.get(
    "/specializations",
    response_model=List[SpecializationResponseModel],
    status_code=status.HTTP_200_OK,
    dependencies=[
        Depends(require_permission(Permission.VIEW_SPECIALIZATIONS, "view specializations"))
    ],
)
def list_specializations(db: Session = Depends(get_db)):
    return DirectoryService(db).list_specializations()


@router.post(
    "/specializations",
    response_model=SpecializationResponseModel,
    status_code=status.HTTP_201_CREATED,
    dependencies=[
        Depends(require_permission(Permission.CREATE_SPECIALIZATION, "create specializations"))
    ],
)
def create_specialization(data: SpecializationCreateModel, db: Session = Depends(get_db)):
    return DirectoryService(db).create_specialization(data)


@router.get(
    "/specializations/{specialization_id}",
    response_model=SpecializationResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[
        Depends(require_permission(Permission.VIEW_SPECIALIZATIONS, "view specializations"))
    ],
)
def get_specialization(
    specialization_id: str = Path(..., description="The ID of the specialization."),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).get_specialization(specialization_id)


@router.patch(
    "/specializations/{specialization_id}",
    response_model=SpecializationResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[
        Depends(require_permission(Permission.EDIT_SPECIALIZATION, "edit specializations"))
    ],
)
def update_specialization(
    data: SpecializationUpdateModel,
    specialization_id: str = Path(..., description="The ID of the specialization."),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).update_specialization(specialization_id, data)


@router.delete(
    "/specializations/{specialization_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a specialization; its doctors are kept without one",
    dependencies=[
        Depends(require_permission(Permission.DELETE_SPECIALIZATION, "delete specializations"))
    ],
)
def delete_specialization(
    specialization_id: str = Path(..., description="The ID of the specialization."),
    db: Session = Depends(get_db),
):
    DirectoryService(db).delete_specialization(specialization_id)
