from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from starlette import status

from medportal.core.auth import require_permission
from medportal.core.db import get_db
from medportal.models.schemas.user import (
    ManagerCreateModel,
    ManagerResponseModel,
    ManagerUpdateModel,
)
from medportal.services.directory_service import DirectoryService
from medportal.services.permissions import Permission

router = APIRouter(prefix="/managers", tags=["managers"])


@router.get(
    "",
    response_model=List[ManagerResponseModel],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.VIEW_MANAGERS, "view managers"))],
)
def list_managers(db: Session = Depends(get_db)):
    return DirectoryService(db).list_managers()


@router.post(
    "",
    response_model=ManagerResponseModel,
    status_code=status.HTTP_201_CREATED,
    summary="Create a manager together with their login account",
    dependencies=[Depends(require_permission(Permission.CREATE_MANAGER, "create managers"))],
)
def create_manager(data: ManagerCreateModel, db: Session = Depends(get_db)):
    return DirectoryService(db).create_manager(data)


@router.get(
    "/{manager_id}",
    response_model=ManagerResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.VIEW_MANAGERS, "view managers"))],
)
def get_manager(
    manager_id: str = Path(..., description="The ID of the manager."),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).get_manager(manager_id)


@router.patch(
    "/{manager_id}",
    response_model=ManagerResponseModel,
    status_code=status.HTTP_200_OK,
    summary="Rename a manager or change their login email",
    dependencies=[Depends(require_permission(Permission.EDIT_MANAGER, "edit managers"))],
)
def update_manager(
    data: ManagerUpdateModel,
    manager_id: str = Path(..., description="The ID of the manager."),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).update_manager(manager_id, data)


@router.delete(
    "/{manager_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a manager and their login account",
    dependencies=[Depends(require_permission(Permission.DELETE_MANAGER, "delete managers"))],
)
def delete_manager(
    manager_id: str = Path(..., description="The ID of the manager."),
    db: Session = Depends(get_db),
):
    DirectoryService(db).delete_manager(manager_id)
