from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from starlette import status

from medportal.core.auth import require_permission
from medportal.core.db import get_db
from medportal.models.schemas.directory import (
    RepresentativeCreateModel,
    RepresentativeResponseModel,
    RepresentativeUpdateModel,
)
from medportal.models.schemas.user import SessionModel
from medportal.services.directory_service import DirectoryService
from medportal.services.permissions import Permission

router = APIRouter(prefix="/representatives", tags=["representatives"])


@router.get(
    "",
    response_model=List[RepresentativeResponseModel],
    status_code=status.HTTP_200_OK,
    summary="List representatives",
)
def list_representatives(
    manager_id: str | None = Query(None),
    q: str | None = Query(None, description="Search by name."),
    session: SessionModel = Depends(
        require_permission(Permission.VIEW_REPRESENTATIVES, "view representatives")
    ),
    db: Session = Depends(get_db),
):
    """Managers only ever see their own team, searched or not."""
    return DirectoryService(db).list_representatives(session, manager_id=manager_id, query=q)


@router.post(
    "",
    response_model=RepresentativeResponseModel,
    status_code=status.HTTP_201_CREATED,
    summary="Create a representative",
)
def create_representative(
    data: RepresentativeCreateModel,
    session: SessionModel = Depends(
        require_permission(Permission.CREATE_REPRESENTATIVE, "create representatives")
    ),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).create_representative(data, session)


@router.get(
    "/{representative_id}",
    response_model=RepresentativeResponseModel,
    status_code=status.HTTP_200_OK,
)
def get_representative(
    representative_id: str = Path(..., description="The ID of the representative."),
    session: SessionModel = Depends(
        require_permission(Permission.VIEW_REPRESENTATIVES, "view representatives")
    ),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).get_representative(representative_id, session)


@router.patch(
    "/{representative_id}",
    response_model=RepresentativeResponseModel,
    status_code=status.HTTP_200_OK,
)
def update_representative(
    data: RepresentativeUpdateModel,
    representative_id: str = Path(..., description="The ID of the representative."),
    session: SessionModel = Depends(
        require_permission(Permission.EDIT_REPRESENTATIVE, "edit representatives")
    ),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).update_representative(representative_id, data, session)


@router.delete("/{representative_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_representative(
    representative_id: str = Path(..., description="The ID of the representative."),
    session: SessionModel = Depends(
        require_permission(Permission.DELETE_REPRESENTATIVE, "delete representatives")
    ),
    db: Session = Depends(get_db),
):
    DirectoryService(db).delete_representative(representative_id, session)
