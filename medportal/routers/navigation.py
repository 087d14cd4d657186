from fastapi import APIRouter, Depends, Query
from starlette import status

from medportal.core.auth import get_current_session
from medportal.models.schemas.navigation import NavigationModel, NavItemModel
from medportal.models.schemas.user import SessionModel
from medportal.services.navigation import dashboard_path, is_active, visible_items

router = APIRouter(tags=["navigation"])


@router.get(
    "/navigation",
    response_model=NavigationModel,
    status_code=status.HTTP_200_OK,
    summary="Navigation entries visible to the signed-in role",
)
def get_navigation(
    current_path: str | None = Query(
        None, description="Path being displayed; marks the matching entry active."
    ),
    session: SessionModel = Depends(get_current_session),
):
    items = [
        NavItemModel(
            path=item.path,
            label=item.label,
            exact=item.exact,
            active=bool(current_path) and is_active(current_path, item.path, item.exact),
        )
        for item in visible_items(session.role)
    ]
    return NavigationModel(dashboard_path=dashboard_path(session.role), items=items)
