from typing import List

from pydantic import BaseModel


class NavItemModel(BaseModel):
    path: str
    label: str
    exact: bool = False
    active: bool = False


class NavigationModel(BaseModel):
    dashboard_path: str
    items: List[NavItemModel]
