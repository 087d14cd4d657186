"""
Role-gated navigation: the fixed list of portal screens and which of them a
role may see.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from medportal.models.orm.user import UserRole


class Routes:
    LOGIN = "/login"
    UNAUTHORIZED = "/unauthorized"

    SUPER_ADMIN_DASHBOARD = "/super-admin/dashboard"
    SUPER_ADMIN_MANAGERS = "/super-admin/managers"
    SUPER_ADMIN_REPRESENTATIVES = "/super-admin/representatives"
    SUPER_ADMIN_DOCTORS = "/super-admin/doctors"
    SUPER_ADMIN_CLINICS = "/super-admin/clinics"
    SUPER_ADMIN_SPECIALIZATIONS = "/super-admin/specializations"
    SUPER_ADMIN_BRANDS = "/super-admin/brands"
    SUPER_ADMIN_PRODUCTS = "/super-admin/products"
    SUPER_ADMIN_REPORTS = "/super-admin/reports"

    MANAGER_DASHBOARD = "/dashboard/manager"
    MANAGER_DOCTORS = "/doctors"
    MANAGER_REPRESENTATIVES = "/representatives"
    MANAGER_ASSIGNMENTS = "/assignments"
    MANAGER_BRANDS = "/brands"
    MANAGER_PRODUCTS = "/products"
    MANAGER_REPORTS = "/reports"

    REP_DASHBOARD = "/dashboard/rep"
    REP_SCHEDULE = "/schedule"
    REP_VISITS = "/visits"
    REP_BRANDS = "/rep/brands"

    NOTIFICATIONS = "/notifications"


@dataclass(frozen=True)
class NavItem:
    path: str
    label: str
    roles: Tuple[UserRole, ...]
    exact: bool = False


_ADMIN = (UserRole.SUPER_ADMIN,)
_MANAGER = (UserRole.MANAGER,)
_REP = (UserRole.REP,)

# Display order is the order of this tuple.
NAV_ITEMS: Tuple[NavItem, ...] = (
    NavItem(Routes.SUPER_ADMIN_DASHBOARD, "Dashboard", _ADMIN, exact=True),
    NavItem(Routes.SUPER_ADMIN_MANAGERS, "Managers", _ADMIN),
    NavItem(Routes.SUPER_ADMIN_REPRESENTATIVES, "Representatives", _ADMIN),
    NavItem(Routes.SUPER_ADMIN_DOCTORS, "Doctors", _ADMIN),
    NavItem(Routes.SUPER_ADMIN_CLINICS, "Clinics", _ADMIN),
    NavItem(Routes.SUPER_ADMIN_SPECIALIZATIONS, "Specializations", _ADMIN),
    NavItem(Routes.SUPER_ADMIN_BRANDS, "Brands", _ADMIN),
    NavItem(Routes.SUPER_ADMIN_PRODUCTS, "Products", _ADMIN),
    NavItem(Routes.SUPER_ADMIN_REPORTS, "Reports", _ADMIN),
    NavItem(Routes.MANAGER_DASHBOARD, "Dashboard", _MANAGER, exact=True),
    NavItem(Routes.MANAGER_DOCTORS, "Doctors", _MANAGER),
    NavItem(Routes.MANAGER_REPRESENTATIVES, "Representatives", _MANAGER),
    NavItem(Routes.MANAGER_ASSIGNMENTS, "Visit assignments", _MANAGER),
    NavItem(Routes.MANAGER_BRANDS, "Brands", _MANAGER),
    NavItem(Routes.MANAGER_PRODUCTS, "Products", _MANAGER),
    NavItem(Routes.MANAGER_REPORTS, "Reports", _MANAGER),
    NavItem(Routes.REP_DASHBOARD, "Dashboard", _REP, exact=True),
    NavItem(Routes.REP_SCHEDULE, "Schedule", _REP),
    NavItem(Routes.REP_VISITS, "Visits", _REP),
    NavItem(Routes.REP_BRANDS, "My brands", _REP),
    NavItem(Routes.NOTIFICATIONS, "Notifications", (UserRole.SUPER_ADMIN, UserRole.MANAGER, UserRole.REP)),
)

_DASHBOARDS = {
    UserRole.SUPER_ADMIN: Routes.SUPER_ADMIN_DASHBOARD,
    UserRole.MANAGER: Routes.MANAGER_DASHBOARD,
    UserRole.REP: Routes.REP_DASHBOARD,
}


def visible_items(role: Optional[UserRole], items: Iterable[NavItem] = NAV_ITEMS) -> List[NavItem]:
    if role is None:
        return []
    return [item for item in items if role in item.roles]


def is_active(current_path: str, item_path: str, exact: bool = False) -> bool:
    """
    Whether a nav item is highlighted for the current path.

    Non-exact items match on whole path segments: /super-admin/managers/new
    activates /super-admin/managers, but /super-admin/doctors does not
    activate /super-admin/doctor.
    """
    if current_path == item_path:
        return True
    if exact:
        return False
    return current_path.startswith(item_path.rstrip("/") + "/")


def dashboard_path(role: Optional[str]) -> str:
    try:
        return _DASHBOARDS[UserRole(role)]
    except ValueError:
        return Routes.LOGIN


def find_prefix_collisions(items: Iterable[NavItem] = NAV_ITEMS) -> List[Tuple[str, str]]:
    """
    Pairs (shorter, longer) of paths shown to a common role where the shorter,
    non-exact path is a plain string prefix of the longer one.
    """
    items = list(items)
    collisions = []
    for short in items:
        if short.exact:
            continue
        for long in items:
            if long.path == short.path or not set(short.roles) & set(long.roles):
                continue
            if long.path.startswith(short.path):
                collisions.append((short.path, long.path))
    return collisions
