import pytest

from medportal.models.orm.user import UserRole
from medportal.services.navigation import (
    NAV_ITEMS,
    NavItem,
    Routes,
    dashboard_path,
    find_prefix_collisions,
    is_active,
    visible_items,
)


def paths(items):
    return [item.path for item in items]


def test_super_admin_sees_admin_screens_in_order():
    assert paths(visible_items(UserRole.SUPER_ADMIN)) == [
        Routes.SUPER_ADMIN_DASHBOARD,
        Routes.SUPER_ADMIN_MANAGERS,
        Routes.SUPER_ADMIN_REPRESENTATIVES,
        Routes.SUPER_ADMIN_DOCTORS,
        Routes.SUPER_ADMIN_CLINICS,
        Routes.SUPER_ADMIN_SPECIALIZATIONS,
        Routes.SUPER_ADMIN_BRANDS,
        Routes.SUPER_ADMIN_PRODUCTS,
        Routes.SUPER_ADMIN_REPORTS,
        Routes.NOTIFICATIONS,
    ]


def test_rep_sees_only_rep_screens():
    assert paths(visible_items(UserRole.REP)) == [
        Routes.REP_DASHBOARD,
        Routes.REP_SCHEDULE,
        Routes.REP_VISITS,
        Routes.REP_BRANDS,
        Routes.NOTIFICATIONS,
    ]


def test_manager_items_are_a_filtered_subsequence():
    manager_items = visible_items(UserRole.MANAGER)
    assert all(UserRole.MANAGER in item.roles for item in manager_items)
    positions = [NAV_ITEMS.index(item) for item in manager_items]
    assert positions == sorted(positions)


def test_no_role_sees_nothing():
    assert visible_items(None) == []


@pytest.mark.parametrize(
    "current, item, exact, expected",
    [
        ("/super-admin/managers", "/super-admin/managers", False, True),
        ("/super-admin/managers/new", "/super-admin/managers", False, True),
        ("/super-admin/managers/42/edit", "/super-admin/managers", False, True),
        ("/super-admin/doctors", "/super-admin/doctor", False, False),
        ("/super-admin/dashboard", "/super-admin/dashboard", True, True),
        ("/super-admin/dashboard/stats", "/super-admin/dashboard", True, False),
        ("/doctors", "/doctors/", False, False),
        ("/doctors/1", "/doctors/", False, True),
        ("/reports", "/representatives", False, False),
    ],
)
def test_is_active(current, item, exact, expected):
    assert is_active(current, item, exact) is expected


def test_static_configuration_has_no_prefix_collisions():
    assert find_prefix_collisions(NAV_ITEMS) == []


def test_prefix_collisions_are_detected():
    items = [
        NavItem("/super-admin/doctor", "Doctor", (UserRole.SUPER_ADMIN,)),
        NavItem("/super-admin/doctors", "Doctors", (UserRole.SUPER_ADMIN,)),
        NavItem("/super-admin/doctors-archive", "Archive", (UserRole.REP,)),
    ]
    assert find_prefix_collisions(items) == [("/super-admin/doctor", "/super-admin/doctors")]


@pytest.mark.parametrize(
    "role, expected",
    [
        (UserRole.SUPER_ADMIN, "/super-admin/dashboard"),
        (UserRole.MANAGER, "/dashboard/manager"),
        (UserRole.REP, "/dashboard/rep"),
        ("rep", "/dashboard/rep"),
        ("auditor", "/login"),
        (None, "/login"),
    ],
)
def test_dashboard_path(role, expected):
    assert dashboard_path(role) == expected


def test_navigation_endpoint_marks_active_item(client, admin_headers):
    response = client.get(
        "/navigation",
        params={"current_path": "/super-admin/managers/new"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    body = response.json()

    assert body["dashboard_path"] == "/super-admin/dashboard"
    active = [item["path"] for item in body["items"] if item["active"]]
    assert active == ["/super-admin/managers"]


def test_navigation_requires_a_session(client):
    response = client.get("/navigation")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
