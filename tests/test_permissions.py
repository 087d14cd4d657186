import pytest

from medportal.models.orm.user import UserRole
from medportal.services.permissions import (
    PERMISSIONS,
    Permission,
    granted_permissions,
    has_permission,
    unauthorized_message,
)


def test_every_permission_is_mapped():
    assert set(PERMISSIONS) == set(Permission)


@pytest.mark.parametrize(
    "role, permission, expected",
    [
        (UserRole.SUPER_ADMIN, Permission.CREATE_DOCTOR, True),
        (UserRole.MANAGER, Permission.CREATE_DOCTOR, False),
        (UserRole.REP, Permission.VIEW_DOCTORS, True),
        (UserRole.MANAGER, Permission.CREATE_ASSIGNMENT, True),
        (UserRole.REP, Permission.CREATE_ASSIGNMENT, False),
        (UserRole.REP, Permission.VIEW_ASSIGNMENTS, True),
        (UserRole.MANAGER, Permission.CREATE_REPRESENTATIVE, True),
        (UserRole.REP, Permission.VIEW_REPRESENTATIVES, False),
        (UserRole.MANAGER, Permission.VIEW_MANAGERS, False),
        (UserRole.MANAGER, Permission.EDIT_SPECIALIZATION, False),
        (UserRole.SUPER_ADMIN, Permission.DELETE_SPECIALIZATION, True),
        (UserRole.MANAGER, Permission.EDIT_ASSIGNMENT, True),
        (UserRole.MANAGER, Permission.EDIT_MANAGER, False),
        (UserRole.MANAGER, Permission.VIEW_REPORTS, True),
        (UserRole.REP, Permission.VIEW_REPORTS, False),
    ],
)
def test_has_permission(role, permission, expected):
    assert has_permission(role, permission) is expected


def test_missing_role_has_no_permissions():
    assert not any(has_permission(None, permission) for permission in Permission)
    assert granted_permissions(None) == []


def test_super_admin_holds_everything():
    assert granted_permissions(UserRole.SUPER_ADMIN) == list(Permission)


def test_rep_is_read_only():
    granted = granted_permissions(UserRole.REP)
    assert granted
    assert all(permission.value.startswith("view_") for permission in granted)


def test_unauthorized_message():
    assert unauthorized_message("delete brands") == "You don't have permission to delete brands."
