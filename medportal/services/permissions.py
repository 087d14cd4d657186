import enum
from typing import Dict, FrozenSet, List, Optional

from medportal.models.orm.user import UserRole

SUPER_ADMIN = frozenset({UserRole.SUPER_ADMIN})
ADMIN_AND_MANAGER = frozenset({UserRole.SUPER_ADMIN, UserRole.MANAGER})
EVERY_ROLE = frozenset(UserRole)


class Permission(str, enum.Enum):
    # Doctor management
    CREATE_DOCTOR = "create_doctor"
    EDIT_DOCTOR = "edit_doctor"
    DELETE_DOCTOR = "delete_doctor"
    VIEW_DOCTORS = "view_doctors"

    # Specializations
    CREATE_SPECIALIZATION = "create_specialization"
    EDIT_SPECIALIZATION = "edit_specialization"
    DELETE_SPECIALIZATION = "delete_specialization"
    VIEW_SPECIALIZATIONS = "view_specializations"

    # Clinics
    CREATE_CLINIC = "create_clinic"
    EDIT_CLINIC = "edit_clinic"
    DELETE_CLINIC = "delete_clinic"
    VIEW_CLINICS = "view_clinics"

    # Brand management
    CREATE_BRAND = "create_brand"
    EDIT_BRAND = "edit_brand"
    DELETE_BRAND = "delete_brand"
    VIEW_BRANDS = "view_brands"

    # Product management
    CREATE_PRODUCT = "create_product"
    EDIT_PRODUCT = "edit_product"
    DELETE_PRODUCT = "delete_product"
    VIEW_PRODUCTS = "view_products"

    # Assignment management
    CREATE_ASSIGNMENT = "create_assignment"
    EDIT_ASSIGNMENT = "edit_assignment"
    DELETE_ASSIGNMENT = "delete_assignment"
    VIEW_ASSIGNMENTS = "view_assignments"

    # Representative management
    CREATE_REPRESENTATIVE = "create_representative"
    EDIT_REPRESENTATIVE = "edit_representative"
    DELETE_REPRESENTATIVE = "delete_representative"
    VIEW_REPRESENTATIVES = "view_representatives"

    # Manager management
    CREATE_MANAGER = "create_manager"
    EDIT_MANAGER = "edit_manager"
    DELETE_MANAGER = "delete_manager"
    VIEW_MANAGERS = "view_managers"

    # Reports and analytics
    VIEW_REPORTS = "view_reports"


PERMISSIONS: Dict[Permission, FrozenSet[UserRole]] = {
    Permission.CREATE_DOCTOR: SUPER_ADMIN,
    Permission.EDIT_DOCTOR: SUPER_ADMIN,
    Permission.DELETE_DOCTOR: SUPER_ADMIN,
    Permission.VIEW_DOCTORS: EVERY_ROLE,
    Permission.CREATE_SPECIALIZATION: SUPER_ADMIN,
    Permission.EDIT_SPECIALIZATION: SUPER_ADMIN,
    Permission.DELETE_SPECIALIZATION: SUPER_ADMIN,
    Permission.VIEW_SPECIALIZATIONS: EVERY_ROLE,
    Permission.CREATE_CLINIC: SUPER_ADMIN,
    Permission.EDIT_CLINIC: SUPER_ADMIN,
    Permission.DELETE_CLINIC: SUPER_ADMIN,
    Permission.VIEW_CLINICS: EVERY_ROLE,
    Permission.CREATE_BRAND: SUPER_ADMIN,
    Permission.EDIT_BRAND: SUPER_ADMIN,
    Permission.DELETE_BRAND: SUPER_ADMIN,
    Permission.VIEW_BRANDS: EVERY_ROLE,
    Permission.CREATE_PRODUCT: SUPER_ADMIN,
    Permission.EDIT_PRODUCT: SUPER_ADMIN,
    Permission.DELETE_PRODUCT: SUPER_ADMIN,
    Permission.VIEW_PRODUCTS: EVERY_ROLE,
    Permission.CREATE_ASSIGNMENT: ADMIN_AND_MANAGER,
    Permission.EDIT_ASSIGNMENT: ADMIN_AND_MANAGER,
    Permission.DELETE_ASSIGNMENT: ADMIN_AND_MANAGER,
    Permission.VIEW_ASSIGNMENTS: EVERY_ROLE,
    Permission.CREATE_REPRESENTATIVE: ADMIN_AND_MANAGER,
    Permission.EDIT_REPRESENTATIVE: ADMIN_AND_MANAGER,
    Permission.DELETE_REPRESENTATIVE: ADMIN_AND_MANAGER,
    Permission.VIEW_REPRESENTATIVES: ADMIN_AND_MANAGER,
    Permission.CREATE_MANAGER: SUPER_ADMIN,
    Permission.EDIT_MANAGER: SUPER_ADMIN,
    Permission.DELETE_MANAGER: SUPER_ADMIN,
    Permission.VIEW_MANAGERS: SUPER_ADMIN,
    Permission.VIEW_REPORTS: ADMIN_AND_MANAGER,
}


def has_permission(role: Optional[UserRole], permission: Permission) -> bool:
    """Check if a role holds a permission. No role, no permissions."""
    if role is None:
        return False
    return role in PERMISSIONS[permission]


def granted_permissions(role: Optional[UserRole]) -> List[Permission]:
    """Every permission the role holds, in declaration order."""
    return [permission for permission in Permission if has_permission(role, permission)]


def unauthorized_message(action: str) -> str:
    return f"You don't have permission to {action}."
