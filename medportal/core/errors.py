# =============================================================================
# Exceptions for the medical sales portal
# =============================================================================

from typing import Dict, Optional

from starlette import status


class PortalError(Exception):
    """Base exception class for the portal. Carries its HTTP mapping."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "portal_error"
    message: str = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


# --- Form validation ---------------------------------------------------------


class ValidationError(PortalError):
    """Raised when a submitted form breaks a business rule. Nothing is persisted."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_error"
    message = "The form is invalid."


class MissingRepresentative(ValidationError):
    code = "missing_representative"
    message = "Please select a representative."


class NoDoctorsSelected(ValidationError):
    code = "no_doctors_selected"
    message = "Please select at least one doctor."


class NoProductsSelected(ValidationError):
    code = "no_products_selected"
    message = "Please select at least one product."


# --- Record store ------------------------------------------------------------


class CollaboratorError(PortalError):
    """Raised when the record store fails a read or a write."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "record_store_error"
    message = "The record store is unavailable. Please try again shortly."


class RecordNotFound(CollaboratorError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"

    def __init__(self, label: str, record_id: str):
        self.label = label
        self.record_id = record_id
        super().__init__(f"{label.capitalize()} {record_id} not found.")


class RecordConflict(CollaboratorError):
    """Unique or foreign-key constraint violation."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    message = "The record conflicts with existing data."


class MalformedRecordError(CollaboratorError):
    """A stored row could not be parsed into its typed record."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "malformed_record"
    message = "A stored record is malformed."


# --- Session -----------------------------------------------------------------


class AuthError(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "not_authenticated"
    message = "Could not validate credentials"

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class PermissionDenied(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "permission_denied"
    message = "You don't have permission to perform this action."
