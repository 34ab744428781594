"""Domain exceptions.

All client-level errors: invalid moderation transitions, form validation
failures, client-side role gating and failed backend calls. Services catch
these at their boundary and turn them into notifications or error events.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateTransitionError(DomainError):
    """Raised when an invalid publication status transition is attempted."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            entity_type: Type of entity (e.g., "Product").
            entity_id: ID of the entity.
            current_state: Current state of the entity.
            target_state: Attempted target state.
            allowed_transitions: List of allowed target states from current state.
        """
        allowed = allowed_transitions or []
        message = (
            f"Cannot transition {entity_type}({entity_id}) "
            f"from '{current_state}' to '{target_state}'. "
            f"Allowed transitions: {allowed}"
        )
        super().__init__(
            message,
            details={
                "entity_type": entity_type,
                "entity_id": entity_id,
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )


# ============================================================================
# Authoring Errors
# ============================================================================


class ValidationError(DomainError):
    """Raised when a product draft fails validation."""

    def __init__(self, field: str, reason: str) -> None:
        """Initialize validation error.

        Args:
            field: Name of the offending draft field.
            reason: Explanation of why the value is invalid.
        """
        super().__init__(
            f"Invalid {field}: {reason}",
            details={"field": field, "reason": reason},
        )
        self.field = field


# ============================================================================
# Access Errors
# ============================================================================


class NotAuthenticatedError(DomainError):
    """Raised when an operation needs a logged-in user and there is none."""

    def __init__(self, action: str) -> None:
        super().__init__(
            f"Login required to {action}",
            details={"action": action},
        )


class PermissionDeniedError(DomainError):
    """Raised when the logged-in user's role does not grant access."""

    def __init__(self, role: str, required: list[str]) -> None:
        """Initialize permission denied error.

        Args:
            role: Role of the current user.
            required: Roles that would grant access.
        """
        super().__init__(
            f"Role '{role}' is not allowed here. Required one of: {required}",
            details={"role": role, "required": required},
        )


# ============================================================================
# Backend Errors
# ============================================================================


class CatalogAPIError(DomainError):
    """Raised when a backend call fails or returns an unusable payload."""

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog API error.

        Args:
            message: Human-readable failure reason.
            error_code: Machine-readable error code.
            status_code: HTTP status code if one was received.
            details: Optional backend-supplied error details.
        """
        super().__init__(message, details=details)
        self.error_code = error_code
        self.status_code = status_code
