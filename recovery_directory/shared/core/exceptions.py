# 📄 File: recovery_directory/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# Defines the kinds of errors the directory can report (not found, not allowed,
# bad input, a claim that breaks the rules) so callers get a clear message.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy with HTTP status codes, error codes and details,
# serialized into the API error envelope by the exception handlers in main.py.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# Domain services, repository implementations, storage, auth dependencies, middleware

from typing import Any, Dict, Optional

from fastapi import status


class RecoveryDirectoryException(Exception):
    """
    Base exception class for the Recovery Directory.
    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(RecoveryDirectoryException):
    """Raised when credentials or tokens are invalid or missing."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class AuthorizationError(RecoveryDirectoryException):
    """
    Raised when the caller lacks permission for a resource.
    Covers non-admin callers on admin routes, non-owners editing a listing,
    and suspended accounts.
    """

    def __init__(
        self,
        message: str = "Access denied",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        required_role: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if required_role:
            details["required_role"] = required_role
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="AUTHORIZATION_ERROR"
        )


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(RecoveryDirectoryException):
    """Raised when input data doesn't meet validation requirements."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        errors: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if errors:
            details["errors"] = list(errors)

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(RecoveryDirectoryException):
    """Raised when a requested facility, claim, user or term does not exist."""

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class DuplicateResourceError(RecoveryDirectoryException):
    """Raised when creating something that already exists."""

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if field:
            details["field"] = field
        if value:
            details["value"] = value

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="DUPLICATE_RESOURCE"
        )


# =============================================================================
# BUSINESS LOGIC EXCEPTIONS
# =============================================================================

class BusinessRuleViolationError(RecoveryDirectoryException):
    """
    Raised when a domain rule is violated, e.g. an illegal moderation
    transition or a claim on an already claimed facility.
    """

    def __init__(
        self,
        message: str = "Business rule violation",
        rule: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if rule:
            details["rule"] = rule
        if context:
            details["context"] = context

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code="BUSINESS_RULE_VIOLATION"
        )


class InvalidTransitionError(BusinessRuleViolationError):
    """Raised when a status change is not in the allowed transition table."""

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(
            message=f"Cannot move {entity} from '{current}' to '{target}'",
            rule="status_transition",
            context={"entity": entity, "from": current, "to": target},
        )


class RateLimitError(RecoveryDirectoryException):
    """Raised when a caller exceeds a rate limit."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        limit: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if limit:
            details["limit"] = limit

        super().__init__(
            message=message,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            details=details,
            error_code="RATE_LIMIT_EXCEEDED"
        )


# =============================================================================
# EXTERNAL SERVICE EXCEPTIONS
# =============================================================================

class ExternalServiceError(RecoveryDirectoryException):
    """Raised when Supabase or Stripe calls fail."""

    def __init__(
        self,
        message: str = "External service error",
        service: Optional[str] = None,
        service_response: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "EXTERNAL_SERVICE_ERROR"
    ):
        if not details:
            details = {}

        if service:
            details["service"] = service
        if service_response:
            details["service_response"] = service_response

        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
            error_code=error_code
        )


class PaymentError(ExternalServiceError):
    """Raised when a Stripe operation fails."""

    def __init__(self, message: str = "Payment provider error", service_response: Optional[str] = None):
        super().__init__(
            message=message,
            service="stripe",
            service_response=service_response,
            error_code="PAYMENT_ERROR"
        )


class StorageError(ExternalServiceError):
    """Raised when an upload or delete against blob storage fails."""

    def __init__(self, message: str = "File storage error", path: Optional[str] = None):
        super().__init__(
            message=message,
            service="supabase_storage",
            details={"path": path} if path else None,
            error_code="STORAGE_ERROR"
        )


# =============================================================================
# FILE EXCEPTIONS
# =============================================================================

class FileTooLargeError(RecoveryDirectoryException):
    """Raised when an upload exceeds MAX_IMAGE_SIZE."""

    def __init__(self, size: int, max_size: int):
        super().__init__(
            message=f"File size {size} bytes exceeds maximum of {max_size} bytes",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            details={"size": size, "max_size": max_size},
            error_code="FILE_TOO_LARGE"
        )


class InvalidFileTypeError(RecoveryDirectoryException):
    """Raised when an upload is not an image."""

    def __init__(self, content_type: Optional[str], message: str = "Only image uploads are allowed"):
        super().__init__(
            message=message,
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            details={"content_type": content_type},
            error_code="INVALID_FILE_TYPE"
        )


# =============================================================================
# DATABASE & INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class DatabaseError(RecoveryDirectoryException):
    """Raised for connection issues and session failures."""

    def __init__(
        self,
        message: str = "Database error",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="DATABASE_ERROR"
        )


class RepositoryError(RecoveryDirectoryException):
    """Raised by repository implementations when a query or write fails."""

    def __init__(
        self,
        message: str = "Repository operation failed",
        repository: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if repository:
            details["repository"] = repository
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="REPOSITORY_ERROR"
        )


class WebhookSignatureError(RecoveryDirectoryException):
    """Raised when a webhook payload fails signature verification."""

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="INVALID_WEBHOOK_SIGNATURE"
        )
