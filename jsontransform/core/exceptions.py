"""
Custom exception hierarchy for the application.

All application-specific exceptions inherit from AppException,
enabling consistent error handling and structured error responses.

Hierarchy:
    AppException
    ├── TransformationException              — Errors during document remapping
    │   ├── MalformedMapException            — Map document has the wrong shape (fatal)
    │   │   └── DuplicateDestinationFieldException
    │   └── MappingFieldException            — A single field could not be resolved
    │       ├── MissingSourceFieldException
    │       └── NestedValueValidationException
    ├── ValidationException                  — Input/output data validation failures
    └── NotFoundException                    — Requested resource not found

Field-level exceptions (MappingFieldException and below) are collected as
diagnostics by the mapper rather than propagated out of a transform.
"""

from typing import Any


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:     Human-readable error description.
        status_code: HTTP status code to return to the client.
        error_code:  Machine-readable error identifier (e.g. "MALFORMED_MAP").
        details:     Optional dict with extra context for debugging.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred.",
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the exception into a JSON-friendly dict."""
        payload: dict[str, Any] = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


# ─── Transformation Errors ───────────────────────────────────────────


class TransformationException(AppException):
    """Raised when data transformation/mapping fails."""

    def __init__(
        self,
        message: str = "Data transformation failed.",
        status_code: int = 422,
        error_code: str = "TRANSFORMATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code, error_code, details)


class MalformedMapException(TransformationException):
    """
    Raised when the map document is not an object of objects of strings.

    Fatal: the transform is aborted before any output is produced.
    """

    def __init__(
        self,
        message: str = "Map document is malformed.",
        path: str = "",
        error_code: str = "MALFORMED_MAP",
        details: dict[str, Any] | None = None,
    ) -> None:
        extra = {"path": path} if path else {}
        super().__init__(
            message=message,
            status_code=422,
            error_code=error_code,
            details={**(details or {}), **extra},
        )


class DuplicateDestinationFieldException(MalformedMapException):
    """Raised when one group-spec names the same destination field twice."""

    def __init__(
        self,
        group: str,
        field_name: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=(
                f"Destination field '{field_name}' is declared more than once "
                f"in group '{group}'."
            ),
            path=f"{group}.{field_name}",
            error_code="DUPLICATE_DESTINATION_FIELD",
            details={**(details or {}), "group": group, "field": field_name},
        )


class MappingFieldException(TransformationException):
    """Raised when a specific field cannot be mapped."""

    def __init__(
        self,
        field_name: str,
        reason: str = "Field mapping failed.",
        error_code: str = "MAPPING_FIELD_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.field_name = field_name
        self.reason = reason
        super().__init__(
            message=f"Failed to map field '{field_name}': {reason}",
            status_code=422,
            error_code=error_code,
            details={**(details or {}), "field": field_name},
        )


class MissingSourceFieldException(MappingFieldException):
    """Raised when the input document has no member named by the map."""

    def __init__(
        self,
        field_name: str,
        source_field: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.source_field = source_field
        super().__init__(
            field_name=field_name,
            reason=f"Source field '{source_field}' not found in input document.",
            error_code="MISSING_SOURCE_FIELD",
            details={**(details or {}), "source_field": source_field},
        )


class NestedValueValidationException(MappingFieldException):
    """Raised when a structured value does not survive JSON re-validation."""

    def __init__(
        self,
        field_name: str,
        source_field: str,
        reason: str = "Nested value is not valid JSON.",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.source_field = source_field
        super().__init__(
            field_name=field_name,
            reason=reason,
            error_code="NESTED_VALUE_INVALID",
            details={**(details or {}), "source_field": source_field},
        )


# ─── Validation Errors ───────────────────────────────────────────────


class ValidationException(AppException):
    """Raised when request or response data fails validation."""

    def __init__(
        self,
        message: str = "Validation error.",
        status_code: int = 422,
        error_code: str = "VALIDATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code, error_code, details)


# ─── Not Found ────────────────────────────────────────────────────────


class NotFoundException(AppException):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found.",
        status_code: int = 404,
        error_code: str = "NOT_FOUND",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code, error_code, details)
