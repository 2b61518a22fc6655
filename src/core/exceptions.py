"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the catalog services."""

    # Not found errors (404)
    TAG_NOT_FOUND = "TAG_NOT_FOUND"
    TAG_MAPPING_NOT_FOUND = "TAG_MAPPING_NOT_FOUND"

    # Validation errors (400)
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class InvalidArgumentError(AppException):
    """A required argument was missing or malformed."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_ARGUMENT,
            message=message or f"Invalid argument: {argument}",
            status_code=400,
            details={"argument": argument},
        )


class TagNotFoundError(AppException):
    """Tag not found."""

    def __init__(self, tag_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TAG_NOT_FOUND,
            message=f"Tag not found: {tag_id}",
            status_code=404,
            details={"tag_id": tag_id},
        )


class TagMappingNotFoundError(AppException):
    """Item-tag mapping expected at mutation time is missing."""

    def __init__(self, item_id: str, tag_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TAG_MAPPING_NOT_FOUND,
            message=f"Tag mapping not found: item {item_id}, tag {tag_id}",
            status_code=404,
            details={"item_id": item_id, "tag_id": tag_id},
        )
