"""
Error codes for redshift-credentials.

Error codes follow the format: RSC-{Component}-{HTTP_Code}-{Unique_ID}

Components:
- Credentials: Errors not tied to one component
- Request: Caller input errors
- Resolver: Target discovery and selection errors
- AWS: Remote call errors
"""

from enum import Enum
from typing import Dict


class ErrorComponent(Enum):
    """Components that can generate errors in the system."""

    CREDENTIALS = "Credentials"
    REQUEST = "Request"
    RESOLVER = "Resolver"
    AWS = "AWS"


class ErrorCode:
    """Error code with component, HTTP code, and description."""

    def __init__(
        self, component: str, http_code: str, unique_id: str, description: str
    ):
        self.code = f"RSC-{component}-{http_code}-{unique_id}"
        self.description = description

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


# General Errors
GENERAL_ERRORS = {
    "REDSHIFT_CREDENTIALS_ERROR": ErrorCode(
        ErrorComponent.CREDENTIALS.value, "500", "00", "Redshift credentials error"
    ),
}

# Request Errors
REQUEST_ERRORS = {
    "INVALID_REQUEST_ERROR": ErrorCode(
        ErrorComponent.REQUEST.value, "400", "00", "Invalid credentials request"
    ),
    "INVALID_ENDPOINT_ERROR": ErrorCode(
        ErrorComponent.REQUEST.value, "400", "01", "Endpoint can not parse as URL"
    ),
}

# Resolver Errors
RESOLVER_ERRORS = {
    "NO_TARGET_FOUND_ERROR": ErrorCode(
        ErrorComponent.RESOLVER.value, "404", "00", "No Redshift target found"
    ),
    "AMBIGUOUS_SELECTION_ERROR": ErrorCode(
        ErrorComponent.RESOLVER.value,
        "409",
        "00",
        "Automatic selection was not possible",
    ),
    "SELECTION_FAILED_ERROR": ErrorCode(
        ErrorComponent.RESOLVER.value, "400", "00", "Manual selection failed"
    ),
    "TARGET_NOT_FOUND_ERROR": ErrorCode(
        ErrorComponent.RESOLVER.value, "404", "01", "Redshift target not found"
    ),
    "UNRESOLVED_TARGET_ERROR": ErrorCode(
        ErrorComponent.RESOLVER.value, "500", "00", "Redshift target unresolved"
    ),
}

# AWS Errors
AWS_ERRORS = {
    "REMOTE_CALL_ERROR": ErrorCode(
        ErrorComponent.AWS.value, "502", "00", "AWS API call failed"
    ),
}

# Combined dictionary of all error codes
ERROR_CODES: Dict[str, ErrorCode] = {
    **GENERAL_ERRORS,
    **REQUEST_ERRORS,
    **RESOLVER_ERRORS,
    **AWS_ERRORS,
}
