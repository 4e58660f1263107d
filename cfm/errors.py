"""
Error taxonomy for CFM lookups.

Validation failures are raised before any network call. Transport and
upstream failures are wrapped into the same hierarchy so callers only need
to catch ``CRMQueryError``.
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Discriminant carried by every CRMQueryError."""
    INVALID_STATE = "INVALID_STATE"
    INVALID_CRM = "INVALID_CRM"
    INVALID_NAME = "INVALID_NAME"
    NETWORK_ERROR = "NETWORK_ERROR"
    API_ERROR = "API_ERROR"


class CRMQueryError(Exception):
    """Base exception for CFM lookups."""

    code: ErrorCode = ErrorCode.API_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "cause": repr(self.cause) if self.cause is not None else None,
        }


class InvalidState(CRMQueryError):
    code = ErrorCode.INVALID_STATE


class InvalidRegistrationNumber(CRMQueryError):
    code = ErrorCode.INVALID_CRM


class InvalidName(CRMQueryError):
    code = ErrorCode.INVALID_NAME


class NetworkError(CRMQueryError):
    code = ErrorCode.NETWORK_ERROR


class UpstreamError(CRMQueryError):
    """The API answered, but not with a successful search."""

    code = ErrorCode.API_ERROR

    def __init__(
        self,
        message: str,
        status: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause)
        self.status = status
