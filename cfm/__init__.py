# CFM doctor lookup — query Brazilian physicians through the CFM portal API
from cfm.base import DoctorRecord, DoctorStatus, RegistrationType, SearchCriteria, SearchResult
from cfm.client import CFMClient
from cfm.constants import VALID_STATES
from cfm.errors import (
    CRMQueryError,
    ErrorCode,
    InvalidName,
    InvalidRegistrationNumber,
    InvalidState,
    NetworkError,
    UpstreamError,
)
from cfm.query import DoctorQuery, search
from cfm.validation import validate_criteria

__all__ = [
    "CFMClient",
    "CRMQueryError",
    "DoctorQuery",
    "DoctorRecord",
    "DoctorStatus",
    "ErrorCode",
    "InvalidName",
    "InvalidRegistrationNumber",
    "InvalidState",
    "NetworkError",
    "RegistrationType",
    "SearchCriteria",
    "SearchResult",
    "UpstreamError",
    "VALID_STATES",
    "search",
    "validate_criteria",
]
