"""
Search criteria validation.

Rules are checked in field order (state, crm, name) and only the first
failure is reported. Fields the schema doesn't know about are dropped.
"""
import dataclasses
import logging
import re
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from cfm.base import SearchCriteria
from cfm.constants import VALID_STATES
from cfm.errors import CRMQueryError, InvalidName, InvalidRegistrationNumber, InvalidState

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")

_FIELD_ERRORS: dict[str, type[CRMQueryError]] = {
    "state": InvalidState,
    "crm": InvalidRegistrationNumber,
    "name": InvalidName,
}

# Used when pydantic rejects a field before our validators run (missing, wrong type)
_DEFAULT_MESSAGES = {
    "state": "State (UF) is required",
    "crm": "CRM must contain only numbers",
    "name": "Name cannot be empty",
}


class _CriteriaSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    state: str
    crm: Optional[str] = None
    name: Optional[str] = None

    @field_validator("state")
    @classmethod
    def normalize_state(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("State (UF) is required")
        if v not in VALID_STATES:
            raise ValueError(f"Invalid state: {v}. Must be a valid Brazilian UF.")
        return v

    @field_validator("crm")
    @classmethod
    def check_crm(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not _DIGITS.fullmatch(v):
            raise ValueError("CRM must contain only numbers")
        return v

    @field_validator("name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        return v


def _as_mapping(criteria: Union[SearchCriteria, Mapping[str, Any], None], fields: dict) -> dict:
    if criteria is None:
        data: dict = {}
    elif isinstance(criteria, SearchCriteria):
        data = dataclasses.asdict(criteria)
    else:
        data = dict(criteria)
    data.update(fields)
    # An unset state must surface as "required", not as a type error on None
    if data.get("state") is None:
        data.pop("state", None)
    return data


def _to_error(exc: ValidationError) -> CRMQueryError:
    first = exc.errors()[0]
    field_name = str(first["loc"][0]) if first["loc"] else "state"
    error_cls = _FIELD_ERRORS.get(field_name, InvalidState)

    if first["type"] == "value_error":
        message = str(first["ctx"]["error"])
    else:
        message = _DEFAULT_MESSAGES.get(field_name, first["msg"])
    return error_cls(message)


def validate_criteria(
    criteria: Union[SearchCriteria, Mapping[str, Any], None] = None, **fields: Any
) -> SearchCriteria:
    """Validate and normalize search criteria.

    Accepts a SearchCriteria, a plain mapping, or keyword arguments (which
    override the mapping). Returns a new SearchCriteria with the state
    upper-cased and the name stripped.

    Raises InvalidState, InvalidRegistrationNumber or InvalidName.
    """
    data = _as_mapping(criteria, fields)
    try:
        schema = _CriteriaSchema.model_validate(data)
    except ValidationError as e:
        error = _to_error(e)
        logger.debug(f"Rejected search criteria {data!r}: {error.message}")
        raise error from None
    return SearchCriteria(state=schema.state, crm=schema.crm, name=schema.name)
