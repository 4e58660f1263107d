"""
Response normalization for CFM searches.

Turns the raw ``{"status": ..., "dados": [...]}`` answer into a SearchResult.
Bad field values inside a successful answer never raise: every field degrades
to a default or None so one broken row can't sink the whole page. Only an
answer whose rows aren't a list of objects is rejected.
"""
import logging
import re
from datetime import date, datetime
from typing import Any, Mapping, Optional

from cfm.base import DoctorRecord, DoctorStatus, RegistrationType, SearchResult
from cfm.constants import RQE_PATTERN, SPECIALTY_PATTERN, SUCCESS_STATUS
from cfm.errors import UpstreamError

logger = logging.getLogger(__name__)

STATUS_MAP: dict[str, DoctorStatus] = {
    "A": DoctorStatus.REGULAR,
    "I": DoctorStatus.IRREGULAR,
    "S": DoctorStatus.SUSPENDED,
    "C": DoctorStatus.CANCELED,
}

REGISTRATION_TYPE_MAP: dict[str, RegistrationType] = {
    "P": RegistrationType.PRINCIPAL,
    "S": RegistrationType.SECONDARY,
    "T": RegistrationType.TEMPORARY,
}

DATE_FORMAT = "%d/%m/%Y"

_DIGITS = re.compile(r"[0-9]+")


def parse_status(code: Optional[str]) -> DoctorStatus:
    """Unknown codes count as irregular."""
    return STATUS_MAP.get(code or "", DoctorStatus.IRREGULAR)


def parse_registration_type(code: Optional[str]) -> RegistrationType:
    return REGISTRATION_TYPE_MAP.get(code or "", RegistrationType.PRINCIPAL)


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a DD/MM/YYYY date, returning None when it can't be read."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except (ValueError, AttributeError):
        logger.debug(f"Unparseable date: {value!r}")
        return None


def _parse_int(value: Any) -> Optional[int]:
    """Plain ASCII digit runs only; signs, underscores and other scripts give None."""
    if value is None:
        return None
    value = str(value).strip()
    if not _DIGITS.fullmatch(value):
        return None
    return int(value)


def parse_graduation_year(value: Optional[str]) -> Optional[int]:
    return _parse_int(value)


def extract_rqe(specialty: Optional[str]) -> Optional[str]:
    """Pull the RQE number out of a raw specialty string."""
    if not specialty:
        return None
    match = RQE_PATTERN.search(specialty)
    return match.group(1) if match else None


def clean_specialty(specialty: Optional[str]) -> Optional[str]:
    """Drop the leading ``&`` and the RQE suffix, then capitalize.

    "&PSIQUIATRIA - RQE Nº: 36584" -> "Psiquiatria"
    """
    if not specialty or not specialty.lstrip("&").strip():
        return None
    match = SPECIALTY_PATTERN.match(specialty)
    if not match:
        return None
    cleaned = match.group(1).strip()
    if not cleaned:
        return None
    return cleaned[0].upper() + cleaned[1:].lower()


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_doctor(raw: Mapping[str, Any]) -> DoctorRecord:
    """Map one raw API row to a DoctorRecord."""
    specialty = raw.get("ESPECIALIDADE")
    return DoctorRecord(
        name=raw.get("NM_MEDICO") or "",
        social_name=_optional_text(raw.get("NM_SOCIAL")),
        crm=str(raw.get("NU_CRM") or ""),
        state=raw.get("SG_UF") or "",
        status=parse_status(raw.get("COD_SITUACAO")),
        registration_type=parse_registration_type(raw.get("IN_TIPO_INSCRICAO")),
        registration_date=parse_date(raw.get("DT_INSCRICAO")),
        specialty=clean_specialty(specialty),
        rqe=extract_rqe(specialty),
        graduation_institution=_optional_text(raw.get("NM_INSTITUICAO_GRADUACAO")),
        graduation_year=parse_graduation_year(raw.get("DT_GRADUACAO")),
    )


def _parse_total(rows: list, fallback: int) -> int:
    if not rows:
        return fallback
    total = _parse_int(rows[0].get("COUNT"))
    return fallback if total is None else total


def parse_response(response: Mapping[str, Any]) -> SearchResult:
    """Parse a raw API answer into a SearchResult.

    Raises UpstreamError when the status discriminator isn't "sucesso",
    whatever rows came with it.
    """
    status = response.get("status")
    if status != SUCCESS_STATUS:
        raise UpstreamError(f"API returned error status: {status}", status=status)

    rows = response.get("dados")
    if rows is None:
        rows = []
    if not isinstance(rows, list):
        raise UpstreamError(
            f"API returned malformed rows: expected a list, got {type(rows).__name__}",
            status=status,
        )
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise UpstreamError(
                f"API returned malformed row {index}: expected an object, got {type(row).__name__}",
                status=status,
            )

    doctors = tuple(parse_doctor(row) for row in rows)
    total = _parse_total(rows, len(doctors))

    logger.info(f"CFM: parsed {len(doctors)} of {total} doctor(s)")
    return SearchResult(doctors=doctors, total=total)
