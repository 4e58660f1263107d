# Value objects shared by the validator, parser and query façade
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


class DoctorStatus(str, Enum):
    REGULAR = "regular"
    IRREGULAR = "irregular"
    SUSPENDED = "suspended"
    CANCELED = "canceled"


class RegistrationType(str, Enum):
    PRINCIPAL = "principal"
    SECONDARY = "secondary"
    TEMPORARY = "temporary"


@dataclass(frozen=True)
class SearchCriteria:
    """What to look up. Only ``state`` is required by the API."""

    state: Optional[str] = None     # UF, e.g. "RS"
    crm: Optional[str] = None       # Registration number, digits only
    name: Optional[str] = None      # Partial match on the doctor's name


@dataclass(frozen=True)
class DoctorRecord:
    """Normalized physician entry from a CFM search."""

    name: str
    crm: str
    state: str
    status: DoctorStatus
    registration_type: RegistrationType
    registration_date: Optional[date]   # None when the upstream date is malformed
    social_name: Optional[str] = None
    specialty: Optional[str] = None     # e.g. "Psiquiatria"
    rqe: Optional[str] = None           # Specialty registration (RQE) number
    graduation_institution: Optional[str] = None
    graduation_year: Optional[int] = None

    @property
    def is_active(self) -> bool:
        """Only a regular registration allows the doctor to practice."""
        return self.status is DoctorStatus.REGULAR

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "socialName": self.social_name,
            "crm": self.crm,
            "state": self.state,
            "status": self.status.value,
            "registrationType": self.registration_type.value,
            "registrationDate": (
                self.registration_date.isoformat() if self.registration_date else None
            ),
            "specialty": self.specialty,
            "rqe": self.rqe,
            "graduationInstitution": self.graduation_institution,
            "graduationYear": self.graduation_year,
        }


@dataclass(frozen=True)
class SearchResult:
    """One page of doctors plus the upstream's total match count."""

    doctors: tuple[DoctorRecord, ...] = field(default_factory=tuple)
    total: int = 0

    def __len__(self) -> int:
        return len(self.doctors)

    def __iter__(self):
        return iter(self.doctors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "doctors": [doctor.to_dict() for doctor in self.doctors],
            "total": self.total,
        }
