"""Registration data model."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class RegistrationType(str, Enum):
    """Attendee category."""

    STUDENT = "student"
    PROFESSIONAL = "professional"

    @property
    def label(self) -> str:
        return self.value.capitalize()


REGISTRATION_TYPES = tuple(t.value for t in RegistrationType)


@dataclass(frozen=True)
class RegistrationPayload:
    """Validated registration input that has not been stored yet."""

    name: str
    email: str
    registration_type: RegistrationType
    company: Optional[str] = None
    phone: Optional[str] = None

    def __post_init__(self):
        """Coerce registration type to the enum."""
        if not isinstance(self.registration_type, RegistrationType):
            try:
                object.__setattr__(self, "registration_type", RegistrationType(self.registration_type))
            except ValueError as e:
                raise ValueError(f"Invalid registration type: {self.registration_type}") from e


@dataclass(frozen=True)
class Registration:
    """Stored attendee registration."""

    id: str
    name: str
    email: str
    registration_type: RegistrationType
    created_at: datetime
    company: Optional[str] = None
    phone: Optional[str] = None

    def __post_init__(self):
        """Validate registration data after initialization."""
        if not self.id:
            raise ValueError("Registration ID cannot be empty")

        if not isinstance(self.registration_type, RegistrationType):
            try:
                object.__setattr__(self, "registration_type", RegistrationType(self.registration_type))
            except ValueError as e:
                raise ValueError(f"Invalid registration type: {self.registration_type}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape returned by the API."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "registration_type": self.registration_type.value,
            "company": self.company,
            "phone": self.phone,
            "created_at": self.created_at.isoformat(),
        }
