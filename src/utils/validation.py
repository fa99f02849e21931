"""Registration data validation utilities."""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from src.models.registration import REGISTRATION_TYPES, RegistrationType


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FIELD_ORDER = ("name", "email", "registration_type", "company")


class ErrorCode(str, Enum):
    """Kinds of field-level validation failures."""

    REQUIRED = "required"
    INVALID_FORMAT = "invalid_format"
    INVALID_VALUE = "invalid_value"


@dataclass(frozen=True)
class FieldError:
    """A single field validation failure."""

    field: str
    code: ErrorCode
    message: str


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_name(name: Optional[str]) -> Tuple[bool, str]:
    """
    Validate attendee name.

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") if valid
        - (False, "Name is required") if empty or whitespace-only
        - (False, "Name must be text") if not a string
    """
    if _is_blank(name):
        return False, "Name is required"
    if not isinstance(name, str):
        return False, "Name must be text"
    return True, ""


def validate_email(email: Optional[str]) -> Tuple[bool, str]:
    """
    Validate email shape (local-part@domain with a dot in the domain).

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (False, "Email is required") if empty
        - (False, "Invalid email format") if malformed or not a string
    """
    if _is_blank(email):
        return False, "Email is required"
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        return False, "Invalid email format"
    return True, ""


def validate_registration_type(registration_type: Optional[str]) -> Tuple[bool, str]:
    """
    Validate registration type.

    Returns:
        Tuple of (is_valid: bool, error_message: str)
        - (True, "") for "student" or "professional"
        - (False, "Registration type is required") if missing
        - (False, "Registration type must be either student or professional") otherwise
    """
    if isinstance(registration_type, RegistrationType):
        return True, ""
    if registration_type is None or registration_type == "":
        return False, "Registration type is required"
    if registration_type not in REGISTRATION_TYPES:
        return False, "Registration type must be either student or professional"
    return True, ""


def validate_company(company: Optional[str], registration_type: Optional[str]) -> Tuple[bool, str]:
    """Company is required for professionals only."""
    if registration_type == RegistrationType.PROFESSIONAL.value and _is_blank(company):
        return False, "Company is required"
    if company is not None and not isinstance(company, str):
        return False, "Company must be text"
    return True, ""


def validate_registration(payload: Mapping[str, Any]) -> Dict[str, FieldError]:
    """
    Validate a registration payload field by field.

    Args:
        payload: Mapping with name, email, registration_type and optional
            company and phone

    Returns:
        Dict of field name to FieldError, in field order. Empty if valid.
        Phone is never validated.
    """
    errors: Dict[str, FieldError] = {}

    registration_type = payload.get("registration_type")
    if isinstance(registration_type, RegistrationType):
        registration_type = registration_type.value

    is_valid, message = validate_name(payload.get("name"))
    if not is_valid:
        code = ErrorCode.REQUIRED if _is_blank(payload.get("name")) else ErrorCode.INVALID_FORMAT
        errors["name"] = FieldError("name", code, message)

    is_valid, message = validate_email(payload.get("email"))
    if not is_valid:
        code = ErrorCode.REQUIRED if _is_blank(payload.get("email")) else ErrorCode.INVALID_FORMAT
        errors["email"] = FieldError("email", code, message)

    is_valid, message = validate_registration_type(registration_type)
    if not is_valid:
        code = ErrorCode.REQUIRED if registration_type in (None, "") else ErrorCode.INVALID_VALUE
        errors["registration_type"] = FieldError("registration_type", code, message)

    is_valid, message = validate_company(payload.get("company"), registration_type)
    if not is_valid:
        code = ErrorCode.REQUIRED if _is_blank(payload.get("company")) else ErrorCode.INVALID_FORMAT
        errors["company"] = FieldError("company", code, message)

    return errors


def first_error(errors: Mapping[str, FieldError]) -> Optional[FieldError]:
    """Return the first error in field order, or None."""
    for field in FIELD_ORDER:
        if field in errors:
            return errors[field]
    return None


def normalize_optional(value: Optional[str]) -> Optional[str]:
    """
    Normalize optional text.

    Returns:
        None for missing, empty or whitespace-only values, else stripped text
    """
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def format_phone(value: str) -> str:
    """
    Format phone input as two groups of digits.

    Behavior:
        - Drops every non-digit character
        - 10+ digits: "XXXXX XXXXX" (extra digits dropped)
        - 5-9 digits: "XXXXX rest"
        - fewer than 5: digits only
        - Example: "(123) 456-7890" -> "12345 67890"
    """
    digits = re.sub(r"\D", "", value or "")
    if len(digits) >= 10:
        return f"{digits[:5]} {digits[5:10]}"
    if len(digits) >= 5:
        return f"{digits[:5]} {digits[5:]}"
    return digits
