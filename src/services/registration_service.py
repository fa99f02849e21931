"""Registration service: validation, uniqueness check, listings and counts."""
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from src.models.registration import REGISTRATION_TYPES, Registration, RegistrationPayload, RegistrationType
from src.services.storage_service import RegistrationStore, get_store
from src.utils.exceptions import ConflictError, DuplicateEmailError, StoreUnavailableError, ValidationError
from src.utils.validation import normalize_optional, validate_registration

logger = logging.getLogger(__name__)

TYPE_FILTER_ALL = "all"
TYPE_FILTERS = (TYPE_FILTER_ALL,) + REGISTRATION_TYPES

SORT_KEYS = {
    "date-asc": ("created_at", True),
    "date-desc": ("created_at", False),
    "name-asc": ("name", True),
    "name-desc": ("name", False),
}
DEFAULT_SORT_KEY = "date-desc"


@dataclass(frozen=True)
class Statistics:
    """Aggregate registration counts."""

    total: int
    students: int
    professionals: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def parse_sort_key(sort_key: str) -> Tuple[str, bool]:
    """
    Map a sort key to (sort_field, ascending).

    Args:
        sort_key: One of date-asc, date-desc, name-asc, name-desc

    Raises:
        ValueError: If sort key is unknown
    """
    try:
        return SORT_KEYS[sort_key]
    except KeyError:
        raise ValueError(f"Unknown sort key: {sort_key}") from None


def register(payload: Mapping[str, Any], store: Optional[RegistrationStore] = None) -> str:
    """
    Register an attendee.

    Args:
        payload: name, email, registration_type and optional company, phone
        store: Record store (defaults to the process-wide store)

    Returns:
        The new registration id

    Raises:
        ValidationError: payload invalid (no store access)
        DuplicateEmailError: email already registered, or lost the insert race
        StoreUnavailableError: any other store failure

    Behavior:
        - Exactly one insert on success, zero writes on every failure path
        - The exists() check is a fast path; the table's unique constraint is
          the real guard against concurrent registrations
    """
    errors = validate_registration(payload)
    if errors:
        raise ValidationError(errors)

    store = store or get_store()
    email = payload["email"]

    try:
        if store.exists(email):
            logger.info("Rejected duplicate registration for %s", email)
            raise DuplicateEmailError()

        registration_id = store.insert(
            RegistrationPayload(
                name=payload["name"],
                email=email,
                registration_type=payload["registration_type"],
                company=normalize_optional(payload.get("company")),
                phone=normalize_optional(payload.get("phone")),
            )
        )
    except ConflictError as e:
        logger.warning("Insert conflict for %s: %s", email, e)
        raise DuplicateEmailError() from e
    except StoreUnavailableError:
        logger.exception("Store failure during registration")
        raise

    logger.info("Registered %s as %s (id=%s)", email, payload["registration_type"], registration_id)
    return registration_id


def check_email_availability(email: str, store: Optional[RegistrationStore] = None) -> bool:
    """Return True if no registration uses this email. Advisory only."""
    store = store or get_store()
    try:
        return not store.exists(email)
    except StoreUnavailableError:
        logger.exception("Store failure during email availability check")
        raise


def list_registrations(
    type_filter: str = TYPE_FILTER_ALL,
    sort_key: str = DEFAULT_SORT_KEY,
    store: Optional[RegistrationStore] = None
) -> List[Registration]:
    """
    List registrations filtered by type and sorted by sort key.

    Args:
        type_filter: "all", "student" or "professional"
        sort_key: date-asc, date-desc, name-asc or name-desc

    Raises:
        ValueError: If filter or sort key is unknown
    """
    if isinstance(type_filter, RegistrationType):
        type_filter = type_filter.value
    if type_filter not in TYPE_FILTERS:
        raise ValueError(f"Unknown type filter: {type_filter}")

    sort_field, ascending = parse_sort_key(sort_key)
    registration_type = None if type_filter == TYPE_FILTER_ALL else type_filter

    store = store or get_store()
    try:
        return store.list(registration_type, sort_field, ascending)
    except StoreUnavailableError:
        logger.exception("Store failure while listing registrations")
        raise


def get_statistics(store: Optional[RegistrationStore] = None) -> Statistics:
    """
    Count registrations in total and per type.

    The three counts are independent reads; they are not a consistent
    snapshot if writes happen in between.
    """
    store = store or get_store()
    try:
        return Statistics(
            total=store.count(),
            students=store.count(RegistrationType.STUDENT),
            professionals=store.count(RegistrationType.PROFESSIONAL),
        )
    except StoreUnavailableError:
        logger.exception("Store failure while counting registrations")
        raise
