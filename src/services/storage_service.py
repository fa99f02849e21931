"""Record store adapter for the registrations table."""
import logging
from datetime import timezone
from threading import Lock
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

from src.models.registration import Registration, RegistrationPayload, RegistrationType
from src.services.database import (
    Base,
    RegistrationRecord,
    create_session_factory,
    create_store_engine,
)
from src.utils.config import get_settings
from src.utils.exceptions import ConflictError, StoreUnavailableError

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "created_at": RegistrationRecord.created_at,
    "name": RegistrationRecord.name,
}

# 預設 store（延遲建立）
_default_store: Optional["RegistrationStore"] = None
_store_lock = Lock()


def _to_registration(record: RegistrationRecord) -> Registration:
    created_at = record.created_at
    if created_at is not None and created_at.tzinfo is None:
        # SQLite drops tzinfo; values are written in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)

    return Registration(
        id=record.id,
        name=record.name,
        email=record.email,
        registration_type=RegistrationType(record.registration_type),
        company=record.company,
        phone=record.phone,
        created_at=created_at,
    )


def _type_value(registration_type) -> Optional[str]:
    if registration_type is None:
        return None
    return RegistrationType(registration_type).value


class RegistrationStore:
    """
    Thin adapter over the relational store.

    Every public method is a single round trip. SQLAlchemy errors are
    translated to ConflictError or StoreUnavailableError; the only failure
    treated as a normal outcome is "no rows found" in exists().
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = create_session_factory(engine)

    def create_schema(self) -> None:
        """Create the registrations table if it does not exist."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to create schema: {e}") from e

    def count(self, registration_type=None) -> int:
        """
        Count registrations.

        Args:
            registration_type: Optional equality filter on registration_type

        Returns:
            Number of matching rows
        """
        stmt = select(func.count()).select_from(RegistrationRecord)
        type_value = _type_value(registration_type)
        if type_value is not None:
            stmt = stmt.where(RegistrationRecord.registration_type == type_value)

        try:
            with self._session_factory() as session:
                return int(session.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to count registrations: {e}") from e

    def exists(self, email: str) -> bool:
        """
        Check whether exactly one row has this email (exact, case-sensitive).

        Returns:
            True if a row matches, False if no row matches

        Raises:
            StoreUnavailableError: for any failure other than "no rows found"
        """
        stmt = select(RegistrationRecord.id).where(RegistrationRecord.email == email)

        try:
            with self._session_factory() as session:
                session.execute(stmt).scalar_one()
                return True
        except NoResultFound:
            return False
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to look up email: {e}") from e

    def insert(self, payload: RegistrationPayload) -> str:
        """
        Append one registration.

        Returns:
            The store-assigned id

        Raises:
            ConflictError: if a uniqueness constraint rejects the row
            StoreUnavailableError: on any other database failure
        """
        record = RegistrationRecord(
            name=payload.name,
            email=payload.email,
            registration_type=payload.registration_type.value,
            company=payload.company,
            phone=payload.phone,
        )

        try:
            with self._session_factory() as session:
                session.add(record)
                session.commit()
                return record.id
        except IntegrityError as e:
            raise ConflictError(f"Registration conflicts with an existing row: {payload.email}") from e
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to insert registration: {e}") from e

    def list(self, registration_type=None, sort_field: str = "created_at", ascending: bool = False) -> List[Registration]:
        """
        List every matching registration, ordered by sort_field.

        Args:
            registration_type: Optional equality filter
            sort_field: "created_at" or "name"
            ascending: Sort direction

        Returns:
            Full matching set (no limit); ties broken by id
        """
        if sort_field not in SORT_FIELDS:
            raise ValueError(f"Unsupported sort field: {sort_field}")

        column = SORT_FIELDS[sort_field]
        stmt = select(RegistrationRecord).order_by(
            column.asc() if ascending else column.desc(),
            RegistrationRecord.id.asc(),
        )
        type_value = _type_value(registration_type)
        if type_value is not None:
            stmt = stmt.where(RegistrationRecord.registration_type == type_value)

        try:
            with self._session_factory() as session:
                return [_to_registration(record) for record in session.execute(stmt).scalars()]
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to list registrations: {e}") from e


def get_store() -> RegistrationStore:
    """
    Return the process-wide store, creating it from settings on first use.

    The schema is created when the store is first built.
    """
    global _default_store

    if _default_store is not None:
        return _default_store

    with _store_lock:
        if _default_store is None:
            settings = get_settings()
            store = RegistrationStore(create_store_engine(settings.database_url))
            store.create_schema()
            logger.info("Registration store ready (%s)", store.engine.url.render_as_string(hide_password=True))
            _default_store = store

    return _default_store


def set_store(store: Optional[RegistrationStore]) -> None:
    """Replace the process-wide store (None resets to lazy creation)."""
    global _default_store
    _default_store = store
