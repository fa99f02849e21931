"""SQLAlchemy engine, session factory and table mapping for registrations."""
import uuid
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import CheckConstraint, Column, DateTime, String, create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RegistrationRecord(Base):
    __tablename__ = "registrations"
    __table_args__ = (
        CheckConstraint(
            "registration_type IN ('student', 'professional')",
            name="ck_registrations_registration_type",
        ),
    )

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    registration_type = Column(String(16), nullable=False, index=True)
    company = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)


def create_store_engine(database_url: str) -> Engine:
    """
    Create an engine for the registrations database.

    Behavior:
        - In-memory SQLite shares one connection across threads
        - File-based SQLite gets its parent directory created
        - Other backends use pool_pre_ping
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            return create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )

        db_dir = Path(url.database).parent
        if str(db_dir) not in ("", "."):
            db_dir.mkdir(parents=True, exist_ok=True)
        return create_engine(database_url, connect_args={"check_same_thread": False})

    return create_engine(database_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)
