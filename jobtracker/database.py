"""
Database schema base and connection management.

Uses SQLite with SQLAlchemy for record storage. Every model derives from
ApplicationRecord, which provides the generic record interface the
operations rely on: guarded attribute assignment, column defaults on
construction, persistence state and a validation predicate.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import Column, DateTime, Integer, create_engine, event, inspect
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()

TIMESTAMP_COLUMNS = ("created_at", "updated_at")

ValidationErrors = List[Tuple[str, str]]


class UnknownAttributeError(AttributeError):
    """Raised when assigning attributes a record class does not define."""

    def __init__(self, record_class: type, attribute_names: List[str]):
        self.record_class = record_class
        self.attribute_names = attribute_names
        super().__init__(
            f"unknown attributes for {record_class.__name__}: {', '.join(attribute_names)}"
        )


class ApplicationRecord(Base):
    """Abstract base class for persisted records."""

    __abstract__ = True

    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    def __init__(self, **attributes: Any):
        self._apply_column_defaults()
        self.assign_attributes(attributes)

    @classmethod
    def attribute_names(cls) -> List[str]:
        """Names of mapped columns and relationships."""
        mapper = inspect(cls)
        return [prop.key for prop in mapper.attrs]

    @classmethod
    def unknown_attribute_names(cls, attributes: Mapping[str, Any]) -> List[str]:
        known = set(cls.attribute_names())
        return [str(key) for key in attributes if str(key) not in known]

    def assign_attributes(self, attributes: Mapping[str, Any]) -> None:
        """
        Assign attributes to the record.

        Raises UnknownAttributeError before mutating anything if any key is
        not a mapped attribute.
        """
        unknown = self.unknown_attribute_names(attributes)
        if unknown:
            raise UnknownAttributeError(type(self), unknown)

        for key, value in attributes.items():
            setattr(self, str(key), value)

    def attributes(self) -> Dict[str, Any]:
        """Column values keyed by attribute name."""
        mapper = inspect(type(self))
        return {column.key: getattr(self, column.key) for column in mapper.column_attrs}

    @property
    def persisted(self) -> bool:
        return inspect(self).persistent

    def validate(self, session: Optional[Session] = None) -> ValidationErrors:
        """Return (field, message) pairs; an empty list means the record is valid."""
        return []

    def valid(self, session: Optional[Session] = None) -> bool:
        return not self.validate(session)

    def _apply_column_defaults(self) -> None:
        for column in self.__table__.columns:
            if column.primary_key or column.key in TIMESTAMP_COLUMNS:
                continue
            default = column.default
            if default is None:
                continue
            if default.is_scalar:
                setattr(self, column.key, default.arg)
            elif default.is_callable:
                setattr(self, column.key, default.arg(None))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"


def _engine(db_path: Path):
    engine = create_engine(f"sqlite:///{db_path}")

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, _record: Any) -> None:
        # SQLite leaves foreign key constraints unenforced by default.
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    # Register the models on Base.metadata.
    from . import models  # noqa: F401

    db_path.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(_engine(db_path))


def get_session(db_path: Path) -> Session:
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    SessionFactory = sessionmaker(bind=_engine(db_path), autoflush=False, expire_on_commit=False)
    return SessionFactory()
