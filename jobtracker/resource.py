"""
Value object describing a record resource: its names, paths, default
ordering and operation factory.
"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from .normalize import pluralize, singularize, underscore
from .operations import Factory


class Resource:
    """A RESTful resource backed by a record class."""

    def __init__(
        self,
        record_class: Optional[type],
        name: Optional[str] = None,
        plural_name: Optional[str] = None,
        singular_name: Optional[str] = None,
        default_order: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            record_class: The record class; may be None when name is given
            name: Resource name (default: derived from the class name)
            plural_name: Overrides the pluralized name
            singular_name: Overrides the singularized name
            default_order: Sort order used when a listing requests none
        """
        if record_class is None and (name is None or (isinstance(name, str) and not name.strip())):
            raise ValueError("must provide a record class or a name")

        self.record_class = record_class
        self.name = self._normalize_name(name if name else record_class.__name__)
        self.plural_name = (
            self._normalize_name(plural_name) if plural_name is not None else pluralize(self.name)
        )
        self.singular_name = (
            self._normalize_name(singular_name) if singular_name is not None else singularize(self.name)
        )
        self.default_order = dict(default_order or {})

    @staticmethod
    def _normalize_name(value: Any) -> str:
        if not isinstance(value, str):
            raise TypeError("name must be a String")
        return underscore(value)

    def index_path(self, **_options) -> str:
        return f"/{self.plural_name}"

    def show_path(self, record: Any, **_options) -> str:
        return f"{self.index_path()}/{record.id}"

    def operation_factory(self, session: Optional[Session] = None) -> Factory:
        if self.record_class is None:
            raise ValueError(f"resource {self.name!r} has no record class")
        return Factory.for_record_class(self.record_class, session)

    def __repr__(self) -> str:
        return f"<Resource name={self.name!r}>"
