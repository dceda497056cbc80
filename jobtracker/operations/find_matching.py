from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import inspect, select

from ..errors import InvalidParameters, UnknownAttributes
from ..result import failure, success
from ..schema import is_storable_integer
from .base import Operation


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Any) -> Optional["SortDirection"]:
        """Accept asc/ascending/desc/descending in any case; None if unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return _DIRECTION_ALIASES.get(value.strip().lower())


_DIRECTION_ALIASES = {
    "asc": SortDirection.ASC,
    "ascending": SortDirection.ASC,
    "desc": SortDirection.DESC,
    "descending": SortDirection.DESC,
}


class FindMatching(Operation):
    """
    Queries the database for the records matching the given criteria.

    Records are sorted by ``order`` (a mapping of attribute name to
    direction); without one, ``default_order`` applies.
    """

    default_order: Dict[str, str] = {"created_at": "desc"}

    def process(
        self,
        order: Optional[Mapping[str, Any]] = None,
        where: Optional[Mapping[str, Any]] = None,
    ):
        if not order:
            order = self.default_order

        clauses = yield self.order_clauses(order)
        filters = yield self.where_clauses(where or {})

        if any(_out_of_range(value) for value in (where or {}).values()):
            return []

        query = select(self.record_class).where(*filters).order_by(*clauses)
        return list(self.db.scalars(query))

    def column_names(self) -> List[str]:
        return [column.key for column in inspect(self.record_class).column_attrs]

    def order_clauses(self, order: Any):
        if not isinstance(order, Mapping):
            return failure(InvalidParameters(errors=[["order", "is invalid"]]))

        columns = self.column_names()
        clauses = []
        for field, direction in order.items():
            direction = SortDirection.parse(direction)
            if str(field) not in columns or direction is None:
                return failure(InvalidParameters(errors=[["order", "is invalid"]]))

            column = getattr(self.record_class, str(field))
            clauses.append(column.asc() if direction is SortDirection.ASC else column.desc())

        return success(clauses)

    def where_clauses(self, where: Any):
        if not isinstance(where, Mapping):
            return failure(InvalidParameters(errors=[["where", "must be a Hash"]]))

        columns = self.column_names()
        unknown = [str(field) for field in where if str(field) not in columns]
        if unknown:
            return failure(UnknownAttributes(attributes=unknown, record_class=self.record_class))

        return success([
            getattr(self.record_class, str(field)) == _plain(value) for field, value in where.items()
        ])


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _out_of_range(value: Any) -> bool:
    """True for integers no INTEGER column can hold, which match nothing."""
    return isinstance(value, int) and not isinstance(value, bool) and not is_storable_integer(value)
