from typing import Any

from ..errors import NotFound
from ..result import failure
from ..schema import is_storable_integer
from .base import Operation
from .parameter_validations import require_valid_id


class FindOne(Operation):
    """Queries the database for the record with the given primary key."""

    def process(self, id: Any, label: str = "id"):
        yield require_valid_id(id, label=label)

        return self.find_record(id, label=label)

    def find_record(self, id: int, label: str):
        # No stored primary key lies outside the INTEGER range.
        record = self.db.get(self.record_class, id) if is_storable_integer(id) else None
        if record is not None:
            return record

        error = NotFound(attributes={label: id}, record_class=self.record_class)
        return failure(error)
