from typing import Any, List

from sqlalchemy import select

from ..errors import NotFound
from ..logger import get_logger
from ..result import failure
from ..schema import is_storable_integer
from .base import Operation
from .parameter_validations import require_valid_ids


class FindMany(Operation):
    """Queries the database for the records with the given primary keys."""

    def process(self, ids: Any, allow_partial: bool = False):
        """
        Args:
            ids: The primary keys to query
            allow_partial: If False, fail unless a record is found for every
                id. If True, return the records that were found.
        """
        yield require_valid_ids(ids)

        return self.find_records(list(ids), allow_partial=allow_partial)

    def find_records(self, ids: List[int], allow_partial: bool):
        storable = [id for id in ids if is_storable_integer(id)]
        query = select(self.record_class).where(self.record_class.id.in_(storable))
        found = {record.id: record for record in self.db.scalars(query)}

        records = []
        not_found = []
        for id in dict.fromkeys(ids):
            if id in found:
                records.append(found[id])
            else:
                not_found.append(id)

        if not not_found:
            return records

        if allow_partial:
            get_logger().info(
                f"{self.name} skipped missing records",
                record_class=self.record_class.__name__,
                ids=not_found,
            )
            return records

        error = NotFound(attributes={"ids": not_found}, record_class=self.record_class)
        return failure(error)
