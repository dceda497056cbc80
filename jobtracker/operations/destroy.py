from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from ..errors import FailedValidation
from ..result import failure
from .base import Operation
from .parameter_validations import require_valid_record

STILL_REFERENCED = "is still referenced by other records"


class Destroy(Operation):
    """Removes a record from the database."""

    def process(self, record: Any):
        yield require_valid_record(record, self.record_class)

        # Nothing to delete for a record that was never saved.
        if inspect(record).transient:
            return record

        self.db.delete(record)
        try:
            self.commit()
        except IntegrityError:
            # commit() has rolled back, so the record is persistent again.
            error = FailedValidation(record=record, errors=[("id", STILL_REFERENCED)])
            return failure(error, value=record)

        return record
