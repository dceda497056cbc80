from typing import Any

from sqlalchemy import inspect

from ..errors import FailedValidation
from ..result import failure
from .base import Operation
from .parameter_validations import require_valid_record


class Save(Operation):
    """Validates a record and persists it to the database."""

    def process(self, record: Any):
        yield require_valid_record(record, self.record_class)

        return self.persist_record(record)

    def persist_record(self, record: Any):
        errors = record.validate(self.db)
        if errors:
            error = FailedValidation(record=record, errors=errors)
            self.discard_changes(record)
            return failure(error, value=record)

        self.db.add(record)
        self.commit()
        return record

    def discard_changes(self, record: Any) -> None:
        """Keep rejected changes out of the session so a later commit cannot flush them."""
        state = inspect(record)
        if state.persistent:
            state.session.refresh(record)
        elif state.pending:
            state.session.expunge(record)
