from typing import Any, Mapping, Optional

from .base import Operation, merge_attributes
from .parameter_validations import require_attributes_hash, require_valid_record


class Assign(Operation):
    """Assigns the given attributes to an existing record, without saving it."""

    def process(self, record: Any, attributes: Optional[Mapping[str, Any]] = None, **keywords):
        attributes = merge_attributes(attributes, keywords)

        yield require_attributes_hash(attributes)
        yield require_valid_record(record, self.record_class)

        def assign():
            record.assign_attributes(attributes)
            return record

        return self.handle_unknown_attributes(assign)
