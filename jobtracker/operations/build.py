from typing import Any, Mapping, Optional

from .base import Operation, merge_attributes
from .parameter_validations import require_attributes_hash


class Build(Operation):
    """Initializes a new, unsaved record from the given attributes."""

    def process(self, attributes: Optional[Mapping[str, Any]] = None, **keywords):
        attributes = merge_attributes(attributes, keywords)

        yield require_attributes_hash(attributes)

        return self.handle_unknown_attributes(lambda: self.record_class(**attributes))
