from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from ..steps import step
from .assign import Assign
from .base import Operation
from .save import Save


class Update(Operation):
    """
    Assigns the given attributes to a record, validates it and persists
    the changes to the database.
    """

    def __init__(
        self,
        record_class: type,
        session: Optional[Session] = None,
        assign_operation: Optional[Operation] = None,
        save_operation: Optional[Operation] = None,
    ):
        super().__init__(record_class, session=session)

        self.assign_operation = assign_operation or Assign(record_class, session=session)
        self.save_operation = save_operation or Save(record_class, session=session)

    def process(self, record: Any, attributes: Optional[Mapping[str, Any]] = None, **keywords):
        yield step(self.assign_operation, record, attributes, **keywords)

        return self.save_operation.call(record)
