from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from ..steps import step
from .base import Operation
from .build import Build
from .save import Save


class Create(Operation):
    """
    Builds a new record from the given attributes, validates it and
    persists it to the database.

    The build and save stages can be replaced independently, e.g. to
    customize how one record class is initialized.
    """

    def __init__(
        self,
        record_class: type,
        session: Optional[Session] = None,
        build_operation: Optional[Operation] = None,
        save_operation: Optional[Operation] = None,
    ):
        super().__init__(record_class, session=session)

        self.build_operation = build_operation or Build(record_class, session=session)
        self.save_operation = save_operation or Save(record_class, session=session)

    def process(self, attributes: Optional[Mapping[str, Any]] = None, **keywords):
        record = yield step(self.build_operation, attributes, **keywords)

        return self.save_operation.call(record)
