"""
Factory for record operations.

``Factory.for_record_class(Job, session)`` returns the factory registered
for Job (see ``register_factory``), or a generic Factory bound to Job.
"""

from enum import Enum
from typing import Callable, Dict, Optional, Type, Union

from sqlalchemy.orm import Session

from ..database import Base
from .assign import Assign
from .base import Operation
from .build import Build
from .create import Create
from .destroy import Destroy
from .find_many import FindMany
from .find_matching import FindMatching
from .find_one import FindOne
from .save import Save
from .update import Update


class OperationName(str, Enum):
    ASSIGN = "assign"
    BUILD = "build"
    CREATE = "create"
    DESTROY = "destroy"
    FIND_MANY = "find_many"
    FIND_MATCHING = "find_matching"
    FIND_ONE = "find_one"
    SAVE = "save"
    UPDATE = "update"


# Per-record-class factory overrides, consulted before the generic Factory.
_FACTORIES: Dict[type, Type["Factory"]] = {}


def register_factory(record_class: type) -> Callable[[Type["Factory"]], Type["Factory"]]:
    """Class decorator registering a factory for one record class."""
    def decorator(factory_class: Type["Factory"]) -> Type["Factory"]:
        _FACTORIES[record_class] = factory_class
        return factory_class

    return decorator


def resolve_record_class(name: str) -> type:
    """Look up a mapped record class by class name."""
    for mapper in Base.registry.mappers:
        if mapper.class_.__name__ == name:
            return mapper.class_
    raise LookupError(f"no record class named {name!r}")


def _operation_property(name: OperationName) -> property:
    def getter(self: "Factory") -> Operation:
        return self.get(name)

    getter.__doc__ = f"A new {name.value} operation bound to the record class."
    return property(getter)


class Factory:
    """Builds operations bound to a record class and session."""

    OPERATIONS: Dict[OperationName, Type[Operation]] = {
        OperationName.ASSIGN: Assign,
        OperationName.BUILD: Build,
        OperationName.CREATE: Create,
        OperationName.DESTROY: Destroy,
        OperationName.FIND_MANY: FindMany,
        OperationName.FIND_MATCHING: FindMatching,
        OperationName.FIND_ONE: FindOne,
        OperationName.SAVE: Save,
        OperationName.UPDATE: Update,
    }

    def __init__(self, record_class: type, session: Optional[Session] = None):
        self.record_class = record_class
        self.session = session
        self._classes: Dict[OperationName, Type[Operation]] = {}

    @classmethod
    def for_record_class(
        cls,
        record_class: Union[type, str],
        session: Optional[Session] = None,
    ) -> "Factory":
        """
        Return the factory for a record class.

        Args:
            record_class: The record class, or its class name
            session: SQLAlchemy session bound into every operation
        """
        if isinstance(record_class, str):
            record_class = resolve_record_class(record_class)

        factory_class = _FACTORIES.get(record_class, Factory)
        return factory_class(record_class, session)

    def operation_class(self, name: Union[OperationName, str]) -> Type[Operation]:
        """Return the operation subclass bound to the record class, e.g. ``CreateJob``."""
        name = OperationName(name)
        if name not in self._classes:
            base = self.OPERATIONS[name]
            self._classes[name] = base.subclass(self.record_class, self.session)
        return self._classes[name]

    def get(self, name: Union[OperationName, str], **kwargs) -> Operation:
        return self.operation_class(name)(**kwargs)

    assign = _operation_property(OperationName.ASSIGN)
    build = _operation_property(OperationName.BUILD)
    create = _operation_property(OperationName.CREATE)
    destroy = _operation_property(OperationName.DESTROY)
    find_many = _operation_property(OperationName.FIND_MANY)
    find_matching = _operation_property(OperationName.FIND_MATCHING)
    find_one = _operation_property(OperationName.FIND_ONE)
    save = _operation_property(OperationName.SAVE)
    update = _operation_property(OperationName.UPDATE)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} record_class={self.record_class.__name__}>"
