"""
Abstract base class for record operations.
"""

from typing import Any, Callable, Mapping, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import UnknownAttributeError
from ..errors import UnknownAttributes
from ..logger import get_logger
from ..result import Result, failure
from ..steps import steps


class Operation:
    """
    Stateless command bound to a record class.

    Subclasses implement ``process`` as a steps generator; ``call`` runs it
    and always returns a Result.
    """

    def __init__(self, record_class: type, session: Optional[Session] = None):
        """
        Args:
            record_class: The class of record the operation works on
            session: SQLAlchemy session for operations that touch the database
        """
        self.record_class = record_class
        self.session = session

    @classmethod
    def subclass(cls, record_class: type, session: Optional[Session] = None) -> Type["Operation"]:
        """
        Return a subclass with the record class (and session) curried in.

        The subclass is named after both, e.g. ``CreateJob``, and can be
        built without arguments.
        """
        def __init__(self, **kwargs):
            kwargs.setdefault("session", session)
            cls.__init__(self, record_class, **kwargs)

        name = cls.subclass_name(record_class)
        return type(name, (cls,), {
            "__init__": __init__,
            "__module__": cls.__module__,
            "__qualname__": name,
        })

    @classmethod
    def subclass_name(cls, record_class: type) -> str:
        base = cls.__name__
        if base.endswith("Operation"):
            base = base[: -len("Operation")]
        return f"{base}{record_class.__name__}"

    @property
    def name(self) -> str:
        return type(self).__name__

    def call(self, *args, **kwargs) -> Result:
        logger = get_logger()
        logger.record_operation_call(self.name)

        result = steps(self.process)(*args, **kwargs)

        if result.success:
            logger.record_operation_success(self.name)
            logger.debug(f"{self.name} succeeded", record_class=self.record_class.__name__)
        else:
            logger.record_operation_failure(self.name, result.error.type)
            logger.debug(
                f"{self.name} failed",
                record_class=self.record_class.__name__,
                error=result.error.as_json(),
            )

        return result

    def __call__(self, *args, **kwargs) -> Result:
        return self.call(*args, **kwargs)

    def process(self, *args, **kwargs):
        raise NotImplementedError(f"{type(self).__name__} does not implement process")

    @property
    def db(self) -> Session:
        """The bound session; raises if the operation was built without one."""
        if self.session is None:
            raise RuntimeError(f"{self.name} requires a database session")
        return self.session

    def commit(self) -> None:
        """Commit the session, rolling back and re-raising on database errors."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            get_logger().error(
                f"{self.name} could not commit",
                record_class=self.record_class.__name__,
                error=str(e),
            )
            raise

    def handle_unknown_attributes(self, func: Callable[[], Any]) -> Any:
        """Run func, converting UnknownAttributeError into a failing Result."""
        try:
            return func()
        except UnknownAttributeError as e:
            error = UnknownAttributes(
                attributes=e.attribute_names,
                record_class=self.record_class,
            )
            return failure(error)


def merge_attributes(attributes: Any, keywords: Mapping[str, Any]) -> Any:
    """Merge keyword attributes into a mapping; non-mappings pass through for validation."""
    if attributes is None:
        attributes = {}
    if isinstance(attributes, Mapping):
        return {str(key): value for key, value in {**attributes, **keywords}.items()}
    return attributes
