"""
Error values returned by record operations.

Errors are plain data, not exceptions: an operation that fails in an
expected way returns a failing Result carrying one of these objects.
Every error serializes to ``{"type", "message", "data"}``.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple


def _class_name(record_class: Any) -> Optional[str]:
    if record_class is None:
        return None
    return getattr(record_class, "__name__", str(record_class))


class Error:
    """Generic error with a message and no structured data."""

    TYPE = "error"

    def __init__(self, message: str = ""):
        self.message = message

    @property
    def type(self) -> str:
        """Short string used to identify the type of error."""
        return self.TYPE

    @property
    def data(self) -> Dict[str, Any]:
        return {}

    def as_json(self) -> Dict[str, Any]:
        """Return a serializable dict representation of the error."""
        return {
            "data": self.data,
            "message": self.message,
            "type": self.type,
        }

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.as_json() == other.as_json()

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r})"


class InvalidParameters(Error):
    """Error for invalid operation or request parameters."""

    MESSAGE = "Invalid request parameters"
    TYPE = "invalid_parameters"

    def __init__(self, errors: Iterable[Sequence[str]]):
        self.errors: List[List[str]] = [[str(key), message] for key, message in errors]
        super().__init__(message=self._generate_message())

    @property
    def data(self) -> Dict[str, Any]:
        return {"errors": self.errors}

    def _generate_message(self) -> str:
        if not self.errors:
            return self.MESSAGE

        formatted = [f"{key.replace('.', ' ')} {message}" for key, message in self.errors]
        return f"{self.MESSAGE}: {', '.join(formatted)}"


class InvalidRecord(Error):
    """Error for a record argument that is not an instance of the expected class."""

    TYPE = "invalid_record"

    def __init__(self, record_class: Any):
        self.record_class = record_class
        super().__init__(message=f"Record should be a {_class_name(record_class)}")

    @property
    def data(self) -> Dict[str, Any]:
        return {"record_class": _class_name(self.record_class)}


class NotFound(Error):
    """Error for a record that could not be found with the given attributes."""

    TYPE = "not_found"

    def __init__(self, attributes: Mapping[str, Any], record_class: Any):
        self.attributes = dict(attributes)
        self.record_class = record_class
        super().__init__(message=self._generate_message())

    @property
    def data(self) -> Dict[str, Any]:
        return {
            "attributes": {str(key): value for key, value in self.attributes.items()},
            "record_class": _class_name(self.record_class),
        }

    def _generate_message(self) -> str:
        message = f"{_class_name(self.record_class)} not found"
        if not self.attributes:
            return message

        formatted = ", ".join(f"{key}: {value!r}" for key, value in self.attributes.items())
        return f"{message} with attributes {formatted}"


class UnknownAttributes(Error):
    """Error for attribute names the record class does not define."""

    MESSAGE = "Unknown attributes for "
    TYPE = "unknown_attributes"

    def __init__(self, attributes: Iterable[str], record_class: Any):
        self.attributes = list(attributes)
        self.record_class = record_class
        super().__init__(message=self._generate_message())

    @property
    def data(self) -> Dict[str, Any]:
        return {
            "attributes": self.attributes,
            "record_class": _class_name(self.record_class),
        }

    def _generate_message(self) -> str:
        message = self.MESSAGE + str(_class_name(self.record_class))
        if not self.attributes:
            return message
        return f"{message}: {', '.join(self.attributes)}"


class FailedValidation(Error):
    """Error for a record that failed its validations."""

    TYPE = "failed_validation"

    def __init__(self, record: Any, errors: Optional[Iterable[Tuple[str, str]]] = None):
        if errors is None:
            errors = record.validate()
        self.errors: List[List[str]] = [[str(field), message] for field, message in errors]
        self.record_class = type(record)
        super().__init__(message=self._generate_message())

    @property
    def data(self) -> Dict[str, Any]:
        return {
            "errors": self.errors,
            "record_class": _class_name(self.record_class),
        }

    def _generate_message(self) -> str:
        message = f"{_class_name(self.record_class)} has validation errors"
        if not self.errors:
            return message

        formatted = ", ".join(" ".join(pair) for pair in self.errors)
        return f"{message}: {formatted}"
