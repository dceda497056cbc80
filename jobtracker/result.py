"""
Result values returned by every operation.

A Result is either passing (no error) or failing (an error is set). A
failing Result may still carry a value, e.g. the record that failed
validation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable

from .errors import Error


class Status(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@runtime_checkable
class ResultLike(Protocol):
    """Anything that can convert itself into a Result."""

    def to_result(self) -> "Result":
        ...


@dataclass(frozen=True)
class Result:
    value: Any = None
    error: Optional[Error] = None

    @property
    def status(self) -> Status:
        return Status.SUCCESS if self.error is None else Status.FAILURE

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def failure(self) -> bool:
        return self.error is not None

    def to_result(self) -> "Result":
        return self


def success(value: Any = None) -> Result:
    """Build a passing Result wrapping value."""
    return Result(value=value)


def failure(error: Error, value: Any = None) -> Result:
    """Build a failing Result; value is optional context such as an invalid record."""
    if error is None:
        raise ValueError("a failing result requires an error")
    return Result(value=value, error=error)
