"""
Record operations.

Each operation is a stateless command bound to a record class. Calling it
returns a Result instead of raising for expected failures.
"""

from .assign import Assign
from .base import Operation
from .build import Build
from .create import Create
from .destroy import Destroy
from .factory import Factory, OperationName, register_factory
from .find_many import FindMany
from .find_matching import FindMatching, SortDirection
from .find_one import FindOne
from .save import Save
from .update import Update

__all__ = [
    "Assign",
    "Build",
    "Create",
    "Destroy",
    "Factory",
    "FindMany",
    "FindMatching",
    "FindOne",
    "Operation",
    "OperationName",
    "Save",
    "SortDirection",
    "Update",
    "register_factory",
]
