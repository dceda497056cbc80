"""
Shared guards for operation parameters.

Each guard returns a passing Result with no value, or a failing Result
carrying an InvalidParameters (or InvalidRecord) error.
"""

from typing import Any, Mapping

from ..errors import InvalidParameters, InvalidRecord
from ..result import Result, failure, success
from ..steps import step, steps

BLANK = "can't be blank"
NOT_AN_ARRAY = "must be an Array"
NOT_AN_INTEGER = "must be an Integer"
NOT_A_HASH = "must be a Hash"


def _invalid(field: str, message: str) -> Result:
    return failure(InvalidParameters(errors=[[field, message]]))


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_non_null_id(id: Any, label: str = "id") -> Result:
    if id is None:
        return _invalid(label, BLANK)
    return success()


def require_integer_id(id: Any, label: str = "id") -> Result:
    if id is not None and not _is_integer(id):
        return _invalid(label, NOT_AN_INTEGER)
    return success()


@steps
def require_valid_id(id: Any, label: str = "id"):
    yield step(require_non_null_id, id, label=label)
    yield step(require_integer_id, id, label=label)


def require_id_array(ids: Any) -> Result:
    if ids is None:
        return _invalid("ids", BLANK)
    if not isinstance(ids, (list, tuple)):
        return _invalid("ids", NOT_AN_ARRAY)
    if not ids:
        return _invalid("ids", BLANK)
    return success()


@steps
def require_valid_ids(ids: Any):
    yield step(require_id_array, ids)

    for index, id in enumerate(ids):
        yield step(require_valid_id, id, label=f"ids.{index}")


def require_attributes_hash(attributes: Any) -> Result:
    if not isinstance(attributes, Mapping):
        return _invalid("attributes", NOT_A_HASH)
    return success()


def require_valid_record(record: Any, record_class: type) -> Result:
    if not isinstance(record, record_class):
        return failure(InvalidRecord(record_class=record_class))
    return success()
