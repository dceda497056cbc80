"""
Translate operation Results into transport-level responses.

The error-to-status mapping is shared by every caller:

    InvalidParameters, UnknownAttributes, InvalidRecord -> 400
    NotFound                                            -> 404
    FailedValidation                                    -> 422
    anything else                                       -> 500
"""

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Dict, Optional

from .errors import (
    Error,
    FailedValidation,
    InvalidParameters,
    InvalidRecord,
    NotFound,
    UnknownAttributes,
)
from .resource import Resource
from .result import Result

GENERIC_ERROR_MESSAGE = "Something went wrong when processing the request."

ACTIONS_REQUIRING_RESOURCE = {"new", "create", "show", "edit", "update"}

# Errors whose details are safe to hand back to the client.
SERIALIZABLE_ERRORS = (FailedValidation, InvalidParameters, InvalidRecord, NotFound, UnknownAttributes)


def error_status(error: Optional[Error]) -> HTTPStatus:
    if isinstance(error, FailedValidation):
        return HTTPStatus.UNPROCESSABLE_ENTITY
    if isinstance(error, (InvalidParameters, UnknownAttributes, InvalidRecord)):
        return HTTPStatus.BAD_REQUEST
    if isinstance(error, NotFound):
        return HTTPStatus.NOT_FOUND
    return HTTPStatus.INTERNAL_SERVER_ERROR


def serialize_error(error: Error) -> Dict[str, Any]:
    if isinstance(error, SERIALIZABLE_ERRORS):
        return error.as_json()
    return Error(message=GENERIC_ERROR_MESSAGE).as_json()


@dataclass
class Response:
    status: HTTPStatus
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Dict[str, Any]] = None
    location: Optional[str] = None

    @property
    def redirect(self) -> bool:
        return self.location is not None


class Responder:
    """Accepts a passing or failing Result and builds a Response for an action."""

    def __init__(self, resource: Resource):
        self.resource = resource

    def call(
        self,
        result: Result,
        action: str,
        status: Optional[HTTPStatus] = None,
        resource_key: Optional[str] = None,
    ) -> Response:
        key = resource_key or self.resource.singular_name
        if result.success:
            return self.respond_to_success(result, action, status or HTTPStatus.OK, key)
        return self.respond_to_failure(result, action)

    def respond_to_success(self, result: Result, action: str, status: HTTPStatus, key: str) -> Response:
        data = result.value or {}
        record = data.get(key) if isinstance(data, dict) else None

        if record is None and action in ACTIONS_REQUIRING_RESOURCE:
            return Response(
                status=HTTPStatus.SEE_OTHER,
                location=self.resource.index_path(),
            )

        if action in ("create", "update"):
            return Response(status=status, data=data, location=self.resource.show_path(record))
        if action == "destroy":
            return Response(status=status, data=data, location=self.resource.index_path())
        return Response(status=status, data=data)

    def respond_to_failure(self, result: Result, action: str) -> Response:
        location = None
        if isinstance(result.error, NotFound) and action != "index":
            location = self.resource.index_path()

        return Response(
            status=error_status(result.error),
            data=result.value if isinstance(result.value, dict) else {},
            error=serialize_error(result.error),
            location=location,
        )
