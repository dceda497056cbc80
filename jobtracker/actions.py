"""
Resource actions: the index/show/new/create/edit/update/destroy flows
that compose record operations for a caller such as the CLI or a web
controller.

Each action returns a Result whose value is a dict keyed by the
resource's plural name (listings) or singular name (single records),
plus any lookup data the action adds.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from sqlalchemy.orm import Session

from .errors import Error, InvalidParameters
from .models import ApplicationStatus, Job, JobType, TimePeriod
from .operations import Factory, SortDirection
from .resource import Resource
from .result import Result, failure, success
from .steps import step, steps


def invalid_order() -> Result:
    return failure(InvalidParameters(errors=[["order", "is invalid"]]))


def normalize_sort(order: Any) -> Result:
    """
    Normalize a sort specification.

    Accepts None, a mapping of field to direction, or a string such as
    ``"company_name:asc::created_at:desc"``.
    """
    if order is None:
        return success({})
    if isinstance(order, Mapping):
        return success(dict(order))
    if not isinstance(order, str):
        return invalid_order()

    normalized: Dict[str, str] = {}
    for part in order.split("::"):
        key, _, direction = part.partition(":")
        parsed = SortDirection.parse(direction)
        if not key.strip() or parsed is None:
            return invalid_order()
        normalized[key.strip()] = parsed.value
    return success(normalized)


class ResourceActions:
    """Generic actions for one resource, run against one session."""

    def __init__(
        self,
        resource: Resource,
        session: Session,
        permitted_attributes: Iterable[str] = (),
    ):
        self.resource = resource
        self.session = session
        self.permitted_attributes = tuple(permitted_attributes)
        self.lookups: Dict[str, Any] = {}

    @property
    def operation_factory(self) -> Factory:
        return self.resource.operation_factory(self.session)

    # Actions

    def index(self, order: Any = None, where: Optional[Mapping[str, Any]] = None) -> Result:
        return self.respond(self.index_resources(order, where))

    def show(self, id: Any) -> Result:
        return self.respond(self.operation_factory.find_one.call(id))

    def new(self) -> Result:
        return self.respond(self.new_resource())

    def create(self, params: Mapping[str, Any]) -> Result:
        return self.respond(self.create_resource(params))

    def edit(self, id: Any) -> Result:
        return self.respond(self.edit_resource(id))

    def update(self, id: Any, params: Mapping[str, Any]) -> Result:
        return self.respond(self.update_resource(id, params))

    def destroy(self, id: Any) -> Result:
        return self.respond(self.destroy_resource(id))

    # Compositions

    @steps
    def index_resources(self, order: Any, where: Optional[Mapping[str, Any]]):
        order = yield step(normalize_sort, order)

        return self.operation_factory.find_matching.call(
            order=order or self.resource.default_order or None,
            where=where,
        )

    def new_resource(self) -> Result:
        return self.operation_factory.build.call()

    def edit_resource(self, id: Any) -> Result:
        return self.operation_factory.find_one.call(id)

    @steps
    def create_resource(self, params: Mapping[str, Any]):
        attributes = yield step(self.require_resource_params, params)

        return self.operation_factory.create.call(attributes)

    @steps
    def update_resource(self, id: Any, params: Mapping[str, Any]):
        factory = self.operation_factory
        record = yield step(factory.find_one, id)
        attributes = yield step(self.require_resource_params, params)

        return factory.update.call(record, attributes)

    @steps
    def destroy_resource(self, id: Any):
        factory = self.operation_factory
        record = yield step(factory.find_one, id)

        return factory.destroy.call(record)

    # Helpers

    def resource_params(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            key: value for key, value in params.items()
            if key in self.permitted_attributes
        }

    def require_resource_params(self, params: Any) -> Result:
        attributes = self.resource_params(params) if isinstance(params, Mapping) else {}
        if attributes:
            return success(attributes)

        if not self.permitted_attributes:
            return failure(Error(message="No attributes are permitted for the current action"))

        error = InvalidParameters(errors=[[self.resource.singular_name, "can't be blank"]])
        return failure(error)

    def respond(self, result: Result) -> Result:
        """Normalize the value into a dict and merge in any lookups."""
        return Result(
            value={**self.lookups, **self.normalize_value(result.value)},
            error=result.error,
        )

    def normalize_value(self, value: Any) -> Dict[str, Any]:
        if value is None:
            return {}
        if isinstance(value, dict):
            return value
        if isinstance(value, list):
            return {self.resource.plural_name: value}
        return {self.resource.singular_name: value}


class JobActions(ResourceActions):
    """Job actions; forms also need the time periods and job types."""

    PERMITTED_ATTRIBUTES = (
        "action_required",
        "application_active",
        "application_status",
        "company_name",
        "data",
        "job_type",
        "notes",
        "recruiter_agency",
        "recruiter_name",
        "source",
        "source_data",
        "time_period_id",
        "title",
    )

    def __init__(self, session: Session):
        super().__init__(
            Resource(Job, default_order={"company_name": "asc"}),
            session,
            permitted_attributes=self.PERMITTED_ATTRIBUTES,
        )

    def find_lookups(self) -> None:
        factory = Factory.for_record_class(TimePeriod, self.session)
        self.lookups["time_periods"] = factory.find_matching.call().value
        self.lookups["job_types"] = [job_type.value for job_type in JobType]
        self.lookups["application_statuses"] = [status.value for status in ApplicationStatus]

    def new_resource(self) -> Result:
        result = super().new_resource()
        self.find_lookups()
        return result

    def edit_resource(self, id: Any) -> Result:
        result = super().edit_resource(id)
        if result.success:
            self.find_lookups()
        return result

    def create_resource(self, params: Mapping[str, Any]) -> Result:
        result = super().create_resource(params)
        if not result.success:
            self.find_lookups()
        return result

    def update_resource(self, id: Any, params: Mapping[str, Any]) -> Result:
        result = super().update_resource(id, params)
        if not result.success:
            self.find_lookups()
        return result


class TimePeriodActions(ResourceActions):
    PERMITTED_ATTRIBUTES = ("month", "year")

    def __init__(self, session: Session):
        super().__init__(
            Resource(TimePeriod),
            session,
            permitted_attributes=self.PERMITTED_ATTRIBUTES,
        )
