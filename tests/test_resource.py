"""
Tests for resource.py and normalize.py - resource naming.
"""

import pytest

from jobtracker.models import Job, TimePeriod, TimePeriodFactory
from jobtracker.normalize import pluralize, singularize, underscore
from jobtracker.operations import Factory
from jobtracker.resource import Resource


class TestNormalize:
    """Test name inflection."""

    @pytest.mark.parametrize("name, expected", [
        ("Job", "job"),
        ("TimePeriod", "time_period"),
        ("HTTPResponse", "http_response"),
        ("Job Posting", "job_posting"),
        ("jobtracker.models.Job", "job"),
    ])
    def test_underscore(self, name, expected):
        assert underscore(name) == expected

    @pytest.mark.parametrize("singular, plural", [
        ("job", "jobs"),
        ("time_period", "time_periods"),
        ("company", "companies"),
        ("box", "boxes"),
        ("address", "addresses"),
        ("person", "people"),
        ("day", "days"),
    ])
    def test_pluralize_and_singularize(self, singular, plural):
        assert pluralize(singular) == plural
        assert singularize(plural) == singular

    def test_uncountable(self):
        assert pluralize("data") == "data"
        assert singularize("series") == "series"

    def test_already_plural(self):
        assert pluralize("jobs") == "jobs"
        assert singularize("job") == "job"


class TestResource:
    """Test resource names and paths."""

    def test_names_from_record_class(self):
        resource = Resource(TimePeriod)

        assert resource.record_class is TimePeriod
        assert resource.name == "time_period"
        assert resource.singular_name == "time_period"
        assert resource.plural_name == "time_periods"

    def test_explicit_name(self):
        resource = Resource(Job, name="Gadget")

        assert resource.name == "gadget"
        assert resource.plural_name == "gadgets"
        assert resource.singular_name == "gadget"

    def test_explicit_plural_and_singular(self):
        resource = Resource(Job, plural_name="Openings", singular_name="Opening")

        assert resource.name == "job"
        assert resource.plural_name == "openings"
        assert resource.singular_name == "opening"

    def test_name_without_record_class(self):
        resource = Resource(None, name="gadget")

        assert resource.record_class is None
        assert resource.name == "gadget"

    @pytest.mark.parametrize("name", [None, "", "  "])
    def test_requires_record_class_or_name(self, name):
        with pytest.raises(ValueError, match="must provide a record class or a name"):
            Resource(None, name=name)

    @pytest.mark.parametrize("option", ["name", "plural_name", "singular_name"])
    def test_names_must_be_strings(self, option):
        with pytest.raises(TypeError, match="name must be a String"):
            Resource(Job, **{option: object()})

    def test_paths(self):
        resource = Resource(Job)

        assert resource.index_path() == "/jobs"
        assert resource.show_path(Job(id=3)) == "/jobs/3"

    def test_default_order(self):
        assert Resource(Job).default_order == {}
        assert Resource(Job, default_order={"company_name": "asc"}).default_order == {
            "company_name": "asc"
        }

    def test_operation_factory(self, db_session):
        factory = Resource(Job).operation_factory(db_session)

        assert type(factory) is Factory
        assert factory.record_class is Job
        assert factory.session is db_session

    def test_registered_operation_factory(self):
        assert isinstance(Resource(TimePeriod).operation_factory(), TimePeriodFactory)

    def test_operation_factory_requires_record_class(self):
        with pytest.raises(ValueError):
            Resource(None, name="gadget").operation_factory()
