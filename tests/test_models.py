"""
Tests for models.py - Job and TimePeriod validations and queries.
"""

import pytest

from jobtracker.models import ApplicationStatus, Job, JobType, TimePeriod


class TestTimePeriod:
    """Test time period behavior."""

    def test_label(self):
        assert TimePeriod(year=2024, month=3).label == "2024-03"

    def test_active_without_periods(self, db_session):
        assert TimePeriod.active(db_session) is None

    def test_active_is_most_recent(self, db_session):
        periods = [
            TimePeriod(year=2023, month=12),
            TimePeriod(year=2024, month=2),
            TimePeriod(year=2024, month=1),
        ]
        db_session.add_all(periods)
        db_session.commit()

        assert TimePeriod.active(db_session) is periods[1]

    def test_valid_period(self, db_session):
        assert TimePeriod(year=2024, month=1).validate(db_session) == []

    def test_missing_fields(self):
        assert TimePeriod().validate() == [
            ("month", "can't be blank"),
            ("year", "can't be blank"),
        ]

    @pytest.mark.parametrize("month, message", [
        (0, "must be greater than or equal to 1"),
        (13, "must be less than or equal to 12"),
        ("March", "must be an integer"),
    ])
    def test_invalid_month(self, month, message):
        assert TimePeriod(year=2024, month=month).validate() == [("month", message)]

    def test_year_outside_integer_range(self):
        assert TimePeriod(year=2 ** 70, month=1).validate() == [
            ("year", f"must be less than or equal to {2 ** 63 - 1}"),
        ]

    def test_duplicate_period(self, db_session, time_period):
        duplicate = TimePeriod(year=time_period.year, month=time_period.month)

        assert duplicate.validate(db_session) == [("month", "has already been taken")]

    def test_existing_period_is_not_its_own_duplicate(self, time_period):
        assert time_period.valid()


class TestJobValidation:
    """Test job validations."""

    def test_valid_job(self, db_session, valid_job_attributes):
        job = Job(**valid_job_attributes)

        assert job.validate(db_session) == []
        assert job.valid(db_session)

    def test_empty_job(self):
        assert Job().validate() == [
            ("company_name", "can't be blank"),
            ("source", "can't be blank"),
            ("time_period", "must exist"),
        ]

    def test_blank_status(self, valid_job_attributes):
        job = Job(**{**valid_job_attributes, "application_status": ""})
        assert ("application_status", "can't be blank") in job.validate()

    @pytest.mark.parametrize("status", list(ApplicationStatus))
    def test_every_status_is_valid(self, db_session, valid_job_attributes, status):
        job = Job(**{**valid_job_attributes, "application_status": status.value})
        assert job.valid(db_session)

    def test_enum_member_is_valid(self, db_session, valid_job_attributes):
        job = Job(**{**valid_job_attributes, "application_status": ApplicationStatus.APPLIED})
        assert job.valid(db_session)

    def test_unknown_status(self, valid_job_attributes):
        job = Job(**{**valid_job_attributes, "application_status": "ghosted"})
        assert job.validate() == [("application_status", "is not included in the list")]

    @pytest.mark.parametrize("job_type", ["", JobType.FULL_TIME.value, JobType.CONTRACT.value])
    def test_valid_job_type(self, db_session, valid_job_attributes, job_type):
        job = Job(**{**valid_job_attributes, "job_type": job_type})
        assert job.valid(db_session)

    def test_unknown_job_type(self, valid_job_attributes):
        job = Job(**{**valid_job_attributes, "job_type": "gig"})
        assert job.validate() == [("job_type", "is not included in the list")]

    def test_time_period_relationship(self):
        job = Job(company_name="Acme", source="Web", time_period=TimePeriod(year=2024, month=1))
        assert job.valid()

    def test_missing_time_period_id(self, db_session):
        job = Job(company_name="Acme", source="Web", time_period_id=999)
        assert job.validate(db_session) == [("time_period", "must exist")]

    def test_time_period_id_outside_integer_range(self, db_session):
        job = Job(company_name="Acme", source="Web", time_period_id=2 ** 70)
        assert job.validate(db_session) == [("time_period", "must exist")]

    def test_time_period_id_without_session(self):
        """Without a session the reference cannot be checked and is trusted."""
        job = Job(company_name="Acme", source="Web", time_period_id=999)
        assert job.valid()


class TestJobQueries:
    """Test job query helpers."""

    @pytest.mark.parametrize("status", [ApplicationStatus.APPLIED, "applied"])
    def test_with_status(self, db_session, many_jobs, status):
        many_jobs[2].application_status = "applied"
        db_session.commit()

        assert db_session.scalars(Job.with_status(status)).all() == [many_jobs[2]]

    def test_time_period_jobs(self, db_session, time_period, many_jobs):
        db_session.refresh(time_period)
        assert set(time_period.jobs) == set(many_jobs)
