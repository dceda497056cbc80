"""
Job and TimePeriod models.

A Job is a job listing from a company and the matching application, if
any. Its status moves from prospect through applied and interviewing
(if applicable) to closed. Each job belongs to a TimePeriod, a monthly
search interval.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    select,
)
from sqlalchemy.orm import Session, object_session, relationship

from .database import ApplicationRecord, ValidationErrors
from .operations import Factory, FindMatching, OperationName, register_factory
from .schema import is_storable_integer, validate_inclusion, validate_integer, validate_presence


class ApplicationStatus(str, Enum):
    APPLIED = "applied"
    CLOSED = "closed"
    INTERVIEWING = "interviewing"
    PROSPECT = "prospect"


class JobType(str, Enum):
    CONTRACT = "contract"
    FULL_TIME = "full_time"
    INTERNSHIP = "internship"
    PART_TIME = "part_time"


class TimePeriod(ApplicationRecord):
    """A discrete search interval, starting with the given month and year."""

    __tablename__ = "time_periods"
    __table_args__ = (UniqueConstraint("year", "month", name="index_time_periods_on_year_and_month"),)

    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)

    # Deleting a period that still has jobs is refused by the foreign key.
    jobs = relationship("Job", back_populates="time_period", passive_deletes="all")

    @classmethod
    def active(cls, session: Session) -> Optional["TimePeriod"]:
        """Return the most recent time period, if any."""
        query = select(cls).order_by(cls.year.desc(), cls.month.desc()).limit(1)
        return session.scalars(query).first()

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def validate(self, session: Optional[Session] = None) -> ValidationErrors:
        errors: ValidationErrors = []
        errors += validate_presence("month", self.month)
        errors += validate_integer("month", self.month, minimum=1, maximum=12)
        errors += validate_presence("year", self.year)
        errors += validate_integer("year", self.year, minimum=1)

        if not errors and self._is_duplicate(session or object_session(self)):
            errors.append(("month", "has already been taken"))

        return errors

    def _is_duplicate(self, session: Optional[Session]) -> bool:
        if session is None:
            return False

        query = select(TimePeriod.id).where(
            TimePeriod.year == self.year,
            TimePeriod.month == self.month,
        )
        if self.id is not None:
            query = query.where(TimePeriod.id != self.id)
        return session.scalars(query).first() is not None


class FindTimePeriods(FindMatching):
    """Lists time periods, most recent first."""

    default_order = {"year": "desc", "month": "desc"}


@register_factory(TimePeriod)
class TimePeriodFactory(Factory):
    OPERATIONS = {**Factory.OPERATIONS, OperationName.FIND_MATCHING: FindTimePeriods}


class Job(ApplicationRecord):
    """A job listing and its application status."""

    __tablename__ = "jobs"
    __table_args__ = (
        Index("index_jobs_on_action_required_and_company_name", "action_required", "company_name"),
        Index("index_jobs_on_application_status_and_company_name", "application_status", "company_name"),
        Index("index_jobs_on_company_name", "company_name"),
    )

    action_required = Column(Boolean, nullable=False, default=True)
    application_active = Column(Boolean, nullable=False, default=True)
    application_status = Column(String, nullable=False, default=ApplicationStatus.PROSPECT.value)
    company_name = Column(String, nullable=False, default="")
    data = Column(JSON, nullable=False, default=dict)
    job_type = Column(String, nullable=False, default="")
    notes = Column(Text, nullable=False, default="")
    recruiter_agency = Column(String, nullable=False, default="")
    recruiter_name = Column(String, nullable=False, default="")
    source = Column(String, nullable=False)
    source_data = Column(JSON, nullable=False, default=dict)
    title = Column(String, nullable=False, default="")
    time_period_id = Column(Integer, ForeignKey("time_periods.id"), index=True)

    time_period = relationship("TimePeriod", back_populates="jobs")

    @classmethod
    def with_status(cls, status: ApplicationStatus):
        """Select statement for the jobs with the given application status."""
        return select(cls).where(cls.application_status == ApplicationStatus(status).value)

    def validate(self, session: Optional[Session] = None) -> ValidationErrors:
        errors: ValidationErrors = []
        errors += validate_presence("application_status", self.application_status)
        errors += validate_inclusion(
            "application_status",
            self.application_status,
            [status.value for status in ApplicationStatus],
            allow_blank=True,
        )
        errors += validate_presence("company_name", self.company_name)
        errors += validate_inclusion(
            "job_type",
            self.job_type,
            [job_type.value for job_type in JobType],
            allow_blank=True,
        )
        errors += validate_presence("source", self.source)

        if not self._time_period_exists(session or object_session(self)):
            errors.append(("time_period", "must exist"))

        return errors

    def _time_period_exists(self, session: Optional[Session]) -> bool:
        if self.time_period is not None:
            return True
        if self.time_period_id is None or not is_storable_integer(self.time_period_id):
            return False
        if session is None:
            return True
        return session.get(TimePeriod, self.time_period_id) is not None
