"""
Pytest configuration and shared fixtures.
"""

import pytest
from datetime import datetime
from typing import Dict, Any

from jobtracker.database import get_session, init_database
from jobtracker.logger import get_logger, reset_logger
from jobtracker.models import Job, TimePeriod


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path, monkeypatch):
    """Keep logs (and settings) inside the test's temporary directory."""
    monkeypatch.delenv("JOBTRACKER_DATABASE", raising=False)
    monkeypatch.setenv("JOBTRACKER_LOG_FILE", "false")
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False, enable_file=False)
    yield logger
    reset_logger()


@pytest.fixture
def db_path(tmp_path):
    """Path to an initialized temporary database."""
    path = tmp_path / "test.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Session on a temporary database."""
    session = get_session(db_path)
    yield session
    session.close()


@pytest.fixture
def time_period(db_session) -> TimePeriod:
    """A persisted time period."""
    period = TimePeriod(year=2024, month=3)
    db_session.add(period)
    db_session.commit()
    return period


@pytest.fixture
def valid_job_attributes(time_period) -> Dict[str, Any]:
    """Attributes for a valid job."""
    return {
        "company_name": "Umbrella Corp",
        "source": "PlayStation",
        "title": "Test Subject",
        "application_status": "interviewing",
        "notes": "BYO-Biohazard Suit",
        "time_period_id": time_period.id,
    }


@pytest.fixture
def job(db_session, valid_job_attributes) -> Job:
    """A persisted job."""
    record = Job(**valid_job_attributes)
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def many_jobs(db_session, time_period):
    """Three persisted jobs with distinct creation times."""
    attributes = [
        {"company_name": "Weyland-Yutani", "created_at": datetime(2024, 3, 10)},
        {"company_name": "Umbrella Corp", "created_at": datetime(2024, 3, 8)},
        {"company_name": "Raccoon City PD", "created_at": datetime(2024, 3, 9)},
    ]
    records = [
        Job(source="Web", time_period_id=time_period.id, **hsh) for hsh in attributes
    ]
    db_session.add_all(records)
    db_session.commit()
    return records
