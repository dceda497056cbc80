"""
Tests for logger functionality.
"""

import pytest
from jobtracker.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.metrics["operations_called"] == 0

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        # Should not raise exceptions
        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.critical("Critical message")

    def test_log_with_context(self, tmp_path):
        """Context is appended to the message as JSON."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Message with context", record_class="Job", ids=[1, 2])

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert 'Message with context | Context: {"record_class": "Job", "ids": [1, 2]}' in log_content

    def test_metrics_tracking(self, tmp_path):
        """Metrics should be tracked correctly."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.record_operation_call("CreateJob")
        logger.record_operation_success("CreateJob")

        logger.record_operation_call("FindOneJob")
        logger.record_operation_failure("FindOneJob", "not_found")

        metrics = logger.get_metrics()

        assert metrics["operations_called"] == 2
        assert metrics["operations_succeeded"] == 1
        assert metrics["operations_failed"] == 1
        assert metrics["errors_by_type"]["not_found"] == 1

        # Check per-operation stats
        assert "CreateJob" in metrics["operation_success_rate"]
        assert metrics["operation_success_rate"]["CreateJob"]["calls"] == 1
        assert metrics["operation_success_rate"]["CreateJob"]["successes"] == 1
        assert metrics["operation_success_rate"]["CreateJob"]["success_rate"] == 1.0
        assert metrics["operation_success_rate"]["FindOneJob"]["success_rate"] == 0.0

    def test_success_rate_calculation(self, tmp_path):
        """Success rate should be calculated correctly."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        # 3 calls, 2 successes = 66.7% success rate
        for _ in range(3):
            logger.record_operation_call("UpdateJob")

        logger.record_operation_success("UpdateJob")
        logger.record_operation_success("UpdateJob")

        metrics = logger.get_metrics()
        success_rate = metrics["operation_success_rate"]["UpdateJob"]["success_rate"]

        assert success_rate == pytest.approx(0.667, rel=0.01)

    def test_log_file_creation(self, tmp_path):
        """Log file should be created in specified directory."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Test message")

        # Check that a log file was created
        log_files = list(tmp_path.glob("jobtracker_*.log"))
        assert len(log_files) == 1

        # Check that message was written
        log_content = log_files[0].read_text()
        assert "Test message" in log_content

    def test_metrics_summary(self, tmp_path):
        """The summary lists overall and per-operation results."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )
        logger.record_operation_call("SaveJob")
        logger.record_operation_failure("SaveJob", "failed_validation")

        logger.log_metrics_summary()

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert "Operations: 0/1 (0.0% success)" in log_content
        assert "SaveJob: 0/1 (0.0%)" in log_content
        assert "failed_validation: 1" in log_content

    def test_console_logs_go_to_stderr(self, capsys):
        logger = StructuredLogger(name="test", enable_file=False)

        logger.warning("Careful")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Careful" in captured.err


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        """get_logger should return same instance."""
        reset_logger()  # Start fresh

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        """reset_logger should create new instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_operation_call("BuildJob")

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        # Should be different instance with fresh metrics
        assert logger2 is not logger1
        assert logger2.metrics["operations_called"] == 0

    def test_settings_from_environment(self, tmp_path, monkeypatch):
        """Unspecified options come from the JOBTRACKER_* variables."""
        monkeypatch.setenv("JOBTRACKER_LOG_FILE", "true")
        monkeypatch.setenv("JOBTRACKER_LOG_DIR", str(tmp_path / "env-logs"))
        reset_logger()

        logger = get_logger(enable_console=False)
        logger.info("From settings")

        assert list((tmp_path / "env-logs").glob("jobtracker_*.log"))
