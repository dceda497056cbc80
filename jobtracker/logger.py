"""
Structured logging for jobtracker.

Provides centralized logging with console and file outputs, log levels,
and metrics tracking for monitoring how record operations fare.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import load_settings


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks operation metrics.
    """

    def __init__(
        self,
        name: str = "jobtracker",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if enable_file else getattr(logging, level.upper()))
        self.logger.handlers.clear()
        self.logger.propagate = False

        self.metrics = {
            "operations_called": 0,
            "operations_succeeded": 0,
            "operations_failed": 0,
            "errors_by_type": {},
            "operation_success_rate": {},
        }

        if enable_console:
            # stdout is reserved for command output
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"jobtracker_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_operation_call(self, operation: str):
        """Record an operation invocation."""
        self.metrics["operations_called"] += 1
        stats = self.metrics["operation_success_rate"].setdefault(
            operation, {"calls": 0, "successes": 0}
        )
        stats["calls"] += 1

    def record_operation_success(self, operation: str):
        self.metrics["operations_succeeded"] += 1
        if operation in self.metrics["operation_success_rate"]:
            self.metrics["operation_success_rate"][operation]["successes"] += 1

    def record_operation_failure(self, operation: str, error_type: str):
        self.metrics["operations_failed"] += 1

        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics, with success rates filled in."""
        metrics_copy = self.metrics.copy()
        for stats in metrics_copy["operation_success_rate"].values():
            if stats["calls"] > 0:
                stats["success_rate"] = round(stats["successes"] / stats["calls"], 3)

        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        total_calls = metrics["operations_called"]
        total_successes = metrics["operations_succeeded"]
        overall_rate = 0
        if total_calls > 0:
            overall_rate = round(total_successes / total_calls * 100, 1)

        self.info("=== Operation Metrics ===")
        self.info(f"Operations: {total_successes}/{total_calls} ({overall_rate}% success)")

        if metrics["operation_success_rate"]:
            self.info("Operation Success Rates:")
            for operation, stats in metrics["operation_success_rate"].items():
                rate = stats.get("success_rate", 0) * 100
                self.info(f"  {operation}: {stats['successes']}/{stats['calls']} ({rate:.1f}%)")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "jobtracker",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    The first call creates the logger; unspecified options come from
    the environment settings (see config.load_settings).

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        settings = load_settings()
        kwargs.setdefault("log_dir", settings.log_dir)
        kwargs.setdefault("enable_file", settings.log_to_file)
        _global_logger = StructuredLogger(name=name, level=level or settings.log_level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
