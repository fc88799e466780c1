"""
Logging setup.

Console logging goes through the root logger. Audit events (patient soft
deletes, appointment cancellations) go through a dedicated ``clinic.audit``
logger whose records carry a ``log_type`` attribute; each log type is routed
to its own daily-rotated JSON lines file under ``LOG_DIR``.

The audit logger is built by :func:`setup_logging` at application startup,
handed to request handlers through a dependency and flushed by
:func:`shutdown_logging` at shutdown.
"""
import json
import logging
import os
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler

AUDIT_LOGGER_NAME = "clinic.audit"

LOG_TYPE_DELETION = "Deletion"
LOG_TYPE_CANCELLATION = "Cancellation"

AUDIT_LOG_FILES = {
    LOG_TYPE_DELETION: "softDeletePatients.log",
    LOG_TYPE_CANCELLATION: "appointmentCancellations.log",
}

_AUDIT_FIELDS = ("log_type", "patient_id", "appointment_id", "user_email", "reason")


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _AUDIT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class LogTypeFilter(logging.Filter):
    """Pass only records tagged with the given ``log_type``."""

    def __init__(self, log_type: str):
        super().__init__()
        self.log_type = log_type

    def filter(self, record):
        return self.log_type in str(getattr(record, "log_type", ""))


def setup_logging(settings) -> logging.Logger:
    """Configure console logging and return the audit logger handle."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    os.makedirs(settings.LOG_DIR, exist_ok=True)

    audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
    audit_logger.setLevel(logging.INFO)
    # Drop handlers left over from a previous startup in the same process
    shutdown_logging(audit_logger)

    for log_type, filename in AUDIT_LOG_FILES.items():
        handler = TimedRotatingFileHandler(
            filename=os.path.join(settings.LOG_DIR, filename),
            when="midnight",
            backupCount=settings.LOG_RETENTION_DAYS,
            encoding="utf-8",
        )
        handler.addFilter(LogTypeFilter(log_type))
        handler.setFormatter(JsonFormatter())
        audit_logger.addHandler(handler)

    return audit_logger


def shutdown_logging(audit_logger: logging.Logger) -> None:
    """Flush and detach every handler owned by the audit logger."""
    for handler in list(audit_logger.handlers):
        handler.flush()
        handler.close()
        audit_logger.removeHandler(handler)
