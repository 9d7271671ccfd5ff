"""Structured logging with JSON support and sensitive data redaction."""

import logging
import sys
from pathlib import Path
from typing import Any, Dict

import structlog
from pythonjsonlogger import jsonlogger

from .config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging() -> None:
    """Configure structured logging for console and the suite log file."""
    settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logs_dir = Path("logs")
    logs_dir.mkdir(exist_ok=True)

    if settings.json_logs:
        formatter = jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S"
        )
        renderer = structlog.stdlib.ProcessorFormatter.wrap_for_formatter
    else:
        formatter = logging.Formatter(LOG_FORMAT)
        renderer = structlog.dev.ConsoleRenderer()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    file_handler = logging.FileHandler(logs_dir / "suite.log")
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            RedactSensitiveData(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class RedactSensitiveData:
    """
    Processor that keeps credentials and checkout contact data out of logs.

    Credential values (passwords, tokens, cookies, SSO usernames) are replaced
    outright. Contact and address values are reduced to their length, which is
    what matters when a boundary row fails.
    """

    MASK = "***REDACTED***"
    CREDENTIAL_KEYS = ("password", "secret", "token", "cookie", "username")
    CONTACT_KEYS = ("email", "phone", "firstname", "lastname", "postcode", "address")

    def __call__(self, logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        return {key: self._redact(key, value) for key, value in event_dict.items()}

    def _redact(self, key: str, value: Any) -> Any:
        name = key.lower()
        if any(sensitive in name for sensitive in self.CREDENTIAL_KEYS):
            return self.MASK
        if any(contact in name for contact in self.CONTACT_KEYS):
            return self._mask_contact(value)
        if isinstance(value, dict):
            return {k: self._redact(k, v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [
                {k: self._redact(k, v) for k, v in item.items()} if isinstance(item, dict) else item
                for item in value
            ]
        return value

    def _mask_contact(self, value: Any) -> Any:
        if isinstance(value, str):
            return f"<{len(value)} chars>"
        return self.MASK if value else value


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
