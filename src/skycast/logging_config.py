"""Centralized logging configuration."""

import logging
from typing import Optional
from urllib.parse import quote


def configure_logging(level: int = logging.INFO):
    """
    Configure a consistent logging format for the client and its transport.

    The library never calls this on import; applications opt in.
    """
    # Define the standard formatter
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    loggers_to_configure = [
        "skycast",
        "httpx",
    ]

    for logger_name in loggers_to_configure:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)

        # Remove existing handlers to avoid duplicate logs
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        # Don't propagate to avoid duplicate messages
        logger.propagate = False

        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(formatter)

        logger.addHandler(handler)


class SecretMaskingFilter(logging.Filter):
    """Replace registered secrets in log messages with ``***``."""

    def __init__(self):
        super().__init__()
        self.secrets = set()

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        masked = message
        for secret in self.secrets:
            masked = masked.replace(secret, "***")
        if masked != message:
            record.msg = masked
            record.args = None
        return True


_secret_filter = SecretMaskingFilter()

# httpx logs every request URL at INFO, and the key is a path segment
MASKED_LOGGERS = ["httpx"]


def mask_secret(secret: Optional[str]):
    """Keep ``secret`` out of records emitted by the transport loggers."""
    if not secret:
        return
    _secret_filter.secrets.update({secret, quote(secret, safe="")})
    for logger_name in MASKED_LOGGERS:
        logger = logging.getLogger(logger_name)
        if _secret_filter not in logger.filters:
            logger.addFilter(_secret_filter)
