from __future__ import annotations

import logging
import sys

from config.settings import get_settings


_INITIALIZED: bool = False

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("urllib3", "charset_normalizer")


class StructuredExtraFormatter(logging.Formatter):
    """Appends the structured `extra=` fields a record carries as key=value pairs.

    Only fields that were passed are rendered, so a plain log call stays short.
    """

    FIELDS = ("step", "status", "duration_ms", "source", "error")

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        record.fields = "".join(
            f" {name}={getattr(record, name)}" for name in self.FIELDS if hasattr(record, name)
        )
        return super().format(record)


def init_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls are no-ops."""
    global _INITIALIZED
    if _INITIALIZED:
        return

    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(StructuredExtraFormatter(
            fmt=f"%(asctime)s %(levelname)s %(name)s %(message)s%(fields)s env={settings.run_env}"
        ))
        root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    _INITIALIZED = True
