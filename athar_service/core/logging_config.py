import logging
import json
import time
import contextvars

# Define context variables
request_id_var = contextvars.ContextVar("request_id", default=None)

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonContextFormatter(logging.Formatter):
    """A custom formatter to add context variables to the log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            log_record['request_id'] = request_id

        # Fields passed through ``logger.info(..., extra={...})``
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_record[key] = value

        if record.exc_info:
            log_record['exc_info'] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False, default=str)

def setup_logging(settings):
    """Set up the root logger, JSON or plain text depending on settings."""
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler()

    if settings.LOG_JSON:
        formatter = JsonContextFormatter()
    else:
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Suppress verbose logs from third-party libraries
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.info("Logging configured successfully.")
