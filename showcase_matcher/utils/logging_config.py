# ============================================================================
# Logging Configuration - root handler from LOG_LEVEL / LOG_FORMAT
# ============================================================================

"""
Configures the root logger once per process:
1. Level from settings.log_level
2. Format from settings.log_format ("text" or "json")
3. JSON records carry timestamp, level, logger, message, module, function, line
4. Calling configure_logging() again replaces the handler instead of stacking
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Marks the handler we own so reconfiguration can find it
_HANDLER_NAME = "showcase_matcher"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(settings: Optional[Any] = None) -> logging.Logger:
    """
    Install the application log handler on the root logger.

    Args:
        settings: object with log_level / log_format (Settings); None -> INFO text
    """
    level_name = str(getattr(settings, "log_level", "INFO") or "INFO").upper()
    log_format = str(getattr(settings, "log_format", "text") or "text").lower()

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    # chatty third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root


__all__ = ["JsonFormatter", "configure_logging"]
