import os
import sys
from typing import Optional

from loguru import logger

PACKAGE_NAME = "string_processor"
DEFAULT_LEVEL = os.environ.get("STRING_PROCESSOR_LOG_LEVEL", "WARNING").upper()

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss:SSS}</green> | eid={extra[execution_id]} | <level>{level: <8}</level> | "
    "<cyan>{extra[object_name]}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss:SSS}</green> | eid={extra[execution_id]} | <level>{level: <8}</level> | "
    "<cyan>{extra[object_name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


# Configure loguru for better formatting and control
def _ensure_extra_fields(record):
    # Default execution_id for lines logged outside a pipeline run
    record["extra"].setdefault("execution_id", "-")
    # Default object_name for formatting
    record["extra"].setdefault("object_name", "UNKNOWN")
    return True


def configure_logging(level: str = DEFAULT_LEVEL, log_file: Optional[str] = None) -> None:
    """
    Replace every loguru sink with a console sink and, optionally, a rotating file sink.

    The package disables its own records on import; this enables them again.
    Applications with their own sinks can call ``logger.enable("string_processor")`` instead.

    Args:
        level: Minimum level for both sinks
        log_file: Path of the log file; no file sink when omitted
    """
    logger.remove()  # Remove default handler
    logger.add(
        # sys.stderr is looked up per message so redirected streams are honoured
        lambda msg: print(msg, end="", file=sys.stderr),
        level=level,
        format=CONSOLE_FORMAT,
        colorize=True,
        filter=_ensure_extra_fields,
    )
    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="7 days",
            level=level,
            format=FILE_FORMAT,
            backtrace=True,
            diagnose=True,
            filter=_ensure_extra_fields,
        )
    logger.enable(PACKAGE_NAME)


# records stay silent until configure_logging() or logger.enable("string_processor")
logger.disable(PACKAGE_NAME)

__all__ = ["logger", "configure_logging", "PACKAGE_NAME"]
