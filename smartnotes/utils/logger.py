"""Logging configuration using Loguru."""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def _flatten_context(record) -> None:
    # Call sites pass context as extra={...}; lift it to the top of record["extra"]
    context = record["extra"].pop("extra", None)
    if isinstance(context, dict):
        record["extra"].update(context)


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = False,
    log_dir: str = "logs",
    file_rotation: str = "10 MB",
    file_retention: str = "7 days",
    compression: str = "zip",
    serialize: bool = True,
) -> None:
    """
    Configure Loguru with a console sink and an optional rotating JSON file sink.

    Context passed as `extra={"note_id": ...}` lands as top-level keys of
    the record's extra, so serialized file lines carry note and owner ids.
    """
    logger.remove()
    logger.configure(extra={"module": "smartnotes"}, patcher=_flatten_context)

    logger.add(
        sys.stderr,
        level=level,
        format=CONSOLE_FORMAT,
        colorize=True,
        serialize=False,
    )

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # enqueue keeps file writes off the event loop thread
        logger.add(
            log_path / "smartnotes_{time:YYYY-MM-DD}.log",
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]}:{function}:{line} - {message}",
            rotation=file_rotation,
            retention=file_retention,
            compression=compression,
            serialize=serialize,
            enqueue=True,
        )


def get_logger(name: str):
    """Get a logger instance bound to a module name."""
    return logger.bind(module=name)
