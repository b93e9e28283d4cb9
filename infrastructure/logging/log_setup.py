# infrastructure/logging/log_setup.py
from __future__ import annotations

from pathlib import Path
from typing import Union

from loguru import logger


def setup_console_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(lambda msg: print(msg, end=""), level=level)


def add_file_sink(path: Union[str, Path], sink_id: str, level: str = "DEBUG") -> int:
    """
    Route records bound with ``sink_id`` to a dedicated log file.

    The parent directory and the file are created when missing.
    Returns the loguru handler id.
    """
    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    log_file.touch(exist_ok=True)
    return logger.add(
        str(log_file),
        level=level,
        filter=lambda record: record["extra"].get("sink_id") == sink_id,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
    )


def remove_sink(handler_id: int) -> None:
    logger.remove(handler_id)
