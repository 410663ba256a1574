# common/logger/standard_logger.py

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger as loguru_logger

from contract_suite.common.logger.logger_interface import LoggerInterface, LogLevel


class StandardLogger(LoggerInterface):
    """Logger implementation backed by loguru.

    Every instance binds its own ``logger_name`` and only receives records
    carrying that name, so several engine components can log to different
    sinks without interfering with each other.
    """

    # Class-level flag to track if the loguru default handler has been removed
    _default_handler_removed = False

    def __init__(
        self,
        name: str = "contract-suite",
        level: LogLevel = LogLevel.INFO,
        use_colors: bool = True,
        log_file: Optional[str] = None,
    ):
        self.name = name
        self.level = level
        self.log_file = log_file
        self.context: Dict[str, Any] = {}
        self._handler_ids = []

        if not StandardLogger._default_handler_removed:
            loguru_logger.remove()
            StandardLogger._default_handler_removed = True

        self._handler_ids.append(
            loguru_logger.add(
                sys.stderr,
                format=self._console_format(use_colors),
                level=level.value,
                colorize=use_colors,
                filter=lambda record: record["extra"].get("logger_name") == name,
            )
        )

        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            self._handler_ids.append(
                loguru_logger.add(
                    log_file,
                    format=(
                        "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
                        "{extra[logger_name]}:{function}:{line} | {message}"
                    ),
                    level=LogLevel.DEBUG.value,
                    rotation="10 MB",
                    retention="30 days",
                    filter=lambda record: record["extra"].get("logger_name") == name,
                )
            )

        self.logger = loguru_logger.bind(logger_name=name)

    @staticmethod
    def _console_format(use_colors: bool) -> str:
        if use_colors:
            return (
                "<green>{time:HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[logger_name]}</cyan> | "
                "<level>{message}</level>"
            )
        return "{time:HH:mm:ss.SSS} | {level: <8} | {extra[logger_name]} | {message}"

    def _log_with_context(self, level: str, message: str, *args, **kwargs) -> None:
        full_context = {**self.context, **kwargs.get("extra", {})}
        if args:
            message = message.format(*args)
        self.logger.bind(**full_context).log(level, message)

    def debug(self, message: str, *args, **kwargs) -> None:
        self._log_with_context("DEBUG", message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self._log_with_context("INFO", message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self._log_with_context("WARNING", message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self._log_with_context("ERROR", message, *args, **kwargs)

    def log(self, level: LogLevel, message: str, *args, **kwargs) -> None:
        self._log_with_context(level.value, message, *args, **kwargs)

    def add_context(self, **kwargs) -> None:
        self.context.update(kwargs)

    def clear_context(self) -> None:
        self.context.clear()

    def close(self) -> None:
        """Detach the sinks owned by this logger"""
        for handler_id in self._handler_ids:
            loguru_logger.remove(handler_id)
        self._handler_ids.clear()
