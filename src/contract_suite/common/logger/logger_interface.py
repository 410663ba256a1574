# common/logger/logger_interface.py

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class LogLevel(Enum):
    """Severity names understood by the logging backend"""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        """Resolve a level name such as 'info' or 'WARNING'"""
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Unknown log level: {value}")


class LoggerInterface(ABC):
    """What engine components expect from a logger.

    Messages may use ``str.format`` placeholders filled from ``args``. Context
    added with ``add_context`` is attached to every later record until cleared.
    """

    @abstractmethod
    def debug(self, message: str, *args, **kwargs) -> None: ...

    @abstractmethod
    def info(self, message: str, *args, **kwargs) -> None: ...

    @abstractmethod
    def warning(self, message: str, *args, **kwargs) -> None: ...

    @abstractmethod
    def error(self, message: str, *args, **kwargs) -> None: ...

    @abstractmethod
    def log(self, level: LogLevel, message: str, *args, **kwargs) -> None:
        """Emit ``message`` at an explicit level"""

    @abstractmethod
    def add_context(self, **context: Any) -> None:
        """Bind key/value pairs to every following record"""

    @abstractmethod
    def clear_context(self) -> None: ...
