# common/logger/logger_factory.py

from typing import Dict, Optional

from contract_suite.common.logger.logger_interface import LoggerInterface, LogLevel
from contract_suite.common.logger.standard_logger import StandardLogger


class LoggerFactory:
    """Factory for creating and caching logger instances"""

    _instances: Dict[str, LoggerInterface] = {}

    @classmethod
    def get_logger(
        cls,
        name: str = "contract-suite",
        level: Optional[LogLevel] = None,
        use_colors: Optional[bool] = None,
        log_file: Optional[str] = None,
    ) -> LoggerInterface:
        """
        Get or create a logger instance

        Args:
            name: Logger name
            level: Console log level, defaults to ``settings.LOG_LEVEL``
            use_colors: Colored output, defaults to ``settings.USE_COLORS``
            log_file: Optional log file path, defaults to ``settings.LOG_FILE``

        Returns:
            Logger instance
        """
        if name not in cls._instances:
            from contract_suite.config.settings import settings

            cls._instances[name] = StandardLogger(
                name=name,
                level=level or LogLevel.parse(settings.LOG_LEVEL),
                use_colors=settings.USE_COLORS if use_colors is None else use_colors,
                log_file=log_file or settings.LOG_FILE,
            )

        return cls._instances[name]

    @classmethod
    def clear_cache(cls) -> None:
        """Close and forget cached logger instances"""
        for instance in cls._instances.values():
            if isinstance(instance, StandardLogger):
                instance.close()
        cls._instances.clear()
