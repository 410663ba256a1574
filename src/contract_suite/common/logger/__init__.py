from contract_suite.common.logger.logger_interface import LoggerInterface, LogLevel
from contract_suite.common.logger.standard_logger import StandardLogger
from contract_suite.common.logger.logger_factory import LoggerFactory

__all__ = [
    "LoggerInterface",
    "LogLevel",
    "StandardLogger",
    "LoggerFactory",
]
