# core/config_loader.py

from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from contract_suite.core.errors import ConfigError, DocumentLoadError
from contract_suite.core.oas_parser import load_document
from contract_suite.schemas.config import SuiteConfig


def parse_suite_config(data: Dict[str, Any]) -> SuiteConfig:
    try:
        return SuiteConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid suite configuration: {e}") from e


def load_suite_config(path: Union[str, Path]) -> SuiteConfig:
    """Read a JSON or YAML suite configuration file.

    Raises:
        ConfigError: if the file cannot be read or does not validate
    """
    try:
        data = load_document(path)
    except DocumentLoadError as e:
        raise ConfigError(str(e)) from e
    return parse_suite_config(data)
