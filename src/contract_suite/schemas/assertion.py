# schemas/assertion.py

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class AssertionKind(str, Enum):
    """Kinds of checks the engine can attach to a request."""

    STATUS_SUCCESS = "status_success"
    STATUS_CODE = "status_code"
    RESPONSE_TIME = "response_time"
    CONTENT_TYPE = "content_type"
    JSON_BODY = "json_body"
    SCHEMA_VALIDATION = "schema_validation"
    HEADER_PRESENT = "header_present"
    BODY_CONTENT = "body_content"
    HEADER_CONTENT = "header_content"
    EXTENDED = "extended"
    ASSIGN_VARIABLE = "assign_variable"


class Assertion(BaseModel):
    """One rendered check attached to a request record."""

    model_config = ConfigDict(frozen=True)

    kind: AssertionKind
    name: str
    script: List[str] = Field(default_factory=list)
    details: Dict[str, Any] = Field(
        default_factory=dict, description="Parameters the check was rendered from"
    )
