# schemas/config.py

"""Rule configuration for the injection engine.

The on-disk format uses camelCase keys (``openApiOperation``,
``excludeForOperations``); attributes are snake_case. Every check of a
contract-test rule is an explicit optional field, so the engine never looks
checks up by name.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from contract_suite.config.constants import DEFAULT_RESPONSE_TIME_MS


class RuleModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class OperationTarget(RuleModel):
    """Selects the request records a rule applies to."""

    open_api_operation: Optional[str] = Field(
        default=None, description="Operation reference such as GET::/pets/{id}"
    )
    open_api_operation_id: Optional[str] = None
    open_api_operation_ids: Optional[List[str]] = None
    exclude_for_operations: List[str] = Field(
        default_factory=list,
        description="Operation ids or references the rule must skip",
    )


# ===== Contract tests =====
class CheckConfig(RuleModel):
    enabled: bool = True
    exclude_for_operations: List[str] = Field(default_factory=list)


class StatusCodeCheck(CheckConfig):
    code: Optional[int] = Field(
        default=None, description="Expected code; defaults to the documented one"
    )


class ResponseTimeCheck(CheckConfig):
    max_ms: int = DEFAULT_RESPONSE_TIME_MS


class SchemaValidationCheck(CheckConfig):
    additional_properties: Optional[bool] = None


def _expand_shorthand(value: Any, scalar_key: Optional[str] = None) -> Any:
    """Accept ``true``/``false`` or a bare scalar in place of a check object"""
    if isinstance(value, bool):
        return {"enabled": value}
    if scalar_key and isinstance(value, int):
        return {scalar_key: value}
    return value


class ContractTestRule(OperationTarget):
    status_success: Optional[CheckConfig] = None
    status_code: Optional[StatusCodeCheck] = None
    response_time: Optional[ResponseTimeCheck] = None
    content_type: Optional[CheckConfig] = None
    json_body: Optional[CheckConfig] = None
    schema_validation: Optional[SchemaValidationCheck] = None
    headers_present: Optional[CheckConfig] = None

    @field_validator(
        "status_success",
        "content_type",
        "json_body",
        "schema_validation",
        "headers_present",
        mode="before",
    )
    @classmethod
    def _toggle_shorthand(cls, value):
        return _expand_shorthand(value)

    @field_validator("status_code", mode="before")
    @classmethod
    def _status_code_shorthand(cls, value):
        return _expand_shorthand(value, "code")

    @field_validator("response_time", mode="before")
    @classmethod
    def _response_time_shorthand(cls, value):
        return _expand_shorthand(value, "maxMs")


# ===== Content tests =====
class ContentCheck(RuleModel):
    key: str
    value: Optional[Any] = None
    contains: Optional[Any] = None
    one_of: Optional[List[Any]] = None
    length: Optional[int] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    not_exist: bool = False


class ContentTestRule(OperationTarget):
    response_body_tests: List[ContentCheck] = Field(default_factory=list)
    response_header_tests: List[ContentCheck] = Field(default_factory=list)


# ===== Extend tests =====
class ExtendTestsRule(OperationTarget):
    tests: List[str] = Field(default_factory=list)
    append: bool = True


# ===== Overwrites =====
class Overwrite(RuleModel):
    key: str
    value: Optional[Any] = None
    overwrite: bool = True
    remove: bool = False
    disable: bool = False


class RequestOverwrites(RuleModel):
    overwrite_request_query_params: List[Overwrite] = Field(default_factory=list)
    overwrite_request_path_variables: List[Overwrite] = Field(default_factory=list)
    overwrite_request_headers: List[Overwrite] = Field(default_factory=list)
    overwrite_request_body: List[Overwrite] = Field(default_factory=list)


class OverwriteRule(OperationTarget, RequestOverwrites):
    pass


# ===== Assign variables =====
class CollectionVariable(RuleModel):
    name: Optional[str] = None
    response_body_prop: Optional[str] = None
    response_header_prop: Optional[str] = None
    request_body_prop: Optional[str] = None
    value: Optional[Any] = None


class AssignVariablesRule(OperationTarget):
    collection_variables: List[CollectionVariable] = Field(default_factory=list)


# ===== Variations =====
class VariationTests(RuleModel):
    contract_tests: List[ContractTestRule] = Field(default_factory=list)
    content_tests: List[ContentTestRule] = Field(default_factory=list)
    extend_tests: List[ExtendTestsRule] = Field(default_factory=list)


class Variation(RuleModel):
    """A named mutation set plus the tests to re-apply on the mutated request."""

    name: str
    open_api_response: Optional[str] = Field(
        default=None,
        description="Response to test against, e.g. '404' or '200::application/json'",
    )
    overwrites: List[RequestOverwrites] = Field(default_factory=list)
    tests: Optional[VariationTests] = None
    assign_variables: List[AssignVariablesRule] = Field(default_factory=list)


class VariationTestRule(OperationTarget):
    variations: List[Variation] = Field(default_factory=list)


# ===== Integration tests =====
class IntegrationStep(RuleModel):
    open_api_operation_id: str
    variations: List[Variation] = Field(default_factory=list)


class IntegrationScenario(RuleModel):
    name: str
    operations: List[IntegrationStep] = Field(default_factory=list)


# ===== Suite =====
class SuiteTests(RuleModel):
    contract_tests: List[ContractTestRule] = Field(default_factory=list)
    content_tests: List[ContentTestRule] = Field(default_factory=list)
    variation_tests: List[VariationTestRule] = Field(default_factory=list)
    extend_tests: List[ExtendTestsRule] = Field(default_factory=list)
    integration_tests: List[IntegrationScenario] = Field(default_factory=list)


class SuiteConfig(RuleModel):
    version: Optional[float] = None
    tests: Optional[SuiteTests] = None
    overwrites: List[OverwriteRule] = Field(default_factory=list)
    assign_variables: List[AssignVariablesRule] = Field(default_factory=list)
