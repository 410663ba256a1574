# tools/assertions/content.py

import json
from typing import Any, Dict, Optional

from contract_suite.config.constants import UNKNOWN_SCHEMA_FORMATS
from contract_suite.core.mapped_operation import PostmanMappedOperation
from contract_suite.schemas.assertion import AssertionKind
from contract_suite.schemas.config import CheckConfig, SchemaValidationCheck
from contract_suite.schemas.openapi import OasMappedOperation
from contract_suite.tools.assertions.render import js_string, pm_test


def inject_content_type(
    check: CheckConfig,
    record: PostmanMappedOperation,
    contract: Optional[OasMappedOperation],
    content_type: str,
) -> PostmanMappedOperation:
    title = f"{record.test_label} - Content-Type is {content_type}"
    lines = pm_test(
        "Validate if response header has matching content-type",
        title,
        [
            'pm.expect(pm.response.headers.get("Content-Type"))'
            f".to.include({js_string(content_type)});"
        ],
    )
    return record.add_assertion(
        AssertionKind.CONTENT_TYPE, title, lines, details={"content_type": content_type}
    )


def inject_json_body(
    check: CheckConfig,
    record: PostmanMappedOperation,
    contract: Optional[OasMappedOperation] = None,
) -> PostmanMappedOperation:
    title = f"{record.test_label} - Response has JSON Body"
    lines = pm_test(
        "Validate if response has JSON Body", title, ["pm.response.to.have.jsonBody();"]
    )
    return record.add_assertion(AssertionKind.JSON_BODY, title, lines)


def _with_additional_properties(schema: Any, allowed: bool) -> Any:
    """Copy of ``schema`` with additionalProperties set on every object schema"""
    if isinstance(schema, list):
        return [_with_additional_properties(entry, allowed) for entry in schema]
    if not isinstance(schema, dict):
        return schema
    result = {
        key: _with_additional_properties(value, allowed)
        for key, value in schema.items()
    }
    if result.get("type") == "object" or "properties" in result:
        result["additionalProperties"] = allowed
    return result


def inject_json_schema(
    check: SchemaValidationCheck,
    record: PostmanMappedOperation,
    contract: Optional[OasMappedOperation],
    schema: Dict[str, Any],
) -> PostmanMappedOperation:
    if check.additional_properties is not None:
        schema = _with_additional_properties(schema, check.additional_properties)

    title = f"{record.test_label} - Schema is valid"
    schema_lines = json.dumps(schema, indent=2).split("\n")
    body = ["var schema = " + schema_lines[0]]
    body.extend(schema_lines[1:])
    body[-1] += ";"
    body.append(
        "pm.response.to.have.jsonSchema(schema, "
        f"{{unknownFormats: {json.dumps(UNKNOWN_SCHEMA_FORMATS)}}});"
    )
    lines = pm_test("Validate if response matches JSON schema", title, body)
    return record.add_assertion(
        AssertionKind.SCHEMA_VALIDATION, title, lines, details={"schema": schema}
    )
