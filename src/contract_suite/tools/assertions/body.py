# tools/assertions/body.py

from typing import List, Optional

from contract_suite.core.mapped_operation import PostmanMappedOperation
from contract_suite.schemas.assertion import AssertionKind
from contract_suite.schemas.config import ContentCheck, ExtendTestsRule
from contract_suite.schemas.openapi import OasMappedOperation
from contract_suite.tools.assertions.render import (
    JSON_DATA_LINES,
    content_expectations,
    ensure_json_data,
    js_string,
    pm_test,
)


def inject_body_content(
    checks: List[ContentCheck],
    record: PostmanMappedOperation,
    contract: Optional[OasMappedOperation] = None,
) -> PostmanMappedOperation:
    """Check response body properties addressed by lodash paths such as 'data[0].id'."""
    if not checks:
        return record
    ensure_json_data(record)

    for check in checks:
        path = js_string(check.key)
        if check.not_exist:
            title = (
                f"{record.test_label} - Content check if property "
                f"'{check.key}' does not exist"
            )
            lines = pm_test(
                "Response body should not have property",
                title,
                [f"pm.expect(_.has(jsonData, {path})).to.be.false;"],
            )
            record.add_assertion(
                AssertionKind.BODY_CONTENT, title, lines, details={"key": check.key}
            )
            continue

        title = f"{record.test_label} - Content check if property '{check.key}' exists"
        lines = pm_test(
            "Response body should have property",
            title,
            [f"pm.expect(_.has(jsonData, {path})).to.be.true;"],
        )
        record.add_assertion(
            AssertionKind.BODY_CONTENT, title, lines, details={"key": check.key}
        )

        for description, statement in content_expectations(
            f"_.get(jsonData, {path})", check
        ):
            title = (
                f"{record.test_label} - Content check if value for "
                f"'{check.key}' {description}"
            )
            record.add_assertion(
                AssertionKind.BODY_CONTENT,
                title,
                pm_test("Response body should have value", title, [statement]),
                details={"key": check.key},
            )
    return record


def inject_extended_tests(
    rule: ExtendTestsRule,
    record: PostmanMappedOperation,
    contract: Optional[OasMappedOperation] = None,
) -> PostmanMappedOperation:
    """Add hand-written test lines before or after the generated ones."""
    if not rule.tests:
        return record
    lines = list(rule.tests) + [""]
    # Prepended lines stay below the jsonData declaration
    offset = len(JSON_DATA_LINES) if record.json_data_injected else 0
    return record.add_assertion(
        AssertionKind.EXTENDED,
        f"{record.test_label} - Extended tests",
        lines,
        prepend=not rule.append,
        offset=offset,
    )
