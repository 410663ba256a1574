# tools/assertions/headers.py

from typing import List, Optional

from contract_suite.core.mapped_operation import PostmanMappedOperation
from contract_suite.schemas.assertion import AssertionKind
from contract_suite.schemas.config import CheckConfig, ContentCheck
from contract_suite.schemas.openapi import OasMappedOperation
from contract_suite.tools.assertions.render import (
    content_expectations,
    js_string,
    pm_test,
)


def inject_header_present(
    check: CheckConfig,
    record: PostmanMappedOperation,
    contract: Optional[OasMappedOperation],
    header_name: str,
) -> PostmanMappedOperation:
    title = f"{record.test_label} - Response header {header_name} is present"
    lines = pm_test(
        "Validate if response header is present",
        title,
        [f"pm.response.to.have.header({js_string(header_name)});"],
    )
    return record.add_assertion(
        AssertionKind.HEADER_PRESENT, title, lines, details={"header": header_name}
    )


def inject_header_content(
    checks: List[ContentCheck],
    record: PostmanMappedOperation,
    contract: Optional[OasMappedOperation] = None,
) -> PostmanMappedOperation:
    """One test per header expectation, in the order the checks are listed."""
    for check in checks:
        header = js_string(check.key)
        if check.not_exist:
            expectations = [
                ("does not exist", f"pm.response.to.not.have.header({header});")
            ]
        else:
            expectations = content_expectations(
                f"pm.response.headers.get({header})", check
            ) or [("exists", f"pm.response.to.have.header({header});")]

        for description, statement in expectations:
            title = f"{record.test_label} - Response header {check.key} {description}"
            record.add_assertion(
                AssertionKind.HEADER_CONTENT,
                title,
                pm_test("Response header check", title, [statement]),
                details={"key": check.key},
            )
    return record
