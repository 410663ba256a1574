# tools/assertions/status.py

from typing import Optional

from contract_suite.core.mapped_operation import PostmanMappedOperation
from contract_suite.schemas.assertion import AssertionKind
from contract_suite.schemas.config import (
    CheckConfig,
    ResponseTimeCheck,
    StatusCodeCheck,
)
from contract_suite.schemas.openapi import OasMappedOperation
from contract_suite.tools.assertions.render import pm_test


def inject_status_success(
    check: CheckConfig,
    record: PostmanMappedOperation,
    contract: Optional[OasMappedOperation] = None,
) -> PostmanMappedOperation:
    title = f"{record.test_label} - Status code is 2xx"
    lines = pm_test("Validate status 2xx", title, ["pm.response.to.be.success;"])
    return record.add_assertion(AssertionKind.STATUS_SUCCESS, title, lines)


def inject_status_code(
    check: StatusCodeCheck,
    record: PostmanMappedOperation,
    contract: Optional[OasMappedOperation] = None,
) -> PostmanMappedOperation:
    """Expect ``check.code``; the caller fills it from the documented response."""
    if check.code is None:
        return record
    title = f"{record.test_label} - Status code is {check.code}"
    lines = pm_test(
        "Validate status code",
        title,
        [f"pm.expect(pm.response.code).to.equal({check.code});"],
    )
    return record.add_assertion(
        AssertionKind.STATUS_CODE, title, lines, details={"code": check.code}
    )


def inject_response_time(
    check: ResponseTimeCheck,
    record: PostmanMappedOperation,
    contract: Optional[OasMappedOperation] = None,
) -> PostmanMappedOperation:
    title = f"{record.test_label} - Response time is less than {check.max_ms}ms"
    lines = pm_test(
        "Validate response time",
        title,
        [f"pm.expect(pm.response.responseTime).to.be.below({check.max_ms});"],
    )
    return record.add_assertion(
        AssertionKind.RESPONSE_TIME, title, lines, details={"max_ms": check.max_ms}
    )
