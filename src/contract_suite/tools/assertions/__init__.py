"""Assertion injectors.

Each injector takes the check parameters, the request record and optionally
the contract operation, appends one kind of test to the record and returns it.
"""

from contract_suite.tools.assertions.status import (
    inject_response_time,
    inject_status_code,
    inject_status_success,
)
from contract_suite.tools.assertions.content import (
    inject_content_type,
    inject_json_body,
    inject_json_schema,
)
from contract_suite.tools.assertions.headers import (
    inject_header_content,
    inject_header_present,
)
from contract_suite.tools.assertions.body import (
    inject_body_content,
    inject_extended_tests,
)

__all__ = [
    "inject_status_success",
    "inject_status_code",
    "inject_response_time",
    "inject_content_type",
    "inject_json_body",
    "inject_json_schema",
    "inject_header_present",
    "inject_header_content",
    "inject_body_content",
    "inject_extended_tests",
]
