# tools/assertions/render.py

"""Shared helpers for writing Postman test scripts."""

import json
import re
from typing import Any, List, Tuple

_VARIABLE = re.compile(r"^\{\{([^{}]+)\}\}$")

JSON_DATA_LINES = [
    "// Set response object as internal variable",
    "let jsonData = {};",
    "try {jsonData = pm.response.json();}catch(e){}",
    "",
]


def js_string(value: str) -> str:
    return json.dumps(value)


def js_value(value: Any) -> str:
    """JavaScript literal for ``value``; '{{name}}' reads a collection variable"""
    if isinstance(value, str):
        match = _VARIABLE.match(value)
        if match and not match.group(1).startswith("$"):
            return f"pm.collectionVariables.get({js_string(match.group(1))})"
    return json.dumps(value)


def ensure_json_data(record) -> None:
    """Declare ``jsonData`` once at the top of the record's test script"""
    if record.json_data_injected:
        return
    record.add_script(list(JSON_DATA_LINES), prepend=True)
    record.json_data_injected = True


def content_expectations(actual: str, check) -> List[Tuple[str, str]]:
    """(description, statement) pairs for the values a content check sets"""
    expectations = []
    if check.value is not None:
        expectations.append(
            (
                f"is {check.value}",
                f"pm.expect({actual}).to.eql({js_value(check.value)});",
            )
        )
    if check.contains is not None:
        expectations.append(
            (
                f"contains {check.contains}",
                f"pm.expect({actual}).to.include({js_value(check.contains)});",
            )
        )
    if check.one_of is not None:
        options = ", ".join(js_value(option) for option in check.one_of)
        expectations.append(
            (
                f"is one of {check.one_of}",
                f"pm.expect({actual}).to.be.oneOf([{options}]);",
            )
        )
    if check.length is not None:
        expectations.append(
            (
                f"has length {check.length}",
                f"pm.expect({actual}).to.have.lengthOf({check.length});",
            )
        )
    if check.min_length is not None:
        expectations.append(
            (
                f"has a minimum length of {check.min_length}",
                f"pm.expect({actual}.length).to.be.at.least({check.min_length});",
            )
        )
    if check.max_length is not None:
        expectations.append(
            (
                f"has a maximum length of {check.max_length}",
                f"pm.expect({actual}.length).to.be.at.most({check.max_length});",
            )
        )
    return expectations


def pm_test(comment: str, title: str, body: List[str]) -> List[str]:
    lines = [f"// {comment}", f"pm.test({js_string(title)}, function () {{"]
    lines.extend(f"   {line}" for line in body)
    lines.extend(["});", ""])
    return lines
