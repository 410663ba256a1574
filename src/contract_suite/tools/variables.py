# tools/variables.py

"""Collection-variable assignment scripts."""

from contract_suite.core.mapped_operation import PostmanMappedOperation
from contract_suite.schemas.assertion import AssertionKind
from contract_suite.schemas.config import AssignVariablesRule, CollectionVariable
from contract_suite.tools.assertions.render import (
    ensure_json_data,
    js_string,
    js_value,
)


def _variable_name(
    record: PostmanMappedOperation, variable: CollectionVariable, prop: str
) -> str:
    if variable.name:
        return variable.name
    return f"{record.operation_id or record.id}.{prop}"


def assign_collection_variables(
    record: PostmanMappedOperation, rule: AssignVariablesRule, fixed_value_counter: int
) -> int:
    """Write ``pm.collectionVariables.set`` lines for every configured source.

    Returns the updated counter used to name unnamed fixed values, so that
    numbering continues across all records of one rule.
    """
    for variable in rule.collection_variables:
        if variable.response_body_prop:
            ensure_json_data(record)
            name = _variable_name(record, variable, variable.response_body_prop)
            prop = js_string(variable.response_body_prop)
            lines = [
                f"// pm.collectionVariables - Set {name} as variable for jsonData.{variable.response_body_prop}",
                f"if (_.has(jsonData, {prop})) {{",
                f"   pm.collectionVariables.set({js_string(name)}, _.get(jsonData, {prop}));",
                f'   console.log("- use {{{{{name}}}}} as collection variable for value", _.get(jsonData, {prop}));',
                "};",
                "",
            ]
            record.add_assertion(AssertionKind.ASSIGN_VARIABLE, name, lines)

        if variable.response_header_prop:
            name = _variable_name(record, variable, variable.response_header_prop)
            header = js_string(variable.response_header_prop)
            lines = [
                f"// pm.collectionVariables - Set {name} as variable for header {variable.response_header_prop}",
                f"if (pm.response.headers.has({header})) {{",
                f"   pm.collectionVariables.set({js_string(name)}, pm.response.headers.get({header}));",
                "};",
                "",
            ]
            record.add_assertion(AssertionKind.ASSIGN_VARIABLE, name, lines)

        if variable.request_body_prop:
            name = _variable_name(record, variable, variable.request_body_prop)
            prop = js_string(variable.request_body_prop)
            lines = [
                f"// pm.collectionVariables - Set {name} as variable for request body {variable.request_body_prop}",
                "try {",
                f"   pm.collectionVariables.set({js_string(name)}, _.get(JSON.parse(pm.request.body.raw), {prop}));",
                "} catch (e) {}",
                "",
            ]
            record.add_assertion(AssertionKind.ASSIGN_VARIABLE, name, lines)

        if variable.value is not None:
            fixed_value_counter += 1
            name = (
                variable.name
                or f"{record.operation_id or record.id}.fixedValue{fixed_value_counter}"
            )
            lines = [
                f"// pm.collectionVariables - Set fixed value for {name}",
                f"pm.collectionVariables.set({js_string(name)}, {js_value(variable.value)});",
                "",
            ]
            record.add_assertion(AssertionKind.ASSIGN_VARIABLE, name, lines)

    return fixed_value_counter
