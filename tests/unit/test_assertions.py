from contract_suite.schemas.assertion import AssertionKind
from contract_suite.schemas.config import (
    CheckConfig,
    ContentCheck,
    ExtendTestsRule,
    ResponseTimeCheck,
    SchemaValidationCheck,
    StatusCodeCheck,
)
from contract_suite.tools.assertions import (
    inject_body_content,
    inject_content_type,
    inject_extended_tests,
    inject_header_content,
    inject_header_present,
    inject_json_body,
    inject_json_schema,
    inject_response_time,
    inject_status_code,
    inject_status_success,
)
from contract_suite.tools.assertions.render import js_value


def script_of(record) -> str:
    return "\n".join(record.test_script)


def test_status_checks(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    inject_status_success(CheckConfig(), record)
    inject_status_code(StatusCodeCheck(code=200), record)
    inject_response_time(ResponseTimeCheck(max_ms=150), record)

    assert [a.kind for a in record.assertions] == [
        AssertionKind.STATUS_SUCCESS,
        AssertionKind.STATUS_CODE,
        AssertionKind.RESPONSE_TIME,
    ]
    script = script_of(record)
    assert 'pm.test("[GET]::/pets/:petId - Status code is 2xx"' in script
    assert "pm.expect(pm.response.code).to.equal(200);" in script
    assert "pm.expect(pm.response.responseTime).to.be.below(150);" in script
    assert record.assertions[1].details == {"code": 200}


def test_status_code_without_code_is_skipped(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    inject_status_code(StatusCodeCheck(), record)
    assert record.assertions == []


def test_assertions_accumulate(postman_parser, find_record):
    record = find_record(postman_parser, "list-pets")
    inject_status_success(CheckConfig(), record)
    inject_status_success(CheckConfig(), record)
    assert record.count(AssertionKind.STATUS_SUCCESS) == 2


def test_content_type_and_json_body(postman_parser, find_record):
    record = find_record(postman_parser, "list-pets")
    inject_content_type(CheckConfig(), record, None, "application/json")
    inject_json_body(CheckConfig(), record)

    script = script_of(record)
    assert '.to.include("application/json");' in script
    assert "pm.response.to.have.jsonBody();" in script
    assert record.assertions[0].details == {"content_type": "application/json"}


def test_json_schema_renders_schema_and_unknown_formats(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    schema = {"type": "object", "required": ["id"], "properties": {"id": {}}}
    inject_json_schema(SchemaValidationCheck(), record, None, schema)

    script = script_of(record)
    assert "var schema = {" in script
    assert '"required": [' in script
    assert 'unknownFormats: ["int32", "int64", "float", "double"]' in script
    assert record.assertions[0].details["schema"] == schema


def test_json_schema_additional_properties_is_applied(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    schema = {
        "type": "object",
        "properties": {"owner": {"type": "object", "properties": {}}},
    }
    inject_json_schema(
        SchemaValidationCheck(additional_properties=False), record, None, schema
    )

    rendered = record.assertions[0].details["schema"]
    assert rendered["additionalProperties"] is False
    assert rendered["properties"]["owner"]["additionalProperties"] is False
    assert "additionalProperties" not in schema


def test_header_present(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    inject_header_present(CheckConfig(), record, None, "X-Rate-Limit")
    assert 'pm.response.to.have.header("X-Rate-Limit");' in script_of(record)
    assert record.assertions[0].kind == AssertionKind.HEADER_PRESENT


def test_body_content_declares_json_data_once(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    inject_body_content([ContentCheck(key="id", value=1)], record)
    inject_body_content(
        [ContentCheck(key="tags", min_length=1), ContentCheck(key="secret", not_exist=True)],
        record,
    )

    script = record.test_script
    assert script[0] == "// Set response object as internal variable"
    assert sum(1 for line in script if line == "let jsonData = {};") == 1
    joined = "\n".join(script)
    assert 'pm.expect(_.has(jsonData, "id")).to.be.true;' in joined
    assert 'pm.expect(_.get(jsonData, "id")).to.eql(1);' in joined
    assert 'pm.expect(_.get(jsonData, "tags").length).to.be.at.least(1);' in joined
    assert 'pm.expect(_.has(jsonData, "secret")).to.be.false;' in joined
    # exists + value, exists + min length, not exist
    assert record.count(AssertionKind.BODY_CONTENT) == 5


def test_body_content_reads_collection_variables(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    inject_body_content([ContentCheck(key="id", value="{{petId}}")], record)
    assert 'to.eql(pm.collectionVariables.get("petId"));' in script_of(record)


def test_js_value_keeps_dynamic_variables_literal():
    assert js_value("{{$randomInt}}") == '"{{$randomInt}}"'
    assert js_value("{{petId}}") == 'pm.collectionVariables.get("petId")'
    assert js_value(["a", 1]) == '["a", 1]'


def test_header_content(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    inject_header_content(
        [
            ContentCheck(key="Content-Type", contains="json"),
            ContentCheck(key="X-Debug", not_exist=True),
            ContentCheck(key="ETag"),
        ],
        record,
    )

    script = script_of(record)
    assert 'pm.expect(pm.response.headers.get("Content-Type")).to.include("json");' in script
    assert 'pm.response.to.not.have.header("X-Debug");' in script
    assert 'pm.response.to.have.header("ETag");' in script
    assert record.count(AssertionKind.HEADER_CONTENT) == 3


def test_extended_tests_append_and_prepend(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    inject_status_success(CheckConfig(), record)
    inject_extended_tests(ExtendTestsRule(tests=["// appended"]), record)
    inject_extended_tests(ExtendTestsRule(tests=["// prepended"], append=False), record)

    script = record.test_script
    assert script[0] == "// prepended"
    assert "// appended" in script[-2:]
    assert record.count(AssertionKind.EXTENDED) == 2


def test_extended_tests_without_lines_do_nothing(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    inject_extended_tests(ExtendTestsRule(), record)
    assert record.assertions == []
    assert record.item.get_event("test") is None


def test_prepended_tests_stay_below_json_data(postman_parser, find_record):
    record = find_record(postman_parser, "get-pet")
    inject_body_content([ContentCheck(key="id")], record)
    inject_extended_tests(
        ExtendTestsRule(tests=["pm.expect(jsonData.id).to.exist;"], append=False), record
    )

    script = record.test_script
    assert script[1] == "let jsonData = {};"
    assert script.index("pm.expect(jsonData.id).to.exist;") == 4
    assert sum(1 for line in script if line == "let jsonData = {};") == 1
