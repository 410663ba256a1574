import pytest

from contract_suite.core.errors import InvalidSettingsError
from contract_suite.schemas.assertion import AssertionKind
from contract_suite.schemas.config import ContractTestRule, OperationTarget


def kinds(record):
    return [assertion.kind for assertion in record.assertions]


def record_of(suite, identifier):
    return next(r for r in suite.postman_parser.mapped_operations if r.id == identifier)


def test_full_contract_rule_on_single_operation(make_suite):
    suite = make_suite(
        {
            "tests": {
                "contractTests": [
                    {
                        "openApiOperation": "GET::/pets/{petId}",
                        "statusSuccess": True,
                        "statusCode": True,
                        "responseTime": 400,
                        "contentType": True,
                        "jsonBody": True,
                        "schemaValidation": True,
                        "headersPresent": True,
                    }
                ]
            }
        }
    )
    suite.generate_contract_tests()

    # Only the 200 response is eligible; the 404 is skipped
    assert kinds(record_of(suite, "get-pet")) == [
        AssertionKind.STATUS_SUCCESS,
        AssertionKind.STATUS_CODE,
        AssertionKind.RESPONSE_TIME,
        AssertionKind.CONTENT_TYPE,
        AssertionKind.JSON_BODY,
        AssertionKind.SCHEMA_VALIDATION,
        AssertionKind.HEADER_PRESENT,
    ]
    assert record_of(suite, "get-pet").assertions[1].details == {"code": 200}
    assert record_of(suite, "list-pets").assertions == []


def test_status_code_and_schema_give_two_assertions(make_suite):
    suite = make_suite(
        {
            "tests": {
                "contractTests": [
                    {
                        "openApiOperation": "GET::/pets/{petId}",
                        "statusCode": {"code": 200},
                        "schemaValidation": {"enabled": True},
                    }
                ]
            }
        }
    )
    suite.generate_contract_tests()
    assert kinds(record_of(suite, "get-pet")) == [
        AssertionKind.STATUS_CODE,
        AssertionKind.SCHEMA_VALIDATION,
    ]


def test_responses_outside_success_range_get_nothing(make_suite, oas_parser):
    suite = make_suite()
    record = record_of(suite, "get-pet")
    contract = oas_parser.get_operation_by_id("getPet").filter_response("404")
    rule = ContractTestRule.model_validate(
        {"statusSuccess": True, "statusCode": True, "schemaValidation": True}
    )

    suite.inject_contract_tests(record, contract, rule)
    assert record.assertions == []


def test_no_content_response_only_gets_status_checks(make_suite):
    suite = make_suite(
        {
            "tests": {
                "contractTests": [
                    {
                        "openApiOperationId": "deletePet",
                        "statusSuccess": True,
                        "contentType": True,
                        "schemaValidation": True,
                    }
                ]
            }
        }
    )
    suite.generate_contract_tests()
    assert kinds(record_of(suite, "delete-pet")) == [AssertionKind.STATUS_SUCCESS]


def test_rule_level_exclusion(make_suite):
    suite = make_suite(
        {
            "tests": {
                "contractTests": [
                    {
                        "openApiOperation": "*::/pets*",
                        "statusSuccess": True,
                        "excludeForOperations": ["getPet", "POST::/pets"],
                    }
                ]
            }
        }
    )
    suite.generate_contract_tests()
    assert len(record_of(suite, "list-pets").assertions) == 1
    assert len(record_of(suite, "delete-pet").assertions) == 1
    assert record_of(suite, "get-pet").assertions == []
    assert record_of(suite, "create-pet").assertions == []


def test_check_level_exclusion(make_suite):
    suite = make_suite(
        {
            "tests": {
                "contractTests": [
                    {
                        "openApiOperation": "*::/pets*",
                        "statusSuccess": True,
                        "jsonBody": {"excludeForOperations": ["listPets"]},
                    }
                ]
            }
        }
    )
    suite.generate_contract_tests()
    assert kinds(record_of(suite, "list-pets")) == [AssertionKind.STATUS_SUCCESS]
    assert kinds(record_of(suite, "create-pet")) == [
        AssertionKind.STATUS_SUCCESS,
        AssertionKind.JSON_BODY,
    ]


def test_disabled_check_is_skipped(make_suite):
    suite = make_suite(
        {
            "tests": {
                "contractTests": [
                    {"openApiOperationId": "listPets", "statusSuccess": False}
                ]
            }
        }
    )
    suite.generate_contract_tests()
    assert record_of(suite, "list-pets").assertions == []


def test_contract_tests_accumulate(make_suite):
    suite = make_suite(
        {"tests": {"contractTests": [{"openApiOperationId": "listPets", "statusSuccess": True}]}}
    )
    suite.generate_contract_tests()
    suite.generate_contract_tests()
    assert record_of(suite, "list-pets").count(AssertionKind.STATUS_SUCCESS) == 2


def test_caller_rules_and_records_override_defaults(make_suite):
    suite = make_suite(
        {"tests": {"contractTests": [{"openApiOperationId": "listPets", "statusSuccess": True}]}}
    )
    override = ContractTestRule.model_validate({"responseTime": True})
    suite.generate_contract_tests(
        records=[record_of(suite, "create-pet")], rules=[override]
    )
    assert kinds(record_of(suite, "create-pet")) == [AssertionKind.RESPONSE_TIME]
    assert record_of(suite, "list-pets").assertions == []


def test_empty_rules_and_unmatched_requests_are_silent(make_suite):
    suite = make_suite()
    suite.generate_contract_tests()
    suite.generate_contract_tests(
        rules=[ContractTestRule(open_api_operation_id="nope")]
    )
    suite.generate_contract_tests(
        records=[record_of(suite, "health")],
        rules=[ContractTestRule.model_validate({"statusSuccess": True})],
    )
    assert all(not r.assertions for r in suite.postman_parser.mapped_operations)


def test_get_operations_from_setting(make_suite):
    suite = make_suite()

    by_reference = suite.get_operations_from_setting(
        OperationTarget(open_api_operation="GET::/pets*")
    )
    by_ids = suite.get_operations_from_setting(
        OperationTarget(open_api_operation_ids=["deletePet", "createPet"])
    )

    assert [r.id for r in by_reference] == ["list-pets", "get-pet"]
    assert [r.id for r in by_ids] == ["create-pet", "delete-pet"]
    assert suite.get_operations_from_setting(OperationTarget()) == []


def test_malformed_exclusion_raises(make_suite):
    suite = make_suite()
    rule = OperationTarget.model_construct(
        open_api_operation_id="getPet", exclude_for_operations="getPet"
    )
    with pytest.raises(InvalidSettingsError):
        suite.get_operations_from_setting(rule)


def test_content_extend_overwrite_and_variables(make_suite):
    suite = make_suite(
        {
            "tests": {
                "contentTests": [
                    {
                        "openApiOperationId": "getPet",
                        "responseBodyTests": [{"key": "id", "value": 1}],
                        "responseHeaderTests": [{"key": "Content-Type"}],
                    }
                ],
                "extendTests": [
                    {"openApiOperationId": "getPet", "tests": ["// custom"]}
                ],
            },
            "assignVariables": [
                {
                    "openApiOperationId": "createPet",
                    "collectionVariables": [{"responseBodyProp": "id", "name": "petId"}],
                }
            ],
            "overwrites": [
                {
                    "openApiOperationId": "getPet",
                    "overwriteRequestPathVariables": [{"key": "petId", "value": "{{petId}}"}],
                }
            ],
        }
    )
    suite.run()

    get_pet = record_of(suite, "get-pet")
    assert kinds(get_pet) == [
        AssertionKind.BODY_CONTENT,
        AssertionKind.BODY_CONTENT,
        AssertionKind.HEADER_CONTENT,
        AssertionKind.EXTENDED,
    ]
    assert get_pet.item.request.url.variable[0].value == "{{petId}}"
    assert kinds(record_of(suite, "create-pet")) == [AssertionKind.ASSIGN_VARIABLE]


def test_explicit_status_code_is_kept(make_suite):
    suite = make_suite(
        {
            "tests": {
                "contractTests": [
                    {"openApiOperation": "GET::/pets/{petId}", "statusCode": {"code": 299}}
                ]
            }
        }
    )
    suite.generate_contract_tests()
    record = record_of(suite, "get-pet")
    assert kinds(record) == [AssertionKind.STATUS_CODE]
    assert record.assertions[0].details == {"code": 299}
    assert "pm.expect(pm.response.code).to.equal(299);" in "\n".join(record.test_script)
