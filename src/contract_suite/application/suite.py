# application/suite.py

from typing import List, Optional

from contract_suite.application.clone_ids import CloneIdSequence
from contract_suite.application.integration_test_writer import IntegrationTestWriter
from contract_suite.application.variation_writer import VariationWriter
from contract_suite.common.logger import LoggerFactory
from contract_suite.config.constants import JSON_MEDIA_TYPE, SUCCESS_STATUS_RANGE
from contract_suite.config.settings import Settings, settings as default_settings
from contract_suite.core.mapped_operation import PostmanMappedOperation
from contract_suite.core.oas_parser import OpenApiParser
from contract_suite.core.postman_parser import PostmanParser
from contract_suite.schemas.config import (
    AssignVariablesRule,
    CheckConfig,
    ContentTestRule,
    ContractTestRule,
    ExtendTestsRule,
    IntegrationScenario,
    OperationTarget,
    OverwriteRule,
    SuiteConfig,
    SuiteTests,
    VariationTestRule,
)
from contract_suite.schemas.openapi import OasMappedOperation
from contract_suite.schemas.postman import PmCollection
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
from contract_suite.tools.overwrites import apply_overwrites
from contract_suite.tools.variables import assign_collection_variables
from contract_suite.utils.operations import in_operations, in_range, parse_status_code

def _keep(check, status):
    return check


def _documented_code(check, status):
    """A status-code check without a code expects the documented one"""
    if check.code is None:
        return check.model_copy(update={"code": status})
    return check


# Checks applied once per eligible response, in this order:
# (check selector, check preparation, injector)
RESPONSE_CHECKS = (
    (lambda rule: rule.status_success, _keep, inject_status_success),
    (lambda rule: rule.status_code, _documented_code, inject_status_code),
    (lambda rule: rule.response_time, _keep, inject_response_time),
)


class ContractTestSuite:
    """Applies the configured rules to the requests of a collection.

    Every ``inject_*``/``generate_*`` method takes optional records and rules.
    Records default to the ones each rule resolves to, rules default to the
    suite configuration. Absent rules, unresolved operations and undocumented
    responses are skipped silently.
    """

    def __init__(
        self,
        oas_parser: OpenApiParser,
        postman_parser: PostmanParser,
        config: Optional[SuiteConfig] = None,
        settings: Optional[Settings] = None,
    ):
        self.oas_parser = oas_parser
        self.postman_parser = postman_parser
        self.config = config or SuiteConfig()
        self.settings = settings or default_settings
        self.collection: PmCollection = postman_parser.collection
        self.logger = LoggerFactory.get_logger("contract-suite.test-suite")

        self.clone_ids = CloneIdSequence(
            reserved=[record.id for record in postman_parser.mapped_operations]
        )

        tests = self.config.tests or SuiteTests()
        self.contract_tests: List[ContractTestRule] = tests.contract_tests
        self.content_tests: List[ContentTestRule] = tests.content_tests
        self.variation_tests: List[VariationTestRule] = tests.variation_tests
        self.extend_tests: List[ExtendTestsRule] = tests.extend_tests
        self.integration_tests: List[IntegrationScenario] = tests.integration_tests

    # ----- resolution -----

    def get_operations_from_setting(
        self, settings: OperationTarget
    ) -> List[PostmanMappedOperation]:
        """Records a rule targets: by reference first, then by operation id(s)."""
        if settings.open_api_operation:
            records = self.postman_parser.get_operations_by_path(
                settings.open_api_operation
            )
        elif settings.open_api_operation_id:
            records = self.postman_parser.get_operations_by_ids(
                [settings.open_api_operation_id]
            )
        elif settings.open_api_operation_ids:
            records = self.postman_parser.get_operations_by_ids(
                settings.open_api_operation_ids
            )
        else:
            records = []

        if settings.exclude_for_operations:
            records = [
                record
                for record in records
                if not in_operations(record, settings.exclude_for_operations)
            ]

        if not records:
            self.logger.debug(
                "Rule matched no requests: "
                f"{settings.open_api_operation or settings.open_api_operation_id}"
            )
        return records

    def _targets(
        self,
        rule: OperationTarget,
        records: Optional[List[PostmanMappedOperation]],
    ) -> List[PostmanMappedOperation]:
        """Caller-supplied records win over the ones the rule resolves to"""
        return self.get_operations_from_setting(rule) if records is None else records

    # ----- contract tests -----

    def generate_contract_tests(
        self,
        records: Optional[List[PostmanMappedOperation]] = None,
        contract: Optional[OasMappedOperation] = None,
        rules: Optional[List[ContractTestRule]] = None,
    ) -> None:
        rules = self.contract_tests if rules is None else rules
        if not rules:
            return

        self.logger.info(f"Applying {len(rules)} contract test rule(s)")
        for rule in rules:
            for record in self._targets(rule, records):
                operation = contract or self.oas_parser.get_operation_by_path(
                    record.path_ref
                )
                if operation is None:
                    self.logger.debug(f"No contract operation for {record.path_ref}")
                    continue
                self.inject_contract_tests(record, operation, rule)

    @staticmethod
    def _applies(check: Optional[CheckConfig], record: PostmanMappedOperation) -> bool:
        return (
            check is not None
            and check.enabled
            and not in_operations(record, check.exclude_for_operations)
        )

    def inject_contract_tests(
        self,
        record: PostmanMappedOperation,
        contract: OasMappedOperation,
        rule: ContractTestRule,
    ) -> PostmanMappedOperation:
        """Attach the enabled checks for every documented success response."""
        if not contract.responses:
            return record

        low, high = SUCCESS_STATUS_RANGE
        for code, response in contract.responses.items():
            status = parse_status_code(code)
            if status is None or not in_range(status, low, high):
                self.logger.debug(f"Skipping response {code} of {contract.path_ref}")
                continue

            for select, prepare, injector in RESPONSE_CHECKS:
                check = select(rule)
                if not self._applies(check, record):
                    continue
                record = injector(prepare(check, status), record, contract)

            for content_type, media in response.content.items():
                if not content_type:
                    continue
                if self._applies(rule.content_type, record):
                    record = inject_content_type(
                        rule.content_type, record, contract, content_type
                    )
                if content_type == JSON_MEDIA_TYPE and self._applies(
                    rule.json_body, record
                ):
                    record = inject_json_body(rule.json_body, record, contract)
                if media.schema_ and self._applies(rule.schema_validation, record):
                    record = inject_json_schema(
                        rule.schema_validation, record, contract, media.schema_
                    )

            for header_name in response.headers:
                if header_name and self._applies(rule.headers_present, record):
                    record = inject_header_present(
                        rule.headers_present, record, contract, header_name
                    )

        return record

    # ----- content, extend, variables, overwrites -----

    def inject_content_tests(
        self,
        records: Optional[List[PostmanMappedOperation]] = None,
        rules: Optional[List[ContentTestRule]] = None,
    ) -> List[PostmanMappedOperation]:
        rules = self.content_tests if rules is None else rules
        for rule in rules:
            for record in self._targets(rule, records):
                if rule.response_body_tests:
                    inject_body_content(rule.response_body_tests, record)
                if rule.response_header_tests:
                    inject_header_content(rule.response_header_tests, record)
        return self.postman_parser.mapped_operations

    def inject_extended_tests(
        self,
        records: Optional[List[PostmanMappedOperation]] = None,
        rules: Optional[List[ExtendTestsRule]] = None,
    ) -> List[PostmanMappedOperation]:
        rules = self.extend_tests if rules is None else rules
        for rule in rules:
            for record in self._targets(rule, records):
                inject_extended_tests(rule, record)
        return self.postman_parser.mapped_operations

    def inject_assign_variables(
        self,
        records: Optional[List[PostmanMappedOperation]] = None,
        rules: Optional[List[AssignVariablesRule]] = None,
    ) -> List[PostmanMappedOperation]:
        rules = self.config.assign_variables if rules is None else rules
        for rule in rules:
            if not rule.collection_variables:
                continue
            fixed_value_counter = 0
            for record in self._targets(rule, records):
                fixed_value_counter = assign_collection_variables(
                    record, rule, fixed_value_counter
                )
        return self.postman_parser.mapped_operations

    def inject_overwrites(
        self,
        records: Optional[List[PostmanMappedOperation]] = None,
        rules: Optional[List[OverwriteRule]] = None,
    ) -> List[PostmanMappedOperation]:
        rules = self.config.overwrites if rules is None else rules
        for rule in rules:
            apply_overwrites(self._targets(rule, records), rule)
        return self.postman_parser.mapped_operations

    # ----- generated requests -----

    def generate_variation_tests(
        self, rules: Optional[List[VariationTestRule]] = None
    ) -> PmCollection:
        rules = self.variation_tests if rules is None else rules
        if not rules:
            return self.collection

        writer = VariationWriter(
            test_suite=self,
            folder_name=self.settings.VARIATION_FOLDER_NAME,
            id_sequence=self.clone_ids,
        )
        for rule in rules:
            for record in self.get_operations_from_setting(rule):
                contract = self.oas_parser.get_operation_by_path(record.path_ref)
                writer.add(record, contract, rule.variations)

        self.collection = writer.merge_to_collection(self.collection)
        return self.collection

    def generate_integration_tests(
        self, scenarios: Optional[List[IntegrationScenario]] = None
    ) -> PmCollection:
        scenarios = self.integration_tests if scenarios is None else scenarios
        if not scenarios:
            return self.collection

        writer = IntegrationTestWriter(
            test_suite=self, folder_name=self.settings.INTEGRATION_FOLDER_NAME
        )
        for scenario in scenarios:
            writer.add(scenario)

        self.collection = writer.merge_to_collection(self.collection)
        return self.collection

    def run(self) -> PmCollection:
        """Apply every configured rule kind in order and return the collection."""
        self.generate_contract_tests()
        self.inject_content_tests()
        self.inject_extended_tests()
        self.inject_assign_variables()
        self.inject_overwrites()
        self.generate_variation_tests()
        self.generate_integration_tests()
        return self.collection
