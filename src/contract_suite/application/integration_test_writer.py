# application/integration_test_writer.py

from typing import TYPE_CHECKING, List, Optional

from contract_suite.application.variation_writer import VariationWriter
from contract_suite.common.logger import LoggerFactory
from contract_suite.schemas.config import IntegrationScenario
from contract_suite.schemas.postman import PmCollection, PmItemGroup

if TYPE_CHECKING:
    from contract_suite.application.suite import ContractTestSuite


class IntegrationTestWriter:
    """Builds one folder per scenario with one sub-folder per step.

    Step and variation order are kept as configured, since they become the
    run order of the generated collection.
    """

    def __init__(
        self, test_suite: "ContractTestSuite", folder_name: Optional[str] = None
    ):
        self.test_suite = test_suite
        self.folder_name = folder_name
        self.variation_writer = VariationWriter(
            test_suite=test_suite, id_sequence=test_suite.clone_ids
        )
        self.scenario_folders: List[PmItemGroup] = []
        self.logger = LoggerFactory.get_logger("contract-suite.integration-writer")

    def add(self, scenario: IntegrationScenario) -> PmItemGroup:
        suite = self.test_suite
        scenario_folder = PmItemGroup(name=scenario.name, item=[])

        for step in scenario.operations:
            record = suite.postman_parser.get_operation_by_id(
                step.open_api_operation_id
            )
            if record is None:
                self.logger.warning(
                    f"Scenario '{scenario.name}': no request for operation "
                    f"{step.open_api_operation_id}, skipping step"
                )
                continue

            contract = suite.oas_parser.get_operation_by_path(record.path_ref)
            step_folder = PmItemGroup(name=step.open_api_operation_id, item=[])
            for variation in step.variations:
                variation_record = self.variation_writer.create_variation(
                    record, contract, variation
                )
                step_folder.add(variation_record.item)

            if step_folder.item:
                scenario_folder.add(step_folder)

        self.scenario_folders.append(scenario_folder)
        self.logger.info(
            f"Scenario '{scenario.name}' built with {len(scenario_folder.item)} step(s)"
        )
        return scenario_folder

    def merge_to_collection(self, collection: PmCollection) -> PmCollection:
        if self.folder_name:
            collection.add(
                PmItemGroup(name=self.folder_name, item=list(self.scenario_folders))
            )
        else:
            for folder in self.scenario_folders:
                collection.add(folder)
        return collection
