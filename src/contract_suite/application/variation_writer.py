# application/variation_writer.py

from typing import TYPE_CHECKING, Dict, List, Optional

from contract_suite.application.clone_ids import CloneIdSequence
from contract_suite.common.logger import LoggerFactory
from contract_suite.config.constants import PATH_REF_SEPARATOR
from contract_suite.core.mapped_operation import PostmanMappedOperation
from contract_suite.schemas.config import Variation
from contract_suite.schemas.openapi import OasMappedOperation
from contract_suite.schemas.postman import PmCollection, PmItemGroup
from contract_suite.tools.overwrites import apply_overwrites

if TYPE_CHECKING:
    from contract_suite.application.suite import ContractTestSuite


class VariationWriter:
    """Clones requests per variation and collects them into named folders.

    Clones are grouped by the variation name unless the caller passes a folder
    name. ``merge_to_collection`` appends the folders in the order they were
    first used; calling it twice appends them twice.
    """

    def __init__(
        self,
        test_suite: "ContractTestSuite",
        folder_name: Optional[str] = None,
        id_sequence: Optional[CloneIdSequence] = None,
    ):
        self.test_suite = test_suite
        self.folder_name = folder_name
        self.id_sequence = id_sequence or CloneIdSequence(
            reserved=[
                record.id for record in test_suite.postman_parser.mapped_operations
            ]
        )
        self.folders: Dict[str, PmItemGroup] = {}
        self.records: List[PostmanMappedOperation] = []
        self.logger = LoggerFactory.get_logger("contract-suite.variation-writer")

    def add(
        self,
        record: PostmanMappedOperation,
        contract: Optional[OasMappedOperation],
        variations: List[Variation],
        folder_name: Optional[str] = None,
    ) -> List[PostmanMappedOperation]:
        created = []
        for variation in variations:
            variation_record = self.create_variation(record, contract, variation)
            self.add_to_folder(variation_record, folder_name or variation.name)
            created.append(variation_record)
        return created

    def create_variation(
        self,
        record: PostmanMappedOperation,
        contract: Optional[OasMappedOperation],
        variation: Variation,
    ) -> PostmanMappedOperation:
        """Clone ``record`` under a fresh identifier and apply ``variation`` to it."""
        variation_record = record.clone(
            new_id=self.id_sequence.next_id(variation.name), name=variation.name
        )
        # The clone starts with a clean test script; only the variation's tests apply
        variation_record.reset_tests()
        self.inject_variations(variation_record, contract, variation)
        self.records.append(variation_record)
        self.logger.debug(
            f"Created variation {variation_record.id} of {record.path_ref}"
        )
        return variation_record

    def inject_variations(
        self,
        record: PostmanMappedOperation,
        contract: Optional[OasMappedOperation],
        variation: Variation,
    ) -> PostmanMappedOperation:
        suite = self.test_suite

        for overwrites in variation.overwrites:
            apply_overwrites([record], overwrites)

        tests = variation.tests
        if tests and tests.contract_tests and contract is not None:
            if variation.open_api_response:
                code, _, content_type = variation.open_api_response.partition(
                    PATH_REF_SEPARATOR
                )
                contract = contract.filter_response(
                    code.strip(), content_type.strip() or None
                )
            suite.generate_contract_tests([record], contract, tests.contract_tests)

        if tests and tests.content_tests:
            suite.inject_content_tests([record], tests.content_tests)

        if tests and tests.extend_tests:
            suite.inject_extended_tests([record], tests.extend_tests)

        if variation.assign_variables:
            suite.inject_assign_variables([record], variation.assign_variables)

        return record

    def add_to_folder(
        self, record: PostmanMappedOperation, folder_name: str
    ) -> PmItemGroup:
        folder = self.folders.get(folder_name)
        if folder is None:
            folder = PmItemGroup(name=folder_name, item=[])
            self.folders[folder_name] = folder
        folder.add(record.item)
        return folder

    def merge_to_collection(self, collection: PmCollection) -> PmCollection:
        folders = list(self.folders.values())
        if self.folder_name:
            collection.add(PmItemGroup(name=self.folder_name, item=folders))
        else:
            for folder in folders:
                collection.add(folder)

        self.logger.info(
            f"Merged {len(self.records)} variation request(s) "
            f"in {len(folders)} folder(s)"
        )
        return collection
