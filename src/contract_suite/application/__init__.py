from contract_suite.application.clone_ids import CloneIdSequence
from contract_suite.application.variation_writer import VariationWriter
from contract_suite.application.integration_test_writer import IntegrationTestWriter
from contract_suite.application.suite import ContractTestSuite

__all__ = [
    "CloneIdSequence",
    "VariationWriter",
    "IntegrationTestWriter",
    "ContractTestSuite",
]
