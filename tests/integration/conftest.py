"""Marks every test under tests/integration with ``integration``."""

import pytest


def pytest_collection_modifyitems(config: pytest.Config, items) -> None:
    integration_marker = pytest.mark.integration
    for item in items:
        if "tests/integration" in str(item.fspath):
            if not any(marker.name == "integration" for marker in item.iter_markers()):
                item.add_marker(integration_marker)
