"""Marks every test under tests/unit with ``unit``.

pytestmark in a conftest does not reach other modules, so the marker is
added at collection time instead.
"""

import pytest


def pytest_collection_modifyitems(config: pytest.Config, items) -> None:
    unit_marker = pytest.mark.unit
    for item in items:
        if "tests/unit" in str(item.fspath):
            if not any(marker.name == "unit" for marker in item.iter_markers()):
                item.add_marker(unit_marker)
