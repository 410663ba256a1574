# core/mapped_operation.py

import json
import uuid
from typing import Any, Dict, List, Optional

from contract_suite.config.constants import PATH_REF_SEPARATOR
from contract_suite.schemas.assertion import Assertion, AssertionKind
from contract_suite.schemas.postman import PmItem


class PostmanMappedOperation:
    """A request of the output collection linked to a contract operation.

    The record wraps the collection item itself, so scripts added here are
    visible in the collection immediately. ``assertions`` mirrors the checks
    written to the item's test script and only ever grows.
    """

    def __init__(
        self,
        item: PmItem,
        path: Optional[str] = None,
        operation_id: Optional[str] = None,
        parent_folder_name: Optional[str] = None,
    ):
        if not item.id:
            item.id = str(uuid.uuid4())
        self.item = item
        self.method = item.request.method.upper()
        self.path = path or item.request.url.path_string
        self.operation_id = operation_id
        self.parent_folder_name = parent_folder_name
        self.assertions: List[Assertion] = []
        self.json_data_injected = False

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def name(self) -> str:
        return self.item.name

    @property
    def path_ref(self) -> str:
        return f"{self.method}{PATH_REF_SEPARATOR}{self.path}"

    @property
    def display_path(self) -> str:
        """Request path as written in the collection, e.g. /pets/:petId"""
        return self.item.request.url.path_string

    @property
    def test_label(self) -> str:
        return f"[{self.method}]{PATH_REF_SEPARATOR}{self.display_path}"

    @property
    def test_script(self) -> List[str]:
        event = self.item.get_event("test")
        return list(event.script.exec) if event else []

    def __repr__(self) -> str:
        return f"PostmanMappedOperation(id={self.id!r}, path_ref={self.path_ref!r})"

    # ----- scripts -----

    def add_script(
        self, lines: List[str], prepend: bool = False, offset: int = 0
    ) -> None:
        """Append ``lines``, or insert them ``offset`` lines below the top"""
        script = self.item.get_event("test", create=True).script
        if prepend:
            script.exec[offset:offset] = lines
        else:
            script.exec.extend(lines)

    def add_assertion(
        self,
        kind: AssertionKind,
        name: str,
        lines: List[str],
        details: Optional[Dict[str, Any]] = None,
        prepend: bool = False,
        offset: int = 0,
    ) -> "PostmanMappedOperation":
        self.assertions.append(
            Assertion(kind=kind, name=name, script=lines, details=details or {})
        )
        self.add_script(lines, prepend=prepend, offset=offset)
        return self

    def reset_tests(self) -> None:
        """Drop the test script and its assertions, keeping other events"""
        self.item.event = [event for event in self.item.event if event.listen != "test"]
        self.assertions = []
        self.json_data_injected = False

    def count(self, kind: AssertionKind) -> int:
        return sum(1 for assertion in self.assertions if assertion.kind == kind)

    # ----- request access -----

    def get_json_body(self) -> Optional[Any]:
        """Parsed raw JSON request body, or None for other body kinds"""
        body = self.item.request.body
        if body is None or body.mode != "raw" or not body.raw:
            return None
        try:
            return json.loads(body.raw)
        except json.JSONDecodeError:
            return None

    def set_json_body(self, value: Any) -> None:
        self.item.request.body.raw = json.dumps(value, indent=2)

    # ----- cloning -----

    def clone(
        self, new_id: str, name: Optional[str] = None
    ) -> "PostmanMappedOperation":
        """Deep copy of the record under a new identifier"""
        item = self.item.model_copy(deep=True)
        item.id = new_id
        if name is not None:
            item.name = name

        copy = PostmanMappedOperation(
            item,
            path=self.path,
            operation_id=self.operation_id,
            parent_folder_name=self.parent_folder_name,
        )
        copy.assertions = list(self.assertions)
        copy.json_data_injected = self.json_data_injected
        return copy
