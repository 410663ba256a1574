# core/oas_parser.py

"""OpenAPI document parsing into contract operations."""

import json
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Union

import yaml

from contract_suite.common.logger import LoggerFactory
from contract_suite.config.constants import HTTP_METHODS
from contract_suite.core.errors import DocumentLoadError
from contract_suite.schemas.openapi import (
    OasMappedOperation,
    OasMediaType,
    OasResponse,
)


def load_document(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a JSON or YAML file into a dictionary.

    Raises:
        DocumentLoadError: if the file is missing or cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise DocumentLoadError(f"File not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                document = json.load(f)
            else:
                document = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentLoadError(f"Could not parse {path}: {e}") from e

    if not isinstance(document, dict):
        raise DocumentLoadError(f"Expected a mapping at the top of {path}")
    return document


class OpenApiParser:
    """Exposes the operations of an OpenAPI 3 document.

    Responses are dereferenced once at construction so that the operations
    handed to the engine are self-contained and read-only.
    """

    def __init__(self, document: Dict[str, Any]):
        self.document = document
        self.logger = LoggerFactory.get_logger("contract-suite.oas-parser")
        self.operations: List[OasMappedOperation] = self._map_operations()
        self._by_path_ref = {op.path_ref: op for op in self.operations}
        self._by_id = {
            op.operation_id: op for op in self.operations if op.operation_id
        }
        self.logger.debug(f"Mapped {len(self.operations)} contract operations")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "OpenApiParser":
        return cls(load_document(path))

    @property
    def title(self) -> str:
        return self.document.get("info", {}).get("title", "API")

    def get_operation_by_path(self, path_ref: str) -> Optional[OasMappedOperation]:
        method, _, path = path_ref.partition("::")
        return self._by_path_ref.get(f"{method.upper()}::{path}")

    def get_operation_by_id(self, operation_id: str) -> Optional[OasMappedOperation]:
        return self._by_id.get(operation_id)

    # ----- mapping -----

    def _map_operations(self) -> List[OasMappedOperation]:
        operations = []
        for path, path_item in (self.document.get("paths") or {}).items():
            path_item = self._resolve(path_item)
            if not isinstance(path_item, dict):
                continue
            shared_params = path_item.get("parameters") or []
            for method in HTTP_METHODS:
                operation = path_item.get(method)
                if not isinstance(operation, dict):
                    continue
                operations.append(
                    self._map_operation(path, method, operation, shared_params)
                )
        return operations

    def _map_operation(
        self,
        path: str,
        method: str,
        operation: Dict[str, Any],
        shared_params: List[Dict[str, Any]],
    ) -> OasMappedOperation:
        # Operation-level parameters override path-level ones with the same name
        params = {}
        for param in list(shared_params) + list(operation.get("parameters") or []):
            param = self._resolve(param)
            params[(param.get("name"), param.get("in"))] = param

        responses = {}
        for code, response in (operation.get("responses") or {}).items():
            responses[str(code)] = self._map_response(self._resolve(response))

        return OasMappedOperation(
            path=path,
            method=method.upper(),
            operation_id=operation.get("operationId"),
            summary=operation.get("summary"),
            tags=operation.get("tags") or [],
            parameters=list(params.values()),
            request_body=self._dereference(operation.get("requestBody")),
            responses=responses,
        )

    def _map_response(self, response: Any) -> OasResponse:
        if not isinstance(response, dict):
            return OasResponse()

        content = {}
        for media_type, entry in (response.get("content") or {}).items():
            entry = entry or {}
            content[media_type] = OasMediaType(
                schema=self._dereference(entry.get("schema")),
                example=entry.get("example"),
            )

        headers = {
            name: self._dereference(header) or {}
            for name, header in (response.get("headers") or {}).items()
        }
        return OasResponse(
            description=response.get("description"),
            content=content,
            headers=headers,
        )

    # ----- $ref handling -----

    def _lookup(self, ref: str) -> Any:
        if not ref.startswith("#/"):
            self.logger.warning(f"Skipping non-local reference: {ref}")
            return {}
        node: Any = self.document
        for part in ref[2:].split("/"):
            part = part.replace("~1", "/").replace("~0", "~")
            if not isinstance(node, dict) or part not in node:
                self.logger.warning(f"Unresolvable reference: {ref}")
                return {}
            node = node[part]
        return node

    def _resolve(self, node: Any) -> Any:
        """Follow ``$ref`` chains at the top of ``node`` only"""
        seen = set()
        while isinstance(node, dict) and "$ref" in node and node["$ref"] not in seen:
            seen.add(node["$ref"])
            node = self._lookup(node["$ref"])
        return node

    def _dereference(self, node: Any, seen: FrozenSet[str] = frozenset()) -> Any:
        """Return a copy of ``node`` with local references inlined.

        A reference met again below itself is replaced by an empty schema.
        """
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str):
                if ref in seen:
                    return {}
                return self._dereference(self._lookup(ref), seen | {ref})
            return {key: self._dereference(value, seen) for key, value in node.items()}
        if isinstance(node, list):
            return [self._dereference(value, seen) for value in node]
        return node
