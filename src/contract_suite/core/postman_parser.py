# core/postman_parser.py

"""Maps the requests of a Postman collection to contract operations."""

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from contract_suite.common.logger import LoggerFactory
from contract_suite.core.errors import DocumentLoadError
from contract_suite.core.mapped_operation import PostmanMappedOperation
from contract_suite.core.oas_parser import OpenApiParser
from contract_suite.schemas.openapi import OasMappedOperation
from contract_suite.schemas.postman import PmCollection, PmItem, PmItemGroup
from contract_suite.utils.operations import (
    match_path_ref,
    score_path_match,
    to_template_path,
)


def load_collection(path: Union[str, Path]) -> PmCollection:
    """Read a Postman collection JSON file.

    Raises:
        DocumentLoadError: if the file is missing, not JSON, or not a collection
    """
    path = Path(path)
    if not path.exists():
        raise DocumentLoadError(f"Collection file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return PmCollection.model_validate(json.load(f))
    except json.JSONDecodeError as e:
        raise DocumentLoadError(f"Collection {path} is not valid JSON: {e}") from e
    except ValidationError as e:
        raise DocumentLoadError(f"Collection {path} is malformed: {e}") from e


def write_collection(collection: PmCollection, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(collection.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")


class PostmanParser:
    """Index of the request records of one collection.

    Records are kept in collection order (depth-first), which every lookup
    preserves.
    """

    def __init__(
        self, collection: PmCollection, oas_parser: Optional[OpenApiParser] = None
    ):
        self.collection = collection
        self.oas_parser = oas_parser
        self.logger = LoggerFactory.get_logger("contract-suite.postman-parser")
        self.mapped_operations: List[PostmanMappedOperation] = [
            self._map_item(item, parent) for item, parent in collection.iter_items()
        ]
        self.logger.debug(f"Mapped {len(self.mapped_operations)} collection requests")

    def _map_item(
        self, item: PmItem, parent: Optional[PmItemGroup]
    ) -> PostmanMappedOperation:
        parent_name = parent.name if parent else None
        operation = self._match_contract_operation(item)
        if operation is None:
            return PostmanMappedOperation(
                item,
                path=to_template_path(item.request.url.path),
                parent_folder_name=parent_name,
            )
        return PostmanMappedOperation(
            item,
            path=operation.path,
            operation_id=operation.operation_id,
            parent_folder_name=parent_name,
        )

    def _match_contract_operation(self, item: PmItem) -> Optional[OasMappedOperation]:
        if self.oas_parser is None:
            return None

        method = item.request.method.upper()
        segments = item.request.url.path
        best, best_score = None, None
        for operation in self.oas_parser.operations:
            if operation.method != method:
                continue
            score = score_path_match(segments, operation.path)
            if score is not None and (best_score is None or score > best_score):
                best, best_score = operation, score

        if best is None:
            self.logger.debug(
                f"No contract operation for {method} {item.request.url.path_string}"
            )
        return best

    # ----- lookups -----

    def get_operations_by_path(self, path_ref: str) -> List[PostmanMappedOperation]:
        return [
            record
            for record in self.mapped_operations
            if match_path_ref(path_ref, record.path_ref)
        ]

    def get_operations_by_ids(self, ids: List[str]) -> List[PostmanMappedOperation]:
        wanted = set(ids)
        return [
            record
            for record in self.mapped_operations
            if record.operation_id in wanted or record.id in wanted
        ]

    def get_operation_by_id(
        self, operation_id: str
    ) -> Optional[PostmanMappedOperation]:
        for record in self.mapped_operations:
            if record.operation_id == operation_id:
                return record
        for record in self.mapped_operations:
            if record.id == operation_id:
                return record
        return None
