# tools/overwrites.py

"""Declarative request mutations: query params, path variables, headers, body."""

import re
from typing import Any, List, Union

from contract_suite.common.logger import LoggerFactory
from contract_suite.core.mapped_operation import PostmanMappedOperation
from contract_suite.schemas.config import Overwrite, RequestOverwrites
from contract_suite.schemas.postman import PmKeyValue

_PATH_TOKEN = re.compile(r"([^.\[\]]+)|\[(\d+)\]")


def parse_body_path(path: str) -> List[Union[str, int]]:
    """'data.items[0].name' -> ['data', 'items', 0, 'name']"""
    tokens: List[Union[str, int]] = []
    for name, index in _PATH_TOKEN.findall(path):
        tokens.append(int(index) if index else name)
    return tokens


def _combine(current: Any, value: Any, overwrite: bool) -> Any:
    if overwrite or current is None:
        return value
    if isinstance(current, list):
        return current + (value if isinstance(value, list) else [value])
    if isinstance(current, dict) and isinstance(value, dict):
        return {**current, **value}
    return f"{current}{value}"


def _apply_key_values(
    entries: List[PmKeyValue], overwrites: List[Overwrite], allow_disable: bool
) -> None:
    for ow in overwrites:
        matches = [entry for entry in entries if entry.key == ow.key]
        if ow.remove:
            entries[:] = [entry for entry in entries if entry.key != ow.key]
            continue
        if not matches:
            entries.append(
                PmKeyValue(
                    key=ow.key,
                    value=ow.value,
                    disabled=True if allow_disable and ow.disable else None,
                )
            )
            continue
        for entry in matches:
            if ow.value is not None:
                entry.value = _combine(entry.value, ow.value, ow.overwrite)
            if allow_disable and ow.disable:
                entry.disabled = True


def overwrite_request_body(
    record: PostmanMappedOperation, overwrites: List[Overwrite]
) -> None:
    if not overwrites:
        return
    data = record.get_json_body()
    if data is None:
        LoggerFactory.get_logger("contract-suite.overwrites").debug(
            f"Skipping body overwrites for {record.id}: no JSON body"
        )
        return

    for ow in overwrites:
        tokens = parse_body_path(ow.key)
        if not tokens:
            continue
        parent = data
        for position, token in enumerate(tokens[:-1]):
            try:
                parent = parent[token]
            except (KeyError, IndexError, TypeError):
                if ow.remove or not isinstance(parent, dict):
                    parent = None
                    break
                # Create missing intermediate objects for new values
                following = tokens[position + 1]
                parent[token] = [] if isinstance(following, int) else {}
                parent = parent[token]
        if parent is None:
            continue

        leaf = tokens[-1]
        if ow.remove:
            if isinstance(parent, dict):
                parent.pop(leaf, None)
            elif isinstance(parent, list) and isinstance(leaf, int):
                if leaf < len(parent):
                    del parent[leaf]
            continue

        if isinstance(parent, dict):
            parent[leaf] = _combine(parent.get(leaf), ow.value, ow.overwrite)
        elif isinstance(parent, list) and isinstance(leaf, int):
            if leaf < len(parent):
                parent[leaf] = _combine(parent[leaf], ow.value, ow.overwrite)
            else:
                parent.append(ow.value)

    record.set_json_body(data)


def apply_overwrites(
    records: List[PostmanMappedOperation], overwrites: RequestOverwrites
) -> List[PostmanMappedOperation]:
    """Mutate every record in place; returns the same list for chaining."""
    for record in records:
        url = record.item.request.url
        if overwrites.overwrite_request_query_params:
            _apply_key_values(
                url.query, overwrites.overwrite_request_query_params, True
            )
            url.rebuild_raw()
        _apply_key_values(
            url.variable, overwrites.overwrite_request_path_variables, False
        )
        _apply_key_values(
            record.item.request.header, overwrites.overwrite_request_headers, True
        )
        overwrite_request_body(record, overwrites.overwrite_request_body)
    return records
