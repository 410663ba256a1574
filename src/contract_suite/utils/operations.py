# utils/operations.py

"""Helpers for matching request records against rule settings."""

import re
from fnmatch import fnmatchcase
from typing import Iterable, List, Optional, Sequence

from contract_suite.config.constants import PATH_REF_SEPARATOR
from contract_suite.core.errors import InvalidSettingsError


def in_range(value: int, start: int, end: int) -> bool:
    """True when ``start <= value < end``"""
    return start <= value < end


def parse_status_code(code: str) -> Optional[int]:
    """Numeric value of a documented response key; None for '2XX' or 'default'"""
    code = str(code).strip()
    return int(code) if code.isdigit() else None


def in_operations(record, operations: Optional[Iterable[str]]) -> bool:
    """Whether ``record`` is listed by id, operation id or reference.

    Raises:
        InvalidSettingsError: if ``operations`` is not a list of strings
    """
    if operations is None:
        return False
    if isinstance(operations, (str, bytes)) or not isinstance(
        operations, (list, tuple, set, frozenset)
    ):
        raise InvalidSettingsError(
            f"excludeForOperations must be a list, got {type(operations).__name__}"
        )
    listed = set(operations)
    return (
        record.id in listed
        or (record.operation_id is not None and record.operation_id in listed)
        or record.path_ref in listed
    )


def split_path_ref(path_ref: str):
    """Split 'GET::/pets' into ('GET', '/pets'); a bare path matches any method"""
    if PATH_REF_SEPARATOR not in path_ref:
        return "*", path_ref
    method, path = path_ref.split(PATH_REF_SEPARATOR, 1)
    return method.strip().upper() or "*", path.strip()


def match_path_ref(pattern: str, path_ref: str) -> bool:
    """Match an operation reference against a pattern with ``*`` wildcards"""
    pattern_method, pattern_path = split_path_ref(pattern)
    method, path = split_path_ref(path_ref)
    if pattern_method != "*" and pattern_method != method:
        return False
    return fnmatchcase(path, pattern_path)


_VARIABLE_SEGMENT = re.compile(r"^(:\w+|\{\{[^}]+\}\}|\{[^}]+\})$")


def is_variable_segment(segment: str) -> bool:
    return bool(_VARIABLE_SEGMENT.match(segment))


def to_template_path(segments: Sequence[str]) -> str:
    """Collection path segments as an OpenAPI path: ':id' and '{{id}}' become '{id}'"""
    converted = []
    for segment in segments:
        if segment.startswith(":"):
            segment = "{" + segment[1:] + "}"
        elif segment.startswith("{{") and segment.endswith("}}"):
            segment = "{" + segment[2:-2] + "}"
        converted.append(segment)
    return "/" + "/".join(converted)


def score_path_match(segments: List[str], template: str) -> Optional[int]:
    """Score how well collection path ``segments`` fit an OpenAPI ``template``.

    Segments are compared right-aligned so a server base path in the
    collection does not prevent a match. Returns the number of literal
    segment matches, or None when the paths do not match.
    """
    template_segments = [segment for segment in template.split("/") if segment]
    if not template_segments:
        return 0 if not segments else None
    if len(template_segments) > len(segments):
        return None

    score = 0
    for actual, expected in zip(segments[-len(template_segments):], template_segments):
        if is_variable_segment(expected):
            continue
        if is_variable_segment(actual) or actual != expected:
            return None
        score += 1
    return score


def slugify(value: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "-", value).strip("-")
    return slug or "variation"
