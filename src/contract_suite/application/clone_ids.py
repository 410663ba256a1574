# application/clone_ids.py

from typing import Iterable, Set

from contract_suite.core.errors import CloneIdentifierCollisionError
from contract_suite.utils.operations import slugify


class CloneIdSequence:
    """Issues identifiers for cloned requests: '<variation-slug>-<n>'.

    The counter only moves forward and identifiers already present in the
    collection are skipped, so an issued identifier is never reused.
    """

    def __init__(self, reserved: Iterable[str] = ()):
        self._counter = 0
        self._taken: Set[str] = set(reserved)

    def next_id(self, name: str) -> str:
        slug = slugify(name)
        while True:
            self._counter += 1
            candidate = f"{slug}-{self._counter}"
            if candidate not in self._taken:
                break
        self.claim(candidate)
        return candidate

    def claim(self, identifier: str) -> None:
        if identifier in self._taken:
            raise CloneIdentifierCollisionError(
                f"Identifier {identifier!r} is already used in this collection"
            )
        self._taken.add(identifier)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._taken
