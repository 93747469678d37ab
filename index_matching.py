"""
Matching index specifications against the indexes a collection reports.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from index_definition import parse_definition
from index_specification import IndexSpecification


@dataclass(frozen=True)
class LiveIndex:
    """An index as reported by listIndexes. Other reported attributes are ignored."""
    name: str
    key: tuple
    unique: bool = False

    @classmethod
    def from_document(cls, document) -> "LiveIndex":
        name = document.get("name")
        if not name:
            raise ValueError(f"Index document has no name: {document!r}")
        key = document.get("key") or {}
        return cls(
            name=name,
            key=tuple(key.items()),
            unique=document.get("unique") is True,
        )


class IndexMatcher:
    """
    Matches live indexes against one specification.

    The specification's definition is parsed once, so a matcher can be run
    over a whole listing without re-parsing.
    """

    def __init__(self, specification: IndexSpecification):
        self.specification = specification
        # An empty definition "{}" is the same wildcard as no definition
        self.keys = None
        if specification.definition is not None:
            self.keys = parse_definition(specification.definition) or None

    def is_unconstrained(self) -> bool:
        """True when every index matches."""
        spec = self.specification
        return self.keys is None and spec.name is None and not spec.unique

    def matches(self, index: LiveIndex) -> bool:
        spec = self.specification
        if spec.name is not None and spec.name != index.name:
            return False

        if spec.unique and not index.unique:
            return False

        if self.keys is None:
            return True

        return _equal_in_order(self.keys, index.key)

    def first_match(self, indexes: Iterable[LiveIndex]) -> Optional[LiveIndex]:
        for index in indexes:
            if self.matches(index):
                return index
        return None


def _equal_in_order(expected, actual) -> bool:
    if len(expected) != len(actual):
        return False
    for (expected_field, expected_direction), (field, direction) in zip(expected, actual):
        if expected_field != field:
            return False
        # "text", "2dsphere" and friends never equal an integer direction
        if isinstance(direction, str) or isinstance(direction, bool):
            return False
        if expected_direction != direction:
            return False
    return True


def matches(specification: IndexSpecification, index: LiveIndex) -> bool:
    """Whether the index satisfies every constraint the specification sets."""
    return IndexMatcher(specification).matches(index)


def first_match(specification: IndexSpecification, indexes: Iterable[LiveIndex]) -> Optional[LiveIndex]:
    """First index, in listing order, that matches the specification."""
    return IndexMatcher(specification).first_match(indexes)
