"""
Index specifications.

A specification describes an index by any subset of its key definition,
name and uniqueness. Fields left out act as wildcards when looking indexes up.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class IndexSpecification:
    definition: Optional[str] = None
    name: Optional[str] = None
    unique: bool = False

    def without_name(self) -> "IndexSpecification":
        """Copy of this specification that matches indexes of any name."""
        return replace(self, name=None)
