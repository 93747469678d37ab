"""
Create, find and delete indexes on one collection by specification.

Indexes are identified by what they contain (keys, uniqueness) and optionally
by name, rather than by name alone. Every call lists the collection's indexes
again; nothing is cached between calls.
"""

import logging
from typing import Optional

from index_client import IndexClient
from index_definition import parse_definition, serialize_definition
from index_errors import DriverError, ExistingIndexHasSameName, IndexExistsWithDifferentName, InvalidDefinition
from index_matching import IndexMatcher, LiveIndex
from index_specification import IndexSpecification


logger = logging.getLogger(__name__)

# Server error codes with a dedicated error type
# 85: IndexOptionsConflict, 86: IndexKeySpecsConflict
ERRORS_BY_CODE = {
    85: IndexExistsWithDifferentName,
    86: ExistingIndexHasSameName,
}


def to_specification(index: LiveIndex) -> IndexSpecification:
    """Describe a live index as a fully populated specification."""
    return IndexSpecification(
        definition=serialize_definition(index.key),
        name=index.name,
        unique=index.unique,
    )


class IndexOperations:
    """
    Index operations on a single collection.

    The client is borrowed and must outlive this object. The class keeps no
    state between calls, so it is as thread-safe as the client it wraps.
    """

    def __init__(self, database_name: str, collection_name: str, client: IndexClient):
        self.database_name = database_name
        self.collection_name = collection_name
        self.client = client

    def __repr__(self):
        return f"IndexOperations({self.database_name!r}, {self.collection_name!r})"

    def _live_indexes(self) -> list[LiveIndex]:
        documents = self.client.list_indexes(self.database_name, self.collection_name)
        return [LiveIndex.from_document(document) for document in documents]

    def _first_match(self, specification: IndexSpecification) -> Optional[LiveIndex]:
        matcher = IndexMatcher(specification)
        return matcher.first_match(self._live_indexes())

    def create(self, specification: IndexSpecification) -> None:
        """
        Create the index described by the specification.

        Creating an identical index again is a no-op. Raises
        IndexExistsWithDifferentName or ExistingIndexHasSameName when the
        collection already has a conflicting index, InvalidDefinition when the
        definition is missing or empty, and DriverError for anything else.
        """
        logger.info(f"Creating index with specification {specification}")
        if specification.definition is None:
            raise InvalidDefinition("Cannot create an index without a definition")
        keys = parse_definition(specification.definition)
        if not keys:
            raise InvalidDefinition(f"Cannot create an index with empty definition {specification.definition!r}")

        try:
            self.client.create_index(
                self.database_name,
                self.collection_name,
                keys,
                name=specification.name,
                unique=specification.unique,
            )
        except DriverError as e:
            error_type = ERRORS_BY_CODE.get(e.code)
            if error_type is None:
                raise
            logger.warning(f"{error_type.__name__}: {e.message}")
            raise error_type(e.message, e.code) from e

        logger.info("Created index")

    def create_with_preferred_name(self, specification: IndexSpecification) -> None:
        """
        Create the index unless one with the same content already exists.

        An existing index with matching keys and uniqueness satisfies the
        specification whatever its name, so a deployment that created it under
        another name does not cause a conflict.
        """
        existing = self.find(specification.without_name())
        if existing is not None:
            logger.info(f"Index matching specification already exists: {existing}")
            return

        self.create(specification)

    def find(self, specification: IndexSpecification) -> Optional[IndexSpecification]:
        """
        First index matching the specification, or None.

        The empty definition "{}" constrains nothing, like no definition.
        """
        logger.info(f"Searching index with specification {specification}")

        index = self._first_match(specification)
        if index is None:
            logger.info(f"No index found matching specification {specification}")
            return None

        logger.info(f"Found index {index}")
        return to_specification(index)

    def list_indexes(self) -> list[IndexSpecification]:
        """All indexes of the collection, in the order the server lists them."""
        return [to_specification(index) for index in self._live_indexes()]

    def delete(self, specification: IndexSpecification) -> None:
        """
        Drop the first index matching the specification.

        Nothing matching is not an error. A specification with no name, no
        uniqueness and no definition (or the empty definition "{}") drops
        whichever index is listed first.
        """
        logger.info(f"Deleting index with specification {specification}")
        matcher = IndexMatcher(specification)
        if matcher.is_unconstrained():
            logger.warning("Deleting with an unconstrained specification drops the first listed index")

        index = matcher.first_match(self._live_indexes())
        if index is None:
            logger.info(f"No index found matching specification {specification}")
            return

        self.client.drop_index(self.database_name, self.collection_name, index.name)
        logger.info(f"Deleted index {index}")
