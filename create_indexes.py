#!/usr/bin/env python3
"""
Create MongoDB indexes for efficient querying.

Indexes are declared by content. An index that already exists with the same
keys and uniqueness is left alone, whatever it is called, so the script can run
on every deployment.
"""

import logging
import sys

from config import MONGODB_URI, DATABASE_NAME, COLLECTION_NAME, LOG_LEVEL
from index_client import PyMongoIndexClient, connect
from index_operations import IndexOperations
from index_specification import IndexSpecification


INDEXES = [
    # Compound index for lookups by string, then int
    IndexSpecification(definition="{ randomString: 1, randomInt: 1 }", name="idx0"),
    # Filtering on the boolean, sorted by int
    IndexSpecification(definition="{ randomBoolean: 1, randomInt: 1 }"),
    # Same fields, other order: a different index
    IndexSpecification(definition="{ randomInt: 1, randomBoolean: 1 }", unique=True),
]


def ensure_indexes(operations: IndexOperations, specifications=INDEXES):
    """Create every index in specifications that does not exist yet."""
    for specification in specifications:
        operations.create_with_preferred_name(specification)


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )

    print(f"Connecting to MongoDB at {MONGODB_URI}...")
    client = connect(MONGODB_URI)
    operations = IndexOperations(DATABASE_NAME, COLLECTION_NAME, PyMongoIndexClient(client))

    print("Creating indexes...")
    ensure_indexes(operations)

    # List all indexes
    print("\nCurrent indexes:")
    for index in operations.list_indexes():
        unique = " (unique)" if index.unique else ""
        print(f"  {index.name}: {index.definition}{unique}")

    print("\nDone!")


if __name__ == "__main__":
    main()
