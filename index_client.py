"""
Database client used by IndexOperations.

IndexClient is the small surface the index operations need. PyMongoIndexClient
implements it on top of pymongo and turns every driver failure into a
DriverError, so nothing above this module deals with pymongo exceptions.
"""

import logging
from typing import Iterable, Optional, Protocol

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, OperationFailure, PyMongoError

from index_errors import DriverError


logger = logging.getLogger(__name__)


class IndexClient(Protocol):
    def list_indexes(self, database_name: str, collection_name: str) -> Iterable[dict]:
        """Index documents of the collection, each with at least 'name' and 'key'."""
        ...

    def create_index(self, database_name: str, collection_name: str, keys: list[tuple[str, int]],
                     *, name: Optional[str] = None, unique: bool = False) -> None:
        ...

    def drop_index(self, database_name: str, collection_name: str, name: str) -> None:
        ...


def _driver_error(error: PyMongoError) -> DriverError:
    if isinstance(error, OperationFailure):
        details = error.details or {}
        message = details.get("errmsg") or str(error)
        return DriverError(message, code=error.code, details=details)
    return DriverError(str(error))


class PyMongoIndexClient:
    """IndexClient backed by a pymongo MongoClient. The MongoClient is borrowed, not closed."""

    def __init__(self, mongo_client: MongoClient):
        self.mongo_client = mongo_client

    def _collection(self, database_name: str, collection_name: str):
        return self.mongo_client[database_name][collection_name]

    def list_indexes(self, database_name, collection_name):
        try:
            return list(self._collection(database_name, collection_name).list_indexes())
        except PyMongoError as e:
            raise _driver_error(e) from e

    def create_index(self, database_name, collection_name, keys, *, name=None, unique=False):
        options = {"unique": unique}
        if name is not None:
            options["name"] = name
        try:
            self._collection(database_name, collection_name).create_index(list(keys), **options)
        except PyMongoError as e:
            raise _driver_error(e) from e

    def drop_index(self, database_name, collection_name, name):
        try:
            self._collection(database_name, collection_name).drop_index(name)
        except PyMongoError as e:
            raise _driver_error(e) from e


def connect(uri: str) -> MongoClient:
    """Create a MongoClient and check the server answers."""
    logger.info(f"Creating MongoDB client for {uri}")
    # Add timeouts to prevent hanging
    client = MongoClient(
        uri,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=5000,
        socketTimeoutMS=10000
    )
    try:
        client.admin.command('ping')
        logger.info("MongoDB connection successful")
    except ConnectionFailure as e:
        logger.error(f"MongoDB connection failed: {e}")
        raise
    return client
