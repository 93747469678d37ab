import pytest

from index_errors import DriverError
from index_operations import IndexOperations


DATABASE_NAME = "mongo-index-test"
COLLECTION_NAME = "collection"


def _default_name(keys) -> str:
    return "_".join(f"{field}_{direction}" for field, direction in keys)


class FakeIndexClient:
    """
    In-memory IndexClient with the server behaviour the operations rely on.

    A collection gets its _id_ index on first create. Creating an identical
    index again is a no-op, a name clash raises code 86 (85 when only the
    options differ), and the same keys under another name raise code 85.
    """

    def __init__(self):
        self.collections = {}
        self.calls = []

    def indexes(self, database_name=DATABASE_NAME, collection_name=COLLECTION_NAME) -> list[dict]:
        return self.collections.setdefault((database_name, collection_name), [])

    def add_index(self, keys, name=None, unique=False,
                  database_name=DATABASE_NAME, collection_name=COLLECTION_NAME, **extra) -> dict:
        """Put an index in place directly, the way another deployment would have."""
        indexes = self.indexes(database_name, collection_name)
        if not indexes:
            indexes.append({"v": 2, "key": {"_id": 1}, "name": "_id_"})
        document = {"v": 2, "key": dict(keys), "name": name or _default_name(keys), **extra}
        if unique:
            document["unique"] = True
        indexes.append(document)
        return document

    def list_indexes(self, database_name, collection_name):
        self.calls.append(("list_indexes", database_name, collection_name))
        return [dict(document) for document in self.collections.get((database_name, collection_name), [])]

    def create_index(self, database_name, collection_name, keys, *, name=None, unique=False):
        self.calls.append(("create_index", database_name, collection_name, list(keys), name, unique))
        keys = list(keys)
        name = name or _default_name(keys)

        for existing in self.indexes(database_name, collection_name):
            same_keys = list(existing["key"].items()) == keys
            same_options = existing.get("unique", False) == unique
            if existing["name"] == name:
                if same_keys and same_options:
                    return
                if same_keys:
                    raise DriverError(
                        f"An existing index has the same name as the requested index. "
                        f"When index names are not specified, they are auto generated and can cause conflicts. "
                        f"Requested index: {keys}, existing index: {existing}", code=85)
                raise DriverError(
                    f"An existing index has the same name as the requested index. "
                    f"Requested index: {keys}, existing index: {existing}", code=86)
            if same_keys:
                raise DriverError(
                    f"Index already exists with a different name: {existing['name']}", code=85)

        self.add_index(keys, name=name, unique=unique,
                       database_name=database_name, collection_name=collection_name)

    def drop_index(self, database_name, collection_name, name):
        self.calls.append(("drop_index", database_name, collection_name, name))
        if name == "_id_":
            raise DriverError("cannot drop _id index", code=72)
        indexes = self.collections.get((database_name, collection_name), [])
        for position, existing in enumerate(indexes):
            if existing["name"] == name:
                del indexes[position]
                return
        raise DriverError(f"index not found with name [{name}]", code=27)


@pytest.fixture
def client() -> FakeIndexClient:
    return FakeIndexClient()


@pytest.fixture
def operations(client: FakeIndexClient) -> IndexOperations:
    return IndexOperations(DATABASE_NAME, COLLECTION_NAME, client)
