import pytest

from store import SQLiteStore, StoreError


class FlakyStore:
    """Wraps a real store; operations named in ``failing`` raise StoreError."""

    def __init__(self, inner):
        self.inner = inner
        self.failing = set()
        self.calls = []

    def _call(self, op, *args):
        self.calls.append((op, *args))
        if op in self.failing:
            raise StoreError(f"{op} failed")
        return getattr(self.inner, op)(*args)

    def create_record(self, collection, data):
        return self._call("create_record", collection, data)

    def list_records(self, collection):
        return self._call("list_records", collection)

    def update_record(self, collection, record_id, data):
        return self._call("update_record", collection, record_id, data)

    def delete_record(self, collection, record_id):
        return self._call("delete_record", collection, record_id)


@pytest.fixture
def sqlite_store(tmp_path):
    return SQLiteStore(tmp_path / "inventory.db")


@pytest.fixture
def flaky_store(sqlite_store):
    return FlakyStore(sqlite_store)


@pytest.fixture
def ring():
    return {
        "name": "Ring A",
        "sku": "R-001",
        "weight": "5",
        "karat": "14K",
        "cost": "100",
        "tagPrice": "250",
        "notes": "",
    }


@pytest.fixture
def bracelet():
    return {
        "name": "Bangle",
        "sku": "B-200",
        "weight": "12.5",
        "karat": "18K",
        "cost": "400",
        "tagPrice": "900",
        "notes": "hinged clasp",
    }
