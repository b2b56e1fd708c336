"""Tests for the key-value stores and persistent values."""

import json

import pytest
from decimal import Decimal

from src.models.expense import BudgetData, Expense, ExpenseMode
from src.services.storage import (
    InMemoryStore,
    JsonFileStore,
    PersistentValue,
    StorageQuotaExceededError,
    StorageWriteError,
)


KEY = "expense-tracker-data"


def sample_data() -> BudgetData:
    return BudgetData(
        monthly_budget=Decimal("500"),
        expenses=[
            Expense(id="e1", category="Food & Dining", amount=Decimal("12.5"), timestamp=100),
            Expense(id="e2", category="Pets", amount=Decimal("40"), timestamp=200),
        ],
        currency="EUR",
        mode=ExpenseMode.BUSINESS,
    )


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryStore()
    return JsonFileStore(tmp_path / "data")


class TestLoadSave:
    """Behaviour shared by every backend."""

    def test_missing_key_returns_default(self, store):
        default = BudgetData()
        assert store.load(KEY, default) is default

    def test_save_then_load(self, store):
        data = sample_data()
        store.save(KEY, data)
        assert store.load(KEY, BudgetData()) == data

    def test_bool_value(self, store):
        store.save("expense-tracker-theme", True)
        assert store.load("expense-tracker-theme", False) is True

    def test_malformed_json_returns_default(self, store):
        store._write(KEY, "{not json")
        default = BudgetData()
        assert store.load(KEY, default) is default

    def test_wrong_shape_returns_default(self, store):
        store._write(KEY, json.dumps({"monthlyBudget": -10, "expenses": "nope"}))
        default = BudgetData()
        assert store.load(KEY, default) is default

    def test_recovery_callback(self, store):
        seen = []
        store.on_load_recovered = lambda key, reason: seen.append((key, reason))
        store._write(KEY, "[]")
        store.load(KEY, BudgetData())
        assert seen and seen[0][0] == KEY

    def test_delete(self, store):
        store.save(KEY, sample_data())
        store.delete(KEY)
        store.delete(KEY)
        assert store.load(KEY, None, BudgetData) is None
        assert KEY not in store.keys()

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", "with space"])
    def test_invalid_keys_rejected(self, store, key):
        with pytest.raises(ValueError):
            store.save(key, True)
        with pytest.raises(ValueError):
            store.load(key, False)


class TestJsonFileStore:
    """File-specific behaviour."""

    def test_one_file_per_key(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.save(KEY, sample_data())
        store.save("expense-tracker-theme", False)
        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "expense-tracker-data.json",
            "expense-tracker-theme.json",
        ]
        assert store.keys() == ["expense-tracker-data", "expense-tracker-theme"]

    def test_file_contents_are_camel_case_json(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.save(KEY, sample_data())
        stored = json.loads((tmp_path / f"{KEY}.json").read_text(encoding="utf-8"))
        assert stored["monthlyBudget"] == 500
        assert stored["expenses"][0]["amount"] == 12.5
        assert stored["mode"] == "Business"

    def test_survives_new_instance(self, tmp_path):
        JsonFileStore(tmp_path).save(KEY, sample_data())
        assert JsonFileStore(tmp_path).load(KEY, BudgetData()) == sample_data()

    def test_quota_exceeded(self, tmp_path):
        store = JsonFileStore(tmp_path, max_bytes=10)
        with pytest.raises(StorageQuotaExceededError):
            store.save(KEY, sample_data())
        assert store.load(KEY, None, BudgetData) is None

    def test_unusable_directory(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(StorageWriteError):
            JsonFileStore(blocker / "data")

    def test_unreadable_file_returns_default(self, tmp_path):
        """Bytes that are not UTF-8 are a read failure, not a crash."""
        store = JsonFileStore(tmp_path)
        seen = []
        store.on_load_recovered = lambda key, reason: seen.append((key, reason))
        store.path_for(KEY).write_bytes(b"\xff\xfe")

        default = BudgetData()
        assert store.load(KEY, default) is default
        assert seen[0][0] == KEY
        assert seen[0][1].startswith("read failed")

    def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonFileStore(tmp_path)
        for _ in range(3):
            store.save(KEY, sample_data())
        assert [p.name for p in tmp_path.iterdir()] == [f"{KEY}.json"]


class TestInMemoryStore:

    def test_quota_exceeded(self):
        store = InMemoryStore(max_bytes=5)
        with pytest.raises(StorageQuotaExceededError):
            store.save(KEY, sample_data())

    def test_initial_payloads(self):
        store = InMemoryStore(initial={KEY: sample_data().model_dump_json(by_alias=True)})
        assert store.load(KEY, BudgetData()) == sample_data()


class TestPersistentValue:
    """Tests for the in-memory mirror."""

    def test_loads_on_init(self):
        store = InMemoryStore()
        store.save(KEY, sample_data())
        value = PersistentValue(store, KEY, BudgetData())
        assert value.value == sample_data()

    def test_set_writes_through(self):
        store = InMemoryStore()
        value = PersistentValue(store, KEY, BudgetData())
        value.set(sample_data())
        assert store.load(KEY, BudgetData()) == sample_data()

    def test_failed_write_keeps_mirror(self):
        store = InMemoryStore(max_bytes=50)
        value = PersistentValue(store, KEY, BudgetData())
        with pytest.raises(StorageWriteError):
            value.set(sample_data())
        assert value.value == sample_data()
        assert store.raw(KEY) is None

    def test_update(self):
        store = InMemoryStore()
        flag = PersistentValue(store, "expense-tracker-theme", False)
        assert flag.update(lambda v: not v) is True
        assert store.load("expense-tracker-theme", False) is True

    def test_reload(self):
        store = InMemoryStore()
        value = PersistentValue(store, KEY, BudgetData())
        store.save(KEY, sample_data())
        assert value.value == BudgetData()
        assert value.reload() == sample_data()
