"""
Tests for the slot store.
"""

import pytest

from catalog_merger.errors import StorageError
from catalog_merger.storage import Slot, SlotStore, StoredFile, get_store


class TestSlotStore:
    """Save, load and delete named slots."""

    def test_missing_slot_is_none(self, store):
        assert store.load(Slot.PRIMARY) is None

    def test_round_trip(self, store):
        stored = StoredFile(slot=Slot.PRIMARY, name="listing.csv", type="csv", size=120, content=[{"SKU": "A"}])

        store.save(stored)
        loaded = store.load(Slot.PRIMARY)

        assert loaded == stored

    def test_slots_are_independent(self, store):
        store.save(StoredFile(slot=Slot.PRIMARY, name="p.csv", type="csv"))

        assert store.load(Slot.SECONDARY) is None
        assert store.load(Slot.PRIMARY).content is None

    def test_delete(self, store):
        store.save(StoredFile(slot=Slot.MERGED, name="Merged data", type="json", content=[]))

        store.delete(Slot.MERGED)
        store.delete(Slot.MERGED)

        assert store.load(Slot.MERGED) is None

    def test_clear(self, store):
        for slot in Slot:
            store.save(StoredFile(slot=slot, name=slot.value, type="csv"))

        store.clear()

        assert all(store.load(slot) is None for slot in Slot)

    def test_corrupt_slot_raises(self, tmp_path):
        store = SlotStore(str(tmp_path))
        (tmp_path / "primaryFile.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            store.load(Slot.PRIMARY)

    def test_slot_names(self):
        assert [s.value for s in Slot] == ["primaryFile", "secondaryFile", "mergedData"]


class TestGetStore:
    """Configured store location."""

    def test_uses_settings(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CATALOG_MERGER_STORAGE_DIR", str(tmp_path / "saved"))

        assert get_store().directory == str(tmp_path / "saved")
