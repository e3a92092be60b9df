import json
import os
import tempfile

from ordbok.storage import JSONFileStore, Storage


def test_load_missing_slot_returns_empty() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        assert JSONFileStore(os.path.join(temp_dir, "missing.json")).load() == []


def test_save_then_load() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        store = JSONFileStore(os.path.join(temp_dir, "nested", "slot.json"))
        store.save([{"word": "bil"}, {"word": "hus"}])
        assert store.load() == [{"word": "bil"}, {"word": "hus"}]
        assert not os.path.exists(store.path + ".tmp")


def test_load_corrupt_slot_returns_empty() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "slot.json")
        with open(path, "w", encoding="utf-8") as fh:
            fh.write("{not json")
        assert JSONFileStore(path).load() == []
        with open(path, "w", encoding="utf-8") as fh:
            json.dump({"word": "bil"}, fh)
        assert JSONFileStore(path).load() == []


def test_storage_slots_are_separate() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        storage = Storage(temp_dir)
        storage.history.save([{"word": "bil"}])
        assert storage.saved_words.load() == []
        assert os.path.basename(storage.history.path) == "ordbok_history.json"
        assert os.path.basename(storage.saved_words.path) == "ordbok_flashcards.json"
