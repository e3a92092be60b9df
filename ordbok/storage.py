import json
import os
from typing import Any

from ordbok.constant import HISTORY_STORAGE_KEY, SAVED_WORDS_STORAGE_KEY
from ordbok.log import logger


class JSONFileStore:
    """
    A single named storage slot backed by a JSON file. Loading never fails: a missing, unreadable
    or corrupt file is treated as an empty slot.
    """

    path: str

    def __init__(self, path: str) -> None:
        self.path = path

    def load(self) -> list[dict[str, Any]]:
        if not os.path.isfile(self.path):
            return []
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {self.path}, starting empty: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Unexpected data in {self.path}, starting empty")
            return []
        return [item for item in data if isinstance(item, dict)]

    def save(self, records: list[dict[str, Any]]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(records, fh, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)


class Storage:
    """The two storage slots used by the dictionary: lookup history and saved words."""

    history: JSONFileStore
    saved_words: JSONFileStore

    def __init__(self, directory: str) -> None:
        self.directory = directory
        self.history = JSONFileStore(os.path.join(directory, f"{HISTORY_STORAGE_KEY}.json"))
        self.saved_words = JSONFileStore(os.path.join(directory, f"{SAVED_WORDS_STORAGE_KEY}.json"))


__all__ = ["JSONFileStore", "Storage"]
