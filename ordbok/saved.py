from typing import Any, Iterable

from ordbok.language_element import LexicalEntry


class SavedWordSet:
    """
    The entries the user has pinned for flashcard practice, most recently added first. Entries are
    identified by their word and part of speech, ignoring case.
    """

    _entries: list[LexicalEntry]

    def __init__(self, entries: Iterable[LexicalEntry] | None = None) -> None:
        self._entries = [entry.copy() for entry in entries or []]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self.entries)

    @property
    def entries(self) -> list[LexicalEntry]:
        return [entry.copy() for entry in self._entries]

    def contains(self, entry: LexicalEntry) -> bool:
        return any(saved.saved_key == entry.saved_key for saved in self._entries)

    def toggle(self, entry: LexicalEntry) -> list[LexicalEntry]:
        """Saves the entry if it isn't saved yet, otherwise removes it. Returns the new state."""
        if self.contains(entry):
            self._entries = [saved for saved in self._entries if saved.saved_key != entry.saved_key]
        else:
            self._entries = [entry.copy()] + self._entries
        return self.entries

    def remove_word(self, word: str) -> list[LexicalEntry]:
        """Removes every saved sense of a word."""
        word = word.lower()
        self._entries = [saved for saved in self._entries if saved.word.lower() != word]
        return self.entries

    def to_dicts(self) -> list[dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]

    @classmethod
    def from_dicts(cls, data: Iterable[Any]) -> "SavedWordSet":
        return cls(
            LexicalEntry.from_dict(item)
            for item in data
            if isinstance(item, dict) and item.get("word")
        )


__all__ = ["SavedWordSet"]
