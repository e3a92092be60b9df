from typing import Iterable

from ordbok.language_element import HistoryRecord, LexicalEntry


def fingerprint(word: str, target_language: str) -> str:
    return f"{word.strip().lower()}:{target_language}"


class LookupCache:
    """
    An in-session mapping from a lookup fingerprint to the senses returned for it. The cache keeps
    its own copies of entries, so changes made to entries handed out (or to the history) cannot
    leak into it. There is no eviction; entries live as long as the session.
    """

    entries: dict[str, list[LexicalEntry]]

    def __init__(self) -> None:
        self.entries = {}

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str) -> list[LexicalEntry] | None:
        if key not in self.entries:
            return None
        return [entry.copy() for entry in self.entries[key]]

    def put(self, key: str, entries: Iterable[LexicalEntry]) -> None:
        """Stores the senses for a fingerprint, replacing anything stored before."""
        self.entries[key] = [entry.copy() for entry in entries]

    def clear(self) -> None:
        self.entries.clear()

    @classmethod
    def from_history(cls, records: Iterable[HistoryRecord]) -> "LookupCache":
        """
        Returns a cache pre-warmed from the lookup history, so that words looked up in an earlier
        session are served without a remote call. Records are grouped by fingerprint, keeping
        their history order.
        """
        cache = cls()
        groups: dict[str, list[LexicalEntry]] = {}
        for record in records:
            if record.target_language is None:
                continue
            key = fingerprint(record.word, record.target_language)
            groups.setdefault(key, []).append(record.to_entry())
        for key, entries in groups.items():
            cache.put(key, entries)
        return cache


__all__ = ["LookupCache", "fingerprint"]
