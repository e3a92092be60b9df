import time
from typing import Any, Iterable

from ordbok.cache import fingerprint
from ordbok.constant import HISTORY_LIMIT, RECENT_WORDS_LIMIT
from ordbok.language_element import HistoryRecord, LexicalEntry


def now_ms() -> int:
    return int(time.time() * 1000)


class HistoryLedger:
    """
    The ordered log of past lookups, most recent first. The senses returned by one lookup are kept
    together, and a word looked up again in the same target language replaces its earlier
    occurrence rather than being listed twice. The ledger never holds more than `limit` records.
    """

    limit: int
    _records: list[HistoryRecord]

    def __init__(
        self, records: Iterable[HistoryRecord] | None = None, limit: int = HISTORY_LIMIT
    ) -> None:
        self.limit = limit
        self._records = [record.copy() for record in records or []][:limit]  # type: ignore[misc]

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[HistoryRecord]:
        """Copies of the records, most recent first."""
        return [record.copy() for record in self._records]  # type: ignore[misc]

    def record(
        self, entries: Iterable[LexicalEntry], observed_at: int | None = None
    ) -> list[HistoryRecord]:
        """
        Merges the senses returned by a lookup into the ledger and returns the new ledger state.
        Existing records sharing a fingerprint with any of the new entries are evicted, the new
        records are put at the front, and the oldest records beyond the limit are dropped.
        """
        timestamp = now_ms() if observed_at is None else observed_at
        new_records = [HistoryRecord.from_entry(entry, timestamp) for entry in entries]
        if not new_records:
            return self.records
        stale = {fingerprint(r.word, str(r.target_language)) for r in new_records}
        kept = [
            r for r in self._records if fingerprint(r.word, str(r.target_language)) not in stale
        ]
        self._records = (new_records + kept)[: self.limit]
        return self.records

    def recent_words(self, limit: int = RECENT_WORDS_LIMIT) -> list[str]:
        """Returns the distinct lowercased words in the ledger, most recent first."""
        words: list[str] = []
        for record in self._records:
            word = record.word.lower()
            if word not in words:
                words.append(word)
            if len(words) == limit:
                break
        return words

    def latest(self, word: str) -> HistoryRecord | None:
        """Returns the most recent record for a word in any target language."""
        word = word.lower()
        record = next((r for r in self._records if r.word.lower() == word), None)
        return record.copy() if record is not None else None  # type: ignore[return-value]

    def clear(self) -> None:
        self._records = []

    def to_dicts(self) -> list[dict[str, Any]]:
        return [record.to_dict() for record in self._records]

    @classmethod
    def from_dicts(
        cls, data: Iterable[dict[str, Any]], limit: int = HISTORY_LIMIT
    ) -> "HistoryLedger":
        return cls(records=_parse_records(data), limit=limit)


def _parse_records(data: Iterable[Any]) -> list[HistoryRecord]:
    records = []
    for item in data:
        if isinstance(item, dict) and item.get("word"):
            records.append(HistoryRecord.from_dict(item))
    return records


__all__ = ["HistoryLedger", "now_ms"]
