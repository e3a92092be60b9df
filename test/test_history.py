from ordbok.history import HistoryLedger
from ordbok.language_element import HistoryRecord


def test_record_stamps_and_prepends(make_entry) -> None:  # type: ignore[no-untyped-def]
    ledger = HistoryLedger()
    ledger.record([make_entry("hus")], observed_at=1)
    state = ledger.record([make_entry("bil"), make_entry("bil", part_of_speech="verb")], observed_at=2)  # noqa: E501
    assert [(r.word, r.part_of_speech) for r in state] == [
        ("bil", "noun"),
        ("bil", "verb"),
        ("hus", "noun"),
    ]
    assert all(isinstance(r, HistoryRecord) for r in state)
    assert [r.timestamp for r in state] == [2, 2, 1]


def test_repeat_lookup_evicts_earlier_occurrence(make_entry) -> None:  # type: ignore[no-untyped-def]  # noqa: E501
    ledger = HistoryLedger()
    ledger.record([make_entry("bil"), make_entry("bil", part_of_speech="verb")], observed_at=0)
    for i, word in enumerate(["hus", "katt", "hund", "bok", "stol"], 1):
        ledger.record([make_entry(word)], observed_at=i)
    assert ledger.records[5].word == "bil"

    state = ledger.record([make_entry("Bil")], observed_at=10)
    assert state[0].word == "Bil"
    bil_records = [r for r in state if r.word.lower() == "bil" and r.target_language == "Spanish"]
    assert len(bil_records) == 1
    assert len(state) == 6


def test_same_word_in_other_language_is_kept(make_entry) -> None:  # type: ignore[no-untyped-def]
    ledger = HistoryLedger()
    ledger.record([make_entry("bil", target_language="French")], observed_at=1)
    state = ledger.record([make_entry("bil", target_language="Spanish")], observed_at=2)
    assert [r.target_language for r in state] == ["Spanish", "French"]


def test_ledger_is_capped(make_entry) -> None:  # type: ignore[no-untyped-def]
    ledger = HistoryLedger()
    for i in range(105):
        ledger.record([make_entry(f"ord{i}")], observed_at=i)
    assert len(ledger) == 100
    assert ledger.records[0].word == "ord104"
    assert ledger.records[-1].word == "ord5"


def test_record_nothing_leaves_ledger_unchanged(make_entry) -> None:  # type: ignore[no-untyped-def]  # noqa: E501
    ledger = HistoryLedger()
    ledger.record([make_entry("bil")], observed_at=1)
    assert [r.word for r in ledger.record([])] == ["bil"]


def test_records_are_independent_of_recorded_entries(make_entry) -> None:  # type: ignore[no-untyped-def]  # noqa: E501
    ledger = HistoryLedger()
    entry = make_entry("bil")
    ledger.record([entry], observed_at=1)
    entry.target_language = "French"
    assert ledger.records[0].target_language == "Spanish"


def test_returned_records_do_not_alias_the_ledger(make_entry) -> None:  # type: ignore[no-untyped-def]  # noqa: E501
    ledger = HistoryLedger()
    ledger.record([make_entry("bil")], observed_at=1)
    ledger.records[0].target_language = "French"
    latest = ledger.latest("bil")
    assert latest is not None
    latest.word = "hus"
    assert ledger.records[0].target_language == "Spanish"
    assert ledger.records[0].word == "bil"


def test_recent_words(make_entry) -> None:  # type: ignore[no-untyped-def]
    ledger = HistoryLedger()
    ledger.record([make_entry("Bil", target_language="French")], observed_at=1)
    ledger.record([make_entry("hus")], observed_at=2)
    ledger.record([make_entry("bil"), make_entry("bil", part_of_speech="verb")], observed_at=3)
    assert ledger.recent_words() == ["bil", "hus"]
    assert ledger.recent_words(limit=1) == ["bil"]
    latest = ledger.latest("BIL")
    assert latest is not None
    assert latest.target_language == "Spanish"
    assert ledger.latest("katt") is None


def test_round_trip_through_dicts(make_entry) -> None:  # type: ignore[no-untyped-def]
    ledger = HistoryLedger()
    ledger.record([make_entry("bil")], observed_at=42)
    restored = HistoryLedger.from_dicts(ledger.to_dicts() + [{"no": "word"}, "junk"])  # type: ignore[list-item]  # noqa: E501
    assert restored.records == ledger.records
    assert restored.records[0].timestamp == 42


def test_clear(make_entry) -> None:  # type: ignore[no-untyped-def]
    ledger = HistoryLedger([HistoryRecord.from_entry(make_entry("bil"), 1)])
    ledger.clear()
    assert len(ledger) == 0
