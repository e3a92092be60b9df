import pytest

from ordbok.constant import PLACEHOLDER
from ordbok.sanitizer import sanitize, sanitize_record


@pytest.mark.parametrize("raw", [None, "", "   ", ";", "[only a note]", "(Note: nothing)", 42])
def test_sanitize_falls_back_to_placeholder(raw) -> None:  # type: ignore[no-untyped-def]
    assert sanitize(raw) == PLACEHOLDER


def test_sanitize_strips_leaked_key() -> None:
    assert sanitize("indefiniteSingular: regel") == "regel"
    assert sanitize("definitePlural:reglerna") == "reglerna"


def test_sanitize_keeps_text_after_last_colon_for_short_prefix() -> None:
    assert sanitize("en: bil") == "bil"
    assert sanitize("Singular: Plural: bilar") == "bilar"


def test_sanitize_keeps_tail_after_leaked_key() -> None:
    assert sanitize("grammarNotes: klockan 10:30") == "klockan 10:30"


def test_sanitize_strips_meta_commentary() -> None:
    assert sanitize("springa (Note: irregular)") == "springa"
    assert sanitize("hus [pl. hus]") == "hus"
    assert sanitize("sprang (see strong verbs)") == "sprang"
    assert sanitize("bättre (comparative form)") == "bättre"
    assert sanitize("regler; reglerna") == "regler reglerna"
    assert sanitize("Lightspeed stor") == "stor"


def test_sanitize_leaves_clean_values_untouched() -> None:
    assert sanitize("Det finns en regel för allt.") == "Det finns en regel för allt."
    assert sanitize("  bil  ") == "bil"


def test_sanitize_is_deterministic() -> None:
    raw = "indefinitePlural: regler (Note: irregular) [x]"
    assert sanitize(raw) == sanitize(raw) == "regler"


def test_sanitize_record_skips_structural_fields() -> None:
    record = {
        "word": "bil",
        "gender": "en",
        "targetLanguage": "Spanish: Latin America",
        "definitions": {"english": "english: car", "secondary": ""},
        "compounds": ["bilväg [road]"],
        "timestamp": 1,
    }
    assert sanitize_record(record) == {
        "word": "bil",
        "gender": "en",
        "targetLanguage": "Spanish: Latin America",
        "definitions": {"english": "car", "secondary": PLACEHOLDER},
        "compounds": ["bilväg"],
        "timestamp": 1,
    }
