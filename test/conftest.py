import json
from typing import Any

import pytest

from ordbok.generator import Generator


class FakeGenerator(Generator):
    """A generator that replays canned responses (or raises canned errors) in order."""

    lookup_key = "fake"

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.prompts: list[str] = []
        self.system_prompts: list[str] = []
        self.closed = False

    async def generate(self, prompt, response_format=None, temperature=0, system_prompt=""):  # type: ignore  # noqa: E501
        self.prompts.append(prompt)
        self.system_prompts.append(system_prompt)
        self.requests_made += 1
        response = self.responses[0] if len(self.responses) == 1 else self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def raw_noun() -> dict[str, Any]:
    return {
        "word": "regel",
        "ipa": "ˈreːɡɛl",
        "gender": "en",
        "partOfSpeech": "noun",
        "definitions": {"english": "rule", "secondary": "regla"},
        "examples": [
            {
                "swedish": "Det finns en regel för allt.",
                "english": "There is a rule for everything.",
                "secondary": "Hay una regla para todo.",
            }
        ],
        "compounds": ["grundregel", "regelbok"],
        "inflections": {
            "noun": {
                "indefiniteSingular": "indefiniteSingular: regel",
                "definiteSingular": "regeln",
                "indefinitePlural": "regler",
                "definitePlural": "reglerna (Note: irregular)",
            }
        },
        "grammarNotes": "Plural drops the e; [see grammar]",
    }


@pytest.fixture
def raw_verb() -> dict[str, Any]:
    return {
        "word": "springa",
        "ipa": "ˈsprɪŋːa",
        "gender": "n/a",
        "partOfSpeech": "verb",
        "definitions": {"english": "to run", "secondary": "correr"},
        "examples": [],
        "compounds": [],
        "inflections": {
            "verb": {
                "imperative": "spring",
                "infinitive": "springa",
                "present": "springer",
                "past": "sprang",
                "supine": "sprungit",
            },
            "noun": {
                "indefiniteSingular": "x",
                "definiteSingular": "x",
                "indefinitePlural": "x",
                "definitePlural": "x",
            },
        },
    }


@pytest.fixture
def lookup_response(raw_noun: dict[str, Any]) -> str:
    return json.dumps({"entries": [raw_noun]})


@pytest.fixture
def fake_generator_cls() -> type[FakeGenerator]:
    return FakeGenerator


@pytest.fixture
def make_entry():  # type: ignore[no-untyped-def]
    from ordbok.language_element import Definitions, ExampleSentence, Gender, LexicalEntry

    def _make_entry(
        word: str,
        target_language: str | None = "Spanish",
        part_of_speech: str = "noun",
        english: str = "",
    ) -> LexicalEntry:
        return LexicalEntry(
            word=word,
            ipa=f"{word}-ipa",
            gender=Gender.EN,
            part_of_speech=part_of_speech,
            definitions=Definitions(english or f"{word} in English", f"{word} secondary"),
            examples=[ExampleSentence(f"{word} sv", f"{word} en", f"{word} es")],
            compounds=[],
            target_language=target_language,
        )

    return _make_entry
