import copy
import enum
import re
from typing import Any, Optional

from ordbok.constant import PLACEHOLDER


def truncate_string(string: str, max_length: int = 20) -> str:
    return string[:max_length] + "..." if len(string) > max_length else string


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) and value else PLACEHOLDER


class Gender(enum.Enum):
    EN = "en"
    ETT = "ett"
    NOT_APPLICABLE = "n/a"

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def parse(value: Any) -> "Gender":
        """Normalizes a generated gender tag, falling back to n/a for anything unrecognised."""
        if isinstance(value, str):
            for gender in Gender:
                if gender.value == value.strip().lower():
                    return gender
        return Gender.NOT_APPLICABLE


class ExampleSentence:
    """
    An example sentence in Swedish together with its English translation and its translation into
    the entry's secondary language.
    """

    swedish: str
    english: str
    secondary: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExampleSentence):
            return NotImplemented
        return (
            self.swedish == other.swedish
            and self.english == other.english
            and self.secondary == other.secondary
        )

    def __hash__(self) -> int:
        return hash((self.swedish, self.english, self.secondary))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(swedish={truncate_string(self.swedish)}, english={truncate_string(self.english)})"  # noqa: E501

    def __init__(self, swedish: str, english: str, secondary: str) -> None:
        self.swedish = swedish
        self.english = english
        self.secondary = secondary

    def to_dict(self) -> dict[str, Any]:
        return {"swedish": self.swedish, "english": self.english, "secondary": self.secondary}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExampleSentence":
        return cls(_text(data, "swedish"), _text(data, "english"), _text(data, "secondary"))


class Definitions:
    english: str
    secondary: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Definitions):
            return NotImplemented
        return self.english == other.english and self.secondary == other.secondary

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(english={truncate_string(self.english)})"

    def __init__(self, english: str, secondary: str) -> None:
        self.english = english or PLACEHOLDER
        self.secondary = secondary or PLACEHOLDER

    def to_dict(self) -> dict[str, Any]:
        return {"english": self.english, "secondary": self.secondary}

    @classmethod
    def from_dict(cls, data: Any) -> "Definitions":
        if not isinstance(data, dict):
            return cls(PLACEHOLDER, PLACEHOLDER)
        return cls(_text(data, "english"), _text(data, "secondary"))


class Inflections:
    """
    Base class for the inflection table of an entry. Exactly one subclass applies to an entry,
    chosen by its part of speech (see `inflection_kind`). Subclasses list their form names in
    `form_names`, in table order.
    """

    kind: str
    form_names: tuple[str, ...] = ()
    forms: dict[str, str]

    def __init__(self, **forms: str) -> None:
        unknown = set(forms) - set(self.form_names)
        if unknown:
            raise ValueError(f"Unknown {self.kind} forms: {', '.join(sorted(unknown))}")
        self.forms = {name: forms.get(name) or PLACEHOLDER for name in self.form_names}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Inflections):
            return NotImplemented
        return self.kind == other.kind and self.forms == other.forms

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(f'{k}={v}' for k, v in self.forms.items())})"

    def __getattr__(self, name: str) -> str:
        forms = self.__dict__.get("forms", {})
        if name in forms:
            return forms[name]
        raise AttributeError(name)

    def to_dict(self) -> dict[str, Any]:
        return {self.kind: dict(self.forms)}

    @classmethod
    def from_dict(cls, data: Any) -> "Inflections":
        data = data if isinstance(data, dict) else {}
        return cls(**{name: _text(data, name) for name in cls.form_names})


class NounForms(Inflections):
    kind = "noun"
    form_names = ("indefiniteSingular", "definiteSingular", "indefinitePlural", "definitePlural")


class VerbForms(Inflections):
    kind = "verb"
    form_names = ("imperative", "infinitive", "present", "past", "supine")


class AdjectiveForms(Inflections):
    kind = "adjective"
    form_names = (
        "positive",
        "comparative",
        "superlative",
        "indefiniteEn",
        "indefiniteEtt",
        "indefinitePlural",
        "definite",
    )


INFLECTION_CLASSES: dict[str, type[Inflections]] = {
    cls.kind: cls for cls in (NounForms, VerbForms, AdjectiveForms)
}


def _has_word(part_of_speech: str, word: str) -> bool:
    return bool(re.search(rf"\b{word}\b", part_of_speech.lower()))


def inflection_kind(part_of_speech: str) -> str | None:
    """
    Returns the inflection branch ("noun", "verb" or "adjective") that applies to a part of
    speech, or None if the word class is not inflected in the table. Whole words are matched, so
    an adverb is not a verb and a pronoun is not a noun.
    """
    if _has_word(part_of_speech, "adjective"):
        return "adjective"
    if _has_word(part_of_speech, "noun"):
        return "noun"
    if _has_word(part_of_speech, "verb"):
        return "verb"
    return None


def parse_inflections(data: Any, part_of_speech: str) -> Inflections | None:
    """Picks the single inflection branch matching the part of speech out of generated data."""
    kind = inflection_kind(part_of_speech)
    if kind is None or not isinstance(data, dict) or not isinstance(data.get(kind), dict):
        return None
    return INFLECTION_CLASSES[kind].from_dict(data[kind])


class LexicalEntry:
    """
    A class representing one sense of a Swedish word, translated into a target language. A word
    looked up in the dictionary usually comes back as several entries, one per sense or part of
    speech, in the order the generator considers most relevant.
    """

    word: str
    ipa: str
    gender: Gender
    part_of_speech: str
    definitions: Definitions
    examples: list[ExampleSentence]
    compounds: list[str]
    inflections: Inflections | None
    grammar_notes: str | None
    target_language: str | None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LexicalEntry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(word={self.word}, part_of_speech={self.part_of_speech}, target_language={self.target_language})"  # noqa: E501

    def __init__(
        self,
        word: str,
        ipa: str,
        gender: Gender,
        part_of_speech: str,
        definitions: Definitions,
        examples: list[ExampleSentence] | None = None,
        compounds: list[str] | None = None,
        inflections: Inflections | None = None,
        grammar_notes: str | None = None,
        target_language: str | None = None,
    ) -> None:
        if not word:
            raise ValueError("Word cannot be empty.")
        self.word = word
        self.ipa = ipa
        self.gender = gender
        self.part_of_speech = part_of_speech or PLACEHOLDER
        self.definitions = definitions
        self.examples = list(examples or [])
        self.compounds = list(compounds or [])
        self.inflections = inflections
        self.grammar_notes = grammar_notes
        self.target_language = target_language

    @property
    def fingerprint(self) -> str:
        return f"{self.word.lower()}:{self.target_language}"

    @property
    def saved_key(self) -> tuple[str, str]:
        return self.word.lower(), self.part_of_speech.lower()

    @property
    def is_dual_role(self) -> bool:
        return _has_word(self.part_of_speech, "adjective") and _has_word(
            self.part_of_speech, "adverb"
        )

    @property
    def display_title(self) -> str:
        """
        For nouns the indefinite singular is preferred over the looked-up form (which may be a
        plural), and is prefixed with its article when the gender is known.
        """
        is_noun = inflection_kind(self.part_of_speech) == "noun"
        base_form = self.word
        if is_noun and isinstance(self.inflections, NounForms):
            if self.inflections.forms["indefiniteSingular"] != PLACEHOLDER:
                base_form = self.inflections.forms["indefiniteSingular"]
        if is_noun and self.gender != Gender.NOT_APPLICABLE:
            return f"{self.gender.value} {base_form}"
        return base_form

    def copy(self) -> "LexicalEntry":
        return copy.deepcopy(self)

    def with_target_language(self, target_language: str) -> "LexicalEntry":
        entry = self.copy()
        entry.target_language = target_language
        return entry

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "word": self.word,
            "ipa": self.ipa,
            "gender": self.gender.value,
            "partOfSpeech": self.part_of_speech,
            "definitions": self.definitions.to_dict(),
            "examples": [example.to_dict() for example in self.examples],
            "compounds": list(self.compounds),
        }
        if self.inflections is not None:
            data["inflections"] = self.inflections.to_dict()
        if self.grammar_notes is not None:
            data["grammarNotes"] = self.grammar_notes
        if self.target_language is not None:
            data["targetLanguage"] = self.target_language
        return data

    @classmethod
    def _kwargs_from_dict(cls, data: dict[str, Any]) -> dict[str, Any]:
        part_of_speech = _text(data, "partOfSpeech")
        examples = data.get("examples") or []
        compounds = data.get("compounds") or []
        grammar_notes = data.get("grammarNotes")
        target_language = data.get("targetLanguage")
        return {
            "word": data.get("word") or "",
            "ipa": _text(data, "ipa"),
            "gender": Gender.parse(data.get("gender")),
            "part_of_speech": part_of_speech,
            "definitions": Definitions.from_dict(data.get("definitions")),
            "examples": [ExampleSentence.from_dict(e) for e in examples if isinstance(e, dict)],
            "compounds": [c for c in compounds if isinstance(c, str) and c != PLACEHOLDER],
            "inflections": parse_inflections(data.get("inflections"), part_of_speech),
            "grammar_notes": grammar_notes if isinstance(grammar_notes, str) else None,
            "target_language": target_language if isinstance(target_language, str) else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LexicalEntry":
        return cls(**cls._kwargs_from_dict(data))


class HistoryRecord(LexicalEntry):
    """A LexicalEntry stamped with the time (milliseconds since the epoch) it was looked up."""

    timestamp: int

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(word={self.word}, target_language={self.target_language}, timestamp={self.timestamp})"  # noqa: E501

    def __init__(self, *args: Any, timestamp: int = 0, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.timestamp = timestamp

    @classmethod
    def from_entry(cls, entry: LexicalEntry, timestamp: int) -> "HistoryRecord":
        return cls.from_dict({**entry.to_dict(), "timestamp": timestamp})

    def to_entry(self) -> LexicalEntry:
        return LexicalEntry.from_dict(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryRecord":
        timestamp = data.get("timestamp")
        return cls(
            **cls._kwargs_from_dict(data),
            timestamp=timestamp if isinstance(timestamp, int) else 0,
        )


class TextHelpResult:
    output: str
    explanation: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextHelpResult):
            return NotImplemented
        return self.output == other.output and self.explanation == other.explanation

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(output={truncate_string(self.output)})"

    def __init__(self, output: str, explanation: str) -> None:
        self.output = output
        self.explanation = explanation

    def sentences(self) -> list[str]:
        """Splits output produced in read mode into its sentences."""
        return [s.strip() for s in self.output.split("|||") if s.strip()]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TextHelpResult":
        return cls(_text(data, "output"), _text(data, "explanation"))


class GrammarPoint:
    topic: str
    explanation_sv: str
    explanation_en: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GrammarPoint):
            return NotImplemented
        return (self.topic, self.explanation_sv, self.explanation_en) == (
            other.topic,
            other.explanation_sv,
            other.explanation_en,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(topic={truncate_string(self.topic)})"

    def __init__(self, topic: str, explanation_sv: str, explanation_en: str) -> None:
        self.topic = topic
        self.explanation_sv = explanation_sv
        self.explanation_en = explanation_en


class VocabularyItem:
    swedish: str
    english: str
    secondary: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VocabularyItem):
            return NotImplemented
        return (self.swedish, self.english, self.secondary) == (
            other.swedish,
            other.english,
            other.secondary,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(swedish={self.swedish}, english={self.english})"

    def __init__(self, swedish: str, english: str, secondary: str) -> None:
        self.swedish = swedish
        self.english = english
        self.secondary = secondary


class ChapterContent:
    """A summary of one textbook chapter with its grammar points and vocabulary."""

    chapter_number: int
    title: str
    summary_sv: str
    summary_en: str
    grammar: list[GrammarPoint]
    vocabulary: list[VocabularyItem]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(chapter_number={self.chapter_number}, title={self.title})"  # noqa: E501

    def __init__(
        self,
        chapter_number: int,
        title: str,
        summary_sv: str,
        summary_en: str,
        grammar: list[GrammarPoint],
        vocabulary: list[VocabularyItem],
    ) -> None:
        self.chapter_number = chapter_number
        self.title = title
        self.summary_sv = summary_sv
        self.summary_en = summary_en
        self.grammar = grammar
        self.vocabulary = vocabulary

    @classmethod
    def from_dict(cls, data: dict[str, Any], chapter_number: int) -> "ChapterContent":
        grammar = [g for g in data.get("grammar") or [] if isinstance(g, dict)]
        vocabulary = [v for v in data.get("vocabulary") or [] if isinstance(v, dict)]
        number = data.get("chapterNumber")
        return cls(
            chapter_number=number if isinstance(number, int) else chapter_number,
            title=_text(data, "title"),
            summary_sv=_text(data, "summarySv"),
            summary_en=_text(data, "summaryEn"),
            grammar=[
                GrammarPoint(_text(g, "topic"), _text(g, "explanationSv"), _text(g, "explanationEn"))
                for g in grammar
            ],
            vocabulary=[
                VocabularyItem(_text(v, "swedish"), _text(v, "english"), _text(v, "secondary"))
                for v in vocabulary
            ],
        )


class LoadingState(enum.Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class LookupResult:
    """The outcome of a dictionary lookup as seen by the caller."""

    status: LoadingState
    entries: list[LexicalEntry]
    error_message: Optional[str]
    from_cache: bool

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(status={self.status.value}, entries={len(self.entries)}, from_cache={self.from_cache})"  # noqa: E501

    def __init__(
        self,
        status: LoadingState,
        entries: list[LexicalEntry] | None = None,
        error_message: str | None = None,
        from_cache: bool = False,
    ) -> None:
        self.status = status
        self.entries = entries or []
        self.error_message = error_message
        self.from_cache = from_cache
