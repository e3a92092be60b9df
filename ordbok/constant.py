import enum

PLACEHOLDER = "—"
HISTORY_LIMIT = 100
RECENT_WORDS_LIMIT = 10
HISTORY_STORAGE_KEY = "ordbok_history"
SAVED_WORDS_STORAGE_KEY = "ordbok_flashcards"


class PrintColour(enum.Enum):
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    PURPLE = "\033[95m"
    CYAN = "\033[96m"
    RESET = "\033[0m"

    def __str__(self) -> str:
        return self.value


class Language(enum.Enum):
    """Languages the secondary definitions and example sentences can be translated into."""

    CHINESE = "Chinese (Simplified)"
    SPANISH = "Spanish"
    FRENCH = "French"
    GERMAN = "German"
    ARABIC = "Arabic"
    JAPANESE = "Japanese"
    HINDI = "Hindi"
    RUSSIAN = "Russian"
    PORTUGUESE = "Portuguese"
    TURKISH = "Turkish"

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def options() -> list[str]:
        return [v.value for v in Language.__members__.values()]

    @staticmethod
    def from_value(value: str) -> "Language":
        for language in Language:
            if language.value.lower() == value.strip().lower():
                return language
        raise ValueError(f"Unsupported language: {value}")


DEFAULT_TARGET_LANGUAGE = Language.CHINESE


class OpenAIModel(enum.Enum):
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4O = "gpt-4o"

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def options() -> list[str]:
        return [v.value for v in OpenAIModel.__members__.values()]


class HelperMode(enum.Enum):
    TRANSLATE = "translate"
    CORRECT = "correct"
    COMPOSE = "compose"
    READ = "read"

    def __str__(self) -> str:
        return self.value


LOOKUP_SYSTEM_PROMPT = """
You are a Swedish-English dictionary. Provide concise entries, one entry for each distinct sense or
part of speech of the word, most common sense first. NO conversational text. Strictly follow the
JSON schema and respond with a JSON object of the form {"entries": [...]}. IMPORTANT: JSON values
must contain ONLY the word/form, NOT the key name or labels like 'Singular: word'. IPA is phonetic
only. Inflections are single words. Only fill in the inflection block that matches the part of
speech (noun, verb or adjective).
"""

LOOKUP_USER_PROMPT = 'Entry for: "{word}". Translate secondary to {target_language}.'

HELPER_SYSTEM_PROMPT = (
    "You are a Swedish tutor. {mode_instruction} Strictly JSON output with 'output' and "
    "'explanation' keys."
)

HELPER_MODE_INSTRUCTIONS = {
    HelperMode.TRANSLATE: "Translate to English and {target_language}.",
    HelperMode.CORRECT: (
        "Correct Swedish text and explain grammar in English and {target_language}."
    ),
    HelperMode.COMPOSE: (
        "Write a Swedish paragraph about the topic. Provide English and {target_language} "
        "translations."
    ),
    HelperMode.READ: "Break text into sentences for TTS using ||| separator.",
}

CHAPTER_SYSTEM_PROMPT = """
You are a Swedish teacher. Summarize chapters from Rivstart A1+A2. Provide vocabulary with English
and secondary translations. Respond with a JSON object with the keys chapterNumber, title,
summarySv, summaryEn, grammar (a list of objects with topic, explanationSv and explanationEn) and
vocabulary (a list of objects with swedish, english and secondary).
"""

CHAPTER_USER_PROMPT = "Rivstart Chapter {chapter_number}: {title}. Secondary lang: {target_language}."


def _string() -> dict[str, str]:
    return {"type": "string"}


def _forms(*names: str) -> dict:
    return {
        "type": "object",
        "properties": {name: _string() for name in names},
        "required": list(names),
    }


WORD_ITEM_SCHEMA = {
    "type": "object",
    "properties": {
        "word": _string(),
        "ipa": _string(),
        "gender": {"type": "string", "enum": ["en", "ett", "n/a"]},
        "partOfSpeech": _string(),
        "definitions": _forms("english", "secondary"),
        "examples": {"type": "array", "items": _forms("swedish", "english", "secondary")},
        "compounds": {"type": "array", "items": _string()},
        "inflections": {
            "type": "object",
            "properties": {
                "noun": _forms(
                    "indefiniteSingular", "definiteSingular", "indefinitePlural", "definitePlural"
                ),
                "verb": _forms("imperative", "infinitive", "present", "past", "supine"),
                "adjective": _forms(
                    "positive",
                    "comparative",
                    "superlative",
                    "indefiniteEn",
                    "indefiniteEtt",
                    "indefinitePlural",
                    "definite",
                ),
            },
        },
        "grammarNotes": _string(),
    },
    "required": ["word", "ipa", "gender", "partOfSpeech", "definitions", "examples", "compounds"],
}

LOOKUP_SCHEMA = {
    "type": "object",
    "properties": {"entries": {"type": "array", "items": WORD_ITEM_SCHEMA}},
    "required": ["entries"],
}

HELPER_SCHEMA = _forms("output", "explanation")

CHAPTER_SCHEMA = {
    "type": "object",
    "properties": {
        "chapterNumber": {"type": "integer"},
        "title": _string(),
        "summarySv": _string(),
        "summaryEn": _string(),
        "grammar": {"type": "array", "items": _forms("topic", "explanationSv", "explanationEn")},
        "vocabulary": {"type": "array", "items": _forms("swedish", "english", "secondary")},
    },
    "required": ["chapterNumber", "title", "summarySv", "summaryEn", "grammar", "vocabulary"],
}
