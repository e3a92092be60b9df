import json
import re
from typing import Any

from ordbok.constant import (
    CHAPTER_SCHEMA,
    CHAPTER_SYSTEM_PROMPT,
    CHAPTER_USER_PROMPT,
    HELPER_MODE_INSTRUCTIONS,
    HELPER_SCHEMA,
    HELPER_SYSTEM_PROMPT,
    LOOKUP_SCHEMA,
    LOOKUP_SYSTEM_PROMPT,
    LOOKUP_USER_PROMPT,
    HelperMode,
)
from ordbok.exception import EmptyResponseException, MalformedResponseException
from ordbok.generator import Generator
from ordbok.language_element import ChapterContent, LexicalEntry, TextHelpResult
from ordbok.log import logger
from ordbok.retry import with_retry
from ordbok.sanitizer import sanitize_record

CODE_FENCE_PATTERN = re.compile(r"^\s*```[\w-]*\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)
BRACKET_PAIRS = {"[": "]", "{": "}"}


def strip_code_fences(text: str) -> str:
    match = CODE_FENCE_PATTERN.match(text)
    return match.group(1) if match else text


def find_balanced_span(text: str) -> str | None:
    """
    Returns the first balanced [...] or {...} span in the text, ignoring brackets that appear
    inside JSON string literals, or None if there is no such span.
    """
    for start, char in enumerate(text):
        if char not in BRACKET_PAIRS:
            continue
        stack = [BRACKET_PAIRS[char]]
        in_string = escaped = False
        for end in range(start + 1, len(text)):
            current = text[end]
            if in_string:
                if escaped:
                    escaped = False
                elif current == "\\":
                    escaped = True
                elif current == '"':
                    in_string = False
            elif current == '"':
                in_string = True
            elif current in BRACKET_PAIRS:
                stack.append(BRACKET_PAIRS[current])
            elif current in "]}":
                if current != stack.pop():
                    break
                if not stack:
                    return text[start : end + 1]
    return None


def extract_json(text: str) -> Any:
    """
    Parses the structured part of a generated response. Code fences are removed first; if what is
    left is not a clean JSON array or object, the first balanced bracket span is parsed instead.
    """
    if not text or not text.strip():
        raise EmptyResponseException()
    stripped = strip_code_fences(text.strip()).strip()
    clean = stripped[:1] in BRACKET_PAIRS and stripped[-1:] == BRACKET_PAIRS[stripped[0]]
    span = stripped if clean else find_balanced_span(stripped)
    if span is None:
        raise MalformedResponseException("No JSON found in generated response", raw_text=text)
    try:
        return json.loads(span)
    except json.JSONDecodeError as e:
        if clean and (recovered := find_balanced_span(stripped)) and recovered != span:
            try:
                return json.loads(recovered)
            except json.JSONDecodeError:
                pass
        raise MalformedResponseException(
            f"Could not parse generated response: {e}", raw_text=text
        ) from e


def _entry_records(payload: Any) -> list[dict[str, Any]]:
    """Validates the shape of a parsed lookup response and returns its raw entry records."""
    if isinstance(payload, dict):
        if isinstance(payload.get("entries"), list):
            payload = payload["entries"]
        elif "word" in payload:
            payload = [payload]
        else:
            raise MalformedResponseException("Response object has no entries")
    if not isinstance(payload, list):
        raise MalformedResponseException("Response is not a list of entries")
    for record in payload:
        if not isinstance(record, dict):
            raise MalformedResponseException("Response entry is not an object")
        if not isinstance(record.get("word"), str) or not record["word"].strip():
            raise MalformedResponseException("Response entry has no word")
    return payload


class GeneratorClient:
    """
    A class responsible for turning dictionary requests into prompts for a Generator, and the raw
    text it generates back into clean domain objects. Each request is a single generator call,
    retried with backoff when the generator reports a rate limit. Every string field is sanitized
    before anything is returned, so callers only ever see clean entries.
    """

    generator: Generator
    initial_delay: float
    max_attempts: int

    def __init__(
        self, generator: Generator, max_attempts: int = 2, initial_delay: float = 0.5
    ) -> None:
        self.generator = generator
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay

    async def _generate_json(
        self, prompt: str, system_prompt: str, response_format: dict[str, Any]
    ) -> Any:
        async def attempt() -> Any:
            text = await self.generator.generate(
                prompt,
                response_format=response_format,
                temperature=0,
                system_prompt=system_prompt,
            )
            return extract_json(text)

        return await with_retry(attempt, self.max_attempts, self.initial_delay)

    async def lookup_word(self, word: str, target_language: str) -> list[LexicalEntry]:
        """
        Retrieves every sense of a word, in the order the generator returned them, with secondary
        definitions and examples translated into the target language.
        """
        payload = await self._generate_json(
            LOOKUP_USER_PROMPT.format(word=word, target_language=target_language),
            LOOKUP_SYSTEM_PROMPT,
            LOOKUP_SCHEMA,
        )
        entries = []
        for record in _entry_records(payload):
            clean = sanitize_record(record)
            entry = LexicalEntry.from_dict(clean)
            entry.target_language = target_language
            entries.append(entry)
        logger.debug(f"Generator returned {len(entries)} senses for '{word}' ({target_language})")
        return entries

    async def text_help(
        self, text: str, mode: HelperMode, target_language: str
    ) -> TextHelpResult:
        """Translates, corrects, composes or splits up free text, depending on the mode."""
        mode_instruction = HELPER_MODE_INSTRUCTIONS[mode].format(target_language=target_language)
        payload = await self._generate_json(
            text, HELPER_SYSTEM_PROMPT.format(mode_instruction=mode_instruction), HELPER_SCHEMA
        )
        if not isinstance(payload, dict):
            raise MalformedResponseException("Response is not an object")
        return TextHelpResult.from_dict(payload)

    async def chapter_summary(
        self, chapter_number: int, title: str, target_language: str
    ) -> ChapterContent:
        """Summarizes a textbook chapter with its grammar points and vocabulary."""
        payload = await self._generate_json(
            CHAPTER_USER_PROMPT.format(
                chapter_number=chapter_number, title=title, target_language=target_language
            ),
            CHAPTER_SYSTEM_PROMPT,
            CHAPTER_SCHEMA,
        )
        if not isinstance(payload, dict):
            raise MalformedResponseException("Response is not an object")
        return ChapterContent.from_dict(payload, chapter_number)

    async def close(self) -> None:
        await self.generator.close()


__all__ = ["GeneratorClient", "extract_json", "find_balanced_span", "strip_code_fences"]
