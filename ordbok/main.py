import argparse
import asyncio
import os
import random

from setuptools_scm import get_version

from ordbok.client import GeneratorClient
from ordbok.config import Settings
from ordbok.constant import HelperMode, Language, OpenAIModel
from ordbok.constant import PrintColour as PC
from ordbok.dictionary import Dictionary
from ordbok.flashcards import FlashcardExporter
from ordbok.generator import GeneratorFactory
from ordbok.language_element import LexicalEntry, LoadingState
from ordbok.log import DEBUG, logger
from ordbok.speech import Speaker
from ordbok.storage import Storage


def valid_output_anki_package_path(path: str) -> str:
    directory = os.path.dirname(path) or "."
    if not os.path.isdir(directory):  # Check if the directory of the file exists
        raise argparse.ArgumentTypeError(f"Directory {directory} does not exist.")

    if os.path.isdir(path):  # Check if the path is not a directory
        raise argparse.ArgumentTypeError(f"{path} is a directory.")

    if not path.lower().endswith(".apkg"):  # Check if the file has a .apkg extension
        raise argparse.ArgumentTypeError("The file must have a .apkg extension")

    return path


def valid_language(value: str) -> Language:
    try:
        return Language.from_value(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def format_entry(entry: LexicalEntry, index: int | None = None, saved: bool = False) -> str:
    """Renders an entry as coloured text for the terminal."""
    prefix = f"{PC.PURPLE}[{index}]{PC.RESET} " if index is not None else ""
    star = f" {PC.YELLOW}*{PC.RESET}" if saved else ""
    lines = [
        f"{prefix}{PC.CYAN}{entry.display_title}{PC.RESET} /{entry.ipa}/ ({entry.part_of_speech}){star}",  # noqa: E501
        f"    {PC.GREEN}English:{PC.RESET} {entry.definitions.english}",
        f"    {PC.GREEN}{entry.target_language}:{PC.RESET} {entry.definitions.secondary}",
    ]
    for example in entry.examples:
        lines.append(f"    - {example.swedish} / {example.english} / {example.secondary}")
    if entry.inflections is not None:
        forms = ", ".join(f"{k}: {v}" for k, v in entry.inflections.forms.items())
        lines.append(f"    {PC.BLUE}{entry.inflections.kind}:{PC.RESET} {forms}")
    if entry.compounds:
        lines.append(f"    {PC.BLUE}compounds:{PC.RESET} {', '.join(entry.compounds)}")
    if entry.grammar_notes:
        lines.append(f"    {PC.BLUE}note:{PC.RESET} {entry.grammar_notes}")
    return "\n".join(lines)


async def look_up_words(
    dictionary: Dictionary,
    words: list[str],
    target_language: Language,
    save: bool = False,
    speaker: Speaker | None = None,
) -> int:
    """
    Looks up each word concurrently, printing results as they arrive. Returns the number of words
    that could not be looked up.
    """

    async def look_up(word: str):  # type: ignore[no-untyped-def]
        return word, await dictionary.lookup(word, target_language.value)

    failures = 0
    tasks = [asyncio.create_task(look_up(word)) for word in words]
    for completed_task in asyncio.as_completed(tasks):
        word, result = await completed_task
        if result.status == LoadingState.ERROR:
            failures += 1
            logger.error(f"Could not look up '{word}': {result.error_message}")
            continue
        source = "cache" if result.from_cache else "generator"
        logger.info(f"Found {len(result.entries)} senses for '{word}' ({source})")
        if save and result.entries:
            dictionary.toggle_saved(result.entries[0])
        for i, entry in enumerate(result.entries, 1):
            print(format_entry(entry, i if len(result.entries) > 1 else None, dictionary.is_saved(entry)))  # noqa: E501
        if speaker is not None and result.entries:
            first = result.entries[0]
            text = first.examples[0].swedish if first.examples else first.word
            filepath = await speaker.speak(text)
            logger.info(f"Spoke '{text}' to {filepath}")
    return failures


async def run(args: argparse.Namespace, settings: Settings) -> int:
    storage = Storage(args.storage_dir or settings.storage_dir)
    target_language: Language = args.language_to or settings.target_language
    client = None
    if args.words or args.text or args.chapter:
        generator = GeneratorFactory.create_generator(
            "openai", model=args.model or settings.model, api_key=settings.api_key
        )
        client = GeneratorClient(generator)
    dictionary = Dictionary.from_storage(client, storage)
    failures = 0
    try:
        if args.clear_history:
            dictionary.clear_history()
            logger.info("History cleared")
        if args.delete_saved:
            dictionary.delete_saved(args.delete_saved)
            logger.info(f"Removed '{args.delete_saved}' from saved words")
        if args.words:
            speaker = Speaker(os.path.join(storage.directory, "audio")) if args.speak else None
            failures += await look_up_words(
                dictionary, args.words, target_language, args.save, speaker
            )
        if args.text and client is not None:
            result = await client.text_help(args.text, args.mode, target_language.value)
            if args.mode == HelperMode.READ:
                for i, sentence in enumerate(result.sentences(), 1):
                    print(f"{PC.PURPLE}[{i}]{PC.RESET} {sentence}")
            else:
                print(result.output)
            print(f"{PC.GREEN}{result.explanation}{PC.RESET}")
        if args.chapter and client is not None:
            chapter = await client.chapter_summary(args.chapter, args.title, target_language.value)
            print(f"{PC.CYAN}Chapter {chapter.chapter_number}: {chapter.title}{PC.RESET}")
            print(chapter.summary_sv)
            print(chapter.summary_en)
            for point in chapter.grammar:
                print(f"  {PC.BLUE}{point.topic}{PC.RESET}: {point.explanation_en}")
            for item in chapter.vocabulary:
                print(f"  - {item.swedish} / {item.english} / {item.secondary}")
        if args.recent:
            for word in dictionary.recent_words():
                record = dictionary.history.latest(word)
                language = record.target_language if record else ""
                print(f"{word} {PC.PURPLE}({language}){PC.RESET}")
        if args.history:
            for record in dictionary.history.records:
                print(format_entry(record))
        if args.saved:
            for entry in dictionary.saved_words.entries:
                print(format_entry(entry, saved=True))
        if args.export_apkg:
            deck_id = random.randint(1_000_000_000, 5_000_000_000)
            exporter = FlashcardExporter(deck_id=deck_id, audio=args.audio)
            count = exporter.export(
                dictionary.saved_words.entries, args.export_apkg, args.deck_name
            )
            logger.info(f"Exported {count} saved words to {args.export_apkg}")
    finally:
        if client is not None:
            await client.close()
    return failures


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Swedish dictionary backed by a text generator. Look up words, get help with Swedish text, and keep a history and a list of saved words."  # noqa: E501
    )

    # Lookup arguments
    lookup_group = parser.add_argument_group(title="Lookup arguments")
    lookup_group.add_argument("--words", nargs="+", default=[], help="Swedish words to look up")
    lookup_group.add_argument(
        "-lt",
        "--language-to",
        type=valid_language,
        default=None,
        help=f"Language to translate secondary definitions to. Options are: {', '.join(Language.options())}",  # noqa: E501
    )
    lookup_group.add_argument(
        "--save", action="store_true", help="Toggle the first sense of each looked up word as saved"
    )
    lookup_group.add_argument(
        "--speak",
        action="store_true",
        help="Read the first example sentence of each looked up word aloud (saved as mp3)",
    )

    # AI helper arguments
    helper_group = parser.add_argument_group(title="AI helper arguments")
    helper_group.add_argument("--text", type=str, default="", help="Text to get help with")
    helper_group.add_argument(
        "--mode",
        type=HelperMode,
        default=HelperMode.TRANSLATE,
        choices=list(HelperMode),
        help="What to do with the text. Defaults to translate",
    )

    # Chapter arguments
    chapter_group = parser.add_argument_group(title="Chapter arguments")
    chapter_group.add_argument("--chapter", type=int, default=0, help="Chapter number to summarize")
    chapter_group.add_argument("--title", type=str, default="", help="Title of the chapter")

    # Library arguments
    library_group = parser.add_argument_group(title="Library arguments")
    library_group.add_argument("--history", action="store_true", help="Show lookup history")
    library_group.add_argument("--recent", action="store_true", help="Show recently looked up words")
    library_group.add_argument("--clear-history", action="store_true", help="Clear lookup history")
    library_group.add_argument("--saved", action="store_true", help="Show saved words")
    library_group.add_argument(
        "--delete-saved", type=str, default="", help="Remove a word from the saved words"
    )
    library_group.add_argument(
        "--export-apkg",
        type=valid_output_anki_package_path,
        default=None,
        help="Path to output Anki package (.apkg) file containing the saved words",
    )
    library_group.add_argument(
        "--deck-name", type=str, default="Ordbok flashcards", help="Name of the exported deck"
    )
    library_group.add_argument(
        "--audio", action="store_true", help="Add example sentence audio to exported flashcards"
    )

    # Generator arguments
    generator_group = parser.add_argument_group(title="Generator arguments")
    generator_group.add_argument(
        "--model",
        type=OpenAIModel,
        default=None,
        choices=list(OpenAIModel),
        help=f"OpenAI model to use. Options are: {', '.join(OpenAIModel.options())}",
    )

    # Miscellaneous arguments
    misc_group = parser.add_argument_group(title="Miscellaneous arguments")
    misc_group.add_argument(
        "--storage-dir", type=str, default=None, help="Directory holding history and saved words"
    )
    misc_group.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    misc_group.add_argument(
        "--version",
        action="version",
        version=f"ordbok {get_version(fallback_version='0.0.0')}",
        help="Show version number and exit",
    )

    args = parser.parse_args()

    if args.verbose:
        logger.setLevel(DEBUG)

    if args.chapter and not args.title:
        parser.error("--chapter requires --title")

    try:
        settings = Settings()
    except Exception as e:
        logger.error(e)
        exit(1)

    try:
        failures = asyncio.run(run(args, settings))
    except Exception as e:
        logger.error(e)
        exit(1)
    if failures:
        exit(1)


if __name__ == "__main__":
    main()
