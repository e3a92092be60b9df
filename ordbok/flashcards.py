import logging
import os

from genanki import Deck as AnkiDeck
from genanki import Model as AnkiModel
from genanki import Note as AnkiNote
from genanki import Package as AnkiPackage
from gtts import gTTS

from ordbok.constant import PLACEHOLDER
from ordbok.language_element import LexicalEntry
from ordbok.log import logger

model = AnkiModel(
    1607392319,
    "Swedish dictionary flashcard model",
    fields=[
        {"name": "deck_id"},
        {"name": "word"},
        {"name": "display_title"},
        {"name": "part_of_speech"},
        {"name": "definition_html"},
        {"name": "source_sentence_html"},
        {"name": "target_sentence_html"},
    ],
    templates=[
        {
            "name": "Card 1",
            "qfmt": "<div style='text-align:center;'><span style='font-size:20px; font-weight:bold'>{{display_title}}</span> <span style='color:gray;'>({{part_of_speech}})</span></div><br><div style='font-size:18px; text-align:center;'>{{source_sentence_html}}</div>",  # noqa: E501
            "afmt": "{{FrontSide}}<hr><div style='font-size:18px; font-weight:bold; text-align:center;'>{{definition_html}}</div><br><div style='font-size:18px; text-align:center;'>{{target_sentence_html}}</div>",  # noqa: E501
        }
    ],
)


class AudioAnkiNote(AnkiNote):  # type: ignore
    """A genanki note that carries the audio files it refers to."""

    audio_filepaths: list[str]

    def __init__(self, *args, audio_filepaths: list[str] | None = None, **kwargs) -> None:  # type: ignore  # noqa: E501
        super().__init__(*args, **kwargs)
        self.audio_filepaths = audio_filepaths or []


class FlashcardExporter:
    """
    A class responsible for turning saved dictionary entries into an Anki package. Each entry
    becomes one note, showing the word and its first example sentence on the front and the
    definitions and translated example on the back.
    """

    audio: bool
    audio_dir: str
    deck_id: int

    def __init__(self, deck_id: int, audio: bool = False, audio_dir: str = ".") -> None:
        self.deck_id = deck_id
        self.audio = audio
        self.audio_dir = audio_dir

    def _definition_html(self, entry: LexicalEntry) -> str:
        return f"{entry.definitions.english}<br><span style='color: gray'>{entry.definitions.secondary}</span>"  # noqa: E501

    def _audio_filepath(self, entry: LexicalEntry) -> str:
        filename = f"audio-{self.deck_id}-{entry.word}-{entry.part_of_speech}.mp3"
        return os.path.join(self.audio_dir, filename.replace(" ", "_").replace("/", "_"))

    def _source_sentence_html(self, entry: LexicalEntry) -> tuple[str, list[str]]:
        """
        Returns the first (canonical) example sentence, voiced if audio is enabled, along with the
        audio files the note refers to.
        """
        if not entry.examples:
            return "", []
        sentence = entry.examples[0].swedish
        if not self.audio or sentence == PLACEHOLDER:
            return sentence, []
        logging.disable(logging.CRITICAL)
        try:
            audio_filepath = self._audio_filepath(entry)
            gTTS(text=sentence, lang="sv").save(audio_filepath)
        finally:
            logging.disable(logging.NOTSET)
        return f"{sentence} [sound:{os.path.basename(audio_filepath)}]", [audio_filepath]

    def _target_sentence_html(self, entry: LexicalEntry) -> str:
        if not entry.examples:
            return ""
        example = entry.examples[0]
        return f"{example.english}<br><span style='color: gray'>{example.secondary}</span>"

    def create_note(self, entry: LexicalEntry) -> AnkiNote:
        """Creates an AnkiNote object from a given LexicalEntry object."""
        source_sentence_html, audio_filepaths = self._source_sentence_html(entry)
        field_dict = {
            "deck_id": str(self.deck_id),
            "word": entry.word,
            "display_title": entry.display_title,
            "part_of_speech": entry.part_of_speech,
            "definition_html": self._definition_html(entry),
            "source_sentence_html": source_sentence_html,
            "target_sentence_html": self._target_sentence_html(entry),
        }
        if self.audio:
            return AudioAnkiNote(
                model=model,
                fields=list(field_dict.values()),
                audio_filepaths=audio_filepaths,
            )
        return AnkiNote(model=model, fields=list(field_dict.values()))

    def export(self, entries: list[LexicalEntry], output_path: str, deck_name: str) -> int:
        """Writes an Anki package containing one note per entry and returns the note count."""
        deck = AnkiDeck(self.deck_id, deck_name)
        media_files: list[str] = []
        for entry in entries:
            note = self.create_note(entry)
            deck.add_note(note)
            if isinstance(note, AudioAnkiNote):
                media_files.extend(note.audio_filepaths)
        logger.info(f"Creating Anki deck '{deck_name}' (ID {self.deck_id}) with {len(entries)} notes")
        AnkiPackage(deck, media_files=media_files).write_to_file(output_path)
        return len(entries)


__all__ = ["AudioAnkiNote", "FlashcardExporter", "model"]
