import asyncio
import hashlib
import os

from gtts import gTTS

from ordbok.log import logger


class Speaker:
    """
    Reads Swedish text aloud by synthesizing it to an mp3 file with gTTS. Only one utterance is
    in flight at a time: starting a new one cancels the previous one.
    """

    lang: str
    output_dir: str
    slow: bool
    _current: "asyncio.Task[str] | None"

    def __init__(self, output_dir: str, lang: str = "sv", slow: bool = False) -> None:
        self.output_dir = output_dir
        self.lang = lang
        self.slow = slow
        self._current = None

    def audio_filepath(self, text: str) -> str:
        digest = hashlib.sha1(text.encode("utf-8")).hexdigest()[:16]
        return os.path.join(self.output_dir, f"utterance-{self.lang}-{digest}.mp3")

    def _save(self, text: str, filepath: str) -> None:
        os.makedirs(self.output_dir, exist_ok=True)
        gTTS(text=text, lang=self.lang, slow=self.slow).save(filepath)

    async def _synthesize(self, text: str) -> str:
        filepath = self.audio_filepath(text)
        if not os.path.exists(filepath):
            await asyncio.to_thread(self._save, text, filepath)
        logger.debug(f"Speaking '{text}' from {filepath}")
        return filepath

    def speak(self, text: str) -> "asyncio.Task[str]":
        """Cancels any utterance in progress and starts speaking the given text."""
        self.stop()
        self._current = asyncio.ensure_future(self._synthesize(text))
        return self._current

    def stop(self) -> None:
        if self._current is not None and not self._current.done():
            self._current.cancel()
        self._current = None


__all__ = ["Speaker"]
