import asyncio

from ordbok.cache import LookupCache, fingerprint
from ordbok.client import GeneratorClient
from ordbok.history import HistoryLedger, now_ms
from ordbok.language_element import LexicalEntry, LoadingState, LookupResult
from ordbok.log import logger
from ordbok.saved import SavedWordSet
from ordbok.storage import Storage

DEFAULT_ERROR_MESSAGE = "Failed to connect. Please try again."


class Dictionary:
    """
    A class responsible for providing entries for words. It does this by first checking if it
    already has entries for a given word and target language, and if not, using a GeneratorClient
    to retrieve them. Retrieved entries are cached for the session and merged into the lookup
    history, which is persisted along with the saved words if a Storage is attached.
    """

    cache: LookupCache
    client: GeneratorClient | None
    history: HistoryLedger
    saved_words: SavedWordSet
    storage: Storage | None
    _pending: dict[str, "asyncio.Task[list[LexicalEntry]]"]

    def __init__(
        self,
        client: GeneratorClient | None = None,
        cache: LookupCache | None = None,
        history: HistoryLedger | None = None,
        saved_words: SavedWordSet | None = None,
        storage: Storage | None = None,
    ) -> None:
        self.client = client
        self.cache = cache if cache is not None else LookupCache()
        self.history = history if history is not None else HistoryLedger()
        self.saved_words = saved_words if saved_words is not None else SavedWordSet()
        self.storage = storage
        self._pending = {}

    @classmethod
    def from_storage(cls, client: GeneratorClient | None, storage: Storage) -> "Dictionary":
        """Creates a Dictionary hydrated from storage, with its cache pre-warmed from history."""
        history = HistoryLedger.from_dicts(storage.history.load())
        saved_words = SavedWordSet.from_dicts(storage.saved_words.load())
        logger.debug(
            f"Loaded {len(history)} history records and {len(saved_words)} saved words from {storage.directory}"  # noqa: E501
        )
        return cls(
            client=client,
            cache=LookupCache.from_history(history.records),
            history=history,
            saved_words=saved_words,
            storage=storage,
        )

    async def _retrieve(self, word: str, target_language: str) -> list[LexicalEntry]:
        assert self.client is not None
        entries = await self.client.lookup_word(word, target_language)
        entries = [entry.with_target_language(target_language) for entry in entries]
        key = fingerprint(word, target_language)
        # Commit cache and history together, once the whole response is clean
        self.cache.put(key, entries)
        if entries:
            self.history.record(entries, observed_at=now_ms())
            self.save_history()
        return entries

    async def lookup(self, word: str, target_language: str) -> LookupResult:
        """
        Returns the entries for a word in a target language. Cached entries are returned without a
        remote call, and concurrent lookups of the same word and language share one request. Any
        failure is reported through the result rather than raised, and leaves the cache and
        history untouched.
        """
        query = word.strip().lower()
        if not query:
            return LookupResult(LoadingState.IDLE)
        key = fingerprint(query, target_language)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return LookupResult(LoadingState.SUCCESS, cached, from_cache=True)
        if self.client is None:
            return LookupResult(LoadingState.ERROR, error_message="No generator configured.")

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._retrieve(word.strip(), target_language))
            self._pending[key] = task
            task.add_done_callback(lambda _: self._pending.pop(key, None))
        else:
            logger.debug(f"Joining in-flight lookup for {key}")
        try:
            entries = await asyncio.shield(task)
        except Exception as e:
            logger.error(f"Lookup error for '{word}': {e}")
            return LookupResult(LoadingState.ERROR, error_message=str(e) or DEFAULT_ERROR_MESSAGE)
        return LookupResult(LoadingState.SUCCESS, [entry.copy() for entry in entries])

    def recent_words(self) -> list[str]:
        return self.history.recent_words()

    def clear_history(self) -> None:
        self.history.clear()
        self.cache.clear()
        self.save_history()

    def is_saved(self, entry: LexicalEntry) -> bool:
        return self.saved_words.contains(entry)

    def toggle_saved(self, entry: LexicalEntry) -> list[LexicalEntry]:
        entries = self.saved_words.toggle(entry)
        self.save_saved_words()
        return entries

    def delete_saved(self, word: str) -> list[LexicalEntry]:
        entries = self.saved_words.remove_word(word)
        self.save_saved_words()
        return entries

    def save_history(self) -> None:
        if self.storage is None:
            return
        try:
            self.storage.history.save(self.history.to_dicts())
        except OSError as e:
            logger.warning(f"Could not save history to {self.storage.history.path}: {e}")

    def save_saved_words(self) -> None:
        if self.storage is None:
            return
        try:
            self.storage.saved_words.save(self.saved_words.to_dicts())
        except OSError as e:
            logger.warning(f"Could not save saved words to {self.storage.saved_words.path}: {e}")


__all__ = ["DEFAULT_ERROR_MESSAGE", "Dictionary"]
