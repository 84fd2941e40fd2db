"""
dictionary.py

Dictionary validators used to weed out invented words produced by the
synthesizer.

- is_known_word(word) answers for a single word and raises
  ValidationUnavailable when the answer cannot be obtained.
- filter_known_words(words) keeps the known words in order; words whose
  status cannot be obtained are assumed valid so guessing never stalls.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional

import requests

from wordlebot.cache import TTLCache
from wordlebot.config import ApiConfig
from wordlebot.errors import ValidationUnavailable

log = logging.getLogger(__name__)


class DictionaryValidator(ABC):
    @abstractmethod
    def is_known_word(self, word: str) -> bool:
        ...

    def filter_known_words(self, words: Iterable[str]) -> List[str]:
        known = []
        for w in words:
            try:
                ok = self.is_known_word(w)
            except ValidationUnavailable as e:
                log.warning("could not validate %s, assuming it is a word: %s", w, e)
                ok = True
            if ok:
                known.append(w)
        return known


class VocabValidator(DictionaryValidator):
    """Offline validator: a word is known iff it is in the given word list."""

    def __init__(self, words: Iterable[str]) -> None:
        self._known = frozenset(w.upper() for w in words)

    def is_known_word(self, word: str) -> bool:
        return word.upper() in self._known

    def __len__(self) -> int:
        return len(self._known)


class _RateLimited(ValidationUnavailable):
    pass


class FreeDictionaryValidator(DictionaryValidator):
    """
    Validator backed by a public dictionary HTTP API.

    200 means the word exists and 404 that it does not. A 429 from the primary
    API retries the word on the fallback API, and the rest of that call goes
    to the fallback. Verdicts are cached with a TTL; assumed-valid answers
    are not cached.

    Lookups run on worker threads, each with its own requests.Session. A
    session passed in is shared by all workers and must only be used for
    stateless GETs.
    """

    def __init__(
        self,
        api: ApiConfig,
        session: Optional[requests.Session] = None,
        cache: Optional[TTLCache] = None,
    ) -> None:
        self.primary_url = api.dictionary_url.rstrip("/")
        self.fallback_url = api.dictionary_fallback_url.rstrip("/")
        self.timeout = api.timeout
        self.batch_size = api.batch_size
        self._shared_session = session
        self._local = threading.local()
        self.cache = cache if cache is not None else TTLCache(api.cache_size, api.cache_ttl)

    def _session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def _lookup(self, word: str, base_url: str) -> bool:
        url = f"{base_url}/{word}"
        try:
            response = self._session().get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ValidationUnavailable(f"dictionary request for {word} failed: {e}") from e
        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        if response.status_code == 429:
            raise _RateLimited(f"dictionary API at {base_url} is rate limiting")
        raise ValidationUnavailable(f"dictionary API returned {response.status_code} for {word}")

    def is_known_word(self, word: str) -> bool:
        key = word.lower()
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        try:
            valid = self._lookup(key, self.primary_url)
        except _RateLimited:
            log.warning("primary dictionary API rate limited, switching to fallback")
            try:
                valid = self._lookup(key, self.fallback_url)
            except _RateLimited as e:
                raise ValidationUnavailable("both dictionary APIs are rate limiting") from e
        self.cache.set(key, valid)
        return valid

    def filter_known_words(self, words: Iterable[str]) -> List[str]:
        words = list(words)
        if not words:
            return []
        self.cache.clean_expired()

        verdicts: Dict[str, bool] = {}
        pending: List[str] = []
        for w in words:
            cached = self.cache.get(w.lower())
            if cached is not None:
                verdicts[w] = cached
            elif w not in pending:
                pending.append(w)

        use_fallback = False
        with ThreadPoolExecutor(max_workers=self.batch_size) as executor:
            for start in range(0, len(pending), self.batch_size):
                batch = pending[start:start + self.batch_size]
                base = self.fallback_url if use_fallback else self.primary_url
                futures = [executor.submit(self._lookup, w.lower(), base) for w in batch]
                for w, future in zip(batch, futures):
                    try:
                        ok = future.result()
                        self.cache.set(w.lower(), ok)
                    except _RateLimited:
                        if not use_fallback:
                            log.warning("switching to fallback dictionary API for remaining words")
                            use_fallback = True
                        ok = self._lookup_assuming_valid(w)
                    except ValidationUnavailable as e:
                        log.warning("could not validate %s, assuming it is a word: %s", w, e)
                        ok = True
                    verdicts[w] = ok

        log.debug("dictionary accepted %d of %d words", sum(verdicts.values()), len(verdicts))
        return [w for w in words if verdicts[w]]

    def _lookup_assuming_valid(self, word: str) -> bool:
        try:
            ok = self._lookup(word.lower(), self.fallback_url)
        except ValidationUnavailable as e:
            log.warning("fallback dictionary failed for %s, assuming it is a word: %s", word, e)
            return True
        self.cache.set(word.lower(), ok)
        return ok
