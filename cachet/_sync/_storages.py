from __future__ import annotations

import logging
import typing as tp

import threading

logger = logging.getLogger("cachet.storages")

MAX_KEY = 2**64

__all__ = ("BaseStorage", "InMemoryStorage")


def _check_entry(key: int, value: tp.Optional[bytes] = None) -> None:
    if not isinstance(key, int) or isinstance(key, bool):
        raise TypeError(f"Cache keys must be integers, got {type(key).__name__}.")
    if not 0 <= key < MAX_KEY:
        raise ValueError(f"Cache keys must fit in 64 bits, got {key}.")
    if value is not None and not isinstance(value, bytes):
        raise TypeError(f"Cache entries must be bytes, got {type(value).__name__}.")


class BaseStorage:
    """
    Persists serialized responses by their 64-bit key.

    Implementations must be safe to call concurrently. A missing entry
    is reported by returning None from `load`, not by raising.
    """

    def store(self, key: int, value: bytes) -> None:
        raise NotImplementedError()

    def load(self, key: int) -> tp.Optional[bytes]:
        raise NotImplementedError()

    def close(self) -> None:
        return


class InMemoryStorage(BaseStorage):
    """
    A simple in-memory storage.

    Entries are kept verbatim and are never evicted, so the memory
    grows with every distinct key.
    """

    def __init__(self) -> None:
        self._cache: tp.Dict[int, bytes] = {}
        self._lock = threading.Lock()

    def store(self, key: int, value: bytes) -> None:
        """
        Stores the serialized response in the cache.

        :param key: Hashed value of the HTTP method and URL
        :type key: int
        :param value: The serialized response
        :type value: bytes
        """

        _check_entry(key, value)

        with self._lock:
            self._cache[key] = value
        logger.debug(f"Stored {len(value)} bytes under the key {key:#018x}.")

    def load(self, key: int) -> tp.Optional[bytes]:
        """
        Retrieves the serialized response from the cache using its key.

        :param key: Hashed value of the HTTP method and URL
        :type key: int
        :return: The serialized response, or None when nothing was stored.
        :rtype: tp.Optional[bytes]
        """

        _check_entry(key)

        with self._lock:
            return self._cache.get(key)

    def __len__(self) -> int:
        return len(self._cache)
