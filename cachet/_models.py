import enum

__all__ = ("Freshness", "CacheEvent")


class Freshness(enum.Enum):
    """
    Verdict on whether a stored response may be used for the current request.

    FRESH: the stored response may be returned without contacting the origin.
    STALE: the stored response must not be used as is; the request is forwarded.
    TRANSPARENT: the cache must be bypassed, e.g. the selecting headers differ.
    """

    FRESH = "fresh"
    STALE = "stale"
    TRANSPARENT = "transparent"

    def __str__(self) -> str:
        return self.value


class CacheEvent(enum.Enum):
    """Outcomes reported to the transport observer."""

    BYPASS = "bypass"
    MISS = "miss"
    HIT = "hit"
    STALE = "stale"
    TRANSPARENT = "transparent"
    STORED = "stored"
    NOT_STORED = "not_stored"
    LOAD_FAILED = "load_failed"
    STORE_FAILED = "store_failed"

    def __str__(self) -> str:
        return self.value
