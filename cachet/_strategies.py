from __future__ import annotations

import abc
import logging
import typing as tp
from datetime import timedelta

import httpx

from ._directives import date, has_no_cache, has_no_store, lifetime, selecting_headers_match
from ._models import Freshness
from ._utils import BaseClock, Clock, get_safe_url

logger = logging.getLogger("cachet.strategies")

CACHEABLE_METHODS = ("GET", "HEAD")
CACHEABLE_STATUS_CODES = (200, 203, 204, 206, 300, 301, 404, 405, 410, 414, 501)
DEFAULT_LIFETIME = timedelta(hours=24)

__all__ = (
    "AggressiveStrategy",
    "BaseStrategy",
    "CACHEABLE_METHODS",
    "CACHEABLE_STATUS_CODES",
    "RFC7234Strategy",
)


class BaseStrategy(abc.ABC):
    """
    Decides what the cache transport may do with requests and responses.

    The transport asks `cache` before looking anything up in the storage,
    `fresh` when a stored response was found, and `store` when a response
    came back from the network.
    """

    @abc.abstractmethod
    def cache(self, request: httpx.Request) -> bool:
        """Returns True if the request may be served from or stored in the cache."""

    @abc.abstractmethod
    def store(self, response: httpx.Response) -> bool:
        """Returns True if the response (and its `response.request`) may be stored."""

    @abc.abstractmethod
    def fresh(self, response: httpx.Response, original_request: tp.Optional[httpx.Request] = None) -> Freshness:
        """
        Judges a stored response.

        `response.request` is the request currently being handled and
        `original_request` is the one that was stored along with the response.
        """


def _is_cacheable_exchange(request: httpx.Request, response: httpx.Response) -> bool:
    if request.method not in CACHEABLE_METHODS:
        logger.debug(
            (
                f"Considering the resource located at {get_safe_url(request.url)} "
                f"as not storable since the request method ({request.method}) is not cacheable."
            )
        )
        return False

    if response.status_code not in CACHEABLE_STATUS_CODES:
        logger.debug(
            (
                f"Considering the resource located at {get_safe_url(request.url)} "
                f"as not storable since its status code ({response.status_code})"
                " is not in the list of cacheable status codes."
            )
        )
        return False
    return True


class RFC7234Strategy(BaseStrategy):
    """
    The standard caching strategy.

    See also (https://www.rfc-editor.org/rfc/rfc7234).
    """

    def cache(self, request: httpx.Request) -> bool:
        return request.method in CACHEABLE_METHODS and not has_no_store(request.headers)

    def store(self, response: httpx.Response) -> bool:
        """
        Determines whether the response may be stored.

        Mirrors the conditions listed in
        `https://www.rfc-editor.org/rfc/rfc7234#section-3`.
        """
        request = response.request

        if not _is_cacheable_exchange(request, response):
            return False

        # the "no-store" cache directive does not appear in request or response header fields
        if has_no_store(request.headers) or has_no_store(response.headers):
            logger.debug(
                (
                    f"Considering the resource located at {get_safe_url(request.url)} "
                    "as not storable since the no-store directive is present."
                )
            )
            return False

        freshness_lifetime = lifetime(response)
        if freshness_lifetime is None or freshness_lifetime <= timedelta(0):
            logger.debug(
                (
                    f"Considering the resource located at {get_safe_url(request.url)} "
                    "as not storable since it has no positive explicit lifetime."
                )
            )
            return False

        return True

    def fresh(self, response: httpx.Response, original_request: tp.Optional[httpx.Request] = None) -> Freshness:
        """
        Specifies whether the stored response can be used for the current request.

        See also (https://www.rfc-editor.org/rfc/rfc7234#section-4).
        """
        request = response.request
        stored_request_headers = original_request.headers if original_request is not None else None

        # selecting header fields nominated by the stored response match those presented
        if not selecting_headers_match(request, stored_request_headers, response):
            logger.debug(
                (
                    f"Considering the resource located at {get_safe_url(request.url)} "
                    "as invalid for cache use since the vary headers do not match."
                )
            )
            return Freshness.TRANSPARENT

        # neither the presented request nor the stored response contain no-cache
        if has_no_cache(request.headers) or has_no_cache(response.headers):
            logger.debug(
                (
                    f"Considering the resource located at {get_safe_url(request.url)} "
                    "as stale since the no-cache directive is present."
                )
            )
            return Freshness.STALE

        freshness_lifetime = lifetime(response)
        if freshness_lifetime is not None and freshness_lifetime > timedelta(0):
            return Freshness.FRESH

        # revalidation is not supported, so this is final
        return Freshness.STALE


class AggressiveStrategy(BaseStrategy):
    """
    Caches every GET and HEAD response regardless of cache directives.

    :param lifetime: How long a response stays fresh, counted from its Date header.
        Non-positive values and None fall back to one day, defaults to None
    :type lifetime: tp.Optional[tp.Union[timedelta, int, float]], optional
    :param clock: Source of the current time, defaults to None
    :type clock: tp.Optional[BaseClock], optional
    """

    def __init__(
        self,
        lifetime: tp.Optional[tp.Union[timedelta, int, float]] = None,
        clock: tp.Optional[BaseClock] = None,
    ) -> None:
        if isinstance(lifetime, (int, float)):
            lifetime = timedelta(seconds=lifetime)

        self._lifetime = lifetime if lifetime is not None and lifetime > timedelta(0) else DEFAULT_LIFETIME
        self._clock = clock if clock is not None else Clock()

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def cache(self, request: httpx.Request) -> bool:
        return request.method in CACHEABLE_METHODS

    def store(self, response: httpx.Response) -> bool:
        return _is_cacheable_exchange(response.request, response)

    def fresh(self, response: httpx.Response, original_request: tp.Optional[httpx.Request] = None) -> Freshness:
        created_at = date(response.headers)

        if created_at is not None:
            elapsed = timedelta(seconds=self._clock.now() - created_at.timestamp())
            if elapsed < self._lifetime:
                return Freshness.FRESH

        return Freshness.TRANSPARENT
