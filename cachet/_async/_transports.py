from __future__ import annotations

import logging
import types
import typing as tp
from collections.abc import Callable

import httpx

from .._config import DEFAULT, resolve_option
from .._models import CacheEvent, Freshness
from .._serializers import BaseSerializer, JSONSerializer
from .._strategies import BaseStrategy, RFC7234Strategy
from .._utils import generate_key, get_safe_url
from ._storages import AsyncBaseStorage, AsyncInMemoryStorage

if tp.TYPE_CHECKING:  # pragma: no cover
    from typing_extensions import Self

logger = logging.getLogger("cachet.transport")

KeyGenerator = tp.Callable[[httpx.Request], int]
Observer = tp.Callable[[CacheEvent, httpx.Request], None]

__all__ = ("AsyncCacheTransport",)


class AsyncCacheTransport(httpx.AsyncBaseTransport):
    """
    An HTTPX Transport that supports HTTP caching.

    Every option may be omitted to get its default; passing None explicitly
    raises `ConfigurationError`.

    :param transport: `Transport` that our class wraps in order to add an HTTP Cache layer on top of,
        defaults to `httpx.AsyncHTTPTransport()`
    :type transport: httpx.AsyncBaseTransport
    :param storage: Storage that keeps the serialized responses, defaults to `AsyncInMemoryStorage()`
    :type storage: AsyncBaseStorage
    :param strategy: Strategy that decides what may be cached, defaults to `RFC7234Strategy()`
    :type strategy: BaseStrategy
    :param serializer: Serializer that turns responses into storable bytes, defaults to `JSONSerializer()`
    :type serializer: BaseSerializer
    :param key_generator: Callable deriving the 64-bit cache key of a request, defaults to `generate_key`
    :type key_generator: tp.Callable[[httpx.Request], int]
    :param observer: Callable notified of every cache outcome, defaults to None
    :type observer: tp.Optional[tp.Callable[[CacheEvent, httpx.Request], None]]
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport = DEFAULT,
        storage: AsyncBaseStorage = DEFAULT,
        strategy: BaseStrategy = DEFAULT,
        serializer: BaseSerializer = DEFAULT,
        key_generator: KeyGenerator = DEFAULT,
        observer: tp.Optional[Observer] = None,
    ) -> None:
        self._transport = resolve_option("transport", transport, httpx.AsyncHTTPTransport, httpx.AsyncBaseTransport)
        self._storage = resolve_option("storage", storage, AsyncInMemoryStorage, AsyncBaseStorage)
        self._strategy = resolve_option("strategy", strategy, RFC7234Strategy, BaseStrategy)
        self._serializer = resolve_option("serializer", serializer, JSONSerializer, BaseSerializer)
        self._key_generator = resolve_option("key_generator", key_generator, lambda: generate_key, Callable)
        self._observer = observer

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """
        Handles HTTP requests while also implementing HTTP caching.

        :param request: An HTTP request
        :type request: httpx.Request
        :return: An HTTP response
        :rtype: httpx.Response
        """

        if not self._strategy.cache(request):
            logger.debug(f"Bypassing the cache for the resource located at {get_safe_url(request.url)}.")
            self._notify(CacheEvent.BYPASS, request)
            response = await self._transport.handle_async_request(request)
            response.extensions["from_cache"] = False  # type: ignore[index]
            return response

        key = self._key_generator(request)
        stored_data = await self._load(key, request)

        if stored_data is not None:
            stored_response, stored_request = stored_data
            stored_response.request = request

            freshness = self._strategy.fresh(stored_response, stored_request)

            if freshness is Freshness.FRESH:
                logger.debug(f"Using the stored response for the resource located at {get_safe_url(request.url)}.")
                self._notify(CacheEvent.HIT, request)
                stored_response.extensions["from_cache"] = True  # type: ignore[index]
                return stored_response

            logger.debug(
                f"Discarding the stored response for the resource located at {get_safe_url(request.url)} "
                f"since it is {freshness}."
            )
            self._notify(CacheEvent.STALE if freshness is Freshness.STALE else CacheEvent.TRANSPARENT, request)
        else:
            self._notify(CacheEvent.MISS, request)

        response = await self._transport.handle_async_request(request)
        response.request = request

        if not self._strategy.store(response):
            self._notify(CacheEvent.NOT_STORED, request)
            response.extensions["from_cache"] = False  # type: ignore[index]
            return response

        assert isinstance(response.stream, tp.AsyncIterable)
        content = b"".join([chunk async for chunk in response.stream])
        await response.aclose()

        buffered_response = httpx.Response(
            status_code=response.status_code,
            headers=response.headers,
            stream=httpx.ByteStream(content),
            request=request,
            extensions={**response.extensions, "from_cache": False},
        )

        await self._store(key, buffered_response, request)
        return buffered_response

    async def _load(self, key: int, request: httpx.Request) -> tp.Optional[tp.Tuple[httpx.Response, httpx.Request]]:
        try:
            data = await self._storage.load(key)
            if data is None:
                return None
            return self._serializer.loads(data)
        except Exception:
            logger.warning(
                f"Could not load the stored response for the resource located at {get_safe_url(request.url)}, "
                "treating it as a cache miss.",
                exc_info=True,
            )
            self._notify(CacheEvent.LOAD_FAILED, request)
            return None

    async def _store(self, key: int, response: httpx.Response, request: httpx.Request) -> None:
        try:
            await self._storage.store(key, self._serializer.dumps(response, request))
        except Exception:
            logger.warning(
                f"Could not store the response for the resource located at {get_safe_url(request.url)}.",
                exc_info=True,
            )
            self._notify(CacheEvent.STORE_FAILED, request)
            return

        logger.debug(f"Stored the response for the resource located at {get_safe_url(request.url)}.")
        self._notify(CacheEvent.STORED, request)

    def _notify(self, event: CacheEvent, request: httpx.Request) -> None:
        if self._observer is None:
            return

        try:
            self._observer(event, request)
        except Exception:
            logger.warning(
                f"The cache observer failed on the {event} event for the resource located at "
                f"{get_safe_url(request.url)}.",
                exc_info=True,
            )

    async def aclose(self) -> None:
        await self._storage.aclose()
        await self._transport.aclose()

    async def __aenter__(self) -> "Self":
        return self

    async def __aexit__(
        self,
        exc_type: tp.Optional[tp.Type[BaseException]] = None,
        exc_value: tp.Optional[BaseException] = None,
        traceback: tp.Optional[types.TracebackType] = None,
    ) -> None:
        await self.aclose()
