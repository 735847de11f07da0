import typing as tp

import httpx

from .._config import DEFAULT
from .._serializers import BaseSerializer
from .._strategies import BaseStrategy
from ._storages import AsyncBaseStorage
from ._transports import AsyncCacheTransport, KeyGenerator, Observer

__all__ = ("AsyncCacheClient",)


class AsyncCacheClient(httpx.AsyncClient):
    def __init__(
        self,
        *args: tp.Any,
        storage: AsyncBaseStorage = DEFAULT,
        strategy: BaseStrategy = DEFAULT,
        serializer: BaseSerializer = DEFAULT,
        key_generator: KeyGenerator = DEFAULT,
        observer: tp.Optional[Observer] = None,
        **kwargs: tp.Any,
    ):
        self._storage = storage
        self._strategy = strategy
        self._serializer = serializer
        self._key_generator = key_generator
        self._observer = observer
        super().__init__(*args, **kwargs)

    def _wrap(self, transport: httpx.AsyncBaseTransport) -> AsyncCacheTransport:
        return AsyncCacheTransport(
            transport=transport,
            storage=self._storage,
            strategy=self._strategy,
            serializer=self._serializer,
            key_generator=self._key_generator,
            observer=self._observer,
        )

    def _init_transport(self, *args, **kwargs) -> AsyncCacheTransport:  # type: ignore
        _transport = super()._init_transport(*args, **kwargs)
        return self._wrap(_transport)

    def _init_proxy_transport(self, *args, **kwargs) -> AsyncCacheTransport:  # type: ignore
        _transport = super()._init_proxy_transport(*args, **kwargs)  # pragma: no cover
        return self._wrap(_transport)  # pragma: no cover
