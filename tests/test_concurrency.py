import threading
from concurrent.futures import ThreadPoolExecutor

import httpx

import cachet


class CountingTransport(httpx.BaseTransport):
    def __init__(self) -> None:
        self.calls = 0
        self._lock = threading.Lock()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.calls += 1
        return httpx.Response(200, headers=[("Cache-Control", "max-age=3600")], content=request.url.path.encode())


def test_inmemorystorage_concurrent_access():
    storage = cachet.InMemoryStorage()

    def worker(key: int) -> bytes:
        storage.store(key, str(key).encode())
        loaded = storage.load(key)
        assert loaded is not None
        return loaded

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(worker, range(200)))

    assert results == [str(key).encode() for key in range(200)]
    assert len(storage) == 200


def test_transport_shared_between_threads():
    transport = CountingTransport()
    cache_transport = cachet.CacheTransport(transport=transport)
    paths = [f"/{index % 10}" for index in range(100)]

    def fetch(path: str) -> bytes:
        response = cache_transport.handle_request(httpx.Request("GET", f"https://www.example.com{path}"))
        return response.read()

    fetch("/warmup")
    with ThreadPoolExecutor(max_workers=8) as executor:
        bodies = list(executor.map(fetch, paths))

    assert bodies == [path.encode() for path in paths]
    # Concurrent misses for the same key may each reach the network.
    assert 10 <= transport.calls - 1 <= 100

    for path in set(paths):
        response = cache_transport.handle_request(httpx.Request("GET", f"https://www.example.com{path}"))
        assert response.extensions["from_cache"]
