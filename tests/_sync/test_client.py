import httpx
import pytest

import cachet
from tests.helpers import Recorder


def cacheable_response(content: bytes = b"test") -> httpx.Response:
    return httpx.Response(200, headers=[("Cache-Control", "max-age=3600")], content=content)



def test_client_uses_cache():
    transport = cachet.MockTransport([cacheable_response()])

    with cachet.CacheClient(transport=transport) as client:
        response = client.get("https://www.example.com")
        assert not response.extensions["from_cache"]
        assert response.text == "test"

        response = client.get("https://www.example.com")
        assert response.extensions["from_cache"]
        assert response.text == "test"
        assert response.request.url == "https://www.example.com"

    assert len(transport.requests) == 1



def test_client_streaming_from_cache():
    transport = cachet.MockTransport([cacheable_response(b"streamed")])

    with cachet.CacheClient(transport=transport) as client:
        client.get("https://www.example.com")

        with client.stream("GET", "https://www.example.com") as response:
            assert response.extensions["from_cache"]
            assert b"".join([chunk for chunk in response.iter_bytes()]) == b"streamed"



def test_client_passes_options(recorder: Recorder):
    transport = cachet.MockTransport(
        [httpx.Response(200, headers=[("Cache-Control", "no-store")], content=b"test")]
    )
    storage = cachet.InMemoryStorage()

    with cachet.CacheClient(
        transport=transport,
        storage=storage,
        strategy=cachet.AggressiveStrategy(),
        observer=recorder,
    ) as client:
        client.get("https://www.example.com")

    assert len(storage) == 1
    assert recorder.events == [cachet.CacheEvent.MISS, cachet.CacheEvent.STORED]



def test_client_does_not_cache_post():
    transport = cachet.MockTransport([cacheable_response(), cacheable_response()])

    with cachet.CacheClient(transport=transport) as client:
        client.post("https://www.example.com", content=b"data")
        response = client.post("https://www.example.com", content=b"data")
        assert not response.extensions["from_cache"]

    assert len(transport.requests) == 2


def test_client_rejects_explicit_none():
    with pytest.raises(cachet.ConfigurationError, match="storage must be non-None"):
        cachet.CacheClient(storage=None)
