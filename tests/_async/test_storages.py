import httpx
import pytest

from cachet import AsyncInMemoryStorage
from cachet._utils import generate_key


@pytest.mark.anyio
async def test_inmemorystorage():
    storage = AsyncInMemoryStorage()

    await storage.store(1, b"first")
    await storage.store(2**64 - 1, b"second")

    assert await storage.load(1) == b"first"
    assert await storage.load(2**64 - 1) == b"second"
    assert len(storage) == 2


@pytest.mark.anyio
async def test_inmemorystorage_missing_entry():
    storage = AsyncInMemoryStorage()

    assert await storage.load(42) is None


@pytest.mark.anyio
async def test_inmemorystorage_repeated_loads():
    storage = AsyncInMemoryStorage()
    await storage.store(7, b"value")

    assert await storage.load(7) == await storage.load(7) == b"value"


@pytest.mark.anyio
async def test_inmemorystorage_overwrites():
    storage = AsyncInMemoryStorage()

    await storage.store(7, b"old")
    await storage.store(7, b"new")

    assert await storage.load(7) == b"new"
    assert len(storage) == 1


@pytest.mark.anyio
async def test_inmemorystorage_with_generated_key():
    storage = AsyncInMemoryStorage()
    key = generate_key(httpx.Request("GET", "https://example.com/"))

    await storage.store(key, b"value")

    assert await storage.load(key) == b"value"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "key, value, exception",
    [
        ("1", b"value", TypeError),
        (True, b"value", TypeError),
        (-1, b"value", ValueError),
        (2**64, b"value", ValueError),
        (1, "value", TypeError),
    ],
)
async def test_inmemorystorage_rejects_invalid_entries(key, value, exception):
    storage = AsyncInMemoryStorage()

    with pytest.raises(exception):
        await storage.store(key, value)
