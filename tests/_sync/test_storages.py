import httpx
import pytest

from cachet import InMemoryStorage
from cachet._utils import generate_key



def test_inmemorystorage():
    storage = InMemoryStorage()

    storage.store(1, b"first")
    storage.store(2**64 - 1, b"second")

    assert storage.load(1) == b"first"
    assert storage.load(2**64 - 1) == b"second"
    assert len(storage) == 2



def test_inmemorystorage_missing_entry():
    storage = InMemoryStorage()

    assert storage.load(42) is None



def test_inmemorystorage_repeated_loads():
    storage = InMemoryStorage()
    storage.store(7, b"value")

    assert storage.load(7) == storage.load(7) == b"value"



def test_inmemorystorage_overwrites():
    storage = InMemoryStorage()

    storage.store(7, b"old")
    storage.store(7, b"new")

    assert storage.load(7) == b"new"
    assert len(storage) == 1



def test_inmemorystorage_with_generated_key():
    storage = InMemoryStorage()
    key = generate_key(httpx.Request("GET", "https://example.com/"))

    storage.store(key, b"value")

    assert storage.load(key) == b"value"



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
def test_inmemorystorage_rejects_invalid_entries(key, value, exception):
    storage = InMemoryStorage()

    with pytest.raises(exception):
        storage.store(key, value)
