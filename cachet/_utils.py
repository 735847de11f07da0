from __future__ import annotations

import hashlib
import re
import time
import typing as tp
from datetime import datetime, timezone

import httpx

HEADERS_ENCODING = "iso-8859-1"

# Layout of `Mon, 02 Jan 2006 15:04:05 MST` without the zone abbreviation.
HTTP_DATE_LAYOUT = "%a, %d %b %Y %H:%M:%S"

# The full layout with every numeric field zero padded.
HTTP_DATE_PATTERN = re.compile(r"[A-Za-z]{3}, [0-9]{2} [A-Za-z]{3} [0-9]{4} [0-9]{2}:[0-9]{2}:[0-9]{2} [A-Za-z]{3,4}")

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

__all__ = ("BaseClock", "Clock", "generate_key", "get_safe_url", "parse_http_date")


class BaseClock:
    def now(self) -> float:
        raise NotImplementedError()


class Clock(BaseClock):
    def now(self) -> float:
        return time.time()


def parse_http_date(value: str) -> tp.Optional[datetime]:
    """
    Parses an HTTP date written in the RFC 1123 layout.

    Only the strict `Mon, 02 Jan 2006 15:04:05 MST` form is accepted;
    the zone abbreviation must be alphabetic and the timestamp is
    interpreted as UTC. Returns None when the value does not parse or
    denotes the zero time.
    """

    value = value.strip()
    if HTTP_DATE_PATTERN.fullmatch(value) is None:
        return None

    stamp, _, _ = value.rpartition(" ")

    try:
        parsed = datetime.strptime(stamp, HTTP_DATE_LAYOUT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None

    if parsed == ZERO_TIME:
        return None
    return parsed


def generate_key(request: httpx.Request) -> int:
    """
    Derives the 64-bit cache key of a request from its method and absolute URL.
    """

    encoded_url = str(request.url).encode("ascii")
    key_parts = [request.method.upper().encode("ascii"), encoded_url]

    key = hashlib.blake2b(digest_size=8)
    for part in key_parts:
        key.update(part)
        key.update(b"\x00")
    return int.from_bytes(key.digest(), "big")


def get_safe_url(url: httpx.URL) -> str:
    return f"{url.scheme}://{url.host}{url.path}"
