import typing as tp
from email.utils import formatdate, parsedate_to_datetime

import httpx

import cachet


def http_date(timestamp: float) -> str:
    return formatdate(timeval=timestamp, localtime=False, usegmt=True)


def make_response(
    status_code: int = 200,
    headers: tp.Optional[tp.List[tp.Tuple[str, str]]] = None,
    method: str = "GET",
    request_headers: tp.Optional[tp.List[tp.Tuple[str, str]]] = None,
    url: str = "https://example.com/",
) -> httpx.Response:
    request = httpx.Request(method, url, headers=request_headers)
    return httpx.Response(status_code, headers=headers, request=request)


class Recorder:
    def __init__(self) -> None:
        self.events: tp.List[cachet.CacheEvent] = []

    def __call__(self, event: cachet.CacheEvent, request: httpx.Request) -> None:
        self.events.append(event)


class FixedClock(cachet.BaseClock):
    def __init__(self, date: str) -> None:
        self._now = parsedate_to_datetime(date).timestamp()

    def now(self) -> float:
        return self._now
