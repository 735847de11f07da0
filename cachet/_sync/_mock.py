import typing as tp
from types import TracebackType

import httpx

if tp.TYPE_CHECKING:  # pragma: no cover
    from typing_extensions import Self

__all__ = ("MockTransport",)


class MockTransport(httpx.BaseTransport):
    """
    Returns queued responses in order and records every request it handled.

    Queued exceptions are raised instead of being returned.
    """

    def __init__(self, responses: tp.Optional[tp.List[tp.Union[httpx.Response, Exception]]] = None) -> None:
        self.mocked_responses: tp.List[tp.Union[httpx.Response, Exception]] = list(responses or [])
        self.requests: tp.List[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.mocked_responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def add_responses(self, responses: tp.List[tp.Union[httpx.Response, Exception]]) -> None:
        self.mocked_responses.extend(responses)

    def __enter__(self) -> "Self":
        return self

    def __exit__(
        self,
        exc_type: tp.Optional[tp.Type[BaseException]] = None,
        exc_value: tp.Optional[BaseException] = None,
        traceback: tp.Optional[TracebackType] = None,
    ) -> None:
        self.close()
