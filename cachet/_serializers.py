import base64
import json
import typing as tp

import httpx

from ._exceptions import SerializationError
from ._utils import HEADERS_ENCODING

try:
    import yaml
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore

KNOWN_RESPONSE_EXTENSIONS = ("http_version", "reason_phrase")

__all__ = ("BaseSerializer", "JSONSerializer", "YAMLSerializer")


def _raw_content(response: httpx.Response) -> bytes:
    # The raw body is kept so that Content-Encoding still describes the stored bytes.
    if isinstance(response.stream, httpx.ByteStream):
        return b"".join(response.stream)
    return response.content


def _dump_headers(headers: httpx.Headers) -> tp.List[tp.List[str]]:
    return [[key.decode(HEADERS_ENCODING), value.decode(HEADERS_ENCODING)] for key, value in headers.raw]


def _load_headers(headers: tp.List[tp.List[str]]) -> tp.List[tp.Tuple[bytes, bytes]]:
    return [(key.encode(HEADERS_ENCODING), value.encode(HEADERS_ENCODING)) for key, value in headers]


class BaseSerializer:
    def dumps(self, response: httpx.Response, request: httpx.Request) -> bytes:
        raise NotImplementedError()

    def loads(self, data: bytes) -> tp.Tuple[httpx.Response, httpx.Request]:
        raise NotImplementedError()

    def to_dict(self, response: httpx.Response, request: httpx.Request) -> tp.Dict[str, tp.Any]:
        response_dict = {
            "status": response.status_code,
            "headers": _dump_headers(response.headers),
            "content": base64.b64encode(_raw_content(response)).decode("ascii"),
            "extensions": {
                key: value.decode("ascii") if isinstance(value, bytes) else value
                for key, value in response.extensions.items()
                if key in KNOWN_RESPONSE_EXTENSIONS
            },
        }

        request_dict = {
            "method": request.method,
            "url": str(request.url),
            "headers": _dump_headers(request.headers),
        }

        return {"response": response_dict, "request": request_dict}

    def from_dict(self, data: tp.Any) -> tp.Tuple[httpx.Response, httpx.Request]:
        try:
            response_dict = data["response"]
            request_dict = data["request"]

            response = httpx.Response(
                status_code=response_dict["status"],
                headers=_load_headers(response_dict["headers"]),
                stream=httpx.ByteStream(base64.b64decode(response_dict["content"].encode("ascii"))),
                extensions={
                    key: value.encode("ascii")
                    for key, value in response_dict["extensions"].items()
                    if key in KNOWN_RESPONSE_EXTENSIONS
                },
            )

            request = httpx.Request(
                method=request_dict["method"],
                url=request_dict["url"],
                headers=_load_headers(request_dict["headers"]),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise SerializationError(f"Malformed cache entry: {exc!r}") from exc

        return response, request


class JSONSerializer(BaseSerializer):
    """
    A json-based serializer.

    The entry is a UTF-8 encoded JSON object holding the response
    (status, raw headers, base64 encoded raw body, http version and
    reason phrase) and the request it was received for (method, url, headers).
    """

    def dumps(self, response: httpx.Response, request: httpx.Request) -> bytes:
        """
        Dumps the HTTP response and its HTTP request.

        :param response: An HTTP response with a buffered body
        :type response: httpx.Response
        :param request: An HTTP request
        :type request: httpx.Request
        :return: Serialized response
        :rtype: bytes
        """
        return json.dumps(self.to_dict(response, request), indent=4).encode("utf-8")

    def loads(self, data: bytes) -> tp.Tuple[httpx.Response, httpx.Request]:
        """
        Loads the HTTP response and its HTTP request from serialized data.

        :param data: Serialized data
        :type data: bytes
        :raises SerializationError: When the data is not a valid entry
        :return: HTTP response and its HTTP request
        :rtype: tp.Tuple[httpx.Response, httpx.Request]
        """
        try:
            full_json = json.loads(data)
        except (UnicodeDecodeError, ValueError) as exc:
            raise SerializationError(f"Malformed cache entry: {exc!r}") from exc
        return self.from_dict(full_json)


class YAMLSerializer(BaseSerializer):
    """A yaml-based serializer writing the same document as `JSONSerializer`."""

    def __init__(self) -> None:
        if yaml is None:  # pragma: no cover
            raise RuntimeError(
                f"The `{type(self).__name__}` was used, but the required packages were not found. "
                "Check that you have `cachet` installed with the `yaml` extension as shown.\n"
                "```pip install cachet[yaml]```"
            )

    def dumps(self, response: httpx.Response, request: httpx.Request) -> bytes:
        return tp.cast(bytes, yaml.safe_dump(self.to_dict(response, request), sort_keys=False).encode("utf-8"))

    def loads(self, data: bytes) -> tp.Tuple[httpx.Response, httpx.Request]:
        try:
            full_yaml = yaml.safe_load(data)
        except yaml.YAMLError as exc:
            raise SerializationError(f"Malformed cache entry: {exc!r}") from exc
        return self.from_dict(full_yaml)
