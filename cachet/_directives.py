"""
Cache directive helpers.

These functions implement the parts of RFC 7234 the strategies rely on:
https://www.rfc-editor.org/rfc/rfc7234

None of them raise; a missing or malformed value is reported as
None (or False) rather than as an error.
"""

from __future__ import annotations

import re
import typing as tp
from datetime import datetime, timedelta

import httpx

from ._utils import parse_http_date

__all__ = (
    "date",
    "directives",
    "expires",
    "has_no_cache",
    "has_no_store",
    "lifetime",
    "max_age",
    "selecting_headers_match",
    "split_directives",
)

HeaderTypes = tp.Union[
    httpx.Headers,
    tp.Mapping[str, str],
    tp.Sequence[tp.Tuple[str, str]],
    tp.Sequence[tp.Tuple[bytes, bytes]],
    None,
]


_DELTA_SECONDS = re.compile(r"[+-]?[0-9]+")


def _coerce(headers: HeaderTypes) -> httpx.Headers:
    if isinstance(headers, httpx.Headers):
        return headers
    return httpx.Headers(headers)


def _tokens(value: str) -> tp.List[str]:
    tokens = (token.strip().lower() for token in value.split(","))
    return [token for token in tokens if token]


def split_directives(value: str) -> tp.FrozenSet[str]:
    """
    Splits a header value into lowercase, whitespace-trimmed tokens.

    Empty tokens are dropped.
    """

    return frozenset(_tokens(value))


def directives(headers: HeaderTypes, name: str = "Cache-Control") -> tp.FrozenSet[str]:
    return split_directives(_coerce(headers).get(name, ""))


def has_no_store(headers: HeaderTypes) -> bool:
    return "no-store" in directives(headers)


def has_no_cache(headers: HeaderTypes) -> bool:
    headers = _coerce(headers)
    return "no-cache" in directives(headers) or "no-cache" in directives(headers, "Pragma")


def max_age(headers: HeaderTypes) -> tp.Optional[timedelta]:
    """
    Returns the `max-age` directive of the Cache-Control header.

    A directive with a non-numeric argument counts as present with
    a zero lifetime.
    """

    for directive in _tokens(_coerce(headers).get("Cache-Control", "")):
        name, sep, argument = directive.partition("=")
        if name.strip() != "max-age" or not sep:
            continue

        argument = argument.strip()
        if _DELTA_SECONDS.fullmatch(argument) is None:
            return timedelta(0)

        try:
            return timedelta(seconds=int(argument))
        except (OverflowError, ValueError):
            return timedelta.min if argument.startswith("-") else timedelta.max
    return None


def expires(headers: HeaderTypes) -> tp.Optional[datetime]:
    value = _coerce(headers).get("Expires")
    return parse_http_date(value) if value else None


def date(headers: HeaderTypes) -> tp.Optional[datetime]:
    value = _coerce(headers).get("Date")
    return parse_http_date(value) if value else None


def lifetime(response: httpx.Response) -> tp.Optional[timedelta]:
    """
    Returns the freshness lifetime of the response.

    The lifetime is taken from `max-age` when present, otherwise it is
    the difference between the Expires and Date headers.

    See also (https://www.rfc-editor.org/rfc/rfc7234#section-4.2.1).
    """

    age = max_age(response.headers)
    if age is not None:
        return age

    expires_at = expires(response.headers)
    created_at = date(response.headers)
    if expires_at is not None and created_at is not None:
        return expires_at - created_at
    return None


def selecting_headers_match(
    request: httpx.Request,
    stored_request_headers: HeaderTypes,
    response: httpx.Response,
) -> bool:
    """
    Determines whether the headers nominated by the response's Vary header are
    identical in the current request and in the request stored with the response.

    See also (https://www.rfc-editor.org/rfc/rfc7234#section-4.1).
    """

    stored_headers = _coerce(stored_request_headers)

    for field_name in split_directives(response.headers.get("Vary", "")):
        if field_name == "*":
            return False

        if request.headers.get_list(field_name) != stored_headers.get_list(field_name):
            return False
    return True
