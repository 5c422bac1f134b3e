"""Default transient-error classification for retries."""

from __future__ import annotations

import asyncio
import concurrent.futures
import errno
import socket
import urllib.error
from typing import Iterator, Optional

import aiohttp
import requests

from retrykit.exceptions import HTTPError, HTTPLikeError

_CANCELLATION_ERRORS = (asyncio.CancelledError, concurrent.futures.CancelledError)

_TIMEOUT_ERRORS = (
    TimeoutError,
    asyncio.TimeoutError,
    aiohttp.ServerTimeoutError,
    requests.Timeout,
)

_NETWORK_ERRORS = (
    ConnectionError,
    socket.gaierror,
    socket.herror,
    aiohttp.ClientConnectionError,
    requests.ConnectionError,
)

_NETWORK_ERRNOS = frozenset(
    getattr(errno, name)
    for name in (
        "ENETDOWN",
        "ENETUNREACH",
        "ENETRESET",
        "EHOSTDOWN",
        "EHOSTUNREACH",
        "ECONNABORTED",
        "ECONNRESET",
        "ECONNREFUSED",
        "ETIMEDOUT",
    )
    if hasattr(errno, name)
)

_TRANSPORT_ERRORS = (
    urllib.error.URLError,
    aiohttp.ClientPayloadError,
    requests.exceptions.ChunkedEncodingError,
)


def iter_causes(exc: Optional[BaseException]) -> Iterator[BaseException]:
    """Yield ``exc`` followed by the errors it was raised ``from``.

    Only explicit ``__cause__`` links are followed; an error raised while
    handling another one does not wrap it.
    """
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__


def as_http_error(exc: BaseException) -> Optional[HTTPLikeError]:
    """Adapt known HTTP status exceptions to the :class:`HTTPLikeError` shape."""
    if isinstance(exc, HTTPLikeError):
        return exc
    if isinstance(exc, aiohttp.ClientResponseError):
        return HTTPError(exc.status, exc.message or "")
    if isinstance(exc, requests.HTTPError):
        response = exc.response
        if response is None:
            return None
        return HTTPError(response.status_code, response.reason or "")
    if isinstance(exc, urllib.error.HTTPError):
        return HTTPError(exc.code, str(exc.reason))
    return None


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, _TIMEOUT_ERRORS):
        return True
    check = getattr(as_http_error(exc) or exc, "is_timeout", None)
    if not callable(check):
        return False
    try:
        return bool(check())
    except Exception:  # noqa: BLE001
        return False


def _is_cancelled(chain: list) -> bool:
    for e in chain:
        # a timeout raised from the cancellation it triggered is a timeout
        if isinstance(e, _TIMEOUT_ERRORS):
            return False
        if isinstance(e, _CANCELLATION_ERRORS):
            return True
    return False


def _is_network(exc: BaseException) -> bool:
    if isinstance(exc, _NETWORK_ERRORS):
        return True
    return isinstance(exc, OSError) and exc.errno in _NETWORK_ERRNOS


def _is_transport(exc: BaseException) -> bool:
    if isinstance(exc, urllib.error.HTTPError):
        return False
    return isinstance(exc, _TRANSPORT_ERRORS)


def is_retryable(exc: Optional[BaseException]) -> bool:
    """Return True when ``exc`` looks transient and worth another attempt.

    Rules are checked in order against the ``__cause__`` chain; the first
    rule matching anywhere in the chain decides:

    1. cancellation never retries, unless a timeout was raised from it
    2. timeouts retry
    3. connection-level network failures (including socket errnos) retry
    4. URL/transport failures retry
    5. HTTP status failures retry only for 5xx and 429
    6. anything else is permanent
    """
    if exc is None:
        return False
    chain = list(iter_causes(exc))

    if _is_cancelled(chain):
        return False
    if any(_is_timeout(e) for e in chain):
        return True
    if any(_is_network(e) for e in chain):
        return True
    if any(_is_transport(e) for e in chain):
        return True

    for e in chain:
        http_error = as_http_error(e)
        if http_error is not None:
            try:
                return bool(http_error.is_temporary())
            except Exception:  # noqa: BLE001
                return False
    return False
