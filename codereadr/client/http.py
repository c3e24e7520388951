from __future__ import annotations

import ssl
from dataclasses import dataclass
from http.client import HTTPException
from typing import Mapping, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from codereadr.exceptions import TransportError


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status, headers and raw body of one API call.

    The body is whatever the server sent; only the XML decoder gives it
    meaning, so nothing here looks at it.
    """

    status: int
    headers: Mapping[str, str]
    body_bytes: bytes


class Transport(Protocol):
    """Sends one encoded request and returns the raw response."""

    def __call__(self, url: str, body: bytes, content_type: str) -> HttpResponse: ...


class UrllibTransport:
    """HTTP POST transport on urllib.

    HTTP error statuses are returned, not raised: the response body still
    carries the API's own status. Anything that prevents getting a complete
    response raises TransportError.

    Security notes:
    - Does NOT disable TLS verification.
    """

    def __init__(self, timeout_sec: float = 30):
        self.timeout_sec = timeout_sec

    def __call__(self, url: str, body: bytes, content_type: str) -> HttpResponse:
        try:
            req = Request(url=url, data=body, method="POST")
        except ValueError as e:
            raise TransportError(f"invalid API URL {url!r}: {e}") from e
        req.add_header("Content-Type", content_type)
        req.add_header("Content-Length", str(len(body)))
        return _post(req, self.timeout_sec)


def _post(req: Request, timeout_sec: float) -> HttpResponse:
    """Send the request and read the full response.

    Security notes:
    - Uses default SSL context (verification ON).
    """

    try:
        ctx = ssl.create_default_context()
        with urlopen(req, timeout=timeout_sec, context=ctx) as resp:
            return HttpResponse(
                status=int(resp.status),
                headers=dict(resp.headers.items()),
                body_bytes=resp.read(),
            )
    except HTTPError as e:
        return _error_response(e)
    except URLError as e:
        raise TransportError(f"network error: {e.reason}") from e
    except (HTTPException, OSError, ValueError) as e:
        # Truncated bodies, bad status lines, timeouts and resets.
        raise TransportError(f"network error: {e}") from e


def _error_response(e: HTTPError) -> HttpResponse:
    # A 4xx/5xx body may still be an XML envelope, so it is read like any other.
    try:
        body = e.read()
    except (HTTPException, OSError, ValueError) as read_err:
        raise TransportError(f"network error reading HTTP {e.code} body: {read_err}") from read_err
    return HttpResponse(status=int(e.code or 0), headers=dict((e.headers or {}).items()), body_bytes=body)
