"""A minimal HTTP/1.1 GET client and a parser for raw HTTP responses."""

from __future__ import annotations

import socket
import ssl
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol

from utilkit.mapping import Key, KeyMap

_HTTPS = "https://"
_HTTP = "http://"
_RECV_SIZE = 4096


class RequestType(IntEnum):
    """The kind of request to send."""

    GET = 0x324
    POST = 0x724


class StatusCode(IntEnum):
    """HTTP status codes."""

    CONTINUE = 100
    SWITCH_PROTOCOL = 101
    PROCESSING = 102
    EARLY_HINT = 103

    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NON_AUTHORIZED_INFO = 203
    NO_CONTENT = 204
    RESET_CONTENT = 205
    PARTIAL_CONTENT = 206
    MULTI_STATUS = 207
    ALREADY_REPORTED = 208
    IM_USED = 226

    MULTIPLE_CHOICES = 300
    MOVED_PERMANENTLY = 301
    FOUND = 302
    SEE_OTHER = 303
    NOT_MODIFIED = 304
    USE_PROXY = 305
    SWITCH_PROXY = 306
    TEMP_REDIRECT = 307
    PERM_REDIRECT = 308

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    PAYMENT_REQUIRED = 402
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    NOT_ACCEPTABLE = 406
    PROXY_AUTH_REQUIRED = 407
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    GONE = 410
    LENGTH_REQUIRED = 411
    PRECONDITION_FAILED = 412
    PAYLOAD_TOO_LARGE = 413
    URI_TOO_LONG = 414
    UNSUPPORTED_MEDIA_TYPE = 415
    RANGE_NOT_SATISFIABLE = 416
    EXPECTATION_FAILED = 417
    IM_A_TEAPOT = 418
    MISDIRECTED_REQUEST = 421
    UNPROCESSABLE_ENTITY = 422
    LOCKED = 423
    FAILED_DEPENDENCY = 424
    TOO_EARLY = 425
    UPGRADE_REQUIRED = 426
    PRECONDITION_REQUIRED = 428
    TOO_MANY_REQUESTS = 429
    REQ_HEADER_FIELD_TOO_LARGE = 431
    UNAVAILABLE_FOR_LEGAL_REASONS = 451

    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504
    HTTP_VERSION_NOT_SUPPORTED = 505
    VARIANT_ALSO_NEGOTIATES = 506
    INSUFFICIENT_STORAGE = 507
    LOOP_DETECTED = 508
    NOT_EXTENDED = 510
    NETWORK_AUTHENTICATION_REQUIRED = 511


@dataclass
class HTTPResponse:
    """A parsed HTTP response.

    The status line is stored as the first header, named after the HTTP
    version. Body lines are concatenated without separators.
    """

    status_code: int
    headers: KeyMap = field(default_factory=KeyMap)
    body: str = ""
    full_route: str = ""


class _Connection(Protocol):
    def sendall(self, data: bytes) -> None: ...

    def recv(self, size: int) -> bytes: ...


def parse_url(url: str) -> tuple[str, str]:
    """Split ``url`` into ``(hostname, path)``.

    The scheme and a ``www.`` prefix are dropped; the path is ``/`` when
    the URL has none.
    """
    rest = str(url)
    for scheme in (_HTTPS, _HTTP):
        if rest.startswith(scheme):
            rest = rest[len(scheme):]
    if "www." in rest:
        rest = rest.replace("www.", "", 1)

    hostname, _, tail = rest.partition("/")
    if not hostname:
        raise ValueError(f"no host name in URL {url!r}")
    segments = [segment for segment in tail.split("/") if segment]
    return hostname, "/" + "/".join(segments)


def build_get_request(hostname: str, route: str, headers: Iterable[Key] | None = None) -> str:
    """The text of a GET request for ``route`` on ``hostname``."""
    lines = [f"GET {route} HTTP/1.1\r\n", f"Host: {hostname}\r\n"]
    lines.extend(f"{key.name}: {key.value}\r\n" for key in headers or ())
    lines.append("Connection: close\r\n\r\n")
    return "".join(lines)


def parse_raw_traffic(data: str) -> HTTPResponse:
    """Parse a raw HTTP response into status, headers and body.

    A blank line ends the headers. A ``2be`` chunk-size line is skipped and
    a ``0`` line ends the body.
    """
    lines = [line.rstrip("\r") for line in str(data).split("\n")]
    if not any(line.strip() for line in lines):
        raise ValueError("no HTTP response to parse")

    status_line = lines[0].split()
    if len(status_line) < 2 or not status_line[1].isdigit():
        raise ValueError(f"malformed status line {lines[0]!r}")

    headers = KeyMap()
    headers.add(status_line[0], " ".join(status_line[1:]))

    body: list[str] = []
    in_body = False
    for line in lines[1:]:
        if line == "0":
            break
        if line == "2be" or not line.strip():
            in_body = True
            continue

        name, _, value = line.partition(":")
        if not in_body and name and value.strip(":"):
            headers.add(name, value.strip())
        else:
            body.append(line)

    return HTTPResponse(status_code=int(status_line[1]), headers=headers, body="".join(body))


def _exchange(conn: _Connection, hostname: str, route: str, headers: Iterable[Key] | None) -> str:
    conn.sendall(build_get_request(hostname, route, headers).encode("utf-8"))
    chunks: list[bytes] = []
    while chunk := conn.recv(_RECV_SIZE):
        chunks.append(chunk)
    return b"".join(chunks).decode("utf-8", errors="replace")


def request_url(
    url: str,
    headers: Iterable[Key] | None = None,
    request_type: RequestType = RequestType.GET,
) -> HTTPResponse:
    """Send a GET request to ``url`` and return the parsed response.

    URLs containing ``https://`` are fetched over TLS on port 443, all
    others over plain TCP on port 80.
    """
    if RequestType(request_type) is not RequestType.GET:
        raise ValueError(f"unsupported request type {RequestType(request_type).name}")

    hostname, route = parse_url(url)
    secure = _HTTPS in url
    port = 443 if secure else 80

    with socket.create_connection((hostname, port)) as sock:
        if secure:
            context = ssl.create_default_context()
            with context.wrap_socket(sock, server_hostname=hostname) as tls:
                raw = _exchange(tls, hostname, route, headers)
        else:
            raw = _exchange(sock, hostname, route, headers)

    response = parse_raw_traffic(raw)
    response.full_route = route
    return response