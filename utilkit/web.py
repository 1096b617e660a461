"""A small threaded HTTP server with prefix-matched routes and HTML includes."""

from __future__ import annotations

import os
import socket
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from http import HTTPStatus
from pathlib import Path
from typing import Any

from utilkit.files import TextFile
from utilkit.mapping import Key, KeyMap
from utilkit.request import StatusCode
from utilkit.text import Text

_READ_SIZE = 4095
_BACKLOG = 999
_INCLUDE_MARKERS = ("include_css(", "include_html(")

RouteHandler = Callable[["HTTPServer", "HTTPRequest", socket.socket], Any]


@dataclass
class HTTPRequest:
    """A parsed incoming request.

    Body lines are concatenated without separators.
    """

    request_type: str
    route: str
    headers: KeyMap = field(default_factory=KeyMap)
    body: str = ""
    queries: KeyMap = field(default_factory=KeyMap)


@dataclass
class _Route:
    name: str
    handler: RouteHandler


def parse_http_traffic(data: str) -> HTTPRequest:
    """Parse a raw HTTP request into method, route, headers and body.

    Empty lines are dropped; a whitespace-only line ends the headers, a
    ``2be`` line is skipped and a ``0`` line ends the request.
    """
    lines = [line for line in str(data).split("\n") if line]
    if not lines:
        raise ValueError("no HTTP request to parse")

    request_line = Text(lines[0]).split(" ")
    if not request_line:
        raise ValueError(f"malformed request line {lines[0]!r}")
    route = request_line[1] if len(request_line) > 1 else ""

    headers = KeyMap()
    body: list[str] = []
    in_body = False
    for line in lines[1:]:
        if line == "2be":
            in_body = True
            continue
        if line == "0":
            break
        if not line.strip():
            in_body = True
            continue

        pieces = Text(line).split(":")
        if len(pieces) >= 2 and not in_body:
            name = pieces[0]
            value = line.split(name, 1)[1].strip().removeprefix(":").strip()
            headers.add(name, value)
        else:
            body.append(line)

    return HTTPRequest(
        request_type=request_line[0],
        route=route,
        headers=headers,
        body="".join(body),
    )


def _parse_pairs(pairs: Iterable[str]) -> KeyMap:
    queries = KeyMap()
    for pair in pairs:
        parts = Text(pair).split("=")
        if len(parts) > 1:
            queries.add(parts[0], parts[1])
    return queries


def get_post_queries(request: HTTPRequest) -> KeyMap:
    """Parse ``name=value&...`` pairs from the body into ``request.queries``."""
    queries = _parse_pairs(Text(request.body).split("&"))
    request.queries = queries
    return queries


def retrieve_get_parameter(request: HTTPRequest) -> bool:
    """Parse the query string of the route into ``request.queries``.

    Returns False when the route carries no parameters.
    """
    if "?" not in request.route:
        return False
    parts = Text(request.route).split("?")
    if len(parts) < 2:
        return False
    pairs = Text(parts[1]).split("&")
    if not pairs:
        return False
    request.queries = _parse_pairs(pairs)
    return True


def _read_include(name: str) -> str:
    with TextFile(name) as fh:
        return fh.read()


def parse_include_line(line: str | Text, line_num: int) -> str:
    """Return the contents of the files named by an ``include_css(...)`` or
    ``include_html(...)`` line, concatenated in order."""
    text = str(line).strip()
    if not text.endswith(");"):
        raise ValueError(f"Invalid syntax. Missing ';' at the end of line {line_num}")

    args = text[text.find("("):]
    for ch in '"();':
        args = args.replace(ch, " ")
    args = args.strip()

    if "," in args:
        names = [name.strip() for name in Text(args).split(",")]
    else:
        names = [args]
    return "".join(_read_include(name) for name in names)


def _status_line(code: int) -> str:
    code = int(code)
    try:
        phrase = HTTPStatus(code).phrase
    except ValueError:
        try:
            phrase = StatusCode(code).name.replace("_", " ").title()
        except ValueError:
            phrase = ""
    return f"HTTP/1.1 {code} {phrase}".rstrip() + "\r\n"


def _header_block(code: int, headers: Iterable[Key] | None) -> str:
    lines = [_status_line(code)]
    lines.extend(f"{key.name}: {key.value}\r\n" for key in headers or ())
    lines.append("\r\n")
    return "".join(lines)


def _substitute(page: str, variables: Iterable[Key] | None) -> str:
    for key in variables or ():
        if key.name in page:
            page = page.replace(key.name, key.value)
    return page


def _default_headers() -> KeyMap:
    return KeyMap().add("Content-Type", "text/html; charset=UTF-8").add("Connection", "close")


class HTTPServer:
    """An IPv4 HTTP server bound on construction; routes are matched first
    exactly, then by prefix, in the order they were added."""

    def __init__(self, ip: str | None = None, port: int = 80) -> None:
        if not port:
            raise ValueError("a port must be given")
        self.ip = ip
        self.port = int(port)
        self.routes: list[_Route] = []
        self.err_404_filepath: str | None = None
        self._closed = False
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._sock.bind((ip or "0.0.0.0", self.port))
        except OSError:
            self._sock.close()
            raise

    def __repr__(self) -> str:
        return f"HTTPServer(ip={self.ip!r}, port={self.port})"

    def add_route(self, route: str, handler: RouteHandler) -> None:
        """Call ``handler(server, request, conn)`` for requests to ``route``."""
        if not route:
            raise ValueError("route must not be empty")
        self.routes.append(_Route(str(route), handler))

    def add_404_page(self, path: str | os.PathLike[str]) -> None:
        """Serve the page at ``path`` when no route matches."""
        self.err_404_filepath = os.fspath(path)

    def is_route_valid(self, route: str | Text) -> str | None:
        """The name of the route that ``route`` maps to, or None.

        A one-character route such as ``/`` stands for ``/index``. Route names
        shorter than two characters never match by prefix.
        """
        text = Text(str(route))
        text.strip()
        if text.is_empty():
            return None
        if len(text) == 1:
            text = Text("/index")

        for entry in self.routes:
            if entry.name == text.data:
                return entry.name
        for entry in self.routes:
            if text.starts_with(entry.name):
                return entry.name
        return None

    def _handler(self, name: str) -> RouteHandler:
        return next(entry.handler for entry in self.routes if entry.name == name)

    def handle_connection(self, conn: socket.socket) -> HTTPRequest | None:
        """Read one request from ``conn`` and dispatch it.

        Returns the parsed request, or None if nothing could be parsed.
        """
        raw = conn.recv(_READ_SIZE)
        if not raw:
            return None
        try:
            request = parse_http_traffic(raw.decode("utf-8", errors="replace"))
        except ValueError:
            return None

        match = self.is_route_valid(request.route)
        if request.request_type == "POST":
            get_post_queries(request)

        if match is not None:
            self._handler(match)(self, request, conn)
        elif self.err_404_filepath is not None:
            self.send_raw_response(
                conn, StatusCode.OK, _default_headers(), self.err_404_filepath, None
            )
        return request

    def send_response(
        self,
        conn: socket.socket,
        code: int,
        headers: Iterable[Key] | None,
        html_file: str | os.PathLike[str] | None,
        variables: Iterable[Key] | None,
    ) -> None:
        """Send the status line, headers and the page in ``html_file``.

        Every occurrence of a variable's name in the page is replaced by its
        value. A missing page sends the headers alone.
        """
        response = _header_block(code, headers)
        if html_file is not None and Path(html_file).is_file():
            page = Path(html_file).read_text(encoding="utf-8")
            response += _substitute(page, variables)
        conn.sendall(response.encode("utf-8"))

    def send_raw_response(
        self,
        conn: socket.socket,
        code: int,
        headers: Iterable[Key] | None,
        html_file: str | os.PathLike[str] | None,
        variables: Iterable[Key] | None,
    ) -> None:
        """Send a page line by line, expanding ``include_css(...)`` and
        ``include_html(...)`` lines into the files they name."""
        parts = [_header_block(code, headers)]
        if html_file is not None:
            path = Path(html_file)
            if not path.is_file():
                print(f"[ x ] Unable to find HTML File.... {os.fspath(html_file)}")
            else:
                page = _substitute(path.read_text(encoding="utf-8"), variables)
                if "\n" in page:
                    lines = (line for line in page.split("\n") if line)
                    for num, line in enumerate(lines):
                        if any(marker in line for marker in _INCLUDE_MARKERS):
                            try:
                                parts.append(parse_include_line(line, num))
                            except ValueError as exc:
                                print(f"[ x ] Error, {exc}")
                                continue
                        else:
                            parts.append(line)
                        parts.append("\r\n")
                else:
                    parts.append(page)
        conn.sendall("".join(parts).encode("utf-8"))

    def _serve_client(self, conn: socket.socket) -> None:
        try:
            self.handle_connection(conn)
        finally:
            conn.close()

    def start_listener(self) -> None:
        """Accept connections until the server is closed, one thread each."""
        self._sock.listen(_BACKLOG)
        print(f"Server is listening on port {self.port}")
        while not self._closed:
            try:
                conn, _ = self._sock.accept()
            except OSError:
                if self._closed:
                    return
                continue
            threading.Thread(target=self._serve_client, args=(conn,), daemon=True).start()

    def close(self) -> None:
        """Stop listening and close the server socket."""
        if self._closed:
            return
        self._closed = True
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._sock.close()