import socket
import threading

import pytest

from utilkit.mapping import KeyMap
from utilkit.request import StatusCode, parse_raw_traffic
from utilkit.web import (
    HTTPRequest,
    HTTPServer,
    get_post_queries,
    parse_http_traffic,
    parse_include_line,
    retrieve_get_parameter,
)


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _recv_all(sock):
    chunks = []
    while chunk := sock.recv(4096):
        chunks.append(chunk)
    return b"".join(chunks).decode("utf-8")


@pytest.fixture
def server():
    srv = HTTPServer("127.0.0.1", _free_port())
    yield srv
    srv.close()


POST_REQUEST = (
    "POST /post HTTP/1.1\r\n"
    "Host: localhost\r\n"
    "Content-Type: application/x-www-form-urlencoded\r\n"
    "\r\n"
    "name_input=abc&x=1"
)


def test_parse_http_traffic_request_line_headers_and_body():
    request = parse_http_traffic(POST_REQUEST)
    assert request.request_type == "POST"
    assert request.route == "/post"
    assert request.headers.get("Host") == "localhost"
    assert request.headers.get("Content-Type") == "application/x-www-form-urlencoded"
    assert request.body == "name_input=abc&x=1"


def test_parse_http_traffic_stops_at_zero_line():
    request = parse_http_traffic("GET / HTTP/1.1\r\n\r\nfirst\n0\nignored")
    assert request.body == "first"


def test_parse_http_traffic_rejects_empty_input():
    with pytest.raises(ValueError):
        parse_http_traffic("")


def test_get_post_queries_skips_pairs_without_value():
    request = HTTPRequest("POST", "/post", body="name_input=abc&flag&x=1")
    queries = get_post_queries(request)
    assert request.queries is queries
    assert [(k.name, k.value) for k in queries] == [("name_input", "abc"), ("x", "1")]


def test_retrieve_get_parameter_reads_query_string():
    request = HTTPRequest("GET", "/get?q=hello&n=2")
    assert retrieve_get_parameter(request) is True
    assert request.queries.get("q") == "hello"
    assert request.queries.get("n") == "2"


def test_retrieve_get_parameter_without_query():
    request = HTTPRequest("GET", "/get")
    assert retrieve_get_parameter(request) is False
    assert len(request.queries) == 0


def test_parse_include_line_single_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "style.css").write_text("body {}", encoding="utf-8")
    assert parse_include_line('  include_css("style.css");  ', 0) == "body {}"


def test_parse_include_line_several_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.html").write_text("<a>", encoding="utf-8")
    (tmp_path / "b.html").write_text("<b>", encoding="utf-8")
    assert parse_include_line('include_html("a.html", "b.html");', 3) == "<a><b>"


def test_parse_include_line_requires_semicolon():
    with pytest.raises(ValueError, match="line 7"):
        parse_include_line('include_css("style.css")', 7)


def test_server_rejects_port_zero():
    with pytest.raises(ValueError):
        HTTPServer(None, 0)


def test_is_route_valid_matching(server):
    server.add_route("/index", lambda *a: None)
    server.add_route("/api", lambda *a: None)
    assert server.is_route_valid("/") == "/index"
    assert server.is_route_valid("/api?ip=1") == "/api"
    assert server.is_route_valid(" /api ") == "/api"
    assert server.is_route_valid("/nothing") is None
    assert server.is_route_valid("   ") is None


def test_is_route_valid_prefers_exact_match(server):
    server.add_route("/a", lambda *a: None)
    server.add_route("/ab", lambda *a: None)
    assert server.is_route_valid("/ab") == "/ab"


def test_handle_connection_dispatches_to_route(server):
    seen = []

    def handler(srv, request, conn):
        seen.append((srv, request))
        conn.sendall(b"hi")

    server.add_route("/api", handler)
    near, far = socket.socketpair()
    with near, far:
        far.sendall(b"GET /api?q=1 HTTP/1.1\r\nHost: localhost\r\n\r\n")
        request = server.handle_connection(near)
        near.close()
        assert _recv_all(far) == "hi"
    assert seen[0][0] is server
    assert seen[0][1] is request
    assert request.route == "/api?q=1"


def test_handle_connection_parses_post_queries(server):
    seen = []
    server.add_route("/post", lambda srv, request, conn: seen.append(request))
    near, far = socket.socketpair()
    with near, far:
        far.sendall(POST_REQUEST.encode("utf-8"))
        server.handle_connection(near)
    assert seen[0].queries.get("name_input") == "abc"


def test_handle_connection_serves_404_page(server, tmp_path):
    page = tmp_path / "404.html"
    page.write_text("missing page", encoding="utf-8")
    server.add_404_page(page)
    near, far = socket.socketpair()
    with near, far:
        far.sendall(b"GET /unknown HTTP/1.1\r\n\r\n")
        request = server.handle_connection(near)
        near.close()
        response = _recv_all(far)
    assert request.route == "/unknown"
    assert response.startswith("HTTP/1.1 200 OK\r\n")
    assert "Content-Type: text/html; charset=UTF-8\r\n" in response
    assert response.endswith("\r\n\r\nmissing page")
    parsed = parse_raw_traffic(response)
    assert parsed.status_code == StatusCode.OK
    assert parsed.headers.get("Connection") == "close"


def test_handle_connection_without_match_sends_nothing(server):
    near, far = socket.socketpair()
    with near, far:
        far.sendall(b"GET /unknown HTTP/1.1\r\n\r\n")
        request = server.handle_connection(near)
        near.close()
        assert _recv_all(far) == ""
    assert request.route == "/unknown"


def test_send_response_substitutes_variables(server, tmp_path):
    page = tmp_path / "get.html"
    page.write_text("<p>$INPUT</p>", encoding="utf-8")
    variables = KeyMap().add("$INPUT", "Input: N/A")
    near, far = socket.socketpair()
    with near, far:
        server.send_response(near, StatusCode.OK, KeyMap(), page, variables)
        near.close()
        response = _recv_all(far)
    assert response.startswith("HTTP/1.1 200 OK\r\n")
    assert response.endswith("<p>Input: N/A</p>")
    parsed = parse_raw_traffic(response)
    assert parsed.status_code == StatusCode.OK
    assert parsed.headers.get("HTTP/1.1") == "200 OK"


def test_send_response_missing_file_sends_headers_only(server, tmp_path):
    headers = KeyMap().add("Connection", "close")
    near, far = socket.socketpair()
    with near, far:
        server.send_response(near, StatusCode.OK, headers, tmp_path / "none.html", None)
        near.close()
        response = _recv_all(far)
    assert response == "HTTP/1.1 200 OK\r\nConnection: close\r\n\r\n"
    parsed = parse_raw_traffic(response)
    assert parsed.status_code == StatusCode.OK
    assert parsed.headers.get("Connection") == "close"


def test_send_raw_response_expands_includes(server, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "style.css").write_text("body {}", encoding="utf-8")
    page = tmp_path / "index.html"
    page.write_text('<html>\ninclude_css("style.css");\n</html>\n', encoding="utf-8")
    near, far = socket.socketpair()
    with near, far:
        server.send_raw_response(near, StatusCode.OK, None, page, None)
        near.close()
        response = _recv_all(far)
    header, _, body = response.partition("\r\n\r\n")
    assert header == "HTTP/1.1 200 OK"
    assert body == "<html>\r\nbody {}\r\n</html>\r\n"
    parsed = parse_raw_traffic(response)
    assert parsed.status_code == StatusCode.OK
    assert parsed.headers.get("HTTP/1.1") == "200 OK"


def test_start_listener_serves_clients(server):
    server.add_route("/index", lambda srv, request, conn: conn.sendall(b"welcome"))
    listener = threading.Thread(target=server.start_listener, daemon=True)
    listener.start()

    response = ""
    for _ in range(50):
        try:
            with socket.create_connection(("127.0.0.1", server.port), timeout=2) as client:
                client.sendall(b"GET / HTTP/1.1\r\n\r\n")
                response = _recv_all(client)
            break
        except ConnectionRefusedError:
            threading.Event().wait(0.05)
    assert response == "welcome"
    server.close()
    listener.join(timeout=2)
    assert server.is_route_valid("/") == "/index"