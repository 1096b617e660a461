# utilkit

A small toolbox of everyday helpers: a mutable text type, string arrays,
two-dimensional grids, a mixed-type array, a thread handle, a bin-based object
tracker, a key/value map with a line-oriented JSON decoder, file and shell
command helpers, plain TCP sockets, and a minimal HTTP client and server.

It has no dependencies outside the standard library.

## Text (`utilkit.text`)

`Text` is a string that is edited in place. Methods that change it report
whether, or how much, it changed.

```python
from utilkit.text import Text

s = Text("d   test   ")
s.strip()              # True; now "d   test"
s.trim(" ")            # True; every space removed: "dtest"
s.count_char("t")      # 2
s.starts_with("dt")    # True (prefixes shorter than 2 never match)
s.to_upper()           # 4 letters changed: "DTEST"
s.replace("DTEST", "done")  # replaces the first occurrence, returns the new text
print(str(s), len(s))
```

Other methods: `reset`, `append` (chainable), `find_char`, `find_char_at`,
`strip_from`, `is_empty`, `trim_at`, `find_substr`, `count_substr`,
`get_substr`, `remove_substr`, `ends_with`, `is_upper`, `is_lower`,
`to_lower`, `replace_char`, `replace_char_with_str`, `split` (on any of
several delimiter characters, dropping empty pieces), `split_on_char`
(keeping empty pieces) and `join`.

## Arrays and grids

```python
from utilkit.array import StringArray
from utilkit.grid import Grid
from utilkit.mixed import MixedArray

names = StringArray(["alpha", "beta"])
names.append("gamma")
names.insert(1, "delta")   # the position must name an existing element
names.remove_at(0)         # returns the removed element
names.merge(["epsilon"])
names.contains("beta")     # True
names.get(10)              # None
print(names.to_string())   # [delta, beta, gamma, epsilon]
print(names.join(","))     # each element followed by the delimiter

grid = Grid(2)
grid.append(0, "TEST").append("BEEP")   # Grid.append returns the Row
grid.append(1, "NEW")
print(grid.get(0, 1))      # BEEP; out-of-range positions give None

mixed = MixedArray()
mixed.append("text").append(2).append({"name": "value"})
print(mixed[1])
```

## Maps and JSON (`utilkit.mapping`)

`KeyMap` keeps `Key(name, value)` entries in insertion order; lookups return
the first match.

```python
from utilkit.mapping import KeyMap, decode_json, decode_oneline_json

m = KeyMap()
m.add("TEST", "THIS").add("BEEP", "BOOP")
print(m.get("TEST"), m.contains("BEEP"), m.get_key("TEST"))

for field in decode_oneline_json('{"name": "demo", "location": {"city": "Nowhere"}}'):
    print(field.structure_path, field.key, field.value)
# /  name  demo
# /location  city  Nowhere
```

`decode_json` reads pretty-printed JSON, one field per line, and returns a
list of `JsonField` objects with a structure path (`/` at the top level,
`/<object>` inside a nested object), a key and a value. Quotes and square
brackets around values are removed, commas are dropped from values, and lines
whose value itself contains a `:` are skipped. `decode_oneline_json` first
breaks single-line JSON into lines. This is a lightweight field extractor, not
a full JSON parser.

## Threads and bins

```python
from utilkit.threads import Thread
from utilkit.bins import GarbageCollector, GarbageKind

t = Thread(print, ("hello",))
t.execute()
t.wait()          # returns what the function returned, or re-raises its error
```

`Thread.exit` only asks the worker to stop; a long-running function should
poll `cancelled()`.

```python
gc = GarbageCollector(debug=False)
bin_id = gc.create_bin()
gc.add(bin_id, GarbageKind.STRING, "value")
gc.add_many(bin_id, GarbageKind.STRING, ["a", "b"])
print(gc.bin_contents(bin_id))
gc.destroy_bin(bin_id)
gc.destroy()
```

Unknown bin ids raise `KeyError`; adding `None` raises `ValueError`. With
`debug=True`, destroying a bin prints a line per object.

## Files, commands and addresses

```python
from utilkit.files import TextFile, create_file
from utilkit.oscmd import execute_command
from utilkit.netutils import validate_ipv4

with create_file("notes.txt", "first line\n") as f:
    f.write("second line\n")   # writes always go to the end
    print(f.read())

print(execute_command("echo hi"))      # a Text holding the command's stdout
print(validate_ipv4("192.168.1.10"))   # True
```

`execute_command` runs the command through the system shell.

## Networking

### HTTP client (`utilkit.request`)

```python
from utilkit.request import request_url, parse_url, RequestType, StatusCode

print(parse_url("https://www.example.com/a/b"))   # ('example.com', '/a/b')

response = request_url("http://example.com/", None, RequestType.GET)
if response.status_code == StatusCode.OK:
    print(response.body)
```

URLs containing `https://` are fetched over TLS on port 443, all others over
plain TCP on port 80. `build_get_request` gives the request text and
`parse_raw_traffic` parses a raw response into an `HTTPResponse`, whose first
header is the status line (named after the HTTP version) and whose body lines
are joined without separators.

### Sockets (`utilkit.sockets`)

`Socket(host, port)` wraps an IPv4 TCP socket with address reuse enabled and
offers `bind`, `connect`, `listen`, `accept`, `set_timeout`, `read` (returns
`None` when the peer has closed), `write` (returns `False` if the peer has
gone away), `client_address` and `close`. It closes itself when used as a
context manager. `set_read_max_buffer_size` sets how many bytes one `read`
may return.

### HTTP server (`utilkit.web`)

```python
from utilkit.request import StatusCode
from utilkit.web import HTTPServer

def index(server, request, conn):
    server.send_response(conn, StatusCode.OK, None, "pages/index.html", None)

server = HTTPServer(None, 8080)      # binds immediately
server.add_route("/index", index)
server.add_404_page("404.html")
server.start_listener()              # one thread per connection, until close()
```

Routes are matched exactly first, then by prefix, in the order they were
added; `/` stands for `/index`. For POST requests the body's `name=value&...`
pairs are put in `request.queries`; `retrieve_get_parameter(request)` does the
same for the route's query string. `send_response` replaces every occurrence
of each variable's name in the page with its value; `send_raw_response` also
expands `include_css(...)` and `include_html(...)` lines into the contents of
the files they name. `parse_http_traffic` and `handle_connection` can be used
on their own.

`utilkit.webutils` builds small JavaScript snippets (`construct_path`,
`construct_js_var`, `construct_js_input_var`) for pages whose buttons fetch a
route and show the reply.

## What it does not do

- The HTTP client only sends GET requests; other request types raise
  `ValueError`. It does not follow redirects or decode chunked bodies.
- The HTTP server reads at most 4095 bytes of a request, serves plain HTTP
  only, and always uses the status code passed to the send methods.
- There is no JSON encoder, and the JSON decoder handles only the
  line-oriented layout described above.
- The package provides no command-line program.

## Tests

The test suite uses pytest; install the `test` extra to get it and run
`pytest`.