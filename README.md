# sockcraft

This package holds small network programs and the pieces they are built from.
The programs are a UDP chat relay, a TCP command server, a calculator that
uses a length-framed JSON protocol, and a static-file HTTP server. The shared
pieces are a logger, an IPv4 address value, a thread pool, a TCP socket
wrapper, a forking TCP server and an AVL tree.

Every dependency is in the standard library. The forking servers call
`os.fork`, so they need a POSIX system.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Commands

Each command takes its arguments from the command line. On a usage error it
returns a code from `sockcraft.errors.ExitCode`, for example `USE_ERROR` or
`CIN_ERROR`. When binding or connecting fails it returns the code from the
`NetworkError` that was raised.

### UDP chat relay

```
sockcraft-udpserver PORT
sockcraft-udpclient SERVER_IP PORT
```

The server binds to all interfaces. It passes each datagram to
`Route.message_route` on the shared `ThreadPool`.

- `Route` keeps every peer that has written to it, in the order they joined.
- It sends each message to all of those peers.
- A peer that sends exactly `QUIT` gets that message too, and is then removed.

The client sends each line of standard input to the server. It prints every
datagram it receives on a second thread.

### TCP command server

```
sockcraft-tcpserver PORT
sockcraft-tcpclient SERVER_IP PORT
```

`ThreadedTcpServer` serves each connection on its own thread. It answers every
message with the handler's reply.

The command's handler is `CommandExecutor`. It runs a message through the
shell only when the message is on its allow-list (`ls`, `pwd`, `ll`). The reply
is the client's IP followed by the command's standard output. Any other message
gets the reply `huai ren`.

The client prompts with `please enter`, sends one line, and prints the reply.

### Network calculator

```
sockcraft-calcserver PORT
sockcraft-calcclient SERVER_IP PORT
```

The client asks for `x`, `y` and an operator, then sends them as a framed JSON
`Request`. A frame has the form `<length>\r\n<payload>\r\n`. It prints the
`result` of each `Response`.

The server uses `ForkingTcpServer`, which handles each client in a detached
grandchild process. It answers with `Calculator.solve`:

| Operator | Result |
|---|---|
| `+`, `-` | the sum or the difference |
| `/`, `%` | integer division and remainder, truncated toward zero |
| `/`, `%` with `y == 0` | `code` 1 |
| anything else | result 0, code 0 |

### Static HTTP server

```
sockcraft-httpd PORT
```

This serves files from `./myhtml`, reading one request per connection. The
response is `HTTP/1.0`.

- A request for `/` maps to `./myhtml/text.html`.
- A missing file gives `404 Not Found` with the text of `./myhtml/error.html`.
- A request for `/favicon.ico` gets no response.
- `Content-Type` is `text/html` for `.html` files and for paths without an
  extension, and `image/jpeg` for `.jpg` files. Other extensions get no
  `Content-Type` header.
- `Content-Length` is always set.

## Library use

```python
from sockcraft.protocol import Request, decode, encode
from sockcraft.netcal import Calculator
from sockcraft.avl import AVLTree

frame = encode('{"x":1}')            # '7\r\n{"x":1}\r\n'
payload, rest = decode(frame)        # ('{"x":1}', '')

response = Calculator().solve(Request(6, 3, "/"))   # Response(result=2, code=0)

tree = AVLTree()
for key in (3, 1, 2):
    tree.insert(key)
assert list(tree) == [1, 2, 3] and tree.is_balanced()
```

Other pieces you can use directly:

- `Protocol` reads and writes framed requests and responses over a `TcpSocket`.
- `InetAddr` is a frozen IPv4 address and port.
- `Dictionary` loads `word:translation` lines from a file and looks words up.
  It returns `unknown` for words it does not have.
- `sockcraft.tools` splits lines off a buffer and reads served files.

### Logging

```python
from sockcraft.log import Logger, LogLevel

log = Logger()
log.log(LogLevel.INFO, "server started")
log.enable_file("./Log", "my.log")
```

Lines have the form `[YYYY-MM-DD-hh-mm-ss][LEVEL][file][pid][line]text`. Each
call returns the line it wrote. By default lines go to standard output. After
`enable_file` they are appended to `./Log/my.log`. The modules share the logger
`sockcraft.log.logger`.

### Thread pool

```python
from sockcraft.threadpool import ThreadPool

with ThreadPool(4) as pool:
    pool.enqueue(lambda: print("work"))
```

`ThreadPool.instance()` returns a shared pool of five workers, which is started
the first time you call it. `stop()` lets queued tasks finish before the
workers exit.

## What it does not do

- The HTTP server parses only the request line, and it ignores headers and
  bodies, so every method is treated alike. It has no keep-alive.
- The HTTP server reads served files as text with their line breaks removed.
  Images and other binary files are not sent intact.
- No command serves `Dictionary` over the network. It is available only as a
  library class.
- Nothing is encrypted or authenticated.