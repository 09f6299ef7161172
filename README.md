# netbench

A collection of small command-line network tools, games and text utilities in
one package. Every tool is an importable module and also a console command.
It needs only Python 3.10 or later.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Networking tools

### Chat

A TCP chat server that accepts up to ten clients. Each message a client sends
is relayed to all the other connected clients.

```
netbench-chat-server [--host HOST] [--port PORT]   # default 0.0.0.0:8888
netbench-chat-client [--host HOST] [--port PORT]   # default 127.0.0.1:8888
```

The client prints incoming messages as `Received: ...` from a background
thread. Each line you type is sent to the server. In code, `ChatServer` runs
the relay with `serve_forever()` and stops it with `shutdown()`.

### UDP greeting

```
netbench-udp-server 9000
netbench-udp-client 9000
```

The server binds to `127.0.0.1` on the given port. It waits for one datagram,
prints it and exits. The client sends `Hello Server` to that port, padded with
NUL bytes to 1024 bytes.

### Ping

```
sudo netbench-ping 192.0.2.1
```

Sends one 64-byte ICMP echo request per second. Each reply is printed with its
sequence number, TTL and round-trip time. A request that gets no reply within
five seconds is reported as a timeout. Ctrl-C prints the statistics:
transmitted, received and packet loss. Raw sockets need root privileges, and
the argument must be a dotted IPv4 address.

You can also use the packet helpers directly:

- `checksum(data)` computes the Internet checksum.
- `build_echo_request(seq, ident)` builds a request.
- `parse_reply(packet, ident)` returns an `EchoReply` for a matching echo reply.
- `PingStats` keeps the counters and formats the summary.

### Port forwarder

```
netbench-forward LISTEN_PORT FORWARD_HOST [FORWARD_PORT]
```

Listens on `LISTEN_PORT` and relays each accepted connection in both
directions to `FORWARD_HOST:FORWARD_PORT`. If `FORWARD_PORT` is left out, the
listening port is used. A port below 1 is rejected.

### FTP-like file transfer

```
netbench-ftp-server [PORT]            # default port 8080, serves the current directory
netbench-ftp-client SERVER_IP [PORT]
```

Client commands:

| command      | effect                                    |
|--------------|-------------------------------------------|
| `ls`         | list regular files on the server          |
| `lls`        | list regular files in the local directory |
| `get <file>` | download a file from the server           |
| `put <file>` | upload a local file to the server         |
| `help`       | show the command list                     |
| `quit`       | end the session                           |

The client sends `LIST`, `RETR`, `STOR` and `QUIT` over the connection. Each
reply is one line with a code (`200`, `404` or `500`) and a message. A file
travels as an 8-byte length header followed by its contents.

The building blocks are in `netbench.ftp_protocol`: `send_response`,
`receive_response`, `send_file`, `receive_file` and `list_directory`. Failures
raise `FtpError`. `netbench.ftp_client.FtpClient` wraps a connected socket and
provides `list_remote()`, `get()`, `put()`, `quit()` and `run_command()`.

### Networked tic-tac-toe

```
netbench-ttt-server 5000
netbench-ttt-client localhost 5000
```

The server pairs players two at a time and runs each game on its own thread.
On your turn, enter `0`–`8` to pick a square, or `9` to ask how many players
are connected. The game ends on a win, a draw, or a disconnect.

The board rules can be used on their own through
`netbench.tictactoe_board.Board`, with `check_move`, `place`, `check_win` and
`render`.

### URL shortener

```
netbench-shortener [DATABASE]
```

An interactive prompt backed by an SQLite file, `urls.db` in the current
directory by default:

```
> shorten https://www.example.com/some/long/path
Short code: aB3xY9
> expand aB3xY9
URL: https://www.example.com/some/long/path
> quit
```

Codes are six characters drawn from letters and digits. In code, use
`Shortener.shorten(url)`, `Shortener.expand(code)` and `Shortener.close()`.

## Text and number utilities

### SHA-512 state inspector

```
netbench-sha512
```

Asks for a line of text and a count from 0 to 79. It compresses the message,
then prints that many 64-bit words of the SHA-512 state, followed by those
words joined together. In code, use `hash_state(message)`,
`compress(state, block)` and `format_rounds(state, rounds)`.

### Arithmetic compiler

```
netbench-calc
```

Reads an expression such as `3 + 4 - 2`. It supports `+`, `-`, `*` and `/` on
non-negative integers, evaluated strictly left to right. It prints the result
and a listing in a tiny assembly language (`LOAD`, `ADD`, `SUB`, `MUL`, `DIV`),
or `Invalid Expression`.

The library functions are `tokenize(text)`, `parse(tokens)` and
`generate_assembly(tokens)`. `parse` raises `ExpressionError` for a malformed
expression or for division by zero.

### Lexical analyser

```
netbench-lexer
```

Splits C-like expressions into keywords, integers, identifiers, operators and
unidentified tokens. The command analyses two built-in sample expressions.
`analyze(text)` returns a list of `LexToken` values, each with a `TokenKind`.

### Asteroids

```
netbench-asteroids
```

A 50×20 terminal game. Asteroids fall from the top. Each character read from
input advances the game one tick, and `a` and `d` move the ship. The game ends
when an asteroid hits the ship or input ends.

## What is not included

The package has no HTTP server: it does not serve web pages or answer HTTP
requests.