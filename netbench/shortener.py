"""A URL shortener backed by an SQLite table."""

from __future__ import annotations

import random
import sqlite3
import string
import sys
import time
from collections import deque
from typing import TextIO

CODE_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits
CODE_LENGTH = 6
MAX_TRIES = 10
MAX_COMMAND = 15
MAX_URL = 2047
DEFAULT_DB = "urls.db"

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS urls ("
    "code TEXT PRIMARY KEY,"
    "url TEXT NOT NULL,"
    "created INTEGER NOT NULL"
    ");"
)

_default_rng = random.Random()


def generate_code(rng: random.Random | None = None) -> str:
    """Return a random alphanumeric code of CODE_LENGTH characters."""
    source = _default_rng if rng is None else rng
    return "".join(source.choice(CODE_CHARS) for _ in range(CODE_LENGTH))


class Shortener:
    """Maps short codes to URLs in an SQLite database."""

    def __init__(self, path: str = DEFAULT_DB, rng: random.Random | None = None) -> None:
        self._rng = random.Random() if rng is None else rng
        self._db = sqlite3.connect(path)
        try:
            with self._db:
                self._db.execute(_SCHEMA)
        except sqlite3.Error:
            self._db.close()
            raise

    def shorten(self, url: str) -> str:
        """Store the URL under a fresh code and return the code.

        Up to MAX_TRIES codes are drawn looking for an unused one; if all are
        taken the insert fails with sqlite3.IntegrityError.
        """
        for _ in range(MAX_TRIES):
            code = generate_code(self._rng)
            taken = self._db.execute("SELECT code FROM urls WHERE code = ?;", (code,)).fetchone()
            if taken is None:
                break
        with self._db:
            self._db.execute(
                "INSERT INTO urls (code, url, created) VALUES (?, ?, ?);",
                (code, url, int(time.time())),
            )
        return code

    def expand(self, code: str) -> str | None:
        """Return the URL stored under the code, or None if there is none."""
        row = self._db.execute("SELECT url FROM urls WHERE code = ?;", (code,)).fetchone()
        return None if row is None else row[0]

    def close(self) -> None:
        self._db.close()

    def __enter__(self) -> "Shortener":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class _WordReader:
    """Reads whitespace-separated words, cutting each to a maximum width."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending: deque[str] = deque()

    def take(self, width: int) -> str | None:
        while not self._pending:
            line = self._stream.readline()
            if not line:
                return None
            self._pending.extend(line.split())
        word = self._pending.popleft()
        if len(word) > width:
            self._pending.appendleft(word[width:])
            word = word[:width]
        return word


def main(argv: list[str] | None = None) -> int:
    """Interactive loop: shorten <url>, expand <code>, quit."""
    args = sys.argv[1:] if argv is None else argv
    path = args[0] if args else DEFAULT_DB
    try:
        shortener = Shortener(path)
    except sqlite3.Error as exc:
        print(f"Can't open database: {exc}", file=sys.stderr)
        return 1

    with shortener:
        print("URL Shortener - Commands: shorten <url>, expand <code>, quit\n")
        words = _WordReader(sys.stdin)
        while True:
            print("> ", end="", flush=True)
            command = words.take(MAX_COMMAND)
            if command is None or command == "quit":
                break
            if command not in ("shorten", "expand"):
                print("Unknown command")
                continue
            argument = words.take(MAX_URL)
            if argument is None:
                continue
            if command == "shorten":
                try:
                    print(f"Short code: {shortener.shorten(argument)}")
                except sqlite3.Error:
                    print("Error creating short URL")
            else:
                url = shortener.expand(argument)
                print("Code not found" if url is None else f"URL: {url}")
    return 0


if __name__ == "__main__":
    sys.exit(main())