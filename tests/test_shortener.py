import io
import random
import re
import sqlite3
import sys

import pytest

from netbench.shortener import CODE_CHARS, CODE_LENGTH, Shortener, generate_code, main


class _FixedChoice:
    def choice(self, seq):
        return seq[0]


def test_generate_code_shape():
    code = generate_code(random.Random(3))
    assert len(code) == CODE_LENGTH
    assert set(code) <= set(CODE_CHARS)


def test_generate_code_is_reproducible_with_seed():
    codes = [generate_code(random.Random(42)) for _ in range(3)]
    assert len(set(codes)) == 1
    assert len(codes[0]) == CODE_LENGTH


def test_generate_code_with_fixed_choice():
    assert generate_code(_FixedChoice()) == "aaaaaa"


def test_shorten_and_expand_round_trip():
    with Shortener(":memory:") as shortener:
        code = shortener.shorten("https://example.com/page")
        assert shortener.expand(code) == "https://example.com/page"


def test_distinct_urls_get_distinct_codes():
    with Shortener(":memory:", rng=random.Random(1)) as shortener:
        codes = {shortener.shorten(f"https://example.com/{n}") for n in range(20)}
        assert len(codes) == 20


def test_expand_unknown_code_is_none():
    with Shortener(":memory:") as shortener:
        assert shortener.expand("nothere") is None


def test_exhausted_codes_raise_integrity_error():
    with Shortener(":memory:", rng=_FixedChoice()) as shortener:
        assert shortener.shorten("https://example.com/a") == "aaaaaa"
        with pytest.raises(sqlite3.IntegrityError):
            shortener.shorten("https://example.com/b")
        assert shortener.expand("aaaaaa") == "https://example.com/a"


def test_database_persists_between_instances(tmp_path):
    path = str(tmp_path / "urls.db")
    with Shortener(path) as first:
        code = first.shorten("https://example.com/kept")
    with Shortener(path) as second:
        assert second.expand(code) == "https://example.com/kept"


def test_main_session(tmp_path, monkeypatch, capsys):
    path = str(tmp_path / "urls.db")
    session = "shorten https://example.com/x\nexpand zzzzzz\nbogus\nquit\n"
    monkeypatch.setattr(sys, "stdin", io.StringIO(session))
    assert main([path]) == 0
    out = capsys.readouterr().out
    assert out.startswith("URL Shortener - Commands: shorten <url>, expand <code>, quit\n\n")
    assert "Code not found" in out
    assert "Unknown command" in out
    code = re.search(r"Short code: (\w+)", out).group(1)
    with Shortener(path) as shortener:
        assert shortener.expand(code) == "https://example.com/x"


def test_main_expands_stored_code(tmp_path, monkeypatch, capsys):
    path = str(tmp_path / "urls.db")
    with Shortener(path) as shortener:
        code = shortener.shorten("https://example.com/y")
    monkeypatch.setattr(sys, "stdin", io.StringIO(f"expand {code}\n"))
    assert main([path]) == 0
    assert "URL: https://example.com/y" in capsys.readouterr().out


def test_main_cuts_long_commands(tmp_path, monkeypatch, capsys):
    path = str(tmp_path / "urls.db")
    monkeypatch.setattr(sys, "stdin", io.StringIO("averyveryverylongcommand quit\n"))
    assert main([path]) == 0
    assert capsys.readouterr().out.count("Unknown command") == 2