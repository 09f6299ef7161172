import io

import pytest

from netbench.sha512 import (
    INITIAL_STATE,
    MASK,
    compress,
    format_rounds,
    hash_state,
    main,
)


def test_empty_message_leaves_initial_state():
    state = hash_state(b"")
    assert state == INITIAL_STATE
    assert f"{state[0]:016x}" == "6a09e667f3bcc908"


def test_short_message_uses_documented_padding():
    block = b"abc" + b"\x80" + bytes(108) + (24).to_bytes(8, "big") + bytes(8)
    assert len(block) == 128
    assert hash_state(b"abc") == compress(INITIAL_STATE, block)


def test_str_and_bytes_agree():
    assert hash_state("hello world") == hash_state(b"hello world")


def test_message_stops_at_nul():
    assert hash_state(b"abc\0def") == hash_state(b"abc")


def test_two_full_blocks_chain():
    first = b"a" * 128
    second = b"b" * 128
    assert hash_state(first + second) == compress(compress(INITIAL_STATE, first), second)


@pytest.mark.parametrize("size", [112, 120, 127])
def test_tail_without_room_for_length(size):
    message = b"x" * size
    block = message + b"\x80" + bytes(127 - size)
    assert hash_state(message) == compress(INITIAL_STATE, block)


def test_compress_words_stay_64_bit():
    state = compress(INITIAL_STATE, b"\xff" * 128)
    assert len(state) == 8
    assert all(0 <= word <= MASK for word in state)


def test_compress_rejects_short_block():
    with pytest.raises(ValueError):
        compress(INITIAL_STATE, b"short")


def test_compress_rejects_bad_state():
    with pytest.raises(ValueError):
        compress(INITIAL_STATE[:4], bytes(128))


def test_format_rounds_zero():
    assert format_rounds(INITIAL_STATE, 0) == "values for round 0:\nFinal hash value:\n\n"


def test_format_rounds_lists_words():
    text = format_rounds(INITIAL_STATE, 2)
    lines = text.splitlines()
    assert lines[0] == "values for round 2:"
    assert lines[1] == "H[0] = 6a09e667f3bcc908"
    assert lines[2] == f"H[1] = {INITIAL_STATE[1]:016x}"
    assert lines[4] == f"{INITIAL_STATE[0]:016x}{INITIAL_STATE[1]:016x}"


@pytest.mark.parametrize("rounds", [-1, 80])
def test_format_rounds_rejects_out_of_range(rounds):
    with pytest.raises(ValueError):
        format_rounds(INITIAL_STATE, rounds)


def test_main_prints_state(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("abc\n8\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert format_rounds(hash_state(b"abc"), 8) in out


def test_main_rejects_bad_round(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("abc\n80\n"))
    assert main([]) == 1
    assert "Invalid round number" in capsys.readouterr().out