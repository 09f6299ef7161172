"""SHA-512 compression with per-round state inspection."""

from __future__ import annotations

import re
import struct
import sys
from typing import Sequence

MASK = (1 << 64) - 1
BLOCK_SIZE = 128
LENGTH_OFFSET = 112
MAX_ROUND = 79
MAX_MESSAGE = 1023

K = (
    0x428A2F98D728AE22, 0x7137449123EF65CD, 0xB5C0FBCFEC4D3B2F, 0xE9B5DBA58189DBBC,
    0x3956C25BF348B538, 0x59F111F1B605D019, 0x923F82A4AF194F9B, 0xAB1C5ED5DA6D8118,
    0xD807AA98A3030242, 0x12835B0145706FBE, 0x243185BE4EE4B28C, 0x550C7DC3D5FFB4E2,
    0x72BE5D74F27B896F, 0x80DEB1FE3B1696B1, 0x9BDC06A725C71235, 0xC19BF174CF692694,
    0xE49B69C19EF14AD2, 0xEFBE4786384F25E3, 0x0FC19DC68B8CD5B5, 0x240CA1CC77AC9C65,
    0x2DE92C6F592B0275, 0x4A7484AA6EA6E483, 0x5CB0A9DCBD41FBD4, 0x76F988DA831153B5,
    0x983E5152EE66DFAB, 0xA831C66D2DB43210, 0xB00327C898FB213F, 0xBF597FC7BEEF0EE4,
    0xC6E00BF33DA88FC2, 0xD5A79147930AA725, 0x06CA6351E003826F, 0x142929670A0E6E70,
    0x27B70A8546D22FFC, 0x2E1B21385C26C926, 0x4D2C6DFC5AC42AED, 0x53380D139D95B3DF,
    0x650A73548BAF63DE, 0x766A0ABB3C77B2A8, 0x81C2C92E47EDAEE6, 0x92722C851482353B,
    0xA2BFE8A14CF10364, 0xA81A664BBC423001, 0xC24B8B70D0F89791, 0xC76C51A30654BE30,
    0xD192E819D6EF5218, 0xD69906245565A910, 0xF40E35855771202A, 0x106AA07032BBD1B8,
    0x19A4C116B8D2D0C8, 0x1E376C085141AB53, 0x2748774CDF8EEB99, 0x34B0BCB5E19B48A8,
    0x391C0CB3C5C95A63, 0x4ED8AA4AE3418ACB, 0x5B9CCA4F7763E373, 0x682E6FF3D6B2B8A3,
    0x748F82EE5DEFB2FC, 0x78A5636F43172F60, 0x84C87814A1F0AB72, 0x8CC702081A6439EC,
    0x90BEFFFA23631E28, 0xA4506CEBDE82BDE9, 0xBEF9A3F7B2C67915, 0xC67178F2E372532B,
    0xCA273ECEEA26619C, 0xD186B8C721C0C207, 0xEADA7DD6CDE0EB1E, 0xF57D4F7FEE6ED178,
    0x06F067AA72176FBA, 0x0A637DC5A2C898A6, 0x113F9804BEF90DAE, 0x1B710B35131C471B,
    0x28DB77F523047D84, 0x32CAAB7B40C72493, 0x3C9EBE0A15C9BEBC, 0x431D67C49C100D4C,
    0x4CC5D4BECB3E42B6, 0x597F299CFC657E2A, 0x5FCB6FAB3AD6FAEC, 0x6C44198C4A475817,
)

INITIAL_STATE = (
    0x6A09E667F3BCC908, 0xBB67AE8584CAA73B, 0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
    0x510E527FADE682D1, 0x9B05688C2B3E6C1F, 0x1F83D9ABFB41BD6B, 0x5BE0CD19137E2179,
)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (64 - n))) & MASK


def _big_sigma0(x: int) -> int:
    return _rotr(x, 28) ^ _rotr(x, 34) ^ _rotr(x, 39)


def _big_sigma1(x: int) -> int:
    return _rotr(x, 14) ^ _rotr(x, 18) ^ _rotr(x, 41)


def _small_sigma0(x: int) -> int:
    return _rotr(x, 1) ^ _rotr(x, 8) ^ (x >> 7)


def _small_sigma1(x: int) -> int:
    return _rotr(x, 19) ^ _rotr(x, 61) ^ (x >> 6)


def compress(state: Sequence[int], block: bytes) -> tuple[int, ...]:
    """Run the 80-round compression of one 128-byte block and return the new state."""
    if len(state) != 8:
        raise ValueError("state must hold exactly 8 words")
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")

    schedule = list(struct.unpack(">16Q", bytes(block)))
    for t in range(16, 80):
        schedule.append(
            (
                _small_sigma1(schedule[t - 2])
                + schedule[t - 7]
                + _small_sigma0(schedule[t - 15])
                + schedule[t - 16]
            )
            & MASK
        )

    a, b, c, d, e, f, g, h = state
    for k, w in zip(K, schedule):
        choose = (e & f) ^ ((~e & MASK) & g)
        majority = (a & b) ^ (a & c) ^ (b & c)
        temp1 = (h + _big_sigma1(e) + choose + k + w) & MASK
        temp2 = (_big_sigma0(a) + majority) & MASK
        h, g, f, e, d, c, b, a = g, f, e, (d + temp1) & MASK, c, b, a, (temp1 + temp2) & MASK

    return tuple((old + new) & MASK for old, new in zip(state, (a, b, c, d, e, f, g, h)))


def hash_state(message: str | bytes) -> tuple[int, ...]:
    """Return the eight state words after feeding the message block by block.

    The message ends at its first NUL byte. A short final block gets the 0x80
    marker, and when it has room, the 64-bit bit length at bytes 112..119.
    """
    data = message.encode() if isinstance(message, str) else bytes(message)
    data = data.split(b"\0", 1)[0]
    bit_length = (len(data) * 8) & MASK

    state = INITIAL_STATE
    for offset in range(0, len(data), BLOCK_SIZE):
        chunk = data[offset:offset + BLOCK_SIZE]
        if len(chunk) < BLOCK_SIZE:
            block = bytearray(BLOCK_SIZE)
            block[:len(chunk)] = chunk
            block[len(chunk)] = 0x80
            if len(chunk) < LENGTH_OFFSET:
                block[LENGTH_OFFSET:LENGTH_OFFSET + 8] = bit_length.to_bytes(8, "big")
            chunk = bytes(block)
        state = compress(state, chunk)
    return state


def format_rounds(state: Sequence[int], rounds: int) -> str:
    """Render the first ``rounds`` state words and their concatenation."""
    if not 0 <= rounds <= MAX_ROUND:
        raise ValueError(f"round must be in the range [0, {MAX_ROUND}]")
    shown = list(state)[:rounds]
    lines = [f"values for round {rounds}:"]
    lines.extend(f"H[{index}] = {word:016x}" for index, word in enumerate(shown))
    lines.append("Final hash value:")
    lines.append("".join(f"{word:016x}" for word in shown))
    return "\n".join(lines) + "\n"


def _read(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        return ""


def main(argv: list[str] | None = None) -> int:
    """Prompt for a text and a round number, then print the state words."""
    text = _read("Enter the text: ")
    data = text.encode()[:MAX_MESSAGE]
    match = re.match(r"\s*([+-]?\d+)", _read("Enter the round number: "))
    rounds = int(match.group(1)) if match else -1
    if not 0 <= rounds <= MAX_ROUND:
        print(f"Invalid round number. It should be in the range [0, {MAX_ROUND}].")
        return 1
    sys.stdout.write(format_rounds(hash_state(data), rounds))
    return 0


if __name__ == "__main__":
    sys.exit(main())