"""ICMP echo requests and replies, and a ping loop over a raw socket."""

from __future__ import annotations

import os
import socket
import struct
import sys
import time
from dataclasses import dataclass
from pathlib import Path

ECHO_REPLY = 0
ECHO_REQUEST = 8
PACKET_SIZE = 64
ICMP_HEADER_SIZE = 8
DATA_SIZE = PACKET_SIZE - ICMP_HEADER_SIZE
FILL_BYTE = 0x42
IP_HEADER_SIZE = 20
RECEIVE_SIZE = PACKET_SIZE + IP_HEADER_SIZE
TIMEOUT = 5.0
INTERVAL = 1.0

_ICMP_HEADER = struct.Struct("!BBHHH")


def checksum(data: bytes) -> int:
    """Return the 16-bit one's-complement Internet checksum of the data."""
    data = bytes(data)
    if len(data) % 2:
        data += b"\0"
    total = sum(struct.unpack(f"!{len(data) // 2}H", data))
    total = (total >> 16) + (total & 0xFFFF)
    total += total >> 16
    return ~total & 0xFFFF


def build_echo_request(seq: int, ident: int) -> bytes:
    """Build a 64-byte echo request whose payload is filled with 0x42."""
    header = _ICMP_HEADER.pack(ECHO_REQUEST, 0, 0, ident & 0xFFFF, seq & 0xFFFF)
    packet = header + bytes([FILL_BYTE]) * DATA_SIZE
    return packet[:2] + struct.pack("!H", checksum(packet)) + packet[4:]


@dataclass(frozen=True)
class EchoReply:
    size: int
    seq: int
    ttl: int


def parse_reply(packet: bytes, ident: int) -> EchoReply | None:
    """Decode an IP packet holding an ICMP message.

    Returns the echo reply if it answers a request with this identifier,
    otherwise None. Raises ValueError if the packet is too short.
    """
    if len(packet) < IP_HEADER_SIZE:
        raise ValueError("packet too short for an IP header")
    header_length = (packet[0] & 0x0F) * 4
    if len(packet) < max(header_length, IP_HEADER_SIZE) + ICMP_HEADER_SIZE:
        raise ValueError("packet too short for an ICMP header")
    icmp_type, _code, _sum, reply_id, reply_seq = _ICMP_HEADER.unpack_from(packet, header_length)
    if icmp_type != ECHO_REPLY or reply_id != ident & 0xFFFF:
        return None
    return EchoReply(size=len(packet) - header_length, seq=reply_seq, ttl=packet[8])


@dataclass
class PingStats:
    transmitted: int = 0
    received: int = 0

    def loss(self) -> float:
        """Percentage of transmitted packets that got no reply."""
        if self.transmitted <= 0:
            return 0.0
        return 100.0 * (self.transmitted - self.received) / self.transmitted

    def summary(self, address: str) -> str:
        return (
            f"--- {address} ping statistics ---\n"
            f"{self.transmitted} packets transmitted, {self.received} received, "
            f"{self.loss():.1f}% packet loss\n"
        )


def ping_loop(sock: socket.socket, address: str, ident: int, stats: PingStats) -> None:
    """Send an echo request each second and report replies, until interrupted."""
    while True:
        seq = stats.transmitted
        stats.transmitted += 1
        start = time.perf_counter()
        try:
            sock.sendto(build_echo_request(seq, ident), (address, 0))
        except OSError as exc:
            print(f"sendto failed: {exc}", file=sys.stderr)
            continue
        try:
            data, source = sock.recvfrom(RECEIVE_SIZE)
        except TimeoutError:
            print(f"Request timeout for icmp_seq={seq}")
        except OSError as exc:
            print(f"recvfrom error: {exc}", file=sys.stderr)
        else:
            elapsed = (time.perf_counter() - start) * 1000.0
            try:
                reply = parse_reply(data, ident)
            except ValueError:
                reply = None
            if reply is not None:
                stats.received += 1
                print(
                    f"{reply.size} bytes from {source[0]}: icmp_seq={reply.seq} "
                    f"ttl={reply.ttl} time={elapsed:.3f} ms"
                )
        time.sleep(INTERVAL)


def main(argv: list[str] | None = None) -> int:
    """Ping an IPv4 address until interrupted, then print statistics."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print(f"Usage: {Path(sys.argv[0]).name} hostname", file=sys.stderr)
        return 1
    target = args[0]
    try:
        address = socket.inet_ntoa(socket.inet_pton(socket.AF_INET, target))
    except OSError:
        print(f"Bad address: {target}", file=sys.stderr)
        return 1
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
    except OSError as exc:
        print(f"socket: {exc}", file=sys.stderr)
        print("You need to be root to create raw sockets!", file=sys.stderr)
        return 1
    stats = PingStats()
    with sock:
        sock.settimeout(TIMEOUT)
        print(f"PING {target} ({address}): {DATA_SIZE} data bytes")
        try:
            ping_loop(sock, address, os.getpid() & 0xFFFF, stats)
        except KeyboardInterrupt:
            print("\n" + stats.summary(address), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())