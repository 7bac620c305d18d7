"""Command-line parsing and the UDP node loop shared by the replicated counters."""

from __future__ import annotations

import re
import socket
import threading
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

MAX_REPLICAS = 256
BUF_SIZE = 4096
BROADCAST_INTERVAL_SEC = 5

USAGE = "Usage: <replica_id> <listen_port> <peer_host:port> [...]"

_DELTA = re.compile(r"\s*\+?(\d+)")
_RECEIVE_POLL_SEC = 0.2

Peer = tuple[str, int]


class UsageError(Exception):
    """Raised when the node's command-line arguments are invalid."""


@dataclass(frozen=True)
class NodeConfig:
    """Settings of one replica: its id, the port it listens on and its peers."""

    replica_id: int
    listen_port: int
    peers: tuple[Peer, ...]
    broadcast_interval: float = BROADCAST_INTERVAL_SEC


def _parse_port(text: str) -> int:
    try:
        port = int(text)
    except ValueError:
        raise UsageError(f"Invalid port: {text}") from None
    if not 0 <= port <= 0xFFFF:
        raise UsageError(f"Invalid port: {text}")
    return port


def parse_peer(text: str) -> Peer:
    """Split 'host:port' into an IPv4 address and a port number."""
    host, colon, port = text.partition(":")
    if not colon:
        raise UsageError(f"Invalid peer format: {text}")
    try:
        socket.inet_pton(socket.AF_INET, host)
    except OSError:
        raise UsageError(f"Invalid IP: {host}") from None
    return host, _parse_port(port)


def parse_node_args(argv: Sequence[str]) -> NodeConfig:
    """Build a NodeConfig from '<replica_id> <listen_port> <peer_host:port> ...'."""
    if len(argv) < 3:
        raise UsageError(USAGE)
    try:
        replica_id = int(argv[0])
    except ValueError:
        raise UsageError(f"Invalid replica_id: {argv[0]}") from None
    if not 0 <= replica_id < MAX_REPLICAS:
        raise UsageError(f"replica_id must be between 0 and {MAX_REPLICAS - 1}")
    listen_port = _parse_port(argv[1])
    peers = tuple(parse_peer(item) for item in argv[2:])
    return NodeConfig(replica_id, listen_port, peers)


def parse_delta(line: str) -> int:
    """Read a leading unsigned decimal number from a line; anything else counts as 0."""
    match = _DELTA.match(line)
    return int(match.group(1)) if match else 0


def _receive(
    sock: socket.socket, stop: threading.Event, handle: Callable[[str], None]
) -> None:
    while not stop.is_set():
        try:
            data = sock.recv(BUF_SIZE)
        except socket.timeout:
            continue
        except ConnectionResetError:
            continue
        except OSError:
            break
        if data:
            handle(data.decode("utf-8", errors="replace"))


def _serve(
    config: NodeConfig,
    lines: Iterable[str],
    handle_line: Callable[[str], None],
    outgoing: Callable[[], str],
    handle_datagram: Callable[[str], None],
) -> None:
    """Feed input lines, broadcast periodically and merge what peers send.

    A last broadcast is made once the input is exhausted.
    """
    stop = threading.Event()
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(("", config.listen_port))
        sock.settimeout(_RECEIVE_POLL_SEC)
        receiver = threading.Thread(
            target=_receive, args=(sock, stop, handle_datagram), daemon=True
        )
        receiver.start()

        def broadcast() -> None:
            payload = outgoing().encode("utf-8")
            for peer in config.peers:
                sock.sendto(payload, peer)

        try:
            last_broadcast: float | None = None
            for line in lines:
                handle_line(line)
                now = time.monotonic()
                if last_broadcast is None or now - last_broadcast >= config.broadcast_interval:
                    broadcast()
                    last_broadcast = now
            broadcast()
        finally:
            stop.set()
            receiver.join()