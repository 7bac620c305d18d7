"""Operation-based counter replicated over UDP by sending accumulated increments."""

from __future__ import annotations

import re
import sys
import threading
from collections.abc import Iterable, Sequence

from crdtcounter.replication import (
    MAX_REPLICAS,
    NodeConfig,
    UsageError,
    _serve,
    parse_delta,
    parse_node_args,
)

_REMOTE = re.compile(r"\s*\+?(\d+)")


class OpCounter:
    """A counter that applies peers' increments and buffers its own until sent."""

    def __init__(self, replica_id: int) -> None:
        if not 0 <= replica_id < MAX_REPLICAS:
            raise ValueError(f"replica_id must be between 0 and {MAX_REPLICAS - 1}")
        self.replica_id = replica_id
        self._value = 0
        self._pending = 0
        self._lock = threading.Lock()

    def increment(self, delta: int) -> None:
        """Apply a local increment and queue it for the next broadcast."""
        if delta < 0:
            raise ValueError("increments must be non-negative")
        with self._lock:
            self._value += delta
            self._pending += delta

    def apply_remote(self, text: str) -> int:
        """Apply an increment received from a peer and return its amount."""
        match = _REMOTE.match(text)
        amount = int(match.group(1)) if match else 0
        with self._lock:
            self._value += amount
        return amount

    def drain(self) -> int:
        """Return the increments queued since the last drain and clear them."""
        with self._lock:
            pending, self._pending = self._pending, 0
        return pending

    def total(self) -> int:
        """Return local plus received increments."""
        with self._lock:
            return self._value


def run_node(config: NodeConfig, lines: Iterable[str]) -> OpCounter:
    """Run a replica until the input runs out and return its counter."""
    counter = OpCounter(config.replica_id)

    def on_line(line: str) -> None:
        delta = parse_delta(line)
        counter.increment(delta)
        if delta > 0:
            print(f"[Local] +{delta} (total={counter.total()})", flush=True)

    def on_datagram(text: str) -> None:
        amount = counter.apply_remote(text)
        print(f"[Recv] {amount}", flush=True)
        print(f"  → total={counter.total()}", flush=True)

    _serve(config, lines, on_line, lambda: str(counter.drain()), on_datagram)
    return counter


def main(argv: Sequence[str] | None = None) -> int:
    """Start an operation-based replica: <replica_id> <listen_port> <peer_host:port> ..."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        config = parse_node_args(args)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return 1
    try:
        run_node(config, sys.stdin)
    except OSError as exc:
        print(f"socket: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())