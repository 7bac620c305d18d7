"""State-based G-Counter replicated over UDP as 'id=value,id=value' messages."""

from __future__ import annotations

import re
import sys
import threading
from collections.abc import Iterable, Sequence

from crdtcounter.replication import (
    BUF_SIZE,
    MAX_REPLICAS,
    NodeConfig,
    UsageError,
    _serve,
    parse_delta,
    parse_node_args,
)

_ENTRY = re.compile(r"\s*([+-]?\d+)=\s*\+?(\d+)")


class StateCounter:
    """A thread-safe G-Counter with one slot for each of MAX_REPLICAS replicas."""

    def __init__(self, replica_id: int) -> None:
        if not 0 <= replica_id < MAX_REPLICAS:
            raise ValueError(f"replica_id must be between 0 and {MAX_REPLICAS - 1}")
        self.replica_id = replica_id
        self._values = [0] * MAX_REPLICAS
        self._lock = threading.Lock()

    def increment(self, delta: int) -> None:
        """Add a non-negative amount to this replica's own slot."""
        if delta < 0:
            raise ValueError("a G-Counter cannot be decremented")
        with self._lock:
            self._values[self.replica_id] += delta

    def merge_str(self, incoming: str) -> None:
        """Merge a serialized state, keeping the larger value of every slot.

        Malformed entries and unknown replica ids are skipped.
        """
        text = incoming[: BUF_SIZE - 1]
        with self._lock:
            for token in filter(None, text.split(",")):
                match = _ENTRY.match(token)
                if not match:
                    continue
                replica, value = int(match.group(1)), int(match.group(2))
                if 0 <= replica < MAX_REPLICAS and value > self._values[replica]:
                    self._values[replica] = value

    def serialize(self) -> str:
        """Return the non-zero slots as 'id=value,...', kept under BUF_SIZE bytes."""
        with self._lock:
            entries = [(i, v) for i, v in enumerate(self._values) if v]
        pieces = []
        used = 0
        for replica, value in entries:
            piece = f"{replica}={value},"
            if used + len(piece) >= BUF_SIZE:
                break
            pieces.append(piece)
            used += len(piece)
        return "".join(pieces)[:-1]

    def total(self) -> int:
        """Return the sum of all slots."""
        with self._lock:
            return sum(self._values)


def run_node(config: NodeConfig, lines: Iterable[str]) -> StateCounter:
    """Run a replica until the input runs out and return its counter."""
    counter = StateCounter(config.replica_id)

    def on_line(line: str) -> None:
        delta = parse_delta(line)
        if delta > 0:
            counter.increment(delta)
            print(f"[Local] +{delta} (total={counter.total()})", flush=True)

    def on_datagram(text: str) -> None:
        counter.merge_str(text)
        print(f"[Recv] {text}", flush=True)
        print(f"  → total={counter.total()}", flush=True)

    _serve(config, lines, on_line, counter.serialize, on_datagram)
    return counter


def main(argv: Sequence[str] | None = None) -> int:
    """Start a state-based replica: <replica_id> <listen_port> <peer_host:port> ..."""
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