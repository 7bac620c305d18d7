"""State-based grow-only counter (G-Counter) and a multi-replica demo."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Iterator, Sequence
from typing import TextIO

DEFAULT_REPLICAS = 3


class GCounter:
    """A grow-only counter holding one non-decreasing slot per replica."""

    def __init__(self, replica_id: int, num_replicas: int = DEFAULT_REPLICAS) -> None:
        if num_replicas <= 0:
            raise ValueError("num_replicas must be positive")
        if not 0 <= replica_id < num_replicas:
            raise ValueError(
                f"replica_id must be between 0 and {num_replicas - 1}"
            )
        self.replica_id = replica_id
        self.num_replicas = num_replicas
        self._state = [0] * num_replicas

    def increment(self, delta: int = 1) -> None:
        """Add a non-negative amount to this replica's own slot."""
        if delta < 0:
            raise ValueError("a G-Counter cannot be decremented")
        self._state[self.replica_id] += delta

    def merge(self, other_state: Sequence[int] | GCounter) -> None:
        """Join another state into this one by taking the per-slot maximum."""
        if isinstance(other_state, GCounter):
            other_state = other_state.snapshot()
        if len(other_state) != self.num_replicas:
            raise ValueError(
                f"expected a state of {self.num_replicas} entries, "
                f"got {len(other_state)}"
            )
        self._state = [max(mine, theirs) for mine, theirs in zip(self._state, other_state)]

    def snapshot(self) -> tuple[int, ...]:
        """Return a copy of the full state vector."""
        return tuple(self._state)

    def value(self) -> int:
        """Return the counter's value: the sum of every replica's slot."""
        return sum(self._state)

    def describe(self) -> str:
        """Return a one-line human-readable view of the state and total."""
        entries = "".join(f"{count} " for count in self._state)
        return f"State [ {entries}]  Total: {self.value()}"

    def __repr__(self) -> str:
        return (
            f"GCounter(replica_id={self.replica_id}, "
            f"state={list(self._state)})"
        )


def _replicas(increments: Sequence[int]) -> Iterator[GCounter]:
    """Yield one independent replica per entry, each incremented locally."""
    for replica_id, count in enumerate(increments):
        if count < 0:
            raise ValueError(f"replica {replica_id}: increments must be non-negative")
        replica = GCounter(replica_id, len(increments))
        for _ in range(count):
            replica.increment()
        yield replica


def aggregate(increments: Sequence[int]) -> int:
    """Increment independent replicas and return the total after merging them all."""
    increments = list(increments)
    if not increments:
        raise ValueError("at least one replica is required")
    merged = GCounter(0, len(increments))
    for replica in _replicas(increments):
        merged.merge(replica.snapshot())
    return merged.value()


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _read_increments(count: int, tokens: Iterable[str]) -> list[int]:
    tokens = iter(tokens)
    increments = []
    for replica_id in range(count):
        print(f"Replica {replica_id} — increments? ", end="", flush=True)
        try:
            value = int(next(tokens))
        except (StopIteration, ValueError):
            raise ValueError("Invalid input.") from None
        if value < 0:
            raise ValueError("Invalid input.")
        increments.append(value)
    return increments


def _fixed_demo() -> None:
    counter = GCounter(0, 3)
    counter.increment()
    print("After increment:")
    print(counter.describe())
    counter.merge([1, 2, 1])
    print("After merge:")
    print(counter.describe())


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive multi-replica demo, or the fixed merge demo."""
    parser = argparse.ArgumentParser(description="G-Counter demo")
    parser.add_argument(
        "--replicas", type=int, default=DEFAULT_REPLICAS,
        help="number of replicas (default: %(default)s)",
    )
    parser.add_argument(
        "--demo", action="store_true",
        help="run the fixed increment-and-merge demo instead",
    )
    args = parser.parse_args(argv)

    if args.demo:
        _fixed_demo()
        return 0

    if args.replicas <= 0:
        print("replicas must be positive", file=sys.stderr)
        return 1

    print(f"=== G‑Counter interactive demo ({args.replicas} replicas) ===")
    try:
        increments = _read_increments(args.replicas, _tokens(sys.stdin))
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    for replica in _replicas(increments):
        print(f"[child {replica.replica_id}] local total = {replica.value()}")
    print(f"[parent] aggregated total = {aggregate(increments)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())