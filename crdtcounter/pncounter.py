"""Positive-negative counter (PN-Counter) built from two grow-only vectors."""

from __future__ import annotations

import sys
from collections.abc import Sequence

MAX_REPLICAS = 8


class PNCounter:
    """A counter supporting increments and decrements with a join-semilattice merge."""

    def __init__(self, num_replicas: int = MAX_REPLICAS) -> None:
        if num_replicas <= 0:
            raise ValueError("num_replicas must be positive")
        self.num_replicas = num_replicas
        self._inc = [0] * num_replicas
        self._dec = [0] * num_replicas

    @property
    def inc(self) -> tuple[int, ...]:
        return tuple(self._inc)

    @property
    def dec(self) -> tuple[int, ...]:
        return tuple(self._dec)

    def _in_range(self, replica: int) -> bool:
        return 0 <= replica < self.num_replicas

    def increment(self, replica: int, delta: int = 1) -> None:
        """Add delta to replica's positive slot; unknown replicas are ignored."""
        if delta < 0:
            raise ValueError("delta must be non-negative")
        if self._in_range(replica):
            self._inc[replica] += delta

    def decrement(self, replica: int, delta: int = 1) -> None:
        """Add delta to replica's negative slot; unknown replicas are ignored."""
        if delta < 0:
            raise ValueError("delta must be non-negative")
        if self._in_range(replica):
            self._dec[replica] += delta

    def merge(self, other: PNCounter) -> None:
        """Join other into this counter by per-slot maximum."""
        if other.num_replicas != self.num_replicas:
            raise ValueError("cannot merge counters of different sizes")
        self._inc = [max(a, b) for a, b in zip(self._inc, other._inc)]
        self._dec = [max(a, b) for a, b in zip(self._dec, other._dec)]

    def value(self) -> int:
        """Return total increments minus total decrements."""
        return sum(self._inc) - sum(self._dec)

    def dump(self, label: str) -> str:
        """Return a multi-line view of the value and both vectors."""
        inc = "".join(f"{n} " for n in self._inc)
        dec = "".join(f"{n} " for n in self._dec)
        return f"{label} value={self.value()}\n  inc: {inc}\n  dec: {dec}\n\n"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PNCounter):
            return NotImplemented
        return self._inc == other._inc and self._dec == other._dec

    def __repr__(self) -> str:
        return f"PNCounter(inc={self._inc}, dec={self._dec})"


def main(argv: Sequence[str] | None = None) -> int:
    """Show two replicas diverging and then converging after a two-way merge."""
    a = PNCounter()
    b = PNCounter()
    a.increment(0, 5)
    b.decrement(1, 2)

    print(a.dump("A"), end="")
    print(b.dump("B"), end="")

    a.merge(b)
    b.merge(a)

    print(a.dump("A after merge"), end="")
    print(b.dump("B after merge"), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())