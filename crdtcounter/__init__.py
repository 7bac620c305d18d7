"""Grow-only and positive-negative CRDT counters with UDP replication nodes."""

__version__ = "0.1.0"
__all__ = ["gcounter", "pncounter", "replication", "udp_state", "udp_op"]