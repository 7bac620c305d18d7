# crdtcounter

Conflict-free replicated counters, and two small UDP nodes that keep them in
sync between processes.

Included:

- `crdtcounter.gcounter.GCounter`: a state-based grow-only counter with one
  slot per replica. `merge` takes the slot-wise maximum, so merges are
  commutative, associative and idempotent. `aggregate(increments)` gives
  each replica its own counter, merges them all and returns the total.
- `crdtcounter.pncounter.PNCounter`: a positive-negative counter built from
  two grow-only vectors, one for increments and one for decrements. It has
  8 replica slots by default. Changes for a replica outside the range are
  ignored, and a negative delta raises `ValueError`.
- `crdtcounter.udp_state.StateCounter`: a thread-safe grow-only counter with
  256 slots (replica ids 0 to 255). Its state is sent as text of the form
  `id=value,id=value`. Slots that are zero are left out. Malformed entries
  and unknown ids in incoming text are skipped.
- `crdtcounter.udp_op.OpCounter`: an operation-based counter. It sends the
  increments collected since the last broadcast (`drain`), not its full
  state. It adds what peers send to its total (`apply_remote`).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using the counters

```python
from crdtcounter.gcounter import GCounter, aggregate
from crdtcounter.pncounter import PNCounter
from crdtcounter.udp_state import StateCounter

g = GCounter(0, 3)          # replica 0 of 3
g.increment()
g.merge([1, 2, 1])          # state received from another replica
print(g.value())            # 4
print(g.snapshot())         # (1, 2, 1)
print(g.describe())         # State [ 1 2 1 ]  Total: 4

print(aggregate([2, 3, 1])) # 6

a = PNCounter()
b = PNCounter()
a.increment(0, 5)
b.decrement(1, 2)
a.merge(b)
b.merge(a)
print(a.value(), b.value()) # 3 3

s = StateCounter(0)
s.increment(5)
s.merge_str("1=3,2=4")
print(s.total())            # 12
print(s.serialize())        # 0=5,1=3,2=4
```

## Commands

### Demos

```
crdt-gcounter-demo [--replicas N] [--demo]
```

By default, the command asks how many increments each replica should make.
There are 3 replicas unless `--replicas` gives another number. Each replica
counts on its own and prints its local total. Then all the snapshots are
merged and the aggregated total is printed. A negative or non-numeric answer
is rejected. With `--demo`, it runs a fixed example instead: it increments
replica 0 once and merges the state `[1, 2, 1]` into it.

```
crdt-pncounter-demo
```

Replica 0 adds 5 on one counter and replica 1 subtracts 2 on another. The
command prints both counters, merges them in both directions, and prints
them again. Both end with the value 3.

### UDP replication nodes

Both nodes take the same arguments:

```
crdt-udp-state <replica_id> <listen_port> <peer_host:port> [<peer_host:port> ...]
crdt-udp-op    <replica_id> <listen_port> <peer_host:port> [<peer_host:port> ...]
```

`replica_id` must be between 0 and 255. Each peer is an IPv4 address and a
port. A node listens for UDP datagrams on `listen_port` and prints what it
receives and its new total. It reads lines from standard input. A line that
starts with a positive number increments the local counter.

After reading a line, the node sends to all peers if this is the first line
or if at least five seconds have passed since its last send. When standard
input ends, the node sends once more and then stops.

- `crdt-udp-state` sends its full state. Receivers merge it by taking the
  maximum per replica, so repeated or reordered messages do no harm.
- `crdt-udp-op` sends only the sum added since the last send. Receivers add
  that sum to their own total.

For example, in two terminals:

```
crdt-udp-state 0 9000 127.0.0.1:9001
crdt-udp-state 1 9001 127.0.0.1:9000
```

Type a number in either terminal. Once that node has sent, the other node
shows the merged total.

The argument parsing is in `crdtcounter.replication`. `parse_node_args`
returns a `NodeConfig`, and `parse_peer` splits a `host:port` pair. Both
raise `UsageError` for bad input. `parse_delta` reads the leading number of
an input line and gives 0 if there is none. `run_node(config, lines)` in
either node module runs a node over any iterable of lines and returns its
counter.

## What it does not do

- The nodes send only when they read input or when input ends. They have no
  timer of their own, so an idle node sends nothing.
- Counters are kept in memory only. Nothing is saved between runs.
- Messages are plain UDP datagrams, with no acknowledgement or resending.
  With `crdt-udp-op`, a lost datagram means the increments in it are lost
  for that peer.
- Peers must be given as IPv4 addresses. Host names and IPv6 are not
  accepted, and there is no peer discovery.