import pytest

from crdtcounter.pncounter import MAX_REPLICAS, PNCounter, main


def test_dump_format_from_demo():
    counter = PNCounter()
    counter.increment(0, 5)
    assert counter.dump("A") == (
        "A value=5\n  inc: 5 0 0 0 0 0 0 0 \n  dec: 0 0 0 0 0 0 0 0 \n\n"
    )


def test_value_is_increments_minus_decrements():
    counter = PNCounter(3)
    counter.increment(0, 4)
    counter.decrement(2, 1)
    counter.decrement(0, 6)
    assert counter.value() == 4 - 1 - 6
    assert counter.inc == (4, 0, 0)
    assert counter.dec == (6, 0, 1)


def test_out_of_range_replica_ignored():
    counter = PNCounter()
    counter.increment(MAX_REPLICAS, 10)
    counter.decrement(-1, 10)
    assert counter == PNCounter()
    assert counter.value() == 0


def test_negative_delta_rejected():
    with pytest.raises(ValueError):
        PNCounter().increment(0, -1)
    with pytest.raises(ValueError):
        PNCounter().decrement(0, -1)


def test_two_way_merge_converges():
    a = PNCounter()
    b = PNCounter()
    a.increment(0, 5)
    b.decrement(1, 2)
    a.merge(b)
    b.merge(a)
    assert a == b
    assert a.value() == 3


def test_merge_commutative_and_idempotent():
    a = PNCounter(4)
    b = PNCounter(4)
    a.increment(1, 3)
    a.decrement(2, 1)
    b.increment(1, 1)
    b.decrement(3, 5)
    ab = PNCounter(4)
    ab.merge(a)
    ab.merge(b)
    ba = PNCounter(4)
    ba.merge(b)
    ba.merge(a)
    assert ab == ba
    snapshot_inc, snapshot_dec = ab.inc, ab.dec
    ab.merge(a)
    assert (ab.inc, ab.dec) == (snapshot_inc, snapshot_dec)


def test_merge_size_mismatch():
    with pytest.raises(ValueError):
        PNCounter(2).merge(PNCounter(3))


def test_main_output(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "B value=-2\n" in out
    assert "A after merge value=3\n" in out
    assert "B after merge value=3\n" in out