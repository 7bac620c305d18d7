import io

import pytest

from crdtcounter.gcounter import GCounter, aggregate, main


def test_worked_example_from_demo():
    counter = GCounter(0, 3)
    counter.increment()
    assert counter.describe() == "State [ 1 0 0 ]  Total: 1"
    counter.merge([1, 2, 1])
    assert counter.describe() == "State [ 1 2 1 ]  Total: 4"


def test_increment_only_touches_own_slot():
    counter = GCounter(2, 4)
    counter.increment(5)
    counter.increment()
    assert counter.snapshot() == (0, 0, 6, 0)
    assert counter.value() == 6


def test_negative_increment_rejected():
    with pytest.raises(ValueError):
        GCounter(0, 2).increment(-1)


@pytest.mark.parametrize("replica_id,num", [(-1, 3), (3, 3), (0, 0)])
def test_invalid_construction(replica_id, num):
    with pytest.raises(ValueError):
        GCounter(replica_id, num)


def test_merge_is_commutative_and_idempotent():
    a = GCounter(0, 3)
    b = GCounter(1, 3)
    a.increment(3)
    b.increment(7)
    a_copy = GCounter(0, 3)
    a_copy.merge(a)
    a.merge(b)
    b.merge(a_copy)
    assert a.snapshot() == b.snapshot()
    before = a.snapshot()
    a.merge(before)
    assert a.snapshot() == before


def test_merge_never_decreases():
    counter = GCounter(0, 3)
    counter.increment(4)
    counter.merge([1, 0, 0])
    assert counter.snapshot()[0] == 4


def test_merge_wrong_length_rejected():
    with pytest.raises(ValueError):
        GCounter(0, 3).merge([1, 2])


def test_aggregate_equals_sum_of_increments():
    increments = [2, 3, 4]
    assert aggregate(increments) == sum(increments)


def test_aggregate_rejects_negative():
    with pytest.raises(ValueError):
        aggregate([1, -1, 0])


def test_main_interactive(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1 2\n3\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "[child 1] local total = 2" in out
    assert f"[parent] aggregated total = {aggregate([1, 2, 3])}" in out


def test_main_invalid_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1 x 3\n"))
    assert main([]) == 1
    assert "Invalid input." in capsys.readouterr().err


def test_main_fixed_demo(capsys):
    assert main(["--demo"]) == 0
    out = capsys.readouterr().out
    assert "After merge:\nState [ 1 2 1 ]  Total: 4" in out