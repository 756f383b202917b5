import pytest

from paxnet.array import CapacityError
from paxnet.ring import RingQueue


def test_source_queue_example():
    queue = RingQueue(8, 0)
    queue.insert_head(5)
    queue.create_head()
    queue.create_head()
    queue.create_head()
    assert [queue[i] for i in range(len(queue))] == [0, 0, 0, 5]

    assert queue.remove_tail() == 5
    assert list(queue) == [0, 0, 0]


def test_fifo_order():
    queue = RingQueue(4, 0)
    for value in [1, 2, 3]:
        queue.insert_tail(value)
    assert [queue.remove_head() for _ in range(3)] == [1, 2, 3]
    assert len(queue) == 0


def test_lifo_order_at_tail():
    queue = RingQueue(4, 0)
    for value in [1, 2, 3]:
        queue.insert_tail(value)
    assert [queue.remove_tail() for _ in range(3)] == [3, 2, 1]


def test_wraparound_keeps_order():
    queue = RingQueue(3, 0)
    expected = []
    for value in range(10):
        if queue.is_full:
            assert queue.remove_head() == expected.pop(0)
        queue.insert_tail(value)
        expected.append(value)
        assert list(queue) == expected


def test_full_raises():
    queue = RingQueue(2, 0)
    queue.insert_tail(1)
    queue.insert_head(2)
    with pytest.raises(CapacityError):
        queue.insert_tail(3)
    with pytest.raises(CapacityError):
        queue.create_head()
    assert list(queue) == [2, 1]


def test_empty_removal_raises():
    queue = RingQueue(2, 0)
    with pytest.raises(IndexError):
        queue.remove_head()
    with pytest.raises(IndexError):
        queue.remove_tail()


def test_update_and_read():
    queue = RingQueue(4, 0)
    for value in [1, 2, 3]:
        queue.insert_tail(value)
    queue.update(1, 20)
    queue.update_head(10)
    queue.update_tail(30)
    assert list(queue) == [10, 20, 30]
    assert queue.head() == 10
    assert queue.tail() == 30


def test_index_out_of_range():
    queue = RingQueue(4, 0)
    queue.insert_tail(1)
    with pytest.raises(IndexError):
        queue[1]
    with pytest.raises(IndexError):
        queue[-1]
    with pytest.raises(IndexError):
        queue.update(2, 0)


def test_create_tail_uses_default():
    queue = RingQueue(3, "x")
    queue.insert_tail("a")
    queue.create_tail()
    assert list(queue) == ["a", "x"]


def test_clear():
    queue = RingQueue(3, 0)
    queue.insert_tail(1)
    queue.clear()
    assert len(queue) == 0
    with pytest.raises(IndexError):
        queue.head()


def test_fill():
    queue = RingQueue(4, 0)
    queue.insert_tail(7)
    queue.fill()
    assert len(queue) == queue.capacity
    assert queue.head() == 7
    assert list(queue)[1:] == [0, 0, 0]


def test_copy_preserves_head_order():
    queue = RingQueue(3, 0)
    for value in [1, 2, 3]:
        queue.insert_tail(value)
    queue.remove_head()
    queue.insert_tail(4)
    copy = queue.copy()
    assert list(copy) == [2, 3, 4]
    copy.update_head(99)
    assert queue.head() == 2


def test_copy_amount_truncates_from_head():
    queue = RingQueue(4, 0)
    for value in [1, 2, 3]:
        queue.insert_tail(value)
    copy = queue.copy(2)
    assert list(copy) == [1, 2]
    assert copy.capacity == 2


def test_invalid_capacity():
    with pytest.raises(ValueError):
        RingQueue(-1)
    with pytest.raises(ValueError):
        RingQueue(3, 0).copy(0)