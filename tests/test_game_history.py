import pytest

from game2048 import ConfigurationError
from game_history import History, Snapshot


def test_snapshot_copies_by_value():
    board = [[2, 0], [0, 4]]
    snap = Snapshot.take(board, 12)
    board[0][0] = 1024
    assert snap.grid == ((2, 0), (0, 4))
    restored = snap.to_board()
    restored[1][1] = 8
    assert snap.to_board() == [[2, 0], [0, 4]]
    assert snap.score == 12


def test_default_depth_keeps_only_last_snapshot():
    history = History()
    history.push(Snapshot.take([[2, 0], [0, 0]], 0))
    history.push(Snapshot.take([[4, 0], [0, 0]], 4))
    assert len(history) == 1
    assert history.pop().score == 4
    assert history.pop() is None


def test_ring_buffer_drops_oldest():
    history = History(3)
    for score in range(5):
        history.push(Snapshot.take([[0, 0], [0, 0]], score))
    assert len(history) == 3
    assert history.peek().score == 4
    assert [history.pop().score for _ in range(3)] == [4, 3, 2]
    assert history.pop() is None
    assert len(history) == 0


def test_push_after_pop_reuses_slots():
    history = History(2)
    history.push(Snapshot.take([[0, 0], [0, 0]], 1))
    history.push(Snapshot.take([[0, 0], [0, 0]], 2))
    assert history.pop().score == 2
    history.push(Snapshot.take([[0, 0], [0, 0]], 3))
    history.push(Snapshot.take([[0, 0], [0, 0]], 4))
    assert [history.pop().score for _ in range(2)] == [4, 3]


def test_zero_capacity_disables_undo():
    history = History(0)
    history.push(Snapshot.take([[0, 0], [0, 0]], 1))
    assert len(history) == 0
    assert history.pop() is None
    assert history.peek() is None


def test_clear_and_negative_capacity():
    history = History(2)
    history.push(Snapshot.take([[0, 0], [0, 0]], 1))
    history.clear()
    assert history.pop() is None
    with pytest.raises(ConfigurationError):
        History(-1)
