import pytest

from starshooter.leaderboard import Leaderboard


def test_entries_are_sorted_descending():
    board = Leaderboard(8)
    board.insert(10, "bob")
    board.insert(30, "alice")
    board.insert(20, "carol")
    assert list(board) == [(30, "alice"), (20, "carol"), (10, "bob")]


def test_equal_scores_keep_insertion_order():
    board = Leaderboard(8)
    board.insert(50, "first")
    board.insert(50, "second")
    board.insert(60, "top")
    assert list(board) == [(60, "top"), (50, "first"), (50, "second")]


def test_capacity_drops_lowest():
    board = Leaderboard(3)
    for score, name in [(5, "a"), (40, "b"), (15, "c"), (25, "d")]:
        board.insert(score, name)
    assert len(board) == 3
    assert list(board) == [(40, "b"), (25, "d"), (15, "c")]


def test_capacity_drops_newest_among_tied_lowest():
    board = Leaderboard(2)
    board.insert(10, "old")
    board.insert(20, "high")
    board.insert(10, "new")
    assert list(board) == [(20, "high"), (10, "old")]


def test_default_capacity_is_eight():
    board = Leaderboard()
    for score in range(20):
        board.insert(score, f"p{score}")
    assert len(board) == 8
    assert [s for s, _ in board] == sorted(range(12, 20), reverse=True)


def test_clear_empties():
    board = Leaderboard(8)
    board.insert(1, "x")
    board.clear()
    assert len(board) == 0
    assert list(board) == []


def test_save_writes_score_name_lines(tmp_path):
    board = Leaderboard(8)
    board.insert(10, "bob")
    board.insert(30, "alice")
    path = tmp_path / "save.dat"
    board.save(path)
    assert path.read_text(encoding="utf-8") == "30 alice\n10 bob\n"


def test_save_load_round_trip(tmp_path):
    board = Leaderboard(8)
    for score, name in [(70, "无名氏"), (15, "zed"), (70, "amy")]:
        board.insert(score, name)
    path = tmp_path / "save.dat"
    board.save(path)
    other = Leaderboard(8)
    other.insert(999, "stale")
    other.load(path)
    assert list(other) == list(board)


def test_load_stops_at_bad_pair(tmp_path):
    path = tmp_path / "save.dat"
    path.write_text("40 ann\nxx bad\n20 joe\n", encoding="utf-8")
    board = Leaderboard(8)
    board.load(path)
    assert list(board) == [(40, "ann")]


def test_load_ignores_dangling_score(tmp_path):
    path = tmp_path / "save.dat"
    path.write_text("40 ann\n20", encoding="utf-8")
    board = Leaderboard(8)
    board.load(path)
    assert list(board) == [(40, "ann")]


def test_load_missing_file_raises_and_keeps_entries(tmp_path):
    board = Leaderboard(8)
    board.insert(5, "keep")
    with pytest.raises(FileNotFoundError):
        board.load(tmp_path / "missing.dat")
    assert list(board) == [(5, "keep")]