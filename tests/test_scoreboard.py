"""
Tests for the scoreboard backends and the background reporter.
"""

import json
import threading
import time
from urllib.parse import parse_qs

import httpx
import pytest

from flappy.scoreboard import HttpScoreBoard, SqliteScoreBoard, ScoreBoard, ScoreReporter

URL = "https://scores.example.test/exec"


def make_http_board(handler):
    return HttpScoreBoard(URL, transport=httpx.MockTransport(handler))


class FakeBoard(ScoreBoard):
    def __init__(self, rows=None, fail_submit=False, fail_fetch=False):
        self.rows = rows or []
        self.submitted = []
        self.fail_submit = fail_submit
        self.fail_fetch = fail_fetch
        self.release = threading.Event()
        self.release.set()
        self.closed = False

    def submit(self, name, score):
        if self.fail_submit:
            raise httpx.ConnectError("offline")
        self.submitted.append((name, score))
        self.rows.append((name, score))

    def leaderboard(self, limit=5):
        self.release.wait(5)
        if self.fail_fetch:
            raise httpx.ReadTimeout("slow")
        return sorted(self.rows, key=lambda row: -row[1])[:limit]

    def close(self):
        self.closed = True


# ---------------------------------------------------------------------------
# HTTP backend
# ---------------------------------------------------------------------------

def test_http_submit_posts_form():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text="ok")

    make_http_board(handler).submit("ABC", 12)

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == URL
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert parse_qs(request.content.decode()) == {"name": ["ABC"], "score": ["12"]}


def test_http_leaderboard_parses_rows_and_skips_bad_ones():
    rows = [["AAA", 30], ["BBB", "20"], ["bad"], None, ["CCC", 10, "extra"], ["DDD", "x"]]

    def handler(request):
        assert request.method == "GET"
        return httpx.Response(200, content=json.dumps(rows))

    board = make_http_board(handler)
    assert board.leaderboard() == [("AAA", 30), ("BBB", 20), ("CCC", 10)]
    assert board.leaderboard(limit=1) == [("AAA", 30)]


def test_http_errors_propagate():
    board = make_http_board(lambda request: httpx.Response(500))
    with pytest.raises(httpx.HTTPStatusError):
        board.submit("ABC", 1)
    with pytest.raises(httpx.HTTPStatusError):
        board.leaderboard()


def test_http_follows_script_redirects():
    rows = [["AAA", 30]]

    def handler(request):
        if request.url.path == "/exec":
            return httpx.Response(302, headers={"Location": "https://scores.example.test/data"})
        return httpx.Response(200, json=rows)

    board = make_http_board(handler)
    assert board.leaderboard() == [("AAA", 30)]
    board.submit("ABC", 12)


def test_http_rejects_non_array_payload():
    board = make_http_board(lambda request: httpx.Response(200, json={"rows": []}))
    with pytest.raises(ValueError):
        board.leaderboard()


# ---------------------------------------------------------------------------
# SQLite backend
# ---------------------------------------------------------------------------

def test_sqlite_orders_by_score(tmp_path):
    board = SqliteScoreBoard(str(tmp_path / "scores.db"))
    for name, score in [("AAA", 3), ("BBB", 9), ("CCC", 5), ("DDD", 9)]:
        board.submit(name, score)

    assert board.leaderboard() == [("BBB", 9), ("DDD", 9), ("CCC", 5), ("AAA", 3)]
    assert board.leaderboard(limit=2) == [("BBB", 9), ("DDD", 9)]
    board.close()


def test_sqlite_survives_reopen(tmp_path):
    path = str(tmp_path / "scores.db")
    board = SqliteScoreBoard(path)
    board.submit("AAA", 4)
    board.close()

    board = SqliteScoreBoard(path)
    assert board.leaderboard() == [("AAA", 4)]
    board.close()


# ---------------------------------------------------------------------------
# Reporter
# ---------------------------------------------------------------------------

def test_reporter_submits_then_fetches():
    board = FakeBoard(rows=[("OLD", 50)])
    reporter = ScoreReporter(board)

    reporter.submit("ABC", 7)
    reporter.join(timeout=5)

    assert board.submitted == [("ABC", 7)]
    assert reporter.fetch_leaderboard() == [("OLD", 50), ("ABC", 7)]


def test_reporter_refresh_only_fetches():
    board = FakeBoard(rows=[("AAA", 1)])
    reporter = ScoreReporter(board)

    reporter.refresh()
    reporter.join(timeout=5)

    assert board.submitted == []
    assert reporter.fetch_leaderboard() == [("AAA", 1)]


def test_reporter_swallows_failures(caplog):
    board = FakeBoard(rows=[("AAA", 1)])
    reporter = ScoreReporter(board)
    reporter.refresh()
    reporter.join(timeout=5)

    board.fail_submit = board.fail_fetch = True
    reporter.submit("ABC", 3)
    reporter.join(timeout=5)

    # Previous leaderboard is left untouched
    assert reporter.fetch_leaderboard() == [("AAA", 1)]
    assert "Error submitting score" in caplog.text
    assert "Error fetching leaderboard" in caplog.text


def test_reporter_drops_results_from_previous_game():
    board = FakeBoard(rows=[("AAA", 1)])
    board.release.clear()
    reporter = ScoreReporter(board)

    reporter.refresh()
    reporter.new_game()
    board.release.set()
    reporter.join(timeout=5)

    assert reporter.fetch_leaderboard() is None


class GatedBoard(FakeBoard):
    """Each leaderboard call blocks on its own gate, in call order."""

    def __init__(self, rows=None):
        super().__init__(rows=rows)
        self.gates = []
        self.entered = threading.Semaphore(0)

    def leaderboard(self, limit=5):
        rows = sorted(self.rows, key=lambda row: -row[1])[:limit]
        gate = threading.Event()
        self.gates.append(gate)
        self.entered.release()
        gate.wait(5)
        return rows


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        assert time.monotonic() < deadline, "timed out"
        time.sleep(0.01)


def test_slow_earlier_fetch_does_not_overwrite_newer_leaderboard():
    board = GatedBoard(rows=[("OLD", 50)])
    reporter = ScoreReporter(board)

    reporter.refresh()
    assert board.entered.acquire(timeout=5)
    reporter.submit("ABC", 7)
    assert board.entered.acquire(timeout=5)

    # The fetch after the submit answers first, the game-over fetch last
    board.gates[1].set()
    wait_for(lambda: reporter.fetch_leaderboard() is not None)
    board.gates[0].set()
    reporter.join(timeout=5)

    assert reporter.fetch_leaderboard() == [("OLD", 50), ("ABC", 7)]


def test_scoreboard_interface_requires_both_operations():
    class SubmitOnly(ScoreBoard):
        def submit(self, name, score):
            pass

    with pytest.raises(TypeError):
        SubmitOnly()


def test_reporter_trims_to_limit():
    board = FakeBoard(rows=[(f"P{i}", i) for i in range(10)])
    reporter = ScoreReporter(board, limit=3)
    reporter.refresh()
    reporter.join(timeout=5)
    assert reporter.fetch_leaderboard() == [("P9", 9), ("P8", 8), ("P7", 7)]


def test_reporter_without_board_is_a_noop():
    reporter = ScoreReporter(None)
    reporter.submit("ABC", 3)
    reporter.refresh()
    reporter.close()
    assert reporter.fetch_leaderboard() is None


def test_close_closes_board():
    board = FakeBoard()
    reporter = ScoreReporter(board)
    reporter.close(timeout=1)
    assert board.closed
