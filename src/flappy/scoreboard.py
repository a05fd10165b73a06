"""
scoreboard.py: Score submission and leaderboard backends, plus the
background reporter that calls them without blocking the game loop.
"""

import logging
import sqlite3
import threading
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import httpx

from .constants import DB_FILE, SCOREBOARD_TIMEOUT, LEADERBOARD_SIZE

logger = logging.getLogger(__name__)

Leaderboard = List[Tuple[str, int]]


class ScoreBoard(ABC):
    """Interface shared by the scoreboard backends."""

    @abstractmethod
    def submit(self, name: str, score: int):
        ...

    @abstractmethod
    def leaderboard(self, limit: int = LEADERBOARD_SIZE) -> Leaderboard:
        ...

    def close(self):
        pass


class HttpScoreBoard(ScoreBoard):
    """
    Remote scoreboard: POST a form to submit, GET a JSON array of
    ``[name, score, ...]`` rows for the leaderboard.

    Script endpoints answer with a redirect to the actual content, so the
    client must follow redirects.
    """

    def __init__(self, url: str, timeout: float = SCOREBOARD_TIMEOUT,
                 transport: Optional[httpx.BaseTransport] = None):
        self.url = url
        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout), follow_redirects=True, transport=transport)

    def submit(self, name: str, score: int):
        response = self._client.post(self.url, data={"name": name, "score": str(score)})
        response.raise_for_status()
        logger.info("Score submitted: %s", response.text)

    def leaderboard(self, limit: int = LEADERBOARD_SIZE) -> Leaderboard:
        response = self._client.get(self.url)
        response.raise_for_status()
        rows = response.json()
        if not isinstance(rows, list):
            raise ValueError(f"Expected a JSON array of rows, got {type(rows).__name__}")

        entries: Leaderboard = []
        for row in rows:
            try:
                entries.append((str(row[0]), int(row[1])))
            except (TypeError, ValueError, IndexError, KeyError):
                logger.debug("Skipping malformed leaderboard row: %r", row)
        return entries[:limit]

    def close(self):
        self._client.close()


class SqliteScoreBoard(ScoreBoard):
    """Local scoreboard stored in a SQLite file."""

    def __init__(self, db_file: str = DB_FILE):
        # Reporter threads share this connection; the lock serializes them
        self.conn = sqlite3.connect(db_file, check_same_thread=False)
        self.lock = threading.Lock()
        self.setup()

    def setup(self):
        """Creates tables if they don't exist."""
        with self.lock:
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS Scores (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    score INTEGER NOT NULL
                )
            """)
            self.conn.commit()

    def submit(self, name: str, score: int):
        with self.lock:
            self.conn.execute(
                "INSERT INTO Scores (name, score) VALUES (?, ?)", (name, score))
            self.conn.commit()
        logger.info("Score stored locally: %s %d", name, score)

    def leaderboard(self, limit: int = LEADERBOARD_SIZE) -> Leaderboard:
        """Fetches the top scores (name, score)."""
        with self.lock:
            cur = self.conn.execute(
                "SELECT name, score FROM Scores ORDER BY score DESC, id ASC LIMIT ?", (limit,))
            return [(name, score) for name, score in cur.fetchall()]

    def close(self):
        with self.lock:
            self.conn.close()


class ScoreReporter:
    """
    Fire-and-forget access to a ScoreBoard from worker threads.

    Failures are logged and dropped. Every request gets a sequence number;
    the leaderboard behind the lock only ever moves to the result of a newer
    request, and requests issued before a restart are ignored.
    """

    def __init__(self, board: Optional[ScoreBoard], limit: int = LEADERBOARD_SIZE):
        self.board = board
        self.limit = limit

        self._leaderboard: Optional[Leaderboard] = None
        self._last_seq = 0          # Last request issued
        self._applied_seq = 0       # Request whose result is shown
        self.state_lock = threading.Lock()
        self._threads: List[threading.Thread] = []

    def new_game(self):
        """Invalidates any leaderboard fetched or requested for a previous game."""
        with self.state_lock:
            self._applied_seq = self._last_seq
            self._leaderboard = None

    def fetch_leaderboard(self) -> Optional[Leaderboard]:
        """Safely retrieve the latest leaderboard for the current game."""
        with self.state_lock:
            return list(self._leaderboard) if self._leaderboard is not None else None

    def refresh(self):
        """Fetches the leaderboard in the background."""
        self._start(self._run, None, 0)

    def submit(self, name: str, score: int):
        """Submits a score, then refreshes the leaderboard, in the background."""
        self._start(self._run, name, score)

    def join(self, timeout: Optional[float] = None):
        """Waits for in-flight calls."""
        for thread in list(self._threads):
            thread.join(timeout)
        self._threads = [t for t in self._threads if t.is_alive()]

    def close(self, timeout: Optional[float] = None):
        self.join(timeout)
        if self.board is not None:
            self.board.close()

    def _start(self, target, *args):
        if self.board is None:
            return
        with self.state_lock:
            self._last_seq += 1
            seq = self._last_seq
        self._threads = [t for t in self._threads if t.is_alive()]
        thread = threading.Thread(target=target, args=(seq, *args), daemon=True)
        self._threads.append(thread)
        thread.start()

    def _run(self, seq: int, name: Optional[str], score: int):
        if name is not None:
            try:
                self.board.submit(name, score)
            except Exception as e:
                logger.warning("Error submitting score: %s", e)

        try:
            rows = self.board.leaderboard(self.limit)
        except Exception as e:
            logger.warning("Error fetching leaderboard: %s", e)
            return

        with self.state_lock:
            if seq <= self._applied_seq:
                logger.debug("Discarding stale leaderboard from request %d", seq)
                return
            self._applied_seq = seq
            self._leaderboard = rows[:self.limit]
        logger.info("Leaderboard updated (%d entries)", len(rows))
