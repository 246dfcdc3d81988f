"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/fakes required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.exceptions import StorageError
from src.db.schema import Base
from src.services.persistence import DebouncedSaver
from src.squares.game import GameState
from src.squares.grid import all_cells

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


# --- FAKE DEPENDENCIES ----
class MemoryStore:
    """Mock the KeyValueStore using a dictionary. Counts writes per key."""

    def __init__(self) -> None:
        self.items: dict[str, str] = {}
        self.writes: dict[str, int] = {}
        self.fail_writes = False
        self.fail_reads = False

    def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("storage unavailable")
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("quota exceeded")
        self.items[key] = value
        self.writes[key] = self.writes.get(key, 0) + 1

    def remove_item(self, key: str) -> None:
        if self.fail_writes:
            raise StorageError("quota exceeded")
        self.items.pop(key, None)


class FakeTimer:
    """Stands in for threading.Timer. Never fires by itself: tests call fire()."""

    def __init__(self, delay_s: float, callback: Callable[[], None]) -> None:
        self.delay_s = delay_s
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        """Simulate the delay running out. A cancelled threading.Timer never runs its callback."""
        if not self.cancelled:
            self.callback()


class FakeTimerFactory:
    """Keeps every timer it created, in order."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay_s: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay_s, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


FIXED_NOW_MS = 1_760_000_000_000


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def timers() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def saver(memory_store: MemoryStore, timers: FakeTimerFactory) -> DebouncedSaver:
    return DebouncedSaver(
        memory_store, delay_s=0.5, timer_factory=timers, clock=lambda: FIXED_NOW_MS
    )


# --- BOARDS ---
def fill_board(state: GameState, participant_ids: list[str]) -> GameState:
    """Take every square, cycling through the given participants."""
    for index, cell in enumerate(all_cells()):
        state = state.toggle_cell(
            cell.row, cell.col, participant_ids[index % len(participant_ids)]
        )
    return state


@pytest.fixture
def two_players() -> GameState:
    return GameState.default().add_participant("Alice", "Smith").add_participant("Bob", "Jones")


@pytest.fixture
def full_board(two_players: GameState) -> GameState:
    return fill_board(two_players, [p.id for p in two_players.participants])
