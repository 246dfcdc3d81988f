"""
Keep the durable store in sync with the in-memory board, and get it back on startup.

Three independent keys:
* the board itself (JSON envelope), written through a DebouncedSaver
* the active participant id, written immediately
* the current view, written immediately

Nothing in here raises on storage trouble: a broken record loads as the default board, a failed write is logged
and dropped (the next change schedules a fresh attempt).
"""

import json
import logging
import threading
import time
from typing import Callable, Optional, Protocol

from pydantic import ValidationError

from src.api.models import GameStateEnvelope
from src.core.exceptions import GameStateError, StorageError
from src.core.shared_types import SaveStatus, View
from src.db.repository import KeyValueStore
from src.squares.game import GameState

logger = logging.getLogger(__name__)

STATE_KEY = "superbowl_squares_state_v3"
ACTIVE_PARTICIPANT_KEY = "squares_active_player"
VIEW_KEY = "squares_current_view"

DEFAULT_DEBOUNCE_S = 0.5


class Timer(Protocol):
    """The part of threading.Timer the saver relies on."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


def _default_timer(delay_s: float, callback: Callable[[], None]) -> Timer:
    timer = threading.Timer(delay_s, callback)
    timer.daemon = True
    return timer


def _now_ms() -> int:
    return int(time.time() * 1000)


# --- LOADING ---
def load_state(store: KeyValueStore) -> GameState:
    """
    Recover the board from the store.
    ----

    1. nothing stored / unreadable / not JSON --> default board
    2. stored record is laid over the default envelope (stored values win), so fields added later get their defaults
    3. the merged record must still describe a valid board (10x10 grid, axes matching the lock), else --> default board
    """
    try:
        saved = store.get_item(STATE_KEY)
    except StorageError as e:
        logger.error("Failed to read saved board, starting fresh: %s", e)
        return GameState.default()
    if saved is None:
        return GameState.default()

    try:
        parsed = json.loads(saved)
    except ValueError as e:
        logger.error("Failed to load game state: %s", e)
        return GameState.default()
    if not isinstance(parsed, dict):
        logger.error("Failed to load game state: record is not an object")
        return GameState.default()

    merged = {**_default_envelope(), **parsed}
    try:
        envelope = GameStateEnvelope.model_validate(merged)
        return GameState.from_model(envelope.to_board())
    except (ValidationError, GameStateError) as e:
        logger.error("Saved game state is malformed, starting fresh: %s", e)
        return GameState.default()


def _default_envelope() -> dict:
    default = GameStateEnvelope.from_board(GameState.default().to_model())
    return default.model_dump(by_alias=True, exclude={"last_saved"})


def serialize_state(state: GameState) -> str:
    return GameStateEnvelope.from_board(state.to_model()).to_json()


# --- PREFERENCES ---
def load_active_participant(store: KeyValueStore) -> Optional[str]:
    try:
        return store.get_item(ACTIVE_PARTICIPANT_KEY)
    except StorageError as e:
        logger.error("Failed to read active participant: %s", e)
        return None


def save_active_participant(store: KeyValueStore, participant_id: Optional[str]) -> None:
    try:
        if participant_id:
            store.set_item(ACTIVE_PARTICIPANT_KEY, participant_id)
        else:
            store.remove_item(ACTIVE_PARTICIPANT_KEY)
    except StorageError as e:
        logger.error("Failed to save active participant: %s", e)


def load_view(store: KeyValueStore) -> View:
    try:
        saved = store.get_item(VIEW_KEY)
    except StorageError as e:
        logger.error("Failed to read view: %s", e)
        return View.GRID
    try:
        return View(saved)
    except ValueError:
        return View.GRID


def save_view(store: KeyValueStore, view: View) -> None:
    try:
        store.set_item(VIEW_KEY, view.value)
    except StorageError as e:
        logger.error("Failed to save view: %s", e)


# --- DEBOUNCED SAVING ---
class DebouncedSaver:
    """
    Coalesces rapid board changes into a single write.

    Each schedule() cancels the pending timer (if any) and starts a new one. Only the timer belonging to the most
    recent schedule() is allowed to write, so an older board can never overwrite a newer one.
    """

    def __init__(
        self,
        store: KeyValueStore,
        delay_s: float = DEFAULT_DEBOUNCE_S,
        timer_factory: TimerFactory = _default_timer,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.store = store
        self.delay_s = delay_s
        self._timer_factory = timer_factory
        self._clock = clock
        self._lock = threading.RLock()
        self._generation = 0
        self._pending: Optional[GameState] = None
        self._timer: Optional[Timer] = None
        self.status = SaveStatus.IDLE
        self.last_saved: Optional[int] = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def schedule(self, state: GameState) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            self._pending = state
            self.status = SaveStatus.SAVING
            timer = self._timer_factory(self.delay_s, lambda: self._fire(generation))
            self._timer = timer
            timer.start()

    def flush(self) -> None:
        """Write the pending board right now (e.g. on shutdown)."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1
            state, self._pending = self._pending, None
            if state is not None:
                self._write(state)

    def cancel(self) -> None:
        """Drop the pending board without writing it."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1
            self._pending = None
            self.status = SaveStatus.IDLE if self.last_saved is None else SaveStatus.SAVED

    def _fire(self, generation: int) -> None:
        with self._lock:
            # superseded by a newer schedule() / flush() / cancel()
            if generation != self._generation or self._pending is None:
                return
            state, self._pending = self._pending, None
            self._timer = None
            self._write(state)

    def _write(self, state: GameState) -> None:
        """Called with the lock held."""
        timestamp = self._clock()
        try:
            self.store.set_item(STATE_KEY, serialize_state(state.with_last_saved(timestamp)))
        except StorageError as e:
            logger.error("Failed to save game state: %s", e)
            self.status = SaveStatus.IDLE if self.last_saved is None else SaveStatus.SAVED
            return
        self.last_saved = timestamp
        self.status = SaveStatus.SAVED
        logger.debug("Game state saved at %s", timestamp)
