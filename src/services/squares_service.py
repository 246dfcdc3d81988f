"""Orchestration of user intents to the domain layer and the persistence layer."""

import logging
import threading
from typing import Optional

from src.api.models import (
    AddParticipantRequest,
    ImportRequest,
    TeamNameRequest,
    ToggleCellRequest,
)
from src.core.config import Settings
from src.core.shared_types import SaveStatus, View
from src.db.repository import KeyValueStore
from src.services import transfer
from src.services.analysis import Analyst, OpenAIAnalyst, request_analysis
from src.services.persistence import (
    DebouncedSaver,
    load_active_participant,
    load_state,
    load_view,
    save_active_participant,
    save_view,
)
from src.squares.game import GameState
from src.squares.participant import Participant

logger = logging.getLogger(__name__)


class SquaresService:
    """
    One organizer, one board.

    Holds the current GameState plus the two presentation preferences (active participant, view),
    and keeps the store up to date after every change.
    """

    def __init__(
        self,
        store: KeyValueStore,
        analyst: Optional[Analyst] = None,
        saver: Optional[DebouncedSaver] = None,
    ) -> None:
        self.store = store
        self.analyst = analyst
        self.saver = saver or DebouncedSaver(store)
        self.state = load_state(store)
        self.active_participant_id = load_active_participant(store)
        self.view = load_view(store)
        self.analysis: Optional[str] = None
        self._analysis_lock = threading.Lock()

    @classmethod
    def from_settings(cls, store: KeyValueStore, settings: Settings) -> "SquaresService":
        """Wire the service up from configuration. Without an API key there is no analyst."""
        analyst = OpenAIAnalyst.from_settings(settings) if settings.analysis_api_key else None
        saver = DebouncedSaver(store, delay_s=settings.save_debounce_s)
        return cls(store, analyst=analyst, saver=saver)

    # -- Participants --
    def add_participant(self, request: AddParticipantRequest) -> Participant:
        """Register a participant and make them the active one."""
        self._commit(self.state.add_participant(request.first_name, request.last_name))
        new_participant = self.state.participants[-1]
        self.select_participant(new_participant.id)
        return new_participant

    def remove_participant(self, participant_id: str) -> None:
        """Remove a participant and their squares. Ignored while the numbers are drawn."""
        if self.state.is_locked:
            return
        self._commit(self.state.remove_participant(participant_id))
        if self.active_participant_id == participant_id:
            self.select_participant(None)

    def select_participant(self, participant_id: Optional[str]) -> None:
        self.active_participant_id = participant_id
        save_active_participant(self.store, participant_id)

    @property
    def active_participant(self) -> Optional[Participant]:
        """None when nobody is selected, or the selected participant no longer exists."""
        return self.state.participant(self.active_participant_id)

    # -- Board --
    def toggle_cell(self, request: ToggleCellRequest) -> None:
        active_id = self.active_participant.id if self.active_participant else None
        self._commit(self.state.toggle_cell(request.row, request.col, active_id))

    def randomize(self) -> bool:
        """Draw the numbers. Returns False when the board is not full or already locked."""
        drawn = self.state.randomize()
        if drawn is self.state:
            return False
        self._commit(drawn)
        return True

    def unlock(self) -> None:
        """
        Discard the drawn numbers (players and squares are kept).
        The UI must ask for confirmation first: the draw cannot be recovered.
        """
        self._commit(self.state.unlock())
        self.analysis = None

    def reset(self) -> None:
        """
        Delete ALL participants and ALL squares.
        The UI must ask for confirmation first: this cannot be undone.
        """
        self._commit(GameState.reset())
        self.analysis = None

    def set_team_name(self, request: TeamNameRequest) -> None:
        self._commit(self.state.set_team_name(request.side, request.name))

    # -- View --
    def set_view(self, view: View) -> None:
        self.view = view
        save_view(self.store, view)

    def toggle_view(self) -> View:
        self.set_view(View.SETTINGS if self.view == View.GRID else View.GRID)
        return self.view

    # -- Transfer codes --
    def export_code(self) -> str:
        return transfer.encode(self.state)

    def import_code(self, request: ImportRequest) -> GameState:
        """Replace the board with the one in the code. Raises InvalidTransferCodeError, leaving the board as it was."""
        imported = transfer.decode(request.code)
        self._commit(imported)
        self.analysis = None
        return imported

    # -- Analysis --
    def request_analysis(self) -> Optional[str]:
        """
        Ask the analyst about the drawn numbers.

        Returns None when there is nothing to analyse yet (no analyst configured / board unlocked)
        or when an earlier request is still running.
        """
        if self.analyst is None or not self.state.is_locked:
            return None
        if not self._analysis_lock.acquire(blocking=False):
            logger.info("Analysis already in progress, ignoring request")
            return None
        try:
            self.analysis = request_analysis(self.analyst, self.state)
        finally:
            self._analysis_lock.release()
        return self.analysis

    @property
    def is_analyzing(self) -> bool:
        return self._analysis_lock.locked()

    # -- Saving --
    @property
    def save_status(self) -> SaveStatus:
        return self.saver.status

    def close(self) -> None:
        """Write any pending board before shutting down."""
        self.saver.flush()

    # -- Internal helpers --
    def _commit(self, new_state: GameState) -> None:
        """Adopt the new state and schedule a save (no-op transitions are not saved again)."""
        if new_state == self.state:
            return
        self.state = new_state
        self.saver.schedule(new_state)
