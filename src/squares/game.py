"""
The GameState is the entrypoint into the domain layer for the service layer.
It holds the whole board (participants, squares, axis numbers, team names, lock) and implements every rule
for how the board is allowed to change.

Every operation returns a NEW GameState. Transitions that are not allowed (toggling a square on a locked board,
randomizing a board that is not full, ...) return an unchanged copy instead of raising:
the UI is expected to have disabled those actions already.
"""

import random
from dataclasses import dataclass, field, replace
from typing import Optional, Self

from src.core.exceptions import GameStateError
from src.core.models import BoardModel
from src.core.shared_types import TeamSide
from src.squares.grid import (
    GRID_SIZE,
    TOTAL_CELLS,
    Axis,
    Cell,
    Grid,
    all_cells,
    copy_grid,
    empty_axis,
    empty_grid,
    is_blank,
    is_permutation,
    is_valid_grid,
)
from src.squares.palette import DEFAULT_TEAM1, DEFAULT_TEAM2
from src.squares.participant import Participant


@dataclass(frozen=True)
class GameState:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    participants: list[Participant] = field(default_factory=list)
    grid: Grid = field(default_factory=empty_grid)
    row_numbers: Axis = field(default_factory=empty_axis)
    col_numbers: Axis = field(default_factory=empty_axis)
    team1: str = DEFAULT_TEAM1
    team2: str = DEFAULT_TEAM2
    is_locked: bool = False
    last_saved: Optional[int] = None

    @classmethod
    def default(cls) -> Self:
        """Empty board: no participants, no squares taken, unlocked, no numbers drawn."""
        return cls()

    @classmethod
    def reset(cls) -> Self:
        """
        Start over.
        ---
        WARNING: irreversible. All participants, squares and drawn numbers are thrown away.
        """
        return cls.default()

    @classmethod
    def from_model(cls, model: BoardModel) -> Self:
        """Define how to construct a GameState from the information the Service layer actually has"""

        # Validation
        if not is_valid_grid(model.grid):
            raise GameStateError(
                f"Grid must be {GRID_SIZE}x{GRID_SIZE} participant ids or nulls."
            )
        axis_check = is_permutation if model.is_locked else is_blank
        for axis in (model.row_numbers, model.col_numbers):
            if not axis_check(axis):
                raise GameStateError(
                    f"Axis numbers {axis!r} do not match lock state (is_locked={model.is_locked})."
                )
        if model.is_locked and any(cell is None for row in model.grid for cell in row):
            raise GameStateError("A locked board must have every square taken.")

        return cls(
            participants=[Participant.from_model(p) for p in model.participants],
            grid=copy_grid(model.grid),
            row_numbers=list(model.row_numbers),
            col_numbers=list(model.col_numbers),
            team1=model.team1,
            team2=model.team2,
            is_locked=model.is_locked,
            last_saved=model.last_saved,
        )

    def to_model(self) -> BoardModel:
        """Encode back into a format the Service layer uses"""

        return BoardModel(
            participants=[p.to_model() for p in self.participants],
            grid=copy_grid(self.grid),
            row_numbers=list(self.row_numbers),
            col_numbers=list(self.col_numbers),
            team1=self.team1,
            team2=self.team2,
            is_locked=self.is_locked,
            last_saved=self.last_saved,
        )

    # --- PARTICIPANTS ---
    def add_participant(self, first_name: str, last_name: str) -> Self:
        """
        Register a new participant at the end of the list.

        Names are expected to be validated by the caller; empty names are silently ignored.
        The colour is picked from the palette by position, so the n-th participant always gets the n-th colour.
        """
        first_name, last_name = first_name.strip(), last_name.strip()
        if not first_name or not last_name:
            return self
        new_participant = Participant.create(
            first_name, last_name, index=len(self.participants)
        )
        return replace(self, participants=[*self.participants, new_participant])

    def remove_participant(self, participant_id: str) -> Self:
        """Remove the participant AND free up every square they owned (only while unlocked)."""
        if self.is_locked or self.participant(participant_id) is None:
            return self
        grid = [
            [None if cell == participant_id else cell for cell in row]
            for row in self.grid
        ]
        participants = [p for p in self.participants if p.id != participant_id]
        return replace(self, participants=participants, grid=grid)

    def participant(self, participant_id: Optional[str]) -> Optional[Participant]:
        return next((p for p in self.participants if p.id == participant_id), None)

    # --- SQUARES ---
    def toggle_cell(
        self, row: int, col: int, active_participant_id: Optional[str]
    ) -> Self:
        """
        Tap on a square
        ----

        * locked board / outside the grid --> nothing happens
        * taken square --> cleared, whoever owns it
        * free square --> assigned to the active participant (or left alone when nobody is selected)
        """
        if self.is_locked or not Cell(row, col).is_within_bounds():
            return self

        current = self.grid[row][col]
        if current is not None:
            new_value = None
        elif active_participant_id is not None:
            new_value = active_participant_id
        else:
            return self

        grid = copy_grid(self.grid)
        grid[row][col] = new_value
        return replace(self, grid=grid)

    def owner(self, row: int, col: int) -> Optional[Participant]:
        return self.participant(self.grid[row][col])

    @property
    def filled_count(self) -> int:
        return sum(1 for row in self.grid for cell in row if cell is not None)

    @property
    def remaining_count(self) -> int:
        return TOTAL_CELLS - self.filled_count

    @property
    def is_full(self) -> bool:
        return self.filled_count == TOTAL_CELLS

    def square_counts(self) -> dict[str, int]:
        """Number of squares per participant id (participants without squares count 0)."""
        counts = {p.id: 0 for p in self.participants}
        for cell in all_cells():
            owner_id = self.grid[cell.row][cell.col]
            if owner_id in counts:
                counts[owner_id] += 1
        return counts

    # --- AXIS NUMBERS / LOCK ---
    def randomize(self, rng: Optional[random.Random] = None) -> Self:
        """
        Draw the numbers for both axes and lock the board.

        Only allowed once every square is taken, and only once: a locked board must be unlocked first.
        The two axes are shuffled independently of each other.
        """
        if self.is_locked or not self.is_full:
            return self

        rng = rng or random.Random()
        row_numbers = list(range(GRID_SIZE))
        col_numbers = list(range(GRID_SIZE))
        rng.shuffle(row_numbers)
        rng.shuffle(col_numbers)
        return replace(
            self,
            row_numbers=row_numbers,
            col_numbers=col_numbers,
            is_locked=True,
        )

    def unlock(self) -> Self:
        """Throw away the drawn numbers. Participants and squares stay as they are."""
        return replace(
            self,
            row_numbers=empty_axis(),
            col_numbers=empty_axis(),
            is_locked=False,
        )

    def winner_for_score(self, team1_score: int, team2_score: int) -> Optional[Participant]:
        """
        Who owns the square for this score?
        Only the last digit of each score counts. team1 reads along the rows, team2 along the columns.
        """
        if not self.is_locked:
            return None
        row = self.row_numbers.index(team1_score % 10)
        col = self.col_numbers.index(team2_score % 10)
        return self.owner(row, col)

    # --- TEAMS ---
    def set_team_name(self, side: TeamSide, name: str) -> Self:
        if side == TeamSide.TEAM1:
            return replace(self, team1=name)
        return replace(self, team2=name)

    def with_last_saved(self, timestamp_ms: int) -> Self:
        return replace(self, last_saved=timestamp_ms)
