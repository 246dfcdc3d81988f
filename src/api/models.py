"""Requests models and the JSON envelope a board is stored / transferred in"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.models import BoardModel, ParticipantModel
from src.core.shared_types import TeamSide
from src.squares.grid import GRID_SIZE
from src.squares.palette import DEFAULT_TEAM1, DEFAULT_TEAM2


# --- JSON ENVELOPE ---
class ParticipantEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    color: str


class GameStateEnvelope(BaseModel):
    """
    The board as it is written to storage and packed into transfer codes.
    Keys are camelCase so stored boards and codes stay readable by older clients.
    """

    model_config = ConfigDict(populate_by_name=True)

    participants: list[ParticipantEnvelope]
    grid: list[list[Optional[str]]]
    row_numbers: list[Optional[int]] = Field(
        alias="rowNumbers", default_factory=lambda: [None] * GRID_SIZE
    )
    col_numbers: list[Optional[int]] = Field(
        alias="colNumbers", default_factory=lambda: [None] * GRID_SIZE
    )
    team1: str = DEFAULT_TEAM1
    team2: str = DEFAULT_TEAM2
    is_locked: bool = Field(alias="isLocked", default=False)
    last_saved: Optional[int] = Field(alias="lastSaved", default=None)

    @classmethod
    def from_board(cls, model: BoardModel) -> "GameStateEnvelope":
        return cls(
            participants=[
                ParticipantEnvelope(
                    id=p.id, first_name=p.first_name, last_name=p.last_name, color=p.color
                )
                for p in model.participants
            ],
            grid=model.grid,
            row_numbers=model.row_numbers,
            col_numbers=model.col_numbers,
            team1=model.team1,
            team2=model.team2,
            is_locked=model.is_locked,
            last_saved=model.last_saved,
        )

    def to_board(self) -> BoardModel:
        return BoardModel(
            participants=[
                ParticipantModel(
                    id=p.id, first_name=p.first_name, last_name=p.last_name, color=p.color
                )
                for p in self.participants
            ],
            grid=[list(row) for row in self.grid],
            row_numbers=list(self.row_numbers),
            col_numbers=list(self.col_numbers),
            team1=self.team1,
            team2=self.team2,
            is_locked=self.is_locked,
            last_saved=self.last_saved,
        )

    def to_json(self) -> str:
        """Compact JSON with camelCase keys (lastSaved is null when the board was never saved)."""
        return self.model_dump_json(by_alias=True)


# --- REQUEST MODELS ---
class AddParticipantRequest(BaseModel):
    first_name: str
    last_name: str

    @field_validator(*["first_name", "last_name"])
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise InvalidRequestError("First and last name are both required.")
        return value


class ToggleCellRequest(BaseModel):
    row: int
    col: int

    @field_validator(*["row", "col"])
    @classmethod
    def validate_index(cls, value: int) -> int:
        if not 0 <= value < GRID_SIZE:
            raise InvalidRequestError(
                f"Square index {value} is outside the {GRID_SIZE}x{GRID_SIZE} board."
            )
        return value


class TeamNameRequest(BaseModel):
    side: TeamSide
    name: str


class ImportRequest(BaseModel):
    code: str
