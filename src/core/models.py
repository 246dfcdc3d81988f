"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
The persistence adapter, the transfer codec and the domain layer all send / receive a BoardModel,
which decouples the JSON envelope from the GameState the domain works with.
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make BoardModel easier to read
ParticipantId = str
Cell = Optional[ParticipantId]
AxisNumber = Optional[int]


@dataclass
class ParticipantModel:
    id: ParticipantId
    first_name: str
    last_name: str
    color: str


@dataclass
class BoardModel:
    """Transport-safe representation of a squares board used between Service, DB, codec and domain layers."""

    participants: list[ParticipantModel]
    grid: list[list[Cell]]
    row_numbers: list[AxisNumber]
    col_numbers: list[AxisNumber]
    team1: str
    team2: str
    is_locked: bool
    last_saved: Optional[int] = field(default=None)
