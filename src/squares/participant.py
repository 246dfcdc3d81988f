"""A registered player that can own squares on the board"""

from dataclasses import dataclass
from typing import Self
from uuid import uuid4

from src.core.models import ParticipantModel
from src.squares.palette import color_for_index


@dataclass(frozen=True)
class Participant:
    id: str
    first_name: str
    last_name: str
    color: str

    @classmethod
    def create(cls, first_name: str, last_name: str, index: int) -> Self:
        """New participant with a fresh id. `index` is the number of participants already registered."""
        return cls(
            id=uuid4().hex,
            first_name=first_name,
            last_name=last_name,
            color=color_for_index(index),
        )

    @classmethod
    def from_model(cls, model: ParticipantModel) -> Self:
        return cls(model.id, model.first_name, model.last_name, model.color)

    def to_model(self) -> ParticipantModel:
        return ParticipantModel(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            color=self.color,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def initials(self) -> str:
        return (self.first_name[:1] + self.last_name[:1]).upper()
