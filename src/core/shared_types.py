"""
Type definitions used across layers
"""

from enum import StrEnum


class View(StrEnum):
    GRID = "grid"
    SETTINGS = "settings"


class TeamSide(StrEnum):
    """team1 plays along the rows, team2 along the columns."""

    TEAM1 = "team1"
    TEAM2 = "team2"


class SaveStatus(StrEnum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
