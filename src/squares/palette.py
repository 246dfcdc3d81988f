"""Fixed colours handed out to participants, and a few ready-made team names."""

from dataclasses import dataclass

COLORS: tuple[str, ...] = (
    "#ef4444",
    "#f97316",
    "#f59e0b",
    "#84cc16",
    "#10b981",
    "#06b6d4",
    "#3b82f6",
    "#6366f1",
    "#8b5cf6",
    "#d946ef",
    "#f43f5e",
    "#64748b",
)


def color_for_index(index: int) -> str:
    """Colours cycle once the palette runs out."""
    return COLORS[index % len(COLORS)]


@dataclass(frozen=True)
class TeamPreset:
    name: str
    color: str


TEAM_PRESETS: tuple[TeamPreset, ...] = (
    TeamPreset("NE Patriots", "#002244"),
    TeamPreset("SEA Seahawks", "#002244"),
    TeamPreset("KC Chiefs", "#E31837"),
    TeamPreset("SF 49ers", "#AA0000"),
    TeamPreset("PHI Eagles", "#004C54"),
    TeamPreset("CIN Bengals", "#FB4F14"),
    TeamPreset("DAL Cowboys", "#003594"),
    TeamPreset("BUF Bills", "#00338D"),
)

DEFAULT_TEAM1 = "Patriots"
DEFAULT_TEAM2 = "Seahawks"
