"""
"Expert analysis" of a locked board, written by a text-generation service.

The service is an opaque collaborator: it gets the team names and both axes and returns free text.
Whatever goes wrong on its side, the caller gets the fallback text instead of an exception.
"""

import logging
from typing import Optional, Protocol

from openai import OpenAI

from src.core.config import Settings
from src.core.exceptions import AnalysisError
from src.squares.game import GameState

logger = logging.getLogger(__name__)

FALLBACK_ANALYSIS = (
    "The analyst is currently grabbing a hot dog. Please try again later!"
)
UNAVAILABLE_ANALYSIS = "Analysis unavailable."


class Analyst(Protocol):
    def analyze(
        self, team1: str, team2: str, row_numbers: list[int], col_numbers: list[int]
    ) -> str:
        """Free text about the drawn numbers. May raise on transport / API failures."""
        ...


def build_prompt(
    team1: str, team2: str, row_numbers: list[int], col_numbers: list[int]
) -> str:
    rows = ", ".join(str(n) for n in row_numbers)
    cols = ", ".join(str(n) for n in col_numbers)
    return (
        f"I am running a Super Bowl Squares game between {team1} (Rows) and {team2} (Columns).\n"
        f"The randomized numbers for {team1} are: {rows}.\n"
        f"The randomized numbers for {team2} are: {cols}.\n\n"
        "Give me a short, fun, 2-paragraph \"expert analysis\" of which square combinations "
        "(e.g., Row X, Col Y) are statistically the 'gold mines' based on historical NFL scores, "
        "and which ones are the 'safeties' (unlikely to win).\n"
        "Keep it professional yet engaging, like an NFL broadcaster."
    )


class OpenAIAnalyst:
    """Analyst backed by any OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        model_id: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = 0.8,
    ) -> None:
        self._model_id = model_id
        self._temperature = temperature
        self._client = OpenAI(api_key=api_key, base_url=base_url)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIAnalyst":
        return cls(
            model_id=settings.analysis_model,
            api_key=settings.analysis_api_key,
            base_url=settings.analysis_base_url,
            temperature=settings.analysis_temperature,
        )

    def analyze(
        self, team1: str, team2: str, row_numbers: list[int], col_numbers: list[int]
    ) -> str:
        completion = self._client.chat.completions.create(
            model=self._model_id,
            messages=[
                {
                    "role": "user",
                    "content": build_prompt(team1, team2, row_numbers, col_numbers),
                }
            ],
            temperature=self._temperature,
        )
        if not completion.choices:
            raise AnalysisError(f"empty response from {self._model_id}")
        return completion.choices[0].message.content or ""


def request_analysis(analyst: Analyst, state: GameState) -> Optional[str]:
    """
    Ask the analyst about a locked board.
    ----

    * board not locked --> None (the numbers mean nothing yet), the analyst is not called
    * analyst raises --> FALLBACK_ANALYSIS
    * analyst answers with nothing --> UNAVAILABLE_ANALYSIS
    """
    if not state.is_locked:
        return None

    row_numbers = [n for n in state.row_numbers if n is not None]
    col_numbers = [n for n in state.col_numbers if n is not None]
    try:
        answer = analyst.analyze(state.team1, state.team2, row_numbers, col_numbers)
    except Exception as e:
        logger.error("Analysis failed: %s", e)
        return FALLBACK_ANALYSIS
    return answer or UNAVAILABLE_ANALYSIS
