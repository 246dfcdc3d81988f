"""
Transfer codes: a whole board packed into one copy-pasteable string.

encode: GameState -> JSON envelope -> base64 (ASCII)
decode: the reverse, refusing anything that does not at least carry participants and a grid.

No migration between envelope versions: a code is only guaranteed to load in the version that produced it.
"""

import binascii
import json
import logging
from base64 import b64decode, b64encode

from pydantic import ValidationError

from src.api.models import GameStateEnvelope
from src.core.exceptions import GameStateError, InvalidTransferCodeError
from src.squares.game import GameState

logger = logging.getLogger(__name__)

INVALID_CODE_MESSAGE = "Invalid Game Code"


def encode(state: GameState) -> str:
    envelope = GameStateEnvelope.from_board(state.to_model())
    return b64encode(envelope.to_json().encode("utf-8")).decode("ascii")


def decode(token: str) -> GameState:
    """Raises InvalidTransferCodeError for anything that is not a valid code. Never returns a partial board."""
    try:
        raw = b64decode(token.strip(), validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        logger.info("Rejected transfer code: %s", e)
        raise InvalidTransferCodeError(INVALID_CODE_MESSAGE) from e

    if not _has_required_shape(data):
        logger.info("Rejected transfer code: participants and grid are required")
        raise InvalidTransferCodeError(INVALID_CODE_MESSAGE)

    try:
        envelope = GameStateEnvelope.model_validate(data)
        return GameState.from_model(envelope.to_board())
    except (ValidationError, GameStateError) as e:
        logger.info("Rejected transfer code: %s", e)
        raise InvalidTransferCodeError(INVALID_CODE_MESSAGE) from e


def _has_required_shape(data: object) -> bool:
    return (
        isinstance(data, dict)
        and isinstance(data.get("participants"), list)
        and isinstance(data.get("grid"), list)
    )
