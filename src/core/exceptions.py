"""Custom exceptions shared by all layers."""


class SquaresError(Exception):
    """Top-level exception for anything raised by this application."""


class InvalidRequestError(SquaresError):
    """Incoming request data could not be validated."""


class GameStateError(SquaresError):
    """A stored or received board does not describe a valid game."""


class StorageError(SquaresError):
    """Reading from / writing to the durable key-value store failed."""


class InvalidTransferCodeError(SquaresError):
    """A transfer code could not be decoded into a board."""


class AnalysisError(SquaresError):
    """The text-generation service did not return a usable answer."""
