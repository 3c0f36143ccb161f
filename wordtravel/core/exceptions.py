"""Custom exception hierarchy for the puzzle engine."""


class WordTravelError(Exception):
    """Base exception for engine failures."""


class ConfigurationError(WordTravelError, ValueError):
    """Raised when generator settings cannot produce a puzzle."""


class PlacementError(WordTravelError):
    """Raised when the rule tile solver finds no admissible layout."""


class CellNotEditableError(WordTravelError):
    """Raised when a session edit targets a cell the player may not change."""
