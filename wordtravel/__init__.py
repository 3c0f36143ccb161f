"""Puzzle engine for the WordTravel word game.

This package exposes the public API surface via:

- ``wordtravel.engine.generator.PuzzleGenerator``: lays out word slots and rule tiles.
- ``wordtravel.engine.validator.RowValidator``: validates completed rows.
- ``wordtravel.engine.counter.count_valid_next_words``: counts words that still fit a row.
- ``wordtravel.engine.session.GameSession``: letter entry loop over one grid.
- ``wordtravel.data.dictionary.WordDictionary``: length-indexed word lists.
"""

from .engine.counter import count_valid_next_words
from .engine.generator import GeneratorConfig, PuzzleGenerator
from .engine.grid import find_first_accessible_cell, is_row_complete, sync_paired_cell
from .engine.session import GameSession
from .engine.validator import RowValidator
from .data.dictionary import DictionaryConfig, WordDictionary

__all__ = [
    "GameSession",
    "GeneratorConfig",
    "PuzzleGenerator",
    "RowValidator",
    "WordDictionary",
    "DictionaryConfig",
    "count_valid_next_words",
    "find_first_accessible_cell",
    "is_row_complete",
    "sync_paired_cell",
]

__version__ = "0.1.0"
