"""Count dictionary words that could still complete a row."""

from __future__ import annotations

from typing import Dict, List, Set

from ..core.models import ForbiddenMatchTile, Grid, HardMatchTile, SoftMatchTile
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .grid import get_word_from_row, is_row_complete


LOGGER = get_logger(__name__)


def count_valid_next_words(grid: Grid, target_row: int, dictionary: WordDictionary) -> int:
    """Return how many words of the row's length satisfy every knowable constraint.

    The count measures how much the active hard, soft and forbidden
    constraints narrow the row, so a row with no active constraint yields 0,
    as does a row that is already complete or has no accessible cell.
    """

    columns = grid.accessible_columns(target_row)
    if not columns or is_row_complete(grid, target_row):
        return 0

    used_words: Set[str] = set()
    for row in range(grid.rows):
        if row == target_row or not is_row_complete(grid, row):
            continue
        word = get_word_from_row(grid, row)
        if word:
            used_words.add(word.lower())

    positional: Dict[int, str] = {}
    for index, col in enumerate(columns):
        tile = grid.cell(target_row, col).rule_tile
        if not isinstance(tile, HardMatchTile) or not is_row_complete(grid, tile.paired_row):
            continue
        letter = grid.cell(tile.paired_row, tile.paired_col).letter
        if letter:
            positional[index] = letter.lower()

    required: Set[str] = set()
    forbidden: Set[str] = set()
    for row in range(grid.rows):
        if not is_row_complete(grid, row):
            continue
        for cell in grid.cells[row]:
            tile = cell.rule_tile
            if not cell.letter or tile is None:
                continue
            if isinstance(tile, SoftMatchTile) and tile.next_row == target_row:
                required.add(cell.letter.lower())
            elif isinstance(tile, ForbiddenMatchTile) and tile.next_row == target_row:
                forbidden.add(cell.letter.lower())

    if not (positional or required or forbidden):
        return 0

    candidates: List[str] = dictionary.get_words_of_length(len(columns))
    count = 0
    for word in candidates:
        if word in used_words:
            continue
        if any(word[index] != letter for index, letter in positional.items()):
            continue
        if any(letter in word for letter in forbidden):
            continue
        if not all(letter in word for letter in required):
            continue
        count += 1

    LOGGER.debug(
        "Row %d: %d/%d candidates (positional=%s required=%s forbidden=%s)",
        target_row,
        count,
        len(candidates),
        positional,
        sorted(required),
        sorted(forbidden),
    )
    return count
