"""Row queries and immutable edit helpers over :class:`Grid`."""

from __future__ import annotations

from typing import Optional, Tuple

from ..core.constants import CellState, GameMode, Validation
from ..core.models import CellPosition, Grid, HardMatchTile
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


# ----------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------
def get_word_from_row(grid: Grid, row: int) -> str:
    """Concatenate the letters of the accessible cells of ``row``.

    Inaccessible cells and cells without a letter are skipped, so an
    incomplete row yields a partial string.
    """

    return "".join(
        cell.letter for cell in grid.cells[row] if cell.accessible and cell.letter
    )


def is_row_complete(grid: Grid, row: int) -> bool:
    return all(cell.letter for cell in grid.cells[row] if cell.accessible)


def find_first_accessible_cell(grid: Grid) -> Optional[CellPosition]:
    for r in range(grid.rows):
        for c in range(grid.cols):
            if grid.cells[r][c].accessible:
                return CellPosition(r, c)
    return None


def find_next_accessible_row(grid: Grid, current_row: int) -> Optional[int]:
    for r in range(current_row + 1, grid.rows):
        if any(cell.accessible for cell in grid.cells[r]):
            return r
    return None


def can_edit_row(grid: Grid, row: int, mode: GameMode) -> bool:
    """In action mode a row freezes as soon as it carries a verdict."""

    if mode == GameMode.ACTION:
        return all(cell.validation == Validation.NONE for cell in grid.cells[row])
    return True


def validate_row(grid: Grid, row: int, dictionary: WordDictionary) -> Tuple[bool, str]:
    """Spelling-only check: ``(is_valid, word)``."""

    word = get_word_from_row(grid, row)
    return dictionary.is_valid_word(word), word


# ----------------------------------------------------------------------
# Edits
# ----------------------------------------------------------------------
def place_letter(grid: Grid, row: int, col: int, letter: str) -> Grid:
    updated = grid.copy()
    cell = updated.cells[row][col]
    cell.letter = letter
    cell.state = CellState.FILLED
    return updated


def clear_letter(grid: Grid, row: int, col: int) -> Grid:
    updated = grid.copy()
    cell = updated.cells[row][col]
    cell.letter = None
    cell.state = CellState.EMPTY
    return updated


def clear_row_validation(grid: Grid, row: int) -> Grid:
    updated = grid.copy()
    for cell in updated.cells[row]:
        if cell.accessible:
            cell.validation = Validation.NONE
    return updated


def sync_paired_cell(grid: Grid, row: int, col: int, letter: Optional[str]) -> Grid:
    """Mirror ``letter`` into the partner of a hard-match tile at ``(row, col)``.

    Returns ``grid`` itself when the cell carries no hard-match tile.
    """

    tile = grid.cell(row, col).rule_tile
    if not isinstance(tile, HardMatchTile):
        return grid

    updated = grid.copy()
    paired = updated.cells[tile.paired_row][tile.paired_col]
    if letter:
        paired.letter = letter
        paired.state = CellState.FILLED
    else:
        paired.letter = None
        paired.state = CellState.EMPTY
    LOGGER.debug(
        "Synced (%s,%s) -> (%s,%s) with %r",
        row,
        col,
        tile.paired_row,
        tile.paired_col,
        letter,
    )
    return updated
