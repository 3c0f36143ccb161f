"""Row-level rule validation.

Every rule is a pure predicate over ``(grid, row)``. A constraint only fails
once every side it depends on is determined; incomplete rows never produce a
failure.
"""

from __future__ import annotations

from typing import Iterator, Optional, Set, Tuple, Type, Union

from ..core.constants import MIN_CHECKABLE_LENGTH, CellState, GameMode, Validation
from ..core.models import (
    ForbiddenMatchTile,
    Grid,
    HardMatchTile,
    RowValidationResult,
    RowValidationState,
    SoftMatchTile,
)
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .grid import get_word_from_row, is_row_complete


LOGGER = get_logger(__name__)

MESSAGE_SPELLING = "Not a word"
MESSAGE_UNIQUE = "Word already used"
MESSAGE_HARD_MATCH = "Linked letters must match"
MESSAGE_SOFT_MATCH = "Missing a required letter"
MESSAGE_FORBIDDEN_MATCH = "Contains a forbidden letter"
MESSAGE_INVALID = "Invalid"

DirectedTile = Union[SoftMatchTile, ForbiddenMatchTile]


def _row_letters(grid: Grid, row: int) -> Set[str]:
    return {cell.letter for cell in grid.cells[row] if cell.accessible and cell.letter}


def _tiles_targeting(
    grid: Grid, row: int, tile_class: Type[DirectedTile]
) -> Iterator[Tuple[int, int, DirectedTile]]:
    for r, c, tile in grid.iter_tiles():
        if isinstance(tile, tile_class) and tile.next_row == row:
            yield r, c, tile


def validate_hard_match_tiles(grid: Grid, row: int) -> bool:
    for cell in grid.cells[row]:
        tile = cell.rule_tile
        if not cell.accessible or not isinstance(tile, HardMatchTile):
            continue
        if not cell.letter or not is_row_complete(grid, tile.paired_row):
            continue
        if cell.letter != grid.cell(tile.paired_row, tile.paired_col).letter:
            return False
    return True


def _validate_directed_tiles(grid: Grid, row: int, tile_class: Type[DirectedTile], required: bool) -> bool:
    if not is_row_complete(grid, row):
        return True
    letters = _row_letters(grid, row)
    for source_row, source_col, _ in _tiles_targeting(grid, row, tile_class):
        if not is_row_complete(grid, source_row):
            continue
        letter = grid.cell(source_row, source_col).letter
        if not letter:
            return False
        if (letter in letters) != required:
            return False
    return True


def validate_soft_match_tiles(grid: Grid, row: int) -> bool:
    """Each complete soft-match source targeting ``row`` must see its letter here."""

    return _validate_directed_tiles(grid, row, SoftMatchTile, required=True)


def validate_forbidden_match_tiles(grid: Grid, row: int) -> bool:
    """Each complete forbidden source targeting ``row`` must not see its letter here."""

    return _validate_directed_tiles(grid, row, ForbiddenMatchTile, required=False)


def validate_no_hard_match_forbidden_conflict(grid: Grid, row: int) -> bool:
    hard_letters: Set[str] = set()
    forbidden_letters: Set[str] = set()
    for cell in grid.cells[row]:
        if not cell.accessible or not cell.letter:
            continue
        if isinstance(cell.rule_tile, HardMatchTile):
            hard_letters.add(cell.letter)
        elif isinstance(cell.rule_tile, ForbiddenMatchTile):
            forbidden_letters.add(cell.letter)
    return not (hard_letters & forbidden_letters)


def validate_unique_words(grid: Grid, row: int) -> bool:
    word = get_word_from_row(grid, row).lower()
    if not word:
        return True
    for other in range(grid.rows):
        if other == row or not is_row_complete(grid, other):
            continue
        if get_word_from_row(grid, other).lower() == word:
            return False
    return True


def describe_failure(state: RowValidationState) -> Optional[str]:
    """Pick the single message shown for a rejected row.

    Spelling outranks everything else: feedback on linked letters is
    meaningless for a word the dictionary does not know.
    """

    if state.is_valid:
        return None
    if not state.spelling:
        return MESSAGE_SPELLING
    if not state.unique_words:
        return MESSAGE_UNIQUE
    if not state.hard_match:
        return MESSAGE_HARD_MATCH
    if not state.soft_match:
        return MESSAGE_SOFT_MATCH
    if not state.forbidden_match:
        return MESSAGE_FORBIDDEN_MATCH
    return MESSAGE_INVALID


class RowValidator:
    """Runs every rule family against a row and annotates the grid."""

    def __init__(self, dictionary: WordDictionary, check_spelling: bool = True) -> None:
        self.dictionary = dictionary
        self.check_spelling = check_spelling

    def validate_spelling(self, grid: Grid, row: int) -> bool:
        if not self.check_spelling:
            return True
        word = get_word_from_row(grid, row)
        if len(word) < MIN_CHECKABLE_LENGTH:
            return True
        return self.dictionary.is_valid_word(word)

    def get_row_validation_state(self, grid: Grid, row: int) -> RowValidationState:
        has_hard = any(
            cell.accessible and isinstance(cell.rule_tile, HardMatchTile)
            for cell in grid.cells[row]
        )
        has_soft = next(_tiles_targeting(grid, row, SoftMatchTile), None) is not None
        has_forbidden = next(_tiles_targeting(grid, row, ForbiddenMatchTile), None) is not None
        return RowValidationState(
            spelling=self.validate_spelling(grid, row),
            hard_match=validate_hard_match_tiles(grid, row),
            soft_match=validate_soft_match_tiles(grid, row),
            forbidden_match=validate_forbidden_match_tiles(grid, row),
            no_conflict=validate_no_hard_match_forbidden_conflict(grid, row),
            unique_words=validate_unique_words(grid, row),
            has_hard_match_tile=has_hard,
            has_soft_match_tile=has_soft,
            has_forbidden_match_tile=has_forbidden,
        )

    def validate_and_update_row(self, grid: Grid, row: int, mode: GameMode) -> RowValidationResult:
        """Return a copy of ``grid`` with the verdict stamped on ``row``.

        In action mode the row is locked whatever the verdict.
        """

        state = self.get_row_validation_state(grid, row)
        verdict = Validation.CORRECT if state.is_valid else Validation.INCORRECT
        updated = grid.copy()
        for cell in updated.cells[row]:
            if not cell.accessible:
                continue
            cell.validation = verdict
            if mode == GameMode.ACTION:
                cell.state = CellState.LOCKED
        LOGGER.debug(
            "Row %s validated as %s (%s)",
            row,
            verdict.value,
            describe_failure(state) or "ok",
        )
        return RowValidationResult(validated_grid=updated, is_valid=state.is_valid, state=state)
