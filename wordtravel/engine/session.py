"""Caller-side game loop: letter entry, pair sync and row validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.constants import CellState, GameMode, Validation
from ..core.exceptions import CellNotEditableError
from ..core.models import Grid, HardMatchTile, PuzzleConfig, RowValidationState
from ..utils.logger import get_logger
from .counter import count_valid_next_words
from .generator import PuzzleGenerator
from .grid import (
    can_edit_row,
    clear_letter,
    clear_row_validation,
    is_row_complete,
    place_letter,
    sync_paired_cell,
)
from .validator import RowValidator, describe_failure


LOGGER = get_logger(__name__)


def _word_rows(grid: Grid) -> List[int]:
    return [r for r in range(grid.rows) if grid.accessible_columns(r)]


def _row_verdict(grid: Grid, row: int) -> Validation:
    verdicts = {grid.cell(row, c).validation for c in grid.accessible_columns(row)}
    if len(verdicts) == 1:
        return verdicts.pop()
    return Validation.NONE


@dataclass
class LetterOutcome:
    """Result of one edit: the new grid and the verdicts of every row it revalidated."""

    grid: Grid
    states: Dict[int, RowValidationState] = field(default_factory=dict)

    @property
    def completed_rows(self) -> List[int]:
        return sorted(self.states)

    @property
    def is_valid(self) -> bool:
        return all(state.is_valid for state in self.states.values())

    def message(self, row: int) -> Optional[str]:
        state = self.states.get(row)
        return describe_failure(state) if state is not None else None


class GameSession:
    """Holds the single current grid of a game and applies edits to it."""

    def __init__(
        self,
        grid: Grid,
        validator: RowValidator,
        mode: GameMode = GameMode.PUZZLE,
        config: Optional[PuzzleConfig] = None,
    ) -> None:
        self.grid = grid
        self.validator = validator
        self.mode = mode
        self.config = config

    @classmethod
    def start(
        cls,
        generator: PuzzleGenerator,
        validator: RowValidator,
        mode: GameMode = GameMode.PUZZLE,
        padding_rows_top: int = 1,
        padding_rows_bottom: int = 1,
    ) -> "GameSession":
        config, grid = generator.generate(padding_rows_top, padding_rows_bottom)
        LOGGER.info("Started %s session with %d word rows", mode.value, len(config.word_slots))
        return cls(grid, validator, mode=mode, config=config)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def enter_letter(self, row: int, col: int, letter: str) -> LetterOutcome:
        if not letter or len(letter) != 1 or not letter.isalpha():
            raise ValueError(f"Expected a single letter, got {letter!r}")
        self._check_editable(row, col)
        letter = letter.upper()
        grid = place_letter(self.grid, row, col, letter)
        grid = sync_paired_cell(grid, row, col, letter)
        return self._after_edit(grid, self._touched_rows(row, col))

    def clear_letter(self, row: int, col: int) -> LetterOutcome:
        self._check_editable(row, col)
        grid = clear_letter(self.grid, row, col)
        grid = sync_paired_cell(grid, row, col, None)
        return self._after_edit(grid, self._touched_rows(row, col))

    def _check_editable(self, row: int, col: int) -> None:
        cell = self.grid.cell(row, col)
        if not cell.accessible:
            raise CellNotEditableError(f"Cell ({row},{col}) is outside every word slot")
        if cell.state == CellState.LOCKED or not can_edit_row(self.grid, row, self.mode):
            raise CellNotEditableError(f"Row {row} is locked")
        tile = cell.rule_tile
        if isinstance(tile, HardMatchTile):
            if not can_edit_row(self.grid, tile.paired_row, self.mode) or (
                self.grid.cell(tile.paired_row, tile.paired_col).state == CellState.LOCKED
            ):
                raise CellNotEditableError(
                    f"Cell ({row},{col}) is linked to locked row {tile.paired_row}"
                )

    def _touched_rows(self, row: int, col: int) -> List[int]:
        tile = self.grid.cell(row, col).rule_tile
        if isinstance(tile, HardMatchTile) and tile.paired_row != row:
            return [row, tile.paired_row]
        return [row]

    def _after_edit(self, grid: Grid, rows: List[int]) -> LetterOutcome:
        states: Dict[int, RowValidationState] = {}
        for row in rows:
            if self.mode == GameMode.PUZZLE:
                grid = clear_row_validation(grid, row)
            if is_row_complete(grid, row):
                grid = self._validate(grid, row, states)

        # Directed tiles and uniqueness tie verdicts of other rows to this edit.
        for row in _word_rows(grid):
            if row in rows or not is_row_complete(grid, row):
                continue
            if _row_verdict(grid, row) != Validation.NONE:
                grid = self._validate(grid, row, states)

        self.grid = grid
        return LetterOutcome(grid=grid, states=states)

    def _validate(self, grid: Grid, row: int, states: Dict[int, RowValidationState]) -> Grid:
        result = self.validator.validate_and_update_row(grid, row, self.mode)
        states[row] = result.state
        return result.validated_grid

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def count_valid_next_words(self, row: int) -> int:
        return count_valid_next_words(self.grid, row, self.validator.dictionary)

    @property
    def score(self) -> int:
        return sum(1 for row in _word_rows(self.grid) if _row_verdict(self.grid, row) == Validation.CORRECT)

    @property
    def is_complete(self) -> bool:
        return all(_row_verdict(self.grid, row) != Validation.NONE for row in _word_rows(self.grid))

    @property
    def is_success(self) -> bool:
        return self.is_complete and self.score == len(_word_rows(self.grid))
