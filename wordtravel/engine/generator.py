"""Procedural puzzle generation.

Two phases:
  1. Layout: one centred word slot per word row, materialized into a grid.
  2. Rule tiles: hard-match pairs, soft-match and forbidden-match sources,
     then a backfill so every word row carries its minimum number of tiles.
     Placement is either attempt-capped random sampling or a CP-SAT model.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple, Type, Union

from ..core.constants import (
    CENTER_COL,
    GRID_COLS,
    MAX_PLACEMENT_ATTEMPTS,
    MAX_WORD_LENGTH,
    MIN_RULE_TILES_PER_WORD,
    MIN_WORD_LENGTH,
    WORD_ROWS,
    PlacementStrategy,
    TilePosition,
)
from ..core.exceptions import ConfigurationError, PlacementError
from ..core.models import (
    Cell,
    ForbiddenMatchTile,
    Grid,
    HardMatchTile,
    PuzzleConfig,
    SoftMatchTile,
    WordSlot,
)
from ..utils.logger import get_logger
from .solver import solve_tile_placement


LOGGER = get_logger(__name__)

DirectedTileClass = Union[Type[SoftMatchTile], Type[ForbiddenMatchTile]]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class GeneratorConfig:
    """Layout bounds, rule tile ratios and placement settings for one generator."""

    word_rows: int = WORD_ROWS
    min_word_length: int = MIN_WORD_LENGTH
    max_word_length: int = MAX_WORD_LENGTH
    cols: int = GRID_COLS
    center_col: int = CENTER_COL
    hard_match_ratio: float = 0.5
    soft_match_ratio: float = 0.5
    forbidden_match_ratio: float = 0.0
    min_rule_tiles_per_word: int = MIN_RULE_TILES_PER_WORD
    max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS
    placement_strategy: PlacementStrategy = PlacementStrategy.RANDOM
    seed: Optional[int] = None
    solver_timeout: float = 5.0

    @property
    def window(self) -> Tuple[int, int]:
        """First and last column a word may occupy."""

        start = self.center_col - (self.max_word_length - 1) // 2
        return start, start + self.max_word_length - 1

    def validate(self) -> None:
        if self.word_rows < 0:
            raise ConfigurationError("word_rows must not be negative")
        if not 1 <= self.min_word_length <= self.max_word_length:
            raise ConfigurationError(
                f"Invalid word length bounds [{self.min_word_length}, {self.max_word_length}]"
            )
        start, end = self.window
        if start < 0 or end >= self.cols:
            raise ConfigurationError(
                f"Word window [{start}, {end}] does not fit {self.cols} columns"
            )
        for name in ("hard_match_ratio", "soft_match_ratio", "forbidden_match_ratio"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative")
        if self.min_rule_tiles_per_word < 0 or self.max_placement_attempts < 0:
            raise ConfigurationError("Tile minimum and attempt cap must not be negative")


class PuzzleGenerator:
    """Builds word slot layouts and the rule tiles laid over them."""

    def __init__(self, config: Optional[GeneratorConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GeneratorConfig()
        self.config.validate()
        self.rng = rng or random.Random(self.config.seed)

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate(self, padding_rows_top: int = 1, padding_rows_bottom: int = 1) -> Tuple[PuzzleConfig, Grid]:
        config = self.generate_puzzle_config(padding_rows_top, padding_rows_bottom)
        return config, self.create_grid_from_config(config)

    def generate_puzzle_config(self, padding_rows_top: int = 1, padding_rows_bottom: int = 1) -> PuzzleConfig:
        if padding_rows_top < 0 or padding_rows_bottom < 0:
            raise ConfigurationError("Padding rows must not be negative")

        word_slots: List[WordSlot] = []
        for index in range(self.config.word_rows):
            length = self.rng.randint(self.config.min_word_length, self.config.max_word_length)
            start_col = self._word_start(length)
            word_slots.append(
                WordSlot(
                    row=index + padding_rows_top,
                    length=length,
                    start_col=start_col,
                    end_col=start_col + length - 1,
                )
            )

        rows = self.config.word_rows + padding_rows_top + padding_rows_bottom
        LOGGER.info(
            "Laid out %d word slots (lengths %s) on a %dx%d grid",
            len(word_slots),
            [slot.length for slot in word_slots],
            rows,
            self.config.cols,
        )
        return PuzzleConfig(word_slots=word_slots, rows=rows, cols=self.config.cols)

    def create_grid_from_config(self, config: PuzzleConfig) -> Grid:
        grid = self.materialize_grid(config)
        if self.config.placement_strategy == PlacementStrategy.CPSAT:
            self._place_tiles_with_solver(grid, config)
        else:
            self._place_tiles_randomly(grid, config)
        return grid

    @staticmethod
    def materialize_grid(config: PuzzleConfig) -> Grid:
        """Build the bare cell matrix; a cell is accessible iff a slot covers it."""

        cells: List[List[Cell]] = []
        for row in range(config.rows):
            slot = config.slot_for_row(row)
            cells.append(
                [
                    Cell(accessible=slot is not None and slot.start_col <= col <= slot.end_col)
                    for col in range(config.cols)
                ]
            )
        return Grid(rows=config.rows, cols=config.cols, cells=cells)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _word_start(self, length: int) -> int:
        window_start, window_end = self.config.window
        center = self.config.center_col
        candidates = [
            start
            for start in range(window_start, window_end - length + 2)
            if start <= center <= start + length - 1
        ]
        return self.rng.choice(candidates)

    def _targets(self, config: PuzzleConfig) -> Tuple[int, int, int]:
        word_rows = len(config.word_slots)
        return (
            round_half_up(word_rows * self.config.hard_match_ratio),
            round_half_up(word_rows * self.config.soft_match_ratio),
            round_half_up(word_rows * self.config.forbidden_match_ratio),
        )

    # ------------------------------------------------------------------
    # Tile installation
    # ------------------------------------------------------------------
    @staticmethod
    def _is_free(grid: Grid, row: int, col: int) -> bool:
        cell = grid.cells[row][col]
        return cell.accessible and cell.rule_tile is None

    @staticmethod
    def _row_has_accessible(grid: Grid, row: int) -> bool:
        return 0 <= row < grid.rows and any(cell.accessible for cell in grid.cells[row])

    @staticmethod
    def _install_hard_pair(grid: Grid, row: int, col: int) -> None:
        grid.cells[row][col].rule_tile = HardMatchTile(
            paired_row=row + 1, paired_col=col, position=TilePosition.TOP
        )
        grid.cells[row + 1][col].rule_tile = HardMatchTile(
            paired_row=row, paired_col=col, position=TilePosition.BOTTOM
        )

    @staticmethod
    def _install_directed(grid: Grid, row: int, col: int, tile_class: DirectedTileClass) -> None:
        grid.cells[row][col].rule_tile = tile_class(next_row=row + 1)

    # ------------------------------------------------------------------
    # Random placement
    # ------------------------------------------------------------------
    def _place_tiles_randomly(self, grid: Grid, config: PuzzleConfig) -> None:
        hard_target, soft_target, forbidden_target = self._targets(config)
        hard = self._place_hard_pairs(grid, hard_target)
        soft = self._place_directed_tiles(grid, soft_target, SoftMatchTile)
        forbidden = self._place_directed_tiles(grid, forbidden_target, ForbiddenMatchTile)
        backfilled = self._backfill_minimum_density(grid, config)
        LOGGER.info(
            "Placed %d/%d pairs, %d/%d soft, %d/%d forbidden, %d backfilled",
            hard,
            hard_target,
            soft,
            soft_target,
            forbidden,
            forbidden_target,
            backfilled,
        )

    def _place_hard_pairs(self, grid: Grid, target: int) -> int:
        if grid.rows < 2 or grid.cols < 1:
            return 0
        placed = 0
        attempts = 0
        while placed < target and attempts < self.config.max_placement_attempts:
            attempts += 1
            row = self.rng.randrange(grid.rows - 1)
            col = self.rng.randrange(grid.cols)
            if self._is_free(grid, row, col) and self._is_free(grid, row + 1, col):
                self._install_hard_pair(grid, row, col)
                placed += 1
        if placed < target:
            LOGGER.debug("Hard-match pairs short of target: %d/%d after %d attempts", placed, target, attempts)
        return placed

    def _place_directed_tiles(self, grid: Grid, target: int, tile_class: DirectedTileClass) -> int:
        if grid.rows < 2 or grid.cols < 1:
            return 0
        placed = 0
        attempts = 0
        while placed < target and attempts < self.config.max_placement_attempts:
            attempts += 1
            row = self.rng.randrange(grid.rows - 1)
            col = self.rng.randrange(grid.cols)
            if self._is_free(grid, row, col) and self._row_has_accessible(grid, row + 1):
                self._install_directed(grid, row, col, tile_class)
                placed += 1
        if placed < target:
            LOGGER.debug(
                "%s tiles short of target: %d/%d after %d attempts",
                tile_class.type.value,
                placed,
                target,
                attempts,
            )
        return placed

    def _backfill_minimum_density(self, grid: Grid, config: PuzzleConfig) -> int:
        """Greedily top up word rows that carry too few tiles.

        Prefers a hard-match pair with the row below, else a soft-match
        source. The last word row can only gain tiles from the row above.
        """

        minimum = self.config.min_rule_tiles_per_word
        added = 0
        for slot in config.word_slots:
            row = slot.row
            count = sum(1 for cell in grid.cells[row] if cell.rule_tile is not None)
            below_accessible = self._row_has_accessible(grid, row + 1)
            for col in grid.accessible_columns(row):
                if count >= minimum:
                    break
                if grid.cells[row][col].rule_tile is not None:
                    continue
                if row + 1 < grid.rows and self._is_free(grid, row + 1, col):
                    self._install_hard_pair(grid, row, col)
                elif below_accessible:
                    self._install_directed(grid, row, col, SoftMatchTile)
                else:
                    continue
                count += 1
                added += 1
            if count < minimum:
                LOGGER.debug("Row %d holds %d/%d rule tiles after backfill", row, count, minimum)
        return added

    # ------------------------------------------------------------------
    # Solver placement
    # ------------------------------------------------------------------
    def _place_tiles_with_solver(self, grid: Grid, config: PuzzleConfig) -> None:
        hard_target, soft_target, forbidden_target = self._targets(config)
        try:
            plan = solve_tile_placement(
                grid,
                [slot.row for slot in config.word_slots],
                hard_target,
                soft_target,
                forbidden_target,
                self.config.min_rule_tiles_per_word,
                self.rng,
                timeout=self.config.solver_timeout,
            )
        except PlacementError as exc:
            LOGGER.warning("Solver placement failed, falling back to random sampling: %s", exc)
            self._place_tiles_randomly(grid, config)
            return

        for row, col in plan.hard_pairs:
            self._install_hard_pair(grid, row, col)
        for row, col in plan.soft_tiles:
            self._install_directed(grid, row, col, SoftMatchTile)
        for row, col in plan.forbidden_tiles:
            self._install_directed(grid, row, col, ForbiddenMatchTile)
