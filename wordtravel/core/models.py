"""Data models shared by the validators, the generator and the session."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, List, NamedTuple, Optional, Union

from .constants import Bounds, CellState, RuleTileType, TilePosition, Validation


@dataclass(frozen=True)
class HardMatchTile:
    """One half of a pair whose two cells must hold the same letter."""

    type: ClassVar[RuleTileType] = RuleTileType.HARD_MATCH

    paired_row: int
    paired_col: int
    position: TilePosition


@dataclass(frozen=True)
class SoftMatchTile:
    """Source tile: its letter must reappear somewhere in ``next_row``."""

    type: ClassVar[RuleTileType] = RuleTileType.SOFT_MATCH

    next_row: int


@dataclass(frozen=True)
class ForbiddenMatchTile:
    """Source tile: its letter must not appear anywhere in ``next_row``."""

    type: ClassVar[RuleTileType] = RuleTileType.FORBIDDEN_MATCH

    next_row: int


RuleTile = Union[HardMatchTile, SoftMatchTile, ForbiddenMatchTile]
RULE_TILE_CLASSES = (HardMatchTile, SoftMatchTile, ForbiddenMatchTile)


@dataclass
class Cell:
    """Represents a grid cell with its optional rule tile."""

    letter: Optional[str] = None
    state: CellState = CellState.EMPTY
    accessible: bool = True
    validation: Validation = Validation.NONE
    rule_tile: Optional[RuleTile] = None

    def __post_init__(self) -> None:
        if self.rule_tile is not None and not isinstance(self.rule_tile, RULE_TILE_CLASSES):
            raise TypeError(f"Unsupported rule tile: {self.rule_tile!r}")

    def has_letter(self) -> bool:
        return bool(self.letter)


class CellPosition(NamedTuple):
    row: int
    col: int


@dataclass
class Grid:
    """A ``rows x cols`` matrix of cells."""

    rows: int
    cols: int
    cells: List[List[Cell]]

    def __post_init__(self) -> None:
        if len(self.cells) != self.rows:
            raise ValueError(f"Expected {self.rows} rows, got {len(self.cells)}")
        for index, row in enumerate(self.cells):
            if len(row) != self.cols:
                raise ValueError(
                    f"Row {index} has {len(row)} cells, expected {self.cols}"
                )

    @classmethod
    def from_cells(cls, cells: List[List[Cell]]) -> "Grid":
        return cls(rows=len(cells), cols=len(cells[0]) if cells else 0, cells=cells)

    @property
    def bounds(self) -> Bounds:
        return Bounds(rows=self.rows, cols=self.cols)

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def accessible_columns(self, row: int) -> List[int]:
        return [col for col, cell in enumerate(self.cells[row]) if cell.accessible]

    def iter_tiles(self) -> Iterator[tuple[int, int, RuleTile]]:
        """Yield ``(row, col, tile)`` for every cell carrying a rule tile."""

        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell.rule_tile is not None:
                    yield r, c, cell.rule_tile

    def copy(self) -> "Grid":
        return Grid(rows=self.rows, cols=self.cols, cells=copy.deepcopy(self.cells))


@dataclass(frozen=True)
class WordSlot:
    """Declares which columns of a row hold the row's word."""

    row: int
    length: int
    start_col: int
    end_col: int

    @property
    def columns(self) -> range:
        return range(self.start_col, self.end_col + 1)


@dataclass
class PuzzleConfig:
    """Declarative layout produced by the generator before materialization."""

    word_slots: List[WordSlot]
    rows: int
    cols: int

    def slot_for_row(self, row: int) -> Optional[WordSlot]:
        for slot in self.word_slots:
            if slot.row == row:
                return slot
        return None


@dataclass
class RowValidationState:
    """Per-rule verdicts for one row plus which rules apply to it at all."""

    spelling: bool = True
    hard_match: bool = True
    soft_match: bool = True
    forbidden_match: bool = True
    no_conflict: bool = True
    unique_words: bool = True
    has_hard_match_tile: bool = False
    has_soft_match_tile: bool = False
    has_forbidden_match_tile: bool = False

    @property
    def is_valid(self) -> bool:
        return all(
            (
                self.spelling,
                self.hard_match,
                self.soft_match,
                self.forbidden_match,
                self.no_conflict,
                self.unique_words,
            )
        )


@dataclass
class RowValidationResult:
    validated_grid: Grid
    is_valid: bool
    state: RowValidationState = field(default_factory=RowValidationState)
