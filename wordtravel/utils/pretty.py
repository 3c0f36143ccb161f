"""Pretty-print helpers for puzzle grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import Optional

from ..core.constants import RuleTileType, TilePosition
from ..core.models import Cell, Grid, HardMatchTile, PuzzleConfig


BLOCKED = "#"
EMPTY = "."

TILE_MARKERS = {
    RuleTileType.SOFT_MATCH: "+",
    RuleTileType.FORBIDDEN_MATCH: "!",
}


def tile_marker(cell: Cell) -> str:
    tile = cell.rule_tile
    if tile is None:
        return " "
    if isinstance(tile, HardMatchTile):
        return "v" if tile.position == TilePosition.TOP else "^"
    return TILE_MARKERS[tile.type]


def cell_symbol(cell: Cell) -> str:
    if not cell.accessible:
        return BLOCKED + " "
    return (cell.letter or EMPTY) + tile_marker(cell)


def format_grid(grid: Grid) -> str:
    """Render the grid; ``v``/``^`` mark hard pairs, ``+`` soft and ``!`` forbidden sources."""

    header_cells = [f"{c:>2}" for c in range(grid.cols)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * grid.cols - 1))
    for r in range(grid.rows):
        row_render = " ".join(cell_symbol(grid.cell(r, c)) for c in range(grid.cols))
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(grid: Grid, *, label: str | None = None, stream=None) -> None:
    """Print the puzzle grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_puzzle_stats(
    grid: Grid,
    config: Optional[PuzzleConfig] = None,
    *,
    seed: Optional[int] = None,
    stream=None,
) -> None:
    """Print grid + tile statistics for a generated puzzle."""

    stream = stream or sys.stdout
    print(format_grid(grid), file=stream)

    tiles = Counter(tile.type for _, _, tile in grid.iter_tiles())
    word_rows = [r for r in range(grid.rows) if grid.accessible_columns(r)]
    untiled = [
        r for r in word_rows if not any(cell.rule_tile is not None for cell in grid.cells[r])
    ]

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {grid.rows} x {grid.cols}", file=stream)
    print(f"  Word rows:     {len(word_rows)}", file=stream)
    if config is not None:
        lengths = [slot.length for slot in config.word_slots]
        if lengths:
            print(f"  Word lengths:  {' '.join(str(length) for length in lengths)}", file=stream)

    print(file=stream)
    print("--- Rule tiles ---", file=stream)
    print(f"  Hard pairs:    {tiles[RuleTileType.HARD_MATCH] // 2}", file=stream)
    print(f"  Soft match:    {tiles[RuleTileType.SOFT_MATCH]}", file=stream)
    print(f"  Forbidden:     {tiles[RuleTileType.FORBIDDEN_MATCH]}", file=stream)
    if untiled:
        print(f"  Rows without tiles: {' '.join(str(r) for r in untiled)}", file=stream)

    if seed is not None:
        print(file=stream)
        print(f"Seed: {seed}", file=stream)
