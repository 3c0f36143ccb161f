"""CP-SAT rule tile placement using OR-Tools.

Random sampling may fall short of the requested tile counts on sparse grids.
This module places tiles as a single constraint problem instead: every word
row is guaranteed its minimum number of tiles (as far as the row can host
them) and the totals land as close to the targets as the layout allows.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.exceptions import PlacementError
from ..core.models import Grid
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

# Cost of one tile of distance from a target; must exceed the largest
# tie-break weight so randomness never outweighs the targets.
TARGET_PENALTY = 1000
MAX_TIE_BREAK_WEIGHT = 100


@dataclass
class TilePlan:
    """Chosen positions. A hard pair is keyed by its upper cell."""

    hard_pairs: List[Tuple[int, int]] = field(default_factory=list)
    soft_tiles: List[Tuple[int, int]] = field(default_factory=list)
    forbidden_tiles: List[Tuple[int, int]] = field(default_factory=list)


def _is_free(grid: Grid, row: int, col: int) -> bool:
    cell = grid.cells[row][col]
    return cell.accessible and cell.rule_tile is None


def solve_tile_placement(
    grid: Grid,
    word_rows: Sequence[int],
    hard_target: int,
    soft_target: int,
    forbidden_target: int,
    min_tiles_per_row: int,
    rng: random.Random,
    timeout: float = 5.0,
) -> TilePlan:
    """Choose rule tile positions via CP-SAT.

    Args:
        grid: Materialized grid; cells already carrying a tile are kept.
        word_rows: Rows holding a word slot.
        hard_target: Desired number of vertical hard-match pairs.
        soft_target: Desired number of soft-match source tiles.
        forbidden_target: Desired number of forbidden-match source tiles.
        min_tiles_per_row: Tiles every word row must carry.
        rng: Source of tie-break weights and the solver seed.
        timeout: Solver time limit in seconds.

    Raises:
        PlacementError: if the model has no solution within ``timeout``.
    """

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Candidate placements
    # ------------------------------------------------------------------
    hard_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}
    soft_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}
    forbidden_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}

    for r in range(grid.rows - 1):
        below_accessible = any(cell.accessible for cell in grid.cells[r + 1])
        for c in range(grid.cols):
            if not _is_free(grid, r, c):
                continue
            if _is_free(grid, r + 1, c):
                hard_vars[(r, c)] = model.new_bool_var(f"H_{r}_{c}")
            if below_accessible:
                soft_vars[(r, c)] = model.new_bool_var(f"S_{r}_{c}")
                if forbidden_target > 0:
                    forbidden_vars[(r, c)] = model.new_bool_var(f"F_{r}_{c}")

    if not (hard_vars or soft_vars or forbidden_vars):
        LOGGER.debug("CP-SAT: no free cell can host a rule tile")
        return TilePlan()

    # ------------------------------------------------------------------
    # Step 2: At most one tile per cell
    # ------------------------------------------------------------------
    occupancy: Dict[Tuple[int, int], List[cp_model.IntVar]] = {}
    for r in range(grid.rows):
        for c in range(grid.cols):
            terms = [
                var
                for var in (
                    hard_vars.get((r, c)),
                    hard_vars.get((r - 1, c)),
                    soft_vars.get((r, c)),
                    forbidden_vars.get((r, c)),
                )
                if var is not None
            ]
            if not terms:
                continue
            occupancy[(r, c)] = terms
            if len(terms) > 1:
                model.add(sum(terms) <= 1)

    # ------------------------------------------------------------------
    # Step 3: Minimum density per word row
    # ------------------------------------------------------------------
    for r in word_rows:
        existing = sum(1 for cell in grid.cells[r] if cell.rule_tile is not None)
        row_cells = [occupancy[(r, c)] for c in range(grid.cols) if (r, c) in occupancy]
        needed = min(min_tiles_per_row - existing, len(row_cells))
        if needed <= 0:
            continue
        model.add(sum(var for terms in row_cells for var in terms) >= needed)

    # ------------------------------------------------------------------
    # Step 4: Objective
    # ------------------------------------------------------------------
    deviations = []
    for name, variables, target in (
        ("hard", hard_vars, hard_target),
        ("soft", soft_vars, soft_target),
        ("forbidden", forbidden_vars, forbidden_target),
    ):
        if not variables:
            continue
        deviation = model.new_int_var(0, max(target, len(variables)), f"dev_{name}")
        model.add_abs_equality(deviation, sum(variables.values()) - target)
        deviations.append(deviation)

    tie_break = [
        rng.randint(1, MAX_TIE_BREAK_WEIGHT) * var
        for variables in (hard_vars, soft_vars, forbidden_vars)
        for var in variables.values()
    ]
    model.minimize(TARGET_PENALTY * sum(deviations) - sum(tie_break))

    # ------------------------------------------------------------------
    # Step 5: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    # Single worker so a seeded rng reproduces the same layout.
    solver.parameters.num_workers = 1
    solver.parameters.random_seed = rng.randint(0, 2**31 - 1)

    LOGGER.debug(
        "CP-SAT: %d hard, %d soft, %d forbidden candidates",
        len(hard_vars),
        len(soft_vars),
        len(forbidden_vars),
    )
    status = solver.solve(model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        raise PlacementError(f"No tile layout found (status={solver.status_name(status)})")

    plan = TilePlan(
        hard_pairs=sorted(pos for pos, var in hard_vars.items() if solver.value(var)),
        soft_tiles=sorted(pos for pos, var in soft_vars.items() if solver.value(var)),
        forbidden_tiles=sorted(pos for pos, var in forbidden_vars.items() if solver.value(var)),
    )
    LOGGER.info(
        "CP-SAT: placed %d pairs, %d soft, %d forbidden in %.2fs",
        len(plan.hard_pairs),
        len(plan.soft_tiles),
        len(plan.forbidden_tiles),
        solver.wall_time,
    )
    return plan
