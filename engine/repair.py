"""Bounded local-search repair of same-label horizontal neighbours."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from models.allocation import SeatMatrix
from engine.diagnostics import find_adjacency_violations
from engine.search import find_cell, occupant
from config.defaults import MAX_REPAIR_SWEEPS

logger = logging.getLogger(__name__)


@dataclass
class RepairResult:
    sweeps: Dict[str, int] = field(default_factory=dict)   # hall -> sweeps used
    swaps: int = 0
    exhausted: bool = False
    residual: List[Tuple[str, int, int]] = field(default_factory=list)


def repair_grid(matrix: SeatMatrix, key: str, max_sweeps: int = MAX_REPAIR_SWEEPS) -> Tuple[int, int]:
    """Sweep one hall until a sweep finds no collision or the budget runs out.

    For each same-label pair (c, c+1) in a row, the first occupant further down
    the hall with a different label is swapped into c+1. Returns (sweeps, swaps).
    """
    swaps = 0
    for sweep in range(1, max_sweeps + 1):
        clean = True
        for r, row in enumerate(matrix):
            for c in range(len(row) - 1):
                left = occupant(matrix, r, c)
                right = occupant(matrix, r, c + 1)
                if left is None or right is None or left.label(key) != right.label(key):
                    continue
                clean = False
                label = left.label(key)
                found = find_cell(
                    matrix,
                    lambda i, j, cell: bool(cell) and cell[0].label(key) != label,
                    start_row=r + 1,
                )
                if found is None:
                    continue
                i, j = found
                matrix[r][c + 1], matrix[i][j] = matrix[i][j], matrix[r][c + 1]
                swaps += 1
        if clean:
            return sweep, swaps
    return max_sweeps, swaps


def repair_adjacency(
    matrices: Dict[str, SeatMatrix],
    key: str,
    max_sweeps: int = MAX_REPAIR_SWEEPS,
) -> RepairResult:
    result = RepairResult()
    for name, matrix in matrices.items():
        sweeps, swaps = repair_grid(matrix, key, max_sweeps)
        result.sweeps[name] = sweeps
        result.swaps += swaps

    result.residual = find_adjacency_violations(matrices, key)
    result.exhausted = bool(result.residual)
    if result.exhausted:
        logger.warning(
            "Adjacency repair left %d same-%s neighbour pairs after %d sweeps",
            len(result.residual), key, max_sweeps,
        )
    else:
        logger.debug("Adjacency repair clean after %d swaps", result.swaps)
    return result
