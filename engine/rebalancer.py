"""Cross-hall rebalancing: trailing-hall eviction and 3-to-2 per bench repacking."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from models.allocation import SeatMatrix
from models.grid import GridDescriptor
from models.individual import Individual
from engine.capacity import grid_capacity, seat_is_usable
from engine.search import first_index, has_collision, scan_cells
from config.defaults import DEFAULT_ADJACENCY_KEY

logger = logging.getLogger(__name__)


@dataclass
class RebalanceResult:
    matrices: Dict[str, SeatMatrix]
    dropped: List[Individual] = field(default_factory=list)
    evicted_grid: Optional[str] = None
    evicted: int = 0
    moved: int = 0      # seated in halls other than the evicted one
    returned: int = 0   # seated back into the evicted hall


@dataclass
class RepackResult:
    repacked: List[str] = field(default_factory=list)               # halls moved to 2 per bench
    merged: List[Tuple[str, str]] = field(default_factory=list)     # hall pairs spread together
    moved: int = 0


def occupied_count(matrix: SeatMatrix) -> int:
    return sum(len(cell) for row in matrix for cell in row)


def last_active_grid(matrices: Dict[str, SeatMatrix], grids: List[GridDescriptor]) -> Optional[str]:
    """Last hall, in caller order, with at least one occupant."""
    last = None
    for grid in grids:
        if occupied_count(matrices[grid.name]) > 0:
            last = grid.name
    return last


def evict_all(matrix: SeatMatrix) -> List[Individual]:
    evicted = []
    for row in matrix:
        for cell in row:
            evicted.extend(cell)
            cell.clear()
    return evicted


def place_without_collision(
    matrix: SeatMatrix,
    grid: GridDescriptor,
    density: int,
    pool: List[Individual],
    key: str,
) -> int:
    """Seat pool members into empty seats, row-major, skipping same-label neighbours.

    Each empty seat takes the first pool member whose label differs from both
    its left and right neighbour. Placed members are removed from the pool.
    """
    empty_seats = list(scan_cells(
        matrix, lambda r, c, cell: not cell and seat_is_usable(grid, c, density),
    ))
    placed = 0
    for row, column in empty_seats:
        if not pool:
            break
        index = first_index(pool, lambda p: not has_collision(matrix, row, column, p, key))
        if index is None:
            continue
        matrix[row][column].append(pool.pop(index))
        placed += 1
    return placed


def rebalance(
    matrices: Dict[str, SeatMatrix],
    grids: List[GridDescriptor],
    density: int,
    pending: Sequence[Individual] = (),
    adjacency_key: str = DEFAULT_ADJACENCY_KEY,
) -> RebalanceResult:
    """Empty a partially filled trailing hall and spread its occupants over free seats.

    `pending` holds individuals the filler could not seat; they join the pool
    after the evicted occupants. Nobody is ever seated next to a neighbour
    with the same `adjacency_key` label: whoever does not fit is dropped and
    reported.
    """
    result = RebalanceResult(matrices=matrices)
    grid_map = {g.name: g for g in grids}
    pool: List[Individual] = []

    last = last_active_grid(matrices, grids)
    if last is not None:
        occupied = occupied_count(matrices[last])
        if occupied < grid_capacity(grid_map[last], density):
            pool.extend(evict_all(matrices[last]))
            result.evicted_grid = last
            result.evicted = len(pool)
            logger.debug("Evicted %d occupants from partially filled hall %s", len(pool), last)

    pool.extend(pending)
    if not pool:
        return result

    for grid in grids:
        if not pool:
            break
        if grid.name == result.evicted_grid:
            continue
        result.moved += place_without_collision(matrices[grid.name], grid, density, pool, adjacency_key)

    if result.evicted_grid is not None and pool:
        trailing = grid_map[result.evicted_grid]
        result.returned = place_without_collision(
            matrices[trailing.name], trailing, density, pool, adjacency_key,
        )

    result.dropped = pool
    if pool:
        logger.warning(
            "%d individuals could not be seated without a same-%s neighbour",
            len(pool), adjacency_key,
        )
    return result


def two_per_bench_seats(grid: GridDescriptor) -> List[Tuple[int, int]]:
    """Outer seats of every complete bench, row-major."""
    full_columns = (grid.columns // 3) * 3
    return [(r, c) for r in range(grid.rows) for c in range(full_columns) if c % 3 != 1]


def benches_used(matrix: SeatMatrix, grid: GridDescriptor) -> int:
    full_columns = (grid.columns // 3) * 3
    return sum(
        1 for row in matrix for start in range(0, full_columns, 3)
        if any(row[start:start + 3])
    )


def is_crowded(matrix: SeatMatrix, grid: GridDescriptor) -> bool:
    """Some bench has its middle seat taken."""
    full_columns = (grid.columns // 3) * 3
    return any(row[c] for row in matrix for c in range(1, full_columns, 3))


def lay_out_two_per_bench(matrix: SeatMatrix, grid: GridDescriptor, pool: List[Individual]) -> int:
    """Seat pool members in order on outer bench seats; placed members leave the pool."""
    placed = 0
    for row, column in two_per_bench_seats(grid):
        if not pool:
            break
        matrix[row][column].append(pool.pop(0))
        placed += 1
    return placed


def repack_halls(
    matrices: Dict[str, SeatMatrix],
    grids: List[GridDescriptor],
    density: int,
) -> RepackResult:
    """Thin out 3-per-bench halls where the load allows 2 per bench.

    First every bench hall that leaves benches unused and whose occupants fit
    at 2 per bench is repacked on its own. Then each pair of bench halls
    (caller order) whose combined load fits at 2 per bench, and where one of
    them still seats 3 on a bench, is emptied and refilled 2 per bench, the
    earlier hall first. Only runs at 3 per bench; nobody is dropped.
    """
    result = RepackResult()
    if density != 3:
        return result
    benches = [g for g in grids if g.is_bench and g.bench_units > 0]

    for grid in benches:
        matrix = matrices[grid.name]
        occupied = occupied_count(matrix)
        if (occupied and is_crowded(matrix, grid)
                and benches_used(matrix, grid) < grid.bench_units
                and occupied <= 2 * grid.bench_units):
            pool = evict_all(matrix)
            lay_out_two_per_bench(matrix, grid, pool)
            result.repacked.append(grid.name)
            result.moved += occupied

    for i, first in enumerate(benches):
        for second in benches[i + 1:]:
            a, b = matrices[first.name], matrices[second.name]
            total = occupied_count(a) + occupied_count(b)
            if not total or total > 2 * (first.bench_units + second.bench_units):
                continue
            if not (is_crowded(a, first) or is_crowded(b, second)):
                continue
            pool = evict_all(a) + evict_all(b)
            lay_out_two_per_bench(a, first, pool)
            lay_out_two_per_bench(b, second, pool)
            result.merged.append((first.name, second.name))
            result.moved += total

    if result.repacked or result.merged:
        logger.debug("Repacked %s; spread pairs %s", result.repacked, result.merged)
    return result
