"""Column-major seat filling driven by a pattern strategy."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.allocation import SeatMatrix, new_seat_matrix
from models.cohort import Classification
from models.grid import GridDescriptor
from engine.capacity import seat_is_usable
from engine.patterns import PatternStrategy
from engine.search import fallback_search

logger = logging.getLogger(__name__)


@dataclass
class FillTrace:
    grid: str
    row: int
    column: int
    identifier: str
    target: str   # group the pattern asked for
    source: str   # group that actually supplied the occupant


@dataclass
class FillResult:
    matrices: Dict[str, SeatMatrix]
    placed: Dict[str, int] = field(default_factory=dict)
    trace: List[FillTrace] = field(default_factory=list)

    @property
    def placed_total(self) -> int:
        return sum(self.placed.values())


def fill_grids(
    grids: List[GridDescriptor],
    classification: Classification,
    strategy: PatternStrategy,
    density: int,
) -> FillResult:
    """Fill every hall column by column, top to bottom, consuming group queues FIFO.

    When the pattern's group is empty the next group with members in rotation
    order takes the seat; when every group is empty the seat stays empty.
    Consumes the classification's queues.
    """
    result = FillResult(matrices={})

    for grid_index, grid in enumerate(grids):
        matrix = new_seat_matrix(grid.rows, grid.columns)
        strategy.start_grid(grid_index, grid, classification, density)
        placed = 0

        for column in range(grid.columns):
            if not seat_is_usable(grid, column, density):
                continue
            for row in range(grid.rows):
                target: Optional[str] = strategy.target(
                    grid_index, grid, row, column, classification, density,
                )
                if target is None:
                    continue
                source = target
                if classification.groups[target].exhausted:
                    source = fallback_search(classification, target)
                    if source is None:
                        continue

                person = classification.groups[source].pop()
                matrix[row][column].append(person)
                placed += 1
                result.trace.append(FillTrace(
                    grid=grid.name, row=row, column=column,
                    identifier=person.identifier, target=target, source=source,
                ))

        result.matrices[grid.name] = matrix
        result.placed[grid.name] = placed
        logger.debug("Filled %s (%s): %d placed, %d still queued",
                     grid.name, strategy.name, placed, classification.remaining_total)

    return result
