"""Search primitives shared by the filler, rebalancer and adjacency repair."""

from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from models.allocation import SeatCell, SeatMatrix
from models.cohort import Classification
from models.individual import Individual

CellPredicate = Callable[[int, int, SeatCell], bool]


def fallback_search(classification: Classification, start: Optional[str]) -> Optional[str]:
    """First group with members, walking the rotation order circularly from `start`."""
    order = classification.rotation_order
    if not order:
        return None
    offset = order.index(start) if start in classification.groups else 0
    for step in range(len(order)):
        name = order[(offset + step) % len(order)]
        if not classification.groups[name].exhausted:
            return name
    return None


def scan_cells(matrix: SeatMatrix, predicate: CellPredicate, start_row: int = 0) -> Iterator[Tuple[int, int]]:
    """Yield (row, column) of matching cells, row-major from start_row."""
    for r in range(start_row, len(matrix)):
        for c, cell in enumerate(matrix[r]):
            if predicate(r, c, cell):
                yield r, c


def find_cell(matrix: SeatMatrix, predicate: CellPredicate, start_row: int = 0) -> Optional[Tuple[int, int]]:
    return next(scan_cells(matrix, predicate, start_row), None)


def first_index(candidates: Sequence[Individual], predicate: Callable[[Individual], bool]) -> Optional[int]:
    for i, candidate in enumerate(candidates):
        if predicate(candidate):
            return i
    return None


def occupant(matrix: SeatMatrix, row: int, column: int) -> Optional[Individual]:
    if column < 0 or column >= len(matrix[row]):
        return None
    cell = matrix[row][column]
    return cell[0] if cell else None


def neighbours(matrix: SeatMatrix, row: int, column: int) -> List[Individual]:
    """Occupants immediately left and right within the same row."""
    found = []
    for c in (column - 1, column + 1):
        person = occupant(matrix, row, c)
        if person is not None:
            found.append(person)
    return found


def has_collision(matrix: SeatMatrix, row: int, column: int, individual: Individual, key: str) -> bool:
    label = individual.label(key)
    return any(n.label(key) == label for n in neighbours(matrix, row, column))
