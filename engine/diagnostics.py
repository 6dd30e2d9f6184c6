"""Post-run checks over seat matrices."""

from typing import Dict, List, Sequence, Tuple

from models.allocation import Allocation, SeatMatrix
from models.individual import Individual
from engine.search import occupant


def find_adjacency_violations(matrices: Dict[str, SeatMatrix], key: str) -> List[Tuple[str, int, int]]:
    """(hall, row, column) of every left seat whose right neighbour has the same label."""
    violations = []
    for name, matrix in matrices.items():
        for r, row in enumerate(matrix):
            for c in range(len(row) - 1):
                left = occupant(matrix, r, c)
                right = occupant(matrix, r, c + 1)
                if left is not None and right is not None and left.label(key) == right.label(key):
                    violations.append((name, r, c))
    return violations


def find_duplicates(matrices: Dict[str, SeatMatrix]) -> List[dict]:
    """Identifiers seated more than once, with first and repeated positions (1-based)."""
    seen: Dict[str, dict] = {}
    duplicates = []
    for name, matrix in matrices.items():
        for r, row in enumerate(matrix):
            for c, cell in enumerate(row):
                for person in cell:
                    position = {"grid": name, "row": r + 1, "column": c + 1}
                    if person.identifier in seen:
                        duplicates.append({
                            "identifier": person.identifier,
                            "first": seen[person.identifier],
                            "duplicate": position,
                        })
                    else:
                        seen[person.identifier] = position
    return duplicates


def check_conservation(individuals: Sequence[Individual], allocation: Allocation) -> bool:
    """Everyone is either seated exactly once or listed as unplaced, and nobody else is."""
    seated = [p for matrix in allocation.matrices.values()
              for row in matrix for cell in row for p in cell]
    accounted = seated + list(allocation.unplaced.individuals)
    if len(accounted) != len(individuals):
        return False
    return sorted(id(p) for p in accounted) == sorted(id(p) for p in individuals)
