"""Optional shuffle of occupants among seats held by the same label."""

import random
from typing import Dict, List, Optional, Tuple

from models.allocation import SeatMatrix
from models.individual import Individual


def shuffle_within_groups(matrices: Dict[str, SeatMatrix], key: str, seed: Optional[int] = None) -> Dict[str, SeatMatrix]:
    """Permute each hall's occupants among positions of their own label.

    The label of every seat is unchanged, so patterns and neighbour rules hold.
    """
    rng = random.Random(seed)
    for matrix in matrices.values():
        positions: Dict[str, List[Tuple[int, int]]] = {}
        people: Dict[str, List[Individual]] = {}
        for r, row in enumerate(matrix):
            for c, cell in enumerate(row):
                for person in cell:
                    label = person.label(key)
                    positions.setdefault(label, []).append((r, c))
                    people.setdefault(label, []).append(person)

        for label, seats in positions.items():
            shuffled = people[label]
            rng.shuffle(shuffled)
            for (r, c), person in zip(seats, shuffled):
                matrix[r][c] = [person]
    return matrices
