from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from models.grid import GridDescriptor
from models.individual import Individual

SeatCell = List[Individual]
SeatMatrix = List[List[SeatCell]]


def new_seat_matrix(rows: int, columns: int) -> SeatMatrix:
    return [[[] for _ in range(columns)] for _ in range(rows)]


@dataclass
class Placement:
    """One seated individual with its hall coordinates (all 1-based)."""
    identifier: str
    name: str
    year: str
    branch: str
    subject: str
    batch: str
    grid: str
    row: int
    column: int
    bench: int   # furniture unit along the row
    seat: int    # position inside the unit


@dataclass
class GridReport:
    name: str
    placed_count: int
    capacity: int
    furniture: str


@dataclass
class UnplacedSummary:
    counts: Dict[str, int] = field(default_factory=dict)  # label -> count
    individuals: List[Individual] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.individuals)


@dataclass
class Allocation:
    key: str
    strategy: str
    density: int
    grids: List[GridDescriptor]
    matrices: Dict[str, SeatMatrix]
    reports: List[GridReport] = field(default_factory=list)
    unplaced: UnplacedSummary = field(default_factory=UnplacedSummary)
    repair_exhausted: bool = False
    adjacency_key: str = ""
    residual_violations: List[Tuple[str, int, int]] = field(default_factory=list)  # after the last pass
    dropped: List[Individual] = field(default_factory=list)
    explanation_steps: List[str] = field(default_factory=list)

    @property
    def adjacency_flagged(self) -> bool:
        return bool(self.residual_violations)

    @property
    def placed_count(self) -> int:
        return sum(r.placed_count for r in self.reports)

    def grid(self, name: str) -> GridDescriptor:
        return next(g for g in self.grids if g.name == name)

    def placements(self, name: Optional[str] = None) -> List[Placement]:
        """Row-major occupant summaries for one grid, or every grid in order."""
        names = [name] if name is not None else [g.name for g in self.grids]
        result = []
        for grid_name in names:
            grid = self.grid(grid_name)
            for r, row in enumerate(self.matrices[grid_name]):
                for c, cell in enumerate(row):
                    bench, seat = grid.unit_position(c)
                    for person in cell:
                        result.append(Placement(
                            identifier=person.identifier,
                            name=person.name,
                            year=person.year,
                            branch=person.branch,
                            subject=person.subject,
                            batch=person.batch,
                            grid=grid_name,
                            row=r + 1,
                            column=c + 1,
                            bench=bench,
                            seat=seat,
                        ))
        return result

    def unit_view(self, name: str) -> List[List[List[Individual]]]:
        """Each row regrouped into furniture units (benches of 3, chair pairs of 2)."""
        grid = self.grid(name)
        width = grid.unit_width
        view = []
        for row in self.matrices[name]:
            units = []
            for start in range(0, len(row), width):
                units.append([p for cell in row[start:start + width] for p in cell])
            view.append(units)
        return view

    def seat_of(self, identifier: str) -> Optional[Placement]:
        return next((p for p in self.placements() if p.identifier == identifier), None)
