from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from config.defaults import DEFAULT_FURNITURE, FURNITURE_BENCH, FURNITURE_CHAIR, UNIT_WIDTH

NAME_ALIASES = ["HallName", "Hall Name", "Name", "name"]
FURNITURE_ALIASES = ["Type", "type", "Furniture", "furniture", "SeatingType"]


def normalize_furniture(value: Optional[str]) -> str:
    """Anything mentioning 'chair' is a chair hall; everything else is benches."""
    if value is not None and "chair" in str(value).lower():
        return FURNITURE_CHAIR
    return FURNITURE_BENCH


@dataclass(frozen=True)
class GridDescriptor:
    name: str
    rows: int
    columns: int
    furniture: str = DEFAULT_FURNITURE  # "Bench" or "Chair"

    def __post_init__(self):
        object.__setattr__(self, "furniture", normalize_furniture(self.furniture))

    @property
    def is_bench(self) -> bool:
        return self.furniture == FURNITURE_BENCH

    @property
    def unit_width(self) -> int:
        return UNIT_WIDTH[self.furniture]

    @property
    def seat_count(self) -> int:
        return self.rows * self.columns

    @property
    def bench_units(self) -> int:
        """Complete 3-seat benches; zero for chair halls."""
        if not self.is_bench:
            return 0
        return self.rows * (self.columns // UNIT_WIDTH[FURNITURE_BENCH])

    def unit_position(self, column: int) -> Tuple[int, int]:
        """1-based (unit, seat) for a 0-based seat column."""
        return column // self.unit_width + 1, column % self.unit_width + 1

    @classmethod
    def from_record(cls, record: Mapping) -> "GridDescriptor":
        name = next(
            (str(record[k]).strip() for k in NAME_ALIASES if record.get(k) not in (None, "")),
            "",
        )
        furniture = next(
            (record[k] for k in FURNITURE_ALIASES if record.get(k) not in (None, "")),
            None,
        )
        return cls(
            name=name,
            rows=int(float(record["Rows"])),
            columns=int(float(record["Columns"])),
            furniture=furniture,
        )
