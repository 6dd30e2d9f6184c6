"""Column patterns: which group a seat should come from.

Three strategies share one interface. The filler calls `start_grid` once per
hall and `target` for every usable seat in column-major order; `target`
returns a group name, or None to leave the seat empty on purpose.

- alternating: classic two-group A/B benches (A B A | B A B on odd halls),
  switching to the exhaustion pattern X _ X once one group runs out.
- rotating: any number of groups, one group per column, rotated by one
  between consecutive halls.
- top_n: per hall, pick the largest remaining groups and give each column
  to the biggest of them.
"""

import math
from typing import Optional

from models.cohort import Classification
from models.grid import GridDescriptor
from engine.errors import ConfigError
from config.defaults import (
    BENCH_PATTERN, BENCH_PATTERN_SPARSE, CHAIR_PATTERN, EXHAUSTION_PATTERN,
    STRATEGIES, TOP_N_MIN_GROUPS,
)


def unit_pattern(grid: GridDescriptor, density: int) -> tuple:
    if not grid.is_bench:
        return CHAIR_PATTERN
    return BENCH_PATTERN_SPARSE if density == 2 else BENCH_PATTERN


def mirror(symbol: Optional[str]) -> Optional[str]:
    return {"A": "B", "B": "A"}.get(symbol, symbol)


def logical_column(grid: GridDescriptor, column: int, density: int) -> int:
    """Column index with skipped middle seats removed (2 per bench)."""
    if grid.is_bench and density == 2:
        return column - (column + 1) // 3
    return column


class PatternStrategy:
    name = ""

    def start_grid(self, grid_index: int, grid: GridDescriptor,
                   classification: Classification, density: int):
        pass

    def target(self, grid_index: int, grid: GridDescriptor, row: int, column: int,
               classification: Classification, density: int) -> Optional[str]:
        raise NotImplementedError


class AlternatingPattern(PatternStrategy):
    name = "alternating"

    def start_grid(self, grid_index, grid, classification, density):
        if classification.group_count > 2:
            raise ConfigError(
                f"Alternating pattern supports at most two groups, got {classification.group_count}",
                details={"groups": list(classification.rotation_order)},
            )

    def target(self, grid_index, grid, row, column, classification, density):
        order = classification.rotation_order
        group_a = order[0] if order else None
        group_b = order[1] if len(order) > 1 else None
        a_live = group_a is not None and not classification.groups[group_a].exhausted
        b_live = group_b is not None and not classification.groups[group_b].exhausted

        if not a_live and not b_live:
            return None
        if a_live != b_live:
            # Only one group left: seats 0 and 2 of every 3, middle stays empty
            survivor = group_a if a_live else group_b
            return survivor if EXHAUSTION_PATTERN[column % 3] else None

        pattern = unit_pattern(grid, density)
        symbol = pattern[column % len(pattern)]
        if grid_index % 2 == 1:
            symbol = mirror(symbol)
        if symbol is None:
            return None
        return group_a if symbol == "A" else group_b


class RotatingPattern(PatternStrategy):
    name = "rotating"

    def target(self, grid_index, grid, row, column, classification, density):
        order = classification.rotation_order
        if not order:
            return None
        start_offset = grid_index % len(order)
        return order[(start_offset + logical_column(grid, column, density)) % len(order)]


class TopNPattern(PatternStrategy):
    name = "top_n"

    def __init__(self, min_groups: int = TOP_N_MIN_GROUPS):
        self.min_groups = min_groups
        self._selected = []
        self._column = None
        self._column_group = None
        self._closed = False

    def start_grid(self, grid_index, grid, classification, density):
        per_hall = max(self.min_groups, math.ceil(classification.group_count / 2))
        live = classification.non_empty()
        # sorted() is stable: ties keep rotation order
        ranked = sorted(live, key=lambda n: classification.groups[n].remaining, reverse=True)
        self._selected = ranked[:per_hall]
        self._column = None
        self._column_group = None
        self._closed = False

    def target(self, grid_index, grid, row, column, classification, density):
        if self._closed:
            return None
        if column != self._column:
            self._column = column
            candidates = [n for n in self._selected if not classification.groups[n].exhausted]
            if not candidates:
                self._closed = True
                return None
            self._column_group = max(candidates, key=lambda n: classification.groups[n].remaining)
        if classification.groups[self._column_group].exhausted:
            return None
        return self._column_group


def get_strategy(name: str, rule_config: Optional[dict] = None) -> PatternStrategy:
    """Fresh strategy instance for one run."""
    cfg = rule_config or {}
    if name == "alternating":
        return AlternatingPattern()
    if name == "rotating":
        return RotatingPattern()
    if name == "top_n":
        return TopNPattern(cfg.get("top_n_min_groups", TOP_N_MIN_GROUPS))
    raise ConfigError(f"Unknown strategy '{name}'. Expected one of: {STRATEGIES}")
