"""Bench capacity evaluation and seating density selection."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.grid import GridDescriptor
from engine.errors import CapacityError, ConfigError
from config.defaults import DENSITY_MODES

logger = logging.getLogger(__name__)


@dataclass
class CapacityDecision:
    density: int                   # occupants per bench unit: 2 or 3
    population: int
    bench_units: int               # complete benches across all bench halls
    capacity: int                  # bench units x density plus chair seats
    capacity_by_density: Dict[int, int] = field(default_factory=dict)


def seat_is_usable(grid: GridDescriptor, column: int, density: int) -> bool:
    """At 2 per bench the middle seat of every bench is left empty."""
    if grid.is_bench and density == 2 and column % 3 == 1:
        return False
    return True


def grid_capacity(grid: GridDescriptor, density: int) -> int:
    usable_columns = sum(1 for c in range(grid.columns) if seat_is_usable(grid, c, density))
    return grid.rows * usable_columns


def decision_capacity(grids: List[GridDescriptor], density: int) -> int:
    """Whole benches times density, plus one per chair seat.

    Columns left over after the last complete bench never count here.
    """
    return sum(g.bench_units * density if g.is_bench else g.seat_count for g in grids)


def evaluate_capacity(
    grids: List[GridDescriptor],
    population: int,
    rule_config: Optional[dict] = None,
) -> CapacityDecision:
    """Pick the sparsest density that seats everyone, once for the whole run."""
    cfg = rule_config or {}
    forced = cfg.get("density")
    if forced is not None and forced not in DENSITY_MODES:
        raise ConfigError(f"Unsupported density {forced}; expected one of {DENSITY_MODES}")
    modes = [forced] if forced is not None else DENSITY_MODES

    bench_units = sum(g.bench_units for g in grids)
    by_density = {d: decision_capacity(grids, d) for d in DENSITY_MODES}

    for density in modes:
        if by_density[density] >= population:
            logger.debug(
                "Density %d per bench selected: %d individuals, %d seats (%d bench units)",
                density, population, by_density[density], bench_units,
            )
            return CapacityDecision(
                density=density,
                population=population,
                bench_units=bench_units,
                capacity=by_density[density],
                capacity_by_density=by_density,
            )

    raise CapacityError(population, by_density[max(modes)])
