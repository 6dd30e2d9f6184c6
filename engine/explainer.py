"""Generates human-readable explanations for an allocation run."""

from typing import Dict, List, Optional

from engine.capacity import CapacityDecision
from engine.rebalancer import RebalanceResult, RepackResult
from engine.repair import RepairResult


def explain_capacity(decision: CapacityDecision) -> List[str]:
    """Explain the density decision."""
    steps = [
        f"Step 2 - Capacity: {decision.bench_units} bench units; "
        f"{decision.capacity_by_density.get(2, 0)} seats at 2 per bench, "
        f"{decision.capacity_by_density.get(3, 0)} seats at 3 per bench"
    ]
    if decision.density == 2:
        steps.append(
            f"Note: {decision.population} individuals fit at 2 per bench => middle seats left empty"
        )
    else:
        steps.append(
            f"Note: {decision.population} individuals exceed 2-per-bench capacity => 3 per bench"
        )
    return steps


def explain_run(
    key: str,
    group_sizes: Dict[str, int],
    decision: CapacityDecision,
    strategy: str,
    placed: Dict[str, int],
    queued_after_fill: int,
    rebalance: Optional[RebalanceResult] = None,
    repair: Optional[RepairResult] = None,
    shuffled: bool = False,
    unplaced_total: int = 0,
    repack: Optional[RepackResult] = None,
    adjacency_key: str = "",
    residual: int = 0,
) -> List[str]:
    """Produce step-by-step explanation for an allocation run."""
    steps = []

    groups = ", ".join(f"{name} ({size})" for name, size in group_sizes.items())
    steps.append(
        f"Step 1 - Classification: {sum(group_sizes.values())} individuals by {key} "
        f"=> {len(group_sizes)} groups in rotation order: {groups}"
    )

    steps.extend(explain_capacity(decision))

    filled = ", ".join(f"{name}: {count}" for name, count in placed.items())
    steps.append(
        f"Step 3 - Fill ({strategy}, column-major): {filled}; {queued_after_fill} left in queues"
    )

    if rebalance is not None:
        if rebalance.evicted_grid:
            steps.append(
                f"Step 4 - Rebalance: emptied partially filled hall {rebalance.evicted_grid} "
                f"({rebalance.evicted} occupants); {rebalance.moved} moved to other halls, "
                f"{rebalance.returned} returned, {len(rebalance.dropped)} dropped"
            )
        else:
            steps.append(
                f"Step 4 - Rebalance: no partially filled trailing hall; "
                f"{rebalance.moved} queued individuals seated, {len(rebalance.dropped)} dropped"
            )

    if repack is not None:
        if repack.repacked or repack.merged:
            pairs = ", ".join(f"{a}+{b}" for a, b in repack.merged) or "none"
            steps.append(
                f"Note: repacked to 2 per bench: {', '.join(repack.repacked) or 'none'}; "
                f"spread together: {pairs} ({repack.moved} seats rewritten)"
            )
        else:
            steps.append("Note: no hall could be repacked to 2 per bench")

    if shuffled:
        steps.append("Note: occupants shuffled among seats of their own label")

    if repair is not None:
        sweeps = max(repair.sweeps.values()) if repair.sweeps else 0
        if repair.exhausted:
            steps.append(
                f"Step 5 - Adjacency repair: {repair.swaps} swaps, sweep budget exhausted with "
                f"{len(repair.residual)} same-label neighbour pairs remaining"
            )
        else:
            steps.append(
                f"Step 5 - Adjacency repair: {repair.swaps} swaps, clean after {sweeps} sweep(s)"
            )

    if residual:
        steps.append(
            f"Note: {residual} same-{adjacency_key} neighbour pairs remain and are flagged"
        )

    if unplaced_total:
        steps.append(f"Result: {unplaced_total} individuals unplaced")
    else:
        steps.append("Result: all individuals placed")

    return steps
