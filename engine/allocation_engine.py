"""Rule-based seating allocation: the core pipeline."""

import logging
from collections import Counter
from typing import List, Optional, Sequence

from models.allocation import Allocation, GridReport, UnplacedSummary
from models.grid import GridDescriptor
from models.individual import Individual
from data.validator import validate_grids, validate_individuals
from engine.capacity import evaluate_capacity, grid_capacity
from engine.classifier import classify
from engine.diagnostics import find_adjacency_violations, find_duplicates
from engine.errors import ConfigError
from engine.explainer import explain_run
from engine.filler import fill_grids
from engine.patterns import get_strategy
from engine.randomizer import shuffle_within_groups
from engine.rebalancer import occupied_count, rebalance, repack_halls
from engine.repair import repair_adjacency
from config.defaults import (
    DEFAULT_CLASSIFICATION_KEY, DEFAULT_STRATEGY, STRATEGY_PASSES,
    DEFAULT_ADJACENCY_KEY, MAX_REPAIR_SWEEPS,
)

logger = logging.getLogger(__name__)


def resolve_passes(strategy: str, rule_config: Optional[dict] = None) -> dict:
    """Post-fill passes for a strategy, with per-run overrides."""
    cfg = rule_config or {}
    passes = dict(STRATEGY_PASSES.get(strategy, {"rebalance": False, "repair": False}))
    for name in ("rebalance", "repair"):
        if cfg.get(name) is not None:
            passes[name] = bool(cfg[name])
    return passes


def resolve_adjacency_key(passes: dict, key: str, rule_config: Optional[dict] = None) -> str:
    """Label checked for same-label neighbours once every pass has run.

    The rebalancer separates by `adjacency_key` (batch by default), repair
    separates by the classification key.
    """
    cfg = rule_config or {}
    if cfg.get("adjacency_key"):
        return cfg["adjacency_key"]
    return DEFAULT_ADJACENCY_KEY if passes["rebalance"] else key


def build_reports(matrices, grids: List[GridDescriptor], density: int) -> List[GridReport]:
    return [
        GridReport(
            name=g.name,
            placed_count=occupied_count(matrices[g.name]),
            capacity=grid_capacity(g, density),
            furniture=g.furniture,
        )
        for g in grids
    ]


def summarize_unplaced(unplaced: List[Individual], key: str) -> UnplacedSummary:
    return UnplacedSummary(counts=dict(Counter(p.label(key) for p in unplaced)), individuals=list(unplaced))


def run_allocation(
    individuals: Sequence[Individual],
    grids: Sequence[GridDescriptor],
    key: str = DEFAULT_CLASSIFICATION_KEY,
    strategy: Optional[str] = None,
    rule_config: Optional[dict] = None,
) -> Allocation:
    """Full pipeline: classify, pick density, fill, then rebalance/repack/shuffle/repair.

    Raises ConfigError or CapacityError before anything is placed. Individuals
    who cannot be seated are reported in `Allocation.unplaced`, never raised.
    """
    cfg = rule_config or {}
    strategy_name = strategy or cfg.get("strategy", DEFAULT_STRATEGY)
    grids = list(grids)

    validation = validate_grids(grids)
    if not validation.is_valid:
        raise ConfigError(
            "Invalid hall configuration: " + "; ".join(validation.errors),
            details={"errors": validation.errors},
        )
    pattern = get_strategy(strategy_name, cfg)
    validate_individuals(individuals, key)

    # Step 1: Classification
    classification = classify(
        individuals, key,
        sort_fields=cfg.get("sort_fields", ()),
        cluster_by=cfg.get("cluster_by"),
    )
    group_sizes = {n: classification.groups[n].initial_size for n in classification.rotation_order}

    # Step 2: Density, decided once for every hall
    decision = evaluate_capacity(grids, len(individuals), cfg)

    # Step 3: Column-major fill
    fill = fill_grids(grids, classification, pattern, decision.density)
    matrices = fill.matrices
    leftovers = classification.leftovers()

    passes = resolve_passes(strategy_name, cfg)
    unplaced = leftovers
    dropped: List[Individual] = []

    # Step 4: Rebalance the trailing hall, offering it the fill leftovers too
    rebalance_result = None
    if passes["rebalance"]:
        rebalance_result = rebalance(
            matrices, grids, decision.density,
            pending=leftovers,
            adjacency_key=cfg.get("adjacency_key", DEFAULT_ADJACENCY_KEY),
        )
        dropped = rebalance_result.dropped
        unplaced = dropped

    repack_result = None
    if cfg.get("repack"):
        repack_result = repack_halls(matrices, grids, decision.density)

    shuffle_seed = cfg.get("shuffle_seed")
    if shuffle_seed is not None:
        shuffle_within_groups(matrices, key, shuffle_seed)

    # Step 5: Adjacency repair
    repair_result = None
    if passes["repair"]:
        repair_result = repair_adjacency(matrices, key, cfg.get("max_repair_sweeps", MAX_REPAIR_SWEEPS))

    adjacency_key = resolve_adjacency_key(passes, key, cfg)
    residual = find_adjacency_violations(matrices, adjacency_key)
    if residual:
        ran_pass = passes["rebalance"] or passes["repair"] or repack_result is not None or shuffle_seed is not None
        log = logger.warning if ran_pass else logger.debug
        log("%d same-%s neighbour pairs remain after all passes", len(residual), adjacency_key)

    duplicates = find_duplicates(matrices)
    if duplicates:
        logger.warning("%d identifiers seated more than once: %s",
                       len(duplicates), ", ".join(d["identifier"] for d in duplicates))

    reports = build_reports(matrices, grids, decision.density)
    unplaced_summary = summarize_unplaced(unplaced, key)

    explanation = explain_run(
        key=key,
        group_sizes=group_sizes,
        decision=decision,
        strategy=strategy_name,
        placed=fill.placed,
        queued_after_fill=len(leftovers),
        rebalance=rebalance_result,
        repair=repair_result,
        shuffled=shuffle_seed is not None,
        unplaced_total=unplaced_summary.total,
        repack=repack_result,
        adjacency_key=adjacency_key,
        residual=len(residual),
    )

    allocation = Allocation(
        key=key,
        strategy=strategy_name,
        density=decision.density,
        grids=grids,
        matrices=matrices,
        reports=reports,
        unplaced=unplaced_summary,
        repair_exhausted=repair_result.exhausted if repair_result else False,
        adjacency_key=adjacency_key,
        residual_violations=residual,
        dropped=list(dropped),
        explanation_steps=explanation,
    )

    logger.info(
        "Allocated %d of %d individuals by %s across %d halls (%s, %d per bench); %d unplaced",
        allocation.placed_count, len(individuals), key, len(grids),
        strategy_name, decision.density, unplaced_summary.total,
    )
    return allocation
