"""Per-hall utilization, identifier ranges and tabular views of an allocation."""

import re
from collections import Counter
from dataclasses import asdict, fields
from typing import Dict, List, Sequence

import pandas as pd

from models.allocation import Allocation, Placement
from config.defaults import RANGE_SUMMARY_KEYS

_TRAILING_NUMBER = re.compile(r"^(.*?)(\d+)$")


def natural_key(identifier: str):
    return [int(part) if part.isdigit() else part.lower() for part in re.split(r"(\d+)", identifier)]


def compress_identifiers(identifiers: Sequence[str]) -> List[dict]:
    """Collapse identifiers into runs of consecutive numbers sharing a prefix.

    ["CS01", "CS02", "CS03", "EC07"] -> CS01..CS03 (3), EC07..EC07 (1)
    """
    ordered = sorted(identifiers, key=natural_key)
    runs = []
    for identifier in ordered:
        match = _TRAILING_NUMBER.match(identifier)
        if runs and match:
            last = runs[-1]
            prev = _TRAILING_NUMBER.match(last["to"])
            if prev and prev.group(1) == match.group(1) and int(match.group(2)) == int(prev.group(2)) + 1:
                last["to"] = identifier
                last["count"] += 1
                continue
        runs.append({"from": identifier, "to": identifier, "count": 1})
    return runs


def format_ranges(runs: List[dict]) -> str:
    return ", ".join(r["from"] if r["count"] == 1 else f"{r['from']}-{r['to']}" for r in runs)


def get_grid_utilization(allocation: Allocation) -> List[dict]:
    """Compute utilization stats per hall."""
    results = []
    for report in allocation.reports:
        grid = allocation.grid(report.name)
        labels = Counter(
            p.label(allocation.key)
            for row in allocation.matrices[report.name] for cell in row for p in cell
        )
        results.append({
            "grid": report.name,
            "furniture": report.furniture,
            "rows": grid.rows,
            "columns": grid.columns,
            "capacity": report.capacity,
            "placed": report.placed_count,
            "empty": report.capacity - report.placed_count,
            "utilization_pct": report.placed_count / report.capacity if report.capacity > 0 else 0,
            "label_counts": dict(labels),
        })
    return results


def get_range_summary(allocation: Allocation, keys: Sequence[str] = RANGE_SUMMARY_KEYS) -> List[dict]:
    """Identifier ranges per hall and label combination (e.g. year and batch)."""
    rows = []
    for grid in allocation.grids:
        buckets: Dict[tuple, List[str]] = {}
        for row in allocation.matrices[grid.name]:
            for cell in row:
                for person in cell:
                    labels = tuple(person.label(k) for k in keys)
                    buckets.setdefault(labels, []).append(person.identifier)

        for labels in sorted(buckets):
            identifiers = sorted(buckets[labels], key=natural_key)
            entry = {"grid": grid.name}
            entry.update(dict(zip(keys, labels)))
            entry.update({
                "from": identifiers[0],
                "to": identifiers[-1],
                "count": len(identifiers),
                "ranges": format_ranges(compress_identifiers(identifiers)),
            })
            rows.append(entry)
    return rows


def seating_frame(allocation: Allocation) -> pd.DataFrame:
    """One row per seated individual, halls in caller order, seats row-major."""
    columns = [f.name for f in fields(Placement)]
    return pd.DataFrame([asdict(p) for p in allocation.placements()], columns=columns)


def report_frame(allocation: Allocation) -> pd.DataFrame:
    df = pd.DataFrame([asdict(r) for r in allocation.reports],
                      columns=["name", "placed_count", "capacity", "furniture"])
    df["utilization_pct"] = (df["placed_count"] / df["capacity"]).fillna(0.0)
    return df
