"""Generate synthetic student lists and hall masters for the seating engine.

Run as `python -m data.sample_data` from the repository root.
"""

import logging
import random
from typing import Dict, List, Optional

import pandas as pd

from models.grid import GridDescriptor
from models.individual import Individual

BRANCHES = {"CS": "Computer Science", "EC": "Electronics", "ME": "Mechanical", "CE": "Civil"}
SUBJECTS = ["Mathematics", "Physics", "Chemistry", "English"]


def generate_individuals(
    counts: Dict[str, int],
    key: str = "year",
    branches: Optional[List[str]] = None,
    seed: int = 42,
) -> List[Individual]:
    """`counts` maps a label of `key` to a headcount, e.g. {"1": 60, "2": 60}.

    Identifiers are <branch code><label><serial>, so consecutive members of a
    branch form consecutive roll numbers.
    """
    rng = random.Random(seed)
    codes = branches or list(BRANCHES)
    individuals = []
    for label, count in counts.items():
        for i in range(count):
            code = codes[i % len(codes)]
            serial = i // len(codes) + 1
            values = {
                "year": str(rng.randint(1, 4)),
                "branch": code,
                "subject": rng.choice(SUBJECTS),
                "batch": f"{code}{label}",
            }
            values[key] = label
            individuals.append(Individual(
                identifier=f"{code}{label}{serial:03d}",
                name=f"Student {code}-{label}-{serial}",
                **values,
            ))
    return individuals


def generate_grids(count: int = 4, rows: int = 4, columns: int = 9, chair_halls: int = 0) -> List[GridDescriptor]:
    """`count` bench halls followed by `chair_halls` chair halls."""
    grids = [GridDescriptor(f"H{i + 1}", rows, columns, "Bench") for i in range(count)]
    grids += [GridDescriptor(f"C{i + 1}", rows, columns - columns % 2, "Chair") for i in range(chair_halls)]
    return grids


def generate_students_df(seed: int = 42) -> pd.DataFrame:
    """Student list in the upload column layout: 4 branches, 3 years."""
    rows = []
    for person in generate_individuals({"1": 40, "2": 36, "3": 32}, key="year", seed=seed):
        rows.append({
            "RollNumber": person.identifier,
            "StudentName": person.name,
            "year": person.year,
            "Branch": BRANCHES[person.branch],
            "Subject": person.subject,
            "Batch": person.batch,
        })
    return pd.DataFrame(rows)


def generate_halls_df() -> pd.DataFrame:
    return pd.DataFrame([
        {"HallName": "A-101", "Rows": 5, "Columns": 9, "Type": "Bench"},
        {"HallName": "A-102", "Rows": 5, "Columns": 9, "Type": "Bench"},
        {"HallName": "B-201", "Rows": 6, "Columns": 6, "Type": "Chairs"},
    ])


if __name__ == "__main__":
    from data.loader import grids_from_frame, individuals_from_frame
    from engine.allocation_engine import run_allocation
    from engine.summary import get_range_summary, report_frame

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    allocation = run_allocation(
        individuals_from_frame(generate_students_df()),
        grids_from_frame(generate_halls_df()),
        key="year",
    )
    for step in allocation.explanation_steps:
        print(step)
    print(report_frame(allocation).to_string(index=False))
    print(pd.DataFrame(get_range_summary(allocation)).to_string(index=False))
