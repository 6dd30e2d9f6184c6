"""Validation of hall descriptors, individuals and their source tables."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import pandas as pd

from models.grid import GridDescriptor, NAME_ALIASES
from models.individual import Individual, RECORD_ALIASES
from config.defaults import CLASSIFICATION_KEYS, UNKNOWN_LABEL

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


HALL_REQUIRED_COLUMNS = [
    "Rows",
    "Columns",
]


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def _check_any_column(df: pd.DataFrame, aliases: List[str], what: str, file_label: str, result: ValidationResult):
    if not any(a in df.columns for a in aliases):
        result.is_valid = False
        result.errors.append(f"{file_label}: No {what} column. Expected one of: {', '.join(aliases)}")


def validate_hall_frame(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, HALL_REQUIRED_COLUMNS, "Hall Master")
    _check_any_column(df, NAME_ALIASES, "hall name", "Hall Master", result)
    if not result.is_valid:
        return result

    if (pd.to_numeric(df["Rows"], errors="coerce").fillna(0) <= 0).any():
        result.is_valid = False
        result.errors.append("Hall Master: Rows must be positive numbers.")
    if (pd.to_numeric(df["Columns"], errors="coerce").fillna(0) <= 0).any():
        result.is_valid = False
        result.errors.append("Hall Master: Columns must be positive numbers.")
    return result


def validate_individual_frame(df: pd.DataFrame) -> ValidationResult:
    result = ValidationResult()
    if df.empty:
        result.is_valid = False
        result.errors.append("Student List: File contains no data rows.")
    has_roll = any(a in df.columns for a in RECORD_ALIASES["identifier"]) or any(
        "roll" in str(c).lower() for c in df.columns
    )
    if not has_roll:
        result.is_valid = False
        result.errors.append(
            f"Student List: No roll number column. Expected one of: {', '.join(RECORD_ALIASES['identifier'])}"
        )
    return result


def validate_grids(grids: Sequence[GridDescriptor]) -> ValidationResult:
    """Structural checks that make a run impossible; all of them are errors."""
    result = ValidationResult()
    if not grids:
        result.is_valid = False
        result.errors.append("No halls given.")
        return result

    for grid in grids:
        if not grid.name:
            result.is_valid = False
            result.errors.append("Hall with blank name.")
        if grid.rows <= 0 or grid.columns <= 0:
            result.is_valid = False
            result.errors.append(
                f"Hall {grid.name}: rows and columns must be positive (got {grid.rows}x{grid.columns})."
            )

    dupes = [name for name, n in Counter(g.name for g in grids).items() if n > 1]
    if dupes:
        result.is_valid = False
        result.errors.append(f"Duplicate hall names: {', '.join(sorted(dupes))}")

    return result


def validate_individuals(individuals: Sequence[Individual], key: Optional[str] = None) -> ValidationResult:
    """Data quality checks; none of them blocks a run."""
    result = ValidationResult()

    blank = sum(1 for i in individuals if not i.identifier)
    if blank:
        result.warnings.append(f"{blank} individuals have no identifier.")

    dupes = [ident for ident, n in Counter(i.identifier for i in individuals if i.identifier).items() if n > 1]
    if dupes:
        result.warnings.append(f"Duplicate identifiers: {', '.join(sorted(dupes))}")

    if key is not None and key not in CLASSIFICATION_KEYS and not any(key in i.extra for i in individuals):
        result.warnings.append(f"No individual carries a '{key}' attribute; everyone shares one group.")
    elif key is not None:
        unknown = sum(1 for i in individuals if i.label(key) == UNKNOWN_LABEL)
        if unknown:
            result.warnings.append(f"{unknown} individuals have no {key}; grouped as {UNKNOWN_LABEL}.")

    for warning in result.warnings:
        logger.warning(warning)
    return result
