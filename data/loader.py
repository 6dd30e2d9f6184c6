"""DataFrame parsing: already-loaded tables into typed model lists."""

import pandas as pd
from typing import List
from models.grid import GridDescriptor
from models.individual import Individual


def _record(row: pd.Series) -> dict:
    return {k: (None if pd.isna(v) else v) for k, v in row.items()}


def individuals_from_frame(df: pd.DataFrame, derive_batch: bool = False) -> List[Individual]:
    """Convert a student list DataFrame into Individual objects, in row order."""
    individuals = []
    for _, row in df.iterrows():
        individuals.append(Individual.from_record(_record(row), derive_batch=derive_batch))
    return individuals


def grids_from_frame(df: pd.DataFrame) -> List[GridDescriptor]:
    """Convert a hall master DataFrame into GridDescriptor objects, in row order."""
    grids = []
    for _, row in df.iterrows():
        grids.append(GridDescriptor.from_record(_record(row)))
    return grids
