"""Partition individuals into label groups with a stable rotation order."""

import logging
from collections import deque
from typing import Dict, List, Optional, Sequence

from models.cohort import Classification, Group
from models.individual import Individual

logger = logging.getLogger(__name__)


def _sort_value(individual: Individual, field_name: str) -> str:
    if field_name == "identifier":
        return individual.identifier
    return individual.label(field_name)


def _cluster(members: List[Individual], cluster_by: str, cluster_order: Dict[str, int]) -> List[Individual]:
    # sorted() is stable, so input order survives inside a cluster
    return sorted(members, key=lambda i: cluster_order[i.label(cluster_by)])


def classify(
    individuals: Sequence[Individual],
    key: str,
    sort_fields: Sequence[str] = (),
    cluster_by: Optional[str] = None,
) -> Classification:
    """Group individuals by `key` into FIFO queues.

    Rotation order is the order in which each label is first seen (after the
    optional stable sort by `sort_fields`). `cluster_by` keeps members of each
    group together by a secondary label, e.g. year groups clustered by subject.
    """
    ordered = list(individuals)
    if sort_fields:
        ordered.sort(key=lambda i: tuple(_sort_value(i, f) for f in sort_fields))

    buckets: Dict[str, List[Individual]] = {}
    for person in ordered:
        buckets.setdefault(person.label(key), []).append(person)

    if cluster_by:
        cluster_order: Dict[str, int] = {}
        for person in ordered:
            cluster_order.setdefault(person.label(cluster_by), len(cluster_order))
        buckets = {name: _cluster(members, cluster_by, cluster_order) for name, members in buckets.items()}

    groups = {
        name: Group(name=name, members=deque(members), initial_size=len(members))
        for name, members in buckets.items()
    }
    classification = Classification(key=key, groups=groups, rotation_order=list(buckets.keys()))

    logger.debug(
        "Classified %d individuals by %s into %d groups: %s",
        len(ordered), key, classification.group_count,
        ", ".join(f"{n}={groups[n].initial_size}" for n in classification.rotation_order),
    )
    return classification
