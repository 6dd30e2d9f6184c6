from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List

from models.individual import Individual


@dataclass
class Group:
    """FIFO queue of individuals sharing one classification label."""
    name: str
    members: Deque[Individual] = field(default_factory=deque)
    initial_size: int = 0

    @property
    def remaining(self) -> int:
        return len(self.members)

    @property
    def exhausted(self) -> bool:
        return not self.members

    def pop(self) -> Individual:
        return self.members.popleft()

    def drain(self) -> List[Individual]:
        drained = list(self.members)
        self.members.clear()
        return drained


@dataclass
class Classification:
    """Per-run queue state: the groups and their fixed rotation order."""
    key: str
    groups: Dict[str, Group] = field(default_factory=dict)
    rotation_order: List[str] = field(default_factory=list)

    @property
    def group_count(self) -> int:
        return len(self.rotation_order)

    @property
    def remaining_total(self) -> int:
        return sum(g.remaining for g in self.groups.values())

    @property
    def population(self) -> int:
        return sum(g.initial_size for g in self.groups.values())

    def non_empty(self) -> List[str]:
        return [n for n in self.rotation_order if not self.groups[n].exhausted]

    def leftovers(self) -> List[Individual]:
        """Drain every queue, in rotation order."""
        remaining = []
        for name in self.rotation_order:
            remaining.extend(self.groups[name].drain())
        return remaining
