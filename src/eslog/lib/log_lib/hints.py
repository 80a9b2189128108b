"""
Hint registry.

Hints are short follow-up tips attached to a context ('result', 'error',
'verbose'). Application modules register them at import time; the
OutputManager decides when (and whether) to show them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

CONTEXTS = frozenset({'result', 'error', 'verbose'})


@dataclass
class Hint:
    """A templated tip.

    Attributes:
        id: Dot-namespaced key, e.g. 'manifest.unresolved'
        message: str.format() template
        context: Contexts the hint belongs to, a subset of CONTEXTS
        min_level: Lowest 'hint' channel threshold that shows it
        category: Grouping key; defaults to the id prefix ('manifest')
    """
    id: str
    message: str
    context: Set[str] = field(default_factory=lambda: {'verbose'})
    min_level: int = 1
    category: Optional[str] = None

    def __post_init__(self):
        unknown = set(self.context) - CONTEXTS
        if unknown:
            raise ValueError(f"hint {self.id!r}: unknown context(s) {sorted(unknown)}")
        if self.category is None:
            self.category = self.id.split('.', 1)[0]


_HINTS: Dict[str, Hint] = {}


def register_hints(*hints: Hint) -> None:
    """Add hints; an existing id is replaced."""
    for h in hints:
        _HINTS[h.id] = h


def register_hint(hint: Hint) -> None:
    register_hints(hint)


def get_hint(hint_id: str) -> Optional[Hint]:
    return _HINTS.get(hint_id)


def get_hints_by_category(category: str) -> List[Hint]:
    return [h for h in _HINTS.values() if h.category == category]
