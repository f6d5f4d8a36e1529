"""
Lifecycle states and read visibility tiers.

Storage keeps two columns per record (``in_stock`` and ``deleted_at``); this
module names the states they encode and the transitions each lifecycle
operation performs between them.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional


class LifecycleState(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"
    DELETED = "deleted"
    REMOVED = "removed"


class LifecycleOperation(str, Enum):
    CREATE = "create"
    PUBLISH = "publish"
    UNPUBLISH = "unpublish"
    UPDATE = "update"
    DELETE = "delete"
    DELETE_PERMANENT = "delete_permanent"
    RESTORE = "restore"


class Visibility(str, Enum):
    """Read tiers shared by Get, List and Count."""

    PUBLISHED = "published"
    WITH_DELETED = "with_deleted"
    WITH_UNPUBLISHED = "with_unpublished"


@dataclass(frozen=True)
class Transition:
    sources: FrozenSet[LifecycleState]
    target: Optional[LifecycleState]


_UNPUBLISHED = frozenset({LifecycleState.DRAFT, LifecycleState.ARCHIVED})
_LIVE = _UNPUBLISHED | {LifecycleState.PUBLISHED}

# A target of None keeps the current state.
TRANSITIONS: Dict[LifecycleOperation, Transition] = {
    LifecycleOperation.CREATE: Transition(frozenset(), LifecycleState.DRAFT),
    LifecycleOperation.PUBLISH: Transition(_LIVE, LifecycleState.PUBLISHED),
    LifecycleOperation.UNPUBLISH: Transition(_LIVE, LifecycleState.ARCHIVED),
    LifecycleOperation.UPDATE: Transition(_LIVE, None),
    LifecycleOperation.DELETE: Transition(_LIVE, LifecycleState.DELETED),
    LifecycleOperation.DELETE_PERMANENT: Transition(_LIVE | {LifecycleState.DELETED}, LifecycleState.REMOVED),
    LifecycleOperation.RESTORE: Transition(_UNPUBLISHED | {LifecycleState.DELETED}, LifecycleState.ARCHIVED),
}


def derive_state(in_stock: bool, deleted_at: Optional[datetime]) -> LifecycleState:
    """Map the stored flags to a state.

    Draft and Archived share the same stored form; an unpublished live record
    is reported as DRAFT.
    """
    if deleted_at is not None:
        return LifecycleState.DELETED
    if in_stock:
        return LifecycleState.PUBLISHED
    return LifecycleState.DRAFT


def can_transition(operation: LifecycleOperation, state: LifecycleState) -> bool:
    return state in TRANSITIONS[operation].sources


def resulting_state(operation: LifecycleOperation, state: LifecycleState) -> LifecycleState:
    target = TRANSITIONS[operation].target
    return state if target is None else target
