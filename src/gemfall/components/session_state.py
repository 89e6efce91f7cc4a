"""Session state resource: selection/processing phase, pause flag and score."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Optional


class SessionPhase(Enum):
    """Mutually exclusive interaction phases of a session."""
    IDLE = auto()
    SELECTED = auto()
    PROCESSING = auto()


@dataclass(slots=True)
class SessionState:
    """Singleton component owned by the session system.

    ``selected_id`` is only meaningful in the SELECTED phase. ``paused`` is
    orthogonal to the phase: it blocks starting new selections, never a cascade
    already running.
    """
    phase: SessionPhase = SessionPhase.IDLE
    selected_id: Optional[int] = None
    paused: bool = False
    score: int = 0
    last_removed_ids: FrozenSet[int] = field(default_factory=frozenset)
    reset_pending: bool = False
