# policies.py
"""
Page Replacement Policies — FIFO, LRU and Optimal

Each policy is a pure function: it takes the current frame occupancy, its own
bookkeeping state and the referenced page, and returns new values without
touching its inputs. The simulation engine owns the state and commits whatever
a policy returns.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

Frames = Tuple[Optional[int], ...]


class ReplacementPolicy(str, Enum):
    """
    The page replacement algorithms the simulator knows about.

    FIFO:    First-In-First-Out - replaces the page loaded earliest
    LRU:     Least Recently Used - replaces the page unused for the longest time
    OPTIMAL: Belady's algorithm - replaces the page used furthest in the future
    """
    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "Optimal"

    @classmethod
    def from_name(cls, name: Union[str, "ReplacementPolicy"]) -> "ReplacementPolicy":
        """
        Resolve a policy from its display name, case-insensitively.

        Raises:
            ValueError: If the name matches none of the three policies
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for policy in cls:
            if policy.value.lower() == key:
                return policy
        if key == "opt":
            return cls.OPTIMAL
        raise ValueError(f"Unknown replacement policy: {name!r}")


class EventType(str, Enum):
    START = "START"
    HIT = "HIT"
    FAULT = "FAULT"
    DONE = "DONE"


@dataclass(frozen=True)
class Event:
    """
    Outcome of one simulation step.

    Attributes:
        type (EventType): What happened
        page (Optional[int]): Page that was referenced, None for START/DONE
        replaced (Optional[int]): Evicted page on a FAULT, None if the slot was empty
        frame_index (Optional[int]): Slot that was hit or that received the page
    """
    type: EventType
    page: Optional[int] = None
    replaced: Optional[int] = None
    frame_index: Optional[int] = None

    @classmethod
    def start(cls) -> "Event":
        return cls(EventType.START)

    @classmethod
    def done(cls) -> "Event":
        return cls(EventType.DONE)

    @property
    def is_hit(self) -> bool:
        return self.type is EventType.HIT

    @property
    def is_fault(self) -> bool:
        return self.type is EventType.FAULT


# =============================================================================
# POLICY STATE
# =============================================================================

@dataclass(frozen=True)
class FifoState:
    # Slot that is evicted on the next fault
    pointer: int = 0


@dataclass(frozen=True)
class LruState:
    # Resident pages, least recently used first
    recency: Tuple[int, ...] = ()


@dataclass(frozen=True)
class OptimalState:
    # Optimal recomputes its choice from the future references every step
    pass


PolicyState = Union[FifoState, LruState, OptimalState]


@dataclass(frozen=True)
class StepResult:
    frames: Frames
    state: PolicyState
    event: Event


def initial_state(policy: ReplacementPolicy) -> PolicyState:
    """Fresh bookkeeping for a policy at the start of a run."""
    if policy is ReplacementPolicy.FIFO:
        return FifoState()
    if policy is ReplacementPolicy.LRU:
        return LruState()
    return OptimalState()


# -----------------------------
# Helpers
# -----------------------------

def _first_empty(frames: Frames) -> Optional[int]:
    for i, page in enumerate(frames):
        if page is None:
            return i
    return None


def _hit(frames: Frames, state: PolicyState, page: int) -> StepResult:
    event = Event(EventType.HIT, page=page, frame_index=frames.index(page))
    return StepResult(frames, state, event)


def _place(frames: Frames, index: int, page: int) -> Frames:
    return frames[:index] + (page,) + frames[index + 1:]


# -----------------------------
# Algorithms
# -----------------------------

def fifo_step(frames: Frames, state: FifoState, page: int) -> StepResult:
    """
    Reference a page under FIFO.

    The pointer walks the slots round-robin and only moves on a fault, so it
    always addresses the page that has been resident the longest.
    """
    if page in frames:
        return _hit(frames, state, page)

    index = _first_empty(frames)
    if index is None:
        index = state.pointer
    victim = frames[index]

    new_state = FifoState(pointer=(state.pointer + 1) % len(frames))
    event = Event(EventType.FAULT, page=page, replaced=victim, frame_index=index)
    return StepResult(_place(frames, index, page), new_state, event)


def lru_step(frames: Frames, state: LruState, page: int) -> StepResult:
    """
    Reference a page under LRU.

    The referenced page always moves to the most-recent end of the recency
    sequence, on a hit as well as on a fault.
    """
    recency = tuple(p for p in state.recency if p != page) + (page,)

    if page in frames:
        return _hit(frames, LruState(recency), page)

    victim = None
    index = _first_empty(frames)
    if index is None:
        victim = next(p for p in recency if p in frames)
        index = frames.index(victim)
        recency = tuple(p for p in recency if p != victim)

    event = Event(EventType.FAULT, page=page, replaced=victim, frame_index=index)
    return StepResult(_place(frames, index, page), LruState(recency), event)


def optimal_step(frames: Frames, state: OptimalState, page: int,
                 future: Sequence[int]) -> StepResult:
    """
    Reference a page under the Optimal policy.

    Args:
        frames (Frames): Current frame occupancy
        state (OptimalState): Unused, kept for a uniform signature
        page (int): Page being referenced
        future (Sequence[int]): References that come after this one

    Returns:
        StepResult: New occupancy, state and the HIT/FAULT event

    A resident page that never shows up in ``future`` is evicted straight
    away (first such slot wins). Otherwise the page whose next use is
    furthest away goes; equal distances keep the earlier slot.
    """
    if page in frames:
        return _hit(frames, state, page)

    victim = None
    index = _first_empty(frames)
    if index is None:
        future = list(future)
        furthest = -1
        for i, resident in enumerate(frames):
            if resident not in future:
                index = i
                break
            next_use = future.index(resident)
            if next_use > furthest:
                furthest = next_use
                index = i
        victim = frames[index]

    event = Event(EventType.FAULT, page=page, replaced=victim, frame_index=index)
    return StepResult(_place(frames, index, page), state, event)


# Every ReplacementPolicy member has exactly one entry here
POLICY_STEPS = {
    ReplacementPolicy.FIFO: lambda frames, state, page, future: fifo_step(frames, state, page),
    ReplacementPolicy.LRU: lambda frames, state, page, future: lru_step(frames, state, page),
    ReplacementPolicy.OPTIMAL: optimal_step,
}


def apply_policy(policy: ReplacementPolicy, frames: Frames, state: PolicyState,
                 page: int, future: Sequence[int] = ()) -> StepResult:
    """Run one reference through ``policy``; only Optimal looks at ``future``."""
    return POLICY_STEPS[policy](frames, state, page, future)
