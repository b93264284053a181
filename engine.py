# engine.py

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from config import SimulatorConfig
from errors import InvalidConfiguration, SimulationNotConfigured, StepAfterFinished
from policies import (
    Event,
    EventType,
    Frames,
    FifoState,
    LruState,
    PolicyState,
    ReplacementPolicy,
    apply_policy,
    initial_state,
)
from utils import parse_reference_string


class Phase(str, Enum):
    IDLE = "Idle"
    READY = "Ready"
    RUNNING = "Running"
    FINISHED = "Finished"


@dataclass(frozen=True)
class Stats:
    hits: int = 0
    faults: int = 0

    @property
    def total(self) -> int:
        return self.hits + self.faults

    @property
    def hit_ratio(self) -> float:
        return self.hits / self.total if self.total else 0.0

    @property
    def fault_rate(self) -> float:
        return self.faults / self.total if self.total else 0.0

    def record(self, event: Event) -> "Stats":
        if event.type is EventType.HIT:
            return Stats(self.hits + 1, self.faults)
        if event.type is EventType.FAULT:
            return Stats(self.hits, self.faults + 1)
        return self


@dataclass(frozen=True)
class Snapshot:
    """Full simulation state at one step boundary. Never modified once recorded."""
    frames: Frames
    cursor: int
    policy_state: PolicyState
    event: Event
    stats: Stats


@dataclass(frozen=True)
class EngineState:
    """
    Read-only view handed to the presentation layer.

    Attributes:
        policy (Optional[ReplacementPolicy]): Selected policy, None while idle
        frames (Frames): Slot contents, None for an empty slot
        cursor (int): Index of the next unprocessed reference
        references (Tuple[int, ...]): The whole reference sequence
        policy_state (Optional[PolicyState]): FIFO pointer / LRU recency order
        last_event (Optional[Event]): Outcome of the latest step
        stats (Stats): Hit and fault counters
        is_finished (bool): True once every reference has been processed
        phase (Phase): Idle, Ready, Running or Finished
    """
    policy: Optional[ReplacementPolicy]
    frames: Frames
    cursor: int
    references: Tuple[int, ...]
    policy_state: Optional[PolicyState]
    last_event: Optional[Event]
    stats: Stats
    is_finished: bool
    phase: Phase

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def current_page(self) -> Optional[int]:
        if self.cursor < len(self.references):
            return self.references[self.cursor]
        return None


class SimulationEngine:
    """
    Drives a reference sequence through one replacement policy, one step at a
    time, and keeps a stack of snapshots so every step can be undone.

    The engine is meant to be driven from a single thread. All values it hands
    out are immutable, so a caller holding on to a state between steps never
    sees it change.
    """

    def __init__(self, config: Optional[SimulatorConfig] = None):
        self.config = config or SimulatorConfig()
        self._clear()

    def _clear(self):
        self._event_log: List[str] = []
        self._policy: Optional[ReplacementPolicy] = None
        self._references: Tuple[int, ...] = ()
        self._history: List[Snapshot] = []
        self._done_emitted = False

    def reset(self):
        """Drop the configuration and the whole undo history."""
        self._clear()
        self._event_log.append("Simulation reset")

    # -----------------------------
    # Setup
    # -----------------------------
    def configure(self, policy: Union[str, ReplacementPolicy], frame_count: int,
                  references: Union[str, Iterable[int]]):
        """
        Start a new run.

        Args:
            policy: A ReplacementPolicy or its name ("FIFO", "lru", "Optimal")
            frame_count (int): Number of frames, within the configured limits
            references: Comma separated string or iterable of page numbers

        Raises:
            InvalidConfiguration: If any argument is rejected. The engine is
                left idle in that case.
        """
        self._clear()
        try:
            policy = ReplacementPolicy.from_name(policy)
            frame_count = self._validate_frame_count(frame_count)
            references = self._validate_references(references)
        except InvalidConfiguration as exc:
            self._event_log.append(f"Configuration rejected: {exc}")
            raise
        except ValueError as exc:
            self._event_log.append(f"Configuration rejected: {exc}")
            raise InvalidConfiguration(str(exc)) from None

        self._policy = policy
        self._references = references
        self._history.append(Snapshot(
            frames=(None,) * frame_count,
            cursor=0,
            policy_state=initial_state(policy),
            event=Event.start(),
            stats=Stats(),
        ))
        self._event_log.append(
            f"Configured {policy.value}: {frame_count} frames, {len(references)} references"
        )

    def _validate_frame_count(self, frame_count) -> int:
        if isinstance(frame_count, str):
            try:
                frame_count = int(frame_count.strip())
            except ValueError:
                raise InvalidConfiguration(f"Frame count is not a number: {frame_count!r}") from None
        if isinstance(frame_count, bool) or not isinstance(frame_count, int):
            raise InvalidConfiguration(f"Frame count must be an integer, got {frame_count!r}")
        if frame_count not in self.config.FRAME_RANGE:
            raise InvalidConfiguration(
                f"Frame count must be between {self.config.MIN_FRAMES} and "
                f"{self.config.MAX_FRAMES}, got {frame_count}"
            )
        return frame_count

    @staticmethod
    def _validate_references(references) -> Tuple[int, ...]:
        if isinstance(references, str):
            pages = parse_reference_string(references)
        else:
            try:
                items = iter(references)
            except TypeError:
                raise InvalidConfiguration(f"Not a reference sequence: {references!r}") from None
            pages = []
            for item in items:
                if isinstance(item, str):
                    pages.extend(parse_reference_string(item))
                    continue
                if isinstance(item, bool) or not isinstance(item, int):
                    raise InvalidConfiguration(f"Not a page number: {item!r}")
                if item < 0:
                    raise InvalidConfiguration(f"Page numbers must be non-negative, got {item}")
                pages.append(item)
        if not pages:
            raise InvalidConfiguration("The reference sequence is empty")
        return tuple(pages)

    # -----------------------------
    # Stepping
    # -----------------------------
    def step_forward(self) -> Event:
        """
        Process the next reference and return what happened.

        Once the last reference has been processed the next call returns a
        DONE event. Any call after that raises StepAfterFinished.
        """
        if self._policy is None:
            raise SimulationNotConfigured("Configure the simulation before stepping")
        if self._done_emitted:
            raise StepAfterFinished("No more steps: the simulation has finished")

        current = self._history[-1]
        if current.cursor >= len(self._references):
            self._done_emitted = True
            self._event_log.append(
                f"Done: {current.stats.faults} faults, {current.stats.hits} hits"
            )
            return Event.done()

        page = self._references[current.cursor]
        future = self._references[current.cursor + 1:]
        result = apply_policy(self._policy, current.frames, current.policy_state, page, future)

        self._history.append(Snapshot(
            frames=result.frames,
            cursor=current.cursor + 1,
            policy_state=result.state,
            event=result.event,
            stats=current.stats.record(result.event),
        ))
        self._log_event(result.event)
        return result.event

    def step_backward(self) -> bool:
        """
        Undo the latest step. Returns False when there is nothing to undo.
        """
        if len(self._history) <= 1:
            return False

        self._history.pop()
        self._done_emitted = False
        self._event_log.append(f"Undo: back to reference #{self._history[-1].cursor}")
        return True

    def run(self, on_step: Optional[Callable[[Event], None]] = None,
            delay: float = 0.0) -> List[Event]:
        """
        Step forward until DONE.

        Args:
            on_step: Called with every event, DONE included
            delay (float): Seconds to sleep between steps

        Returns:
            List[Event]: The events produced by this call
        """
        events = []
        while not self._done_emitted:
            event = self.step_forward()
            events.append(event)
            if on_step is not None:
                on_step(event)
            if delay and event.type is not EventType.DONE:
                time.sleep(delay)
        return events

    def _log_event(self, event: Event):
        if event.type is EventType.HIT:
            self._event_log.append(f"Hit: Page {event.page} in Frame {event.frame_index}")
            return
        self._event_log.append(f"Fault: Page {event.page} not in memory")
        if event.replaced is not None:
            self._event_log.append(f"Evicting: Page {event.replaced} from Frame {event.frame_index}")
        self._event_log.append(f"Loaded: Page {event.page} -> Frame {event.frame_index}")

    # -----------------------------
    # Inspection
    # -----------------------------
    @property
    def policy(self) -> Optional[ReplacementPolicy]:
        return self._policy

    @property
    def references(self) -> Tuple[int, ...]:
        return self._references

    @property
    def history(self) -> Tuple[Snapshot, ...]:
        return tuple(self._history)

    @property
    def event_log(self) -> Tuple[str, ...]:
        return tuple(self._event_log)

    @property
    def is_finished(self) -> bool:
        if not self._history:
            return False
        return self._history[-1].cursor >= len(self._references)

    @property
    def phase(self) -> Phase:
        if self._policy is None:
            return Phase.IDLE
        if self.is_finished:
            return Phase.FINISHED
        if self._history[-1].cursor == 0:
            return Phase.READY
        return Phase.RUNNING

    def can_step_forward(self) -> bool:
        return self._policy is not None and not self._done_emitted

    def can_step_backward(self) -> bool:
        return len(self._history) > 1

    def current_state(self) -> EngineState:
        if not self._history:
            return EngineState(
                policy=None, frames=(), cursor=0, references=(), policy_state=None,
                last_event=None, stats=Stats(), is_finished=False, phase=Phase.IDLE,
            )
        snapshot = self._history[-1]
        return EngineState(
            policy=self._policy,
            frames=snapshot.frames,
            cursor=snapshot.cursor,
            references=self._references,
            policy_state=snapshot.policy_state,
            last_event=Event.done() if self._done_emitted else snapshot.event,
            stats=snapshot.stats,
            is_finished=self.is_finished,
            phase=self.phase,
        )

    def frame_markers(self) -> List[Optional[str]]:
        """
        Per-slot labels for the visualization: "Next" beside the FIFO victim
        slot while the run is going, "LRU"/"MRU" beside the two ends of the
        LRU recency order.
        """
        if not self._history:
            return []
        snapshot = self._history[-1]
        markers: List[Optional[str]] = [None] * len(snapshot.frames)
        state = snapshot.policy_state

        if isinstance(state, FifoState) and not self.is_finished:
            markers[state.pointer] = "Next"
        elif isinstance(state, LruState) and state.recency:
            for i, page in enumerate(snapshot.frames):
                if page is None:
                    continue
                labels = []
                if page == state.recency[0]:
                    labels.append("LRU")
                if page == state.recency[-1]:
                    labels.append("MRU")
                if labels:
                    markers[i] = "/".join(labels)
        return markers

    # -----------------------------
    # Statistics
    # -----------------------------
    def get_stats(self) -> Dict[str, float]:
        stats = self.current_state().stats
        return {
            "hits": stats.hits,
            "faults": stats.faults,
            "hit_ratio": round(stats.hit_ratio, 4),
            "fault_rate": round(stats.fault_rate, 4),
            "total_refs": stats.total,
        }
