# engine.py
"""
Page replacement simulation engine.

Each policy simulator replays a page reference string against a fixed number
of frames and returns a SimulationResult: one Step (frame snapshot) per
reference plus the total number of page faults.

Policies:
    - FIFO:    evict the page loaded earliest (circular insertion pointer)
    - LRU:     evict the least recently used page
    - Optimal: evict the page whose next use is farthest in the future
    - AFR:     evict the page with the lowest weighted frequency/recency score
"""

from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from config import DEFAULT_W1, DEFAULT_W2, EMPTY_SLOT


class ReplacementPolicy:
    """
    Names of the available page replacement algorithms.

    FIFO:    First-In-First-Out
    LRU:     Least Recently Used
    OPTIMAL: Belady's clairvoyant algorithm (lower bound on faults)
    AFR:     Age-Frequency-Recency weighted heuristic
    """
    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "Optimal"
    AFR = "AFR"

    ALL = (FIFO, LRU, OPTIMAL, AFR)


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class Step:
    """
    Snapshot of the frame table after one reference was processed.

    Attributes:
        page (int): The page that was referenced
        frames (Tuple[int, ...]): Frame contents in display order, EMPTY_SLOT for free frames
        fault (bool): True if the reference caused a page fault
        evicted (Optional[int]): Page removed to make room, None if nothing was evicted
    """
    page: int
    frames: Tuple[int, ...]
    fault: bool
    evicted: Optional[int] = None

    @property
    def resident(self) -> int:
        return sum(1 for f in self.frames if f != EMPTY_SLOT)


@dataclass(frozen=True)
class SimulationResult:
    """
    Outcome of one simulator run. Never mutated after it is returned.

    Attributes:
        policy (str): Name of the replacement policy that produced it
        frame_count (int): Number of frames simulated
        steps (Tuple[Step, ...]): One snapshot per reference, in input order
        faults (int): Total page faults over the whole run
        events (Tuple[str, ...]): Event log of hits, faults, evictions and loads
    """
    policy: str
    frame_count: int
    steps: Tuple[Step, ...]
    faults: int
    events: Tuple[str, ...] = ()

    @property
    def total_refs(self) -> int:
        return len(self.steps)

    @property
    def hits(self) -> int:
        return self.total_refs - self.faults

    def get_stats(self) -> Dict[str, float]:
        """
        Calculate summary statistics for the run.

        Returns:
            Dict[str, float]: hits, faults, hit_ratio, fault_rate and total_refs
        """
        total_refs = self.total_refs
        hit_ratio = (self.hits / total_refs) if total_refs > 0 else 0.0
        fault_rate = (self.faults / total_refs) if total_refs > 0 else 0.0

        return {
            "hits": self.hits,
            "faults": self.faults,
            "hit_ratio": round(hit_ratio, 4),
            "fault_rate": round(fault_rate, 4),
            "total_refs": total_refs,
        }

    def to_rows(self) -> List[dict]:
        """Plain dict per step, ready for a table or JSON."""
        return [
            {
                "step": i + 1,
                "page": s.page,
                "frames": list(s.frames),
                "fault": s.fault,
                "evicted": s.evicted,
            }
            for i, s in enumerate(self.steps)
        ]


class _Trace:
    """Per-run accumulator for steps, fault count and the event log."""

    def __init__(self):
        self.steps: List[Step] = []
        self.events: List[str] = []
        self.faults = 0
        self._faulted = False
        self._evicted: Optional[int] = None

    def hit(self, page: int, location: str):
        self.events.append(f"Hit: Page {page} in {location}")

    def fault(self, page: int, location: str, victim: int = EMPTY_SLOT):
        self.faults += 1
        self._faulted = True
        self.events.append(f"Fault: Page {page} not in memory")
        if victim != EMPTY_SLOT:
            self._evicted = victim
            self.events.append(f"Evicting: Page {victim} from {location}")
        self.events.append(f"Loaded: Page {page} -> {location}")

    def record(self, page: int, frames: Iterable[int]):
        self.steps.append(Step(page, tuple(frames), self._faulted, self._evicted))
        self._faulted = False
        self._evicted = None

    def result(self, policy: str, frame_count: int) -> SimulationResult:
        return SimulationResult(
            policy=policy,
            frame_count=frame_count,
            steps=tuple(self.steps),
            faults=self.faults,
            events=tuple(self.events),
        )


# =============================================================================
# SIMULATORS
# =============================================================================

class Simulator(ABC):
    """
    Base class for a page replacement policy.

    A simulator only holds its configuration. All frame table state is
    created inside run(), so consecutive runs never share mutable data.
    """

    policy: str = ""

    def __init__(self, frame_count: int):
        if isinstance(frame_count, bool) or not isinstance(frame_count, int):
            raise ValueError(f"Frame count must be an integer, got {frame_count!r}")
        if frame_count <= 0:
            raise ValueError(f"Frame count must be positive, got {frame_count}")
        self.frame_count = frame_count

    def run(self, pages: Iterable[int]) -> SimulationResult:
        """
        Replay a reference string and return the full trace.

        Pages are assumed to be validated already (non-negative integers).

        Args:
            pages (Iterable[int]): Page reference string in arrival order

        Returns:
            SimulationResult: One Step per reference plus the fault count
        """
        trace = _Trace()
        self._simulate(list(pages), trace)
        return trace.result(self.policy, self.frame_count)

    @abstractmethod
    def _simulate(self, pages: List[int], trace: _Trace):
        pass


class FIFOSimulator(Simulator):
    """
    First-In-First-Out replacement.

    A circular pointer walks the slots in insertion order, so the victim is
    always the oldest loaded page. Hits do not move the pointer.
    """

    policy = ReplacementPolicy.FIFO

    def _simulate(self, pages, trace):
        frames = [EMPTY_SLOT] * self.frame_count
        rear = 0

        for page in pages:
            if page in frames:
                trace.hit(page, f"Frame {frames.index(page)}")
            else:
                trace.fault(page, f"Frame {rear}", frames[rear])
                frames[rear] = page
                rear = (rear + 1) % self.frame_count
            trace.record(page, frames)


class LRUSimulator(Simulator):
    """
    Least Recently Used replacement.

    Resident pages live in an OrderedDict ordered from least to most
    recently used, giving O(1) promotion on a hit and O(1) eviction of the
    LRU page. Steps list pages most-recent first, padded with EMPTY_SLOT.
    """

    policy = ReplacementPolicy.LRU

    def _simulate(self, pages, trace):
        order: "OrderedDict[int, None]" = OrderedDict()

        for page in pages:
            if page in order:
                order.move_to_end(page)
                trace.hit(page, "recency list")
            else:
                victim = EMPTY_SLOT
                if len(order) >= self.frame_count:
                    victim, _ = order.popitem(last=False)
                order[page] = None
                trace.fault(page, "front of recency list", victim)

            snapshot = list(reversed(order))
            snapshot.extend([EMPTY_SLOT] * (self.frame_count - len(snapshot)))
            trace.record(page, snapshot)


def next_use_distance(pages: Sequence[int], start: int, page: int) -> Optional[int]:
    """
    Offset of the next occurrence of page in pages[start:].

    Returns:
        Optional[int]: 0 if pages[start] == page, None if it never occurs again
    """
    for offset in range(len(pages) - start):
        if pages[start + offset] == page:
            return offset
    return None


class OptimalSimulator(Simulator):
    """
    Belady's optimal replacement.

    Needs the whole reference string up front: on a fault it evicts the
    page whose next use lies farthest ahead. Used as a lower bound on faults.

    Slots are examined in index order and the first slot that is empty or
    holds a page never used again is taken. A dead page in an early slot is
    therefore replaced even while later slots are still empty, so a run can
    finish with fewer than min(F, distinct pages) resident.
    """

    policy = ReplacementPolicy.OPTIMAL

    def _simulate(self, pages, trace):
        frames = [EMPTY_SLOT] * self.frame_count

        for i, page in enumerate(pages):
            if page in frames:
                trace.hit(page, f"Frame {frames.index(page)}")
            else:
                slot = self._select_victim(frames, pages, i + 1)
                trace.fault(page, f"Frame {slot}", frames[slot])
                frames[slot] = page
            trace.record(page, frames)

    @staticmethod
    def _select_victim(frames: List[int], pages: List[int], start: int) -> int:
        # Slots are scanned in index order: an empty slot or a page that is
        # never used again wins immediately, otherwise the strictly farthest
        # next use wins and ties keep the earlier slot.
        victim = 0
        farthest = -1

        for slot, resident in enumerate(frames):
            if resident == EMPTY_SLOT:
                return slot
            distance = next_use_distance(pages, start, resident)
            if distance is None:
                return slot
            if distance > farthest:
                farthest = distance
                victim = slot

        return victim


class AFRSimulator(Simulator):
    """
    Age-Frequency-Recency replacement.

    Every slot keeps a frequency counter (references while resident) and a
    recency counter (references since its last access). On a fault with no
    free slot, the page with the lowest score

        w1 * frequency + w2 / (recency + 1)

    is evicted, the earliest slot winning ties. Any real weights are
    accepted. With w1 = w2 = 0 every score is equal, so slot 0 is always
    the victim.
    """

    policy = ReplacementPolicy.AFR

    def __init__(self, frame_count: int, w1: float = DEFAULT_W1, w2: float = DEFAULT_W2):
        super().__init__(frame_count)
        self.w1 = float(w1)
        self.w2 = float(w2)

    def score(self, frequency: int, recency: int) -> float:
        return self.w1 * frequency + self.w2 / (recency + 1)

    def _simulate(self, pages, trace):
        frames = [EMPTY_SLOT] * self.frame_count
        frequency = [0] * self.frame_count
        recency = [0] * self.frame_count

        for page in pages:
            found = None

            # Age every resident page; refresh the one being referenced
            for slot, resident in enumerate(frames):
                if resident == page:
                    found = slot
                    frequency[slot] += 1
                    recency[slot] = 0
                elif resident != EMPTY_SLOT:
                    recency[slot] += 1

            if found is not None:
                trace.hit(page, f"Frame {found}")
            else:
                if EMPTY_SLOT in frames:
                    slot = frames.index(EMPTY_SLOT)
                else:
                    slot = self._select_victim(frequency, recency)
                trace.fault(page, f"Frame {slot}", frames[slot])
                frames[slot] = page
                frequency[slot] = 1
                recency[slot] = 0

            trace.record(page, frames)

    def _select_victim(self, frequency: List[int], recency: List[int]) -> int:
        victim = 0
        min_score = self.score(frequency[0], recency[0])

        for slot in range(1, self.frame_count):
            s = self.score(frequency[slot], recency[slot])
            if s < min_score:
                min_score = s
                victim = slot

        return victim


# =============================================================================
# DISPATCH
# =============================================================================

SIMULATORS = {
    ReplacementPolicy.FIFO: FIFOSimulator,
    ReplacementPolicy.LRU: LRUSimulator,
    ReplacementPolicy.OPTIMAL: OptimalSimulator,
    ReplacementPolicy.AFR: AFRSimulator,
}


def make_simulator(policy: str, frame_count: int,
                   w1: float = DEFAULT_W1, w2: float = DEFAULT_W2) -> Simulator:
    """
    Build the simulator for a policy name.

    Raises:
        ValueError: If the policy is unknown or frame_count is not positive
    """
    if policy not in SIMULATORS:
        raise ValueError(f"Unknown replacement policy: {policy!r}")
    if policy == ReplacementPolicy.AFR:
        return AFRSimulator(frame_count, w1, w2)
    return SIMULATORS[policy](frame_count)


def simulate(policy: str, pages: Iterable[int], frame_count: int,
             w1: float = DEFAULT_W1, w2: float = DEFAULT_W2) -> SimulationResult:
    return make_simulator(policy, frame_count, w1, w2).run(pages)


def compare_policies(pages: Iterable[int], frame_count: int,
                     w1: float = DEFAULT_W1, w2: float = DEFAULT_W2) -> Dict[str, SimulationResult]:
    """Run every policy on the same input, keyed by policy name."""
    pages = list(pages)
    return {
        policy: simulate(policy, pages, frame_count, w1, w2)
        for policy in ReplacementPolicy.ALL
    }
