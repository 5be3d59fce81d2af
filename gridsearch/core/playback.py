# gridsearch/core/playback.py
#!/usr/bin/env python3
"""
Timed replay of precomputed results as display-tag events.

A playback is a fixed timeline built up front:
- visited phase: step i (1-based) of every track is due at i * interval ms,
  tracks interleaved by step index;
- path phase: starts once the longest visited sequence is over, each step
  2 * interval ms after the previous one.

Nothing runs on its own. The owner (the viewer's frame loop) calls tick() and
every event whose due time has passed fires in timeline order, so cancellation
is only observable between steps. A scheduler keeps at most one active playback
for its grid: schedule() cancels the previous one before building the next.
"""

import logging
import re
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Mapping, Optional, Union

from gridsearch.core.types import AlgorithmKind, AlgorithmResult, Cell, DisplayTag, Grid, Role

logger = logging.getLogger(__name__)

EventCallback = Callable[[AlgorithmKind, Cell, DisplayTag], None]

VISITED = "visited"
PATH = "path"


class SpeedPreset(Enum):
    VERY_FAST = 5
    FAST = 15
    NORMAL = 25
    SLOW = 50
    VERY_SLOW = 100

    @property
    def interval_ms(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    def faster(self) -> "SpeedPreset":
        order = list(SpeedPreset)
        return order[max(0, order.index(self) - 1)]

    def slower(self) -> "SpeedPreset":
        order = list(SpeedPreset)
        return order[min(len(order) - 1, order.index(self) + 1)]

    @classmethod
    def parse(cls, name: Union[str, "SpeedPreset"]) -> "SpeedPreset":
        """'normal', 'very_fast', 'veryFast', 'Very Fast' ... numbers are refused."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise ValueError(f"Speed must be a preset name, got {name!r}")
        key = name.strip().replace("-", "_").replace(" ", "_")
        # camelCase too ("veryFast")
        for candidate in (key.upper(), re.sub(r"(?<=[a-z])(?=[A-Z])", "_", key).upper()):
            if candidate in cls.__members__:
                return cls[candidate]
        raise ValueError(f"Unknown speed preset {name!r}; "
                         f"choose one of {[p.name.lower() for p in cls]}")


@dataclass(frozen=True)
class PlaybackEvent:
    due_ms: float
    track: AlgorithmKind
    phase: str            # VISITED | PATH
    cell: Cell
    tag: DisplayTag
    channel: Optional[str] = None  # None -> primary Node.display, else Node.overlays[channel]


@dataclass
class PlaybackHandle:
    events: List[PlaybackEvent]
    started_at: float
    on_event: Optional[EventCallback] = None
    fired: int = 0
    cancelled: bool = False
    applied: List[PlaybackEvent] = field(default_factory=list)

    @property
    def pending(self) -> int:
        return 0 if self.cancelled else len(self.events) - self.fired

    @property
    def done(self) -> bool:
        return self.cancelled or self.fired >= len(self.events)

    def cancel(self) -> None:
        if not self.cancelled and not self.done:
            logger.debug("Playback cancelled with %d pending steps", len(self.events) - self.fired)
        self.cancelled = True


def build_timeline(results: Mapping[AlgorithmKind, AlgorithmResult], speed: SpeedPreset,
                   multi_track: bool) -> List[PlaybackEvent]:
    interval = speed.interval_ms
    tracks = list(results.items())
    events: List[PlaybackEvent] = []

    def channel(kind: AlgorithmKind) -> Optional[str]:
        return kind.value if multi_track else None

    longest_visit = max((len(r.visited) for _, r in tracks), default=0)
    for i in range(longest_visit):
        for kind, res in tracks:
            if i < len(res.visited):
                tag = DisplayTag.visited_for(kind) if multi_track else DisplayTag.VISITED
                events.append(PlaybackEvent((i + 1) * interval, kind, VISITED, res.visited[i], tag, channel(kind)))

    base = longest_visit * interval
    longest_path = max((len(r.path) for _, r in tracks), default=0)
    for i in range(longest_path):
        for kind, res in tracks:
            if i < len(res.path):
                tag = DisplayTag.path_for(kind) if multi_track else DisplayTag.PATH
                events.append(PlaybackEvent(base + (i + 1) * 2 * interval, kind, PATH, res.path[i], tag, channel(kind)))
    return events


class PlaybackScheduler:
    """Owns the (single) active playback of one grid."""

    def __init__(self, grid: Grid, clock: Callable[[], float] = time.monotonic):
        self.grid = grid
        self.clock = clock
        self.active: Optional[PlaybackHandle] = None

    def schedule(self, results: Union[AlgorithmResult, Mapping[AlgorithmKind, AlgorithmResult]],
                 speed: Union[SpeedPreset, str] = SpeedPreset.NORMAL,
                 on_event: Optional[EventCallback] = None) -> PlaybackHandle:
        self.cancel()
        speed = SpeedPreset.parse(speed)

        if isinstance(results, AlgorithmResult):
            timeline = build_timeline({results.kind: results}, speed, multi_track=False)
        else:
            timeline = build_timeline(dict(results), speed, multi_track=True)

        self.active = PlaybackHandle(events=timeline, started_at=self.clock(), on_event=on_event)
        logger.debug("Scheduled %d playback steps at %s (%d ms)", len(timeline), speed.label, speed.interval_ms)
        return self.active

    def cancel(self) -> None:
        if self.active is not None:
            self.active.cancel()
            self.active = None

    @property
    def running(self) -> bool:
        return self.active is not None and not self.active.done

    def tick(self, now: Optional[float] = None) -> int:
        """Fire every event due by ``now`` (clock seconds). Returns how many fired."""
        handle = self.active
        if handle is None or handle.done:
            return 0
        now = self.clock() if now is None else now
        elapsed_ms = (now - handle.started_at) * 1000.0
        return self._fire_until(handle, elapsed_ms)

    def flush(self) -> int:
        """Fire everything left immediately (skip the animation)."""
        handle = self.active
        if handle is None or handle.done:
            return 0
        return self._fire_until(handle, float("inf"))

    def _fire_until(self, handle: PlaybackHandle, elapsed_ms: float) -> int:
        count = 0
        while not handle.done and handle.events[handle.fired].due_ms <= elapsed_ms:
            ev = handle.events[handle.fired]
            handle.fired += 1
            count += 1
            self._apply(handle, ev)
        return count

    def _apply(self, handle: PlaybackHandle, ev: PlaybackEvent) -> None:
        node = self.grid.node(ev.cell)
        # start/end/wall cells are never repainted
        if node.role is not Role.EMPTY:
            return
        current = node.display if ev.channel is None else node.overlays.get(ev.channel, DisplayTag.EMPTY)
        if ev.phase == VISITED and current is not DisplayTag.EMPTY:
            return

        if ev.channel is None:
            node.display = ev.tag
        else:
            node.overlays[ev.channel] = ev.tag
        handle.applied.append(ev)
        if handle.on_event is not None:
            handle.on_event(ev.track, ev.cell, ev.tag)
