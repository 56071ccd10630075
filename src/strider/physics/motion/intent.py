from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterator, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MovePerformed:
    """New stick/keyboard move vector: x = right, y = forward."""

    x: float
    y: float


@dataclass(frozen=True)
class MoveCanceled:
    """Move input released."""


@dataclass(frozen=True)
class JumpTriggered:
    # True for a press edge. Level (held) triggers are never blocked while airborne.
    edge_triggered: bool = True


InputEvent = Union[MovePerformed, MoveCanceled, JumpTriggered]


class InputEventQueue:
    """
    Bounded FIFO between input callbacks and the fixed step.

    Callbacks only append; the controller drains once at the start of each step, so
    input never interleaves with integration. When full, the oldest event is dropped.
    """

    def __init__(self, *, maxlen: int = 32) -> None:
        self._events: deque[InputEvent] = deque(maxlen=max(1, int(maxlen)))
        self.enabled = False
        self.dropped = 0

    def __len__(self) -> int:
        return len(self._events)

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False
        self._events.clear()

    def push(self, event: InputEvent) -> bool:
        if not self.enabled:
            return False
        if len(self._events) == self._events.maxlen:
            self.dropped += 1
            logger.warning("Input queue full (%d); dropping oldest event %r", self._events.maxlen, self._events[0])
        self._events.append(event)
        return True

    def drain(self) -> Iterator[InputEvent]:
        while self._events:
            yield self._events.popleft()
