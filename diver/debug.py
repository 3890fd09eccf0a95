"""Per-frame value watcher.

``FrameWatcher`` is the optional ``WatchPort`` a controller reports to: the
controller records the values worth watching (velocity, grounded, jumping)
during a step, ``end_frame`` seals them into a bounded history. Nothing here
renders; an overlay or a log dump can read ``latest`` / ``history``.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict

from diver.constants import WATCH_HISTORY_FRAMES
from diver.logger import get_logger

log = get_logger("watch")


@dataclass
class FrameWatcher:
    enabled: bool = True
    max_frames: int = WATCH_HISTORY_FRAMES
    frame: int = field(default=0, init=False)
    _staging: Dict[str, Any] = field(default_factory=dict, init=False)
    _latest: Dict[str, Any] = field(default_factory=dict, init=False)
    history: Deque[Dict[str, Any]] = field(default_factory=deque, init=False, repr=False)

    def __post_init__(self):
        self.history = deque(maxlen=self.max_frames)

    def record(self, name: str, value: Any) -> None:
        if not self.enabled:
            return
        self._staging[name] = value
        self._latest[name] = value

    def latest(self, name: str, default: Any = None) -> Any:
        return self._latest.get(name, default)

    def end_frame(self) -> None:
        if not self.enabled:
            return
        self.history.append({"frame": self.frame, **self._staging})
        self._staging = {}
        self.frame += 1

    def dump(self, last: int = 10) -> None:
        """Log the last ``last`` frames at debug level."""
        for sample in list(self.history)[-last:]:
            log.debug(sample)


__all__ = ["FrameWatcher"]
