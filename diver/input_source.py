"""Buffered player input.

``BufferedInput`` is the concrete ``InputSource`` the controller polls each
step. Discrete actions (from ``InputRouter`` or a script) are applied with
``apply_action``; continuous state (held directions, jump held) is polled,
while the two edge events the controller reacts to immediately are queued
and handed to the game loop through ``drain_events``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from diver.controller import DiveDirection
from diver.logger import get_logger
from diver.settings import settings

log = get_logger("input")


class InputEventKind(Enum):
    JUMP_RELEASED = "jump_released"
    DIVE = "dive"


@dataclass(frozen=True)
class InputEvent:
    kind: InputEventKind
    direction: DiveDirection | None = None


class BufferedInput:
    def __init__(self, jump_buffer_time: float | None = None):
        self.jump_buffer_time = settings.jump_buffer_time if jump_buffer_time is None else jump_buffer_time
        self.left = False
        self.right = False
        self.up = False
        self.jump_held = False
        self.axis: float | None = None  # analog override for the digital left/right pair
        self._jump_buffer_left = 0.0
        self._events: List[InputEvent] = []

    # ---- InputSource ----
    def horizontal_input(self) -> float:
        if self.axis is not None:
            return self.axis
        return float(int(self.right) - int(self.left))

    def jump_buffered(self) -> bool:
        return self._jump_buffer_left > 0

    def consume_jump_buffer(self) -> None:
        self._jump_buffer_left = 0.0

    def is_jump_held(self) -> bool:
        return self.jump_held

    # ---- Feeding ----
    def set_axis(self, value: float | None) -> None:
        self.axis = None if value is None else max(-1.0, min(1.0, float(value)))

    def press_jump(self) -> None:
        self.jump_held = True
        self._jump_buffer_left = self.jump_buffer_time

    def release_jump(self) -> None:
        if not self.jump_held:
            return
        self.jump_held = False
        self._events.append(InputEvent(InputEventKind.JUMP_RELEASED))

    def request_dive(self) -> None:
        self._events.append(InputEvent(InputEventKind.DIVE, self.dive_direction()))

    def dive_direction(self) -> DiveDirection:
        if self.up:
            return DiveDirection.UP
        horizontal = self.horizontal_input()
        if horizontal < 0:
            return DiveDirection.LEFT
        if horizontal > 0:
            return DiveDirection.RIGHT
        return DiveDirection.UP

    def apply_action(self, action: str) -> None:
        if action == "left":
            self.left = True
        elif action == "stop_left":
            self.left = False
        elif action == "right":
            self.right = True
        elif action == "stop_right":
            self.right = False
        elif action == "up":
            self.up = True
        elif action == "stop_up":
            self.up = False
        elif action == "jump":
            self.press_jump()
        elif action == "stop_jump":
            self.release_jump()
        elif action == "dive":
            self.request_dive()
        else:
            log.debug("Ignoring unknown action", action)

    def drain_events(self) -> List[InputEvent]:
        events, self._events = self._events, []
        return events

    def tick(self, delta: float) -> None:
        """Age the jump buffer; call once per physics step after the controller ran."""
        if self._jump_buffer_left > 0:
            self._jump_buffer_left = max(0.0, self._jump_buffer_left - delta)


__all__ = ["BufferedInput", "InputEvent", "InputEventKind"]
