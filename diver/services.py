"""Collaborator interfaces for the movement controller.

The controller depends on narrow protocol-style ports instead of a host
engine node. Anything with the right methods plugs in: the concrete
implementations in this package (``BufferedInput``, ``TileWorld``,
``BlendTreeParams``, ``ParticleEffects``, ``FrameWatcher``) or test fakes.

- InputSource   -> horizontal axis, jump buffer and jump-held polling
- PhysicsWorld  -> floor query and sweep-and-slide motion resolution
- Animator      -> opaque blend-tree parameter writes
- EffectsSink   -> fire-and-forget particle restarts
- WatchPort     -> optional per-frame value recording for debugging
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from pygame.math import Vector2


class EffectId(Enum):
    JUMP = "jump"
    LAND = "land"
    DIVE = "dive"


# ---- Protocols ----
class InputSource(Protocol):
    def horizontal_input(self) -> float: ...
    def jump_buffered(self) -> bool: ...
    def consume_jump_buffer(self) -> None: ...
    def is_jump_held(self) -> bool: ...


class PhysicsWorld(Protocol):
    def is_on_floor(self) -> bool: ...
    def resolve_motion(self, velocity: Vector2, up: Vector2, max_slides: int = 4) -> Vector2: ...


class Animator(Protocol):
    def set_param(self, path: str, value: Any) -> None: ...


class EffectsSink(Protocol):
    def restart(self, effect_id: EffectId) -> None: ...


class WatchPort(Protocol):
    def record(self, name: str, value: Any) -> None: ...


@dataclass
class ControllerServices:
    input: InputSource
    physics: PhysicsWorld
    animator: Animator
    effects: EffectsSink
    watcher: WatchPort | None = None

    # Thin proxies for readability inside the controller
    def set_param(self, path: str, value: Any) -> None:
        self.animator.set_param(path, value)

    def restart(self, effect_id: EffectId) -> None:
        self.effects.restart(effect_id)

    def watch(self, name: str, value: Any) -> None:
        if self.watcher is not None:
            self.watcher.record(name, value)


__all__ = [
    "EffectId",
    "InputSource",
    "PhysicsWorld",
    "Animator",
    "EffectsSink",
    "WatchPort",
    "ControllerServices",
]
