"""Character movement tuning.

A ``MovementTuning`` is one character's static configuration, set at
authoring time and handed to the controller at construction. Profiles can be
stored as JSON; values are validated once, when the profile is built, so the
per-step code never has to.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict

from pygame.math import Vector2

from diver import constants as C
from diver.logger import get_logger

log = get_logger("tuning")

# Tunables that are interpreted as fractions of velocity removed / kept
_FRACTION_FIELDS = ("jump_cancel_strength", "ground_damping", "grounded_stop_damping", "air_damping")
_VECTOR_FIELDS = ("dive_up_velocity", "dive_horizontal_velocity")


class TuningError(ValueError):
    """Raised when a tuning profile cannot describe a playable character."""


@dataclass
class MovementTuning:
    jump_velocity: float = C.JUMP_VELOCITY
    gravity: float = C.GRAVITY
    jumping_gravity: float = C.JUMPING_GRAVITY
    max_falling_speed: float = C.MAX_FALLING_SPEED
    jump_cancel_strength: float = C.JUMP_CANCEL_STRENGTH
    grounded_acceleration: float = C.GROUNDED_ACCELERATION
    air_acceleration: float = C.AIR_ACCELERATION
    ground_damping: float = C.GROUND_DAMPING
    grounded_stop_damping: float = C.GROUNDED_STOP_DAMPING
    air_damping: float = C.AIR_DAMPING
    dive_up_velocity: Vector2 = field(default_factory=lambda: Vector2(C.DIVE_UP_VELOCITY))
    dive_horizontal_velocity: Vector2 = field(default_factory=lambda: Vector2(C.DIVE_HORIZONTAL_VELOCITY))
    jump_lenience_time: float = C.JUMP_LENIENCE_TIME

    def __post_init__(self):
        for name in _VECTOR_FIELDS:
            setattr(self, name, Vector2(getattr(self, name)))
        if self.max_falling_speed < 0:
            raise TuningError(f"max_falling_speed must be >= 0, got {self.max_falling_speed}")
        if self.jump_lenience_time <= 0:
            raise TuningError(f"jump_lenience_time must be > 0, got {self.jump_lenience_time}")
        for name in _FRACTION_FIELDS:
            value = float(getattr(self, name))
            clamped = max(0.0, min(1.0, value))
            if clamped != value:
                log.warn(f"{name}={value} outside [0, 1]; clamped to {clamped}")
            setattr(self, name, clamped)

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        for name in _VECTOR_FIELDS:
            vec = getattr(self, name)
            data[name] = [vec.x, vec.y]
        return data

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "MovementTuning":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            log.warn("Ignoring unknown tuning keys", unknown)
        return cls(**{k: v for k, v in payload.items() if k in known})


def load_tuning(path: str) -> MovementTuning:
    """Load a tuning profile, falling back to defaults when the file is unusable.

    Invalid values (see ``TuningError``) are not swallowed: a profile that
    parses but describes an impossible character is an authoring error.
    """
    if not os.path.exists(path):
        log.info("No tuning profile at", path, "- using defaults")
        return MovementTuning()
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        log.warn("Error reading tuning profile; using defaults", e)
        return MovementTuning()
    if not isinstance(data, dict):
        log.warn("Tuning profile is not a JSON object; using defaults")
        return MovementTuning()
    return MovementTuning.from_dict(data)


def save_tuning(tuning: MovementTuning, path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w") as f:
        json.dump(tuning.to_dict(), f, indent=4)
    log.debug("Tuning profile written", path)


__all__ = ["MovementTuning", "TuningError", "load_tuning", "save_tuning"]
