"""Platformer movement controller.

One ``MovementController`` drives one character. The owning game loop calls
``update`` once per fixed physics step and forwards the two edge-triggered
inputs (``on_jump_released`` / ``on_dive_requested``) as direct calls before
the next step.

Step order (see ``update``):
  1. horizontal integration (acceleration + frame-rate independent damping)
  2. vertical integration (buffered jump, floor bias or gravity)
  3. animation parameter writes
  4. sweep-and-slide through the physics world
  5. ground transition detection (land / leave ground)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from pygame.math import Vector2

from diver.constants import (
    DAMPING_RATE_SCALE,
    DIVE_READY_PARAM,
    FALL_SPEED_PARAM,
    FLOOR_STICK_VELOCITY,
    GROUNDED_PARAM,
    GROUNDED_STATE_PARAM,
    LAND_ACTIVE_PARAM,
    RUN_SPEED_PARAM,
    UP_DIRECTION,
)
from diver.logger import Logger, get_logger
from diver.services import ControllerServices, EffectId
from diver.timer import OneShotTimer
from diver.tuning import MovementTuning

UP = Vector2(UP_DIRECTION)


class DiveDirection(Enum):
    UP = "up"
    LEFT = "left"
    RIGHT = "right"


class GroundedAnimationState(IntEnum):
    IDLE = 0
    RUN = 1


@dataclass
class StepResult:
    velocity: Vector2
    grounded: bool
    jumping: bool
    landed: bool = False
    left_ground: bool = False


class MovementController:
    def __init__(self, tuning: MovementTuning, services: ControllerServices, log: Logger | None = None):
        self.tuning = tuning
        self.services = services
        self.log = log or get_logger("movement")

        self.velocity = Vector2(0, 0)
        self.is_grounded = False
        self.is_jumping = False
        self._can_dive = False
        self.facing_left = False
        self.ground_remember_timer = OneShotTimer(tuning.jump_lenience_time)
        self.active = False

    # --- Lifecycle ---
    def on_enter(self):
        """Start accepting edge events from the owning loop."""
        self.active = True
        self.log.debug("controller entered")

    def on_exit(self):
        self.active = False
        self.log.debug("controller exited")

    # --- Derived state ---
    @property
    def can_dive(self) -> bool:
        return self._can_dive

    @can_dive.setter
    def can_dive(self, value: bool):
        value = bool(value)
        if value == self._can_dive:
            return
        self._can_dive = value
        self.services.set_param(DIVE_READY_PARAM, value)

    @property
    def orientation(self):
        """Host transform for the current facing: ``(scale, rotation_degrees)``."""
        if self.facing_left:
            return (1, -1), 180
        return (1, 1), 0

    # --- Physics step ---
    def update(self, delta: float) -> StepResult:
        """Advance one fixed physics step of ``delta`` seconds."""
        horizontal_input = self.services.input.horizontal_input()
        self.ground_remember_timer.tick(delta)

        self._handle_horizontal_movement(delta, horizontal_input)
        self._handle_vertical_movement(delta)
        self._animate(horizontal_input)
        self._apply_velocity()

        landed = left_ground = False
        on_floor = self.services.physics.is_on_floor()
        if on_floor != self.is_grounded:
            self.is_grounded = on_floor
            if on_floor:
                self._land()
                landed = True
            else:
                self._leave_ground()
                left_ground = True

        self.services.watch("velocity", Vector2(self.velocity))
        self.services.watch("is_grounded", self.is_grounded)
        return StepResult(Vector2(self.velocity), self.is_grounded, self.is_jumping, landed, left_ground)

    def _handle_horizontal_movement(self, delta: float, horizontal_input: float):
        if horizontal_input != 0:
            self.facing_left = horizontal_input < 0

        t = self.tuning
        if self.is_grounded:
            damping = t.grounded_stop_damping if horizontal_input == 0 else t.ground_damping
            self.velocity.x += horizontal_input * t.grounded_acceleration * delta
            self.velocity.x *= (1.0 - damping) ** (delta * DAMPING_RATE_SCALE)
            return

        self.velocity.x += horizontal_input * t.air_acceleration * delta
        self.velocity.x *= (1.0 - t.air_damping) ** (delta * DAMPING_RATE_SCALE)

    def _handle_vertical_movement(self, delta: float):
        if self.services.input.jump_buffered() and (self.is_grounded or self.ground_remember_timer.time_left > 0):
            self.jump()
            return

        if self.is_grounded:
            self.velocity.y = FLOOR_STICK_VELOCITY
            self.is_jumping = False
            return

        if self.velocity.y > 0:
            # Past the apex: the lighter jumping gravity no longer applies.
            self.is_jumping = False

        gravity = self.tuning.jumping_gravity if self.is_jumping else self.tuning.gravity
        self.velocity.y += gravity * delta
        if self.velocity.y > self.tuning.max_falling_speed:
            self.velocity.y = self.tuning.max_falling_speed

    def _animate(self, horizontal_input: float):
        if not self.is_grounded:
            self.services.set_param(GROUNDED_PARAM, 0)
            self.services.set_param(FALL_SPEED_PARAM, self.velocity.y)
            return

        self.services.set_param(GROUNDED_PARAM, 1)
        if horizontal_input != 0:
            self.services.set_param(GROUNDED_STATE_PARAM, int(GroundedAnimationState.RUN))
            self.services.set_param(RUN_SPEED_PARAM, abs(horizontal_input))
            return

        self.services.set_param(GROUNDED_STATE_PARAM, int(GroundedAnimationState.IDLE))

    def _apply_velocity(self):
        self.services.watch("is_jumping", self.is_jumping)
        physics = self.services.physics
        if self.is_jumping:
            # A single slide keeps a rising jump from snapping along a ceiling.
            self.velocity = Vector2(physics.resolve_motion(self.velocity, UP, max_slides=1))
            return
        self.velocity = Vector2(physics.resolve_motion(self.velocity, UP))

    def _leave_ground(self):
        self.ground_remember_timer.start(self.tuning.jump_lenience_time)
        self.services.set_param(LAND_ACTIVE_PARAM, False)
        self.can_dive = True
        self.log.debug("left ground")

    def _land(self):
        self.can_dive = False
        self.services.restart(EffectId.LAND)
        self.services.set_param(LAND_ACTIVE_PARAM, True)
        self.log.debug("landed at", tuple(self.velocity))

    # --- Actions ---
    def jump(self):
        self.is_jumping = True
        self.velocity.y = self.tuning.jump_velocity

        self.services.input.consume_jump_buffer()

        if not self.services.input.is_jump_held():
            self.cancel_jump()

        self.services.restart(EffectId.JUMP)
        self.log.debug("jump", self.velocity.y)

    def cancel_jump(self):
        if not self.is_jumping:
            return

        self.is_jumping = False
        self.velocity.y *= 1.0 - self.tuning.jump_cancel_strength

    def dive(self, direction: DiveDirection) -> bool:
        if not self.can_dive:
            return False
        self.can_dive = False
        self.is_jumping = False

        if direction is DiveDirection.UP:
            horizontal_input = self.services.input.horizontal_input()
            up = self.tuning.dive_up_velocity
            self.velocity = Vector2(up.x * horizontal_input, up.y)
        elif direction is DiveDirection.LEFT:
            self.facing_left = True
            side = self.tuning.dive_horizontal_velocity
            self.velocity = Vector2(-side.x, side.y)
        else:
            self.facing_left = False
            self.velocity = Vector2(self.tuning.dive_horizontal_velocity)

        self.services.restart(EffectId.DIVE)
        self.log.debug("dive", direction.value, tuple(self.velocity))
        return True

    def refill_dive(self) -> bool:
        """Grant a dive while airborne (pickups, bounce pads)."""
        if self.is_grounded:
            return False
        self.can_dive = True
        return True

    # --- Edge events from the game loop ---
    def on_jump_released(self):
        if self.active:
            self.cancel_jump()

    def on_dive_requested(self, direction: DiveDirection) -> bool:
        if not self.active:
            return False
        return self.dive(direction)


__all__ = ["MovementController", "DiveDirection", "GroundedAnimationState", "StepResult", "UP"]
