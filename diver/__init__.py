"""Platformer movement controller with pluggable physics, input, animation and effects."""

from diver.controller import DiveDirection, GroundedAnimationState, MovementController, StepResult
from diver.services import ControllerServices, EffectId
from diver.tuning import MovementTuning, TuningError, load_tuning, save_tuning

__all__ = [
    "MovementController",
    "DiveDirection",
    "GroundedAnimationState",
    "StepResult",
    "ControllerServices",
    "EffectId",
    "MovementTuning",
    "TuningError",
    "load_tuning",
    "save_tuning",
]
