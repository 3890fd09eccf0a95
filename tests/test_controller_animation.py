from diver.constants import (
    FALL_SPEED_PARAM,
    GROUNDED_PARAM,
    GROUNDED_STATE_PARAM,
    LAND_ACTIVE_PARAM,
    RUN_SPEED_PARAM,
)
from diver.controller import GroundedAnimationState
from diver.services import EffectId


def test_idle_when_grounded_without_input(harness):
    harness.settle_on_ground()
    c = harness.controller
    c.velocity.x = 0.0
    c.velocity.y = 1.0
    result = harness.step(floor=True)
    assert result.velocity.x == 0.0
    assert c.is_jumping is False
    assert harness.animator.params[GROUNDED_PARAM] == 1
    assert harness.animator.params[GROUNDED_STATE_PARAM] == GroundedAnimationState.IDLE


def test_run_state_scales_with_input(harness):
    harness.settle_on_ground()
    harness.input.horizontal = -0.5
    harness.step(floor=True)
    assert harness.animator.params[GROUNDED_STATE_PARAM] == GroundedAnimationState.RUN
    assert harness.animator.params[RUN_SPEED_PARAM] == 0.5


def test_airborne_writes_fall_speed(harness):
    result = harness.step(delta=0.05)
    assert harness.animator.params[GROUNDED_PARAM] == 0
    assert harness.animator.params[FALL_SPEED_PARAM] == result.velocity.y
    assert GROUNDED_STATE_PARAM not in harness.animator.params


def test_landing_flag_toggles_with_ground_transitions(harness):
    first = harness.step(floor=True)
    assert first.landed is True
    assert harness.effects.restarts == [EffectId.LAND]
    assert harness.animator.params[LAND_ACTIVE_PARAM] is True
    second = harness.step(floor=False)
    assert second.left_ground is True
    assert harness.animator.params[LAND_ACTIVE_PARAM] is False
    # No transition, no repeated writes or effects
    harness.animator.writes.clear()
    harness.step(floor=False)
    assert LAND_ACTIVE_PARAM not in [path for path, _ in harness.animator.writes]
    assert harness.effects.restarts == [EffectId.LAND]
