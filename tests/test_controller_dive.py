from pygame.math import Vector2

from diver.constants import DIVE_READY_PARAM, LAND_ACTIVE_PARAM
from diver.controller import DiveDirection
from diver.services import EffectId
from diver.tuning import MovementTuning

DIVE_TUNING = dict(dive_up_velocity=(200.0, -420.0), dive_horizontal_velocity=(480.0, -140.0))


def airborne(make_harness, **overrides):
    h = make_harness(MovementTuning(**{**DIVE_TUNING, **overrides})).settle_on_ground()
    h.leave_ground()
    return h


def test_leaving_ground_grants_dive(make_harness):
    h = airborne(make_harness)
    assert h.controller.can_dive is True
    assert h.animator.params[DIVE_READY_PARAM] is True
    assert h.animator.params[LAND_ACTIVE_PARAM] is False


def test_dive_left(make_harness):
    h = airborne(make_harness)
    c = h.controller
    assert c.dive(DiveDirection.LEFT) is True
    assert c.facing_left is True
    assert c.velocity == Vector2(-480.0, -140.0)
    assert c.can_dive is False
    assert h.effects.restarts == [EffectId.DIVE]


def test_dive_right_faces_right(make_harness):
    h = airborne(make_harness)
    c = h.controller
    c.facing_left = True
    c.dive(DiveDirection.RIGHT)
    assert c.facing_left is False
    assert c.velocity == Vector2(480.0, -140.0)


def test_dive_up_scales_horizontal_by_input(make_harness):
    h = airborne(make_harness)
    h.input.horizontal = 0.5
    h.controller.dive(DiveDirection.UP)
    assert h.controller.velocity == Vector2(100.0, -420.0)


def test_dive_clears_jump(make_harness):
    h = make_harness(MovementTuning(**DIVE_TUNING)).settle_on_ground()
    h.input.buffered = True
    h.step(floor=False)
    c = h.controller
    assert c.is_jumping and c.can_dive
    c.dive(DiveDirection.UP)
    assert c.is_jumping is False


def test_only_one_dive_per_air_time(make_harness):
    h = airborne(make_harness)
    c = h.controller
    assert c.dive(DiveDirection.LEFT) is True
    velocity = Vector2(c.velocity)
    assert c.dive(DiveDirection.RIGHT) is False
    assert c.velocity == velocity
    assert c.facing_left is True


def test_cannot_dive_on_ground(harness):
    harness.settle_on_ground()
    c = harness.controller
    before = Vector2(c.velocity)
    assert c.can_dive is False
    assert c.dive(DiveDirection.RIGHT) is False
    assert c.velocity == before
    assert harness.effects.restarts == []


def test_landing_resets_dive(make_harness):
    h = airborne(make_harness)
    result = h.step(floor=True)
    c = h.controller
    assert result.landed is True
    assert c.can_dive is False
    assert h.animator.params[DIVE_READY_PARAM] is False
    assert h.animator.params[LAND_ACTIVE_PARAM] is True
    assert EffectId.LAND in h.effects.restarts


def test_refill_dive_only_in_air(make_harness):
    h = airborne(make_harness)
    c = h.controller
    c.dive(DiveDirection.LEFT)
    assert c.refill_dive() is True
    assert c.dive(DiveDirection.RIGHT) is True
    h.step(floor=True)
    assert c.refill_dive() is False
    assert c.can_dive is False


def test_dive_request_ignored_after_exit(make_harness):
    h = airborne(make_harness)
    c = h.controller
    c.on_exit()
    assert c.on_dive_requested(DiveDirection.LEFT) is False
    assert c.can_dive is True
    c.on_enter()
    assert c.on_dive_requested(DiveDirection.LEFT) is True
