import os
import sys
from pathlib import Path

# Ensure repository root is on sys.path for module imports
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless / test mode environment variables
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("DIVER_TESTING", "1")

import pytest  # noqa: E402
from pygame.math import Vector2  # noqa: E402

from diver.controller import MovementController  # noqa: E402
from diver.services import ControllerServices  # noqa: E402
from diver.tuning import MovementTuning  # noqa: E402


class FakeInput:
    """Scripted InputSource: tests set the fields directly."""

    def __init__(self):
        self.horizontal = 0.0
        self.buffered = False
        self.held = True
        self.consumed = 0

    def horizontal_input(self):
        return self.horizontal

    def jump_buffered(self):
        return self.buffered

    def consume_jump_buffer(self):
        self.buffered = False
        self.consumed += 1

    def is_jump_held(self):
        return self.held


class FakePhysics:
    """PhysicsWorld that reports a scripted floor contact and does not collide."""

    def __init__(self, floor=False):
        self.floor = floor
        self.calls = []

    def is_on_floor(self):
        return self.floor

    def resolve_motion(self, velocity, up, max_slides=4):
        self.calls.append((Vector2(velocity), max_slides))
        return Vector2(velocity)


class RecordingAnimator:
    def __init__(self):
        self.params = {}
        self.writes = []

    def set_param(self, path, value):
        self.params[path] = value
        self.writes.append((path, value))


class RecordingEffects:
    def __init__(self):
        self.restarts = []

    def restart(self, effect_id):
        self.restarts.append(effect_id)


class Harness:
    def __init__(self, tuning=None):
        self.input = FakeInput()
        self.physics = FakePhysics()
        self.animator = RecordingAnimator()
        self.effects = RecordingEffects()
        services = ControllerServices(self.input, self.physics, self.animator, self.effects)
        self.controller = MovementController(tuning or MovementTuning(), services)
        self.controller.on_enter()

    def step(self, delta=0.01, floor=None):
        if floor is not None:
            self.physics.floor = floor
        return self.controller.update(delta)

    def settle_on_ground(self):
        """Run one step with floor contact so the controller lands."""
        self.step(floor=True)
        self.effects.restarts.clear()
        return self

    def leave_ground(self):
        """Run one airborne step from the ground; the leniency timer starts at its end."""
        self.step(floor=False)
        return self


@pytest.fixture
def harness():
    return Harness()


@pytest.fixture
def make_harness():
    return Harness
