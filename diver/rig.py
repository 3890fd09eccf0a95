"""Game-loop layer for one character.

``CharacterRig`` owns a ``MovementController`` and the concrete
collaborators it talks to, and performs what a host engine's loop would:
apply this frame's input actions, hand the queued edge events to the
controller as direct calls, run the physics step, then age the jump buffer
and particles.

Scripts are lists of ``(frames, actions)`` segments: the actions are applied
on the first frame of the segment, then the segment runs ``frames`` steps.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from diver.animation import BlendTreeParams
from diver.constants import FIXED_STEP
from diver.controller import MovementController, StepResult
from diver.debug import FrameWatcher
from diver.input_source import BufferedInput, InputEventKind
from diver.logger import get_logger
from diver.particle_system import ParticleEffects, ParticleSystem
from diver.physics import TileWorld
from diver.services import ControllerServices
from diver.settings import settings
from diver.snapshot import ControllerSnapshot, SnapshotService
from diver.tuning import MovementTuning, load_tuning

log = get_logger("rig")

Script = Sequence[Tuple[int, Iterable[str]]]

DEMO_LEVEL = [
    "#                    #",
    "#                    #",
    "#                    #",
    "#            ####    #",
    "#                    #",
    "#  @                 #",
    "######################",
]


class CharacterRig:
    def __init__(self, world: TileWorld, tuning: MovementTuning | None = None, seed: int | None = 0):
        self.world = world
        self.input = BufferedInput()
        self.animator = BlendTreeParams()
        self.particles = ParticleSystem(seed=seed)
        self.effects = ParticleEffects(self.particles, anchor=self.feet)
        self.watcher = FrameWatcher()
        services = ControllerServices(
            input=self.input,
            physics=world,
            animator=self.animator,
            effects=self.effects,
            watcher=self.watcher,
        )
        if tuning is None:
            tuning = load_tuning(settings.tuning_profile)
        self.controller = MovementController(tuning, services)
        self.controller.on_enter()
        self.tick = 0

    def feet(self) -> Tuple[float, float]:
        body = self.world.body
        return body.x + body.w / 2, body.bottom

    def dispatch_events(self) -> None:
        for event in self.input.drain_events():
            if event.kind is InputEventKind.JUMP_RELEASED:
                self.controller.on_jump_released()
            elif event.kind is InputEventKind.DIVE:
                self.controller.on_dive_requested(event.direction)

    def step(self, actions: Iterable[str] = (), delta: float = FIXED_STEP) -> StepResult:
        for action in actions:
            self.input.apply_action(action)
        self.dispatch_events()
        result = self.controller.update(delta)
        self.input.tick(delta)
        self.particles.update(delta)
        self.watcher.end_frame()
        self.tick += 1
        if result.landed and log.enabled("DEBUG"):
            log.debug(f"tick {self.tick}: landed")
        return result

    def run_script(self, script: Script, delta: float = FIXED_STEP) -> List[StepResult]:
        results = []
        for frames, actions in script:
            pending = list(actions)
            for _ in range(frames):
                results.append(self.step(pending, delta))
                pending = []
        return results

    def snapshot(self) -> ControllerSnapshot:
        return SnapshotService.capture(self.controller)

    def shutdown(self) -> None:
        self.controller.on_exit()


if __name__ == "__main__":
    # Headless demo: settle, run right, hop, dive left in the air
    rig = CharacterRig(TileWorld.from_rows(DEMO_LEVEL))
    demo: Script = [
        (30, []),
        (20, ["right"]),
        (12, ["jump"]),
        (6, ["stop_jump"]),
        (40, ["stop_right", "left", "dive"]),
        (30, ["stop_left"]),
    ]
    steps = rig.run_script(demo)
    landings = sum(1 for r in steps if r.landed)
    body = rig.world.body
    print(f"Ran {len(steps)} steps, landings={landings}, final pos=({body.x:.1f}, {body.y:.1f})")
    print(f"Final state: {rig.snapshot()}")
    rig.shutdown()
