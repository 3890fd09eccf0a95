from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

from pygame.math import Vector2


@dataclass
class ControllerSnapshot:
    velocity: Tuple[float, float]
    is_grounded: bool
    is_jumping: bool
    can_dive: bool
    facing_left: bool
    lenience_running: bool
    lenience_elapsed: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["velocity"] = list(self.velocity)
        return data

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ControllerSnapshot":
        vx, vy = payload.get("velocity", (0.0, 0.0))
        return cls(
            velocity=(float(vx), float(vy)),
            is_grounded=bool(payload.get("is_grounded", False)),
            is_jumping=bool(payload.get("is_jumping", False)),
            can_dive=bool(payload.get("can_dive", False)),
            facing_left=bool(payload.get("facing_left", False)),
            lenience_running=bool(payload.get("lenience_running", False)),
            lenience_elapsed=float(payload.get("lenience_elapsed", 0.0)),
        )


class SnapshotService:
    @staticmethod
    def capture(controller) -> ControllerSnapshot:
        timer = controller.ground_remember_timer
        return ControllerSnapshot(
            velocity=(controller.velocity.x, controller.velocity.y),
            is_grounded=controller.is_grounded,
            is_jumping=controller.is_jumping,
            can_dive=controller.can_dive,
            facing_left=controller.facing_left,
            lenience_running=timer.running,
            lenience_elapsed=timer.elapsed,
        )

    @staticmethod
    def restore(controller, snapshot: ControllerSnapshot) -> None:
        controller.velocity = Vector2(snapshot.velocity)
        controller.is_grounded = snapshot.is_grounded
        controller.is_jumping = snapshot.is_jumping
        # Through the property so the dive-ready cue follows the restored state
        controller.can_dive = snapshot.can_dive
        controller.facing_left = snapshot.facing_left
        timer = controller.ground_remember_timer
        timer.running = snapshot.lenience_running
        timer.elapsed = snapshot.lenience_elapsed
