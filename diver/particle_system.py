"""Particle bursts for movement effects.

``ParticleSystem`` owns live particles and ages them each physics step.
``ParticleEffects`` is the concrete ``EffectsSink`` the controller talks to:
``restart(EffectId.JUMP)`` emits the configured jump burst at the
character's feet, and so on. Bursts use a seeded ``random.Random`` so a
replayed run emits identical particles.

Minimal public API: ``spawn_burst(...)`` / ``update(delta)`` /
``get_draw_commands()`` on the system, ``restart(effect_id)`` on the sink.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from pygame.math import Vector2

from diver.constants import DIVE_BURST, JUMP_BURST, LAND_BURST
from diver.logger import get_logger
from diver.services import EffectId

log = get_logger("particles")


@dataclass
class Particle:
    kind: str
    pos: Vector2
    velocity: Vector2
    ttl: float

    def update(self, delta: float) -> bool:
        """Advance; return True once expired."""
        self.pos += self.velocity * delta
        self.ttl -= delta
        return self.ttl <= 0


@dataclass
class BurstConfig:
    count: int
    min_speed: float
    max_speed: float
    ttl: float
    # Emission arc in radians (screen space, +y down); default is a fan pointing up
    arc: Tuple[float, float] = (math.pi, 2 * math.pi)


DEFAULT_BURSTS: Dict[EffectId, BurstConfig] = {
    EffectId.JUMP: BurstConfig(*JUMP_BURST),
    EffectId.LAND: BurstConfig(*LAND_BURST),
    EffectId.DIVE: BurstConfig(*DIVE_BURST, arc=(0.0, 2 * math.pi)),
}


class ParticleSystem:
    def __init__(self, seed: int | None = None):
        self.particles: List[Particle] = []
        self._rng = random.Random(seed)

    def spawn_burst(self, kind: str, pos, config: BurstConfig) -> List[Particle]:
        spawned = []
        lo, hi = config.arc
        for _ in range(config.count):
            angle = self._rng.uniform(lo, hi)
            speed = self._rng.uniform(config.min_speed, config.max_speed)
            p = Particle(kind, Vector2(pos), Vector2(math.cos(angle), math.sin(angle)) * speed, config.ttl)
            self.particles.append(p)
            spawned.append(p)
        return spawned

    def update(self, delta: float):
        for p in self.particles.copy():
            if p.update(delta):
                self.particles.remove(p)

    def get_draw_commands(self):
        return [(p.kind, p.pos.x, p.pos.y) for p in self.particles]

    def clear(self):
        self.particles.clear()


class ParticleEffects:
    """EffectsSink emitting bursts at ``anchor()``."""

    def __init__(self, system: ParticleSystem, anchor: Callable[[], Tuple[float, float]], bursts=None):
        self.system = system
        self.anchor = anchor
        self.bursts = dict(DEFAULT_BURSTS if bursts is None else bursts)
        self.restart_counts: Dict[EffectId, int] = {effect: 0 for effect in EffectId}

    def restart(self, effect_id: EffectId) -> None:
        self.restart_counts[effect_id] = self.restart_counts.get(effect_id, 0) + 1
        config = self.bursts.get(effect_id)
        if config is None:
            log.warn("No burst configured for", effect_id)
            return
        self.system.spawn_burst(effect_id.value, self.anchor(), config)


__all__ = ["Particle", "BurstConfig", "ParticleSystem", "ParticleEffects", "DEFAULT_BURSTS"]
