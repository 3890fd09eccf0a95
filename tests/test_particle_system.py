from diver.particle_system import BurstConfig, ParticleEffects, ParticleSystem
from diver.services import EffectId


def test_burst_spawn_and_expiry():
    ps = ParticleSystem(seed=1)
    ps.spawn_burst("jump", (10, 20), BurstConfig(count=5, min_speed=10, max_speed=20, ttl=0.1))
    assert len(ps.particles) == 5
    ps.update(0.05)
    assert len(ps.particles) == 5
    assert all(p.pos != (10, 20) for p in ps.particles)
    ps.update(0.06)
    assert ps.particles == []


def test_effects_restart_emits_configured_burst_at_anchor():
    ps = ParticleSystem(seed=3)
    effects = ParticleEffects(ps, anchor=lambda: (5.0, 7.0))
    effects.restart(EffectId.LAND)
    land = effects.bursts[EffectId.LAND]
    assert len(ps.particles) == land.count
    assert all(p.kind == "land" for p in ps.particles)
    assert all(p.pos == (5.0, 7.0) for p in ps.particles)
    assert effects.restart_counts[EffectId.LAND] == 1


def test_seeded_bursts_repeat():
    a, b = ParticleSystem(seed=42), ParticleSystem(seed=42)
    config = BurstConfig(count=4, min_speed=1, max_speed=50, ttl=1.0)
    a.spawn_burst("dive", (0, 0), config)
    b.spawn_burst("dive", (0, 0), config)
    assert [p.velocity for p in a.particles] == [p.velocity for p in b.particles]


def test_missing_burst_config_only_counts():
    ps = ParticleSystem(seed=0)
    effects = ParticleEffects(ps, anchor=lambda: (0, 0), bursts={})
    effects.restart(EffectId.JUMP)
    assert ps.particles == []
    assert effects.restart_counts[EffectId.JUMP] == 1
