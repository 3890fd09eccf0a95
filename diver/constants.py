"""Movement tuning defaults and shared keys.

Velocities are pixels per second with +y pointing down (screen space), so a
negative vertical velocity moves the character up.
"""

# Leniency window after leaving the ground during which a buffered jump still counts
JUMP_LENIENCE_TIME = 0.1
# Default lifetime of a buffered jump press
JUMP_BUFFER_TIME = 0.1
# Damping exponent is delta * this, so damping values are tuned at a 10 Hz reference rate
DAMPING_RATE_SCALE = 10.0
# Downward bias applied every grounded step so sweep-and-slide keeps reporting floor contact
FLOOR_STICK_VELOCITY = 1.0

# Default tunables (one character profile)
JUMP_VELOCITY = -400.0
GRAVITY = 1400.0
JUMPING_GRAVITY = 800.0
MAX_FALLING_SPEED = 600.0
JUMP_CANCEL_STRENGTH = 0.5
GROUNDED_ACCELERATION = 2600.0
AIR_ACCELERATION = 1800.0
GROUND_DAMPING = 0.45
GROUNDED_STOP_DAMPING = 0.8
AIR_DAMPING = 0.25
DIVE_UP_VELOCITY = (220.0, -420.0)
DIVE_HORIZONTAL_VELOCITY = (480.0, -140.0)

# Physics world
FIXED_STEP = 1.0 / 60.0
DEFAULT_MAX_SLIDES = 4
UP_DIRECTION = (0.0, -1.0)
FLOOR_NORMAL_DOT = 0.7  # normal.dot(up) above this counts as floor (about 45 degrees)
TILE_SIZE = 16

# Animation blend-tree parameter paths
GROUNDED_PARAM = "Grounded/current"
FALL_SPEED_PARAM = "FallSpeed/blend_position"
GROUNDED_STATE_PARAM = "GroundedState/current"
RUN_SPEED_PARAM = "RunSpeed/scale"
LAND_ACTIVE_PARAM = "Land/active"
DIVE_READY_PARAM = "DiveReady/active"

# Particle bursts: (count, min speed, max speed, ttl seconds)
JUMP_BURST = (8, 20.0, 60.0, 0.35)
LAND_BURST = (12, 30.0, 90.0, 0.4)
DIVE_BURST = (16, 40.0, 120.0, 0.5)

# Debug watcher history length (frames)
WATCH_HISTORY_FRAMES = 240

__all__ = [name for name in globals().keys() if name.isupper()]
