"""Tile world with swept-AABB sweep-and-slide.

``TileWorld`` is the concrete ``PhysicsWorld``: one moving body (a float
``Box``) against a grid of solid tiles. ``resolve_motion`` mirrors the usual
kinematic-body contract:

  * the body moves by ``velocity * step``
  * at each contact the body stops at the time of impact, the contact normal
    is classified against ``up`` (floor / ceiling / wall) and the normal
    component is removed from both the remaining motion and the velocity
  * at most ``max_slides`` contacts are processed; with ``max_slides=1`` the
    body stops at the first contact and the remaining motion is dropped
  * a contact the body already rests against (time of impact zero) only clips
    the motion and does not use up a slide, so pressing into a wall or
    standing on the floor never eats the single slide of a jump
  * at equal times a face contact wins over a tile touched only at a corner;
    a lone corner touch counts as vertical

Contacts are only searched among tiles overlapping the swept bounds, the
same narrow query idea as ``physics_rects_around``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, NamedTuple, Tuple

import pygame
from pygame.math import Vector2

from diver.constants import DEFAULT_MAX_SLIDES, FIXED_STEP, FLOOR_NORMAL_DOT, TILE_SIZE
from diver.logger import get_logger

log = get_logger("physics")

# Distance under which two edges count as touching rather than overlapping
EPSILON = 1e-6


@dataclass
class Box:
    x: float
    y: float
    w: float
    h: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def move(self, motion: Vector2) -> None:
        self.x += motion.x
        self.y += motion.y

    def swept_rect(self, motion: Vector2) -> pygame.Rect:
        left = math.floor(min(self.left, self.left + motion.x))
        top = math.floor(min(self.top, self.top + motion.y))
        right = math.ceil(max(self.right, self.right + motion.x))
        bottom = math.ceil(max(self.bottom, self.bottom + motion.y))
        return pygame.Rect(left, top, right - left, bottom - top)


def _axis_times(lo: float, hi: float, d: float, rect_lo: float, rect_hi: float):
    """Entry / exit times of segment [lo, hi] moving by ``d`` against [rect_lo, rect_hi]."""
    if d > 0:
        return (rect_lo - hi) / d, (rect_hi - lo) / d
    if d < 0:
        return (rect_hi - lo) / d, (rect_lo - hi) / d
    if hi <= rect_lo + EPSILON or lo >= rect_hi - EPSILON:
        return None
    return -math.inf, math.inf


def _overlaps(box: Box, rect: pygame.Rect) -> bool:
    return (
        box.right > rect.left + EPSILON
        and box.left < rect.right - EPSILON
        and box.bottom > rect.top + EPSILON
        and box.top < rect.bottom - EPSILON
    )


class Hit(NamedTuple):
    time: float
    normal: Vector2
    # Only the corners touch at impact; the spans across the contact axis do not overlap
    corner: bool


def _spans_overlap(lo: float, hi: float, rect_lo: float, rect_hi: float) -> bool:
    return hi > rect_lo + EPSILON and lo < rect_hi - EPSILON


def sweep(box: Box, motion: Vector2, rect: pygame.Rect) -> Hit | None:
    """Time of impact in [0, 1] and contact normal, or None when ``motion`` misses ``rect``."""
    x_times = _axis_times(box.left, box.right, motion.x, rect.left, rect.right)
    if x_times is None:
        return None
    y_times = _axis_times(box.top, box.bottom, motion.y, rect.top, rect.bottom)
    if y_times is None:
        return None

    x_entry, x_exit = x_times
    y_entry, y_exit = y_times
    entry = max(x_entry, y_entry)
    exit_ = min(x_exit, y_exit)
    if entry > exit_ or entry > 1 or exit_ <= 0:
        return None
    if entry < 0:
        if _overlaps(box, rect):
            # Embedded rather than touching: not a contact.
            return None
        entry = 0.0

    dx, dy = motion.x * entry, motion.y * entry
    if x_entry > y_entry:
        normal = Vector2(-math.copysign(1, motion.x), 0)
        corner = not _spans_overlap(box.top + dy, box.bottom + dy, rect.top, rect.bottom)
    else:
        normal = Vector2(0, -math.copysign(1, motion.y))
        corner = not _spans_overlap(box.left + dx, box.right + dx, rect.left, rect.right)
    return Hit(entry, normal, corner)


def slide(vector: Vector2, normal: Vector2) -> Vector2:
    return vector - normal * vector.dot(normal)


class TileWorld:
    def __init__(self, body: Box, tiles: Iterable[Tuple[int, int]] = (), tile_size: int = TILE_SIZE, step: float = FIXED_STEP):
        self.body = body
        self.tile_size = tile_size
        self.step = step
        self.tiles: Dict[Tuple[int, int], pygame.Rect] = {}
        for tx, ty in tiles:
            self.add_tile(tx, ty)
        self.on_floor = False
        self.on_ceiling = False
        self.on_wall = False
        self.last_slide_count = 0

    @classmethod
    def from_rows(cls, rows: List[str], body_size=(12, 16), tile_size: int = TILE_SIZE, step: float = FIXED_STEP) -> "TileWorld":
        """Build a world from text rows: ``#`` is solid, ``@`` marks the body spawn (bottom-left of its tile)."""
        tiles = []
        spawn = (0.0, 0.0)
        for ty, row in enumerate(rows):
            for tx, ch in enumerate(row):
                if ch == "#":
                    tiles.append((tx, ty))
                elif ch == "@":
                    spawn = (tx * tile_size, (ty + 1) * tile_size - body_size[1])
        body = Box(spawn[0], spawn[1], body_size[0], body_size[1])
        return cls(body, tiles, tile_size=tile_size, step=step)

    def add_tile(self, tx: int, ty: int) -> None:
        self.tiles[(tx, ty)] = pygame.Rect(tx * self.tile_size, ty * self.tile_size, self.tile_size, self.tile_size)

    def remove_tile(self, tx: int, ty: int) -> None:
        self.tiles.pop((tx, ty), None)

    def rects_around(self, area: pygame.Rect) -> List[pygame.Rect]:
        ts = self.tile_size
        found = []
        for tx in range(area.left // ts, (area.right - 1) // ts + 1):
            for ty in range(area.top // ts, (area.bottom - 1) // ts + 1):
                rect = self.tiles.get((tx, ty))
                if rect is not None:
                    found.append(rect)
        return found

    def _first_hit(self, motion: Vector2) -> Tuple[Hit, pygame.Rect] | None:
        best = None
        for rect in self.rects_around(self.body.swept_rect(motion).inflate(2, 2)):
            hit = sweep(self.body, motion, rect)
            if hit is None:
                continue
            # On equal times a face contact wins over a corner touch of the neighbouring tile.
            if best is None or hit.time < best[0].time or (hit.time == best[0].time and best[0].corner and not hit.corner):
                best = (hit, rect)
        return best

    def _snap(self, normal: Vector2, rect: pygame.Rect) -> None:
        if normal.y < 0:
            self.body.y = rect.top - self.body.h
        elif normal.y > 0:
            self.body.y = rect.bottom
        elif normal.x < 0:
            self.body.x = rect.left - self.body.w
        else:
            self.body.x = rect.right

    # ---- PhysicsWorld ----
    def is_on_floor(self) -> bool:
        return self.on_floor

    def resolve_motion(self, velocity: Vector2, up: Vector2, max_slides: int = DEFAULT_MAX_SLIDES) -> Vector2:
        velocity = Vector2(velocity)
        up = Vector2(up).normalize()
        motion = velocity * self.step
        self.on_floor = self.on_ceiling = self.on_wall = False
        self.last_slide_count = 0

        # Resting contacts clip at most one axis each, hence the two extra passes.
        for _ in range(max_slides + 2):
            if motion.length_squared() == 0 or self.last_slide_count >= max_slides:
                break
            found = self._first_hit(motion)
            if found is None:
                self.body.move(motion)
                break
            hit, rect = found
            self.body.move(motion * hit.time)
            self._snap(hit.normal, rect)
            if hit.time > 0:
                self.last_slide_count += 1

            facing_up = hit.normal.dot(up)
            if facing_up > FLOOR_NORMAL_DOT:
                self.on_floor = True
            elif facing_up < -FLOOR_NORMAL_DOT:
                self.on_ceiling = True
            else:
                self.on_wall = True
            if log.enabled("DEBUG"):
                log.debug(f"contact t={hit.time:.3f} normal=({hit.normal.x:g}, {hit.normal.y:g}) tile={rect.topleft}")

            motion = slide(motion * (1 - hit.time), hit.normal)
            velocity = slide(velocity, hit.normal)
        return velocity


__all__ = ["Box", "Hit", "TileWorld", "sweep", "slide"]
