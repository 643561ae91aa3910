"""Runtime entities: the shared interface and the hazard entities fired by launchers."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from platformer.kinds import EntityId, EntityKind, EntityType, FeetPowerup, LauncherKind
from platformer.level import Level
from platformer.things import Rect, Vec2
from platformer.tiles import TileDir

TICK = 1.0 / 120.0

_DEAD_TIME = 3.0

_GAS_BEG_TIME = 2.0
_ON_TIME = 3.0
_GAS_END_TIME = 6.0
_TOTAL_TIME = 6.05

_CANNON_PERIOD = 3.0
_FIREBALL_PERIOD = 4.0
_LAUNCH_WINDOW = 0.1
_CANNON_SPEED = 0.5
_CANNON_SHAKE = 0.3

_DIRECTION_VECTORS = {
    TileDir.RIGHT: Vec2(1.0, 0.0),
    TileDir.LEFT: Vec2(-1.0, 0.0),
    TileDir.TOP: Vec2(0.0, -1.0),
    TileDir.BOTTOM: Vec2(0.0, 1.0),
}


@dataclass(frozen=True)
class SpawnRequest:
    """An entity to be added to the scene, and how hard to shake the camera for it."""

    pos: Vec2
    vel: Vec2
    kind: EntityKind
    camera_shake: float = 0.0


class Entity(ABC):
    """Something that lives in a level: it moves, collides and may hurt or be hurt."""

    id: EntityId
    pos: Vec2
    vel: Vec2

    @property
    @abstractmethod
    def kind(self) -> EntityKind:
        """The kind of this entity in its current state."""

    @abstractmethod
    def hitbox(self) -> Rect:
        """The world-space box used for collisions."""

    def hurtbox(self) -> Rect | None:
        """The box that hurts the player, if any."""
        return None

    def stompbox(self) -> Rect | None:
        """The box the player can stomp on, if any."""
        return None

    def can_hurt(self) -> bool:
        return False

    def can_stomp(self) -> bool:
        return False

    def can_stomp_when_player_invuln(self) -> bool:
        return True

    def kill(self) -> None:
        """Kill this entity; entities that cannot die ignore it."""

    def stomp(self, power: FeetPowerup | None, direction: object) -> bool:
        """React to being stomped; True if the stomp landed."""
        return False

    def hit_with_throwable(self, vel: Vec2) -> bool:
        """React to a thrown object; True if it was hit."""
        return False

    @abstractmethod
    def should_destroy(self) -> bool:
        """True once this entity should be removed from the scene."""

    def destroy_offscreen(self) -> bool:
        return False

    def update_far(self) -> bool:
        return False


def _fall(vel: Vec2, gravity: float, max_fall_speed: float) -> Vec2:
    return Vec2(vel.x, min(vel.y + gravity, max_fall_speed))


class Cannonball(Entity):
    """A cannonball flying in a straight line until it is stomped, then falling."""

    def __init__(self, pos: Vec2, vel: Vec2, id: EntityId, gravity: float, max_fall_speed: float) -> None:
        self.id = id
        self.pos = pos
        self.vel = vel
        self.gravity = gravity
        self.max_fall_speed = max_fall_speed
        self.stomped: float | None = None

    @property
    def kind(self) -> EntityKind:
        return EntityKind(EntityType.CANNONBALL)

    def hitbox(self) -> Rect:
        return Rect(self.pos.x, self.pos.y, 14.0, 14.0)

    def hurtbox(self) -> Rect | None:
        return self.hitbox()

    def stompbox(self) -> Rect | None:
        return Rect(self.pos.x - 1.0, self.pos.y, 16.0, 7.0)

    def should_destroy(self) -> bool:
        return self.stomped is not None and self.stomped >= _DEAD_TIME

    def destroy_offscreen(self) -> bool:
        return True

    def update_far(self) -> bool:
        return True

    def can_hurt(self) -> bool:
        return self.stomped is None

    def can_stomp(self) -> bool:
        return self.stomped is None

    def can_stomp_when_player_invuln(self) -> bool:
        return True

    def _knock_out(self) -> bool:
        if self.stomped is not None:
            return False
        self.stomped = 0.0
        self.vel = Vec2()
        return True

    def kill(self) -> None:
        self._knock_out()

    def stomp(self, power: FeetPowerup | None, direction: object) -> bool:
        return self._knock_out()

    def hit_with_throwable(self, vel: Vec2) -> bool:
        return self._knock_out()

    def physics_update(self) -> None:
        if self.stomped is not None:
            self.stomped -= TICK
            self.vel = _fall(self.vel, self.gravity, self.max_fall_speed)
        self.pos = self.pos + self.vel


class DangerCloud(Entity):
    """A drifting cloud that hurts while fresh and fades away."""

    def __init__(self, pos: Vec2, vel: Vec2, id: EntityId, rng: random.Random | None = None) -> None:
        rng = rng if rng is not None else random.Random()
        self.id = id
        self.pos = pos
        self.vel = vel
        self.total_time = rng.uniform(0.8, 1.6)
        self.time = self.total_time

    @property
    def kind(self) -> EntityKind:
        return EntityKind(EntityType.DANGER_CLOUD)

    def hitbox(self) -> Rect:
        return Rect(self.pos.x - 2.0, self.pos.y - 2.0, 12.0, 12.0)

    def hurtbox(self) -> Rect | None:
        return Rect(8.0, 8.0, 8.0, 8.0).offset(self.pos)

    def should_destroy(self) -> bool:
        return self.time <= 0.0

    def destroy_offscreen(self) -> bool:
        return True

    def can_hurt(self) -> bool:
        return self.alpha() > 0.65

    def alpha(self) -> float:
        """How much of the cloud's life is left, from 1 down to 0."""
        return self.time / self.total_time

    def physics_update(self) -> None:
        self.pos = self.pos + self.vel
        self.time -= TICK


class Fireball(Entity):
    """A fireball thrown upwards that burns out when it reaches a solid tile."""

    def __init__(self, pos: Vec2, vel: Vec2, id: EntityId, gravity: float, max_fall_speed: float) -> None:
        self.id = id
        self.pos = pos
        self.vel = vel
        self.gravity = gravity
        self.max_fall_speed = max_fall_speed
        self.hit_solid = False

    @property
    def kind(self) -> EntityKind:
        return EntityKind(EntityType.FIREBALL)

    def hitbox(self) -> Rect:
        return Rect(self.pos.x, self.pos.y, 16.0, 16.0)

    def hurtbox(self) -> Rect | None:
        return self.hitbox()

    def should_destroy(self) -> bool:
        return self.hit_solid

    def destroy_offscreen(self) -> bool:
        return True

    def update_far(self) -> bool:
        return True

    def can_hurt(self) -> bool:
        return True

    def physics_update(self, level: Level) -> None:
        self.vel = _fall(self.vel, self.gravity * 0.4, self.max_fall_speed)
        self.pos = self.pos + self.vel
        for point in (Vec2(8.0, 2.0), Vec2(8.0, 14.0)):
            tile = level.tile_at_pos(self.pos + point)
            if level.tile_data.data(tile).collision.is_solid():
                self.hit_solid = True


class FlameJet(Entity):
    """A jet that periodically breathes flames out of both of its open sides."""

    def __init__(self, pos: Vec2, vertical: bool, id: EntityId) -> None:
        self.id = id
        self.pos = pos
        self.vel = Vec2()
        self.vertical = vertical
        self.active = False
        self.first = True
        self.second = True

    @property
    def kind(self) -> EntityKind:
        return EntityKind(EntityType.FLAME_JET, None, (self.vertical,))

    def hitbox(self) -> Rect:
        return Rect()

    def hurtbox(self) -> Rect | None:
        if not self.active:
            return None
        x, y = self.pos.x, self.pos.y
        boxes = []
        if self.first:
            boxes.append(Rect(x + 3.0, y + 16.0, 10.0, 29.0) if self.vertical
                         else Rect(x + 16.0, y + 3.0, 29.0, 10.0))
        if self.second:
            boxes.append(Rect(x + 3.0, y - 29.0, 10.0, 29.0) if self.vertical
                         else Rect(x - 29.0, y + 3.0, 29.0, 10.0))
        if not boxes:
            return None
        if len(boxes) == 2:
            return boxes[0].combine_with(boxes[1])
        return boxes[0]

    def should_destroy(self) -> bool:
        return False

    def update_far(self) -> bool:
        return True

    def can_hurt(self) -> bool:
        return True

    def physics_update(self, level: Level, timer: float) -> None:
        if self.vertical:
            first_check, second_check = Vec2(8.0, 24.0), Vec2(8.0, -8.0)
        else:
            first_check, second_check = Vec2(24.0, 8.0), Vec2(-8.0, 8.0)
        t = math.fmod(timer, _TOTAL_TIME)
        self.active = _ON_TIME <= t < _GAS_END_TIME
        solid = lambda offset: level.tile_data.data(  # noqa: E731
            level.tile_at_pos(self.pos + offset)
        ).collision.is_solid()
        self.first = not solid(first_check)
        self.second = not solid(second_check)

    def visible(self, timer: float) -> bool:
        """True while gas or flames are showing."""
        return math.fmod(timer, _TOTAL_TIME) >= _GAS_BEG_TIME


class Launcher(Entity):
    """A cannon or fireball launcher that fires once per period of the animation timer."""

    def __init__(self, kind: LauncherKind, pos: Vec2, id: EntityId) -> None:
        self.id = id
        self.pos = pos
        self.vel = Vec2()
        self.launcher_kind = kind
        self.fired = True

    @property
    def kind(self) -> EntityKind:
        return EntityKind(EntityType.LAUNCHER, self.launcher_kind)

    def hitbox(self) -> Rect:
        return Rect()

    def should_destroy(self) -> bool:
        return False

    def update_far(self) -> bool:
        return True

    def physics_update(self, timer: float) -> SpawnRequest | None:
        """Return what to fire at this moment, if anything."""
        period = _FIREBALL_PERIOD if self.launcher_kind.is_fireball else _CANNON_PERIOD
        if math.fmod(timer, period) < _LAUNCH_WINDOW:
            self.fired = False
            return None
        if self.fired:
            return None
        self.fired = True

        if self.launcher_kind.is_fireball:
            return SpawnRequest(self.pos, Vec2(0.0, -2.0), EntityKind(EntityType.FIREBALL))
        vel = _DIRECTION_VECTORS[self.launcher_kind.direction] * _CANNON_SPEED
        return SpawnRequest(self.pos + 1.0, vel, EntityKind(EntityType.CANNONBALL), _CANNON_SHAKE)