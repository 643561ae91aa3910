"""Entity identities and kinds, their ordering, stored codes and editor geometry."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from platformer.things import Vec2
from platformer.tiles import LockColor, TileDir

UNSAVEABLE_CODE = 255
_U32_LIMIT = 2**32


class IdOrigin(Enum):
    """Whether an entity was placed in the level or spawned while playing."""

    LEVEL = auto()
    SPAWNED = auto()


@dataclass(frozen=True)
class EntityId:
    """Identifies an entity by its level position or by a spawn counter."""

    origin: IdOrigin
    value: Hashable

    @classmethod
    def level(cls, position: Hashable) -> EntityId:
        return cls(IdOrigin.LEVEL, position)

    @classmethod
    def spawned(cls, number: int) -> EntityId:
        if isinstance(number, bool) or not isinstance(number, int):
            raise TypeError(f"a spawned id needs an integer, got {number!r}")
        if not 0 <= number < _U32_LIMIT:
            raise ValueError(f"spawned id out of range: {number}")
        return cls(IdOrigin.SPAWNED, number)


class HeadPowerup(Enum):
    HELMET = 0
    XRAY_GOGGLES = 1


class FeetPowerup(Enum):
    BOOTS = 0
    MOON_SHOES = 1
    SKIRT = 2


@dataclass(frozen=True)
class PowerupKind:
    """A powerup worn on the head or on the feet."""

    powerup: Union[HeadPowerup, FeetPowerup]

    def __post_init__(self) -> None:
        if not isinstance(self.powerup, (HeadPowerup, FeetPowerup)):
            raise TypeError(f"not a powerup: {self.powerup!r}")

    @property
    def is_head(self) -> bool:
        return isinstance(self.powerup, HeadPowerup)


class CrateType(Enum):
    FROG = auto()
    CHIP = auto()
    POWERUP = auto()
    LIFE = auto()
    KEY = auto()
    EXPLOSIVE = auto()


_CRATE_VARIANTS: dict[CrateType, type | None] = {
    CrateType.FROG: bool,  # many or few
    CrateType.CHIP: bool,  # many or few
    CrateType.POWERUP: PowerupKind,
    CrateType.LIFE: None,
    CrateType.KEY: LockColor,
    CrateType.EXPLOSIVE: None,
}


def _check_variant(owner: str, expected: type | None, variant: object) -> None:
    if expected is None:
        if variant is not None:
            raise TypeError(f"{owner} takes no variant, got {variant!r}")
    elif not isinstance(variant, expected):
        raise TypeError(f"{owner} needs a {expected.__name__} variant, got {variant!r}")


@dataclass(frozen=True)
class CrateKind:
    """What a crate holds: frogs or chips (few or many), a powerup, a life, a key, or nothing."""

    type: CrateType
    variant: object = None

    def __post_init__(self) -> None:
        _check_variant(f"{self.type.name} crate", _CRATE_VARIANTS[self.type], self.variant)


@dataclass(frozen=True)
class LauncherKind:
    """A cannon firing in a direction, or a fireball launcher when no direction is given."""

    direction: TileDir | None = None

    def __post_init__(self) -> None:
        if self.direction is not None and not isinstance(self.direction, TileDir):
            raise TypeError(f"launcher direction must be a TileDir, got {self.direction!r}")

    @property
    def is_fireball(self) -> bool:
        return self.direction is None


class EntityType(Enum):
    CRATE = auto()
    KEY = auto()
    POWERUP = auto()
    CHIP = auto()
    LIFE = auto()
    FROG = auto()
    GOAT = auto()
    ARMADILLO = auto()
    LAUNCHER = auto()
    CANNONBALL = auto()
    FIREBALL = auto()
    FLAME_JET = auto()
    DANGER_CLOUD = auto()
    EXPLOSION = auto()


# Variant type and number of boolean flags each entity type carries.
# Powerup flags: (gravity, invulnerable). Chip/Life: (gravity). Frog: (invulnerable).
# Armadillo: (invulnerable, spinning). Flame jet: (vertical).
_SHAPES: dict[EntityType, tuple[type | None, int]] = {
    EntityType.CRATE: (CrateKind, 0),
    EntityType.KEY: (LockColor, 0),
    EntityType.POWERUP: (PowerupKind, 2),
    EntityType.CHIP: (None, 1),
    EntityType.LIFE: (None, 1),
    EntityType.FROG: (None, 1),
    EntityType.GOAT: (None, 0),
    EntityType.ARMADILLO: (None, 2),
    EntityType.LAUNCHER: (LauncherKind, 0),
    EntityType.CANNONBALL: (None, 0),
    EntityType.FIREBALL: (None, 0),
    EntityType.FLAME_JET: (None, 1),
    EntityType.DANGER_CLOUD: (None, 0),
    EntityType.EXPLOSION: (None, 0),
}

# Launchers and explosions come first so shakes can be noticed by armadillos.
_SORT_ORDER: dict[EntityType, int] = {
    EntityType.LAUNCHER: 0,
    EntityType.EXPLOSION: 0,
    EntityType.DANGER_CLOUD: 1,
    EntityType.CRATE: 2,
    EntityType.CHIP: 3,
    EntityType.LIFE: 4,
    EntityType.GOAT: 5,
    EntityType.ARMADILLO: 5,
    EntityType.FROG: 5,
    EntityType.FIREBALL: 6,
    EntityType.CANNONBALL: 7,
    EntityType.KEY: 8,
    EntityType.POWERUP: 9,
    EntityType.FLAME_JET: 10,
}

_UNSAVEABLE = frozenset(
    {EntityType.DANGER_CLOUD, EntityType.EXPLOSION, EntityType.CANNONBALL, EntityType.FIREBALL}
)

_TILE_OFFSETS: dict[EntityType, Vec2] = {
    EntityType.KEY: Vec2(0.0, 2.0),
    EntityType.POWERUP: Vec2(-1.0, 0.0),
    EntityType.CHIP: Vec2(1.0, 2.0),
    EntityType.LIFE: Vec2(1.0, 2.0),
    EntityType.FROG: Vec2(-1.0, -2.0),
    EntityType.GOAT: Vec2(1.0, -16.0),
    EntityType.ARMADILLO: Vec2(-5.0, 2.0),
}

_SELECTOR_OFFSETS: dict[EntityType, Vec2] = {
    EntityType.FROG: Vec2(0.0, -6.0),
    EntityType.GOAT: Vec2(0.0, 0.0),
    EntityType.ARMADILLO: Vec2(0.0, 0.0),
}

_SELECTOR_SIZES: dict[EntityType, Vec2] = {
    EntityType.CRATE: Vec2(16.0, 16.0),
    EntityType.KEY: Vec2(16.0, 14.0),
    EntityType.POWERUP: Vec2(18.0, 16.0),
    EntityType.CHIP: Vec2(16.0, 14.0),
    EntityType.LIFE: Vec2(16.0, 14.0),
    EntityType.FROG: Vec2(19.0, 11.0),
    EntityType.GOAT: Vec2(14.0, 32.0),
    EntityType.ARMADILLO: Vec2(24.0, 14.0),
    EntityType.LAUNCHER: Vec2(16.0, 16.0),
    EntityType.FLAME_JET: Vec2(16.0, 16.0),
}


@dataclass(frozen=True)
class EntityKind:
    """An entity type together with the variant and flags that type carries."""

    type: EntityType
    variant: object = None
    flags: tuple[bool, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", tuple(self.flags))
        expected, flag_count = _SHAPES[self.type]
        _check_variant(self.type.name, expected, self.variant)
        if len(self.flags) != flag_count or not all(isinstance(f, bool) for f in self.flags):
            raise TypeError(f"{self.type.name} needs {flag_count} boolean flags, got {self.flags!r}")

    def sort_order(self) -> int:
        """Update order: entities with lower values are updated first."""
        return _SORT_ORDER[self.type]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EntityKind):
            return NotImplemented
        return self.sort_order() < other.sort_order()

    def _canonical(self) -> EntityKind:
        """The form this kind is stored as: runtime-only flags cleared."""
        if self.type is EntityType.ARMADILLO:
            return EntityKind(self.type, None, (False, self.flags[1]))
        if self.type in (EntityType.POWERUP, EntityType.CHIP, EntityType.LIFE, EntityType.FROG):
            return EntityKind(self.type, self.variant, (False,) * len(self.flags))
        return self

    def to_code(self) -> int:
        """The byte this kind is stored as; kinds that cannot be placed give 255."""
        if self.type in _UNSAVEABLE:
            return UNSAVEABLE_CODE
        return _ENCODE[self._canonical()]

    @classmethod
    def from_code(cls, code: int) -> EntityKind:
        """Decode a stored entity kind, raising ValueError for unknown codes."""
        try:
            return _DECODE[code]
        except KeyError:
            raise ValueError(f"unknown entity kind code: {code!r}") from None

    def tile_offset(self) -> Vec2:
        """Offset of this entity from its tile when spawned into the level."""
        return _TILE_OFFSETS.get(self.type, Vec2())

    def object_selector_offset(self) -> Vec2:
        """Offset of this entity when shown in the object selector."""
        return _SELECTOR_OFFSETS.get(self.type, Vec2())

    def object_selector_size(self) -> Vec2:
        """Size of this entity's box in the object selector."""
        return _SELECTOR_SIZES.get(self.type, Vec2())


def _code_table() -> list[tuple[int, EntityKind]]:
    crate = lambda t, v=None: EntityKind(EntityType.CRATE, CrateKind(t, v))  # noqa: E731
    table = [
        (20, crate(CrateType.FROG, False)),
        (21, crate(CrateType.FROG, True)),
        (15, crate(CrateType.CHIP, False)),
        (16, crate(CrateType.CHIP, True)),
        (18, crate(CrateType.LIFE)),
        (23, crate(CrateType.EXPLOSIVE)),
        (14, EntityKind(EntityType.CHIP, None, (False,))),
        (17, EntityKind(EntityType.LIFE, None, (False,))),
        (19, EntityKind(EntityType.FROG, None, (False,))),
        (22, EntityKind(EntityType.GOAT)),
        (24, EntityKind(EntityType.ARMADILLO, None, (False, False))),
        (25, EntityKind(EntityType.ARMADILLO, None, (False, True))),
        (36, EntityKind(EntityType.LAUNCHER, LauncherKind(TileDir.BOTTOM))),
        (37, EntityKind(EntityType.LAUNCHER, LauncherKind(TileDir.LEFT))),
        (38, EntityKind(EntityType.LAUNCHER, LauncherKind(TileDir.RIGHT))),
        (39, EntityKind(EntityType.LAUNCHER, LauncherKind(TileDir.TOP))),
        (43, EntityKind(EntityType.LAUNCHER, LauncherKind())),
        (40, EntityKind(EntityType.FLAME_JET, None, (False,))),
        (41, EntityKind(EntityType.FLAME_JET, None, (True,))),
    ]
    for offset, color in enumerate(LockColor):
        table.append((offset, EntityKind(EntityType.KEY, color)))
        table.append((7 + offset, crate(CrateType.KEY, color)))
    powerups = [PowerupKind(p) for p in (*HeadPowerup, *FeetPowerup)]
    for offset, powerup in enumerate(powerups):
        table.append((26 + offset, EntityKind(EntityType.POWERUP, powerup, (False, False))))
        table.append((31 + offset, crate(CrateType.POWERUP, powerup)))
    return table


_TABLE = _code_table()
_DECODE: dict[int, EntityKind] = dict(_TABLE)
_ENCODE: dict[EntityKind, int] = {kind: code for code, kind in _TABLE}