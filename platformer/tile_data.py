"""Per-tile data: names, textures, texture connections and collision."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto

from platformer.things import Rect
from platformer.tiles import (
    RAINBOW_LOCK_FRAME_DUR,
    BrickColor,
    CheckerBlockColor,
    FancyColor,
    LockColor,
    Tile,
    TileDir,
    TileKind,
)


class TileHitKind(Enum):
    """How hard a tile is hit: by a thrown object or by an explosion."""

    SOFT = auto()
    HARD = auto()


class HitAction(Enum):
    NONE = auto()
    BUMP = auto()
    REPLACE = auto()


@dataclass(frozen=True)
class TileHit:
    """What happens when a tile is hit; REPLACE carries the tile it becomes."""

    action: HitAction = HitAction.NONE
    new: Tile | None = None

    def __post_init__(self) -> None:
        if self.action is HitAction.REPLACE and self.new is None:
            raise ValueError("a replacing hit needs the tile to replace with")
        if self.action is not HitAction.REPLACE and self.new is not None:
            raise ValueError(f"{self.action.name} hits take no replacement tile")


class CollisionKind(Enum):
    NONE = auto()
    PLATFORM = auto()
    SOLID = auto()
    LADDER = auto()


@dataclass(frozen=True)
class TileCollision:
    """How a tile collides, and for solid tiles how it reacts to hits."""

    kind: CollisionKind = CollisionKind.NONE
    hit_soft: TileHit = field(default_factory=TileHit)
    hit_hard: TileHit = field(default_factory=TileHit)

    @classmethod
    def solid(cls, hit_soft: TileHit, hit_hard: TileHit) -> TileCollision:
        return cls(CollisionKind.SOLID, hit_soft, hit_hard)

    @classmethod
    def solid_default(cls, bump: bool) -> TileCollision:
        """A solid tile that bumps on any hit if asked to, or ignores hits."""
        hit = TileHit(HitAction.BUMP) if bump else TileHit()
        return cls(CollisionKind.SOLID, hit, hit)

    def is_solid(self) -> bool:
        return self.kind is CollisionKind.SOLID

    def is_platform(self) -> bool:
        return self.kind is CollisionKind.PLATFORM

    def is_solid_or_platform(self) -> bool:
        return self.kind in (CollisionKind.SOLID, CollisionKind.PLATFORM)

    def is_ladder(self) -> bool:
        return self.kind is CollisionKind.LADDER

    def hit_for(self, hit_kind: TileHitKind) -> TileHit:
        """The reaction to a hit of the given kind; non-solid tiles never react."""
        if not self.is_solid():
            return TileHit()
        return self.hit_soft if hit_kind is TileHitKind.SOFT else self.hit_hard


class ConnectionMode(Enum):
    NONE = auto()
    ALL_BUT = auto()
    ONLY = auto()


@dataclass(frozen=True)
class TileTextureConnectionKind:
    """Which neighbouring tiles a connected texture joins up with."""

    mode: ConnectionMode = ConnectionMode.NONE
    tiles: frozenset[Tile] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tiles", frozenset(self.tiles))

    def connects(self, tile: Tile, other: Tile) -> bool:
        """True if a texture of `tile` joins up with a neighbouring `other`."""
        if other == tile:
            return True
        if self.mode is ConnectionMode.ONLY:
            return other in self.tiles
        if self.mode is ConnectionMode.ALL_BUT:
            return other not in self.tiles
        return False


class ConnectionAxis(Enum):
    """NONE uses one texture, HORIZONTAL and VERTICAL four, BOTH five in quarters."""

    NONE = auto()
    HORIZONTAL = auto()
    VERTICAL = auto()
    BOTH = auto()


@dataclass(frozen=True)
class TileTextureConnection:
    axis: ConnectionAxis = ConnectionAxis.NONE
    kind: TileTextureConnectionKind = field(default_factory=TileTextureConnectionKind)


@dataclass(frozen=True)
class TileTexture:
    """A tile texture: a fixed atlas index, or frames cycled at a fixed rate."""

    frames: tuple[int, ...]
    frame_duration: float | None
    connection: TileTextureConnection
    above: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "frames", tuple(self.frames))
        if not self.frames:
            raise ValueError("a texture needs at least one frame")
        if self.frame_duration is not None and self.frame_duration <= 0:
            raise ValueError("frame duration must be positive")

    @classmethod
    def fixed(cls, texture: int, connection: TileTextureConnection, above: bool) -> TileTexture:
        return cls((texture,), None, connection, above)

    @classmethod
    def animated(
        cls,
        frames: tuple[int, ...] | list[int],
        frame_duration: float,
        connection: TileTextureConnection,
        above: bool,
    ) -> TileTexture:
        return cls(tuple(frames), frame_duration, connection, above)

    @property
    def is_animated(self) -> bool:
        return self.frame_duration is not None

    def start_texture(self, timer: float) -> int:
        """The atlas index to draw at the given animation time."""
        if self.frame_duration is None:
            return self.frames[0]
        count = len(self.frames)
        cycle_len = self.frame_duration * count
        cycle_amount = math.fmod(timer, cycle_len) / cycle_len
        frame = min(max(int(cycle_amount * count), 0), count - 1)
        return self.frames[frame]


@dataclass(frozen=True)
class TileData:
    name: str
    texture: TileTexture | None
    collision: TileCollision

    @classmethod
    def new_default(cls, name: str, texture: int, bump: bool) -> TileData:
        """A solid, unconnected tile with a fixed texture."""
        return cls(
            name,
            TileTexture.fixed(texture, TileTextureConnection(), False),
            TileCollision.solid_default(bump),
        )


def _conn(axis: ConnectionAxis, mode: ConnectionMode = ConnectionMode.NONE, tiles=()) -> TileTextureConnection:
    return TileTextureConnection(axis, TileTextureConnectionKind(mode, frozenset(tiles)))


_NO_CONN = TileTextureConnection()
_NO_COLLISION = TileCollision()
_PLATFORM = TileCollision(CollisionKind.PLATFORM)
_LADDER = TileCollision(CollisionKind.LADDER)

_DIRS = (TileDir.BOTTOM, TileDir.LEFT, TileDir.TOP, TileDir.RIGHT)


def _title(member: Enum) -> str:
    return member.name.capitalize()


def _build_tile_data() -> dict[Tile, TileData]:
    data: dict[Tile, TileData] = {}

    def add(tile: Tile, name: str, texture: TileTexture | None, collision: TileCollision) -> None:
        data[tile] = TileData(name, texture, collision)

    add(Tile(TileKind.EMPTY), "Empty", None, _NO_COLLISION)
    add(Tile(TileKind.DOOR), "Door",
        TileTexture.fixed(140, _conn(ConnectionAxis.VERTICAL), False), _NO_COLLISION)
    add(Tile(TileKind.LAVA), "Lava",
        TileTexture.animated([82 + 16 * i for i in range(8)], 0.2, _conn(ConnectionAxis.VERTICAL), True),
        _NO_COLLISION)
    add(Tile(TileKind.BRIDGE), "Bridge",
        TileTexture.fixed(92, _conn(ConnectionAxis.HORIZONTAL), True), _PLATFORM)
    add(Tile(TileKind.ROPE), "Rope",
        TileTexture.fixed(76, _conn(ConnectionAxis.HORIZONTAL), True), _NO_COLLISION)
    for kind, name, texture in (
        (TileKind.SHORT_GRASS, "Short Grass", 80),
        (TileKind.TALL_GRASS, "Tall Grass", 81),
        (TileKind.DEAD_SHORT_GRASS, "Dead Short Grass", 96),
        (TileKind.DEAD_TALL_GRASS, "Dead Tall Grass", 97),
    ):
        add(Tile(kind), name, TileTexture.fixed(texture, _NO_CONN, True), _NO_COLLISION)
    add(Tile(TileKind.STONE_BLOCK), "Stone Block",
        TileTexture.fixed(2, _NO_CONN, False),
        TileCollision.solid(TileHit(), TileHit(HitAction.REPLACE, Tile(TileKind.EMPTY))))
    add(Tile(TileKind.BUSH), "Bush",
        TileTexture.fixed(208, _conn(ConnectionAxis.HORIZONTAL), False), _NO_COLLISION)

    connect_solids = [
        Tile(TileKind.SHORT_GRASS), Tile(TileKind.TALL_GRASS), Tile(TileKind.DEAD_SHORT_GRASS),
        Tile(TileKind.DEAD_TALL_GRASS), Tile(TileKind.BUSH), Tile(TileKind.LAVA),
        Tile(TileKind.LADDER), Tile(TileKind.VINE), Tile(TileKind.ROPE), Tile(TileKind.BRIDGE),
        Tile(TileKind.WOODEN_PLATFORM), Tile(TileKind.METAL_PLATFORM), Tile(TileKind.EMPTY),
        Tile(TileKind.DOOR),
    ] + [Tile(TileKind.SPIKES, d) for d in _DIRS]
    for i, direction in enumerate(_DIRS):
        add(Tile(TileKind.SPIKES, direction), f"{_title(direction)} Spikes",
            TileTexture.fixed(66 + i, _NO_CONN, False), TileCollision.solid_default(False))
        axis = (ConnectionAxis.VERTICAL if direction in (TileDir.LEFT, TileDir.RIGHT)
                else ConnectionAxis.HORIZONTAL)
        add(Tile(TileKind.CANNON, direction), f"{_title(direction)} Cannon",
            TileTexture.fixed(16 * (i + 12) + 6, _conn(axis, ConnectionMode.ALL_BUT, connect_solids), True),
            TileCollision.solid_default(False))

    both = _conn(ConnectionAxis.BOTH)
    for tile, name, texture in (
        (Tile(TileKind.GRASS), "Grass",
         TileTexture.fixed(6, _conn(ConnectionAxis.BOTH, ConnectionMode.ONLY, [Tile(TileKind.DIRT)]), False)),
        (Tile(TileKind.DIRT), "Dirt",
         TileTexture.fixed(118, _conn(ConnectionAxis.BOTH, ConnectionMode.ONLY, [Tile(TileKind.GRASS)]), False)),
        (Tile(TileKind.STONE), "Stone", TileTexture.fixed(22, both, False)),
        (Tile(TileKind.BRIGHT_STONE), "Bright Stone", TileTexture.fixed(134, both, False)),
        (Tile(TileKind.METAL), "Metal", TileTexture.fixed(11, both, False)),
        (Tile(TileKind.CHECKER), "Checker", TileTexture.fixed(27, both, False)),
        (Tile(TileKind.CHECKER_BLOCK, CheckerBlockColor.CYAN), "Cyan Checker Block",
         TileTexture.fixed(70, both, False)),
        (Tile(TileKind.CHECKER_BLOCK, CheckerBlockColor.ORANGE), "Orange Checker Block",
         TileTexture.fixed(86, both, False)),
        (Tile(TileKind.CHECKER_BLOCK, CheckerBlockColor.PURPLE), "Purple Checker Block",
         TileTexture.fixed(102, both, False)),
        (Tile(TileKind.CLOUD), "Cloud", TileTexture.fixed(38, both, False)),
        (Tile(TileKind.SAND), "Sand", TileTexture.fixed(150, both, False)),
        (Tile(TileKind.GLASS), "Glass", TileTexture.fixed(4, _NO_CONN, False)),
        (Tile(TileKind.BLOCK), "Block", TileTexture.fixed(5, _NO_CONN, False)),
        (Tile(TileKind.WOOD), "Wood", TileTexture.fixed(16 * 21, both, False)),
        (Tile(TileKind.FLAME_JET, False), "Horizontal flame jet",
         TileTexture.fixed(16 * 15 + 10, _NO_CONN, False)),
        (Tile(TileKind.FLAME_JET, True), "Vertical flame jet",
         TileTexture.fixed(16 * 15 + 11, _NO_CONN, False)),
    ):
        add(tile, name, texture, TileCollision.solid_default(False))

    for i, color in enumerate(FancyColor):
        add(Tile(TileKind.FANCY_FLOOR, color), f"{_title(color)} fancy floor",
            TileTexture.fixed(16 * (16 + i), both, False), TileCollision.solid_default(False))
        add(Tile(TileKind.PILLAR, color), f"{_title(color)} pillar",
            TileTexture.fixed(16 * (16 + i) + 5, _conn(ConnectionAxis.VERTICAL), False),
            TileCollision.solid_default(False))

    for row, color in ((2, BrickColor.GRAY), (3, BrickColor.TAN), (11, BrickColor.BLUE), (12, BrickColor.GREEN)):
        add(Tile(TileKind.BRICKS, color), f"{_title(color)} bricks",
            TileTexture.fixed(12 + row * 16, _conn(ConnectionAxis.HORIZONTAL), False),
            TileCollision.solid_default(False))

    data[Tile(TileKind.SWITCH, False)] = TileData.new_default("Switch", 16, True)
    data[Tile(TileKind.SWITCH, True)] = TileData.new_default("Switch", 17, True)
    add(Tile(TileKind.SWITCH_BLOCK_OFF, False), "Switch Block Off",
        TileTexture.fixed(18, _NO_CONN, False), _NO_COLLISION)
    data[Tile(TileKind.SWITCH_BLOCK_OFF, True)] = TileData.new_default("Switch Block Off", 19, False)
    add(Tile(TileKind.SWITCH_BLOCK_ON, False), "Switch Block On",
        TileTexture.fixed(20, _NO_CONN, False), _NO_COLLISION)
    data[Tile(TileKind.SWITCH_BLOCK_ON, True)] = TileData.new_default("Switch Block On", 21, False)

    add(Tile(TileKind.WOODEN_PLATFORM), "Wooden Platform",
        TileTexture.fixed(156, _conn(ConnectionAxis.HORIZONTAL), True), _PLATFORM)
    add(Tile(TileKind.METAL_PLATFORM), "Metal Platform",
        TileTexture.fixed(172, _conn(ConnectionAxis.HORIZONTAL), True), _PLATFORM)

    add(Tile(TileKind.LADDER), "Ladder",
        TileTexture.fixed(108, _conn(ConnectionAxis.VERTICAL), False), _LADDER)
    add(Tile(TileKind.VINE), "Vine", TileTexture.fixed(64, _NO_CONN, False), _LADDER)
    add(Tile(TileKind.GRATE), "Grate", TileTexture.fixed(16 * 21 + 5, both, False), _LADDER)

    for i, color in enumerate(LockColor):
        if color is LockColor.RAINBOW:
            lock_tex = TileTexture.animated([32, 33, 34, 35], RAINBOW_LOCK_FRAME_DUR, _NO_CONN, False)
            block_tex = TileTexture.animated([48, 49, 50, 51], RAINBOW_LOCK_FRAME_DUR, _NO_CONN, False)
        else:
            lock_tex = TileTexture.fixed(32 + i, _NO_CONN, False)
            block_tex = TileTexture.fixed(48 + i, _NO_CONN, False)
        add(Tile(TileKind.LOCK, color), f"{_title(color)} Lock", lock_tex, TileCollision.solid_default(False))
        add(Tile(TileKind.LOCK_BLOCK, color), f"{_title(color)} Lock Block", block_tex,
            TileCollision.solid_default(False))

    return data


class TileDataManager:
    """Looks up the data of every tile; unknown tiles get the error tile."""

    def __init__(self) -> None:
        self.error = TileData("Error!", TileTexture.fixed(0, _NO_CONN, False), _NO_COLLISION)
        self._data = _build_tile_data()

    def data(self, tile: Tile) -> TileData:
        return self._data.get(tile, self.error)


class TileRenderLayer(Enum):
    FOREGROUND = auto()
    FOREGROUND_TRANSPARENT = auto()
    BACKGROUND = auto()

    def color(self) -> tuple[int, int, int, int]:
        """RGBA tint used when drawing tiles on this layer."""
        return _LAYER_COLORS[self]


_LAYER_COLORS = {
    TileRenderLayer.FOREGROUND: (255, 255, 255, 255),
    TileRenderLayer.FOREGROUND_TRANSPARENT: (255, 255, 255, 64),
    TileRenderLayer.BACKGROUND: (150, 150, 150, 255),
}


def tile_rect(texture: int) -> Rect:
    """The atlas rectangle of a texture index in a 16-wide grid of 16px tiles."""
    column, row = texture % 16, texture // 16
    return Rect(column * 16.0, row * 16.0, 16.0, 16.0)