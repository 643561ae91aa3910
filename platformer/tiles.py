"""Tile identities, their variants and their stored byte codes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

RAINBOW_LOCK_FRAME_DUR = 0.1


class TileDir(Enum):
    TOP = auto()
    BOTTOM = auto()
    LEFT = auto()
    RIGHT = auto()


class LockColor(Enum):
    """Colours of keys, locks and lock blocks, in their stored order."""

    RED = 0
    GREEN = 1
    BLUE = 2
    YELLOW = 3
    WHITE = 4
    BLACK = 5
    RAINBOW = 6

    @classmethod
    def colors(cls) -> tuple[LockColor, ...]:
        return tuple(cls)

    def color(self, timer: float) -> tuple[int, int, int, int]:
        """RGBA colour of this lock; the rainbow one cycles with the animation timer."""
        if self is LockColor.RAINBOW:
            cycle = RAINBOW_LOCK_FRAME_DUR * 4.0
            index = min(math.floor((timer % cycle) / RAINBOW_LOCK_FRAME_DUR), 3)
        else:
            index = self.value
        return _LOCK_RGBA[index]


_LOCK_RGBA = (
    (207, 72, 71, 255),
    (99, 207, 71, 255),
    (71, 109, 207, 255),
    (207, 179, 71, 255),
    (208, 208, 208, 255),
    (105, 105, 105, 255),
)


class CheckerBlockColor(Enum):
    CYAN = auto()
    ORANGE = auto()
    PURPLE = auto()


class BrickColor(Enum):
    GRAY = auto()
    TAN = auto()
    BLUE = auto()
    GREEN = auto()


class FancyColor(Enum):
    BLUE = auto()
    TAN = auto()
    WHITE = auto()
    BLACK = auto()


class TileKind(Enum):
    EMPTY = auto()
    DOOR = auto()
    GRASS = auto()
    DIRT = auto()
    STONE = auto()
    CLOUD = auto()
    METAL = auto()
    CHECKER = auto()
    CHECKER_BLOCK = auto()
    BRIDGE = auto()
    ROPE = auto()
    LADDER = auto()
    VINE = auto()
    STONE_BLOCK = auto()
    GLASS = auto()
    BLOCK = auto()
    SPIKES = auto()
    SWITCH = auto()
    SWITCH_BLOCK_OFF = auto()
    SWITCH_BLOCK_ON = auto()
    LOCK = auto()
    LOCK_BLOCK = auto()
    WOODEN_PLATFORM = auto()
    METAL_PLATFORM = auto()
    BRIGHT_STONE = auto()
    LAVA = auto()
    SAND = auto()
    SHORT_GRASS = auto()
    TALL_GRASS = auto()
    DEAD_SHORT_GRASS = auto()
    DEAD_TALL_GRASS = auto()
    BUSH = auto()
    BRICKS = auto()
    CANNON = auto()
    FLAME_JET = auto()
    FANCY_FLOOR = auto()
    PILLAR = auto()
    WOOD = auto()
    GRATE = auto()


Variant = Union[None, bool, TileDir, LockColor, CheckerBlockColor, BrickColor, FancyColor]

_VARIANT_TYPES: dict[TileKind, type] = {
    TileKind.CHECKER_BLOCK: CheckerBlockColor,
    TileKind.SPIKES: TileDir,
    TileKind.CANNON: TileDir,
    TileKind.SWITCH: bool,
    TileKind.SWITCH_BLOCK_OFF: bool,
    TileKind.SWITCH_BLOCK_ON: bool,
    TileKind.FLAME_JET: bool,
    TileKind.LOCK: LockColor,
    TileKind.LOCK_BLOCK: LockColor,
    TileKind.BRICKS: BrickColor,
    TileKind.FANCY_FLOOR: FancyColor,
    TileKind.PILLAR: FancyColor,
}

# Switches store only their kind; the on/off state is restored from the defaults below.
_SWITCH_KINDS = (TileKind.SWITCH, TileKind.SWITCH_BLOCK_OFF, TileKind.SWITCH_BLOCK_ON)


@dataclass(frozen=True)
class Tile:
    """A tile: its kind plus the variant that kind carries, if any."""

    kind: TileKind
    variant: Variant = None

    def __post_init__(self) -> None:
        expected = _VARIANT_TYPES.get(self.kind)
        if expected is None:
            if self.variant is not None:
                raise TypeError(f"{self.kind.name} takes no variant, got {self.variant!r}")
        elif not isinstance(self.variant, expected):
            raise TypeError(
                f"{self.kind.name} needs a {expected.__name__} variant, got {self.variant!r}"
            )

    def to_code(self) -> int:
        """The byte this tile is stored as."""
        if self.kind in _SWITCH_KINDS:
            return _SWITCH_CODES[self.kind]
        return _ENCODE[self]

    @classmethod
    def from_code(cls, code: int) -> Tile:
        """Decode a stored tile, raising ValueError for unknown codes."""
        try:
            return _DECODE[code]
        except KeyError:
            raise ValueError(f"unknown tile code: {code!r}") from None


def _code_table() -> list[tuple[int, Tile]]:
    plain = [
        (0, TileKind.EMPTY), (1, TileKind.DOOR), (2, TileKind.GRASS), (3, TileKind.DIRT),
        (4, TileKind.STONE), (5, TileKind.CLOUD), (6, TileKind.METAL), (7, TileKind.CHECKER),
        (11, TileKind.BRIDGE), (12, TileKind.ROPE), (13, TileKind.LADDER), (14, TileKind.VINE),
        (15, TileKind.STONE_BLOCK), (16, TileKind.GLASS), (17, TileKind.BLOCK),
        (36, TileKind.WOODEN_PLATFORM), (37, TileKind.METAL_PLATFORM),
        (38, TileKind.BRIGHT_STONE), (39, TileKind.LAVA), (40, TileKind.SAND),
        (41, TileKind.SHORT_GRASS), (42, TileKind.TALL_GRASS),
        (43, TileKind.DEAD_SHORT_GRASS), (44, TileKind.DEAD_TALL_GRASS),
        (52, TileKind.BUSH), (67, TileKind.WOOD), (68, TileKind.GRATE),
    ]
    table = [(code, Tile(kind)) for code, kind in plain]
    table += [
        (8, Tile(TileKind.CHECKER_BLOCK, CheckerBlockColor.CYAN)),
        (9, Tile(TileKind.CHECKER_BLOCK, CheckerBlockColor.ORANGE)),
        (10, Tile(TileKind.CHECKER_BLOCK, CheckerBlockColor.PURPLE)),
        (18, Tile(TileKind.SPIKES, TileDir.BOTTOM)),
        (49, Tile(TileKind.SPIKES, TileDir.LEFT)),
        (50, Tile(TileKind.SPIKES, TileDir.TOP)),
        (51, Tile(TileKind.SPIKES, TileDir.RIGHT)),
        (19, Tile(TileKind.SWITCH, False)),
        (20, Tile(TileKind.SWITCH_BLOCK_OFF, True)),
        (21, Tile(TileKind.SWITCH_BLOCK_ON, False)),
        (45, Tile(TileKind.BRICKS, BrickColor.GRAY)),
        (46, Tile(TileKind.BRICKS, BrickColor.TAN)),
        (47, Tile(TileKind.BRICKS, BrickColor.BLUE)),
        (48, Tile(TileKind.BRICKS, BrickColor.GREEN)),
        (53, Tile(TileKind.CANNON, TileDir.BOTTOM)),
        (54, Tile(TileKind.CANNON, TileDir.LEFT)),
        (55, Tile(TileKind.CANNON, TileDir.TOP)),
        (56, Tile(TileKind.CANNON, TileDir.RIGHT)),
        (57, Tile(TileKind.FLAME_JET, False)),
        (58, Tile(TileKind.FLAME_JET, True)),
    ]
    for offset, color in enumerate(LockColor):
        table.append((22 + 2 * offset, Tile(TileKind.LOCK, color)))
        table.append((23 + 2 * offset, Tile(TileKind.LOCK_BLOCK, color)))
    for offset, color in enumerate(FancyColor):
        table.append((59 + offset, Tile(TileKind.FANCY_FLOOR, color)))
        table.append((63 + offset, Tile(TileKind.PILLAR, color)))
    return table


_TABLE = _code_table()
_DECODE: dict[int, Tile] = dict(_TABLE)
_ENCODE: dict[Tile, int] = {tile: code for code, tile in _TABLE if tile.kind not in _SWITCH_KINDS}
_SWITCH_CODES: dict[TileKind, int] = {
    tile.kind: code for code, tile in _TABLE if tile.kind in _SWITCH_KINDS
}