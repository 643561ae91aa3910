"""A playable level: tile grids, lock and switch state, bumped tiles and render data."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from platformer.things import Door, Sign, Vec2
from platformer.tile_data import (
    ConnectionAxis,
    HitAction,
    TileDataManager,
    TileHitKind,
    TileTextureConnectionKind,
)
from platformer.tiles import LockColor, Tile, TileKind

TILE_SIZE = 16.0
_BUMP_SPEED = 5.0
_BUMP_ARC = 0.9
_BUMP_DONE = 1.0 / _BUMP_ARC
_EMPTY = Tile(TileKind.EMPTY)


@dataclass(frozen=True)
class TileDrawKind:
    """Texture offsets from a tile's start texture: one whole, or four quarters."""

    offsets: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "offsets", tuple(self.offsets))
        if len(self.offsets) not in (1, 4):
            raise ValueError("a draw kind holds one offset or four quarter offsets")

    @classmethod
    def single(cls, offset: int) -> TileDrawKind:
        return cls((offset,))

    @classmethod
    def quarters(cls, tl: int, tr: int, bl: int, br: int) -> TileDrawKind:
        return cls((tl, tr, bl, br))

    @property
    def is_single(self) -> bool:
        return len(self.offsets) == 1


@dataclass(frozen=True)
class TileRenderData:
    tile: Tile
    draw_kind: TileDrawKind
    pos: Vec2


@dataclass
class BumpedTile:
    """A tile bouncing after being hit; it is drawn separately until the bounce ends."""

    tile: Tile
    index: int
    timer: float = 0.0


@dataclass
class RenderLayers:
    below: list[TileRenderData] = field(default_factory=list)
    above: list[TileRenderData] = field(default_factory=list)
    background: list[TileRenderData] = field(default_factory=list)


def tile_pos(index: int, width: int) -> Vec2:
    """The world position of the tile at a grid index."""
    return Vec2((index % width) * TILE_SIZE, (index // width) * TILE_SIZE)


def _render_layer(
    tiles: list[Tile],
    width: int,
    height: int,
    tile_data: TileDataManager,
    skip: set[int],
) -> Iterable[tuple[TileRenderData, bool]]:
    def connects(tile: Tile, index: int, dx: int, dy: int, kind: TileTextureConnectionKind) -> bool:
        x = index % width + dx
        y = index // width + dy
        if x < 0 or x >= width or y < 0 or y >= height:
            return True
        neighbour = y * width + x
        return neighbour < len(tiles) and kind.connects(tile, tiles[neighbour])

    def single(tile, index, first, second, kind) -> TileDrawKind:
        a = connects(tile, index, *first, kind)
        b = connects(tile, index, *second, kind)
        return TileDrawKind.single({(False, False): 0, (False, True): 1,
                                    (True, True): 2, (True, False): 3}[(a, b)])

    def quarter(horz: bool, vert: bool, corner: bool) -> int:
        if not horz:
            return 1 if vert else 0
        if not vert:
            return 2
        return 4 if corner else 3

    def both(tile, index, kind) -> TileDrawKind:
        n = connects(tile, index, 0, -1, kind)
        e = connects(tile, index, 1, 0, kind)
        s = connects(tile, index, 0, 1, kind)
        w = connects(tile, index, -1, 0, kind)
        ne = connects(tile, index, 1, -1, kind)
        nw = connects(tile, index, -1, -1, kind)
        se = connects(tile, index, 1, 1, kind)
        sw = connects(tile, index, -1, 1, kind)
        return TileDrawKind.quarters(
            quarter(n, w, nw), quarter(n, e, ne), quarter(s, w, sw), quarter(s, e, se)
        )

    for index, tile in enumerate(tiles):
        texture = tile_data.data(tile).texture
        if texture is None or index in skip:
            continue
        connection = texture.connection
        if connection.axis is ConnectionAxis.HORIZONTAL:
            draw_kind = single(tile, index, (-1, 0), (1, 0), connection.kind)
        elif connection.axis is ConnectionAxis.VERTICAL:
            draw_kind = single(tile, index, (0, -1), (0, 1), connection.kind)
        elif connection.axis is ConnectionAxis.BOTH:
            draw_kind = both(tile, index, connection.kind)
        else:
            draw_kind = TileDrawKind.single(0)
        yield TileRenderData(tile, draw_kind, tile_pos(index, width)), texture.above


def update_tile_render_data(
    tiles: list[Tile],
    tiles_bg: list[Tile],
    width: int,
    height: int,
    tile_data: TileDataManager,
    bumped_tiles: Iterable[BumpedTile] | None = None,
) -> RenderLayers:
    """Work out what to draw for each tile, leaving out tiles that are being bumped."""
    skip = {b.index for b in bumped_tiles} if bumped_tiles is not None else set()
    layers = RenderLayers()
    for data, above in _render_layer(tiles, width, height, tile_data, skip):
        (layers.above if above else layers.below).append(data)
    for data, _ in _render_layer(tiles_bg, width, height, tile_data, set()):
        layers.background.append(data)
    return layers


class Level:
    """The tiles and fixed things of one level while it is being played."""

    def __init__(
        self,
        bg_col: tuple[int, int, int, int],
        width: int,
        height: int,
        tiles: Iterable[Tile],
        tiles_bg: Iterable[Tile],
        spawn: Vec2,
        finish: Vec2,
        checkpoints: Iterable[Vec2],
        signs: Iterable[Sign],
        doors: Iterable[Door],
        entity_spawns: Mapping[Any, Any],
        tile_data: TileDataManager | None = None,
    ) -> None:
        self.bg_col = bg_col
        self.width = width
        self.height = height
        self.tiles = list(tiles)
        self.tiles_bg = list(tiles_bg)
        self.spawn = spawn
        self.finish = finish
        self.checkpoints = list(checkpoints)
        self.signs = list(signs)
        self.doors = list(doors)
        self.entity_spawns = dict(entity_spawns)
        self.tile_data = tile_data if tile_data is not None else TileDataManager()

        self.bumped_tiles: list[BumpedTile] = []
        self.checkpoint: int | None = None
        self.layers = RenderLayers()
        self._new_on_off_state: bool | None = None
        self._locks_destroyed: set[LockColor] = set()
        self._should_update_render_data = True

    def set_checkpoint(self, index: int) -> None:
        self.checkpoint = index

    def lock_destroyed(self, color: LockColor) -> bool:
        return color in self._locks_destroyed

    def remove_lock_blocks(self, color: LockColor) -> list[Vec2]:
        """Clear every lock and lock block of a colour.

        Returns the centres of the foreground tiles removed, where lock particles belong.
        """
        self._locks_destroyed.add(color)
        targets = {Tile(TileKind.LOCK, color), Tile(TileKind.LOCK_BLOCK, color)}
        removed: list[Vec2] = []
        for layer, foreground in ((self.tiles, True), (self.tiles_bg, False)):
            for index, tile in enumerate(layer):
                if tile in targets:
                    if foreground:
                        removed.append(tile_pos(index, self.width) + TILE_SIZE / 2.0)
                    layer[index] = _EMPTY
                    self._should_update_render_data = True
        return removed

    def _bump_tile(self, index: int) -> None:
        tile = self.tiles[index]
        if tile.kind is TileKind.SWITCH:
            self._new_on_off_state = not tile.variant
            tile = Tile(TileKind.SWITCH, not tile.variant)
        self.bumped_tiles.append(BumpedTile(tile, index))

    def hit_tile_at_pos(self, pos: Vec2, hit_kind: TileHitKind) -> Vec2 | None:
        """Hit the tile at a world position.

        Returns the centre of a broken stone block, where its particles belong, or None.
        """
        grid = pos / TILE_SIZE
        if grid.x < 0 or grid.x >= self.width or grid.y < 0 or grid.y >= self.height:
            return None
        index = math.floor(grid.y) * self.width + math.floor(grid.x)
        collision = self.tile_data.data(self.tiles[index]).collision
        if not collision.is_solid():
            return None
        hit = collision.hit_for(hit_kind)
        if hit.action is HitAction.BUMP:
            self.bumped_tiles = [b for b in self.bumped_tiles if b.index != index]
            self._bump_tile(index)
            self._should_update_render_data = True
        elif hit.action is HitAction.REPLACE:
            broken = None
            if self.tiles[index] == Tile(TileKind.STONE_BLOCK):
                broken = grid.floor() * TILE_SIZE + TILE_SIZE / 2.0
            self.tiles[index] = hit.new
            self._should_update_render_data = True
            return broken
        return None

    def bumped_tile_render_data(self) -> list[TileRenderData]:
        """Render data for the bumped tiles, raised along their bounce."""
        return [
            TileRenderData(
                bumped.tile,
                TileDrawKind.single(0),
                tile_pos(bumped.index, self.width)
                - Vec2(0.0, math.sin(bumped.timer * math.pi * _BUMP_ARC)) * 8.0,
            )
            for bumped in self.bumped_tiles
        ]

    def update_bumped_tiles(self, deltatime: float) -> None:
        for bumped in self.bumped_tiles:
            bumped.timer += deltatime * _BUMP_SPEED
        remaining = [b for b in self.bumped_tiles if b.timer < _BUMP_DONE]
        if len(remaining) != len(self.bumped_tiles):
            self._should_update_render_data = True
        self.bumped_tiles = remaining

    def tile_at_pos(self, pos: Vec2) -> Tile:
        """The tile at a world position; anything outside the grid is empty."""
        grid = (pos / TILE_SIZE).floor()
        if grid.x < 0 or grid.x >= self.width or grid.y < 0 or grid.y >= self.height:
            return _EMPTY
        return self.tiles[int(grid.y) * self.width + int(grid.x)]

    def fixed_update(self) -> None:
        """Apply a pending switch toggle to every switch and switch block."""
        if self._new_on_off_state is None:
            return
        enabled = self._new_on_off_state
        self._new_on_off_state = None
        for layer in (self.tiles, self.tiles_bg):
            for index, tile in enumerate(layer):
                if tile.kind in (TileKind.SWITCH, TileKind.SWITCH_BLOCK_ON):
                    layer[index] = Tile(tile.kind, enabled)
                elif tile.kind is TileKind.SWITCH_BLOCK_OFF:
                    layer[index] = Tile(tile.kind, not enabled)

    def update_if_should(self) -> bool:
        """Rebuild the render layers if the tiles changed; True if they were rebuilt."""
        if not self._should_update_render_data:
            return False
        self.layers = update_tile_render_data(
            self.tiles, self.tiles_bg, self.width, self.height, self.tile_data, self.bumped_tiles
        )
        self._should_update_render_data = False
        return True