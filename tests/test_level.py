import pytest

from platformer.level import (
    BumpedTile,
    Level,
    TileDrawKind,
    tile_pos,
    update_tile_render_data,
)
from platformer.things import Vec2
from platformer.tile_data import TileDataManager, TileHitKind
from platformer.tiles import BrickColor, LockColor, Tile, TileKind

EMPTY = Tile(TileKind.EMPTY)
STONE = Tile(TileKind.STONE)
MANAGER = TileDataManager()


def make_level(width, height, tiles, tiles_bg=None):
    return Level(
        (0, 0, 0, 255), width, height, tiles,
        tiles_bg if tiles_bg is not None else [EMPTY] * (width * height),
        Vec2(), Vec2(), [], [], [], {}, MANAGER,
    )


def centre(index, width):
    return tile_pos(index, width) + 8.0


def test_tile_pos_round_trip():
    width = 4
    for index in range(12):
        pos = tile_pos(index, width)
        assert int(pos.y / 16) * width + int(pos.x / 16) == index


def test_tile_at_pos_inside_and_outside():
    tiles = [EMPTY] * 6
    tiles[4] = STONE
    level = make_level(3, 2, tiles)
    assert level.tile_at_pos(centre(4, 3)) == STONE
    assert level.tile_at_pos(centre(0, 3)) == EMPTY
    assert level.tile_at_pos(Vec2(-1.0, 8.0)) == EMPTY
    assert level.tile_at_pos(Vec2(8.0, 1000.0)) == EMPTY


def test_remove_lock_blocks_only_removes_that_colour():
    red_lock = Tile(TileKind.LOCK, LockColor.RED)
    red_block = Tile(TileKind.LOCK_BLOCK, LockColor.RED)
    green_block = Tile(TileKind.LOCK_BLOCK, LockColor.GREEN)
    tiles = [red_lock, red_block, green_block, EMPTY]
    bg = [red_block, EMPTY, EMPTY, EMPTY]
    level = make_level(2, 2, tiles, bg)
    assert not level.lock_destroyed(LockColor.RED)

    removed = level.remove_lock_blocks(LockColor.RED)

    assert level.lock_destroyed(LockColor.RED)
    assert not level.lock_destroyed(LockColor.GREEN)
    assert level.tiles == [EMPTY, EMPTY, green_block, EMPTY]
    assert level.tiles_bg == [EMPTY] * 4
    assert removed == [centre(0, 2), centre(1, 2)]


def test_hard_hit_breaks_stone_block():
    block = Tile(TileKind.STONE_BLOCK)
    tiles = [EMPTY, block, EMPTY, EMPTY]
    level = make_level(2, 2, tiles)
    at = centre(1, 2)
    assert level.hit_tile_at_pos(at, TileHitKind.SOFT) is None
    assert level.tile_at_pos(at) == block
    assert level.hit_tile_at_pos(at, TileHitKind.HARD) == at
    assert level.tile_at_pos(at) == EMPTY


def test_hit_outside_grid_does_nothing():
    level = make_level(1, 1, [Tile(TileKind.STONE_BLOCK)])
    assert level.hit_tile_at_pos(Vec2(-4.0, 4.0), TileHitKind.HARD) is None
    assert level.tiles == [Tile(TileKind.STONE_BLOCK)]


def test_switch_bump_and_toggle():
    switch = Tile(TileKind.SWITCH, False)
    off_block = Tile(TileKind.SWITCH_BLOCK_OFF, True)
    on_block = Tile(TileKind.SWITCH_BLOCK_ON, False)
    level = make_level(3, 1, [switch, off_block, on_block], [on_block, EMPTY, EMPTY])

    level.hit_tile_at_pos(centre(0, 3), TileHitKind.SOFT)
    level.hit_tile_at_pos(centre(0, 3), TileHitKind.SOFT)

    bumped = level.bumped_tile_render_data()
    assert [b.tile for b in bumped] == [Tile(TileKind.SWITCH, True)]
    assert level.tiles[0] == switch

    level.fixed_update()
    assert level.tiles == [
        Tile(TileKind.SWITCH, True),
        Tile(TileKind.SWITCH_BLOCK_OFF, False),
        Tile(TileKind.SWITCH_BLOCK_ON, True),
    ]
    assert level.tiles_bg[0] == Tile(TileKind.SWITCH_BLOCK_ON, True)


def test_bumped_tile_expires():
    level = make_level(1, 1, [Tile(TileKind.SWITCH, False)])
    level.hit_tile_at_pos(Vec2(8.0, 8.0), TileHitKind.SOFT)
    level.update_if_should()
    level.update_bumped_tiles(0.01)
    assert len(level.bumped_tiles) == 1
    assert level.bumped_tile_render_data()[0].pos.y < tile_pos(0, 1).y
    level.update_bumped_tiles(1.0)
    assert level.bumped_tiles == []
    assert level.update_if_should() is True


def test_update_if_should_runs_once():
    level = make_level(1, 1, [STONE])
    assert level.update_if_should() is True
    assert [d.tile for d in level.layers.below] == [STONE]
    assert level.update_if_should() is False


def test_render_layers_sort_tiles():
    short_grass = Tile(TileKind.SHORT_GRASS)
    tiles = [STONE, short_grass, EMPTY]
    bg = [EMPTY, EMPTY, STONE]
    layers = update_tile_render_data(tiles, bg, 3, 1, MANAGER)
    assert [d.tile for d in layers.below] == [STONE]
    assert [d.tile for d in layers.above] == [short_grass]
    assert [d.pos for d in layers.background] == [tile_pos(2, 3)]


def test_bumped_tiles_left_out_of_foreground():
    tiles = [STONE, STONE]
    layers = update_tile_render_data(tiles, tiles, 2, 1, MANAGER, [BumpedTile(STONE, 0)])
    assert [d.pos for d in layers.below] == [tile_pos(1, 2)]
    assert len(layers.background) == 2


def test_full_block_connects_everywhere():
    layers = update_tile_render_data([STONE] * 9, [EMPTY] * 9, 3, 3, MANAGER)
    kinds = {d.draw_kind for d in layers.below}
    assert kinds == {TileDrawKind.quarters(4, 4, 4, 4)}


def test_isolated_block_connects_nowhere():
    tiles = [EMPTY] * 9
    tiles[4] = STONE
    layers = update_tile_render_data(tiles, [EMPTY] * 9, 3, 3, MANAGER)
    assert [d.draw_kind for d in layers.below] == [TileDrawKind.quarters(0, 0, 0, 0)]


def test_horizontal_connection_edges():
    bricks = Tile(TileKind.BRICKS, BrickColor.GRAY)
    lone = update_tile_render_data([EMPTY, bricks, EMPTY], [EMPTY] * 3, 3, 1, MANAGER)
    row = update_tile_render_data([bricks] * 3, [EMPTY] * 3, 3, 1, MANAGER)
    assert lone.below[0].draw_kind == TileDrawKind.single(0)
    assert {d.draw_kind for d in row.below} == {TileDrawKind.single(2)}


def test_draw_kind_rejects_wrong_size():
    with pytest.raises(ValueError):
        TileDrawKind((1, 2))


def test_set_checkpoint():
    level = make_level(1, 1, [EMPTY])
    assert level.checkpoint is None
    level.set_checkpoint(2)
    assert level.checkpoint == 2