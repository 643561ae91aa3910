import pytest

from platformer.things import Rect
from platformer.tiles import FancyColor, BrickColor, LockColor, Tile, TileDir, TileKind
from platformer.tile_data import (
    CollisionKind,
    ConnectionAxis,
    ConnectionMode,
    HitAction,
    TileCollision,
    TileData,
    TileDataManager,
    TileHit,
    TileHitKind,
    TileRenderLayer,
    TileTexture,
    TileTextureConnection,
    TileTextureConnectionKind,
    tile_rect,
)


@pytest.fixture(scope="module")
def manager():
    return TileDataManager()


def all_tiles():
    tiles = []
    for code in range(256):
        try:
            tiles.append(Tile.from_code(code))
        except ValueError:
            pass
    tiles += [
        Tile(TileKind.SWITCH, True),
        Tile(TileKind.SWITCH_BLOCK_OFF, False),
        Tile(TileKind.SWITCH_BLOCK_ON, True),
    ]
    return tiles


def test_every_stored_tile_has_data(manager):
    for tile in all_tiles():
        assert manager.data(tile) is not manager.error, tile


def test_error_tile_name(manager):
    assert manager.error.name == "Error!"
    assert not manager.error.collision.is_solid()


def test_empty_has_no_texture(manager):
    data = manager.data(Tile(TileKind.EMPTY))
    assert data.name == "Empty"
    assert data.texture is None
    assert data.collision.kind is CollisionKind.NONE


def test_names_follow_variants(manager):
    assert manager.data(Tile(TileKind.SPIKES, TileDir.BOTTOM)).name == "Bottom Spikes"
    assert manager.data(Tile(TileKind.CANNON, TileDir.LEFT)).name == "Left Cannon"
    assert manager.data(Tile(TileKind.LOCK_BLOCK, LockColor.RED)).name == "Red Lock Block"
    assert manager.data(Tile(TileKind.FANCY_FLOOR, FancyColor.BLUE)).name == "Blue fancy floor"
    assert manager.data(Tile(TileKind.BRICKS, BrickColor.GRAY)).name == "Gray bricks"


def test_collision_kinds(manager):
    assert manager.data(Tile(TileKind.STONE)).collision.is_solid()
    assert manager.data(Tile(TileKind.BRIDGE)).collision.is_platform()
    assert manager.data(Tile(TileKind.LADDER)).collision.is_ladder()
    assert manager.data(Tile(TileKind.GRATE)).collision.is_ladder()
    assert not manager.data(Tile(TileKind.LAVA)).collision.is_solid_or_platform()
    assert manager.data(Tile(TileKind.WOODEN_PLATFORM)).collision.is_solid_or_platform()


def test_switch_blocks_solid_only_when_active(manager):
    assert not manager.data(Tile(TileKind.SWITCH_BLOCK_OFF, False)).collision.is_solid()
    assert manager.data(Tile(TileKind.SWITCH_BLOCK_OFF, True)).collision.is_solid()
    assert not manager.data(Tile(TileKind.SWITCH_BLOCK_ON, False)).collision.is_solid()
    assert manager.data(Tile(TileKind.SWITCH_BLOCK_ON, True)).collision.is_solid()


def test_stone_block_breaks_only_on_hard_hit(manager):
    collision = manager.data(Tile(TileKind.STONE_BLOCK)).collision
    assert collision.hit_for(TileHitKind.SOFT).action is HitAction.NONE
    hard = collision.hit_for(TileHitKind.HARD)
    assert hard.action is HitAction.REPLACE
    assert hard.new == Tile(TileKind.EMPTY)


def test_switch_bumps(manager):
    collision = manager.data(Tile(TileKind.SWITCH, False)).collision
    assert collision.hit_for(TileHitKind.SOFT).action is HitAction.BUMP
    assert collision.hit_for(TileHitKind.HARD).action is HitAction.BUMP


def test_non_solid_hit_does_nothing():
    assert TileCollision(CollisionKind.LADDER).hit_for(TileHitKind.HARD).action is HitAction.NONE


def test_solid_default():
    assert TileCollision.solid_default(True).hit_soft.action is HitAction.BUMP
    assert TileCollision.solid_default(False).hit_hard.action is HitAction.NONE


def test_replace_hit_needs_tile():
    with pytest.raises(ValueError):
        TileHit(HitAction.REPLACE)
    with pytest.raises(ValueError):
        TileHit(HitAction.BUMP, Tile(TileKind.EMPTY))


def test_connection_only(manager):
    grass = Tile(TileKind.GRASS)
    connection = manager.data(grass).texture.connection
    assert connection.axis is ConnectionAxis.BOTH
    assert connection.kind.connects(grass, grass)
    assert connection.kind.connects(grass, Tile(TileKind.DIRT))
    assert not connection.kind.connects(grass, Tile(TileKind.STONE))


def test_connection_all_but(manager):
    cannon = Tile(TileKind.CANNON, TileDir.TOP)
    connection = manager.data(cannon).texture.connection
    assert connection.axis is ConnectionAxis.HORIZONTAL
    assert connection.kind.mode is ConnectionMode.ALL_BUT
    assert connection.kind.connects(cannon, Tile(TileKind.STONE))
    assert not connection.kind.connects(cannon, Tile(TileKind.EMPTY))
    side = manager.data(Tile(TileKind.CANNON, TileDir.RIGHT)).texture.connection
    assert side.axis is ConnectionAxis.VERTICAL


def test_connection_none_only_same_tile():
    kind = TileTextureConnectionKind()
    stone = Tile(TileKind.STONE)
    assert kind.connects(stone, stone)
    assert not kind.connects(stone, Tile(TileKind.METAL))


def test_fixed_texture_ignores_timer():
    texture = TileTexture.fixed(7, TileTextureConnection(), False)
    assert texture.start_texture(0.0) == 7
    assert texture.start_texture(123.4) == 7
    assert not texture.is_animated


def test_lava_animation(manager):
    texture = manager.data(Tile(TileKind.LAVA)).texture
    assert texture.frames == (82, 98, 114, 130, 146, 162, 178, 194)
    assert texture.start_texture(0.0) == 82
    assert texture.start_texture(0.3) == 98
    for step in range(200):
        assert texture.start_texture(step * 0.037) in texture.frames


def test_rainbow_lock_animation(manager):
    texture = manager.data(Tile(TileKind.LOCK, LockColor.RAINBOW)).texture
    assert texture.frames == (32, 33, 34, 35)
    assert texture.start_texture(0.0) == 32


def test_animated_texture_validation():
    with pytest.raises(ValueError):
        TileTexture.animated([], 0.1, TileTextureConnection(), False)
    with pytest.raises(ValueError):
        TileTexture.animated([1, 2], 0.0, TileTextureConnection(), False)


def test_new_default():
    data = TileData.new_default("Switch", 16, True)
    assert data.texture.start_texture(0.0) == 16
    assert data.texture.connection.axis is ConnectionAxis.NONE
    assert data.collision.is_solid()
    assert data.collision.hit_soft.action is HitAction.BUMP


def test_layer_colors():
    assert TileRenderLayer.FOREGROUND.color() == (255, 255, 255, 255)
    assert TileRenderLayer.FOREGROUND_TRANSPARENT.color() == (255, 255, 255, 64)
    assert TileRenderLayer.BACKGROUND.color() == (150, 150, 150, 255)


def test_tile_rect_origin():
    assert tile_rect(0) == Rect(0.0, 0.0, 16.0, 16.0)


def test_tile_rect_round_trip():
    for texture in range(400):
        rect = tile_rect(texture)
        assert rect.size().x == 16.0 and rect.size().y == 16.0
        assert int(rect.x // 16) + int(rect.y // 16) * 16 == texture