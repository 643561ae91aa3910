# platformer

This package holds the game logic of a 2D tile-based platformer. It has no graphics.
It covers the following:

- tiles and the one-byte codes they are stored as
- per-tile data: name, texture, texture connections, collision and hit behaviour
- levels that can be queried, hit, bumped, switched and unlocked
- entity kinds with their save codes, update order and editor geometry
- a few self-contained hazard entities: cannonballs, fireballs, flame jets, launchers and danger clouds

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `platformer.things` holds the geometry types and the fixed things of a level.
  - `Vec2` is an immutable 2D vector. It works with vector and scalar arithmetic and has `floor()` and `ceil()`.
  - `Rect` is a rectangle. It has `offset`, `overlaps`, `combine_with`, `center`, `point` and `size`.
  - `Sign` holds exactly four lines of text.
  - `Door` pairs a `DoorKind` with a position and a destination. `DoorKind.from_code()` decodes a stored door kind.
- `platformer.tiles` defines `Tile` together with `TileKind` and the variant enums:
  - `TileDir`
  - `LockColor`
  - `CheckerBlockColor`
  - `BrickColor`
  - `FancyColor`

  `Tile.to_code()` and `Tile.from_code()` convert a tile to its stored byte and back. `LockColor.color(timer)` gives the RGBA colour of a lock, and the rainbow lock cycles with the timer.
- `platformer.tile_data` provides `TileDataManager`. Its `data(tile)` method returns a `TileData`, which holds a name, a `TileTexture` (or none) and a `TileCollision`. Tiles that are not known get an error tile. The module also has:
  - `TileTexture.start_texture(timer)`, which picks the animation frame
  - `TileCollision.hit_for()`, which says what a soft or hard hit does
  - `TileRenderLayer.color()`
  - `tile_rect(texture)`, which gives the atlas rectangle of a texture index
- `platformer.level` provides `Level` and `update_tile_render_data`.
  - `Level.tile_at_pos()` looks up a tile by world position. Anything outside the grid counts as empty.
  - `Level.hit_tile_at_pos()` bumps or replaces a tile. When a stone block breaks, it returns the block's centre.
  - `Level.remove_lock_blocks()` clears a colour and returns the centres of the foreground tiles it removed.
  - `Level.fixed_update()` applies a pending switch toggle.
  - `Level.update_bumped_tiles()` and `Level.bumped_tile_render_data()` animate bumped tiles.
  - `Level.update_if_should()` rebuilds the `RenderLayers`.
  - `update_tile_render_data` works out connected textures as `TileDrawKind` offsets.
- `platformer.kinds` provides `EntityKind` together with `EntityType`, `EntityId`, `CrateKind`, `LauncherKind`, `PowerupKind`, `HeadPowerup` and `FeetPowerup`.
  - `to_code()` and `from_code()` handle save codes. Kinds that cannot be placed encode as 255.
  - `sort_order()` gives the update order, and kinds compare by it.
  - `tile_offset()`, `object_selector_offset()` and `object_selector_size()` give the editor geometry.
- `platformer.entities` has the `Entity` base class and these hazard entities:
  - `Cannonball`
  - `DangerCloud`
  - `Fireball`
  - `FlameJet`
  - `Launcher`

  `Launcher.physics_update(timer)` returns a `SpawnRequest` when it fires, and the caller adds that entity to the scene.

## Example

```python
from platformer.tiles import Tile
from platformer.tile_data import TileDataManager

manager = TileDataManager()
tile = Tile.from_code(2)
print(manager.data(tile).name)                  # Grass
print(manager.data(tile).collision.is_solid())  # True
```

Physics runs at a fixed 120 steps per second. Each entity's `physics_update` advances it by exactly one step.

## What this package does not do

The package is logic only. It does not provide any of the following:

- drawing, windows or input
- a player
- a scene or camera
- particles
- a game loop
- loading or saving of level files

Of the entities, only the hazards listed above have behaviour. Crates, keys, chips, lives, powerups, frogs, goats, armadillos and explosions exist only as `EntityKind` values, with their codes and editor geometry.