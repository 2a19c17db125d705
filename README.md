# voxelcraft

A headless voxel world simulation. It generates a block world from
value noise in 16×16×16 regions, builds face meshes for each region,
casts rays against voxels, and moves a character with gravity and
collisions. Everything is plain Python data; drawing it is left to
whoever consumes that data.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Running

```
voxelcraft
voxelcraft --frames 300 --world-size 4
```

The `voxelcraft` command builds a `Game`, then steps it once per frame,
with no buttons pressed and no motion input, for `--frames` frames
(default 1200) in a world of `--world-size` regions per side (default 6).
When it finishes it prints the terrain generation time (`BGT`) and the
mesh generation time (`MGT`) in microseconds.

## Library use

```python
from voxelcraft.world import create_world
from voxelcraft.voxel import VoxelType
from voxelcraft.meshing import build_world_meshes
from voxelcraft.raycast import BoxType, get_voxel_raycast

world = create_world(6)                      # generated, corner region at the origin

print(world.get_voxel_type((0, 0, 0)))       # a ground-layer voxel, e.g. VoxelType.STONE
print(world.get_voxel_type((-1, 0, 0)))      # None: outside the loaded regions
world.set_voxel_type((0, 5, 0), VoxelType.WOOD_PLANKS)

render_infos = build_world_meshes(world)     # {(x, y, z): RegionRenderInfo}

hit = get_voxel_raycast(
    world,
    origin=(8.5, 40.0, 8.5),
    direction=(0.0, -40.0, 0.0),
    begin=(8.5, 40.0, 8.5),
    end=(8.5, 0.0, 8.5),
    box_transform=(0.0, 0.0, 0.0),
    box_type=BoxType.SELECTION,
)
if hit is not None:
    print(hit.voxel_world_pos, hit.box_raycast.normal)
```

Writing a voxel outside the loaded regions with `World.set_voxel_type`
raises `voxelcraft.world.OutOfWorldError`.

To drive the game frame by frame, create `voxelcraft.game.Game` and call
`Game.step(now, buttons_down, buttons_held)` with the time in
microseconds and `voxelcraft.input.Button` bit masks; it returns `False`
when HOME is pressed. Setting `Game.motion` to a
`voxelcraft.game.MotionInput` supplies joystick, nunchuk buttons and
accelerometer readings for walking, jumping and sprinting.

## Modules

- `voxelcraft.mathutil`: floor-style integer division and modulo, 32-byte alignment, easing, `lerpf`, 2D value noise (`get_noise_at`) and a microsecond clock.
- `voxelcraft.box`: axis-aligned `Box` (`contains`, `collides`) and `get_box_raycast`, returning a `BoxRaycast` or `None`.
- `voxelcraft.voxel`: `VoxelType`, `VoxelFace`, `REGION_SIZE` and conversions between world, region and local voxel positions.
- `voxelcraft.generation`: terrain rules (`get_voxel_type_at_position`) and `generate_region_voxels`.
- `voxelcraft.world`: `World`, a cube of regions from a corner region, and `create_world`.
- `voxelcraft.raycast`: `get_voxel_raycast` with `BoxType.SELECTION` or `BoxType.COLLISION`.
- `voxelcraft.logic`: `update_world`, which breaks a voxel on A and places planks on B.
- `voxelcraft.display_list`: `DisplayList` byte buffers and instruction size helpers.
- `voxelcraft.meshing`: face culling, quad vertices and `RegionRenderInfo` per region.
- `voxelcraft.input`: `Button` masks and the direction-pad, plus/minus and joystick vectors.
- `voxelcraft.camera`: `Camera` with yaw/pitch, field-of-view tween and projection/view matrices.
- `voxelcraft.character`: `Character` movement, sprinting, jumping, gravity and collision.
- `voxelcraft.selection`: `VoxelSelection` outline geometry and `selection_alpha`.
- `voxelcraft.text`, `voxelcraft.debug_ui`: bitmap-font quad layout and the `DebugUI` overlay lines.
- `voxelcraft.game`: `Game`, which ties one frame together, and `main`.

## What it does not do

- It opens no window and draws nothing: meshes, matrices, display lists
  and text vertices are computed but never shown.
- It reads no controller. The `voxelcraft` command runs with no input;
  input reaches the game only through `Game.step` and `Game.motion`.
- The world is a fixed cube of regions around the origin. Regions are
  not loaded or unloaded as the character moves, and meshes are not
  rebuilt after voxels are edited.
- Worlds are not saved to or loaded from disk.