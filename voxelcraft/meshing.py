"""Turning region voxels into batches of quads ready to be drawn."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from itertools import product
from typing import Dict, List, Optional, Sequence, Tuple

from .display_list import DisplayList
from .generation import VoxelArray
from .voxel import REGION_SIZE, VoxelFace, VoxelType
from .world import World

IVec3 = Tuple[int, int, int]
Vertex = Tuple[Tuple[int, int, int], Tuple[int, int]]

NUM_DISPLAY_LIST_ARRAYS = 3
SOLID_INDEX = 0
TRANSPARENT_INDEX = 1
DOUBLE_SIDED_INDEX = 2

NUM_SOLID_BUILDING_MESHES = 204
NUM_TRANSPARENT_BUILDING_MESHES = 204
NUM_TRANSPARENT_DOUBLE_SIDED_BUILDING_MESHES = 102

_QUADS = 0x80
REGION_VERTEX_FORMAT_INDEX = 5

_CROSS_TEX = 5


class MeshCategory(Enum):
    """How a voxel kind is drawn."""

    INVISIBLE = 0
    CUBE = 1
    TRANSPARENT_CUBE = 2
    CROSS = 3


@dataclass(frozen=True)
class VoxelMesh:
    """One quad-producing entry: a packed type byte and local voxel coordinates.

    For cube faces ``type`` is ``voxel_type * 8 + face``; for crosses it is
    the voxel type alone.
    """

    type: int
    x: int
    y: int
    z: int


@dataclass
class RegionRenderInfo:
    """Per-category batches of meshes and the display lists recorded from them."""

    batches: Tuple[List[Tuple[VoxelMesh, ...]], ...] = field(
        default_factory=lambda: tuple([] for _ in range(NUM_DISPLAY_LIST_ARRAYS))
    )
    display_lists: Tuple[List[DisplayList], ...] = field(
        default_factory=lambda: tuple([] for _ in range(NUM_DISPLAY_LIST_ARRAYS))
    )

    def _record(self, index: int, meshes: Sequence[VoxelMesh]) -> None:
        vertices = mesh_vertices(index, meshes)
        data = bytearray(struct.pack(">BH", _QUADS | REGION_VERTEX_FORMAT_INDEX, len(vertices)))
        for position, tex in vertices:
            data.extend(position)
            data.extend(tex)
        display_list = DisplayList()
        display_list.resize(len(data))
        display_list.write(bytes(data))
        self.batches[index].append(tuple(meshes))
        self.display_lists[index].append(display_list)


_CATEGORIES = {
    VoxelType.DEBUG: MeshCategory.CUBE,
    VoxelType.GRASS: MeshCategory.CUBE,
    VoxelType.STONE: MeshCategory.CUBE,
    VoxelType.DIRT: MeshCategory.CUBE,
    VoxelType.SAND: MeshCategory.CUBE,
    VoxelType.WOOD_PLANKS: MeshCategory.CUBE,
    VoxelType.STONE_SLAB_BOTH: MeshCategory.CUBE,
    VoxelType.WATER: MeshCategory.TRANSPARENT_CUBE,
    VoxelType.TALL_GRASS: MeshCategory.CROSS,
}


def get_voxel_mesh_category(voxel_type: int) -> MeshCategory:
    """The drawing category of a voxel kind; unknown kinds are invisible."""
    try:
        kind = VoxelType(voxel_type)
    except ValueError:
        return MeshCategory.INVISIBLE
    return _CATEGORIES.get(kind, MeshCategory.INVISIBLE)


def get_face_tex(voxel_type: int, face: int) -> int:
    """Texture column used for one face of a voxel kind."""
    if voxel_type == VoxelType.DEBUG:
        return 0
    if voxel_type == VoxelType.GRASS:
        if face == VoxelFace.TOP:
            return 0
        if face == VoxelFace.BOTTOM:
            return 2
        return 4
    if voxel_type == VoxelType.STONE:
        return 1
    if voxel_type == VoxelType.DIRT:
        return 2
    if voxel_type == VoxelType.SAND:
        return 6
    if voxel_type == VoxelType.WOOD_PLANKS:
        return 10
    if voxel_type == VoxelType.STONE_SLAB_BOTH:
        return 9 if face == VoxelFace.TOP else 8
    if voxel_type == VoxelType.WATER:
        return 7
    return 0


def _u8(value: int) -> int:
    return value & 0xFF


def _cube_face_vertices(mesh: VoxelMesh) -> List[Vertex]:
    voxel_type, face = divmod(mesh.type, 8)
    px, py, pz = _u8(mesh.x * 4), _u8(mesh.y * 4), _u8(mesh.z * 4)
    pox, poy, poz = _u8(px + 4), _u8(py + 4), _u8(pz + 4)
    tx = get_face_tex(voxel_type, face)
    tox = _u8(tx + 1)
    ty, toy = 0, 16

    if face == VoxelFace.FRONT:
        return [
            ((pox, poy, pz), (tx, ty)),
            ((pox, py, pz), (tx, toy)),
            ((pox, py, poz), (tox, toy)),
            ((pox, poy, poz), (tox, ty)),
        ]
    if face == VoxelFace.BACK:
        return [
            ((px, poy, pz), (tx, ty)),
            ((px, poy, poz), (tox, ty)),
            ((px, py, poz), (tox, toy)),
            ((px, py, pz), (tx, toy)),
        ]
    if face == VoxelFace.TOP:
        return [
            ((px, poy, poz), (tx, ty)),
            ((px, poy, pz), (tox, ty)),
            ((pox, poy, pz), (tox, toy)),
            ((pox, poy, poz), (tx, toy)),
        ]
    if face == VoxelFace.BOTTOM:
        return [
            ((px, py, poz), (tx, ty)),
            ((pox, py, poz), (tox, ty)),
            ((pox, py, pz), (tox, toy)),
            ((px, py, pz), (tx, toy)),
        ]
    if face == VoxelFace.RIGHT:
        return [
            ((pox, py, poz), (tx, toy)),
            ((px, py, poz), (tox, toy)),
            ((px, poy, poz), (tox, ty)),
            ((pox, poy, poz), (tx, ty)),
        ]
    if face == VoxelFace.LEFT:
        return [
            ((pox, py, pz), (tx, toy)),
            ((pox, poy, pz), (tx, ty)),
            ((px, poy, pz), (tox, ty)),
            ((px, py, pz), (tox, toy)),
        ]
    return []


def _cross_vertices(mesh: VoxelMesh) -> List[Vertex]:
    px, py, pz = _u8(mesh.x * 4), _u8(mesh.y * 4), _u8(mesh.z * 4)
    pox, poy, poz = _u8(px + 4), _u8(py + 4), _u8(pz + 4)
    tx = _CROSS_TEX
    tox = tx + 1
    ty, toy = 0, 16
    return [
        ((px, py, pz), (tx, toy)),
        ((pox, py, poz), (tox, toy)),
        ((pox, poy, poz), (tox, ty)),
        ((px, poy, pz), (tx, ty)),
        ((pox, py, pz), (tx, toy)),
        ((px, py, poz), (tox, toy)),
        ((px, poy, poz), (tox, ty)),
        ((pox, poy, pz), (tx, ty)),
    ]


def mesh_vertices(display_list_array_index: int, meshes: Sequence[VoxelMesh]) -> List[Vertex]:
    """Quad vertices, as (position, texture coordinate) pairs, for a batch of meshes."""
    if display_list_array_index in (SOLID_INDEX, TRANSPARENT_INDEX):
        build = _cube_face_vertices
    elif display_list_array_index == DOUBLE_SIDED_INDEX:
        build = _cross_vertices
    else:
        raise ValueError(f"no display list array {display_list_array_index}")
    return [vertex for mesh in meshes for vertex in build(mesh)]


def _neighbor_type(
    voxel_types: VoxelArray, neighbor_types: Optional[VoxelArray], nx: int, ny: int, nz: int
) -> Optional[int]:
    if all(0 <= c < REGION_SIZE for c in (nx, ny, nz)):
        return voxel_types[nx][ny][nz]
    if neighbor_types is None:
        return None
    return neighbor_types[nx % REGION_SIZE][ny % REGION_SIZE][nz % REGION_SIZE]


def _is_hidden(category: MeshCategory, neighbor_category: MeshCategory) -> bool:
    if category is MeshCategory.CUBE:
        return neighbor_category is MeshCategory.CUBE
    if category is MeshCategory.TRANSPARENT_CUBE:
        return neighbor_category in (MeshCategory.CUBE, MeshCategory.TRANSPARENT_CUBE)
    return False


def generate_region_visuals(
    voxel_types: VoxelArray,
    front: Optional[VoxelArray],
    back: Optional[VoxelArray],
    top: Optional[VoxelArray],
    bottom: Optional[VoxelArray],
    right: Optional[VoxelArray],
    left: Optional[VoxelArray],
) -> RegionRenderInfo:
    """Build the mesh batches of one region.

    Neighbor regions decide whether faces on the region's border are shown;
    a missing neighbor hides them.
    """
    sides = (
        (VoxelFace.RIGHT, right, (0, 0, 1)),
        (VoxelFace.LEFT, left, (0, 0, -1)),
        (VoxelFace.TOP, top, (0, 1, 0)),
        (VoxelFace.BOTTOM, bottom, (0, -1, 0)),
        (VoxelFace.FRONT, front, (1, 0, 0)),
        (VoxelFace.BACK, back, (-1, 0, 0)),
    )
    info = RegionRenderInfo()
    solid: List[VoxelMesh] = []
    transparent: List[VoxelMesh] = []
    cross: List[VoxelMesh] = []

    for x, y, z in product(range(REGION_SIZE), repeat=3):
        voxel_type = voxel_types[x][y][z]
        category = get_voxel_mesh_category(voxel_type)

        if category in (MeshCategory.CUBE, MeshCategory.TRANSPARENT_CUBE):
            target = solid if category is MeshCategory.CUBE else transparent
            for face, neighbor_types, (dx, dy, dz) in sides:
                neighbor = _neighbor_type(voxel_types, neighbor_types, x + dx, y + dy, z + dz)
                if neighbor is None:
                    continue
                if _is_hidden(category, get_voxel_mesh_category(neighbor)):
                    continue
                target.append(VoxelMesh(int(voxel_type) * 8 + int(face), x, y, z))
        elif category is MeshCategory.CROSS:
            cross.append(VoxelMesh(int(voxel_type), x, y, z))

        if len(solid) >= NUM_SOLID_BUILDING_MESHES - 6:
            info._record(SOLID_INDEX, solid)
            solid = []
        if len(transparent) >= NUM_TRANSPARENT_BUILDING_MESHES - 6:
            info._record(TRANSPARENT_INDEX, transparent)
            transparent = []
        if len(cross) >= NUM_TRANSPARENT_DOUBLE_SIDED_BUILDING_MESHES - 1:
            info._record(DOUBLE_SIDED_INDEX, cross)
            cross = []

    for index, remaining in ((SOLID_INDEX, solid), (TRANSPARENT_INDEX, transparent), (DOUBLE_SIDED_INDEX, cross)):
        if remaining:
            info._record(index, remaining)
    return info


def build_world_meshes(world: World) -> Dict[IVec3, RegionRenderInfo]:
    """Mesh every region of a generated world, keyed by relative region position."""
    infos: Dict[IVec3, RegionRenderInfo] = {}
    for x, y, z in product(range(world.world_size), repeat=3):
        voxels = world.region_voxels((x, y, z))
        if voxels is None:
            raise ValueError(f"region {(x, y, z)} has not been generated")
        infos[x, y, z] = generate_region_visuals(
            voxels,
            world.region_voxels((x + 1, y, z)),
            world.region_voxels((x - 1, y, z)),
            world.region_voxels((x, y + 1, z)),
            world.region_voxels((x, y - 1, z)),
            world.region_voxels((x, y, z + 1)),
            world.region_voxels((x, y, z - 1)),
        )
    return infos