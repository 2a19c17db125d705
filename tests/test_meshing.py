import pytest

from voxelcraft.meshing import (
    DOUBLE_SIDED_INDEX,
    NUM_SOLID_BUILDING_MESHES,
    SOLID_INDEX,
    TRANSPARENT_INDEX,
    MeshCategory,
    RegionRenderInfo,
    VoxelMesh,
    build_world_meshes,
    generate_region_visuals,
    get_face_tex,
    get_voxel_mesh_category,
    mesh_vertices,
)
from voxelcraft.voxel import REGION_SIZE, VoxelFace, VoxelType
from voxelcraft.world import World, create_world


def filled(voxel_type):
    return [[[voxel_type] * REGION_SIZE for _ in range(REGION_SIZE)] for _ in range(REGION_SIZE)]


def all_meshes(info, index):
    return [mesh for batch in info.batches[index] for mesh in batch]


def visuals(voxels, neighbor=None):
    return generate_region_visuals(voxels, neighbor, neighbor, neighbor, neighbor, neighbor, neighbor)


@pytest.mark.parametrize(
    "voxel_type,category",
    [
        (VoxelType.AIR, MeshCategory.INVISIBLE),
        (VoxelType.STONE, MeshCategory.CUBE),
        (VoxelType.STONE_SLAB_BOTH, MeshCategory.CUBE),
        (VoxelType.WATER, MeshCategory.TRANSPARENT_CUBE),
        (VoxelType.TALL_GRASS, MeshCategory.CROSS),
    ],
)
def test_mesh_category(voxel_type, category):
    assert get_voxel_mesh_category(voxel_type) is category


def test_unknown_type_is_invisible():
    assert get_voxel_mesh_category(200) is MeshCategory.INVISIBLE


def test_face_textures():
    assert get_face_tex(VoxelType.GRASS, VoxelFace.TOP) == 0
    assert get_face_tex(VoxelType.GRASS, VoxelFace.BOTTOM) == 2
    assert get_face_tex(VoxelType.GRASS, VoxelFace.FRONT) == 4
    assert get_face_tex(VoxelType.STONE_SLAB_BOTH, VoxelFace.TOP) == 9
    assert get_face_tex(VoxelType.STONE_SLAB_BOTH, VoxelFace.LEFT) == 8
    assert get_face_tex(VoxelType.WOOD_PLANKS, VoxelFace.BACK) == 10
    assert get_face_tex(VoxelType.WATER, VoxelFace.TOP) == 7


def test_lone_stone_has_six_faces():
    voxels = filled(VoxelType.AIR)
    voxels[5][6][7] = VoxelType.STONE
    info = visuals(voxels)
    meshes = all_meshes(info, SOLID_INDEX)
    assert len(meshes) == 6
    assert {m.type % 8 for m in meshes} == {int(f) for f in VoxelFace}
    assert all(m.type // 8 == VoxelType.STONE for m in meshes)
    assert all((m.x, m.y, m.z) == (5, 6, 7) for m in meshes)
    assert info.batches[TRANSPARENT_INDEX] == []
    assert info.batches[DOUBLE_SIDED_INDEX] == []


def test_border_face_hidden_without_neighbor():
    voxels = filled(VoxelType.AIR)
    voxels[0][5][5] = VoxelType.STONE
    faces = {m.type % 8 for m in all_meshes(visuals(voxels), SOLID_INDEX)}
    assert VoxelFace.BACK not in faces
    assert len(faces) == 5


def test_adjacent_stones_share_hidden_faces():
    voxels = filled(VoxelType.AIR)
    voxels[4][4][4] = VoxelType.STONE
    voxels[5][4][4] = VoxelType.STONE
    meshes = all_meshes(visuals(voxels), SOLID_INDEX)
    assert len(meshes) == 10
    assert VoxelMesh(VoxelType.STONE * 8 + VoxelFace.FRONT, 4, 4, 4) not in meshes
    assert VoxelMesh(VoxelType.STONE * 8 + VoxelFace.BACK, 5, 4, 4) not in meshes


def test_water_next_to_stone():
    voxels = filled(VoxelType.AIR)
    voxels[4][4][4] = VoxelType.STONE
    voxels[4][5][4] = VoxelType.WATER
    info = visuals(voxels)
    solid = all_meshes(info, SOLID_INDEX)
    water = all_meshes(info, TRANSPARENT_INDEX)
    assert VoxelMesh(VoxelType.STONE * 8 + VoxelFace.TOP, 4, 4, 4) in solid
    assert VoxelMesh(VoxelType.WATER * 8 + VoxelFace.BOTTOM, 4, 5, 4) not in water
    assert len(water) == 5


def test_water_faces_between_water_are_hidden():
    voxels = filled(VoxelType.AIR)
    voxels[4][4][4] = VoxelType.WATER
    voxels[4][4][5] = VoxelType.WATER
    assert len(all_meshes(visuals(voxels), TRANSPARENT_INDEX)) == 10


def test_tall_grass_is_cross():
    voxels = filled(VoxelType.AIR)
    voxels[2][3][4] = VoxelType.TALL_GRASS
    info = visuals(voxels)
    assert all_meshes(info, DOUBLE_SIDED_INDEX) == [VoxelMesh(int(VoxelType.TALL_GRASS), 2, 3, 4)]
    assert all_meshes(info, SOLID_INDEX) == []
    vertices = mesh_vertices(DOUBLE_SIDED_INDEX, all_meshes(info, DOUBLE_SIDED_INDEX))
    assert len(vertices) == 8
    assert {u for _, (u, _) in vertices} == {5, 6}


def test_front_face_vertices_lie_on_plane():
    mesh = VoxelMesh(VoxelType.STONE * 8 + VoxelFace.FRONT, 1, 2, 3)
    vertices = mesh_vertices(SOLID_INDEX, [mesh])
    assert len(vertices) == 4
    assert {pos[0] for pos, _ in vertices} == {1 * 4 + 4}
    assert {pos[1] for pos, _ in vertices} == {2 * 4, 2 * 4 + 4}
    assert {pos[2] for pos, _ in vertices} == {3 * 4, 3 * 4 + 4}
    assert {u for _, (u, _) in vertices} == {1, 2}
    assert {v for _, (_, v) in vertices} == {0, 16}


def test_mesh_vertices_rejects_bad_index():
    with pytest.raises(ValueError):
        mesh_vertices(3, [])


def test_display_list_bytes():
    voxels = filled(VoxelType.AIR)
    voxels[5][6][7] = VoxelType.STONE
    info = visuals(voxels)
    (display_list,) = info.display_lists[SOLID_INDEX]
    data = display_list.data
    assert data[0] == 0x85
    assert int.from_bytes(data[1:3], "big") == 24
    assert len(display_list) == 3 + 24 * 5
    first_vertex = mesh_vertices(SOLID_INDEX, info.batches[SOLID_INDEX][0])[0]
    assert tuple(data[3:6]) == first_vertex[0]
    assert tuple(data[6:8]) == first_vertex[1]


def test_solid_region_is_split_into_batches():
    info = visuals(filled(VoxelType.STONE), filled(VoxelType.AIR))
    batches = info.batches[SOLID_INDEX]
    assert sum(len(b) for b in batches) == 6 * REGION_SIZE * REGION_SIZE
    assert all(len(b) <= NUM_SOLID_BUILDING_MESHES for b in batches)
    assert all(len(b) >= NUM_SOLID_BUILDING_MESHES - 6 for b in batches[:-1])
    assert len(info.display_lists[SOLID_INDEX]) == len(batches)


def test_enclosed_solid_region_has_no_meshes():
    info = visuals(filled(VoxelType.STONE))
    assert info.batches == RegionRenderInfo().batches


def test_build_world_meshes():
    world = create_world(1)
    infos = build_world_meshes(world)
    assert list(infos) == [(0, 0, 0)]
    meshes = all_meshes(infos[0, 0, 0], SOLID_INDEX)
    assert meshes
    assert all(0 <= c < REGION_SIZE for m in meshes for c in (m.x, m.y, m.z))
    assert all(m.type % 8 != VoxelFace.BOTTOM or m.y > 0 for m in meshes)


def test_build_world_meshes_requires_generation():
    with pytest.raises(ValueError):
        build_world_meshes(World(1))