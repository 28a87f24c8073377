import io
import logging
from dataclasses import dataclass
from typing import BinaryIO

from .chunks import ChunkType, CHUNK_HEADER_SIZE, MAX_COUNT, FORMAT_VERSION, \
    write_chunk_header
from .errors import SizeError
from .mesh import Mesh
from .util import write_int16, write_int32, write_vector2, write_vector3, \
    write_cstring

logger = logging.getLogger(__name__)

OBJECT_NAME = b"Object1"
MATERIAL_NAME = b"Material0"

# Version chunks carry a single 32-bit value.
VERSION_CHUNK_SIZE = CHUNK_HEADER_SIZE + 4


def _string_size(value: bytes) -> int:
    return len(value) + 1


@dataclass
class ChunkSizes:
    """
    Total byte length (header included) of every chunk the encoder writes.
    Optional chunks that won't be written have a size of 0.
    """

    vertex_count: int
    triangle_count: int
    has_texcoords: bool
    texture_name: bytes

    material_entry: int
    material_group: int
    vertex_list: int
    mapping_coords: int
    faces: int
    trimesh: int
    object: int
    edit_3d: int
    main: int

    @classmethod
    def from_mesh(cls: 'ChunkSizes', mesh: Mesh) -> 'ChunkSizes':
        vertex_count = len(mesh.vertices)
        triangle_count = mesh.triangle_count
        has_texcoords = mesh.has_texcoords
        texture_name = (mesh.texture_file_name or "").encode("utf-8")

        material_entry = 0
        material_group = 0

        if has_texcoords and texture_name:
            mat_name = CHUNK_HEADER_SIZE + _string_size(MATERIAL_NAME)
            map_name = CHUNK_HEADER_SIZE + _string_size(texture_name)
            texmap = CHUNK_HEADER_SIZE + map_name

            material_entry = CHUNK_HEADER_SIZE + mat_name + texmap
            material_group = CHUNK_HEADER_SIZE \
                + _string_size(MATERIAL_NAME) \
                + 2 \
                + 2 * triangle_count

        vertex_list = CHUNK_HEADER_SIZE + 2 + 12 * vertex_count

        mapping_coords = 0

        if has_texcoords:
            mapping_coords = CHUNK_HEADER_SIZE + 2 + 8 * vertex_count

        faces = CHUNK_HEADER_SIZE + 2 + 8 * triangle_count

        trimesh = CHUNK_HEADER_SIZE \
            + vertex_list \
            + mapping_coords \
            + faces \
            + material_group

        object_ = CHUNK_HEADER_SIZE + _string_size(OBJECT_NAME) + trimesh
        edit_3d = CHUNK_HEADER_SIZE + VERSION_CHUNK_SIZE + material_entry + object_
        main = CHUNK_HEADER_SIZE + VERSION_CHUNK_SIZE + edit_3d

        return ChunkSizes(
            vertex_count=vertex_count,
            triangle_count=triangle_count,
            has_texcoords=has_texcoords,
            texture_name=texture_name,
            material_entry=material_entry,
            material_group=material_group,
            vertex_list=vertex_list,
            mapping_coords=mapping_coords,
            faces=faces,
            trimesh=trimesh,
            object=object_,
            edit_3d=edit_3d,
            main=main,
        )


def check_mesh_size(mesh: Mesh):
    if len(mesh.indices) > 3 * MAX_COUNT or len(mesh.vertices) > MAX_COUNT:
        raise SizeError(
            f"Mesh is too large for a 3DS file: {len(mesh.vertices)} vertices, "
            f"{mesh.triangle_count} triangles (max {MAX_COUNT} of each)"
        )


def _write_version(stream: BinaryIO, chunk_id: int):
    write_chunk_header(stream, chunk_id, VERSION_CHUNK_SIZE)
    write_int32(stream, FORMAT_VERSION)


def _serialize(stream: BinaryIO, mesh: Mesh):
    sizes = ChunkSizes.from_mesh(mesh)

    logger.debug(
        "Writing %d vertices, %d triangles, %d bytes",
        sizes.vertex_count, sizes.triangle_count, sizes.main
    )

    write_chunk_header(stream, ChunkType.MAIN, sizes.main)
    _write_version(stream, ChunkType.M3D_VERSION)

    write_chunk_header(stream, ChunkType.EDIT_3D, sizes.edit_3d)
    _write_version(stream, ChunkType.MESH_VERSION)

    if sizes.material_entry:
        write_chunk_header(stream, ChunkType.MAT_ENTRY, sizes.material_entry)

        write_chunk_header(
            stream, ChunkType.MAT_NAME,
            CHUNK_HEADER_SIZE + _string_size(MATERIAL_NAME)
        )
        write_cstring(stream, MATERIAL_NAME)

        map_name_size = CHUNK_HEADER_SIZE + _string_size(sizes.texture_name)

        write_chunk_header(
            stream, ChunkType.MAT_TEXMAP, CHUNK_HEADER_SIZE + map_name_size
        )
        write_chunk_header(stream, ChunkType.MAT_MAPNAME, map_name_size)
        write_cstring(stream, sizes.texture_name)

    write_chunk_header(stream, ChunkType.OBJECT, sizes.object)
    write_cstring(stream, OBJECT_NAME)

    write_chunk_header(stream, ChunkType.TRIMESH, sizes.trimesh)

    write_chunk_header(stream, ChunkType.VERTEX_LIST, sizes.vertex_list)
    write_int16(stream, sizes.vertex_count)

    for vertex in mesh.vertices:
        write_vector3(stream, vertex)

    if sizes.mapping_coords:
        write_chunk_header(stream, ChunkType.MAPPING_COORDS, sizes.mapping_coords)
        write_int16(stream, sizes.vertex_count)

        for texcoord in mesh.texcoords:
            write_vector2(stream, texcoord)

    write_chunk_header(stream, ChunkType.FACES, sizes.faces)
    write_int16(stream, sizes.triangle_count)

    for a, b, c in mesh.triangles():
        write_int16(stream, a)
        write_int16(stream, b)
        write_int16(stream, c)
        write_int16(stream, 0)

    if sizes.material_group:
        write_chunk_header(stream, ChunkType.MESH_MAT_GROUP, sizes.material_group)
        write_cstring(stream, MATERIAL_NAME)
        write_int16(stream, sizes.triangle_count)

        for i in range(sizes.triangle_count):
            write_int16(stream, i)


def export_3ds(stream: BinaryIO, mesh: Mesh):
    """
    Write `mesh` as a 3DS file containing a single object, with a single
    textured material when the mesh has UV coordinates and a texture name.

    The file is built in memory and handed to `stream` in one write, so a
    failure leaves `stream` untouched.
    """

    check_mesh_size(mesh)

    buffer = io.BytesIO()
    _serialize(buffer, mesh)

    stream.write(buffer.getvalue())


def save_3ds(path, mesh: Mesh):
    # Serialize before the file is created.
    buffer = io.BytesIO()
    export_3ds(buffer, mesh)

    with open(path, "wb") as f:
        f.write(buffer.getvalue())
