import logging
from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional

from .chunks import ChunkType, CHUNK_HEADER_SIZE, read_chunk_header
from .errors import FormatError
from .mesh import Mesh, SubObject, Vector2
from .util import read_int16, read_vector2, read_vector3, read_cstring

logger = logging.getLogger(__name__)


@dataclass
class DecodedObjects:
    """
    Everything the chunk scan found. `has_texcoords` is set when at least one
    object carried a non-empty mapping coordinates chunk.
    """

    sub_objects: List[SubObject] = field(default_factory=list)
    has_texcoords: bool = False


def _stream_size(stream: BinaryIO) -> int:
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(0)

    return size


def decode_chunks(stream: BinaryIO) -> DecodedObjects:
    """
    Scan a 3DS stream and collect the geometry of every OBJECT chunk.

    The scan is a single linear pass bounded only by the end of the stream.
    Container chunks (edit, triangle mesh) are stepped into without tracking
    their own lengths, so a container whose declared length is too short
    still has its children decoded.
    """

    file_size = _stream_size(stream)

    if file_size < CHUNK_HEADER_SIZE:
        raise FormatError(f"Stream too short for a 3DS file ({file_size} bytes)")

    header = read_chunk_header(stream)

    if header.chunk_id != ChunkType.MAIN or header.length != file_size:
        raise FormatError(
            f"Invalid 3DS header, got chunk {header.chunk_id:04x} "
            f"of length {header.length}, file size is {file_size}"
        )

    result = DecodedObjects()
    current: Optional[int] = None

    while stream.tell() < file_size:
        header = read_chunk_header(stream)
        chunk_id = header.chunk_id

        if chunk_id in (ChunkType.EDIT_3D, ChunkType.TRIMESH):
            # Step into.
            continue

        elif chunk_id == ChunkType.OBJECT:
            read_cstring(stream, file_size)

            result.sub_objects.append(SubObject())
            current = len(result.sub_objects) - 1

        elif chunk_id == ChunkType.VERTEX_LIST:
            count = read_int16(stream)
            obj = None if current is None else result.sub_objects[current]

            if obj is None or (obj.vertices and len(obj.vertices) != count):
                logger.debug(
                    "Skipping vertex list of %d at %d", count, header.offset
                )
                stream.seek(count * 12, 1)
                continue

            obj.vertices = [read_vector3(stream) for _ in range(count)]

        elif chunk_id == ChunkType.MAPPING_COORDS:
            count = read_int16(stream)
            obj = None if current is None else result.sub_objects[current]

            if obj is None or (obj.texcoords and len(obj.texcoords) != count):
                logger.debug(
                    "Skipping mapping coords of %d at %d", count, header.offset
                )
                stream.seek(count * 8, 1)
                continue

            obj.texcoords = [read_vector2(stream) for _ in range(count)]

            if count > 0:
                result.has_texcoords = True

        elif chunk_id == ChunkType.FACES:
            count = read_int16(stream)

            if current is None:
                logger.debug(
                    "Skipping %d faces outside of an object at %d",
                    count, header.offset
                )
                stream.seek(count * 8, 1)
                continue

            indices = []

            for _ in range(count):
                indices.append(read_int16(stream))
                indices.append(read_int16(stream))
                indices.append(read_int16(stream))

                # Face flags
                read_int16(stream)

            # A second faces chunk overwrites the leading slots.
            result.sub_objects[current].indices[0:len(indices)] = indices

        else:
            logger.debug(
                "Skipping chunk %04x (%d bytes) at %d",
                chunk_id, header.length, header.offset
            )
            stream.seek(header.body_length, 1)

    return result


def merge_sub_objects(decoded: DecodedObjects, mesh: Mesh):
    """
    Flatten all decoded objects into `mesh`, which is cleared first.

    Indices are rebased onto the concatenated vertex list. When any object had
    UV coordinates, every vertex gets one; objects without a matching UV list
    are filled with (0, 0).
    """

    mesh.clear()

    for obj in decoded.sub_objects:
        vertex_offset = len(mesh.vertices)

        mesh.indices.extend(vertex_offset + i for i in obj.indices)
        mesh.vertices.extend(obj.vertices)

        if decoded.has_texcoords:
            if len(obj.texcoords) == len(obj.vertices):
                mesh.texcoords.extend(obj.texcoords)
            else:
                mesh.texcoords.extend(Vector2(0.0, 0.0) for _ in obj.vertices)

    logger.debug(
        "Merged %d objects: %d vertices, %d triangles",
        len(decoded.sub_objects), len(mesh.vertices), mesh.triangle_count
    )


def import_3ds(stream: BinaryIO, mesh: Mesh):
    """
    Read a 3DS stream into `mesh`. The mesh is only touched once the whole
    stream has been parsed.
    """

    decoded = decode_chunks(stream)

    merge_sub_objects(decoded, mesh)


def load_3ds(path) -> Mesh:
    mesh = Mesh()

    with open(path, "rb") as f:
        import_3ds(f, mesh)

    return mesh
