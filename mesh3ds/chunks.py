from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO, Iterator

from .util import read_int16, read_int32, write_int16, write_int32, \
    read_cstring


CHUNK_HEADER_SIZE = 6

# Counts on the wire are 16 bit.
MAX_COUNT = 65535

FORMAT_VERSION = 3


class ChunkType(IntEnum):
    MAIN = 0x4D4D
    M3D_VERSION = 0x0002
    EDIT_3D = 0x3D3D
    MESH_VERSION = 0x3D3E
    OBJECT = 0x4000
    TRIMESH = 0x4100
    VERTEX_LIST = 0x4110
    MAPPING_COORDS = 0x4140
    FACES = 0x4120
    MESH_MAT_GROUP = 0x4130
    MAT_ENTRY = 0xAFFF
    MAT_NAME = 0xA000
    MAT_TEXMAP = 0xA200
    MAT_MAPNAME = 0xA300


@dataclass
class ChunkHeader:
    chunk_id: int
    length: int
    offset: int

    @property
    def body_length(self) -> int:
        # Lengths are unsigned, so a length below the header size wraps.
        return (self.length - CHUNK_HEADER_SIZE) & 0xFFFFFFFF

    @property
    def name(self) -> str:
        try:
            return ChunkType(self.chunk_id).name
        except ValueError:
            return "UNKNOWN"


def read_chunk_header(stream: BinaryIO) -> ChunkHeader:
    offset = stream.tell()
    chunk_id = read_int16(stream)
    length = read_int32(stream)

    return ChunkHeader(chunk_id=chunk_id, length=length, offset=offset)


def write_chunk_header(stream: BinaryIO, chunk_id: int, length: int):
    write_int16(stream, chunk_id)
    write_int32(stream, length)


def iter_chunks(stream: BinaryIO, end: int) -> Iterator[ChunkHeader]:
    """
    Walk the chunk stream linearly from the current position to `end`.
    Container chunks (main, edit, object, triangle mesh) are stepped into and
    every other chunk is skipped using its declared length. Callers that peek
    at a chunk body must restore the stream position before resuming.
    """

    while stream.tell() < end:
        header = read_chunk_header(stream)

        yield header

        if header.chunk_id in (
            ChunkType.MAIN, ChunkType.EDIT_3D, ChunkType.TRIMESH
        ):
            continue
        elif header.chunk_id == ChunkType.OBJECT:
            read_cstring(stream, end)
        else:
            stream.seek(header.body_length, 1)
