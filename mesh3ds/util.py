import math
from struct import pack, unpack
from typing import BinaryIO, Optional

from .mesh import Vector2, Vector3


def print_hex(*data):
    output = []

    for d in data:
        r = [f"{x:02x}" for x in d]

        output.append(" ".join(r))

    print(" ".join(output))


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    offset = stream.tell()
    data = stream.read(size)

    if len(data) != size:
        raise EOFError(f"Unexpected end of stream at {offset}, need {size} bytes")

    return data


def read_int16(stream: BinaryIO) -> int:
    return int.from_bytes(_read_exact(stream, 2), byteorder="little")


def read_int32(stream: BinaryIO) -> int:
    return int.from_bytes(_read_exact(stream, 4), byteorder="little")


def write_int16(stream: BinaryIO, value: int):
    stream.write((value & 0xFFFF).to_bytes(2, byteorder="little"))


def write_int32(stream: BinaryIO, value: int):
    stream.write((value & 0xFFFFFFFF).to_bytes(4, byteorder="little"))


def float_from_bits(bits: int) -> float:
    """
    Reinterpret an unsigned 32-bit integer as an IEEE-754 single.
    """

    return unpack("<f", pack("<I", bits & 0xFFFFFFFF))[0]


def float_to_bits(value: float) -> int:
    """
    Reinterpret a float (rounded to single precision) as an unsigned
    32-bit integer. Values beyond the single precision range become +/-inf.
    """

    try:
        return unpack("<I", pack("<f", value))[0]
    except OverflowError:
        return unpack("<I", pack("<f", math.copysign(math.inf, value)))[0]


def read_float(stream: BinaryIO) -> float:
    return float_from_bits(read_int32(stream))


def write_float(stream: BinaryIO, value: float):
    write_int32(stream, float_to_bits(value))


def read_vector2(stream: BinaryIO) -> Vector2:
    u = read_float(stream)
    v = read_float(stream)

    return Vector2(u=u, v=v)


def write_vector2(stream: BinaryIO, value: Vector2):
    write_float(stream, value.u)
    write_float(stream, value.v)


def read_vector3(stream: BinaryIO) -> Vector3:
    x = read_float(stream)
    y = read_float(stream)
    z = read_float(stream)

    return Vector3(x=x, y=y, z=z)


def write_vector3(stream: BinaryIO, value: Vector3):
    write_float(stream, value.x)
    write_float(stream, value.y)
    write_float(stream, value.z)


def read_cstring(stream: BinaryIO, limit: Optional[int] = None) -> bytes:
    """
    Read bytes up to and including a zero byte. Stops early at end of stream,
    or once the cursor reaches `limit`. The terminator is not returned.
    """

    result = bytearray()

    while limit is None or stream.tell() < limit:
        c = stream.read(1)

        if not c or c == b"\x00":
            break

        result += c

    return bytes(result)


def write_cstring(stream: BinaryIO, value: bytes):
    stream.write(value)
    stream.write(b"\x00")
