from struct import pack


def chunk(chunk_id, *children):
    body = b"".join(children)

    return pack("<HI", chunk_id, 6 + len(body)) + body


def vertex_list(*vertices):
    return chunk(
        0x4110,
        pack("<H", len(vertices)),
        *(pack("<fff", *v) for v in vertices)
    )


def mapping_coords(*uvs):
    return chunk(
        0x4140,
        pack("<H", len(uvs)),
        *(pack("<ff", *uv) for uv in uvs)
    )


def faces(*triangles):
    return chunk(
        0x4120,
        pack("<H", len(triangles)),
        *(pack("<HHHH", *t, 0) for t in triangles)
    )


def obj(name, *children):
    return chunk(0x4000, name + b"\x00", chunk(0x4100, *children))


def main(*objects):
    return chunk(
        0x4D4D,
        chunk(0x0002, pack("<I", 3)),
        chunk(0x3D3D, chunk(0x3D3E, pack("<I", 3)), *objects)
    )
