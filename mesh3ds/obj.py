from typing import Dict, List, TextIO

from .mesh import Mesh, Vector2, Vector3


def write_obj(mesh: Mesh, f: TextIO):
    for vertex in mesh.vertices:
        f.write(f"v {vertex.x} {vertex.y} {vertex.z}\n")

    has_texcoords = bool(mesh.vertices) and mesh.has_texcoords

    if has_texcoords:
        for texcoord in mesh.texcoords:
            f.write(f"vt {texcoord.u} {texcoord.v}\n")

    for face in mesh.triangles():
        a, b, c = (i + 1 for i in face)

        if has_texcoords:
            f.write(f"f {a}/{a} {b}/{b} {c}/{c}\n")
        else:
            f.write(f"f {a} {b} {c}\n")


def _resolve_index(token: str, count: int) -> int:
    # OBJ indices are 1-based, negative ones count back from the end.
    i = int(token)

    return i - 1 if i > 0 else count + i


def read_obj(f: TextIO) -> Mesh:
    """
    Read positions, texture coordinates and faces from an OBJ file. Polygons
    are fan triangulated. Each vertex takes the UV of the first face corner
    that references it.
    """

    positions: List[Vector3] = []
    uvs: List[Vector2] = []
    indices: List[int] = []
    vertex_uv: Dict[int, int] = {}

    for line in f:
        parts = line.split()

        if not parts or parts[0].startswith("#"):
            continue

        if parts[0] == "v":
            x, y, z = (float(p) for p in parts[1:4])
            positions.append(Vector3(x, y, z))
        elif parts[0] == "vt":
            u, v = (float(p) for p in parts[1:3])
            uvs.append(Vector2(u, v))
        elif parts[0] == "f":
            corners = []

            for corner in parts[1:]:
                refs = corner.split("/")
                vertex_index = _resolve_index(refs[0], len(positions))

                if len(refs) > 1 and refs[1]:
                    vertex_uv.setdefault(
                        vertex_index, _resolve_index(refs[1], len(uvs))
                    )

                corners.append(vertex_index)

            for i in range(1, len(corners) - 1):
                indices += [corners[0], corners[i], corners[i + 1]]

    mesh = Mesh(indices=indices, vertices=positions)

    if vertex_uv:
        mesh.texcoords = [
            uvs[vertex_uv[i]] if i in vertex_uv else Vector2(0.0, 0.0)
            for i in range(len(positions))
        ]

    return mesh
