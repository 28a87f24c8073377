from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple


@dataclass
class Vector2:
    u: float = 0.0
    v: float = 0.0


@dataclass
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class SubObject:
    """
    Geometry of a single OBJECT chunk, before it gets merged into a Mesh.
    Indices are local to this object's vertex list.
    """

    indices: List[int] = field(default_factory=list)
    vertices: List[Vector3] = field(default_factory=list)
    texcoords: List[Vector2] = field(default_factory=list)


@dataclass
class Mesh:
    """
    A flattened triangle mesh. `texcoords` is either empty or parallel to
    `vertices`.
    """

    indices: List[int] = field(default_factory=list)
    vertices: List[Vector3] = field(default_factory=list)
    texcoords: List[Vector2] = field(default_factory=list)
    texture_file_name: Optional[str] = None

    def clear(self):
        self.indices = []
        self.vertices = []
        self.texcoords = []
        self.texture_file_name = None

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def has_texcoords(self) -> bool:
        return len(self.texcoords) == len(self.vertices)

    def triangles(self) -> Iterator[Tuple[int, int, int]]:
        for i in range(self.triangle_count):
            yield (
                self.indices[i * 3],
                self.indices[i * 3 + 1],
                self.indices[i * 3 + 2],
            )
