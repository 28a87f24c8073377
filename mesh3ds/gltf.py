import base64
import io
import struct
from typing import Optional

import pygltflib
from PIL import Image

from .mesh import Mesh


class BoundingBoxTracker:
    def __init__(self):
        self.min = None
        self.max = None

    def add(self, v):
        if self.min is None:
            self.min = list(v)
        else:
            for i, x in enumerate(v):
                if x < self.min[i]:
                    self.min[i] = x

        if self.max is None:
            self.max = list(v)
        else:
            for i, x in enumerate(v):
                if x > self.max[i]:
                    self.max[i] = x


def image_to_data_uri(image: Image.Image) -> str:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")

    return f"data:image/png;base64,{encoded}"


def _pad(stream: io.BytesIO):
    # Pad to 4 bytes
    while len(stream.getvalue()) % 4 != 0:
        stream.write(struct.pack("B", 0))


def mesh_to_gltf(mesh: Mesh, image: Optional[Image.Image] = None) -> pygltflib.GLTF2:
    """
    Build a single node, single primitive glTF document from a mesh. When an
    image is given and the mesh has UVs, it becomes the base colour texture.
    """

    has_texcoords = bool(mesh.vertices) and mesh.has_texcoords

    triangle_io = io.BytesIO()
    vertex_io = io.BytesIO()
    texcoord_io = io.BytesIO()

    for index in mesh.indices:
        triangle_io.write(struct.pack("<I", index))

    _pad(triangle_io)

    vertex_minmax = BoundingBoxTracker()

    for vertex in mesh.vertices:
        position = (vertex.x, vertex.y, vertex.z)

        vertex_io.write(struct.pack("<fff", *position))
        vertex_minmax.add(position)

    uv_minmax = BoundingBoxTracker()

    if has_texcoords:
        for texcoord in mesh.texcoords:
            # glTF puts the UV origin at the top left.
            uv = (texcoord.u, 1.0 - texcoord.v)

            texcoord_io.write(struct.pack("<ff", *uv))
            uv_minmax.add(uv)

    triangle_bytes = triangle_io.getvalue()
    vertex_bytes = vertex_io.getvalue()
    texcoord_bytes = texcoord_io.getvalue()

    buffer_views = [
        pygltflib.BufferView(
            buffer=0,
            byteOffset=0,
            byteLength=len(triangle_bytes),
            target=pygltflib.ELEMENT_ARRAY_BUFFER,
        ),
        pygltflib.BufferView(
            buffer=0,
            byteOffset=len(triangle_bytes),
            byteLength=len(vertex_bytes),
            target=pygltflib.ARRAY_BUFFER,
        ),
    ]

    accessors = [
        pygltflib.Accessor(
            bufferView=0,
            componentType=pygltflib.UNSIGNED_INT,
            count=len(mesh.indices),
            type=pygltflib.SCALAR,
            max=[max(mesh.indices)] if mesh.indices else None,
            min=[min(mesh.indices)] if mesh.indices else None,
        ),
        pygltflib.Accessor(
            bufferView=1,
            componentType=pygltflib.FLOAT,
            count=len(mesh.vertices),
            type=pygltflib.VEC3,
            max=vertex_minmax.max,
            min=vertex_minmax.min,
        ),
    ]

    attributes = pygltflib.Attributes(POSITION=1)

    if has_texcoords:
        buffer_views.append(
            pygltflib.BufferView(
                buffer=0,
                byteOffset=len(triangle_bytes) + len(vertex_bytes),
                byteLength=len(texcoord_bytes),
                target=pygltflib.ARRAY_BUFFER,
            )
        )

        accessors.append(
            pygltflib.Accessor(
                bufferView=2,
                componentType=pygltflib.FLOAT,
                count=len(mesh.texcoords),
                type=pygltflib.VEC2,
                max=uv_minmax.max,
                min=uv_minmax.min,
            )
        )

        attributes.TEXCOORD_0 = 2

    images = []
    textures = []
    materials = []
    samplers = []
    material_index = None

    if image is not None and has_texcoords:
        images.append(pygltflib.Image(uri=image_to_data_uri(image)))
        textures.append(pygltflib.Texture(sampler=0, source=0))
        samplers.append(
            pygltflib.Sampler(
                magFilter=pygltflib.LINEAR,
                minFilter=pygltflib.NEAREST_MIPMAP_LINEAR,
                wrapS=pygltflib.REPEAT,
                wrapT=pygltflib.REPEAT,
            )
        )
        materials.append(
            pygltflib.Material(
                pbrMetallicRoughness=pygltflib.PbrMetallicRoughness(
                    baseColorTexture=pygltflib.TextureInfo(index=0),
                    metallicFactor=0.0
                ),
                name=mesh.texture_file_name or "texture_0",
            )
        )
        material_index = 0

    gltf = pygltflib.GLTF2(
        scene=0,
        scenes=[pygltflib.Scene(nodes=[0])],
        nodes=[pygltflib.Node(mesh=0, name="mesh_0")],
        meshes=[
            pygltflib.Mesh(
                primitives=[
                    pygltflib.Primitive(
                        attributes=attributes,
                        indices=0,
                        material=material_index,
                    )
                ]
            )
        ],
        accessors=accessors,
        images=images,
        textures=textures,
        materials=materials,
        samplers=samplers,
        bufferViews=buffer_views,
        buffers=[
            pygltflib.Buffer(
                byteLength=len(triangle_bytes) + len(vertex_bytes) + len(texcoord_bytes)
            )
        ],
    )

    gltf.set_binary_blob(triangle_bytes + vertex_bytes + texcoord_bytes)

    return gltf
