from .util import print_hex, read_int16, read_int32, write_int16, \
    write_int32, float_from_bits, float_to_bits, read_vector2, read_vector3, \
    write_vector2, write_vector3
from .mesh import Mesh, SubObject, Vector2, Vector3
from .chunks import ChunkType, ChunkHeader, iter_chunks, MAX_COUNT
from .errors import Mesh3dsError, FormatError, SizeError
from .decoder import DecodedObjects, decode_chunks, merge_sub_objects, \
    import_3ds, load_3ds
from .encoder import ChunkSizes, export_3ds, save_3ds
from .obj import read_obj, write_obj
from .gltf import mesh_to_gltf, image_to_data_uri
