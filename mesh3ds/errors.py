class Mesh3dsError(ValueError):
    pass


class FormatError(Mesh3dsError):
    """
    The stream does not start with a main chunk covering the whole stream.
    """


class SizeError(Mesh3dsError):
    """
    The mesh has more vertices or triangles than 16-bit counts can hold.
    """
