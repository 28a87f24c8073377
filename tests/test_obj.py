import io

from mesh3ds import Mesh, Vector2, Vector3, read_obj, write_obj


def test_write_obj():
    mesh = Mesh(
        indices=[0, 1, 2],
        vertices=[Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 1, 0)],
        texcoords=[Vector2(0, 0), Vector2(1, 0), Vector2(0, 1)],
    )

    f = io.StringIO()
    write_obj(mesh, f)

    lines = f.getvalue().splitlines()

    assert lines[0] == "v 0 0 0"
    assert lines[3] == "vt 0 0"
    assert lines[-1] == "f 1/1 2/2 3/3"


def test_read_obj_fan_triangulates():
    f = io.StringIO(
        "# quad\n"
        "v 0 0 0\n"
        "v 1 0 0\n"
        "v 1 1 0\n"
        "v 0 1 0\n"
        "f 1 2 3 4\n"
    )

    mesh = read_obj(f)

    assert len(mesh.vertices) == 4
    assert mesh.indices == [0, 1, 2, 0, 2, 3]
    assert mesh.texcoords == []


def test_read_obj_texcoords():
    f = io.StringIO(
        "v 0 0 0\n"
        "v 1 0 0\n"
        "v 0 1 0\n"
        "v 5 5 5\n"
        "vt 0.5 0.25\n"
        "vt 1 1\n"
        "f 1/1 2/2 -2/-1\n"
    )

    mesh = read_obj(f)

    assert mesh.indices == [0, 1, 2]
    assert mesh.texcoords == [
        Vector2(0.5, 0.25), Vector2(1, 1), Vector2(1, 1), Vector2(0, 0)
    ]


def test_obj_round_trip():
    mesh = Mesh(
        indices=[0, 1, 2],
        vertices=[Vector3(0.5, 0, 0), Vector3(1, 0.25, 0), Vector3(0, 1, 2)],
    )

    f = io.StringIO()
    write_obj(mesh, f)
    f.seek(0)

    assert read_obj(f) == mesh
