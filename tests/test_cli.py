from pathlib import Path

from click.testing import CliRunner

from convert3ds import cli
from mesh3ds import Mesh, Vector2, Vector3, save_3ds, load_3ds


OBJ_TEXT = (
    "v 0 0 0\n"
    "v 1 0 0\n"
    "v 0 1 0\n"
    "vt 0 0\n"
    "vt 1 0\n"
    "vt 0 1\n"
    "f 1/1 2/2 3/3\n"
)


def _write_triangle(path):
    save_3ds(path, Mesh(
        indices=[0, 1, 2],
        vertices=[Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 1, 0)],
        texcoords=[Vector2(0, 0), Vector2(1, 0), Vector2(0, 1)],
        texture_file_name="tex.png",
    ))


def test_dump_chunks():
    runner = CliRunner()

    with runner.isolated_filesystem():
        _write_triangle("tri.3ds")

        result = runner.invoke(cli, ["dump-chunks", "--hex", "tri.3ds"])

        assert result.exit_code == 0
        assert "MAIN" in result.output
        assert "MAT_ENTRY" in result.output
        assert "MESH_MAT_GROUP" in result.output


def test_info_reports_bad_files():
    runner = CliRunner()

    with runner.isolated_filesystem():
        _write_triangle("tri.3ds")
        Path("bad.3ds").write_bytes(b"nope")

        result = runner.invoke(cli, ["info", "tri.3ds", "bad.3ds"])

        assert result.exit_code == 0
        assert "tri.3ds: verts=3, tris=1, uvs=3" in result.output
        assert "bad.3ds: Stream too short" in result.output


def test_from_obj_and_back():
    runner = CliRunner()

    with runner.isolated_filesystem():
        Path("tri.obj").write_text(OBJ_TEXT)

        result = runner.invoke(
            cli, ["from-obj", "tri.obj", "tri.3ds", "--texture", "tex.png"]
        )

        assert result.exit_code == 0

        mesh = load_3ds("tri.3ds")

        assert mesh.indices == [0, 1, 2]
        assert mesh.texcoords[1] == Vector2(1, 0)

        result = runner.invoke(cli, ["to-obj", "tri.3ds"])

        assert result.exit_code == 0
        assert Path("objs/tri.obj").read_text().splitlines()[-1] == "f 1/1 2/2 3/3"


def test_to_gltf():
    runner = CliRunner()

    with runner.isolated_filesystem():
        _write_triangle("tri.3ds")

        result = runner.invoke(cli, ["to-gltf", "tri.3ds"])

        assert result.exit_code == 0
        assert Path("gltf/tri.glb").read_bytes()[:4] == b"glTF"


def test_info_help():
    result = CliRunner().invoke(cli, ["info", "--help"])

    assert result.exit_code == 0
    assert "Print vertex, triangle and UV counts" in result.output
