#!/usr/bin/env python3

import logging

import click

from pathlib import Path
from PIL import Image
from mesh3ds import ChunkType, Mesh3dsError, iter_chunks, load_3ds, \
    save_3ds, read_obj, write_obj, mesh_to_gltf, print_hex


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log chunk level details.")
def cli(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )


@cli.command()
@click.argument("path")
@click.option("--hex", "show_hex", is_flag=True, help="Print the first bytes of each chunk body.")
def dump_chunks(path: str, show_hex: bool):
    """
    Print every chunk header of a 3DS file in file order.
    """

    with open(path, "rb") as f:
        f.seek(0, 2)
        file_size = f.tell()
        f.seek(0)

        print(f"{file_size} bytes read.")

        for header in iter_chunks(f, file_size):
            print(
                f"{header.offset:08x} {header.chunk_id:04x} {header.name:<16}"
                f" length={header.length}"
            )

            if show_hex and header.chunk_id not in (
                ChunkType.MAIN, ChunkType.EDIT_3D, ChunkType.OBJECT,
                ChunkType.TRIMESH
            ):
                position = f.tell()
                print_hex(f.read(min(header.body_length, 16)))
                f.seek(position)


@cli.command()
@click.argument("paths", nargs=-1)
def info(paths: str):
    """
    Print vertex, triangle and UV counts of 3DS files.
    """

    for path in paths:
        try:
            mesh = load_3ds(path)
        except (Mesh3dsError, EOFError) as e:
            print(f"{path}: {e}")

            continue

        print(
            f"{path}: verts={len(mesh.vertices)}, tris={mesh.triangle_count},"
            f" uvs={len(mesh.texcoords)}"
        )


@cli.command()
@click.argument("paths", nargs=-1)
def to_obj(paths: str):
    """
    Convert 3DS files into `objs/<name>.obj`.
    """

    for path in paths:
        path = Path(path)

        try:
            mesh = load_3ds(path)
        except (Mesh3dsError, EOFError) as e:
            print(f"{path}: {e}")

            continue

        new_path = Path(f"objs/{path.stem}.obj")
        new_path.parent.mkdir(exist_ok=True)

        print(f"Writing to {new_path}")

        with new_path.open("w") as f:
            write_obj(mesh, f)


@cli.command()
@click.argument("paths", nargs=-1)
@click.option("--texture", default=None, help="Image to embed as the base colour texture.")
def to_gltf(paths: str, texture: str):
    """
    Convert 3DS files into binary glTF files under `gltf/`.
    """

    image = Image.open(texture).convert("RGBA") if texture else None

    for path in paths:
        path = Path(path)

        try:
            mesh = load_3ds(path)
        except (Mesh3dsError, EOFError) as e:
            print(f"{path}: {e}")

            continue

        print(f"  tris={mesh.triangle_count}, verts={len(mesh.vertices)}")

        if mesh.triangle_count == 0:
            continue

        gltf = mesh_to_gltf(mesh, image)

        outpath = Path(f"gltf/{path.stem}.glb")
        outpath.parent.mkdir(exist_ok=True)

        outpath.write_bytes(
            b"".join(gltf.save_to_bytes())
        )


@cli.command()
@click.argument("obj-path")
@click.argument("out-path")
@click.option("--texture", default=None, help="Texture file name stored in the material.")
def from_obj(obj_path: str, out_path: str, texture: str):
    """
    Build a 3DS file from a Wavefront OBJ file.
    """

    with open(obj_path) as f:
        mesh = read_obj(f)

    mesh.texture_file_name = texture

    try:
        save_3ds(out_path, mesh)
    except Mesh3dsError as e:
        raise click.ClickException(str(e))

    print(f"Wrote {len(mesh.vertices)} vertices, {mesh.triangle_count} triangles to {out_path}")


if __name__ == "__main__":
    cli()
