"""Test helpers: element payloads and in-memory GLB blobs."""

from __future__ import annotations

import struct
from typing import Any

import pygltflib


def square_ring(size: float = 10.0, z: float = 0.0) -> list[dict[str, float]]:
    """Closed axis-aligned square ring as camelCase point dicts."""
    corners = [(0.0, 0.0), (size, 0.0), (size, size), (0.0, size), (0.0, 0.0)]
    return [{"x": x, "y": y, "z": z} for x, y in corners]


def loop(ring: list[dict[str, float]]) -> dict[str, Any]:
    return {"groundMultiLoopPolygon": [ring]}


def make_glb(nodes: list[tuple[str | None, list[tuple[float, float, float]], list[int] | None]]) -> bytes:
    """Build a GLB with one mesh node per (name, vertices, indices) entry.

    ``indices=None`` produces a non-indexed primitive.
    """
    gltf = pygltflib.GLTF2(
        scene=0,
        scenes=[pygltflib.Scene(nodes=list(range(len(nodes))))],
        nodes=[],
        meshes=[],
        accessors=[],
        bufferViews=[],
        buffers=[],
    )
    blob = bytearray()

    for i, (name, vertices, indices) in enumerate(nodes):
        vert_offset = len(blob)
        for vx, vy, vz in vertices:
            blob.extend(struct.pack("<fff", vx, vy, vz))
        gltf.bufferViews.append(
            pygltflib.BufferView(buffer=0, byteOffset=vert_offset, byteLength=len(blob) - vert_offset)
        )
        gltf.accessors.append(
            pygltflib.Accessor(
                bufferView=len(gltf.bufferViews) - 1,
                componentType=pygltflib.FLOAT,
                count=len(vertices),
                type=pygltflib.VEC3,
                max=[max(v[k] for v in vertices) for k in range(3)],
                min=[min(v[k] for v in vertices) for k in range(3)],
            )
        )
        position_idx = len(gltf.accessors) - 1

        indices_idx = None
        if indices is not None:
            idx_offset = len(blob)
            for index in indices:
                blob.extend(struct.pack("<I", index))
            gltf.bufferViews.append(
                pygltflib.BufferView(buffer=0, byteOffset=idx_offset, byteLength=len(blob) - idx_offset)
            )
            gltf.accessors.append(
                pygltflib.Accessor(
                    bufferView=len(gltf.bufferViews) - 1,
                    componentType=pygltflib.UNSIGNED_INT,
                    count=len(indices),
                    type=pygltflib.SCALAR,
                )
            )
            indices_idx = len(gltf.accessors) - 1

        gltf.meshes.append(
            pygltflib.Mesh(
                primitives=[
                    pygltflib.Primitive(
                        attributes=pygltflib.Attributes(POSITION=position_idx),
                        indices=indices_idx,
                    )
                ]
            )
        )
        gltf.nodes.append(pygltflib.Node(mesh=i, name=name))

    gltf.buffers = [pygltflib.Buffer(byteLength=len(blob))]
    gltf.set_binary_blob(bytes(blob))
    return b"".join(gltf.save_to_bytes())


# Two triangles sharing edge B-C: A, B, C, D are the 4 distinct corners
A = (0.0, 0.0, 0.0)
B = (1.0, 0.0, 0.0)
C = (0.0, 1.0, 0.0)
D = (1.0, 1.0, 0.0)
