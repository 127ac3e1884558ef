"""GLB decoding and per-blob caching, built on pygltflib.

``GLBReader.parse_and_cache`` decodes a binary glTF payload once per blob
id; ``GLBReader.meshes_for_selection`` then returns the triangles of every
node whose name matches a selector, grouped per node.

Only triangle primitives (mode 4) are read.  Node transforms are not
applied: positions are returned in mesh-local coordinates.
"""

from __future__ import annotations

import logging
import struct
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field

import pygltflib

from elementifc.geometry.triangulation import Triangle

logger = logging.getLogger(__name__)

_GLB_MAGIC = b"glTF"
_TRIANGLES_MODE = 4

# componentType -> (struct format char, byte size)
_COMPONENT_FORMATS: dict[int, tuple[str, int]] = {
    pygltflib.BYTE: ("b", 1),
    pygltflib.UNSIGNED_BYTE: ("B", 1),
    pygltflib.SHORT: ("h", 2),
    pygltflib.UNSIGNED_SHORT: ("H", 2),
    pygltflib.UNSIGNED_INT: ("I", 4),
    pygltflib.FLOAT: ("f", 4),
}

_TYPE_WIDTH: dict[str, int] = {
    pygltflib.SCALAR: 1,
    pygltflib.VEC2: 2,
    pygltflib.VEC3: 3,
    pygltflib.VEC4: 4,
}


class DecodeFailure(Exception):
    """Raised when a blob cannot be decoded into mesh data."""


@dataclass
class MeshNode:
    """A glTF node that carries a mesh, with its decoded triangles."""

    index: int
    name: str
    triangles: list[Triangle] = field(default_factory=list)


@dataclass
class DecodedBlob:
    """Node-addressable mesh data for one GLB payload."""

    blob_id: str
    nodes: list[MeshNode] = field(default_factory=list)

    def select(self, selection: str, exact: bool) -> list[list[Triangle]]:
        """Triangle lists of matching nodes, in node order.

        Exact matching compares the node name for equality; otherwise a
        node matches when its name starts with *selection*.
        """
        groups: list[list[Triangle]] = []
        for node in self.nodes:
            matched = node.name == selection if exact else node.name.startswith(selection)
            if matched and node.triangles:
                groups.append(node.triangles)
        return groups


def _read_accessor(gltf: pygltflib.GLTF2, blob: bytes, accessor_index: int) -> list[tuple]:
    """Return the elements of an accessor as tuples of numbers."""
    accessor = gltf.accessors[accessor_index]
    if accessor.bufferView is None:
        raise DecodeFailure(f"Accessor {accessor_index} has no buffer view")
    if accessor.componentType not in _COMPONENT_FORMATS or accessor.type not in _TYPE_WIDTH:
        raise DecodeFailure(
            f"Accessor {accessor_index} has unsupported layout "
            f"({accessor.componentType}, {accessor.type})"
        )

    view = gltf.bufferViews[accessor.bufferView]
    fmt_char, size = _COMPONENT_FORMATS[accessor.componentType]
    width = _TYPE_WIDTH[accessor.type]
    element_format = "<" + fmt_char * width
    stride = view.byteStride or size * width
    start = (view.byteOffset or 0) + (accessor.byteOffset or 0)

    end = start + stride * (accessor.count - 1) + size * width if accessor.count else start
    if end > len(blob):
        raise DecodeFailure(f"Accessor {accessor_index} reads past the end of the buffer")

    return [struct.unpack_from(element_format, blob, start + i * stride) for i in range(accessor.count)]


def _primitive_triangles(gltf: pygltflib.GLTF2, blob: bytes, primitive: pygltflib.Primitive) -> list[Triangle]:
    mode = _TRIANGLES_MODE if primitive.mode is None else primitive.mode
    if mode != _TRIANGLES_MODE:
        logger.debug("Skipping primitive with mode %s", mode)
        return []

    position_accessor = primitive.attributes.POSITION
    if position_accessor is None:
        return []
    positions = [tuple(float(c) for c in p) for p in _read_accessor(gltf, blob, position_accessor)]

    if primitive.indices is not None:
        indices = [i[0] for i in _read_accessor(gltf, blob, primitive.indices)]
    else:
        indices = list(range(len(positions)))

    if len(indices) % 3 != 0:
        raise DecodeFailure(f"Index count {len(indices)} is not a multiple of 3")

    try:
        return [
            (positions[indices[i]], positions[indices[i + 1]], positions[indices[i + 2]])
            for i in range(0, len(indices), 3)
        ]
    except IndexError as exc:
        raise DecodeFailure("Triangle index out of range of the position accessor") from exc


def decode_glb(blob_id: str, data: bytes) -> DecodedBlob:
    """Decode a GLB payload into a DecodedBlob.

    Raises DecodeFailure for empty or malformed payloads.
    """
    if not data:
        raise DecodeFailure(f"Blob {blob_id} is empty")
    if data[:4] != _GLB_MAGIC:
        raise DecodeFailure(f"Blob {blob_id} is not a GLB payload")

    try:
        gltf = pygltflib.GLTF2.load_from_bytes(data)
    except Exception as exc:
        raise DecodeFailure(f"Blob {blob_id} is not a valid GLB: {exc}") from exc
    if gltf is None:
        raise DecodeFailure(f"Blob {blob_id} is not a valid GLB")

    blob = gltf.binary_blob() or b""
    decoded = DecodedBlob(blob_id=blob_id)
    mesh_cache: dict[int, list[Triangle]] = {}

    for node_index, node in enumerate(gltf.nodes):
        if node.mesh is None:
            continue
        if node.mesh not in mesh_cache:
            triangles: list[Triangle] = []
            for primitive in gltf.meshes[node.mesh].primitives:
                triangles.extend(_primitive_triangles(gltf, blob, primitive))
            mesh_cache[node.mesh] = triangles
        decoded.nodes.append(
            MeshNode(
                index=node_index,
                name=node.name or f"node_{node_index}",
                triangles=mesh_cache[node.mesh],
            )
        )

    logger.info("Decoded blob %s: %d mesh nodes", blob_id, len(decoded.nodes))
    return decoded


class GLBReader:
    """Decode-once cache of GLB blobs keyed by blob id.

    Safe to share between threads: the first caller for a blob id decodes
    it, concurrent callers for the same id wait for that result.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, Future[DecodedBlob]] = {}

    def is_cached(self, blob_id: str) -> bool:
        with self._lock:
            entry = self._entries.get(blob_id)
        return entry is not None and entry.done() and entry.exception() is None

    def parse_and_cache(self, blob_id: str, data: bytes) -> DecodedBlob:
        """Return the decoded blob, decoding *data* only on first request.

        A failed decode is cached too, so every caller for that id sees the
        same DecodeFailure.
        """
        with self._lock:
            entry = self._entries.get(blob_id)
            owner = entry is None
            if owner:
                entry = Future()
                self._entries[blob_id] = entry

        if owner:
            try:
                entry.set_result(decode_glb(blob_id, data))
            except DecodeFailure as exc:
                entry.set_exception(exc)
            except Exception as exc:
                entry.set_exception(DecodeFailure(f"Blob {blob_id} could not be decoded: {exc}"))

        return entry.result()

    def meshes_for_selection(self, blob_id: str, selection: str, exact: bool) -> list[list[Triangle]]:
        """Triangle lists of the nodes matching *selection* in a cached blob."""
        with self._lock:
            entry = self._entries.get(blob_id)
        if entry is None:
            raise KeyError(f"Blob {blob_id} has not been parsed")
        return entry.result().select(selection, exact)
