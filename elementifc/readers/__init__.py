"""Readers for element payloads: GLB mesh blobs and 2.5D footprints."""

from elementifc.readers.footprints import extract_footprint_features
from elementifc.readers.glb import DecodedBlob, DecodeFailure, GLBReader, decode_glb

__all__ = [
    "DecodeFailure",
    "DecodedBlob",
    "GLBReader",
    "decode_glb",
    "extract_footprint_features",
]
