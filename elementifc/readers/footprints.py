"""Footprint extraction from GeoJSON-style 2.5D payloads.

The payload stored under ``volume25DCollection`` is a GeoJSON
FeatureCollection (as a dict, or JSON text/bytes).  Each Polygon feature
becomes a FootprintFeature; its height comes from ``properties.height``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from elementifc.models.element import Point3D
from elementifc.models.footprint import FootprintFeature

logger = logging.getLogger(__name__)


def _to_point(coord: Any) -> Point3D:
    """Convert a GeoJSON position ([x, y] or [x, y, z]) to a Point3D."""
    if len(coord) < 2:
        raise ValueError(f"Position needs at least two components: {coord!r}")
    z = float(coord[2]) if len(coord) > 2 else 0.0
    return Point3D(x=float(coord[0]), y=float(coord[1]), z=z)


def _parse_height(properties: dict[str, Any]) -> float | None:
    value = properties.get("height")
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _feature_from_geojson(feature: dict[str, Any]) -> FootprintFeature | None:
    geometry = feature.get("geometry") or {}
    properties = feature.get("properties") or {}

    if geometry.get("type") != "Polygon":
        logger.debug("Skipping feature with geometry type %s", geometry.get("type"))
        return None

    rings = [[_to_point(c) for c in ring] for ring in geometry.get("coordinates") or []]
    return FootprintFeature(
        rings=rings,
        height=_parse_height(properties),
        properties=properties,
    )


def extract_footprint_features(payload: Any) -> list[FootprintFeature]:
    """Return the footprint features contained in a 2.5D payload.

    Accepts a FeatureCollection, a single Feature, or their JSON encoding.
    Non-polygon features are skipped.
    """
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    if isinstance(payload, str):
        payload = json.loads(payload)
    if not isinstance(payload, dict):
        raise ValueError(f"Unsupported footprint payload: {type(payload).__name__}")

    if payload.get("type") == "Feature":
        raw_features = [payload]
    else:
        raw_features = payload.get("features") or []

    features: list[FootprintFeature] = []
    for raw in raw_features:
        feature = _feature_from_geojson(raw)
        if feature is not None:
            features.append(feature)

    logger.debug("Extracted %d footprint features", len(features))
    return features
