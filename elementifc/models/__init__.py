"""Input data models."""

from elementifc.models.element import (
    BuildingDetails,
    BuildingElement,
    BuildingGeometry,
    Level,
    Loop,
    Point3D,
    VolumeMeshRef,
)
from elementifc.models.footprint import FootprintFeature

__all__ = [
    "BuildingDetails",
    "BuildingElement",
    "BuildingGeometry",
    "FootprintFeature",
    "Level",
    "Loop",
    "Point3D",
    "VolumeMeshRef",
]
