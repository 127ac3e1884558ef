"""FootprintExtrusionBuilder: vertical extrusions of 2.5D footprints."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from elementifc.config import FOOTPRINT_PROFILE_NAME, SWEPT_SOLID_TYPE, VOLUME_25D_KEY
from elementifc.generation.builders.base import GeometryBuilder
from elementifc.generation.result import BuildResult, ErrorKind
from elementifc.models.element import BuildingElement
from elementifc.models.footprint import FootprintFeature
from elementifc.readers.footprints import extract_footprint_features

logger = logging.getLogger(__name__)


class FootprintExtrusionBuilder(GeometryBuilder):
    """Extrude each footprint's outer ring by its height.

    Every extrusion is assigned to the building's Representation, so with
    several features only the last one processed is kept.  Holes are
    ignored.
    """

    @property
    def name(self) -> str:
        return "footprints"

    def build(self, element: BuildingElement, building: Any) -> BuildResult:
        payload = (element.representations or {}).get(VOLUME_25D_KEY)
        if payload is None:
            msg = f"No {VOLUME_25D_KEY} representation for {element.urn}"
            logger.error(msg)
            return BuildResult.failure(ErrorKind.MISSING_INPUT, msg)
        logger.info("Retrieved Volume25D representation for %s", element.urn)
        return self.build_features(extract_footprint_features(payload), building)

    def build_features(self, features: Sequence[FootprintFeature], building: Any) -> BuildResult:
        extrudable = [f for f in features if f.is_extrudable()]
        if not extrudable:
            msg = f"None of {len(features)} footprint features is extrudable"
            logger.error(msg)
            return BuildResult.failure(ErrorKind.MISSING_INPUT, msg)

        solids: list[Any] = []
        with self.context.model_lock:
            for feature in extrudable:
                if feature.holes:
                    logger.debug("Ignoring %d holes of footprint feature", len(feature.holes))
                solid = self._extruded_solid(feature.outer_ring, feature.height, FOOTPRINT_PROFILE_NAME)
                building.Representation = self._product_shape(solid, SWEPT_SOLID_TYPE)
                solids.append(solid)

        logger.info("Volume25D representation created from %d features", len(solids))
        return BuildResult.ok(solids)
