"""DetailedBuildingGenerator: main entry point for element conversion.

Usage::

    from elementifc.generation import ConversionContext, DetailedBuildingGenerator
    from elementifc.models import BuildingElement

    context = ConversionContext.create(blobs={"blob-1": glb_bytes})
    gen = DetailedBuildingGenerator(context)
    result = gen.create(BuildingElement.model_validate(payload))
    write_ifc(context.model, "out.ifc")
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from typing import Any, Iterable

import ifcopenshell.api

from elementifc.config import BUILDING_NAME, VOLUME_25D_KEY, load_settings
from elementifc.generation.builders import (
    FootprintExtrusionBuilder,
    GeometryBuilder,
    MeshTriangulationBuilder,
    StoreyRoofBuilder,
)
from elementifc.generation.context import ConversionContext
from elementifc.generation.ifc_writer import create_placement
from elementifc.generation.result import BuildResult, ErrorKind
from elementifc.models.element import BuildingElement

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    """Which derivation path an element takes."""

    STOREYS = "storeys"
    FOOTPRINTS = "footprints"
    VOLUME_MESH = "volume_mesh"
    NONE = "none"


BUILDER_REGISTRY: dict[Strategy, type[GeometryBuilder]] = {
    Strategy.STOREYS: StoreyRoofBuilder,
    Strategy.FOOTPRINTS: FootprintExtrusionBuilder,
    Strategy.VOLUME_MESH: MeshTriangulationBuilder,
}


def select_strategy(element: BuildingElement) -> Strategy:
    """Pick the derivation path from which inputs are present.

    Priority: explicit level geometry, then a 2.5D footprint payload, then a
    volume mesh reference.
    """
    if element.details is not None and element.details.geometry is not None:
        return Strategy.STOREYS
    if element.representations and VOLUME_25D_KEY in element.representations:
        return Strategy.FOOTPRINTS
    if element.volume_mesh_ref is not None:
        return Strategy.VOLUME_MESH
    return Strategy.NONE


class DetailedBuildingGenerator:
    """Convert BuildingElements into IfcBuildings inside a shared model.

    Parameters
    ----------
    context:
        Shared model, parent site and blob cache.  One context may serve
        many generators and threads.
    """

    def __init__(self, context: ConversionContext) -> None:
        self.context = context

    def create(self, element: BuildingElement) -> BuildResult:
        """Create a building for *element* and derive its geometry.

        Never raises: failures come back as a BuildResult with
        ``success=False``.  Entities created before a failure stay in the
        model.
        """
        try:
            logger.info("Creating geometry for the detailed building element: %s", element.urn)
            building = self._create_building(element)

            strategy = select_strategy(element)
            if strategy is Strategy.NONE:
                msg = f"No representations found for the building. Element Urn: {element.urn}"
                logger.warning(msg)
                return BuildResult.failure(ErrorKind.MISSING_INPUT, msg, [building])

            builder = BUILDER_REGISTRY[strategy](self.context)
            logger.debug("Using %s builder for %s", builder.name, element.urn)
            result = builder.build(element, building)
            result.entities.insert(0, building)
            return result
        except Exception as exc:
            logger.error("Conversion of %s failed: %s", element.urn, exc, exc_info=True)
            return BuildResult.failure(ErrorKind.UNEXPECTED, str(exc))

    def _create_building(self, element: BuildingElement) -> Any:
        model = self.context.model
        with self.context.model_lock:
            building = ifcopenshell.api.run(
                "root.create_entity", model, ifc_class="IfcBuilding", name=BUILDING_NAME
            )
            building.Description = element.urn
            ifcopenshell.api.run(
                "aggregate.assign_object", model, products=[building], relating_object=self.context.site
            )
            building.ObjectPlacement = create_placement(
                model, relative_to=self.context.site.ObjectPlacement
            )
        return building


def convert_elements(
    elements: Iterable[BuildingElement],
    context: ConversionContext,
    max_workers: int | None = None,
) -> dict[str, BuildResult]:
    """Convert a batch of elements into *context*'s model.

    With ``max_workers > 1`` elements are converted on a thread pool; when
    omitted it comes from ``load_settings()``.  Returns results keyed by
    element urn, in input order.

    Raises ValueError, before anything is converted, if two elements share
    a urn.
    """
    elements = list(elements)
    urns = Counter(e.urn for e in elements)
    duplicates = sorted(urn for urn, count in urns.items() if count > 1)
    if duplicates:
        raise ValueError(f"Duplicate element urns in batch: {', '.join(duplicates)}")

    if max_workers is None:
        max_workers = load_settings().max_workers
    generator = DetailedBuildingGenerator(context)

    if max_workers <= 1:
        results = [generator.create(e) for e in elements]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(generator.create, elements))

    succeeded = sum(1 for r in results if r.success)
    logger.info("Conversion complete: %d/%d elements succeeded", succeeded, len(elements))
    return {e.urn: r for e, r in zip(elements, results)}


def load_elements(path: str | Path) -> list[BuildingElement]:
    """Read one element or a list of elements from a JSON file."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Element file not found: {path}")

    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = [raw]
    return [BuildingElement.model_validate(item) for item in raw]
