"""IFC model setup and file output: wraps ifcopenshell.

``create_model`` builds an empty IFC4 model with a project, metre units,
a ``Body`` geometric sub-context and one site.  ``write_ifc`` serialises
a model to disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import ifcopenshell
import ifcopenshell.api

from elementifc.config import (
    BODY_IDENTIFIER,
    DEFAULT_SCHEMA,
    PROJECT_NAME,
    SITE_NAME,
    SUPPORTED_SCHEMAS,
)

logger = logging.getLogger(__name__)


@dataclass
class ModelHandles:
    """The model plus the entities every conversion needs to reference."""

    model: ifcopenshell.file
    project: Any
    site: Any
    body_context: Any


def create_placement(
    model: ifcopenshell.file,
    location: tuple[float, float, float] = (0.0, 0.0, 0.0),
    relative_to: Any | None = None,
) -> Any:
    """Return an IfcLocalPlacement at *location*, axis-aligned."""
    axis = model.createIfcAxis2Placement3D(
        model.createIfcCartesianPoint([float(c) for c in location]),
        model.createIfcDirection([0.0, 0.0, 1.0]),
        model.createIfcDirection([1.0, 0.0, 0.0]),
    )
    return model.createIfcLocalPlacement(relative_to, axis)


def _assign_metre_units(model: ifcopenshell.file, project: Any) -> None:
    length = model.createIfcSIUnit(None, "LENGTHUNIT", None, "METRE")
    area = model.createIfcSIUnit(None, "AREAUNIT", None, "SQUARE_METRE")
    volume = model.createIfcSIUnit(None, "VOLUMEUNIT", None, "CUBIC_METRE")
    angle = model.createIfcSIUnit(None, "PLANEANGLEUNIT", None, "RADIAN")
    project.UnitsInContext = model.createIfcUnitAssignment([length, area, volume, angle])


def create_model(schema: str = DEFAULT_SCHEMA, project_name: str = PROJECT_NAME) -> ModelHandles:
    """Create an IFC model ready to receive buildings."""
    if schema not in SUPPORTED_SCHEMAS:
        raise ValueError(f"Unsupported IFC schema: {schema}")

    model = ifcopenshell.file(schema=schema)
    project = ifcopenshell.api.run(
        "root.create_entity", model, ifc_class="IfcProject", name=project_name
    )
    _assign_metre_units(model, project)

    ctx = ifcopenshell.api.run("context.add_context", model, context_type="Model")
    body = ifcopenshell.api.run(
        "context.add_context",
        model,
        context_type="Model",
        context_identifier=BODY_IDENTIFIER,
        target_view="MODEL_VIEW",
        parent=ctx,
    )

    site = ifcopenshell.api.run("root.create_entity", model, ifc_class="IfcSite", name=SITE_NAME)
    ifcopenshell.api.run("aggregate.assign_object", model, products=[site], relating_object=project)
    site.ObjectPlacement = create_placement(model)

    logger.info("Created %s model with site %s", schema, site.Name)
    return ModelHandles(model=model, project=project, site=site, body_context=body)


def find_body_context(model: ifcopenshell.file) -> Any:
    """Return the ``Body`` sub-context of *model*, creating one if missing."""
    for ctx in model.by_type("IfcGeometricRepresentationSubContext"):
        if ctx.ContextIdentifier == BODY_IDENTIFIER:
            return ctx

    parents = [
        c
        for c in model.by_type("IfcGeometricRepresentationContext", include_subtypes=False)
        if c.ContextType == "Model"
    ]
    parent = parents[0] if parents else ifcopenshell.api.run(
        "context.add_context", model, context_type="Model"
    )
    return ifcopenshell.api.run(
        "context.add_context",
        model,
        context_type="Model",
        context_identifier=BODY_IDENTIFIER,
        target_view="MODEL_VIEW",
        parent=parent,
    )


def write_ifc(model: ifcopenshell.file, path: str | Path) -> Path:
    """Write *model* to *path* and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    model.write(str(path))
    logger.info("Wrote IFC to %s", path)
    return path
