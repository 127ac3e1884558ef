"""elementifc: building-element descriptions to IFC4 geometry."""

__version__ = "0.1.0"

from elementifc.config import Settings, configure_logging, load_settings
from elementifc.generation import (
    BuildResult,
    ConversionContext,
    DetailedBuildingGenerator,
    ErrorKind,
    Strategy,
    convert_elements,
    create_model,
    load_elements,
    select_strategy,
    write_ifc,
)
from elementifc.models import BuildingElement, FootprintFeature, Level, Loop, Point3D, VolumeMeshRef
from elementifc.readers import DecodeFailure, GLBReader, extract_footprint_features

__all__ = [
    "__version__",
    # Conversion
    "BuildResult",
    "ConversionContext",
    "DetailedBuildingGenerator",
    "ErrorKind",
    "Strategy",
    "convert_elements",
    "create_model",
    "load_elements",
    "select_strategy",
    "write_ifc",
    # Models
    "BuildingElement",
    "FootprintFeature",
    "Level",
    "Loop",
    "Point3D",
    "VolumeMeshRef",
    # Readers
    "DecodeFailure",
    "GLBReader",
    "extract_footprint_features",
    # Config
    "Settings",
    "configure_logging",
    "load_settings",
]
