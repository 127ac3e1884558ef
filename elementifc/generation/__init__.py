"""Element-to-IFC generation."""

from elementifc.generation.context import ConversionContext
from elementifc.generation.generator import (
    BUILDER_REGISTRY,
    DetailedBuildingGenerator,
    Strategy,
    convert_elements,
    load_elements,
    select_strategy,
)
from elementifc.generation.ifc_writer import create_model, write_ifc
from elementifc.generation.result import BuildResult, ErrorKind

__all__ = [
    "BUILDER_REGISTRY",
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
]
