"""Global configuration: constants and environment-driven settings."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel

# Output schema for generated models
DEFAULT_SCHEMA = "IFC4"
SUPPORTED_SCHEMAS = ("IFC4",)

# Key of the 2.5D footprint payload inside BuildingElement.representations
VOLUME_25D_KEY = "volume25DCollection"

# Default names of generated spatial elements
PROJECT_NAME = "Generated Project"
SITE_NAME = "Site"
BUILDING_NAME = "Building"
STOREY_NAME_TEMPLATE = "Level {index}"

# Shape representation identifiers
BODY_IDENTIFIER = "Body"
SWEPT_SOLID_TYPE = "SweptSolid"
SURFACE_TYPE = "Surface3D"
TESSELLATION_TYPE = "Tessellation"

# Profile names carried over to IfcArbitraryClosedProfileDef.ProfileName
FLOOR_PROFILE_NAME = "Floor loop"
FOOTPRINT_PROFILE_NAME = "curve"

# Environment keys with defaults
_ENV_PREFIX = "ELEMENTIFC_"
_DEFAULTS: dict[str, str] = {
    "SCHEMA": DEFAULT_SCHEMA,
    "LOG_LEVEL": "INFO",
    "MAX_WORKERS": "1",
}


class Settings(BaseModel):
    """Runtime settings, merged from defaults and ``ELEMENTIFC_*`` env vars."""

    schema_name: str = DEFAULT_SCHEMA
    log_level: str = "INFO"
    max_workers: int = 1


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Return Settings: defaults overridden by environment variables."""
    env = os.environ if environ is None else environ
    merged = dict(_DEFAULTS)
    for key in _DEFAULTS:
        value = env.get(_ENV_PREFIX + key)
        if value:
            merged[key] = value

    schema = merged["SCHEMA"].upper()
    if schema not in SUPPORTED_SCHEMAS:
        raise ValueError(f"Unsupported IFC schema: {schema}")

    return Settings(
        schema_name=schema,
        log_level=merged["LOG_LEVEL"].upper(),
        max_workers=max(1, int(merged["MAX_WORKERS"])),
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the ``elementifc`` logger tree."""
    settings = settings or load_settings()
    logging.getLogger("elementifc").setLevel(settings.log_level)
