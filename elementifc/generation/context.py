"""ConversionContext: shared state for converting many elements into one model.

The parent site is resolved once, when the context is built, and every
conversion receives the context explicitly.  Entity creation on the shared
ifcopenshell model is serialised through ``model_lock``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Mapping

import ifcopenshell

from elementifc.config import load_settings
from elementifc.generation.ifc_writer import create_model, find_body_context
from elementifc.readers.glb import GLBReader

logger = logging.getLogger(__name__)


@dataclass
class ConversionContext:
    """Everything a conversion needs besides the element itself.

    Parameters
    ----------
    model:
        The shared output model.
    site:
        The IfcSite new buildings are aggregated into.
    body_context:
        The ``Body`` representation sub-context for shape representations.
    blobs:
        Raw binary payloads keyed by blob id.
    reader:
        Decode-once GLB cache shared by all conversions.
    """

    model: ifcopenshell.file
    site: Any
    body_context: Any
    blobs: Mapping[str, bytes] = field(default_factory=dict)
    reader: GLBReader = field(default_factory=GLBReader)
    model_lock: threading.RLock = field(default_factory=threading.RLock)

    @classmethod
    def create(
        cls,
        blobs: Mapping[str, bytes] | None = None,
        schema: str | None = None,
    ) -> ConversionContext:
        """Build a fresh model (project, units, contexts, site) and wrap it.

        *schema* defaults to ``load_settings().schema_name``.
        """
        if schema is None:
            schema = load_settings().schema_name
        handles = create_model(schema=schema)
        return cls(
            model=handles.model,
            site=handles.site,
            body_context=handles.body_context,
            blobs=dict(blobs or {}),
        )

    @classmethod
    def from_model(
        cls,
        model: ifcopenshell.file,
        blobs: Mapping[str, bytes] | None = None,
    ) -> ConversionContext:
        """Wrap an existing model, resolving its first IfcSite as parent.

        Raises ValueError if the model has no site.
        """
        sites = model.by_type("IfcSite")
        if not sites:
            raise ValueError("Model has no IfcSite to host buildings")
        logger.info("Resolved parent site %s", sites[0].Name)
        return cls(
            model=model,
            site=sites[0],
            body_context=find_body_context(model),
            blobs=dict(blobs or {}),
        )

    def blob_data(self, blob_id: str) -> bytes | None:
        return self.blobs.get(blob_id)
