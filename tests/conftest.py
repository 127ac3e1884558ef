"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from elementifc.generation.context import ConversionContext
from tests.helpers import A, B, C, D, make_glb


@pytest.fixture
def two_triangle_glb() -> bytes:
    return make_glb([("building-1", [A, B, C, B, C, D], None)])


@pytest.fixture
def context() -> ConversionContext:
    return ConversionContext.create()
