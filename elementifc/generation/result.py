"""BuildResult: outcome of converting one element (or one builder step)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Why a conversion produced no (or only partial) geometry."""

    MISSING_INPUT = "missing_input"
    SEQUENCE_BOUNDARY = "sequence_boundary"
    MISSING_PRECEDING_STOREY = "missing_preceding_storey"
    DECODE_FAILURE = "decode_failure"
    UNEXPECTED = "unexpected"


@dataclass
class BuildResult:
    """Success flag plus, on failure, the error kind and a message.

    ``entities`` lists the IFC entities a builder attached, in creation
    order.  On failure it still holds whatever was created before the
    failure was detected.
    """

    success: bool = True
    error: ErrorKind | None = None
    message: str = ""
    entities: list[Any] = field(default_factory=list)

    @classmethod
    def ok(cls, entities: list[Any] | None = None, message: str = "") -> BuildResult:
        return cls(success=True, entities=list(entities or []), message=message)

    @classmethod
    def failure(
        cls,
        error: ErrorKind,
        message: str,
        entities: list[Any] | None = None,
    ) -> BuildResult:
        return cls(success=False, error=error, message=message, entities=list(entities or []))

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "error": self.error.value if self.error else None,
            "message": self.message,
            "entities": [e.is_a() if hasattr(e, "is_a") else str(e) for e in self.entities],
        }
