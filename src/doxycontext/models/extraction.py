from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ExtractionWarning(BaseModel):
    """A sub-extraction that failed and was skipped."""

    model_config = ConfigDict(frozen=True)

    source: str  # URL or listing page that could not be processed
    message: str


@dataclass(frozen=True)
class Extraction(Generic[T]):
    """Best-effort result: a value plus the non-fatal failures absorbed while building it."""

    value: T
    warnings: list[ExtractionWarning] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.warnings
