"""Dependency discovery result model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from manifest.models import Dependency


class FetchResult(BaseModel):
    """Outcome of one dependency discovery run.

    ``dependencies`` are unique by name (case-insensitive) and sorted by name;
    ``unresolved`` is unique and sorted; ``warnings`` keep encounter order.
    """

    dependencies: list[Dependency] = Field(default_factory=list)
    unresolved: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def empty(cls, warning: str, warnings: list[str] | None = None) -> FetchResult:
        """Result for a run that stopped early, carrying prior warnings."""
        return cls(warnings=[*(warnings or []), warning])


__all__ = ["FetchResult"]
