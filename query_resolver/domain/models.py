"""Models shared across the resolver and its data sources."""

from __future__ import annotations

from dataclasses import dataclass, field
import datetime as dt
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

ResultT = TypeVar("ResultT")


class ErrorInfo(BaseModel):
    """User-facing description of a failed lookup."""

    model_config = ConfigDict(frozen=True)

    message: str
    error_type: str
    detail: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException, message: str) -> "ErrorInfo":
        return cls(message=message, error_type=exc.__class__.__name__, detail=str(exc))


@dataclass(frozen=True)
class ResolverState(Generic[ResultT]):
    query: str = ""
    results: tuple[ResultT, ...] = field(default_factory=tuple)
    is_loading: bool = False
    error: ErrorInfo | None = None


class CatalogItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    category: str
    author: str
    date: dt.date


class ResultStats(BaseModel):
    total_results: int
    categories: list[str]
    authors: list[str]


__all__ = [
    "CatalogItem",
    "ErrorInfo",
    "ResolverState",
    "ResultStats",
]
