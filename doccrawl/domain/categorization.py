"""Categorization result types."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Category = Literal["tools", "apis"]
AnalysisCategory = Literal["tools", "apis", "unknown"]

CATEGORIES: tuple[str, ...] = ("tools", "apis")


@dataclass(frozen=True)
class UrlAnalysis:
    category: AnalysisCategory
    confidence: float
    matched_patterns: tuple[str, ...] = ()


@dataclass(frozen=True)
class ContentAnalysis:
    category: AnalysisCategory
    confidence: float
    indicators: tuple[str, ...] = ()


@dataclass(frozen=True)
class CategorizationResult:
    """Final decision: always a concrete category with at least one reason."""

    category: Category
    confidence: float
    reasons: tuple[str, ...]

    def __post_init__(self):
        if self.category not in CATEGORIES:
            raise ValueError(f"invalid category: {self.category!r}")
        if not self.reasons:
            raise ValueError("reasons must not be empty")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence out of range: {self.confidence!r}")
