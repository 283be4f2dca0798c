"""Section registry for the detail-page sections of the site."""

from __future__ import annotations

from .base import MockArticle, MockRelated, SectionProfile
from .follow_up import FollowUpSection
from .markets import MarketsSection
from .news import NewsSection
from .opinion import OpinionSection
from .predictions import PredictionsSection

_SECTION_REGISTRY: dict[str, type[SectionProfile]] = {
    "news": NewsSection,
    "opinion": OpinionSection,
    "follow-up": FollowUpSection,
    "follow_up": FollowUpSection,
    "followup": FollowUpSection,
    "markets": MarketsSection,
    "predictions": PredictionsSection,
}


def available_sections() -> list[str]:
    """Return the canonical section names."""
    return sorted({builder.name for builder in _SECTION_REGISTRY.values()})


def get_section(name: str) -> SectionProfile:
    """Build the profile registered under name."""
    key = name.lower().strip()
    builder = _SECTION_REGISTRY.get(key)
    if builder is None:
        supported = ", ".join(available_sections())
        raise ValueError(f"Unsupported section: {name}. Supported: {supported}")
    return builder()


__all__ = [
    "SectionProfile",
    "MockArticle",
    "MockRelated",
    "available_sections",
    "get_section",
]
