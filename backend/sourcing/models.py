"""
Pydantic models for apply-link aggregation
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Link(BaseModel):
    """A discovered apply / announcement link. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(description="Display text")
    url: str = Field(description="Absolute URL, as discovered")
    source: str = Field(description="Producing component, e.g. 'nowcoder.com', 'moka', 'sitemap'")
    description: str = Field(default="", description="Human-readable provenance note")
    collected_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="collectedAt",
        description="Extraction timestamp",
    )

    @classmethod
    def create(cls, title: str, url: str, source: str, description: str = "") -> "Link":
        """Build a link stamped with the current UTC time."""
        return cls(title=title, url=url, source=source, description=description)


class SourceStatus(BaseModel):
    """Outcome of one source during an aggregation run (diagnostics only)"""

    source: str = Field(description="Source name")
    status: str = Field(description="success | empty | error | cached")
    links_count: int = Field(default=0, description="Links contributed before dedup")
    error: Optional[str] = Field(default=None, description="Error message if the source failed")


class LinkSearchResponse(BaseModel):
    """Response model for the aggregated links endpoint with diagnostics"""

    company: str = Field(description="Company name as requested")
    links: List[Link] = Field(description="Deduplicated, capped links")
    sources: List[SourceStatus] = Field(default_factory=list, description="Per-source outcome")
