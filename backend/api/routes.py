"""
API routes for company link lookup.

Endpoints:
- GET /api/companies/jobs?name=...            Aggregated apply links
- GET /api/companies/jobs/status?name=...     Same, with per-source diagnostics
- GET /api/companies/announcements?name=...   Approved announcement links

Running locally:
    cd backend
    uvicorn main:app --reload
"""

import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from db.session import get_db
from db.submission_service import list_approved_announcement_links
from sourcing.models import Link, LinkSearchResponse
from sourcing.orchestrator import LinkAggregator, get_aggregator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/companies/jobs", response_model=list[Link])
async def get_company_jobs(
    name: str = Query(..., description="Company name"),
    aggregator: LinkAggregator = Depends(get_aggregator),
):
    """
    Aggregate apply links for a company.

    Called on demand (when a user opens a company), never in bulk, to keep
    request volume to third-party sites low. A blank name returns [].

    Example:
        GET /api/companies/jobs?name=字节跳动

        Response:
        [
            {
                "title": "校招投递",
                "url": "https://jobs.bytedance.com/campus",
                "source": "nowcoder.com",
                "description": "Source: nowcoder.com",
                "collectedAt": "2026-10-18T03:00:00Z"
            },
            ...
        ]
    """
    return await aggregator.search_links(name)


@router.get("/companies/jobs/status", response_model=LinkSearchResponse)
async def get_company_jobs_with_status(
    name: str = Query(..., description="Company name"),
    aggregator: LinkAggregator = Depends(get_aggregator),
):
    """Aggregate apply links and report what each source contributed."""
    links, statuses = await aggregator.search_links_with_status(name)
    return LinkSearchResponse(company=name, links=links, sources=statuses)


@router.get("/companies/announcements", response_model=list[Link])
def get_company_announcements(
    name: str = Query(..., description="Company name"),
    db: Session = Depends(get_db),
):
    """Approved announcement links for a company (moderated submissions only)."""
    if not name.strip():
        return []
    return list_approved_announcement_links(db, name.strip())
