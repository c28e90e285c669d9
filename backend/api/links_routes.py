"""
API routes for link submission and moderation.

Endpoints:
- POST /api/links/submit              Submit an apply / announcement link (PENDING)
- GET  /api/links/moderate            Moderation queue (admin)
- POST /api/links/{link_id}/approve   Approve a submission (admin)
- POST /api/links/{link_id}/reject    Reject a submission (admin)

Admin endpoints require the X-Admin-Token header.
"""

import logging
from datetime import datetime
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session
from auth.dependencies import require_admin_token
from db.session import get_db
from db.submission_service import (
    submit_link,
    approve_link,
    reject_link,
    list_submissions,
)
from models.submitted_link import LinkType, SubmissionStatus

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================

class SubmitLinkRequest(BaseModel):
    """Request body for a link submission."""
    company_name: str = Field(alias="companyName")
    url: str
    title: Optional[str] = None
    type: Literal['APPLY', 'ANNOUNCEMENT'] = LinkType.APPLY
    source: str = "user"
    remarks: Optional[str] = None

    model_config = {"populate_by_name": True}


class SubmittedLinkResponse(BaseModel):
    """Response model for a single submission."""
    id: int
    company_name: str = Field(serialization_alias="companyName")
    title: Optional[str] = None
    url: str
    type: str
    source: Optional[str] = None
    status: str
    remarks: Optional[str] = None
    submitted_at: datetime = Field(serialization_alias="submittedAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = {"from_attributes": True}


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/submit", response_model=SubmittedLinkResponse)
def submit(request: SubmitLinkRequest, db: Session = Depends(get_db)):
    """
    Submit a link for moderation.

    Example:
        POST /api/links/submit
        {"companyName": "字节跳动", "url": "https://jobs.bytedance.com/campus", "type": "APPLY"}
    """
    if not request.company_name.strip() or not request.url.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="companyName and url are required",
        )

    link = submit_link(
        db,
        company_name=request.company_name,
        url=request.url,
        title=request.title,
        link_type=request.type,
        source=request.source,
        remarks=request.remarks,
    )
    logger.info(f"New {link.type} submission {link.id} for '{link.company_name}'")
    return link


@router.get(
    "/moderate",
    response_model=list[SubmittedLinkResponse],
    dependencies=[Depends(require_admin_token)],
)
def moderation_queue(
    company: Optional[str] = None,
    status_filter: str = Query(default=SubmissionStatus.PENDING, alias="status"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=200, alias="pageSize"),
    db: Session = Depends(get_db),
):
    """List submissions for moderation, paginated (1-based pages)."""
    items = list_submissions(db, company_name=company, status=status_filter)
    start = (page - 1) * page_size
    return items[start:start + page_size]


@router.post(
    "/{link_id}/approve",
    response_model=SubmittedLinkResponse,
    dependencies=[Depends(require_admin_token)],
)
def approve(link_id: int, db: Session = Depends(get_db)):
    """Approve a submission so it joins aggregation."""
    link = approve_link(db, link_id)
    if not link:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
    return link


@router.post(
    "/{link_id}/reject",
    response_model=SubmittedLinkResponse,
    dependencies=[Depends(require_admin_token)],
)
def reject(link_id: int, db: Session = Depends(get_db)):
    """Reject a submission."""
    link = reject_link(db, link_id)
    if not link:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
    return link
