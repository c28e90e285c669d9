"""Submitted link service layer - submission, moderation and the approved-link read side."""
from datetime import datetime, timezone
from typing import Callable, List, Optional
from sqlalchemy.orm import Session
from models.submitted_link import LinkType, SubmissionStatus, SubmittedLink
from sourcing.models import Link

SUBMITTED_SOURCE = "submitted"
SUBMITTED_DESCRIPTION = "Source: reviewed submission"


def submit_link(
    db: Session,
    company_name: str,
    url: str,
    title: Optional[str] = None,
    link_type: str = LinkType.APPLY,
    source: str = "user",
    remarks: Optional[str] = None,
) -> SubmittedLink:
    """
    Submit a link for moderation. Starts as PENDING.

    Args:
        db: Database session
        company_name: Company the link belongs to
        url: Apply / announcement URL
        title: Display title (optional)
        link_type: LinkType.APPLY or LinkType.ANNOUNCEMENT
        source: Submitter kind (user / company / admin)
        remarks: Free-form note for moderators

    Returns:
        Created SubmittedLink

    Raises:
        ValueError: If company_name or url is blank, or link_type is unknown
    """
    if not company_name or not company_name.strip():
        raise ValueError("company_name is required")
    if not url or not url.strip():
        raise ValueError("url is required")
    if link_type not in (LinkType.APPLY, LinkType.ANNOUNCEMENT):
        raise ValueError(f"Unknown link type '{link_type}'")

    link = SubmittedLink(
        company_name=company_name.strip(),
        url=url.strip(),
        title=title,
        type=link_type,
        source=source,
        remarks=remarks,
        status=SubmissionStatus.PENDING,
        valid=True,
        failure_count=0,
    )
    db.add(link)
    db.commit()
    db.refresh(link)
    return link


def find_by_id(db: Session, link_id: int) -> Optional[SubmittedLink]:
    """Get a submission by ID, or None."""
    return db.query(SubmittedLink).filter(SubmittedLink.id == link_id).first()


def _update_status(db: Session, link_id: int, status: str) -> Optional[SubmittedLink]:
    link = find_by_id(db, link_id)
    if not link:
        return None
    link.status = status
    link.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(link)
    return link


def approve_link(db: Session, link_id: int) -> Optional[SubmittedLink]:
    """Mark a submission APPROVED. Returns None if not found."""
    return _update_status(db, link_id, SubmissionStatus.APPROVED)


def reject_link(db: Session, link_id: int) -> Optional[SubmittedLink]:
    """Mark a submission REJECTED. Returns None if not found."""
    return _update_status(db, link_id, SubmissionStatus.REJECTED)


def list_submissions(
    db: Session,
    company_name: Optional[str] = None,
    status: Optional[str] = None,
) -> List[SubmittedLink]:
    """
    List submissions, optionally filtered by company and status.

    Ordered by submission time (oldest first) for moderation queues.
    """
    query = db.query(SubmittedLink)
    if company_name and company_name.strip():
        query = query.filter(SubmittedLink.company_name == company_name.strip())
    if status and status.strip():
        query = query.filter(SubmittedLink.status == status.strip().upper())
    return query.order_by(SubmittedLink.submitted_at, SubmittedLink.id).all()


def _approved(db: Session, company_name: str, link_type: str) -> List[SubmittedLink]:
    return db.query(SubmittedLink).filter(
        SubmittedLink.company_name == company_name,
        SubmittedLink.status == SubmissionStatus.APPROVED,
        SubmittedLink.type == link_type,
        SubmittedLink.valid.is_(True),
        SubmittedLink.expire_at.is_(None),
    ).order_by(SubmittedLink.id).all()


def to_link(row: SubmittedLink, default_title: str) -> Link:
    """Convert a moderated row into an aggregation Link."""
    return Link(
        title=row.title or default_title,
        url=row.url,
        source=row.source or SUBMITTED_SOURCE,
        description=SUBMITTED_DESCRIPTION,
        collected_at=row.updated_at or datetime.now(timezone.utc),
    )


def list_approved_apply_links(db: Session, company_name: str) -> List[Link]:
    """Approved, valid, unexpired APPLY links for a company."""
    return [to_link(row, "Apply entry") for row in _approved(db, company_name, LinkType.APPLY)]


def list_approved_announcement_links(db: Session, company_name: str) -> List[Link]:
    """Approved, valid, unexpired ANNOUNCEMENT links for a company."""
    return [
        to_link(row, "Announcement")
        for row in _approved(db, company_name, LinkType.ANNOUNCEMENT)
    ]


class SubmissionLinkProvider:
    """
    Approved-link provider backed by the database.

    Opens one short-lived session per call so it can be used from the
    aggregator's executor threads.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def list_approved_apply_links(self, company_name: str) -> List[Link]:
        db = self.session_factory()
        try:
            return list_approved_apply_links(db, company_name)
        finally:
            db.close()

    def list_approved_announcement_links(self, company_name: str) -> List[Link]:
        db = self.session_factory()
        try:
            return list_approved_announcement_links(db, company_name)
        finally:
            db.close()
