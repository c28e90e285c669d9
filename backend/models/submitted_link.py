from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import Boolean, Integer, String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from models import Base


class LinkType:
    """Submitted link type constants."""
    APPLY = "APPLY"
    ANNOUNCEMENT = "ANNOUNCEMENT"


class SubmissionStatus:
    """Moderation status constants."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


class SubmittedLink(Base):
    """
    Model for human-submitted apply / announcement links.

    Only APPROVED, valid, unexpired rows take part in aggregation.
    """
    __tablename__ = "submitted_links"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    company_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)

    type: Mapped[str] = mapped_column(String(20), nullable=False, default=LinkType.APPLY)
    source: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # user | company | admin
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SubmissionStatus.PENDING
    )
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Maintained by the external health-check sweep
    valid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    failure_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_checked_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    expire_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self) -> str:
        return f"<SubmittedLink(id={self.id}, company='{self.company_name}', type='{self.type}', status='{self.status}')>"
