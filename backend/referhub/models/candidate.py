import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship

from referhub.db.base import Base

# Review states a referral moves through. Nothing else is ever stored.
CANDIDATE_STATUSES = ["Pending", "Reviewed", "Hired"]
DEFAULT_STATUS = "Pending"


def _new_candidate_id() -> str:
    return uuid.uuid4().hex


class Candidate(Base):
    """A referred person with contact info, target job and review status."""

    __tablename__ = "candidates"

    id = Column(String(32), primary_key=True, default=_new_candidate_id)
    referred_by = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    job_title = Column(String, nullable=False)

    # Hosted file URL, set only after a successful upload
    resume_url = Column(String, nullable=True)

    status = Column(String, default=DEFAULT_STATUS, nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)

    # Relationships
    referrer = relationship("User", back_populates="referrals")
