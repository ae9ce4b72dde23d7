"""
Candidate referral API endpoints.

List/search, stats, creation with optional resume upload, status updates
and deletion. Every route is scoped to the referrals of the current user.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Response,
    UploadFile,
    status,
)
from pydantic import BaseModel
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from referhub.api.endpoints.auth import get_current_user
from referhub.core import media
from referhub.db.session import get_db
from referhub.models import Candidate, User, CANDIDATE_STATUSES, DEFAULT_STATUS

logger = logging.getLogger("candidates")

router = APIRouter()


# ============== Pydantic Schemas ==============


class CandidateResponse(BaseModel):
    """Schema for a single referral."""

    id: str
    name: str
    email: str
    phone: str
    job_title: str
    resume_url: Optional[str] = None
    status: str
    referred_by: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StatsResponse(BaseModel):
    """Aggregate counts shown on the dashboard."""

    total: int
    pending: int
    reviewed: int
    hired: int


class StatusUpdateRequest(BaseModel):
    status: str


# ============== Helper Functions ==============


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``%`` and ``_`` match literally (escape char ``\\``)."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def get_owned_candidate(db: Session, candidate_id: str, user: User) -> Candidate:
    """Fetch a referral of ``user`` or raise 404."""
    candidate = (
        db.query(Candidate)
        .filter(Candidate.id == candidate_id, Candidate.referred_by == user.id)
        .first()
    )
    if not candidate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidate not found",
        )
    return candidate


def compute_stats(db: Session, user: User) -> StatsResponse:
    rows = (
        db.query(Candidate.status, func.count(Candidate.id))
        .filter(Candidate.referred_by == user.id)
        .group_by(Candidate.status)
        .all()
    )
    counts = {row_status: count for row_status, count in rows}

    return StatsResponse(
        total=sum(counts.values()),
        pending=counts.get("Pending", 0),
        reviewed=counts.get("Reviewed", 0),
        hired=counts.get("Hired", 0),
    )


# ============== API Endpoints ==============


@router.get("", response_model=list[CandidateResponse])
async def list_candidates(
    search: Optional[str] = None,
    status_filter: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    List the current user's referrals, newest first.

    Optional filters:
    - search: case-insensitive match against name or job title
    - status_filter: Pending, Reviewed or Hired
    """
    query = db.query(Candidate).filter(Candidate.referred_by == current_user.id)

    if search and search.strip():
        pattern = f"%{escape_like(search.strip())}%"
        query = query.filter(
            or_(
                Candidate.name.ilike(pattern, escape="\\"),
                Candidate.job_title.ilike(pattern, escape="\\"),
            )
        )

    if status_filter:
        query = query.filter(Candidate.status == status_filter)

    return query.order_by(Candidate.created_at.desc()).all()


@router.get("/stats", response_model=StatsResponse)
async def candidate_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Total referrals plus one count per status."""
    return compute_stats(db, current_user)


@router.post("", response_model=CandidateResponse, status_code=status.HTTP_201_CREATED)
async def create_candidate(
    name: str = Form(...),
    email: str = Form(...),
    phone: str = Form(...),
    job_title: str = Form(...),
    resume: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Refer a new candidate.

    Submitted as multipart form data. The resume part is optional; when
    present it is uploaded to Cloudinary and the hosted URL is stored.
    """
    fields = {
        "name": name.strip(),
        "email": email.strip(),
        "phone": phone.strip(),
        "job_title": job_title.strip(),
    }
    missing = [key for key, value in fields.items() if not value]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields: {', '.join(missing)}",
        )

    resume_url = None
    if resume is not None and resume.filename:
        try:
            resume_url = await run_in_threadpool(
                media.upload_resume, resume.file, resume.filename
            )
        except media.MediaUploadError as e:
            logger.error(f"Resume upload failed for user {current_user.id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Resume upload failed",
            )
        finally:
            await resume.close()

    candidate = Candidate(
        referred_by=current_user.id,
        resume_url=resume_url,
        status=DEFAULT_STATUS,
        **fields,
    )
    db.add(candidate)
    db.commit()
    db.refresh(candidate)

    logger.info(f"User {current_user.id} referred candidate {candidate.id}")
    return candidate


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(
    candidate_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_owned_candidate(db, candidate_id, current_user)


@router.put("/{candidate_id}/status", response_model=CandidateResponse)
async def update_candidate_status(
    candidate_id: str,
    request: StatusUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Move a referral to Pending, Reviewed or Hired."""
    if request.status not in CANDIDATE_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status. Must be one of: {CANDIDATE_STATUSES}",
        )

    candidate = get_owned_candidate(db, candidate_id, current_user)
    candidate.status = request.status
    db.commit()
    db.refresh(candidate)

    logger.info(f"Updated candidate {candidate_id} status to: {request.status}")
    return candidate


@router.delete("/{candidate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_candidate(
    candidate_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    candidate = get_owned_candidate(db, candidate_id, current_user)
    db.delete(candidate)
    db.commit()

    logger.info(f"User {current_user.id} deleted candidate {candidate_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
