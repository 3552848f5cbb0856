"""Schemas for the Bursa API (status + submission) and the wizard views."""

import enum

from pydantic import Field

from bursa_signup.schemas.draft import CamelModel, DraftSubmission


class ReviewStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


# ── Status Service ──────────────────────────────────────────

class StatusUser(CamelModel):
    email: str
    name: str | None = None


class SubmissionRecord(CamelModel):
    id: str
    name: str
    status: ReviewStatus
    created_at: str
    is_online_business: bool = False


class SubmissionStatus(CamelModel):
    """Normalised status: the single-record response shape is folded into
    this one by the API client."""
    user: StatusUser
    submissions: list[SubmissionRecord] = []
    can_submit_more: bool
    remaining_slots: int


# ── Submission Service ──────────────────────────────────────

class SubmittedBusiness(CamelModel):
    id: str
    name: str
    status: str


class SubmitResult(CamelModel):
    success: bool = True
    business: SubmittedBusiness | None = None


# ── Views returned by this API ──────────────────────────────

class MediaFieldState(CamelModel):
    busy: bool = False
    pending: int = 0
    error: str | None = None


class WizardView(CamelModel):
    variant: str
    current_step: int
    total_steps: int
    error: str | None = None
    submitting: bool = False
    user: StatusUser
    remaining_slots: int
    draft: DraftSubmission
    logo: MediaFieldState = Field(default_factory=MediaFieldState)
    photos: MediaFieldState = Field(default_factory=MediaFieldState)


class SubmitResponse(CamelModel):
    """Returned when a submit attempt did not end the wizard."""
    outcome: str
    wizard: WizardView


class SubmissionSummary(SubmissionRecord):
    title: str
    description: str


class ManageView(CamelModel):
    user: StatusUser
    submissions: list[SubmissionSummary]
    can_submit_more: bool
    remaining_slots: int
