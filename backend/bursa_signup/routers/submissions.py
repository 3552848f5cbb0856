"""Manage view: the account's existing submissions and remaining quota."""

from fastapi import APIRouter, Depends

from bursa_signup.auth.deps import get_bursa_api, require_session
from bursa_signup.auth.session import Session
from bursa_signup.schemas.submission import (
    ManageView,
    ReviewStatus,
    SubmissionSummary,
)
from bursa_signup.services.bursa_api import BursaApiClient

router = APIRouter()

STATUS_COPY: dict[ReviewStatus, tuple[str, str]] = {
    ReviewStatus.PENDING: (
        "Sedang Ditinjau",
        "Bisnis Anda sedang dalam proses review oleh tim kami. "
        "Biasanya membutuhkan waktu 24 jam.",
    ),
    ReviewStatus.APPROVED: (
        "Disetujui",
        "Selamat! Bisnis Anda sudah tampil di peta Bursa dan dapat ditemukan oleh pelanggan.",
    ),
    ReviewStatus.REJECTED: (
        "Ditolak",
        "Maaf, pendaftaran bisnis Anda tidak dapat disetujui. "
        "Silakan hubungi tim kami untuk informasi lebih lanjut.",
    ),
}


@router.get("/status", response_model=ManageView)
async def submission_status(
    session: Session = Depends(require_session),
    bursa_api: BursaApiClient = Depends(get_bursa_api),
):
    """Status Service failures surface as a 503 error envelope; retry is manual."""
    status = await bursa_api.check_submission_status(session.access_token)
    summaries = []
    for record in status.submissions:
        title, description = STATUS_COPY[record.status]
        summaries.append(
            SubmissionSummary(**record.model_dump(), title=title, description=description)
        )
    return ManageView(
        user=status.user,
        submissions=summaries,
        can_submit_more=status.can_submit_more,
        remaining_slots=status.remaining_slots,
    )
