"""Client for the Bursa API: the Status Service and the Submission Service.

Both live at ``/api/submissions`` and authenticate with the user's
Supabase access token as a bearer token.
"""

import logging
from typing import Any, Protocol

import httpx

from bursa_signup.catalog import FormVariant
from bursa_signup.config import settings
from bursa_signup.middleware.exceptions import ServiceUnavailableError
from bursa_signup.schemas.submission import SubmissionStatus, SubmitResult

logger = logging.getLogger(__name__)

SUBMISSIONS_PATH = "/api/submissions"
STATUS_FAILED_MESSAGE = "Failed to check submission status"
STATUS_LOAD_FAILED_MESSAGE = "Gagal memuat data. Silakan refresh halaman."
SUBMIT_FAILED_MESSAGE = "Failed to submit business"
SUBMIT_UNREACHABLE_MESSAGE = "Gagal mengirim data. Silakan coba lagi."


class BursaApiError(ServiceUnavailableError):
    """Base for failures talking to the Bursa API."""


class StatusServiceError(BursaApiError):
    def __init__(self, message: str = STATUS_FAILED_MESSAGE):
        super().__init__(message, error_code="STATUS_SERVICE_ERROR")


class SubmissionServiceError(BursaApiError):
    """Carries the service's own message so it can be shown verbatim."""

    def __init__(self, message: str = SUBMIT_FAILED_MESSAGE):
        super().__init__(message, error_code="SUBMISSION_SERVICE_ERROR")


class StatusService(Protocol):
    async def check_submission_status(self, token: str) -> SubmissionStatus: ...


class SubmissionService(Protocol):
    async def submit_business(self, token: str, payload: dict[str, Any]) -> SubmitResult: ...


def normalize_status(data: dict[str, Any], cap: int) -> SubmissionStatus:
    """Fold either status response shape into a SubmissionStatus.

    The single-submission shape (``{"user", "submission"}``) has no
    eligibility fields; they are derived here against ``cap``.
    """
    if "submissions" in data or "canSubmitMore" in data:
        return SubmissionStatus.model_validate(data)

    record = data.get("submission")
    submissions = [record] if record else []
    remaining = max(cap - len(submissions), 0)
    return SubmissionStatus.model_validate({
        "user": data["user"],
        "submissions": submissions,
        "canSubmitMore": remaining > 0,
        "remainingSlots": remaining,
    })


def submission_cap(variant: FormVariant) -> int:
    if variant == FormVariant.SIMPLE:
        return settings.max_submissions_simple
    return settings.max_submissions_full


class BursaApiClient:
    """Implements StatusService and SubmissionService over one httpx client."""

    def __init__(self, client: httpx.AsyncClient, variant: FormVariant = FormVariant.FULL):
        self.client = client
        self.variant = variant

    @staticmethod
    def _auth(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    async def check_submission_status(self, token: str) -> SubmissionStatus:
        try:
            response = await self.client.get(SUBMISSIONS_PATH, headers=self._auth(token))
        except httpx.HTTPError as e:
            logger.error(f"Status service unreachable: {e}")
            raise StatusServiceError() from e

        if response.is_error:
            logger.warning(
                f"Status service returned {response.status_code}",
                extra={"status_code": response.status_code},
            )
            raise StatusServiceError()

        try:
            return normalize_status(response.json(), submission_cap(self.variant))
        except (ValueError, KeyError) as e:
            logger.error(f"Malformed status response: {e}")
            raise StatusServiceError() from e

    async def submit_business(self, token: str, payload: dict[str, Any]) -> SubmitResult:
        try:
            response = await self.client.post(
                SUBMISSIONS_PATH,
                headers=self._auth(token),
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error(f"Submission service unreachable: {e}")
            raise SubmissionServiceError(SUBMIT_UNREACHABLE_MESSAGE) from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = (isinstance(body, dict) and body.get("error")) or SUBMIT_FAILED_MESSAGE
            logger.warning(
                f"Submission rejected ({response.status_code}): {message}",
                extra={"status_code": response.status_code},
            )
            raise SubmissionServiceError(message)

        # Any 2xx means the business is stored, whatever the body looks like.
        try:
            return SubmitResult.model_validate(response.json())
        except ValueError as e:
            logger.warning(
                f"Unexpected submission response body ({response.status_code}): {e}",
                extra={"status_code": response.status_code},
            )
            return SubmitResult(success=True, business=None)

    async def ping(self) -> bool:
        """Reachability probe for the readiness check."""
        try:
            response = await self.client.get("/", timeout=5.0)
        except httpx.HTTPError:
            return False
        return response.status_code < 500


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.bursa_api_url,
        timeout=settings.bursa_api_timeout_seconds,
    )
