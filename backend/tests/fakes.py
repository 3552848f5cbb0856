"""Test doubles for the wizard's collaborators."""

import asyncio

from bursa_signup.auth.session import Session
from bursa_signup.schemas.submission import SubmissionStatus, SubmitResult
from bursa_signup.services.bursa_api import StatusServiceError, SubmissionServiceError
from bursa_signup.services.media_store import MediaUploadError
from bursa_signup.wizard.machine import SubmissionWizard
from bursa_signup.wizard.media import ImageUpload


class FakeRedis:
    """Just enough of redis.asyncio.Redis for token revocation."""

    def __init__(self):
        self.store: dict[str, str] = {}

    async def setex(self, key, ttl, value):
        self.store[key] = value

    async def exists(self, key):
        return 1 if key in self.store else 0

    async def ping(self):
        return True


class FakeSessionProvider:
    def __init__(self, session: Session | None):
        self.session = session
        self.signed_out = False

    async def get_session(self):
        return self.session

    async def sign_out(self):
        self.signed_out = True
        self.session = None


class FakeBursaApi:
    """Status + Submission Service double that records calls.

    Set ``status_error`` to make the status check fail, ``submit_error``
    to make submit fail with that message, or
    ``submit_gate`` (an asyncio.Event) to hold submit until released.
    """

    def __init__(self, status: SubmissionStatus):
        self.status = status
        self.status_calls: list[str] = []
        self.submit_calls: list[tuple[str, dict]] = []
        self.submit_error: str | None = None
        self.submit_gate: asyncio.Event | None = None
        self.status_error: bool = False

    async def check_submission_status(self, token):
        self.status_calls.append(token)
        if self.status_error:
            raise StatusServiceError()
        return self.status

    async def submit_business(self, token, payload):
        self.submit_calls.append((token, payload))
        if self.submit_gate is not None:
            await self.submit_gate.wait()
        if self.submit_error is not None:
            raise SubmissionServiceError(self.submit_error)
        return SubmitResult.model_validate({
            "success": True,
            "business": {"id": "biz-1", "name": payload["name"], "status": "PENDING"},
        })

    async def ping(self):
        return True


class FakeMediaStore:
    """Returns URLs derived from the filename.

    ``delays`` maps filename → seconds to sleep before resolving;
    filenames in ``failing`` raise MediaUploadError.
    """

    def __init__(self, delays: dict[str, float] | None = None, failing: set[str] | None = None):
        self.delays = delays or {}
        self.failing = failing or set()
        self.uploaded: list[str] = []

    async def upload(self, filename, content, content_type):
        await asyncio.sleep(self.delays.get(filename, 0))
        if filename in self.failing:
            raise MediaUploadError("storage down")
        self.uploaded.append(filename)
        return f"https://cdn.test/{filename}"


def image(filename="photo.jpg", size=1024, content_type="image/jpeg") -> ImageUpload:
    return ImageUpload(filename=filename, content_type=content_type, content=b"x" * size)


def fill_valid(wizard: SubmissionWizard) -> None:
    """Fill every required field for a physical business."""
    wizard.change(
        name="Warung Makan Bu Ani",
        description="Masakan rumahan",
        category_slug="food-beverage",
        address="Jl. Merdeka 1",
        city="Bandung",
        phone_number="08123456789",
    )
    wizard.set_location(-6.9175, 107.6191)
