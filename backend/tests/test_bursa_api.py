"""Bursa API client (Status + Submission Services) over a mocked transport."""

import json

import httpx
import pytest

from bursa_signup.catalog import FormVariant
from bursa_signup.services.bursa_api import (
    SUBMIT_UNREACHABLE_MESSAGE,
    BursaApiClient,
    StatusServiceError,
    SubmissionServiceError,
)

USER = {"email": "ani@example.com", "name": "Bu Ani"}


def _client(handler, variant=FormVariant.FULL) -> BursaApiClient:
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://bursa.test"
    )
    return BursaApiClient(http, variant)


@pytest.mark.asyncio
class TestStatusService:

    async def test_full_response(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["path"] = request.url.path
            return httpx.Response(200, json={
                "user": USER,
                "submissions": [{
                    "id": "b1", "name": "Warung", "status": "APPROVED",
                    "createdAt": "2026-01-01T00:00:00Z", "isOnlineBusiness": False,
                }],
                "canSubmitMore": True,
                "remainingSlots": 4,
            })

        status = await _client(handler).check_submission_status("tok")

        assert seen == {"auth": "Bearer tok", "path": "/api/submissions"}
        assert status.can_submit_more is True
        assert status.remaining_slots == 4
        assert status.submissions[0].status.value == "APPROVED"
        assert status.user.name == "Bu Ani"

    async def test_single_record_response_is_normalised(self):
        def handler(request):
            return httpx.Response(200, json={
                "user": USER,
                "submission": {
                    "id": "b1", "name": "Warung", "status": "PENDING",
                    "createdAt": "2026-01-01T00:00:00Z",
                },
            })

        status = await _client(handler, FormVariant.SIMPLE).check_submission_status("tok")

        assert len(status.submissions) == 1
        assert status.can_submit_more is False
        assert status.remaining_slots == 0

    async def test_single_record_response_without_submission(self):
        def handler(request):
            return httpx.Response(200, json={"user": USER, "submission": None})

        status = await _client(handler, FormVariant.SIMPLE).check_submission_status("tok")

        assert status.submissions == []
        assert status.can_submit_more is True
        assert status.remaining_slots == 1

    async def test_error_status(self):
        def handler(request):
            return httpx.Response(500, json={"error": "boom"})

        with pytest.raises(StatusServiceError) as exc:
            await _client(handler).check_submission_status("tok")
        assert exc.value.message == "Failed to check submission status"

    async def test_malformed_body(self):
        def handler(request):
            return httpx.Response(200, json={"unexpected": True})

        with pytest.raises(StatusServiceError):
            await _client(handler).check_submission_status("tok")


@pytest.mark.asyncio
class TestSubmissionService:

    async def test_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={
                "success": True,
                "business": {"id": "b9", "name": "Warung", "status": "PENDING"},
            })

        result = await _client(handler).submit_business("tok", {"name": "Warung"})

        assert seen == {"method": "POST", "body": {"name": "Warung"}}
        assert result.success is True
        assert result.business.id == "b9"

    async def test_error_message_is_verbatim(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Nama bisnis wajib diisi"})

        with pytest.raises(SubmissionServiceError) as exc:
            await _client(handler).submit_business("tok", {})
        assert exc.value.message == "Nama bisnis wajib diisi"

    async def test_error_without_json_body(self):
        def handler(request):
            return httpx.Response(502, text="Bad gateway")

        with pytest.raises(SubmissionServiceError) as exc:
            await _client(handler).submit_business("tok", {})
        assert exc.value.message == "Failed to submit business"

    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(SubmissionServiceError) as exc:
            await _client(handler).submit_business("tok", {})
        assert exc.value.message == SUBMIT_UNREACHABLE_MESSAGE

    async def test_success_with_unexpected_body_still_counts(self):
        def handler(request):
            return httpx.Response(201, json={"id": "biz-9"})

        result = await _client(handler).submit_business("tok", {"name": "Warung"})

        assert result.success is True
        assert result.business is None

    async def test_success_with_non_json_body_still_counts(self):
        def handler(request):
            return httpx.Response(201, text="Created")

        result = await _client(handler).submit_business("tok", {"name": "Warung"})

        assert result.success is True
        assert result.business is None
