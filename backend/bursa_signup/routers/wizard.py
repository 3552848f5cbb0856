"""Business registration wizard: 4 steps, held in memory per user.

Endpoints:
  GET    /api/wizard/                        → mount (precondition check) or current view
  PATCH  /api/wizard/fields                  → merge plain fields
  PUT    /api/wizard/online                  → physical / online switch
  PUT    /api/wizard/price-range             → set one bound, the other snaps
  PUT    /api/wizard/location                → map picker coordinates
  PUT    /api/wizard/operating-hours/{day}   → one weekday's hours
  POST   /api/wizard/next | /back            → step transitions
  POST   /api/wizard/logo | /photos          → image uploads
  DELETE /api/wizard/logo | /photos/{index}  → remove an image
  POST   /api/wizard/submit                  → final submission
  DELETE /api/wizard/                        → discard the draft

Design:
  - Failed step validation is not an HTTP error: the view comes back with
    ``error`` set and the step unchanged.
  - A missing session is always a 303 to sign-in.
  - A successful submit drops the wizard and 303s to the success page.
"""

import logging

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from fastapi.responses import RedirectResponse

from bursa_signup.auth.deps import (
    get_bursa_api,
    get_current_wizard,
    get_media_store,
    get_session_provider,
    get_variant,
    get_wizard_registry,
    require_session,
)
from bursa_signup.auth.session import Session, SessionProvider
from bursa_signup.catalog import FormVariant
from bursa_signup.config import settings
from bursa_signup.middleware.exceptions import ResourceNotFoundError, SessionRequiredError
from bursa_signup.schemas.draft import (
    DayHours,
    DraftFieldsUpdate,
    LocationChange,
    OnlineBusinessToggle,
    PriceRangeChange,
)
from bursa_signup.schemas.submission import SubmitResponse, WizardView
from bursa_signup.services.bursa_api import BursaApiClient
from bursa_signup.services.media_store import MediaStore
from bursa_signup.wizard.machine import SubmissionWizard, SubmitOutcome
from bursa_signup.wizard.media import ImageUpload
from bursa_signup.wizard.registry import WizardRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_upload(file: UploadFile) -> ImageUpload:
    # One byte past the limit is enough for the size guard to trip.
    content = await file.read(settings.max_upload_bytes + 1)
    return ImageUpload(
        filename=file.filename or "image",
        content_type=file.content_type or "",
        content=content,
    )


# ── Mount / discard ─────────────────────────────────────────

@router.get("/", response_model=WizardView)
async def mount_wizard(
    session: Session = Depends(require_session),
    sessions: SessionProvider = Depends(get_session_provider),
    bursa_api: BursaApiClient = Depends(get_bursa_api),
    registry: WizardRegistry = Depends(get_wizard_registry),
    variant: FormVariant = Depends(get_variant),
):
    """Return the live wizard, mounting a fresh one if there is none."""
    wizard = registry.get(session.user_id)
    if wizard is None:
        wizard = await SubmissionWizard.mount(sessions, bursa_api, variant)
        wizard = registry.put(session.user_id, wizard)
    return wizard.view()


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def discard_wizard(
    session: Session = Depends(require_session),
    registry: WizardRegistry = Depends(get_wizard_registry),
):
    registry.discard(session.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Field changes ───────────────────────────────────────────

@router.patch("/fields", response_model=WizardView)
async def change_fields(
    body: DraftFieldsUpdate,
    wizard: SubmissionWizard = Depends(get_current_wizard),
):
    wizard.change(**body.model_dump(exclude_unset=True, exclude_none=True))
    return wizard.view()


@router.put("/online", response_model=WizardView)
async def toggle_online(
    body: OnlineBusinessToggle,
    wizard: SubmissionWizard = Depends(get_current_wizard),
):
    wizard.toggle_online_business(body.is_online_business)
    return wizard.view()


@router.put("/price-range", response_model=WizardView)
async def change_price_range(
    body: PriceRangeChange,
    wizard: SubmissionWizard = Depends(get_current_wizard),
):
    wizard.set_price_bound(body.bound, body.value)
    return wizard.view()


@router.put("/location", response_model=WizardView)
async def change_location(
    body: LocationChange,
    wizard: SubmissionWizard = Depends(get_current_wizard),
):
    wizard.set_location(body.latitude, body.longitude)
    return wizard.view()


@router.put("/operating-hours/{day}", response_model=WizardView)
async def change_day_hours(
    day: str,
    body: DayHours,
    wizard: SubmissionWizard = Depends(get_current_wizard),
):
    wizard.set_day_hours(day, body)
    return wizard.view()


# ── Navigation ──────────────────────────────────────────────

@router.post("/next", response_model=WizardView)
async def next_step(wizard: SubmissionWizard = Depends(get_current_wizard)):
    wizard.next()
    return wizard.view()


@router.post("/back", response_model=WizardView)
async def previous_step(wizard: SubmissionWizard = Depends(get_current_wizard)):
    wizard.back()
    return wizard.view()


# ── Media ───────────────────────────────────────────────────

@router.post("/logo", response_model=WizardView)
async def upload_logo(
    file: UploadFile = File(...),
    wizard: SubmissionWizard = Depends(get_current_wizard),
    store: MediaStore = Depends(get_media_store),
):
    await wizard.media.attach_logo(await _read_upload(file), store)
    return wizard.view()


@router.delete("/logo", response_model=WizardView)
async def remove_logo(wizard: SubmissionWizard = Depends(get_current_wizard)):
    wizard.media.clear_logo()
    return wizard.view()


@router.post("/photos", response_model=WizardView)
async def upload_photos(
    files: list[UploadFile] = File(...),
    wizard: SubmissionWizard = Depends(get_current_wizard),
    store: MediaStore = Depends(get_media_store),
):
    uploads = [await _read_upload(f) for f in files]
    await wizard.media.attach_photos(uploads, store)
    return wizard.view()


@router.delete("/photos/{index}", response_model=WizardView)
async def remove_photo(
    index: int,
    wizard: SubmissionWizard = Depends(get_current_wizard),
):
    try:
        wizard.media.remove_photo(index)
    except IndexError:
        raise ResourceNotFoundError("Photo", str(index))
    return wizard.view()


# ── Submit ──────────────────────────────────────────────────

@router.post("/submit", response_model=SubmitResponse)
async def submit(
    session: Session = Depends(require_session),
    wizard: SubmissionWizard = Depends(get_current_wizard),
    sessions: SessionProvider = Depends(get_session_provider),
    bursa_api: BursaApiClient = Depends(get_bursa_api),
    registry: WizardRegistry = Depends(get_wizard_registry),
):
    outcome = await wizard.submit(sessions, bursa_api)

    if outcome == SubmitOutcome.SESSION_EXPIRED:
        raise SessionRequiredError()
    if outcome == SubmitOutcome.SUBMITTED:
        registry.discard(session.user_id)
        return RedirectResponse(settings.success_path, status_code=status.HTTP_303_SEE_OTHER)

    return SubmitResponse(outcome=outcome.value, wizard=wizard.view())
