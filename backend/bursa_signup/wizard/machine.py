"""Submission wizard state machine.

State is (current_step, draft, error) plus the ``submitting`` guard and the
terminal ``submitted`` flag:

    Identity (1) → Location (2) → Contact (3) → Media (4) → Submitted

  - next()    validates the current step; only failure keeps the step
  - back()    always moves one step back and clears the error
  - change()  merges fields into the draft and clears the error
  - submit()  legal only on step 4; at most one submission in flight

Collaborators (session provider, status and submission services) are
passed in per call, so a wizard holds no connection or auth state.
"""

import enum
import logging

from bursa_signup.auth.session import SessionProvider
from bursa_signup.catalog import FormVariant, PriceTier, WEEKDAYS
from bursa_signup.middleware.exceptions import (
    BusinessLogicError,
    InvalidTransitionError,
    SessionRequiredError,
    SubmissionLimitReachedError,
)
from bursa_signup.schemas.draft import DayHours, DraftSubmission
from bursa_signup.schemas.submission import StatusUser, SubmitResult, WizardView
from bursa_signup.services.bursa_api import (
    STATUS_LOAD_FAILED_MESSAGE,
    StatusService,
    StatusServiceError,
    SubmissionService,
    SubmissionServiceError,
)
from bursa_signup.wizard.media import MediaAttachments
from bursa_signup.wizard.payload import project_payload
from bursa_signup.wizard.price_range import Bound, adjust_price_range
from bursa_signup.wizard.validation import SUBMIT_STEP, TOTAL_STEPS, validate_step

logger = logging.getLogger(__name__)

# Fields with dedicated operations (rules beyond a plain merge).
GUARDED_FIELDS = {
    "price_range_min",
    "price_range_max",
    "is_online_business",
    "operating_hours",
    "logo_url",
    "photos",
}
FULL_ONLY_FIELDS = {"price_range_min", "price_range_max", "is_online_business", "operating_hours"}
WEEKDAY_KEYS = {key for key, _ in WEEKDAYS}


class SubmitOutcome(str, enum.Enum):
    BLOCKED = "blocked"                  # not on the final step
    IN_FLIGHT = "in_flight"              # another submission is pending
    INVALID = "invalid"                  # local validation failed
    SESSION_EXPIRED = "session_expired"  # caller redirects to sign-in
    FAILED = "failed"                    # service rejected, retry allowed
    SUBMITTED = "submitted"


class SubmissionWizard:
    def __init__(
        self,
        user: StatusUser,
        remaining_slots: int = 1,
        variant: FormVariant = FormVariant.FULL,
        max_photos: int | None = None,
    ):
        self.user = user
        self.remaining_slots = remaining_slots
        self.variant = variant
        self.draft = DraftSubmission(owner_name=user.name or "")
        self.media = MediaAttachments(self.draft, max_photos, on_change=self._clear_error)
        self.current_step = 1
        self.error: str | None = None
        self.submitting = False
        self.submitted = False
        self.result: SubmitResult | None = None

    @classmethod
    async def mount(
        cls,
        sessions: SessionProvider,
        status_service: StatusService,
        variant: FormVariant = FormVariant.FULL,
    ) -> "SubmissionWizard":
        """Run the entry precondition and build a wizard at its defaults.

        Raises SessionRequiredError without a session and
        SubmissionLimitReachedError when the account may not submit more.
        """
        session = await sessions.get_session()
        if session is None:
            raise SessionRequiredError()

        try:
            status = await status_service.check_submission_status(session.access_token)
        except StatusServiceError as e:
            logger.warning(f"Status check failed on mount: {e.message}")
            raise StatusServiceError(STATUS_LOAD_FAILED_MESSAGE) from e
        if not status.can_submit_more:
            raise SubmissionLimitReachedError()

        logger.info(
            f"Wizard mounted for {status.user.email} ({status.remaining_slots} slots left)"
        )
        return cls(status.user, status.remaining_slots, variant)

    def _clear_error(self) -> None:
        self.error = None

    # ── Guards ──────────────────────────────────────────────

    def _ensure_open(self) -> None:
        if self.submitted:
            raise InvalidTransitionError("This business has already been submitted")

    def _ensure_full_variant(self, what: str) -> None:
        if self.variant != FormVariant.FULL:
            raise BusinessLogicError(f"{what} is not part of this form")

    # ── Navigation ──────────────────────────────────────────

    def next(self) -> bool:
        """Advance one step if the current one validates."""
        self._ensure_open()
        if self.current_step >= TOTAL_STEPS:
            raise InvalidTransitionError("Already on the final step")

        error = validate_step(self.current_step, self.draft, self.variant)
        if error:
            self.error = error
            return False

        self.current_step += 1
        self.error = None
        return True

    def back(self) -> None:
        self._ensure_open()
        if self.current_step <= 1:
            raise InvalidTransitionError("Already on the first step")
        self.current_step -= 1
        self.error = None

    # ── Field changes ───────────────────────────────────────

    def change(self, **fields) -> None:
        """Merge plain fields into the draft. Any edit clears the error."""
        self._ensure_open()
        for name, value in fields.items():
            if name not in DraftSubmission.model_fields or name in GUARDED_FIELDS:
                raise BusinessLogicError(f"Field cannot be changed directly: {name}")
            setattr(self.draft, name, value)
        self.error = None

    def toggle_online_business(self, value: bool) -> None:
        """Location fields are kept; they just stop counting."""
        self._ensure_open()
        self._ensure_full_variant("Online business")
        self.draft.is_online_business = value
        self.error = None

    def set_price_bound(self, bound: Bound, value: PriceTier) -> None:
        self._ensure_open()
        self._ensure_full_variant("Price range")
        other = self.draft.price_range_max if bound == "min" else self.draft.price_range_min
        low, high = adjust_price_range(bound, value, other)
        self.draft.price_range_min = low
        self.draft.price_range_max = high
        self.error = None

    def set_location(self, latitude: float, longitude: float) -> None:
        self._ensure_open()
        self.draft.latitude = latitude
        self.draft.longitude = longitude
        self.error = None

    def set_day_hours(self, day: str, hours: DayHours) -> None:
        self._ensure_open()
        self._ensure_full_variant("Operating hours")
        if day not in WEEKDAY_KEYS:
            raise BusinessLogicError(f"Unknown day: {day}")
        setattr(self.draft.operating_hours, day, hours)
        self.error = None

    # ── Submission ──────────────────────────────────────────

    async def submit(
        self,
        sessions: SessionProvider,
        submissions: SubmissionService,
    ) -> SubmitOutcome:
        self._ensure_open()
        if self.current_step != SUBMIT_STEP:
            logger.warning(
                f"Blocked submission - not on step {SUBMIT_STEP}",
                extra={"current_step": self.current_step},
            )
            return SubmitOutcome.BLOCKED
        if self.submitting:
            logger.info("Ignoring submit while a submission is in flight")
            return SubmitOutcome.IN_FLIGHT

        error = validate_step(SUBMIT_STEP, self.draft, self.variant)
        if error:
            self.error = error
            return SubmitOutcome.INVALID

        self.submitting = True
        self.error = None
        try:
            session = await sessions.get_session()
            if session is None:
                return SubmitOutcome.SESSION_EXPIRED
            self.result = await submissions.submit_business(
                session.access_token,
                project_payload(self.draft, self.variant),
            )
        except SubmissionServiceError as e:
            self.error = e.message
            return SubmitOutcome.FAILED
        finally:
            self.submitting = False

        self.submitted = True
        business_id = self.result.business.id if self.result.business else None
        logger.info(
            f"Submitted business {business_id} for {self.user.email}",
            extra={"business_id": business_id},
        )
        return SubmitOutcome.SUBMITTED

    # ── View ────────────────────────────────────────────────

    def view(self) -> WizardView:
        return WizardView(
            variant=self.variant.value,
            current_step=self.current_step,
            total_steps=TOTAL_STEPS,
            error=self.error,
            submitting=self.submitting,
            user=self.user,
            remaining_slots=self.remaining_slots,
            draft=self.draft,
            logo=self.media.logo,
            photos=self.media.photos,
        )
