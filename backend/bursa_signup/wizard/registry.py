"""In-memory home for live wizards, one per signed-in user.

Drafts are never written anywhere; a process restart, a discard, a
sign-out, a successful submission or an idle timeout drops them. The
timeout covers users who simply leave the page and never come back.
"""

import logging
import time
from typing import Callable

from bursa_signup.config import settings
from bursa_signup.wizard.machine import SubmissionWizard

logger = logging.getLogger(__name__)


class WizardRegistry:
    def __init__(
        self,
        idle_timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.idle_timeout = idle_timeout or settings.wizard_idle_timeout_seconds
        self.clock = clock
        # user_id → (wizard, last touched)
        self._wizards: dict[str, tuple[SubmissionWizard, float]] = {}

    def _sweep(self, now: float) -> None:
        stale = [
            user_id
            for user_id, (_, touched) in self._wizards.items()
            if now - touched > self.idle_timeout
        ]
        for user_id in stale:
            del self._wizards[user_id]
        if stale:
            logger.info(f"Dropped {len(stale)} idle wizard(s)")

    def get(self, user_id: str) -> SubmissionWizard | None:
        """Return the live wizard and mark it as used."""
        now = self.clock()
        self._sweep(now)
        entry = self._wizards.get(user_id)
        if entry is None:
            return None
        self._wizards[user_id] = (entry[0], now)
        return entry[0]

    def put(self, user_id: str, wizard: SubmissionWizard) -> SubmissionWizard:
        """Keep the first wizard if two mounts race."""
        now = self.clock()
        self._sweep(now)
        kept, _ = self._wizards.setdefault(user_id, (wizard, now))
        return kept

    def discard(self, user_id: str) -> None:
        self._wizards.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._wizards)
