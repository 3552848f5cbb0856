"""Live wizard registry and idle expiry."""

import pytest

from bursa_signup.wizard.machine import SubmissionWizard
from bursa_signup.wizard.registry import WizardRegistry


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock) -> WizardRegistry:
    return WizardRegistry(idle_timeout=60, clock=clock)


@pytest.mark.unit
class TestWizardRegistry:

    def test_put_keeps_first_wizard(self, registry, wizard, status_user):
        other = SubmissionWizard(status_user)
        assert registry.put("user-1", wizard) is wizard
        assert registry.put("user-1", other) is wizard
        assert registry.get("user-1") is wizard

    def test_idle_wizard_is_dropped(self, registry, clock, wizard):
        registry.put("user-1", wizard)
        clock.now += 61
        assert registry.get("user-1") is None
        assert len(registry) == 0

    def test_use_keeps_wizard_alive(self, registry, clock, wizard):
        registry.put("user-1", wizard)
        clock.now += 45
        assert registry.get("user-1") is wizard
        clock.now += 45
        assert registry.get("user-1") is wizard

    def test_other_users_idle_wizards_swept(self, registry, clock, wizard, status_user):
        registry.put("abandoned", wizard)
        clock.now += 61
        registry.put("user-2", SubmissionWizard(status_user))
        assert len(registry) == 1
        assert registry.get("abandoned") is None

    def test_expired_entry_replaced_on_mount(self, registry, clock, wizard, status_user):
        registry.put("user-1", wizard)
        clock.now += 61
        fresh = SubmissionWizard(status_user)
        assert registry.put("user-1", fresh) is fresh

    def test_discard(self, registry, wizard):
        registry.put("user-1", wizard)
        registry.discard("user-1")
        registry.discard("user-1")
        assert len(registry) == 0
