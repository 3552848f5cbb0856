"""Per-step validation for the submission wizard.

Each step has an ordered tuple of rules; the first failing rule's message
is the one reported, so the user always sees exactly one error.
Step 2's rules depend on the location mode, and that lookup is the only
place validation branches on the online flag.
"""

import enum
from typing import Callable

from bursa_signup.catalog import CATEGORY_SLUGS, FormVariant
from bursa_signup.schemas.draft import DraftSubmission

TOTAL_STEPS = 4
SUBMIT_STEP = TOTAL_STEPS

Rule = tuple[Callable[[DraftSubmission], bool], str]


class LocationMode(str, enum.Enum):
    PHYSICAL = "physical"
    ONLINE = "online"


def location_mode(draft: DraftSubmission, variant: FormVariant = FormVariant.FULL) -> LocationMode:
    """The simple form has no online flag: every business is physical."""
    if variant == FormVariant.FULL and draft.is_online_business:
        return LocationMode.ONLINE
    return LocationMode.PHYSICAL


def _filled(value: str) -> bool:
    return bool(value and value.strip())


IDENTITY_RULES: tuple[Rule, ...] = (
    (lambda d: _filled(d.name), "Nama bisnis wajib diisi"),
    (lambda d: _filled(d.description), "Deskripsi wajib diisi"),
    (lambda d: _filled(d.owner_name), "Nama pemilik wajib diisi"),
    (lambda d: bool(d.category_slug), "Kategori wajib dipilih"),
    (lambda d: d.category_slug in CATEGORY_SLUGS, "Kategori tidak valid"),
)

LOCATION_RULES: dict[LocationMode, tuple[Rule, ...]] = {
    LocationMode.PHYSICAL: (
        (lambda d: _filled(d.address), "Alamat wajib diisi"),
        (lambda d: _filled(d.city), "Kota wajib diisi"),
        (
            lambda d: d.latitude is not None and d.longitude is not None,
            "Lokasi di peta wajib dipilih",
        ),
    ),
    LocationMode.ONLINE: (),
}

CONTACT_RULES: tuple[Rule, ...] = (
    (lambda d: _filled(d.phone_number), "Nomor telepon wajib diisi"),
)


def _rules_for(step: int, draft: DraftSubmission, variant: FormVariant) -> tuple[Rule, ...]:
    if step == 1:
        return IDENTITY_RULES
    if step == 2:
        return LOCATION_RULES[location_mode(draft, variant)]
    if step == 3:
        return CONTACT_RULES
    if step == SUBMIT_STEP:
        # Re-check everything before anything leaves the process.
        return (
            _rules_for(1, draft, variant)
            + _rules_for(2, draft, variant)
            + _rules_for(3, draft, variant)
        )
    raise ValueError(f"Unknown wizard step: {step}")


def validate_step(
    step: int,
    draft: DraftSubmission,
    variant: FormVariant = FormVariant.FULL,
) -> str | None:
    """Return the first failing rule's message for ``step``, or None."""
    for check, message in _rules_for(step, draft, variant):
        if not check(draft):
            return message
    return None
