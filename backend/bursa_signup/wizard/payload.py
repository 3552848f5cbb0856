"""Projection from a DraftSubmission to the Submission Service body."""

from typing import Any

from bursa_signup.catalog import FormVariant
from bursa_signup.schemas.draft import DraftSubmission
from bursa_signup.wizard.validation import LocationMode, location_mode

# (draft attribute, wire key) for optional text fields; omitted when empty.
OPTIONAL_LOCATION_FIELDS = (("district", "district"), ("postal_code", "postalCode"))
OPTIONAL_CONTACT_FIELDS = (
    ("whatsapp_number", "whatsappNumber"),
    ("website", "website"),
    ("instagram_handle", "instagramHandle"),
    ("tiktok_handle", "tiktokHandle"),
    ("facebook_url", "facebookUrl"),
    ("logo_url", "logoUrl"),
)


def _copy_optional(payload: dict[str, Any], draft: DraftSubmission, fields) -> None:
    for attr, key in fields:
        value = getattr(draft, attr)
        if value:
            payload[key] = value


def _location(draft: DraftSubmission) -> dict[str, Any]:
    location: dict[str, Any] = {
        "address": draft.address,
        "city": draft.city,
        "latitude": draft.latitude,
        "longitude": draft.longitude,
    }
    _copy_optional(location, draft, OPTIONAL_LOCATION_FIELDS)
    return location


def project_payload(
    draft: DraftSubmission,
    variant: FormVariant = FormVariant.FULL,
) -> dict[str, Any]:
    """Build the JSON body for ``POST /api/submissions``.

    Location fields are sent only for physical businesses. Optional
    fields left empty are left out entirely rather than sent as "".
    """
    payload: dict[str, Any] = {
        "name": draft.name,
        "description": draft.description,
        "ownerName": draft.owner_name,
        "categorySlug": draft.category_slug,
        "phoneNumber": draft.phone_number,
    }

    if variant == FormVariant.FULL:
        payload["priceRangeMin"] = draft.price_range_min.value
        payload["priceRangeMax"] = draft.price_range_max.value
        payload["isOnlineBusiness"] = draft.is_online_business
        payload["operatingHours"] = draft.operating_hours.model_dump(by_alias=True)
    else:
        payload["businessSize"] = draft.business_size.value

    if location_mode(draft, variant) == LocationMode.PHYSICAL:
        payload.update(_location(draft))

    _copy_optional(payload, draft, OPTIONAL_CONTACT_FIELDS)
    if draft.photos:
        payload["photos"] = list(draft.photos)

    return payload
