"""Read-only form enumerations for clients rendering the wizard."""

from fastapi import APIRouter

from bursa_signup.catalog import (
    BUSINESS_SIZE_LABELS,
    CATEGORIES,
    PRICE_TIER_LABELS,
    WEEKDAYS,
)
from bursa_signup.config import settings

router = APIRouter()


@router.get("/")
async def get_catalog():
    return {
        "categories": [c.model_dump() for c in CATEGORIES],
        "priceTiers": [{"value": t.value, "label": label} for t, label in PRICE_TIER_LABELS.items()],
        "businessSizes": [{"value": s.value, "label": label} for s, label in BUSINESS_SIZE_LABELS.items()],
        "weekdays": [{"key": key, "label": label} for key, label in WEEKDAYS],
        "variant": settings.wizard_variant,
        "maxPhotos": settings.max_photos,
        "maxUploadBytes": settings.max_upload_bytes,
    }
