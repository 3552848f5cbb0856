"""Pydantic schemas for the in-progress business draft.

Field names are snake_case in Python and camelCase on the wire; every
model accepts either spelling on input.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from bursa_signup.catalog import BusinessSize, PriceTier

TIME_OF_DAY_REGEX = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Operating hours ─────────────────────────────────────────

class DayHours(CamelModel):
    open: str = "09:00"
    close: str = "17:00"
    closed: bool = False

    @field_validator("open", "close")
    @classmethod
    def _time_of_day(cls, v: str) -> str:
        if not TIME_OF_DAY_REGEX.match(v):
            raise ValueError("Time must be HH:MM")
        return v


class OperatingHours(CamelModel):
    monday: DayHours = Field(default_factory=DayHours)
    tuesday: DayHours = Field(default_factory=DayHours)
    wednesday: DayHours = Field(default_factory=DayHours)
    thursday: DayHours = Field(default_factory=DayHours)
    friday: DayHours = Field(default_factory=DayHours)
    saturday: DayHours = Field(default_factory=DayHours)
    sunday: DayHours = Field(default_factory=lambda: DayHours(closed=True))


# ── Draft ───────────────────────────────────────────────────

class DraftSubmission(CamelModel):
    """Everything the wizard collects across its four steps.

    Optional text fields default to "" (not None) so that "left empty" is
    one state; the payload projection omits them.
    """
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, validate_assignment=True
    )

    # Step 1: identity
    name: str = ""
    description: str = ""
    owner_name: str = ""
    category_slug: str = ""
    price_range_min: PriceTier = PriceTier.MODERATE
    price_range_max: PriceTier = PriceTier.MODERATE
    business_size: BusinessSize = BusinessSize.MICRO

    # Step 2: location
    is_online_business: bool = False
    address: str = ""
    city: str = ""
    district: str = ""
    postal_code: str = ""
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)

    # Step 3: contact
    phone_number: str = ""
    whatsapp_number: str = ""
    website: str = ""
    operating_hours: OperatingHours = Field(default_factory=OperatingHours)

    # Step 4: media + social
    instagram_handle: str = ""
    tiktok_handle: str = ""
    facebook_url: str = ""
    logo_url: str = ""
    photos: list[str] = Field(default_factory=list)


class DraftFieldsUpdate(CamelModel):
    """Free-text / select fields a client may PATCH.

    Price range, online flag, coordinates, hours and media each have their
    own endpoint because they carry extra rules.
    """
    name: str | None = None
    description: str | None = None
    owner_name: str | None = None
    category_slug: str | None = None
    business_size: BusinessSize | None = None
    address: str | None = None
    city: str | None = None
    district: str | None = None
    postal_code: str | None = None
    phone_number: str | None = None
    whatsapp_number: str | None = None
    website: str | None = None
    instagram_handle: str | None = None
    tiktok_handle: str | None = None
    facebook_url: str | None = None


class OnlineBusinessToggle(CamelModel):
    is_online_business: bool


class PriceRangeChange(CamelModel):
    bound: str = Field(pattern="^(min|max)$")
    value: PriceTier


class LocationChange(CamelModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
