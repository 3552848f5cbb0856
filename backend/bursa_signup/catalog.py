"""Fixed, client-embedded enumerations for the registration form.

The category list must stay in sync with the categories the Bursa API
accepts for ``categorySlug``; it is never fetched remotely.
"""

import enum

from pydantic import BaseModel


class Category(BaseModel):
    id: str
    name: str
    slug: str
    icon: str


CATEGORIES: list[Category] = [
    Category(id="food-beverage", name="Makanan & Minuman", slug="food-beverage", icon="🍜"),
    Category(id="grocery-convenience", name="Toko Kelontong & Kebutuhan", slug="grocery-convenience", icon="🛒"),
    Category(id="retail-fashion", name="Retail & Fashion", slug="retail-fashion", icon="🛍️"),
    Category(id="services", name="Jasa & Layanan", slug="services", icon="🤲"),
    Category(id="entertainment", name="Hiburan", slug="entertainment", icon="🎱"),
    Category(id="sports-fitness", name="Olahraga & Kebugaran", slug="sports-fitness", icon="🏃"),
    Category(id="handicrafts-souvenirs", name="Kerajinan & Souvenir", slug="handicrafts-souvenirs", icon="🎨"),
    Category(id="agriculture-fresh-produce", name="Pertanian & Produk Segar", slug="agriculture-fresh-produce", icon="🌾"),
    Category(id="health", name="Kesehatan", slug="health", icon="🏥"),
    Category(id="beauty", name="Kecantikan", slug="beauty", icon="💅"),
    Category(id="home-living", name="Rumah & Interior", slug="home-living", icon="🏠"),
    Category(id="property-rentals", name="Properti & Sewa", slug="property-rentals", icon="🏘️"),
    Category(id="education-training", name="Pendidikan & Pelatihan", slug="education-training", icon="📚"),
    Category(id="technology-digital", name="Teknologi & Digital", slug="technology-digital", icon="💻"),
    Category(id="other", name="Lainnya", slug="other", icon="📦"),
]

CATEGORY_SLUGS: frozenset[str] = frozenset(c.slug for c in CATEGORIES)


class PriceTier(str, enum.Enum):
    """Ordered price tiers; declaration order is the rank."""
    BUDGET = "BUDGET"
    MODERATE = "MODERATE"
    PRICEY = "PRICEY"
    PREMIUM = "PREMIUM"

    @property
    def rank(self) -> int:
        return list(PriceTier).index(self)


PRICE_TIER_LABELS: dict[PriceTier, str] = {
    PriceTier.BUDGET: "Murah",
    PriceTier.MODERATE: "Sedang",
    PriceTier.PRICEY: "Mahal",
    PriceTier.PREMIUM: "Premium",
}


class BusinessSize(str, enum.Enum):
    MICRO = "MICRO"
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"


BUSINESS_SIZE_LABELS: dict[BusinessSize, str] = {
    BusinessSize.MICRO: "Mikro",
    BusinessSize.SMALL: "Kecil",
    BusinessSize.MEDIUM: "Menengah",
}


class FormVariant(str, enum.Enum):
    FULL = "full"        # online flag, price range, operating hours
    SIMPLE = "simple"    # business size only, physical businesses only


# Weekday keys in display order, with their form labels.
WEEKDAYS: list[tuple[str, str]] = [
    ("monday", "Senin"),
    ("tuesday", "Selasa"),
    ("wednesday", "Rabu"),
    ("thursday", "Kamis"),
    ("friday", "Jumat"),
    ("saturday", "Sabtu"),
    ("sunday", "Minggu"),
]
