"""Per-step validation rules."""

import pytest

from bursa_signup.catalog import FormVariant
from bursa_signup.schemas.draft import DraftSubmission
from bursa_signup.wizard.validation import validate_step


def _identity(**overrides) -> DraftSubmission:
    data = {
        "name": "Warung Bu Ani",
        "description": "Masakan rumahan",
        "owner_name": "Ani",
        "category_slug": "food-beverage",
    }
    data.update(overrides)
    return DraftSubmission(**data)


@pytest.mark.unit
class TestIdentityStep:

    def test_complete_identity_passes(self):
        assert validate_step(1, _identity()) is None

    @pytest.mark.parametrize(
        "field, message",
        [
            ("name", "Nama bisnis wajib diisi"),
            ("description", "Deskripsi wajib diisi"),
            ("owner_name", "Nama pemilik wajib diisi"),
            ("category_slug", "Kategori wajib dipilih"),
        ],
    )
    def test_each_required_field(self, field, message):
        assert validate_step(1, _identity(**{field: ""})) == message

    def test_whitespace_only_counts_as_empty(self):
        assert validate_step(1, _identity(name="   ")) == "Nama bisnis wajib diisi"

    def test_first_failing_rule_wins(self):
        """Only one reason is reported, in table order."""
        draft = _identity(name="", description="", category_slug="")
        assert validate_step(1, draft) == "Nama bisnis wajib diisi"

    def test_unknown_category_rejected(self):
        assert validate_step(1, _identity(category_slug="casino")) == "Kategori tidak valid"


@pytest.mark.unit
class TestLocationStep:

    def test_physical_requires_address(self):
        draft = DraftSubmission(city="Bandung", latitude=1.0, longitude=2.0)
        assert validate_step(2, draft) == "Alamat wajib diisi"

    def test_physical_requires_city(self):
        draft = DraftSubmission(address="Jl. Merdeka", latitude=1.0, longitude=2.0)
        assert validate_step(2, draft) == "Kota wajib diisi"

    def test_physical_requires_both_coordinates(self):
        draft = DraftSubmission(address="Jl. Merdeka", city="Bandung", latitude=1.0)
        assert validate_step(2, draft) == "Lokasi di peta wajib dipilih"

    def test_zero_coordinates_are_a_location(self):
        draft = DraftSubmission(address="Jl. Merdeka", city="Bandung", latitude=0.0, longitude=0.0)
        assert validate_step(2, draft) is None

    def test_online_business_has_no_location_requirements(self):
        assert validate_step(2, DraftSubmission(is_online_business=True)) is None

    def test_simple_form_ignores_online_flag(self):
        draft = DraftSubmission(is_online_business=True)
        assert validate_step(2, draft, FormVariant.SIMPLE) == "Alamat wajib diisi"


@pytest.mark.unit
class TestContactAndFinalStep:

    def test_phone_required(self):
        assert validate_step(3, DraftSubmission()) == "Nomor telepon wajib diisi"
        assert validate_step(3, DraftSubmission(phone_number="0812")) is None

    def test_final_step_revalidates_everything_in_order(self):
        draft = _identity(phone_number="0812", is_online_business=True)
        assert validate_step(4, draft) is None

        draft.name = ""
        assert validate_step(4, draft) == "Nama bisnis wajib diisi"

        draft.name = "Warung"
        draft.is_online_business = False
        assert validate_step(4, draft) == "Alamat wajib diisi"

        draft.is_online_business = True
        draft.phone_number = ""
        assert validate_step(4, draft) == "Nomor telepon wajib diisi"

    def test_unknown_step(self):
        with pytest.raises(ValueError):
            validate_step(5, DraftSubmission())
