"""
Tests for ShoeService business rules, run against the in-memory repository.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from shoeshop.core.exceptions import (
    ColorUnavailableError,
    CurrentColorLockedError,
    DuplicateShoeError,
    DuplicateVariationError,
    ShoeNotFoundError,
    ValidationFailed,
    VariationNotFoundError,
)
from shoeshop.services.shoe_service import ShoeService


class TestCreateShoe:

    def test_create_materializes_base_color(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)

        assert shoe.current_color == "Blue"
        assert shoe.base_color == "Blue"
        assert shoe.is_available is True
        assert len(shoe.variations) == 1

        variation = shoe.variations[0]
        assert variation.color_name == "Blue"
        assert variation.hex_code == "#0000FF"
        assert variation.stock_quantity == 10
        assert variation.is_active is True

    def test_unknown_color_gets_default_hex(self, service, air_zoom_data):
        air_zoom_data["base_color"] = "Volt"
        shoe = service.create_shoe(**air_zoom_data)
        assert shoe.variations[0].hex_code == "#808080"

    def test_color_lookup_ignores_case(self, service, air_zoom_data):
        air_zoom_data["base_color"] = "NAVY"
        shoe = service.create_shoe(**air_zoom_data)
        assert shoe.variations[0].hex_code == "#000080"
        assert shoe.current_color == "NAVY"

    def test_duplicate_name_within_brand_is_rejected(self, service, memory_repository, air_zoom_data):
        service.create_shoe(**air_zoom_data)

        duplicate = dict(air_zoom_data, name="air zoom", brand="NIKE", base_color="Red")
        with pytest.raises(DuplicateShoeError):
            service.create_shoe(**duplicate)

        assert len(memory_repository.list_shoes()) == 1
        assert len(memory_repository.store.variations) == 1

    def test_same_name_other_brand_is_allowed(self, service, air_zoom_data):
        service.create_shoe(**air_zoom_data)
        other = service.create_shoe(**dict(air_zoom_data, brand="Adidas"))
        assert other.brand == "Adidas"

    def test_name_of_deleted_shoe_can_be_reused(self, service, air_zoom_data):
        first = service.create_shoe(**air_zoom_data)
        service.delete_shoe(first.id)
        second = service.create_shoe(**air_zoom_data)
        assert second.id != first.id

    @pytest.mark.parametrize(
        "field,value",
        [
            ("name", ""),
            ("name", "   "),
            ("name", "x" * 101),
            ("brand", ""),
            ("brand", "b" * 101),
            ("size", ""),
            ("size", "s" * 51),
            ("base_color", ""),
            ("base_color", "c" * 31),
            ("price", Decimal("0")),
            ("price", Decimal("-5")),
            ("price", Decimal("10000.00")),
            ("price", "abc"),
            ("description", "d" * 501),
            ("image_url", "not a url"),
            ("image_url", "https://" + "i" * 200),
        ],
    )
    def test_invalid_fields_are_rejected(self, service, memory_repository, air_zoom_data, field, value):
        air_zoom_data[field] = value
        with pytest.raises(ValidationFailed) as exc_info:
            service.create_shoe(**air_zoom_data)

        assert field in exc_info.value.errors
        assert memory_repository.list_shoes() == []

    def test_all_errors_reported_together(self, service, air_zoom_data):
        air_zoom_data.update(name="", brand="", price=Decimal("0"))
        with pytest.raises(ValidationFailed) as exc_info:
            service.create_shoe(**air_zoom_data)
        assert set(exc_info.value.errors) == {"name", "brand", "price"}

    def test_text_fields_are_trimmed(self, service, air_zoom_data):
        air_zoom_data.update(name="  Air Zoom  ", description="  light  ")
        shoe = service.create_shoe(**air_zoom_data)
        assert shoe.name == "Air Zoom"
        assert shoe.description == "light"


class TestUpdateAndDelete:

    def test_update_missing_shoe(self, service):
        with pytest.raises(ShoeNotFoundError):
            service.update_shoe(99, name="X", brand="Y", size="Z", price=Decimal("1"))

    def test_update_overwrites_mutable_fields(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)

        updated = service.update_shoe(
            shoe.id,
            name="Air Zoom Pegasus",
            brand="Nike",
            size="US 10",
            price=Decimal("139.99"),
            description="Road running",
            image_url="https://img.example.com/pegasus.png",
        )

        assert updated.name == "Air Zoom Pegasus"
        assert updated.size == "US 10"
        assert updated.price == Decimal("139.99")
        assert updated.description == "Road running"
        assert updated.image_url == "https://img.example.com/pegasus.png"
        assert updated.base_color == "Blue"
        assert updated.current_color == "Blue"
        assert updated.updated_at is not None

    def test_update_clears_optional_fields(self, service, air_zoom_data):
        shoe = service.create_shoe(**dict(air_zoom_data, description="something"))
        updated = service.update_shoe(shoe.id, name="Air Zoom", brand="Nike", size="US 9", price=Decimal("1"))
        assert updated.description is None

    def test_update_cannot_collide_with_other_shoe(self, service, air_zoom_data):
        service.create_shoe(**air_zoom_data)
        other = service.create_shoe(**dict(air_zoom_data, name="Air Max"))

        with pytest.raises(DuplicateShoeError):
            service.update_shoe(other.id, name="AIR ZOOM", brand="nike", size="US 9", price=Decimal("10"))

    def test_update_keeping_own_name(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        updated = service.update_shoe(shoe.id, name="Air Zoom", brand="Nike", size="US 11", price=Decimal("10"))
        assert updated.size == "US 11"

    def test_update_validates_fields(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        with pytest.raises(ValidationFailed) as exc_info:
            service.update_shoe(shoe.id, name="Air Zoom", brand="Nike", size="", price=Decimal("0"))
        assert set(exc_info.value.errors) == {"size", "price"}

    def test_delete_is_soft(self, service, memory_repository, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        variation_id = shoe.variations[0].id

        assert service.delete_shoe(shoe.id) is True
        assert service.list_shoes() == []
        assert service.get_variation(variation_id).is_active is True
        assert service.get_shoe(shoe.id).is_available is False

    def test_delete_missing(self, service):
        assert service.delete_shoe(5) is False


class TestListing:

    @pytest.fixture
    def catalog(self, service):
        service.create_shoe(name="Air Max 90", brand="Nike", size="US 9", base_color="White", price=Decimal("120"))
        service.create_shoe(
            name="Stan Smith", brand="Adidas", size="US 9", base_color="White", price=Decimal("80"),
            description="Leather tennis classic",
        )
        service.create_shoe(name="Air Jordan 1", brand="Nike", size="US 10", base_color="Red", price=Decimal("170"))

    def test_list_all(self, service, catalog):
        assert [s.name for s in service.list_shoes()] == ["Air Jordan 1", "Air Max 90", "Stan Smith"]

    def test_brand_filter(self, service, catalog):
        assert [s.name for s in service.list_shoes(brand="nike")] == ["Air Jordan 1", "Air Max 90"]

    def test_search_wins_over_brand(self, service, catalog):
        assert [s.name for s in service.list_shoes(brand="Nike", search="tennis")] == ["Stan Smith"]

    def test_blank_filters_are_ignored(self, service, catalog):
        assert len(service.list_shoes(brand="  ", search="")) == 3

    def test_enrich_adds_available_colors(self, service, catalog):
        shoe = service.list_shoes(search="jordan")[0]
        response = service.enrich(shoe)
        assert response.available_colors == ["Red"]
        assert response.variations[0].hex_code == "#FF0000"


class TestChangeColor:

    def test_walkthrough(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        assert shoe.current_color == "Blue"

        with pytest.raises(ColorUnavailableError):
            service.change_color(shoe.id, "Red")
        assert service.get_shoe(shoe.id).current_color == "Blue"

        service.create_variation(shoe.id, color_name="Red", hex_code="#FF0000", stock_quantity=5)
        assert service.change_color(shoe.id, "Red") == "Red"
        assert service.get_shoe(shoe.id).current_color == "Red"

    def test_change_normalizes_casing(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        service.create_variation(shoe.id, color_name="Red", hex_code="#FF0000", stock_quantity=5)
        assert service.change_color(shoe.id, "  rEd ") == "Red"

    def test_out_of_stock_color_is_not_available(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        service.create_variation(shoe.id, color_name="Red", hex_code="#FF0000", stock_quantity=0)

        with pytest.raises(ColorUnavailableError):
            service.change_color(shoe.id, "Red")
        assert service.get_shoe(shoe.id).current_color == "Blue"

    def test_storage_not_called_when_unavailable(self, service, memory_repository, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        with patch.object(memory_repository, "change_current_color") as change:
            with pytest.raises(ColorUnavailableError):
                service.change_color(shoe.id, "Green")
            change.assert_not_called()

    def test_change_on_missing_shoe(self, service):
        with pytest.raises(ShoeNotFoundError):
            service.change_color(404, "Red")


class TestVariations:

    def test_create_variation_on_missing_shoe(self, service):
        with pytest.raises(ShoeNotFoundError):
            service.create_variation(7, color_name="Red", hex_code="#FF0000", stock_quantity=1)

    def test_duplicate_color_is_rejected(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        with pytest.raises(DuplicateVariationError):
            service.create_variation(shoe.id, color_name="blue", hex_code="#0000FF", stock_quantity=1)
        assert len(service.list_variations(shoe.id)) == 1

    @pytest.mark.parametrize(
        "field,kwargs",
        [
            ("color_name", {"color_name": "", "hex_code": "#FF0000", "stock_quantity": 1}),
            ("color_name", {"color_name": "c" * 31, "hex_code": "#FF0000", "stock_quantity": 1}),
            ("hex_code", {"color_name": "Red", "hex_code": "FF0000", "stock_quantity": 1}),
            ("hex_code", {"color_name": "Red", "hex_code": "#FF00", "stock_quantity": 1}),
            ("hex_code", {"color_name": "Red", "hex_code": "#GG0000", "stock_quantity": 1}),
            ("stock_quantity", {"color_name": "Red", "hex_code": "#FF0000", "stock_quantity": -1}),
        ],
    )
    def test_invalid_variation(self, service, air_zoom_data, field, kwargs):
        shoe = service.create_shoe(**air_zoom_data)
        with pytest.raises(ValidationFailed) as exc_info:
            service.create_variation(shoe.id, **kwargs)
        assert field in exc_info.value.errors

    def test_new_variation_is_active(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        variation = service.create_variation(shoe.id, color_name="Red", hex_code="#ff0000", stock_quantity=3)
        assert variation.is_active is True
        assert variation.hex_code == "#FF0000"
        assert service.available_colors(shoe.id) == ["Blue", "Red"]

    def test_get_missing_variation(self, service):
        with pytest.raises(VariationNotFoundError):
            service.get_variation(1)

    def test_update_variation(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        red = service.create_variation(shoe.id, color_name="Red", hex_code="#FF0000", stock_quantity=3)

        updated = service.update_variation(red.id, color_name="Crimson", hex_code="#DC143C", stock_quantity=8, is_active=False)

        assert updated.color_name == "Crimson"
        assert updated.stock_quantity == 8
        assert updated.is_active is False
        assert service.available_colors(shoe.id) == ["Blue"]

    def test_update_variation_rejects_taken_name(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        red = service.create_variation(shoe.id, color_name="Red", hex_code="#FF0000", stock_quantity=3)
        with pytest.raises(DuplicateVariationError):
            service.update_variation(red.id, color_name="BLUE", hex_code="#0000FF", stock_quantity=3)

    def test_current_color_cannot_be_deactivated(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        blue = shoe.variations[0]
        with pytest.raises(CurrentColorLockedError):
            service.update_variation(blue.id, color_name="Blue", hex_code="#0000FF", stock_quantity=10, is_active=False)
        with pytest.raises(CurrentColorLockedError):
            service.update_variation(blue.id, color_name="Navy", hex_code="#000080", stock_quantity=10)
        assert service.get_variation(blue.id).is_active is True

    def test_current_color_stock_can_change(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        blue = shoe.variations[0]
        updated = service.update_variation(blue.id, color_name="Blue", hex_code="#0000FF", stock_quantity=0)
        assert updated.stock_quantity == 0
        assert service.get_shoe(shoe.id).current_color == "Blue"

    def test_case_only_rename_moves_current_color(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        assert shoe.updated_at is None

        service.update_variation(shoe.variations[0].id, color_name="BLUE", hex_code="#0000FF", stock_quantity=10)

        shoe = service.get_shoe(shoe.id)
        assert shoe.current_color == "BLUE"
        assert shoe.updated_at is not None

    def test_current_color_cannot_be_deleted(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        with pytest.raises(CurrentColorLockedError):
            service.delete_variation(shoe.variations[0].id)
        assert len(service.list_variations(shoe.id)) == 1

    def test_delete_other_variation(self, service, air_zoom_data):
        shoe = service.create_shoe(**air_zoom_data)
        red = service.create_variation(shoe.id, color_name="Red", hex_code="#FF0000", stock_quantity=3)

        assert service.delete_variation(red.id) is True
        with pytest.raises(VariationNotFoundError):
            service.get_variation(red.id)

    def test_list_variations_of_missing_shoe(self, service):
        with pytest.raises(ShoeNotFoundError):
            service.list_variations(3)


class TestServiceOnSqlite:
    """Same flow through the SQLAlchemy repository."""

    def test_walkthrough(self, sqlite_repository, air_zoom_data):
        service = ShoeService(sqlite_repository)
        shoe = service.create_shoe(**air_zoom_data)

        assert shoe.current_color == "Blue"
        assert [(v.color_name, v.hex_code, v.stock_quantity) for v in shoe.variations] == [("Blue", "#0000FF", 10)]

        with pytest.raises(ColorUnavailableError):
            service.change_color(shoe.id, "Red")

        service.create_variation(shoe.id, color_name="Red", hex_code="#FF0000", stock_quantity=5)
        assert service.change_color(shoe.id, "red") == "Red"
        assert service.get_shoe(shoe.id).current_color == "Red"

    def test_duplicate_does_not_write(self, sqlite_repository, air_zoom_data):
        service = ShoeService(sqlite_repository)
        service.create_shoe(**air_zoom_data)
        with pytest.raises(DuplicateShoeError):
            service.create_shoe(**dict(air_zoom_data, name="AIR ZOOM"))
        assert len(sqlite_repository.list_shoes()) == 1

    def test_case_only_rename_is_persisted(self, sqlite_repository, air_zoom_data):
        service = ShoeService(sqlite_repository)
        shoe = service.create_shoe(**air_zoom_data)

        service.update_variation(shoe.variations[0].id, color_name="BLUE", hex_code="#0000FF", stock_quantity=10)

        sqlite_repository.db.expire_all()
        reloaded = sqlite_repository.get_shoe(shoe.id)
        assert reloaded.current_color == "BLUE"
        assert reloaded.updated_at is not None
        assert [v.color_name for v in reloaded.variations] == ["BLUE"]
