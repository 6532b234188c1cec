# shoeshop/services/shoe_service.py
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Tuple

from shoeshop.core.exceptions import (
    ColorUnavailableError,
    CurrentColorLockedError,
    DuplicateShoeError,
    DuplicateVariationError,
    ShoeNotFoundError,
    ValidationFailed,
    VariationNotFoundError,
)
from shoeshop.models import Shoe, ShoeColorVariation
from shoeshop.models.shoe import utcnow
from shoeshop.repositories.base import ShoeRepository, fold
from shoeshop.schemas.shoe import HEX_PATTERN, MAX_PRICE, URL_PATTERN
from shoeshop.services.colors import DEFAULT_VARIATION_STOCK, hex_for_color
from shoeshop.services.mapping import to_shoe_response

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(HEX_PATTERN)
_URL_RE = re.compile(URL_PATTERN)


def _check_text(errors: Dict[str, str], field: str, value: Optional[str], max_length: int, required: bool = True) -> Optional[str]:
    """Validar un campo de texto y devolverlo sin espacios sobrantes"""
    if value is None or not str(value).strip():
        if required:
            errors[field] = f"{field} is required"
        return None

    value = str(value).strip()
    if len(value) > max_length:
        errors[field] = f"{field} cannot exceed {max_length} characters"
    return value


def _check_price(errors: Dict[str, str], value) -> Optional[Decimal]:
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        errors["price"] = "price must be a number"
        return None

    if not price.is_finite() or price <= 0:
        errors["price"] = "price must be greater than 0"
    elif price > MAX_PRICE:
        errors["price"] = f"price cannot exceed {MAX_PRICE}"
    else:
        price = price.quantize(Decimal("0.01"))
    return price


class ShoeService:
    """Reglas de negocio del inventario sobre un ShoeRepository"""

    def __init__(self, repository: ShoeRepository):
        self.repository = repository

    # ==================== LECTURA ====================

    def list_shoes(self, brand: Optional[str] = None, search: Optional[str] = None) -> List[Shoe]:
        """Listar shoes disponibles; el término de búsqueda tiene prioridad sobre la marca"""
        if search and search.strip():
            return self.repository.search(search.strip())
        if brand and brand.strip():
            return self.repository.find_by_brand(brand.strip())
        return self.repository.list_shoes()

    def get_shoe(self, shoe_id: int) -> Shoe:
        shoe = self.repository.get_shoe(shoe_id)
        if not shoe:
            raise ShoeNotFoundError(shoe_id)
        return shoe

    def available_colors(self, shoe_id: int) -> List[str]:
        return self.repository.list_available_color_names(shoe_id)

    def enrich(self, shoe: Shoe):
        return to_shoe_response(shoe, self.available_colors(shoe.id))

    def enrich_all(self, shoes: List[Shoe]):
        return [self.enrich(shoe) for shoe in shoes]

    # ==================== SHOES ====================

    def create_shoe(
        self,
        name: str,
        brand: str,
        size: str,
        base_color: str,
        price,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Shoe:
        """Crear un shoe con su variación por defecto para el color base"""
        errors: Dict[str, str] = {}
        name = _check_text(errors, "name", name, 100)
        brand = _check_text(errors, "brand", brand, 100)
        size = _check_text(errors, "size", size, 50)
        base_color = _check_text(errors, "base_color", base_color, 30)
        price = _check_price(errors, price)
        description, image_url = self._check_optional(errors, description, image_url)
        if errors:
            logger.warning(f"⚠️ Shoe rejected, invalid fields: {sorted(errors)}")
            raise ValidationFailed(errors)

        if self.repository.find_by_name_and_brand(name, brand):
            logger.warning(f"⚠️ Duplicate shoe '{name}' for brand '{brand}'")
            raise DuplicateShoeError(name, brand)

        shoe = Shoe(
            name=name,
            brand=brand,
            size=size,
            base_color=base_color,
            current_color=base_color,
            price=price,
            description=description,
            image_url=image_url,
            is_available=True,
        )
        shoe.variations.append(
            ShoeColorVariation(
                color_name=base_color,
                hex_code=hex_for_color(base_color),
                stock_quantity=DEFAULT_VARIATION_STOCK,
                is_active=True,
            )
        )
        shoe = self.repository.create_shoe(shoe)
        logger.info(f"✅ Shoe {shoe.id} created: {shoe.brand} {shoe.name} ({base_color})")
        return shoe

    def update_shoe(
        self,
        shoe_id: int,
        name: str,
        brand: str,
        size: str,
        price,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Shoe:
        shoe = self.get_shoe(shoe_id)

        errors: Dict[str, str] = {}
        name = _check_text(errors, "name", name, 100)
        brand = _check_text(errors, "brand", brand, 100)
        size = _check_text(errors, "size", size, 50)
        price = _check_price(errors, price)
        description, image_url = self._check_optional(errors, description, image_url)
        if errors:
            logger.warning(f"⚠️ Update of shoe {shoe_id} rejected, invalid fields: {sorted(errors)}")
            raise ValidationFailed(errors)

        existing = self.repository.find_by_name_and_brand(name, brand)
        if existing and existing.id != shoe.id:
            logger.warning(f"⚠️ Update of shoe {shoe_id} collides with shoe {existing.id}")
            raise DuplicateShoeError(name, brand)

        shoe.name = name
        shoe.brand = brand
        shoe.size = size
        shoe.price = price
        shoe.description = description
        shoe.image_url = image_url

        shoe = self.repository.update_shoe(shoe)
        logger.info(f"✅ Shoe {shoe.id} updated")
        return shoe

    def delete_shoe(self, shoe_id: int) -> bool:
        deleted = self.repository.soft_delete_shoe(shoe_id)
        if deleted:
            logger.info(f"🗑️ Shoe {shoe_id} marked unavailable")
        return deleted

    def change_color(self, shoe_id: int, color_name: str) -> str:
        """Cambiar el color actual; solo a colores activos con stock"""
        shoe = self.get_shoe(shoe_id)
        wanted = (color_name or "").strip()

        available = {fold(c) for c in self.available_colors(shoe_id)}
        if not wanted or fold(wanted) not in available:
            logger.warning(f"⚠️ Color '{wanted}' not available for shoe {shoe_id}")
            raise ColorUnavailableError(shoe_id, wanted)

        if not self.repository.change_current_color(shoe_id, wanted):
            raise ColorUnavailableError(shoe_id, wanted)

        logger.info(f"🎨 Shoe {shoe_id} current color is now '{shoe.current_color}'")
        return shoe.current_color

    # ==================== VARIATIONS ====================

    def list_variations(self, shoe_id: int) -> List[ShoeColorVariation]:
        self.get_shoe(shoe_id)
        return self.repository.list_variations(shoe_id)

    def get_variation(self, variation_id: int) -> ShoeColorVariation:
        variation = self.repository.get_variation(variation_id)
        if not variation:
            raise VariationNotFoundError(variation_id)
        return variation

    def create_variation(self, shoe_id: int, color_name: str, hex_code: str, stock_quantity: int = 0) -> ShoeColorVariation:
        shoe = self.get_shoe(shoe_id)
        color_name, hex_code, stock_quantity = self._check_variation(color_name, hex_code, stock_quantity)

        if self._find_color(shoe, color_name):
            raise DuplicateVariationError(shoe_id, color_name)

        variation = ShoeColorVariation(
            shoe_id=shoe.id,
            color_name=color_name,
            hex_code=hex_code,
            stock_quantity=stock_quantity,
            is_active=True,
        )
        variation = self.repository.create_variation(variation)
        logger.info(f"✅ Variation {variation.id} '{color_name}' added to shoe {shoe_id}")
        return variation

    def update_variation(
        self,
        variation_id: int,
        color_name: str,
        hex_code: str,
        stock_quantity: int,
        is_active: bool = True,
    ) -> ShoeColorVariation:
        variation = self.get_variation(variation_id)
        shoe = self.get_shoe(variation.shoe_id)
        color_name, hex_code, stock_quantity = self._check_variation(color_name, hex_code, stock_quantity)

        other = self._find_color(shoe, color_name)
        if other and other.id != variation.id:
            raise DuplicateVariationError(shoe.id, color_name)

        if self._is_current(shoe, variation):
            renamed = fold(color_name) != fold(variation.color_name)
            if renamed or not is_active:
                raise CurrentColorLockedError(shoe.id, variation.color_name)
            # Mismo color con otra capitalización: el puntero sigue la variación
            if shoe.current_color != color_name:
                shoe.current_color = color_name
                shoe.updated_at = utcnow()

        variation.color_name = color_name
        variation.hex_code = hex_code
        variation.stock_quantity = stock_quantity
        variation.is_active = bool(is_active)

        variation = self.repository.update_variation(variation)
        logger.info(f"✅ Variation {variation.id} updated")
        return variation

    def delete_variation(self, variation_id: int) -> bool:
        variation = self.get_variation(variation_id)
        shoe = self.repository.get_shoe(variation.shoe_id)
        if shoe and self._is_current(shoe, variation):
            raise CurrentColorLockedError(shoe.id, variation.color_name)

        deleted = self.repository.delete_variation(variation_id)
        if deleted:
            logger.info(f"🗑️ Variation {variation_id} removed from shoe {variation.shoe_id}")
        return deleted

    # ==================== HELPERS ====================

    @staticmethod
    def _check_optional(errors: Dict[str, str], description: Optional[str], image_url: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
        description = _check_text(errors, "description", description, 500, required=False)
        image_url = _check_text(errors, "image_url", image_url, 200, required=False)
        if image_url and "image_url" not in errors and not _URL_RE.match(image_url):
            errors["image_url"] = "image_url must be an http(s) URL"
        return description, image_url

    @staticmethod
    def _check_variation(color_name: str, hex_code: str, stock_quantity) -> Tuple[str, str, int]:
        errors: Dict[str, str] = {}
        color_name = _check_text(errors, "color_name", color_name, 30)
        hex_code = (hex_code or "").strip()
        if not _HEX_RE.match(hex_code):
            errors["hex_code"] = "hex_code must look like #RRGGBB"

        if isinstance(stock_quantity, bool) or not isinstance(stock_quantity, int):
            errors["stock_quantity"] = "stock_quantity must be an integer"
        elif stock_quantity < 0:
            errors["stock_quantity"] = "stock_quantity cannot be negative"

        if errors:
            raise ValidationFailed(errors)
        return color_name, hex_code.upper(), stock_quantity

    @staticmethod
    def _find_color(shoe: Shoe, color_name: str) -> Optional[ShoeColorVariation]:
        wanted = fold(color_name)
        for variation in shoe.variations:
            if fold(variation.color_name) == wanted:
                return variation
        return None

    @staticmethod
    def _is_current(shoe: Shoe, variation: ShoeColorVariation) -> bool:
        return bool(shoe.current_color) and fold(shoe.current_color) == fold(variation.color_name)
