# shoeshop/seed.py
import logging
from decimal import Decimal

from shoeshop.core.exceptions import DuplicateShoeError
from shoeshop.repositories.base import ShoeRepository
from shoeshop.services.shoe_service import ShoeService

logger = logging.getLogger(__name__)

# Catálogo inicial: (nombre, marca, talla, color base, precio, stock)
SEED_SHOES = [
    ("Air Max 90", "Nike", "US 9", "White", Decimal("120.00"), 25),
    ("Stan Smith", "Adidas", "US 9", "White", Decimal("80.00"), 30),
    ("Chuck Taylor All Star", "Converse", "US 9", "Black", Decimal("65.00"), 15),
    ("Old Skool", "Vans", "US 9", "Black", Decimal("75.00"), 20),
    ("Air Jordan 1", "Nike", "US 10", "Red", Decimal("170.00"), 12),
]


def seed_catalog(repository: ShoeRepository) -> int:
    """Crear datos iniciales si el catálogo está vacío. Devuelve cuántos shoes se crearon"""
    if repository.list_shoes():
        logger.info("✅ Catálogo ya tiene datos, no se siembra")
        return 0

    service = ShoeService(repository)
    created = 0
    for name, brand, size, color, price, stock in SEED_SHOES:
        try:
            shoe = service.create_shoe(name=name, brand=brand, size=size, base_color=color, price=price)
        except DuplicateShoeError as e:
            logger.warning(f"⚠️ {e.message}")
            continue

        variation = shoe.variations[0]
        service.update_variation(
            variation.id,
            color_name=variation.color_name,
            hex_code=variation.hex_code,
            stock_quantity=stock,
            is_active=True,
        )
        created += 1

    logger.info(f"✅ {created} shoes sembrados")
    return created
