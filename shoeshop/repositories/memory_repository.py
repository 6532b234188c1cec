# shoeshop/repositories/memory_repository.py
import itertools
import threading
from typing import Dict, List, Optional

from shoeshop.core.exceptions import DuplicateVariationError
from shoeshop.models import Shoe, ShoeColorVariation
from shoeshop.models.shoe import utcnow
from shoeshop.repositories.base import ShoeRepository, fold


class InMemoryStore:
    """Tablas en memoria compartidas durante toda la vida del proceso"""

    def __init__(self):
        self.shoes: Dict[int, Shoe] = {}
        self.variations: Dict[int, ShoeColorVariation] = {}
        self.shoe_ids = itertools.count(1)
        self.variation_ids = itertools.count(1)
        self.lock = threading.Lock()


def _by_name(shoes) -> List[Shoe]:
    return sorted(shoes, key=lambda s: s.name)


def _contains(value: Optional[str], term: str) -> bool:
    return fold(term) in fold(value)


class InMemoryShoeRepository(ShoeRepository):
    """Repositorio sin base de datos, usado en tests y con STORAGE_BACKEND=memory"""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def _available(self) -> List[Shoe]:
        return [s for s in self.store.shoes.values() if s.is_available]

    # ==================== SHOES ====================

    def list_shoes(self) -> List[Shoe]:
        return _by_name(self._available())

    def get_shoe(self, shoe_id: int) -> Optional[Shoe]:
        return self.store.shoes.get(shoe_id)

    def find_by_brand(self, brand: str) -> List[Shoe]:
        return _by_name(s for s in self._available() if _contains(s.brand, brand))

    def search(self, term: str) -> List[Shoe]:
        return _by_name(
            s for s in self._available()
            if _contains(s.name, term) or _contains(s.brand, term) or _contains(s.description, term)
        )

    def find_by_name_and_brand(self, name: str, brand: str) -> Optional[Shoe]:
        name, brand = fold(name.strip()), fold(brand.strip())
        for shoe in self._available():
            if fold(shoe.name) == name and fold(shoe.brand) == brand:
                return shoe
        return None

    def create_shoe(self, shoe: Shoe) -> Shoe:
        with self.store.lock:
            shoe.id = next(self.store.shoe_ids)
            if shoe.is_available is None:
                shoe.is_available = True
            shoe.created_at = utcnow()
            self.store.shoes[shoe.id] = shoe

            for variation in shoe.variations:
                self._insert_variation(shoe, variation)
        return shoe

    def update_shoe(self, shoe: Shoe) -> Shoe:
        with self.store.lock:
            shoe.updated_at = utcnow()
            self.store.shoes[shoe.id] = shoe
        return shoe

    def soft_delete_shoe(self, shoe_id: int) -> bool:
        with self.store.lock:
            shoe = self.store.shoes.get(shoe_id)
            if not shoe or not shoe.is_available:
                return False
            shoe.is_available = False
            shoe.updated_at = utcnow()
        return True

    def change_current_color(self, shoe_id: int, color_name: str) -> bool:
        wanted = fold(color_name.strip())
        with self.store.lock:
            shoe = self.store.shoes.get(shoe_id)
            if not shoe:
                return False
            for variation in shoe.variations:
                if variation.is_active and fold(variation.color_name) == wanted:
                    shoe.current_color = variation.color_name
                    shoe.updated_at = utcnow()
                    return True
        return False

    def list_available_color_names(self, shoe_id: int) -> List[str]:
        return [v.color_name for v in self.list_active_variations(shoe_id) if v.stock_quantity > 0]

    # ==================== VARIATIONS ====================

    def list_active_variations(self, shoe_id: int) -> List[ShoeColorVariation]:
        return [v for v in self.list_variations(shoe_id) if v.is_active]

    def list_variations(self, shoe_id: int) -> List[ShoeColorVariation]:
        shoe = self.store.shoes.get(shoe_id)
        if not shoe:
            return []
        return sorted(shoe.variations, key=lambda v: v.id)

    def get_variation(self, variation_id: int) -> Optional[ShoeColorVariation]:
        return self.store.variations.get(variation_id)

    def create_variation(self, variation: ShoeColorVariation) -> ShoeColorVariation:
        with self.store.lock:
            shoe = self.store.shoes[variation.shoe_id]
            self._check_unique(shoe, variation)
            shoe.variations.append(variation)
            self._insert_variation(shoe, variation)
        return variation

    def update_variation(self, variation: ShoeColorVariation) -> ShoeColorVariation:
        with self.store.lock:
            shoe = self.store.shoes[variation.shoe_id]
            self._check_unique(shoe, variation)
            self.store.variations[variation.id] = variation
        return variation

    def delete_variation(self, variation_id: int) -> bool:
        with self.store.lock:
            variation = self.store.variations.pop(variation_id, None)
            if variation is None:
                return False
            shoe = self.store.shoes.get(variation.shoe_id)
            if shoe is not None and variation in shoe.variations:
                shoe.variations.remove(variation)
        return True

    # ==================== HELPERS ====================

    def _insert_variation(self, shoe: Shoe, variation: ShoeColorVariation) -> None:
        variation.id = next(self.store.variation_ids)
        variation.shoe_id = shoe.id
        if variation.is_active is None:
            variation.is_active = True
        if variation.stock_quantity is None:
            variation.stock_quantity = 0
        variation.created_at = utcnow()
        self.store.variations[variation.id] = variation

    def _check_unique(self, shoe: Shoe, variation: ShoeColorVariation) -> None:
        # Igual que la restricción UNIQUE(shoe_id, color_name) de la base de datos
        for other in shoe.variations:
            if other is not variation and other.color_name == variation.color_name:
                raise DuplicateVariationError(shoe.id, variation.color_name)
