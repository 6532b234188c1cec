"""
Storage contract for shoes and their color variations.

Callers depend only on ``ShoeRepository``; the concrete class is chosen once
at startup from the configured storage backend.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from shoeshop.models import Shoe, ShoeColorVariation


def fold(value: Optional[str]) -> str:
    """Forma normalizada para comparar sin mayúsculas (también fuera de ASCII)"""
    return (value or "").casefold()


class ShoeRepository(ABC):
    """Set-based CRUD over shoes and color variations, keyed by id."""

    # Shoes

    @abstractmethod
    def list_shoes(self) -> List[Shoe]:
        """Available shoes with their variations, ordered by name."""

    @abstractmethod
    def get_shoe(self, shoe_id: int) -> Optional[Shoe]:
        """One shoe (available or not) with its variations."""

    @abstractmethod
    def find_by_brand(self, brand: str) -> List[Shoe]:
        """Available shoes whose brand contains ``brand``, case-insensitive."""

    @abstractmethod
    def search(self, term: str) -> List[Shoe]:
        """Available shoes whose name, brand or description contains ``term``."""

    @abstractmethod
    def find_by_name_and_brand(self, name: str, brand: str) -> Optional[Shoe]:
        """Available shoe with exactly this name and brand, ignoring case."""

    @abstractmethod
    def create_shoe(self, shoe: Shoe) -> Shoe:
        """Persist a new shoe together with any variations already attached."""

    @abstractmethod
    def update_shoe(self, shoe: Shoe) -> Shoe:
        ...

    @abstractmethod
    def soft_delete_shoe(self, shoe_id: int) -> bool:
        """Mark the shoe unavailable. False when nothing was affected."""

    @abstractmethod
    def change_current_color(self, shoe_id: int, color_name: str) -> bool:
        """Point the shoe at one of its active variations. Stock is untouched."""

    @abstractmethod
    def list_available_color_names(self, shoe_id: int) -> List[str]:
        """Names of active variations with stock left."""

    # Variations

    @abstractmethod
    def list_active_variations(self, shoe_id: int) -> List[ShoeColorVariation]:
        ...

    @abstractmethod
    def list_variations(self, shoe_id: int) -> List[ShoeColorVariation]:
        ...

    @abstractmethod
    def get_variation(self, variation_id: int) -> Optional[ShoeColorVariation]:
        ...

    @abstractmethod
    def create_variation(self, variation: ShoeColorVariation) -> ShoeColorVariation:
        ...

    @abstractmethod
    def update_variation(self, variation: ShoeColorVariation) -> ShoeColorVariation:
        ...

    @abstractmethod
    def delete_variation(self, variation_id: int) -> bool:
        """Hard delete. False when the variation did not exist."""
