# shoeshop/repositories/sqlalchemy_repository.py
import logging
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shoeshop.core.exceptions import DuplicateVariationError
from shoeshop.models import Shoe, ShoeColorVariation
from shoeshop.models.shoe import utcnow
from shoeshop.repositories.base import ShoeRepository, fold

logger = logging.getLogger(__name__)


class SqlAlchemyShoeRepository(ShoeRepository):
    """Repositorio sobre una sesión SQLAlchemy (una sesión por request)"""

    def __init__(self, db: Session):
        self.db = db

    def _available(self):
        return self.db.query(Shoe).filter(Shoe.is_available == True)  # noqa: E712

    # ==================== SHOES ====================

    def list_shoes(self) -> List[Shoe]:
        return self._available().order_by(Shoe.name).all()

    def get_shoe(self, shoe_id: int) -> Optional[Shoe]:
        return self.db.query(Shoe).filter(Shoe.id == shoe_id).first()

    # lower() de SQLite solo pliega ASCII: las comparaciones sin mayúsculas se hacen en Python

    def find_by_brand(self, brand: str) -> List[Shoe]:
        wanted = fold(brand)
        return [s for s in self.list_shoes() if wanted in fold(s.brand)]

    def search(self, term: str) -> List[Shoe]:
        wanted = fold(term)
        return [
            s for s in self.list_shoes()
            if wanted in fold(s.name) or wanted in fold(s.brand) or wanted in fold(s.description)
        ]

    def find_by_name_and_brand(self, name: str, brand: str) -> Optional[Shoe]:
        name, brand = fold(name.strip()), fold(brand.strip())
        for shoe in self._available().order_by(Shoe.id):
            if fold(shoe.name) == name and fold(shoe.brand) == brand:
                return shoe
        return None

    def create_shoe(self, shoe: Shoe) -> Shoe:
        self.db.add(shoe)
        self._commit()
        logger.debug(f"Shoe {shoe.id} inserted with {len(shoe.variations)} variation(s)")
        return shoe

    def update_shoe(self, shoe: Shoe) -> Shoe:
        shoe.updated_at = utcnow()
        self.db.add(shoe)
        self._commit()
        return shoe

    def soft_delete_shoe(self, shoe_id: int) -> bool:
        shoe = self._available().filter(Shoe.id == shoe_id).first()
        if not shoe:
            return False

        shoe.is_available = False
        shoe.updated_at = utcnow()
        self._commit()
        return True

    def change_current_color(self, shoe_id: int, color_name: str) -> bool:
        shoe = self.get_shoe(shoe_id)
        if not shoe:
            return False

        wanted = fold(color_name.strip())
        variation = next(
            (v for v in self.list_active_variations(shoe_id) if fold(v.color_name) == wanted),
            None,
        )
        if not variation:
            return False

        shoe.current_color = variation.color_name
        shoe.updated_at = utcnow()
        self._commit()
        return True

    def list_available_color_names(self, shoe_id: int) -> List[str]:
        rows = self.db.query(ShoeColorVariation.color_name).filter(
            and_(
                ShoeColorVariation.shoe_id == shoe_id,
                ShoeColorVariation.is_active == True,  # noqa: E712
                ShoeColorVariation.stock_quantity > 0,
            )
        ).order_by(ShoeColorVariation.id).all()
        return [row.color_name for row in rows]

    # ==================== VARIATIONS ====================

    def list_active_variations(self, shoe_id: int) -> List[ShoeColorVariation]:
        return self.db.query(ShoeColorVariation).filter(
            and_(
                ShoeColorVariation.shoe_id == shoe_id,
                ShoeColorVariation.is_active == True,  # noqa: E712
            )
        ).order_by(ShoeColorVariation.id).all()

    def list_variations(self, shoe_id: int) -> List[ShoeColorVariation]:
        return self.db.query(ShoeColorVariation).filter(
            ShoeColorVariation.shoe_id == shoe_id
        ).order_by(ShoeColorVariation.id).all()

    def get_variation(self, variation_id: int) -> Optional[ShoeColorVariation]:
        return self.db.query(ShoeColorVariation).filter(ShoeColorVariation.id == variation_id).first()

    def create_variation(self, variation: ShoeColorVariation) -> ShoeColorVariation:
        # Mantener la colección del shoe en sincronía dentro de la sesión
        shoe = self.db.get(Shoe, variation.shoe_id)
        if shoe is not None and variation not in shoe.variations:
            shoe.variations.append(variation)
        self.db.add(variation)
        self._commit_variation(variation)
        return variation

    def update_variation(self, variation: ShoeColorVariation) -> ShoeColorVariation:
        self.db.add(variation)
        self._commit_variation(variation)
        return variation

    def delete_variation(self, variation_id: int) -> bool:
        variation = self.get_variation(variation_id)
        if not variation:
            return False

        shoe = variation.shoe
        self.db.delete(variation)
        self._commit()
        if shoe is not None:
            self.db.expire(shoe, ["variations"])
        return True

    # ==================== HELPERS ====================

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _commit_variation(self, variation: ShoeColorVariation) -> None:
        """Commit traduciendo la violación de unicidad (shoe_id, color_name)"""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Unique constraint hit for shoe {variation.shoe_id}: {e.orig}")
            raise DuplicateVariationError(variation.shoe_id, variation.color_name) from e
