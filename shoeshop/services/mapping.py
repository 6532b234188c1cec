# shoeshop/services/mapping.py
from typing import List

from shoeshop.models import Shoe, ShoeColorVariation
from shoeshop.schemas.shoe import ShoeResponse, VariationResponse


def to_variation_response(variation: ShoeColorVariation) -> VariationResponse:
    return VariationResponse.model_validate(variation)


def to_shoe_response(shoe: Shoe, available_colors: List[str]) -> ShoeResponse:
    """Formatear un shoe con sus variaciones y los colores disponibles calculados"""
    response = ShoeResponse.model_validate(shoe)
    response.variations = [to_variation_response(v) for v in sorted(shoe.variations, key=lambda v: v.id)]
    response.available_colors = list(available_colors)
    return response
