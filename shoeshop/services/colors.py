# shoeshop/services/colors.py
from typing import Dict

DEFAULT_HEX_CODE = "#808080"
DEFAULT_VARIATION_STOCK = 10

COLOR_HEX_CODES: Dict[str, str] = {
    "white": "#FFFFFF",
    "black": "#000000",
    "red": "#FF0000",
    "blue": "#0000FF",
    "green": "#008000",
    "yellow": "#FFFF00",
    "orange": "#FFA500",
    "purple": "#800080",
    "pink": "#FFC0CB",
    "brown": "#A52A2A",
    "gray": "#808080",
    "grey": "#808080",
    "navy": "#000080",
    "beige": "#F5F5DC",
    "silver": "#C0C0C0",
}


def hex_for_color(color_name: str) -> str:
    """Código hex para un nombre de color conocido, gris por defecto"""
    return COLOR_HEX_CODES.get((color_name or "").strip().lower(), DEFAULT_HEX_CODE)
