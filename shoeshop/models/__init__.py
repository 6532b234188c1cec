from .shoe import Shoe, ShoeColorVariation

__all__ = ["Shoe", "ShoeColorVariation"]
