# shoeshop/schemas/shoe.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"
URL_PATTERN = r"^https?://\S+$"
MAX_PRICE = Decimal("9999.99")


class _Input(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


# ==================== SHOES ====================

class ShoeCreate(_Input):
    name: str = Field(..., min_length=1, max_length=100)
    brand: str = Field(..., min_length=1, max_length=100)
    size: str = Field(..., min_length=1, max_length=50)
    base_color: str = Field(..., min_length=1, max_length=30)
    price: Decimal = Field(..., gt=0, le=MAX_PRICE, decimal_places=2)
    description: Optional[str] = Field(None, max_length=500)
    image_url: Optional[str] = Field(None, max_length=200, pattern=URL_PATTERN)


class ShoeUpdate(_Input):
    id: int
    name: str = Field(..., min_length=1, max_length=100)
    brand: str = Field(..., min_length=1, max_length=100)
    size: str = Field(..., min_length=1, max_length=50)
    price: Decimal = Field(..., gt=0, le=MAX_PRICE, decimal_places=2)
    description: Optional[str] = Field(None, max_length=500)
    image_url: Optional[str] = Field(None, max_length=200, pattern=URL_PATTERN)


class VariationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    shoe_id: int
    color_name: str
    hex_code: str
    stock_quantity: int
    is_active: bool
    created_at: Optional[datetime] = None


class ShoeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    brand: str
    size: str
    base_color: str
    current_color: Optional[str] = None
    price: Decimal
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_available: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    variations: List[VariationResponse] = []
    # Calculado, no persistido
    available_colors: List[str] = []


class ShoeListResponse(BaseModel):
    shoes: List[ShoeResponse]
    total: int
    brand: Optional[str] = None
    search: Optional[str] = None


class ShoeMutationResponse(BaseModel):
    success: bool
    message: str
    shoe: ShoeResponse


class ShoeDeleteResponse(BaseModel):
    success: bool
    message: str
    shoe_id: int


# ==================== COLOR ====================

class ColorChangeRequest(_Input):
    color_name: str = Field(..., min_length=1, max_length=30)


class ColorChangeResponse(BaseModel):
    success: bool
    shoe_id: int
    current_color: str
    message: str


class AvailableColorsResponse(BaseModel):
    shoe_id: int
    available_colors: List[str]


# ==================== VARIATIONS ====================

class VariationCreate(_Input):
    color_name: str = Field(..., min_length=1, max_length=30)
    hex_code: str = Field(..., pattern=HEX_PATTERN)
    stock_quantity: int = Field(0, ge=0)


class VariationUpdate(_Input):
    color_name: str = Field(..., min_length=1, max_length=30)
    hex_code: str = Field(..., pattern=HEX_PATTERN)
    stock_quantity: int = Field(..., ge=0)
    is_active: bool = True


class VariationMutationResponse(BaseModel):
    success: bool
    message: str
    variation: VariationResponse


class VariationDeleteResponse(BaseModel):
    success: bool
    message: str
    variation_id: int
