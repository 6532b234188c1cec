# shoeshop/api/v1/shoes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from shoeshop.api.deps import get_current_user, get_shoe_service
from shoeshop.schemas.shoe import (
    AvailableColorsResponse,
    ColorChangeRequest,
    ColorChangeResponse,
    ShoeCreate,
    ShoeDeleteResponse,
    ShoeListResponse,
    ShoeMutationResponse,
    ShoeResponse,
    ShoeUpdate,
)
from shoeshop.services.shoe_service import ShoeService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ShoeListResponse)
def list_shoes(
    brand: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    service: ShoeService = Depends(get_shoe_service),
):
    """Listar shoes disponibles, filtrando por marca o por término de búsqueda"""
    shoes = service.list_shoes(brand=brand, search=search)
    return ShoeListResponse(
        shoes=service.enrich_all(shoes),
        total=len(shoes),
        brand=brand,
        search=search,
    )


@router.get("/{shoe_id}", response_model=ShoeResponse)
def get_shoe(shoe_id: int, service: ShoeService = Depends(get_shoe_service)):
    """Detalle de un shoe con sus variaciones"""
    return service.enrich(service.get_shoe(shoe_id))


@router.post("", response_model=ShoeMutationResponse, status_code=status.HTTP_201_CREATED)
def create_shoe(payload: ShoeCreate, service: ShoeService = Depends(get_shoe_service)):
    shoe = service.create_shoe(**payload.model_dump())
    return ShoeMutationResponse(
        success=True,
        message="Shoe added successfully!",
        shoe=service.enrich(shoe),
    )


@router.put("/{shoe_id}", response_model=ShoeMutationResponse)
def update_shoe(shoe_id: int, payload: ShoeUpdate, service: ShoeService = Depends(get_shoe_service)):
    if payload.id != shoe_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shoe not found")

    data = payload.model_dump(exclude={"id"})
    shoe = service.update_shoe(shoe_id, **data)
    return ShoeMutationResponse(
        success=True,
        message="Shoe updated successfully!",
        shoe=service.enrich(shoe),
    )


@router.delete("/{shoe_id}", response_model=ShoeDeleteResponse)
def delete_shoe(shoe_id: int, service: ShoeService = Depends(get_shoe_service)):
    if not service.delete_shoe(shoe_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shoe not found")

    return ShoeDeleteResponse(success=True, message="Shoe deleted successfully!", shoe_id=shoe_id)


# ==================== COLORES ====================

@router.get("/{shoe_id}/colors", response_model=AvailableColorsResponse)
def get_available_colors(shoe_id: int, service: ShoeService = Depends(get_shoe_service)):
    """Colores activos con stock"""
    service.get_shoe(shoe_id)
    return AvailableColorsResponse(shoe_id=shoe_id, available_colors=service.available_colors(shoe_id))


@router.post("/{shoe_id}/color", response_model=ColorChangeResponse)
def change_color(
    shoe_id: int,
    payload: ColorChangeRequest,
    current_user: dict = Depends(get_current_user),
    service: ShoeService = Depends(get_shoe_service),
):
    """Cambiar el color actual del shoe (requiere usuario autenticado)"""
    current_color = service.change_color(shoe_id, payload.color_name)
    logger.info(f"🎨 Color change on shoe {shoe_id} by {current_user['sub']}")
    return ColorChangeResponse(
        success=True,
        shoe_id=shoe_id,
        current_color=current_color,
        message=f"Color changed to {current_color}",
    )
