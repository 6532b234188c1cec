# shoeshop/api/v1/variations.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from shoeshop.api.deps import get_current_user, get_shoe_service
from shoeshop.schemas.shoe import (
    VariationCreate,
    VariationDeleteResponse,
    VariationMutationResponse,
    VariationResponse,
    VariationUpdate,
)
from shoeshop.services.mapping import to_variation_response
from shoeshop.services.shoe_service import ShoeService

# Rutas anidadas bajo /shoes/{shoe_id}
shoe_variations_router = APIRouter()

# Rutas directas /variations/{variation_id}
router = APIRouter()


@shoe_variations_router.get("/{shoe_id}/variations", response_model=List[VariationResponse])
def list_variations(shoe_id: int, service: ShoeService = Depends(get_shoe_service)):
    return [to_variation_response(v) for v in service.list_variations(shoe_id)]


@shoe_variations_router.post(
    "/{shoe_id}/variations",
    response_model=VariationMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_variation(
    shoe_id: int,
    payload: VariationCreate,
    current_user: dict = Depends(get_current_user),
    service: ShoeService = Depends(get_shoe_service),
):
    variation = service.create_variation(shoe_id, **payload.model_dump())
    return VariationMutationResponse(
        success=True,
        message=f"Color {variation.color_name} added successfully!",
        variation=to_variation_response(variation),
    )


@router.get("/{variation_id}", response_model=VariationResponse)
def get_variation(variation_id: int, service: ShoeService = Depends(get_shoe_service)):
    return to_variation_response(service.get_variation(variation_id))


@router.put("/{variation_id}", response_model=VariationMutationResponse)
def update_variation(
    variation_id: int,
    payload: VariationUpdate,
    current_user: dict = Depends(get_current_user),
    service: ShoeService = Depends(get_shoe_service),
):
    variation = service.update_variation(variation_id, **payload.model_dump())
    return VariationMutationResponse(
        success=True,
        message="Color variation updated successfully!",
        variation=to_variation_response(variation),
    )


@router.delete("/{variation_id}", response_model=VariationDeleteResponse)
def delete_variation(
    variation_id: int,
    current_user: dict = Depends(get_current_user),
    service: ShoeService = Depends(get_shoe_service),
):
    if not service.delete_variation(variation_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Color variation not found")

    return VariationDeleteResponse(
        success=True,
        message="Color variation deleted successfully!",
        variation_id=variation_id,
    )
