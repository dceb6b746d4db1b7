from fastapi import APIRouter, Depends
from typing import List
from app.schemas.property import PropertyResponse
from app.services.admin_service import (
    get_all_properties_for_admin,
    verify_property,
    reject_property,
)
from app.services.user_service import ROLE_ADMIN
from app.utils.dependencies import require_role

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_role(ROLE_ADMIN))],
)


@router.get("/properties", response_model=List[PropertyResponse])
async def list_all_properties():
    """Every property regardless of verification status (Admin only)"""
    props = await get_all_properties_for_admin()
    return [PropertyResponse(**prop) for prop in props]


@router.patch("/properties/verify/{property_id}", response_model=PropertyResponse)
async def verify(property_id: str):
    """Mark a pending property as verified (Admin only)"""
    prop = await verify_property(property_id)
    return PropertyResponse(**prop)


@router.patch("/properties/reject/{property_id}", response_model=PropertyResponse)
async def reject(property_id: str):
    """Mark a pending property as rejected (Admin only)"""
    prop = await reject_property(property_id)
    return PropertyResponse(**prop)
