"""
Property Controller - listings for agents, the public catalogue and admin advertising
"""
from fastapi import APIRouter, Depends, status
from typing import List, Optional, Dict
from app.schemas.property import (
    PropertyResponse,
    VerifiedPropertyResponse,
    PropertyCreateRequest,
    PropertyUpdateRequest,
)
from app.schemas.base import MessageResponse
from app.services.property_service import (
    create_property,
    get_property_by_id,
    get_properties_by_agent_email,
    get_advertised_properties,
    get_verified_properties,
    update_property,
    delete_property,
)
from app.services.admin_service import get_verified_properties_for_admin, advertise_property
from app.services.user_service import ROLE_ADMIN, ROLE_AGENT
from app.utils.dependencies import get_current_user_email, require_role, verify_token_email

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get("/advertised", response_model=List[PropertyResponse])
async def list_advertised_properties():
    """Featured properties for the home page"""
    props = await get_advertised_properties()
    return [PropertyResponse(**prop) for prop in props]


@router.get("/verified", response_model=List[VerifiedPropertyResponse], dependencies=[Depends(get_current_user_email)])
async def list_verified_properties(search: Optional[str] = None, sort: Optional[str] = None):
    """
    Verified properties for the catalogue
    search matches location, sort is 'asc' or 'desc' on average price
    """
    props = await get_verified_properties(search=search, sort=sort)
    return [VerifiedPropertyResponse(**prop) for prop in props]


@router.get("/verified/admin", response_model=List[PropertyResponse], dependencies=[Depends(require_role(ROLE_ADMIN))])
async def list_verified_properties_for_admin():
    """Verified properties that can be advertised (Admin only)"""
    props = await get_verified_properties_for_admin()
    return [PropertyResponse(**prop) for prop in props]


@router.get(
    "/agent/{email}",
    response_model=List[PropertyResponse],
    dependencies=[Depends(require_role(ROLE_AGENT)), Depends(verify_token_email)],
)
async def list_agent_properties(email: str):
    """Properties added by the calling agent"""
    props = await get_properties_by_agent_email(email.lower())
    return [PropertyResponse(**prop) for prop in props]


@router.patch("/advertise/{property_id}", response_model=PropertyResponse, dependencies=[Depends(require_role(ROLE_ADMIN))])
async def advertise(property_id: str):
    """Feature a property on the home page (Admin only)"""
    prop = await advertise_property(property_id)
    return PropertyResponse(**prop)


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def add_property(
    request: PropertyCreateRequest,
    agent: Dict = Depends(require_role(ROLE_AGENT))
):
    """Add a property. It stays pending until an admin verifies it."""
    property_data = request.dict(exclude_unset=True)
    prop = await create_property(agent, property_data)
    return PropertyResponse(**prop)


@router.get("/{property_id}", response_model=PropertyResponse, dependencies=[Depends(get_current_user_email)])
async def get_property(property_id: str):
    """Get specific property by ID"""
    prop = await get_property_by_id(property_id)
    return PropertyResponse(**prop)


@router.patch("/{property_id}", response_model=PropertyResponse)
async def edit_property(
    property_id: str,
    request: PropertyUpdateRequest,
    agent: Dict = Depends(require_role(ROLE_AGENT))
):
    """Update a property (owning agent only)"""
    update_data = request.dict(exclude_unset=True)
    prop = await update_property(property_id, agent["email"], update_data)
    return PropertyResponse(**prop)


@router.delete("/{property_id}", response_model=MessageResponse)
async def remove_property(
    property_id: str,
    agent: Dict = Depends(require_role(ROLE_AGENT))
):
    """Delete a property (owning agent only)"""
    await delete_property(property_id, agent["email"])
    return MessageResponse(message="Property deleted successfully")
