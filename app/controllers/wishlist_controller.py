from fastapi import APIRouter, Depends, Query
from typing import List, Dict
from app.schemas.wishlist import (
    WishlistResponse,
    WishlistCreateRequest,
    WishlistCreateResponse,
    WishlistCheckResponse,
    DeleteResponse,
)
from app.services.wishlist_service import (
    add_to_wishlist,
    is_wishlisted,
    get_wishlist_by_user,
    get_wishlist_entry,
    delete_wishlist_entry,
)
from app.services.user_service import ROLE_USER
from app.utils.dependencies import get_current_user_email, require_role, verify_token_email

router = APIRouter(prefix="/wishlists", tags=["Wishlists"])


@router.get(
    "",
    response_model=List[WishlistResponse],
    dependencies=[Depends(require_role(ROLE_USER)), Depends(verify_token_email)],
)
async def list_wishlist(email: str):
    entries = await get_wishlist_by_user(email.lower())
    return [WishlistResponse(**entry) for entry in entries]


@router.get("/check", response_model=WishlistCheckResponse, dependencies=[Depends(verify_token_email)])
async def check_wishlist(email: str, property_id: str = Query(..., alias="propertyId")):
    """Whether the property is already on the user's wishlist"""
    already = await is_wishlisted(email.lower(), property_id)
    return WishlistCheckResponse(already_wishlisted=already)


@router.post("", response_model=WishlistCreateResponse)
async def add_wishlist(
    request: WishlistCreateRequest,
    email: str = Depends(get_current_user_email)
):
    """Save a property. A duplicate is reported with acknowledged=false."""
    wishlist_data = request.dict(exclude_unset=True)
    result = await add_to_wishlist(wishlist_data, email)
    return WishlistCreateResponse(**result)


@router.get("/{wishlist_id}", response_model=WishlistResponse)
async def get_wishlist(wishlist_id: str, user: Dict = Depends(require_role(ROLE_USER))):
    entry = await get_wishlist_entry(wishlist_id, user["email"])
    return WishlistResponse(**entry)


@router.delete("/{wishlist_id}", response_model=DeleteResponse)
async def remove_wishlist(wishlist_id: str, user: Dict = Depends(require_role(ROLE_USER))):
    """Remove one of the caller's wishlist entries"""
    removed = await delete_wishlist_entry(wishlist_id, user["email"])
    return DeleteResponse(deleted_count=1 if removed else 0)
