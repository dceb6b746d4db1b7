"""
Offer Controller - buyers submit and pay, listing agents accept or reject
"""
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional, Dict
from app.schemas.offer import (
    OfferResponse,
    OfferCreateRequest,
    OfferPaymentRequest,
    OfferAcceptResponse,
    BoughtStatusResponse,
)
from app.services.offer_service import (
    create_offer,
    get_offers_by_buyer,
    get_offer_by_id,
    get_bought_status,
    accept_offer,
    reject_offer,
    complete_payment,
)
from app.services.user_service import ROLE_USER, ROLE_AGENT
from app.utils.dependencies import get_current_user_email, require_role, verify_token_email

router = APIRouter(prefix="/offers", tags=["Offers"])


@router.get(
    "",
    response_model=List[OfferResponse],
    dependencies=[Depends(require_role(ROLE_USER)), Depends(verify_token_email)],
)
async def list_my_offers(email: str):
    """Offers made by the calling user"""
    offers = await get_offers_by_buyer(email.lower())
    return [OfferResponse(**offer) for offer in offers]


@router.post("", response_model=OfferResponse, status_code=status.HTTP_201_CREATED)
async def submit_offer(
    request: OfferCreateRequest,
    user: Dict = Depends(require_role(ROLE_USER))
):
    """
    Submit an offer on a property
    When wishlistId is sent, that wishlist entry is removed once the offer is stored
    """
    offer_data = request.dict(exclude_unset=True)
    offer = await create_offer(offer_data, user["email"])
    return OfferResponse(**offer)


@router.get(
    "/{property_id}/bought-status",
    response_model=BoughtStatusResponse,
    dependencies=[Depends(get_current_user_email)],
)
async def bought_status(property_id: str, offer_id: Optional[str] = Query(None, alias="offerId")):
    """Status of the winning offer on a property, or of one offer when offerId is given"""
    result = await get_bought_status(property_id, offer_id)
    return BoughtStatusResponse(**result)


@router.get("/{offer_id}", response_model=OfferResponse)
async def get_offer(offer_id: str, user: Dict = Depends(require_role(ROLE_USER))):
    """Single offer for the payment page (buyer only)"""
    offer = await get_offer_by_id(offer_id, user["email"])
    return OfferResponse(**offer)


@router.patch("/accept/{offer_id}", response_model=OfferAcceptResponse)
async def accept(offer_id: str, agent: Dict = Depends(require_role(ROLE_AGENT))):
    """Accept an offer and reject the other pending offers on the property (listing agent only)"""
    result = await accept_offer(offer_id, agent["email"])
    return OfferAcceptResponse(**result)


@router.patch("/reject/{offer_id}", response_model=OfferResponse)
async def reject(offer_id: str, agent: Dict = Depends(require_role(ROLE_AGENT))):
    """Reject a pending offer (listing agent only)"""
    offer = await reject_offer(offer_id, agent["email"])
    return OfferResponse(**offer)


@router.patch("/payment/{offer_id}", response_model=OfferResponse)
async def record_payment(
    offer_id: str,
    request: OfferPaymentRequest,
    user: Dict = Depends(require_role(ROLE_USER))
):
    """Record a successful payment on an accepted offer (buyer only)"""
    offer = await complete_payment(
        offer_id,
        buyer_email=user["email"],
        transaction_id=request.transaction_id,
        paid_at=request.paid_at,
        status=request.status,
    )
    return OfferResponse(**offer)
