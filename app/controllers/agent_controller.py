from fastapi import APIRouter, Depends
from typing import List
from app.schemas.offer import OfferResponse, SoldTotalResponse
from app.services.offer_service import (
    get_offers_for_agent_properties,
    get_sold_offers,
    get_sold_total_amount,
)
from app.services.user_service import ROLE_AGENT
from app.utils.dependencies import require_role, verify_token_email

router = APIRouter(
    tags=["Agent Sales"],
    dependencies=[Depends(require_role(ROLE_AGENT)), Depends(verify_token_email)],
)


@router.get("/agent-requests", response_model=List[OfferResponse])
async def list_offer_requests(email: str):
    """Every offer made on the agent's properties"""
    offers = await get_offers_for_agent_properties(email.lower())
    return [OfferResponse(**offer) for offer in offers]


@router.get("/sold-properties", response_model=List[OfferResponse])
async def list_sold_properties(email: str):
    """Bought offers on the agent's properties"""
    offers = await get_sold_offers(email.lower())
    return [OfferResponse(**offer) for offer in offers]


@router.get("/sold/total-amount", response_model=SoldTotalResponse)
async def sold_total_amount(email: str):
    total = await get_sold_total_amount(email.lower())
    return SoldTotalResponse(total_amount=total)
