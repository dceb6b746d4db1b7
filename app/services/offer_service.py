"""
Offer Service - lifecycle of a buyer's offer on a property

    pending -> accepted -> bought
    pending -> rejected

At most one offer per property is accepted or bought. Accepting an offer
rejects every other offer on the same property in the same transaction.
"""
from typing import Optional, List, Dict
from datetime import datetime, timezone
import logging
import uuid
from sqlalchemy import select, update, func, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import aliased
from app.database.connection import AsyncSessionLocal
from app.models.offer import (
    Offer,
    OFFER_PENDING,
    OFFER_ACCEPTED,
    OFFER_REJECTED,
    OFFER_BOUGHT,
    WINNING_STATUSES,
)
from app.models.property import Property
from app.services.user_service import get_user_by_email, ROLE_USER
from app.services.wishlist_service import delete_wishlist_entry
from app.utils.errors import NotFound, Forbidden, ValidationError, Conflict

logger = logging.getLogger(__name__)

REQUIRED_OFFER_FIELDS = ("property_id", "buyer_email", "offer_amount", "buying_date", "agent_email")


def offer_to_dict(offer: Offer) -> Dict:
    return {
        "id": offer.id,
        "property_id": offer.property_id,
        "property_title": offer.property_title,
        "property_location": offer.property_location,
        "property_image": offer.property_image,
        "agent_name": offer.agent_name,
        "agent_email": offer.agent_email,
        "buyer_email": offer.buyer_email,
        "buyer_name": offer.buyer_name,
        "offer_amount": offer.offer_amount,
        "buying_date": offer.buying_date,
        "status": offer.status,
        "transaction_id": offer.transaction_id,
        "paid_at": offer.paid_at.isoformat() if offer.paid_at else None,
        "created_at": offer.created_at.isoformat() if offer.created_at else "",
    }


async def create_offer(offer_data: Dict, caller_email: str) -> Dict:
    """
    Submit an offer on a property.

    The price range and listing agent come from the stored property.
    When submitted from a wishlist entry, that entry is removed afterwards;
    a failure there does not undo the offer.
    """
    missing = [field for field in REQUIRED_OFFER_FIELDS if offer_data.get(field) in (None, "")]
    if missing:
        raise ValidationError("Missing required fields")

    buyer_email = offer_data["buyer_email"].lower()
    offer_amount = offer_data["offer_amount"]

    if buyer_email != caller_email:
        raise Forbidden("Forbidden access: Email mismatch")

    buyer = await get_user_by_email(buyer_email)
    if not buyer or buyer["role"] != ROLE_USER:
        raise Forbidden("Only users can submit offers")

    if offer_amount <= 0:
        raise ValidationError("Offer amount must be positive")

    async with AsyncSessionLocal() as session:
        stmt = select(Property).where(Property.id == offer_data["property_id"])
        result = await session.execute(stmt)
        prop = result.scalar_one_or_none()

        if not prop:
            raise NotFound("Property not found")

        if offer_data["agent_email"].lower() != (prop.agent_email or "").lower():
            raise ValidationError("Agent does not match the property listing")

        if offer_amount < prop.min_price or offer_amount > prop.max_price:
            raise ValidationError("Offer must be within price range")

        new_offer = Offer(
            id=str(uuid.uuid4()),
            property_id=prop.id,
            property_title=offer_data.get("property_title") or prop.title,
            property_location=offer_data.get("property_location") or prop.location,
            property_image=offer_data.get("property_image") or prop.image,
            agent_name=offer_data.get("agent_name") or prop.agent_name,
            agent_email=prop.agent_email,
            buyer_email=buyer_email,
            buyer_name=offer_data.get("buyer_name") or buyer.get("name"),
            offer_amount=offer_amount,
            buying_date=offer_data["buying_date"],
            status=OFFER_PENDING,
        )

        session.add(new_offer)
        await session.commit()
        await session.refresh(new_offer)
        created = offer_to_dict(new_offer)

    logger.info(f"Offer {created['id']} submitted by {buyer_email} on property {created['property_id']}")

    wishlist_id = offer_data.get("wishlist_id")
    if wishlist_id:
        try:
            removed = await delete_wishlist_entry(wishlist_id, buyer_email)
            if not removed:
                logger.info(f"Wishlist entry {wishlist_id} already gone after offer {created['id']}")
        except Exception as e:
            logger.warning(f"Failed to remove wishlist entry {wishlist_id} after offer {created['id']}: {str(e)}")

    return created


async def get_offers_by_buyer(buyer_email: str) -> List[Dict]:
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Offer)
            .where(Offer.buyer_email == buyer_email)
            .order_by(desc(Offer.created_at))
        )
        result = await session.execute(stmt)
        return [offer_to_dict(offer) for offer in result.scalars().all()]


async def get_offer_by_id(offer_id: str, buyer_email: str) -> Dict:
    """Single offer for the payment page (buyer only)"""
    async with AsyncSessionLocal() as session:
        stmt = select(Offer).where(Offer.id == offer_id)
        result = await session.execute(stmt)
        offer = result.scalar_one_or_none()

        if not offer:
            raise NotFound("Offer not found")

        if offer.buyer_email != buyer_email:
            raise Forbidden("You can only view your own offers")

        return offer_to_dict(offer)


async def get_offers_for_agent_properties(agent_email: str) -> List[Dict]:
    """Every offer made on properties listed by this agent, newest first"""
    async with AsyncSessionLocal() as session:
        agent_property_ids = select(Property.id).where(Property.agent_email == agent_email)
        stmt = (
            select(Offer)
            .where(Offer.property_id.in_(agent_property_ids))
            .order_by(desc(Offer.created_at))
        )
        result = await session.execute(stmt)
        return [offer_to_dict(offer) for offer in result.scalars().all()]


async def get_sold_offers(agent_email: str) -> List[Dict]:
    """Bought offers on this agent's listings, most recently paid first"""
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Offer)
            .where(Offer.agent_email == agent_email, Offer.status == OFFER_BOUGHT)
            .order_by(desc(Offer.paid_at))
        )
        result = await session.execute(stmt)
        return [offer_to_dict(offer) for offer in result.scalars().all()]


async def get_sold_total_amount(agent_email: str) -> float:
    async with AsyncSessionLocal() as session:
        stmt = select(func.coalesce(func.sum(Offer.offer_amount), 0)).where(
            Offer.agent_email == agent_email,
            Offer.status == OFFER_BOUGHT,
        )
        result = await session.execute(stmt)
        return float(result.scalar() or 0)


async def get_bought_status(property_id: str, offer_id: Optional[str] = None) -> Dict:
    """
    Status of the winning offer on a property.
    With offer_id, the status of that specific offer on the property.
    """
    async with AsyncSessionLocal() as session:
        stmt = select(Offer).where(Offer.property_id == property_id)
        if offer_id:
            stmt = stmt.where(Offer.id == offer_id)
        else:
            stmt = stmt.where(Offer.status.in_(WINNING_STATUSES))

        result = await session.execute(stmt.limit(1))
        offer = result.scalars().first()

        if not offer:
            raise NotFound("offer not found")

        return {"bought_status": offer.status, "offer_id": offer.id}


async def accept_offer(offer_id: str, agent_email: str) -> Dict:
    """
    Accept one offer and reject every other pending offer on the same property.

    The property row is locked for the duration of the transaction and the
    accept is a conditional write (offer still pending, no sibling already
    accepted or bought), so concurrent accepts on one property cannot both win.
    """
    async with AsyncSessionLocal() as session:
        stmt = select(Offer).where(Offer.id == offer_id)
        result = await session.execute(stmt)
        offer = result.scalar_one_or_none()

        if not offer:
            raise NotFound("Offer not found")

        property_id = offer.property_id

        property_stmt = select(Property).where(Property.id == property_id).with_for_update()
        property_result = await session.execute(property_stmt)
        prop = property_result.scalar_one_or_none()

        if not prop:
            raise NotFound("Property not found")

        if prop.agent_email != agent_email:
            raise Forbidden("Only the listing agent can accept offers on this property")

        if offer.status != OFFER_PENDING:
            raise Conflict(f"Offer is already {offer.status}")

        sibling = aliased(Offer)
        winner_exists = (
            select(sibling.id)
            .where(
                sibling.property_id == property_id,
                sibling.id != offer_id,
                sibling.status.in_(WINNING_STATUSES),
            )
            .exists()
        )

        siblings_stmt = select(func.count(Offer.id)).where(
            Offer.property_id == property_id,
            Offer.id != offer_id,
            Offer.status == OFFER_PENDING,
        )
        rejected_count = (await session.execute(siblings_stmt)).scalar() or 0

        try:
            await session.execute(
                update(Offer)
                .where(
                    Offer.id == offer_id,
                    Offer.status == OFFER_PENDING,
                    ~winner_exists,
                )
                .values(status=OFFER_ACCEPTED)
                .execution_options(synchronize_session="fetch")
            )

            await session.refresh(offer)
            if offer.status != OFFER_ACCEPTED:
                raise Conflict("Another offer on this property has already been accepted")

            await session.execute(
                update(Offer)
                .where(Offer.property_id == property_id, Offer.id != offer_id, Offer.status == OFFER_PENDING)
                .values(status=OFFER_REJECTED)
                .execution_options(synchronize_session="fetch")
            )

            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise Conflict("Another offer on this property has already been accepted")

    logger.info(f"Offer {offer_id} accepted by {agent_email}, {rejected_count} sibling offers rejected")
    return {
        "message": "Offer accepted and others rejected.",
        "accepted_offer_id": offer_id,
        "rejected_count": rejected_count,
    }


async def reject_offer(offer_id: str, agent_email: str) -> Dict:
    """Reject a single pending offer (listing agent only)"""
    async with AsyncSessionLocal() as session:
        stmt = select(Offer).where(Offer.id == offer_id)
        result = await session.execute(stmt)
        offer = result.scalar_one_or_none()

        if not offer:
            raise NotFound("Offer not found")

        property_stmt = select(Property.agent_email).where(Property.id == offer.property_id)
        property_result = await session.execute(property_stmt)
        listing_agent_email = property_result.scalar_one_or_none() or offer.agent_email

        if listing_agent_email != agent_email:
            raise Forbidden("Only the listing agent can reject offers on this property")

        if offer.status != OFFER_PENDING:
            raise Conflict(f"Offer is already {offer.status}")

        offer.status = OFFER_REJECTED

        await session.commit()
        await session.refresh(offer)

        logger.info(f"Offer {offer_id} rejected by {agent_email}")
        return offer_to_dict(offer)


async def complete_payment(
    offer_id: str,
    buyer_email: str,
    transaction_id: str,
    paid_at: Optional[datetime] = None,
    status: Optional[str] = None,
) -> Dict:
    """Record a successful payment: accepted -> bought (buyer only)"""
    if status is not None and status != OFFER_BOUGHT:
        raise ValidationError("Payment can only move an offer to 'bought'")

    async with AsyncSessionLocal() as session:
        stmt = select(Offer).where(Offer.id == offer_id)
        result = await session.execute(stmt)
        offer = result.scalar_one_or_none()

        if not offer:
            raise NotFound("Offer not found")

        if offer.buyer_email != buyer_email:
            raise Forbidden("You can only pay for your own offers")

        if offer.status != OFFER_ACCEPTED:
            raise Conflict(f"Only accepted offers can be paid, offer is {offer.status}")

        offer.status = OFFER_BOUGHT
        offer.transaction_id = transaction_id
        offer.paid_at = paid_at or datetime.now(timezone.utc)

        await session.commit()
        await session.refresh(offer)

        logger.info(f"Offer {offer_id} paid by {buyer_email} (transaction {transaction_id})")
        return offer_to_dict(offer)
