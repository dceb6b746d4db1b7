"""
Wishlist Service - a user's saved properties, one entry per (user, property)
"""
from typing import List, Dict
import uuid
from sqlalchemy import select, desc
from sqlalchemy.exc import IntegrityError
from app.database.connection import AsyncSessionLocal
from app.models.wishlist import Wishlist
from app.utils.errors import NotFound, Forbidden


def wishlist_to_dict(entry: Wishlist) -> Dict:
    return {
        "id": entry.id,
        "user_email": entry.user_email,
        "property_id": entry.property_id,
        "property_title": entry.property_title,
        "property_location": entry.property_location,
        "property_image": entry.property_image,
        "agent_name": entry.agent_name,
        "agent_email": entry.agent_email,
        "agent_image": entry.agent_image,
        "min_price": entry.min_price,
        "max_price": entry.max_price,
        "added_at": entry.added_at.isoformat() if entry.added_at else "",
    }


async def is_wishlisted(user_email: str, property_id: str) -> bool:
    async with AsyncSessionLocal() as session:
        stmt = select(Wishlist.id).where(
            Wishlist.user_email == user_email,
            Wishlist.property_id == property_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None


async def add_to_wishlist(wishlist_data: Dict, caller_email: str) -> Dict:
    """Save a property for the caller. A duplicate is reported, not raised."""
    if wishlist_data["user_email"].lower() != caller_email.lower():
        raise Forbidden("Forbidden access: Email mismatch")

    if await is_wishlisted(caller_email, wishlist_data["property_id"]):
        return {"acknowledged": False, "message": "Already wishlisted"}

    async with AsyncSessionLocal() as session:
        entry = Wishlist(
            id=str(uuid.uuid4()),
            user_email=caller_email,
            property_id=wishlist_data["property_id"],
            property_title=wishlist_data.get("property_title"),
            property_location=wishlist_data.get("property_location"),
            property_image=wishlist_data.get("property_image"),
            agent_name=wishlist_data.get("agent_name"),
            agent_email=wishlist_data.get("agent_email"),
            agent_image=wishlist_data.get("agent_image"),
            min_price=wishlist_data.get("min_price"),
            max_price=wishlist_data.get("max_price"),
        )

        session.add(entry)
        try:
            await session.commit()
        except IntegrityError:
            # Lost a race with a concurrent add for the same pair
            await session.rollback()
            return {"acknowledged": False, "message": "Already wishlisted"}

        return {"acknowledged": True, "inserted_id": entry.id}


async def get_wishlist_by_user(user_email: str) -> List[Dict]:
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Wishlist)
            .where(Wishlist.user_email == user_email)
            .order_by(desc(Wishlist.added_at))
        )
        result = await session.execute(stmt)
        return [wishlist_to_dict(entry) for entry in result.scalars().all()]


async def get_wishlist_entry(wishlist_id: str, user_email: str) -> Dict:
    async with AsyncSessionLocal() as session:
        stmt = select(Wishlist).where(Wishlist.id == wishlist_id)
        result = await session.execute(stmt)
        entry = result.scalar_one_or_none()

        if not entry:
            raise NotFound("Wishlist not found")

        if entry.user_email != user_email:
            raise Forbidden("You can only view your own wishlist")

        return wishlist_to_dict(entry)


async def delete_wishlist_entry(wishlist_id: str, user_email: str) -> bool:
    """Remove one of the user's entries. Returns False if nothing matched."""
    async with AsyncSessionLocal() as session:
        stmt = select(Wishlist).where(
            Wishlist.id == wishlist_id,
            Wishlist.user_email == user_email,
        )
        result = await session.execute(stmt)
        entry = result.scalar_one_or_none()

        if not entry:
            return False

        await session.delete(entry)
        await session.commit()
        return True
