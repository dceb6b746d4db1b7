"""
Property Service - listings owned by agents plus the public/verified views
"""
from typing import Optional, List, Dict
import logging
import uuid
from sqlalchemy import select, desc
from app.database.connection import AsyncSessionLocal
from app.models.property import Property
from app.utils.errors import NotFound, Forbidden, ValidationError

logger = logging.getLogger(__name__)

VERIFICATION_PENDING = "pending"
VERIFICATION_VERIFIED = "verified"
VERIFICATION_REJECTED = "rejected"

EDITABLE_FIELDS = ("title", "location", "image", "description", "min_price", "max_price")


def property_to_dict(prop: Property) -> Dict:
    return {
        "id": prop.id,
        "title": prop.title,
        "location": prop.location,
        "image": prop.image,
        "description": prop.description,
        "min_price": prop.min_price,
        "max_price": prop.max_price,
        "agent_name": prop.agent_name,
        "agent_email": prop.agent_email,
        "agent_image": prop.agent_image,
        "verification_status": prop.verification_status,
        "advertised": bool(prop.advertised),
        "created_at": prop.created_at.isoformat() if prop.created_at else "",
        "updated_at": prop.updated_at.isoformat() if prop.updated_at else "",
    }


def validate_price_range(min_price: float, max_price: float) -> None:
    if min_price > max_price:
        raise ValidationError("minPrice cannot be greater than maxPrice")


async def create_property(agent: Dict, property_data: Dict) -> Dict:
    """Create a listing for the calling agent. New listings start pending and unadvertised."""
    if agent.get("status") == "fraud":
        raise Forbidden("Fraud agents cannot add properties")

    validate_price_range(property_data["min_price"], property_data["max_price"])

    async with AsyncSessionLocal() as session:
        new_property = Property(
            id=str(uuid.uuid4()),
            title=property_data["title"],
            location=property_data["location"],
            image=property_data.get("image"),
            description=property_data.get("description"),
            min_price=property_data["min_price"],
            max_price=property_data["max_price"],
            agent_name=property_data.get("agent_name") or agent.get("name"),
            agent_email=agent["email"],
            agent_image=property_data.get("agent_image") or agent.get("photo_url"),
            verification_status=VERIFICATION_PENDING,
            advertised=False,
        )

        session.add(new_property)
        await session.commit()
        await session.refresh(new_property)

        logger.info(f"Agent {agent['email']} added property {new_property.id}")
        return property_to_dict(new_property)


async def get_property_by_id(property_id: str) -> Dict:
    async with AsyncSessionLocal() as session:
        stmt = select(Property).where(Property.id == property_id)
        result = await session.execute(stmt)
        prop = result.scalar_one_or_none()

        if not prop:
            raise NotFound("Property not found")

        return property_to_dict(prop)


async def get_properties_by_agent_email(agent_email: str) -> List[Dict]:
    """Agent's own listings, latest first"""
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Property)
            .where(Property.agent_email == agent_email)
            .order_by(desc(Property.created_at))
        )
        result = await session.execute(stmt)
        return [property_to_dict(prop) for prop in result.scalars().all()]


async def get_advertised_properties() -> List[Dict]:
    """Home page featured listings"""
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Property)
            .where(Property.advertised == True)
            .order_by(desc(Property.created_at))
        )
        result = await session.execute(stmt)
        return [property_to_dict(prop) for prop in result.scalars().all()]


async def get_verified_properties(search: Optional[str] = None, sort: Optional[str] = None) -> List[Dict]:
    """
    Publicly listed properties with a derived average price.
    search matches location (case-insensitive), sort is 'asc' or 'desc' on average price.
    """
    async with AsyncSessionLocal() as session:
        average_price = (Property.min_price + Property.max_price) / 2

        stmt = select(Property).where(Property.verification_status == VERIFICATION_VERIFIED)

        if search:
            stmt = stmt.where(Property.location.ilike(f"%{search}%"))

        if sort == "asc":
            stmt = stmt.order_by(average_price.asc())
        elif sort == "desc":
            stmt = stmt.order_by(average_price.desc())
        else:
            stmt = stmt.order_by(desc(Property.created_at))

        result = await session.execute(stmt)

        items = []
        for prop in result.scalars().all():
            item = property_to_dict(prop)
            item["average_price"] = (prop.min_price + prop.max_price) / 2
            items.append(item)
        return items


async def update_property(property_id: str, agent_email: str, update_data: Dict) -> Dict:
    """Edit listing fields (owning agent only). Allowed in any verification state."""
    async with AsyncSessionLocal() as session:
        stmt = select(Property).where(Property.id == property_id)
        result = await session.execute(stmt)
        prop = result.scalar_one_or_none()

        if not prop:
            raise NotFound("Property not found")

        if prop.agent_email != agent_email:
            raise Forbidden("You can only update your own properties")

        changes = {
            key: value
            for key, value in update_data.items()
            if key in EDITABLE_FIELDS and value is not None
        }

        validate_price_range(
            changes.get("min_price", prop.min_price),
            changes.get("max_price", prop.max_price),
        )

        for key, value in changes.items():
            setattr(prop, key, value)

        await session.commit()
        await session.refresh(prop)

        return property_to_dict(prop)


async def delete_property(property_id: str, agent_email: str) -> bool:
    """Delete a listing (owning agent only)"""
    async with AsyncSessionLocal() as session:
        stmt = select(Property).where(Property.id == property_id)
        result = await session.execute(stmt)
        prop = result.scalar_one_or_none()

        if not prop:
            raise NotFound("Property not found")

        if prop.agent_email != agent_email:
            raise Forbidden("You can only delete your own properties")

        await session.delete(prop)
        await session.commit()

        logger.info(f"Agent {agent_email} deleted property {property_id}")
        return True
