"""
Admin Service - property verification workflow and admin listing views

verification_status: pending -> verified | rejected
advertised is an independent flag, settable on any existing property.
The fraud cascade in user_service is the only path that rejects a non-pending property.
"""
from typing import List, Dict
import logging
from sqlalchemy import select, desc
from app.database.connection import AsyncSessionLocal
from app.models.property import Property
from app.services.property_service import (
    property_to_dict,
    VERIFICATION_PENDING,
    VERIFICATION_VERIFIED,
    VERIFICATION_REJECTED,
)
from app.utils.errors import NotFound, Conflict

logger = logging.getLogger(__name__)


async def get_all_properties_for_admin() -> List[Dict]:
    """Every listing regardless of status, latest first"""
    async with AsyncSessionLocal() as session:
        stmt = select(Property).order_by(desc(Property.created_at))
        result = await session.execute(stmt)
        return [property_to_dict(prop) for prop in result.scalars().all()]


async def get_verified_properties_for_admin() -> List[Dict]:
    """Verified listings, candidates for advertising"""
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Property)
            .where(Property.verification_status == VERIFICATION_VERIFIED)
            .order_by(desc(Property.created_at))
        )
        result = await session.execute(stmt)
        return [property_to_dict(prop) for prop in result.scalars().all()]


async def _review_property(property_id: str, target_status: str) -> Dict:
    async with AsyncSessionLocal() as session:
        stmt = select(Property).where(Property.id == property_id)
        result = await session.execute(stmt)
        prop = result.scalar_one_or_none()

        if not prop:
            raise NotFound("Property not found")

        if prop.verification_status != VERIFICATION_PENDING:
            raise Conflict(f"Property is already {prop.verification_status}")

        prop.verification_status = target_status

        await session.commit()
        await session.refresh(prop)

        logger.info(f"Property {property_id} marked {target_status}")
        return property_to_dict(prop)


async def verify_property(property_id: str) -> Dict:
    return await _review_property(property_id, VERIFICATION_VERIFIED)


async def reject_property(property_id: str) -> Dict:
    return await _review_property(property_id, VERIFICATION_REJECTED)


async def advertise_property(property_id: str) -> Dict:
    """Surface a property on the home page listing"""
    async with AsyncSessionLocal() as session:
        stmt = select(Property).where(Property.id == property_id)
        result = await session.execute(stmt)
        prop = result.scalar_one_or_none()

        if not prop:
            raise NotFound("Property not found")

        prop.advertised = True

        await session.commit()
        await session.refresh(prop)

        return property_to_dict(prop)
