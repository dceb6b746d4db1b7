"""
Dashboard Service - role-shaped summary for the signed-in user
Counts and sums are computed by the database, never cached
"""
from typing import Dict
from sqlalchemy import select, func, desc
from app.database.connection import AsyncSessionLocal
from app.models.user import User
from app.models.property import Property
from app.models.offer import Offer, OFFER_BOUGHT
from app.models.wishlist import Wishlist
from app.models.review import Review
from app.services.user_service import user_to_dict, ROLE_USER, ROLE_AGENT, ROLE_ADMIN
from app.services.property_service import property_to_dict, VERIFICATION_VERIFIED, VERIFICATION_PENDING
from app.services.offer_service import offer_to_dict
from app.services.wishlist_service import wishlist_to_dict
from app.services.review_service import review_to_dict
from app.utils.errors import NotFound


async def _count(session, stmt) -> int:
    result = await session.execute(stmt)
    return result.scalar() or 0


async def get_user_dashboard(session, email: str) -> Dict:
    wishlist_count = await _count(
        session, select(func.count(Wishlist.id)).where(Wishlist.user_email == email)
    )
    bought_count = await _count(
        session,
        select(func.count(Offer.id)).where(Offer.buyer_email == email, Offer.status == OFFER_BOUGHT),
    )
    review_count = await _count(
        session, select(func.count(Review.id)).where(Review.user_email == email)
    )

    recent_wishlist_result = await session.execute(
        select(Wishlist)
        .where(Wishlist.user_email == email)
        .order_by(desc(Wishlist.added_at))
        .limit(3)
    )
    recent_reviews_result = await session.execute(
        select(Review)
        .where(Review.user_email == email)
        .order_by(desc(Review.posted_at))
        .limit(2)
    )

    return {
        "role": ROLE_USER,
        "wishlist_count": wishlist_count,
        "bought_count": bought_count,
        "review_count": review_count,
        "recent_wishlist": [wishlist_to_dict(w) for w in recent_wishlist_result.scalars().all()],
        "recent_reviews": [review_to_dict(r) for r in recent_reviews_result.scalars().all()],
        "chart_data": [
            {"name": "Wishlist", "value": wishlist_count},
            {"name": "Bought", "value": bought_count},
            {"name": "Reviews", "value": review_count},
        ],
    }


async def get_agent_dashboard(session, email: str) -> Dict:
    total_properties = await _count(
        session, select(func.count(Property.id)).where(Property.agent_email == email)
    )
    requested_count = await _count(
        session, select(func.count(Offer.id)).where(Offer.agent_email == email)
    )

    # Sold count and amount in one aggregation
    sold_result = await session.execute(
        select(
            func.count(Offer.id).label('sold_count'),
            func.coalesce(func.sum(Offer.offer_amount), 0).label('sold_amount'),
        ).where(Offer.agent_email == email, Offer.status == OFFER_BOUGHT)
    )
    sold_stats = sold_result.first()
    sold_count = sold_stats.sold_count or 0
    sold_amount = float(sold_stats.sold_amount or 0)

    recent_properties_result = await session.execute(
        select(Property)
        .where(Property.agent_email == email)
        .order_by(desc(Property.created_at))
        .limit(3)
    )
    recent_offers_result = await session.execute(
        select(Offer)
        .where(Offer.agent_email == email)
        .order_by(desc(Offer.created_at))
        .limit(3)
    )

    available_count = max(total_properties - sold_count, 0)

    return {
        "role": ROLE_AGENT,
        "added_properties": total_properties,
        "requested_count": requested_count,
        "sold_count": sold_count,
        "sold_amount": sold_amount,
        "recent_properties": [property_to_dict(p) for p in recent_properties_result.scalars().all()],
        "recent_offers": [offer_to_dict(o) for o in recent_offers_result.scalars().all()],
        "pie_chart_data": [
            {"name": "Sold", "value": sold_count},
            {"name": "Requested", "value": requested_count},
            {"name": "Available", "value": available_count},
        ],
    }


async def get_admin_dashboard(session) -> Dict:
    total_users = await _count(session, select(func.count(User.id)))
    total_properties = await _count(session, select(func.count(Property.id)))
    total_reviews = await _count(session, select(func.count(Review.id)))

    verified_count = await _count(
        session, select(func.count(Property.id)).where(Property.verification_status == VERIFICATION_VERIFIED)
    )
    pending_count = await _count(
        session, select(func.count(Property.id)).where(Property.verification_status == VERIFICATION_PENDING)
    )

    recent_users_result = await session.execute(
        select(User).order_by(desc(User.created_at)).limit(3)
    )
    recent_properties_result = await session.execute(
        select(Property).order_by(desc(Property.created_at)).limit(3)
    )
    recent_reviews_result = await session.execute(
        select(Review).order_by(desc(Review.posted_at)).limit(3)
    )

    return {
        "role": ROLE_ADMIN,
        "total_users": total_users,
        "total_properties": total_properties,
        "total_reviews": total_reviews,
        "recent_users": [user_to_dict(u) for u in recent_users_result.scalars().all()],
        "recent_properties": [property_to_dict(p) for p in recent_properties_result.scalars().all()],
        "recent_reviews": [review_to_dict(r) for r in recent_reviews_result.scalars().all()],
        "property_status_chart": [
            {"name": "Verified", "value": verified_count},
            {"name": "Pending", "value": pending_count},
        ],
    }


async def get_dashboard_summary(email: str) -> Dict:
    """Summary shaped by the stored role of the given email"""
    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.email == email)
        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            raise NotFound("User not found")

        role = user.role or ROLE_USER

        if role == ROLE_AGENT:
            return await get_agent_dashboard(session, email)
        if role == ROLE_ADMIN:
            return await get_admin_dashboard(session)
        return await get_user_dashboard(session, email)
