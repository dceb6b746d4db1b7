"""
Review Service - property reviews written by users, moderated by admins
"""
from typing import List, Dict
import logging
import uuid
from sqlalchemy import select, desc
from app.database.connection import AsyncSessionLocal
from app.models.review import Review
from app.utils.errors import NotFound, Forbidden

logger = logging.getLogger(__name__)


def review_to_dict(review: Review) -> Dict:
    return {
        "id": review.id,
        "property_id": review.property_id,
        "property_title": review.property_title,
        "user_email": review.user_email,
        "user_name": review.user_name,
        "user_image": review.user_image,
        "agent_name": review.agent_name,
        "text": review.text,
        "posted_at": review.posted_at.isoformat() if review.posted_at else "",
    }


async def create_review(review_data: Dict, user_email: str) -> Dict:
    """Post a review as the authenticated user"""
    async with AsyncSessionLocal() as session:
        review = Review(
            id=str(uuid.uuid4()),
            property_id=review_data["property_id"],
            property_title=review_data.get("property_title"),
            user_email=user_email,
            user_name=review_data.get("user_name"),
            user_image=review_data.get("user_image"),
            agent_name=review_data.get("agent_name"),
            text=review_data["text"],
        )

        session.add(review)
        await session.commit()
        await session.refresh(review)

        return review_to_dict(review)


async def get_latest_reviews(limit: int = 3) -> List[Dict]:
    async with AsyncSessionLocal() as session:
        stmt = select(Review).order_by(desc(Review.posted_at)).limit(limit)
        result = await session.execute(stmt)
        return [review_to_dict(review) for review in result.scalars().all()]


async def get_all_reviews() -> List[Dict]:
    async with AsyncSessionLocal() as session:
        stmt = select(Review).order_by(desc(Review.posted_at))
        result = await session.execute(stmt)
        return [review_to_dict(review) for review in result.scalars().all()]


async def get_reviews_by_property(property_id: str) -> List[Dict]:
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Review)
            .where(Review.property_id == property_id)
            .order_by(desc(Review.posted_at))
        )
        result = await session.execute(stmt)
        return [review_to_dict(review) for review in result.scalars().all()]


async def get_reviews_by_user(user_email: str) -> List[Dict]:
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Review)
            .where(Review.user_email == user_email)
            .order_by(desc(Review.posted_at))
        )
        result = await session.execute(stmt)
        return [review_to_dict(review) for review in result.scalars().all()]


async def delete_own_review(review_id: str, user_email: str) -> bool:
    """Author deletes their own review"""
    async with AsyncSessionLocal() as session:
        stmt = select(Review).where(Review.id == review_id)
        result = await session.execute(stmt)
        review = result.scalar_one_or_none()

        if not review:
            raise NotFound("Review not found")

        if review.user_email != user_email:
            raise Forbidden("You can only delete your own reviews")

        await session.delete(review)
        await session.commit()
        return True


async def delete_review(review_id: str) -> bool:
    """Admin moderation delete"""
    async with AsyncSessionLocal() as session:
        stmt = select(Review).where(Review.id == review_id)
        result = await session.execute(stmt)
        review = result.scalar_one_or_none()

        if not review:
            raise NotFound("Review not found")

        await session.delete(review)
        await session.commit()

        logger.info(f"Review {review_id} removed by admin")
        return True
