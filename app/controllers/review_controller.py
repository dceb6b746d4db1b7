"""
Review Controller - public latest reviews, user reviews and admin moderation
"""
from fastapi import APIRouter, Depends, status
from typing import List, Dict
from app.schemas.review import ReviewResponse, ReviewCreateRequest
from app.schemas.wishlist import DeleteResponse
from app.services.review_service import (
    create_review,
    get_latest_reviews,
    get_all_reviews,
    get_reviews_by_property,
    get_reviews_by_user,
    delete_own_review,
    delete_review,
)
from app.services.user_service import ROLE_USER, ROLE_ADMIN
from app.utils.dependencies import get_current_user_email, require_role, verify_token_email

router = APIRouter(tags=["Reviews"])


@router.get("/reviews/latest", response_model=List[ReviewResponse])
async def latest_reviews():
    """Three newest reviews for the home page"""
    reviews = await get_latest_reviews(limit=3)
    return [ReviewResponse(**review) for review in reviews]


@router.get(
    "/reviews",
    response_model=List[ReviewResponse],
    dependencies=[Depends(require_role(ROLE_USER)), Depends(verify_token_email)],
)
async def my_reviews(email: str):
    reviews = await get_reviews_by_user(email.lower())
    return [ReviewResponse(**review) for review in reviews]


@router.get("/reviews/{property_id}", response_model=List[ReviewResponse], dependencies=[Depends(get_current_user_email)])
async def property_reviews(property_id: str):
    reviews = await get_reviews_by_property(property_id)
    return [ReviewResponse(**review) for review in reviews]


@router.post("/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def post_review(
    request: ReviewCreateRequest,
    email: str = Depends(get_current_user_email)
):
    """Post a review as the calling user"""
    review_data = request.dict(exclude_unset=True)
    review = await create_review(review_data, email)
    return ReviewResponse(**review)


@router.delete("/user-reviews/{review_id}", response_model=DeleteResponse)
async def delete_my_review(review_id: str, user: Dict = Depends(require_role(ROLE_USER))):
    """Delete one of the caller's own reviews"""
    await delete_own_review(review_id, user["email"])
    return DeleteResponse(deleted_count=1)


@router.get("/allReviews", response_model=List[ReviewResponse], dependencies=[Depends(require_role(ROLE_ADMIN))])
async def all_reviews():
    """Every review, newest first (Admin only)"""
    reviews = await get_all_reviews()
    return [ReviewResponse(**review) for review in reviews]


@router.delete("/reviews/{review_id}", response_model=DeleteResponse, dependencies=[Depends(require_role(ROLE_ADMIN))])
async def moderate_review(review_id: str):
    """Remove any review (Admin only)"""
    await delete_review(review_id)
    return DeleteResponse(deleted_count=1)
