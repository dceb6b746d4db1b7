"""
Test Case Suite: Wishlist and Review Module
Test ID Range: TC-061 to TC-070

This test suite validates wishlist saving with duplicate detection, wishlist
ownership, review posting and admin review moderation.
"""

import pytest
import uuid
from datetime import datetime, timedelta, timezone
from sqlalchemy import select
from app.models.review import Review
from app.models.wishlist import Wishlist


def wishlist_body(user, prop):
    return {
        "userEmail": user.email,
        "propertyId": prop.id,
        "propertyTitle": prop.title,
        "propertyLocation": prop.location,
        "agentName": prop.agent_name,
        "agentEmail": prop.agent_email,
        "minPrice": prop.min_price,
        "maxPrice": prop.max_price,
    }


class TestWishlist:
    """
    Test Case TC-061: Add to Wishlist
    Description: Verify that a user can save a property
    Expected Result: Returns acknowledged=true, and check reports it as saved
    """
    @pytest.mark.asyncio
    async def test_tc061_add_to_wishlist(self, authenticated_user, property_factory):
        """TC-061: Add to wishlist"""
        client, user, headers = authenticated_user
        prop = await property_factory("agent@example.com")

        response = await client.post("/wishlists", json=wishlist_body(user, prop), headers=headers)
        assert response.status_code == 200
        assert response.json()["acknowledged"] is True
        assert response.json()["insertedId"]

        response = await client.get(
            "/wishlists/check",
            params={"email": user.email, "propertyId": prop.id},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json() == {"alreadyWishlisted": True}

    """
    Test Case TC-062: Add the Same Property Twice
    Description: Verify that a duplicate is reported rather than stored
    Expected Result: Returns acknowledged=false with 'Already wishlisted'
    """
    @pytest.mark.asyncio
    async def test_tc062_duplicate_wishlist(self, authenticated_user, property_factory, db_session):
        """TC-062: Add the same property twice"""
        client, user, headers = authenticated_user
        prop = await property_factory("agent@example.com")

        await client.post("/wishlists", json=wishlist_body(user, prop), headers=headers)
        response = await client.post("/wishlists", json=wishlist_body(user, prop), headers=headers)
        assert response.status_code == 200
        assert response.json() == {"acknowledged": False, "message": "Already wishlisted", "insertedId": None}

        result = await db_session.execute(select(Wishlist).where(Wishlist.user_email == user.email))
        assert len(result.scalars().all()) == 1

    """
    Test Case TC-063: Wishlist for Someone Else
    Description: Verify that userEmail must be the caller's email
    Expected Result: Returns 403 status code
    """
    @pytest.mark.asyncio
    async def test_tc063_wishlist_for_other_user(self, authenticated_user, user_factory, property_factory):
        """TC-063: Wishlist for someone else"""
        client, _, headers = authenticated_user
        other = await user_factory(role="user")
        prop = await property_factory("agent@example.com")

        response = await client.post("/wishlists", json=wishlist_body(other, prop), headers=headers)
        assert response.status_code == 403

    """
    Test Case TC-064: List, Read and Delete Wishlist Entries
    Description: Verify that a user manages only their own entries
    Expected Result: Own entries listed and deleted, another user's entry refused
    """
    @pytest.mark.asyncio
    async def test_tc064_manage_wishlist(self, authenticated_user, user_factory, property_factory, db_session):
        """TC-064: List, read and delete wishlist entries"""
        client, user, headers = authenticated_user
        other = await user_factory(role="user")
        prop = await property_factory("agent@example.com")
        mine = Wishlist(id=str(uuid.uuid4()), user_email=user.email, property_id=prop.id)
        theirs = Wishlist(id=str(uuid.uuid4()), user_email=other.email, property_id=prop.id)
        db_session.add_all([mine, theirs])
        await db_session.commit()

        response = await client.get("/wishlists", params={"email": user.email}, headers=headers)
        assert response.status_code == 200
        assert [w["id"] for w in response.json()] == [mine.id]

        response = await client.get(f"/wishlists/{theirs.id}", headers=headers)
        assert response.status_code == 403

        response = await client.delete(f"/wishlists/{theirs.id}", headers=headers)
        assert response.json() == {"deletedCount": 0}

        response = await client.delete(f"/wishlists/{mine.id}", headers=headers)
        assert response.json() == {"deletedCount": 1}


class TestReviews:
    """
    Test Case TC-065: Post a Review
    Description: Verify that a review is stored under the caller's email
    Expected Result: Returns 201 status code
    """
    @pytest.mark.asyncio
    async def test_tc065_post_review(self, authenticated_user, property_factory):
        """TC-065: Post a review"""
        client, user, headers = authenticated_user
        prop = await property_factory("agent@example.com")

        response = await client.post(
            "/reviews",
            json={"propertyId": prop.id, "propertyTitle": prop.title, "userName": user.name, "text": "Great view"},
            headers=headers,
        )
        assert response.status_code == 201
        assert response.json()["userEmail"] == user.email
        assert response.json()["text"] == "Great view"

        response = await client.get(f"/reviews/{prop.id}", headers=headers)
        assert response.status_code == 200
        assert len(response.json()) == 1

    """
    Test Case TC-066: Post an Empty Review
    Description: Verify that review text is required
    Expected Result: Returns 422 status code
    """
    @pytest.mark.asyncio
    async def test_tc066_empty_review(self, authenticated_user):
        """TC-066: Post an empty review"""
        client, _, headers = authenticated_user

        response = await client.post("/reviews", json={"propertyId": "p1", "text": ""}, headers=headers)
        assert response.status_code == 422

    """
    Test Case TC-067: Latest Reviews Are Public
    Description: Verify that the three newest reviews are served without a token
    Expected Result: Returns the three newest, newest first
    """
    @pytest.mark.asyncio
    async def test_tc067_latest_reviews(self, client, db_session):
        """TC-067: Latest reviews are public"""
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        for i in range(5):
            db_session.add(Review(
                id=f"review-{i}",
                property_id="p1",
                user_email="someone@example.com",
                text=f"Review {i}",
                posted_at=base + timedelta(days=i),
            ))
        await db_session.commit()

        response = await client.get("/reviews/latest")
        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == ["review-4", "review-3", "review-2"]

    """
    Test Case TC-068: User Reviews and Own Deletion
    Description: Verify that a user lists and deletes only their own reviews
    Expected Result: Own review deleted, another user's refused
    """
    @pytest.mark.asyncio
    async def test_tc068_own_reviews(self, authenticated_user, db_session):
        """TC-068: User reviews and own deletion"""
        client, user, headers = authenticated_user
        mine = Review(id=str(uuid.uuid4()), property_id="p1", user_email=user.email, text="Mine")
        theirs = Review(id=str(uuid.uuid4()), property_id="p1", user_email="other@example.com", text="Theirs")
        db_session.add_all([mine, theirs])
        await db_session.commit()

        response = await client.get("/reviews", params={"email": user.email}, headers=headers)
        assert [r["id"] for r in response.json()] == [mine.id]

        response = await client.delete(f"/user-reviews/{theirs.id}", headers=headers)
        assert response.status_code == 403

        response = await client.delete(f"/user-reviews/{mine.id}", headers=headers)
        assert response.status_code == 200

    """
    Test Case TC-069: Admin Moderation
    Description: Verify that an admin can list and remove any review
    Expected Result: Returns 200 status code and the review is gone
    """
    @pytest.mark.asyncio
    async def test_tc069_admin_moderation(self, authenticated_admin, db_session):
        """TC-069: Admin moderation"""
        client, _, headers = authenticated_admin
        review = Review(id=str(uuid.uuid4()), property_id="p1", user_email="u@example.com", text="Spam")
        db_session.add(review)
        await db_session.commit()

        response = await client.get("/allReviews", headers=headers)
        assert response.status_code == 200
        assert len(response.json()) == 1

        response = await client.delete(f"/reviews/{review.id}", headers=headers)
        assert response.status_code == 200

        response = await client.delete(f"/reviews/{review.id}", headers=headers)
        assert response.status_code == 404

    """
    Test Case TC-070: Non-admin Moderation
    Description: Verify that users cannot delete reviews through the admin route
    Expected Result: Returns 403 status code
    """
    @pytest.mark.asyncio
    async def test_tc070_non_admin_moderation(self, authenticated_user):
        """TC-070: Non-admin moderation"""
        client, _, headers = authenticated_user

        response = await client.delete(f"/reviews/{uuid.uuid4()}", headers=headers)
        assert response.status_code == 403
