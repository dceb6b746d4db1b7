"""
Test Case Suite: Property Management Module
Test ID Range: TC-035 to TC-044

This test suite validates property creation, retrieval, updating and deletion
by agents, and the public advertised and verified catalogues.
"""

import pytest
import uuid
from httpx import AsyncClient
from sqlalchemy import select
from app.models.property import Property


class TestPropertyCreation:
    """
    Test Case TC-035: Create Property with Valid Data
    Description: Verify that an agent can add a property
    Expected Result: Returns 201 status code, pending and not advertised
    """
    @pytest.mark.asyncio
    async def test_tc035_create_property_valid_data(self, authenticated_agent):
        """TC-035: Create property with valid data"""
        client, agent, headers = authenticated_agent

        property_data = {
            "title": "Lakeside Villa",
            "location": "Gulshan, Dhaka",
            "image": "https://img.example.com/villa.png",
            "description": "Four bedrooms facing the lake",
            "minPrice": 100000,
            "maxPrice": 200000,
        }

        response = await client.post("/properties", json=property_data, headers=headers)
        assert response.status_code == 201

        data = response.json()
        assert data["title"] == "Lakeside Villa"
        assert data["minPrice"] == 100000
        assert data["maxPrice"] == 200000
        assert data["agentEmail"] == agent.email
        assert data["agentName"] == agent.name
        assert data["agentImage"] == agent.photo_url
        assert data["verificationStatus"] == "pending"
        assert data["advertised"] is False
        assert "id" in data

    """
    Test Case TC-036: Create Property with Missing Required Fields
    Description: Verify that property creation fails when required fields are missing
    Expected Result: Returns 422 status code with validation errors
    """
    @pytest.mark.asyncio
    async def test_tc036_create_property_missing_fields(self, authenticated_agent):
        """TC-036: Create property with missing required fields"""
        client, _, headers = authenticated_agent

        response = await client.post("/properties", json={"title": "No price"}, headers=headers)
        assert response.status_code == 422

    """
    Test Case TC-037: Create Property with Inverted Price Range
    Description: Verify that minPrice may not exceed maxPrice
    Expected Result: Returns 400 status code
    """
    @pytest.mark.asyncio
    async def test_tc037_inverted_price_range(self, authenticated_agent):
        """TC-037: Create property with inverted price range"""
        client, _, headers = authenticated_agent

        response = await client.post(
            "/properties",
            json={"title": "Flat", "location": "Dhaka", "minPrice": 300, "maxPrice": 200},
            headers=headers,
        )
        assert response.status_code == 400

    """
    Test Case TC-038: Fraud Agent Adds Property
    Description: Verify that an agent flagged as fraud cannot add listings
    Expected Result: Returns 403 status code
    """
    @pytest.mark.asyncio
    async def test_tc038_fraud_agent_blocked(self, client: AsyncClient, user_factory, auth_headers):
        """TC-038: Fraud agent adds property"""
        agent = await user_factory(role="agent", status="fraud")

        response = await client.post(
            "/properties",
            json={"title": "Flat", "location": "Dhaka", "minPrice": 100, "maxPrice": 200},
            headers=auth_headers(agent.email),
        )
        assert response.status_code == 403


class TestPropertyRetrieval:
    """
    Test Case TC-039: Agent Lists Own Properties
    Description: Verify that an agent sees only the properties they added
    Expected Result: Returns 200 status code with the agent's properties
    """
    @pytest.mark.asyncio
    async def test_tc039_agent_properties(self, authenticated_agent, property_factory):
        """TC-039: Agent lists own properties"""
        client, agent, headers = authenticated_agent
        await property_factory(agent.email, title="Mine 1")
        await property_factory(agent.email, title="Mine 2", verification_status="pending")
        await property_factory("other_agent@example.com", title="Theirs")

        response = await client.get(f"/properties/agent/{agent.email}", headers=headers)
        assert response.status_code == 200
        titles = sorted(p["title"] for p in response.json())
        assert titles == ["Mine 1", "Mine 2"]

    """
    Test Case TC-040: Verified Catalogue with Search and Sort
    Description: Verify that only verified properties are listed, filtered by
    location and sorted by average price
    Expected Result: Returns 200 status code with averagePrice on each item
    """
    @pytest.mark.asyncio
    async def test_tc040_verified_search_and_sort(self, authenticated_user, property_factory):
        """TC-040: Verified catalogue with search and sort"""
        client, _, headers = authenticated_user
        await property_factory("a@example.com", title="Cheap", location="Dhaka North", min_price=100, max_price=200)
        await property_factory("a@example.com", title="Pricey", location="dhaka south", min_price=500, max_price=900)
        await property_factory("a@example.com", title="Elsewhere", location="Chittagong", min_price=50, max_price=60)
        await property_factory("a@example.com", title="Hidden", location="Dhaka", verification_status="pending")

        response = await client.get(
            "/properties/verified",
            params={"search": "DHAKA", "sort": "desc"},
            headers=headers,
        )
        assert response.status_code == 200

        data = response.json()
        assert [p["title"] for p in data] == ["Pricey", "Cheap"]
        assert data[0]["averagePrice"] == 700
        assert data[1]["averagePrice"] == 150

        response = await client.get("/properties/verified", params={"sort": "asc"}, headers=headers)
        assert [p["title"] for p in response.json()] == ["Elsewhere", "Cheap", "Pricey"]

    """
    Test Case TC-041: Advertised Properties Are Public
    Description: Verify that the home page listing needs no token
    Expected Result: Returns 200 status code with advertised properties only
    """
    @pytest.mark.asyncio
    async def test_tc041_advertised_public(self, client: AsyncClient, property_factory):
        """TC-041: Advertised properties are public"""
        await property_factory("a@example.com", title="Featured", advertised=True)
        await property_factory("a@example.com", title="Plain")

        response = await client.get("/properties/advertised")
        assert response.status_code == 200
        assert [p["title"] for p in response.json()] == ["Featured"]

    """
    Test Case TC-042: Retrieve Non-existent Property
    Description: Verify that a missing property is not found
    Expected Result: Returns 404 status code
    """
    @pytest.mark.asyncio
    async def test_tc042_property_not_found(self, authenticated_user):
        """TC-042: Retrieve non-existent property"""
        client, _, headers = authenticated_user

        response = await client.get(f"/properties/{uuid.uuid4()}", headers=headers)
        assert response.status_code == 404


class TestPropertyUpdateAndDeletion:
    """
    Test Case TC-043: Update Property
    Description: Verify that the owning agent can edit a listing and that the
    merged price range is validated
    Expected Result: Returns 200 status code, then 400 for an inverted range
    """
    @pytest.mark.asyncio
    async def test_tc043_update_property(self, authenticated_agent, property_factory):
        """TC-043: Update property"""
        client, agent, headers = authenticated_agent
        prop = await property_factory(agent.email, min_price=100, max_price=200)

        response = await client.patch(
            f"/properties/{prop.id}",
            json={"title": "Renamed", "maxPrice": 250},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"
        assert response.json()["maxPrice"] == 250

        response = await client.patch(f"/properties/{prop.id}", json={"minPrice": 300}, headers=headers)
        assert response.status_code == 400

    """
    Test Case TC-044: Update or Delete Another Agent's Property
    Description: Verify that only the owning agent can change a listing
    Expected Result: Returns 403 status code and the property is kept
    """
    @pytest.mark.asyncio
    async def test_tc044_non_owner_blocked(self, authenticated_agent, property_factory, db_session):
        """TC-044: Update or delete another agent's property"""
        client, _, headers = authenticated_agent
        prop = await property_factory("other_agent@example.com")

        response = await client.patch(f"/properties/{prop.id}", json={"title": "Mine now"}, headers=headers)
        assert response.status_code == 403

        response = await client.delete(f"/properties/{prop.id}", headers=headers)
        assert response.status_code == 403

        result = await db_session.execute(select(Property).where(Property.id == prop.id))
        assert result.scalar_one_or_none() is not None

    @pytest.mark.asyncio
    async def test_delete_own_property(self, authenticated_agent, property_factory, db_session):
        client, agent, headers = authenticated_agent
        prop = await property_factory(agent.email)

        response = await client.delete(f"/properties/{prop.id}", headers=headers)
        assert response.status_code == 200

        result = await db_session.execute(select(Property).where(Property.id == prop.id))
        assert result.scalar_one_or_none() is None
