"""
User Service - accounts, the role directory and admin-driven account transitions
"""
from typing import Optional, List, Dict, Tuple
import logging
import uuid
from sqlalchemy import select, update, delete, func
from app.database.connection import AsyncSessionLocal
from app.models.user import User
from app.models.property import Property
from app.services.firebase_service import delete_firebase_account
from app.utils.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

ROLE_USER = "user"
ROLE_AGENT = "agent"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_AGENT, ROLE_ADMIN)

STATUS_ACTIVE = "active"
STATUS_FRAUD = "fraud"


def user_to_dict(user: User) -> Dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "photo_url": user.photo_url,
        "firebase_uid": user.firebase_uid,
        "role": user.role or ROLE_USER,
        "status": user.status or STATUS_ACTIVE,
        "created_at": user.created_at.isoformat() if user.created_at else "",
    }


async def create_user(user_data: Dict) -> Tuple[bool, Dict]:
    """
    Create a user on first sign-in.
    Returns (created, user). An existing email is returned untouched.
    """
    email = user_data["email"].lower()
    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.email == email)
        result = await session.execute(stmt)
        existing_user = result.scalar_one_or_none()

        if existing_user:
            return False, user_to_dict(existing_user)

        new_user = User(
            id=str(uuid.uuid4()),
            email=email,
            name=user_data.get("name"),
            photo_url=user_data.get("photo_url"),
            firebase_uid=user_data.get("firebase_uid"),
            role=ROLE_USER,
            status=STATUS_ACTIVE,
        )

        session.add(new_user)
        await session.commit()
        await session.refresh(new_user)

        logger.info(f"Created user {new_user.id} ({email})")
        return True, user_to_dict(new_user)


async def get_user_by_email(email: str) -> Optional[Dict]:
    """Read-through lookup, never cached: roles can change between requests"""
    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.email == email.lower())
        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            return None

        return user_to_dict(user)


async def get_user_role(email: str) -> str:
    """Role directory lookup. A user without an explicit role is a 'user'."""
    user = await get_user_by_email(email)
    if not user:
        raise NotFound("User not found")
    return user["role"]


async def get_all_users() -> List[Dict]:
    """All users, newest first (admin view)"""
    async with AsyncSessionLocal() as session:
        stmt = select(User).order_by(User.created_at.desc())
        result = await session.execute(stmt)
        return [user_to_dict(user) for user in result.scalars().all()]


async def set_user_role(user_id: str, role: str) -> Dict:
    """Promote a user to 'agent' or 'admin' (admin only)"""
    if role not in ROLES:
        raise ValidationError(f"Unknown role: {role}")

    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.id == user_id)
        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            raise NotFound("User not found")

        previous_role = user.role or ROLE_USER
        user.role = role

        await session.commit()
        await session.refresh(user)

        logger.info(f"User {user_id} role changed: {previous_role} -> {role}")
        return user_to_dict(user)


async def mark_user_as_fraud(user_id: str) -> Dict:
    """
    Flag an agent as fraud and reject every property they listed.
    Both writes are committed in the same transaction.
    """
    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.id == user_id)
        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            raise NotFound("User not found")

        if (user.role or ROLE_USER) != ROLE_AGENT:
            raise ValidationError("Only agents can be marked as fraud")

        agent_email = user.email
        user.status = STATUS_FRAUD

        count_stmt = select(func.count(Property.id)).where(Property.agent_email == agent_email)
        rejected_count = (await session.execute(count_stmt)).scalar() or 0

        await session.execute(
            update(Property)
            .where(Property.agent_email == agent_email)
            .values(verification_status="rejected")
            .execution_options(synchronize_session="fetch")
        )

        await session.commit()

        logger.warning(f"Agent {agent_email} marked as fraud, {rejected_count} properties rejected")
        return {
            "message": "User marked as fraud and properties hidden",
            "rejected_properties": rejected_count,
        }


async def delete_user(user_id: str) -> Dict:
    """
    Delete a user from the identity provider, then from the store.
    If the provider call fails the store row is kept.
    """
    async with AsyncSessionLocal() as session:
        stmt = select(User.email, User.firebase_uid).where(User.id == user_id)
        result = await session.execute(stmt)
        row = result.first()

    if not row:
        raise NotFound("User not found")

    email, firebase_uid = row.email, row.firebase_uid

    # No session is held while waiting on the provider
    if firebase_uid:
        await delete_firebase_account(firebase_uid)
    else:
        logger.info(f"User {user_id} has no external account, deleting store record only")

    async with AsyncSessionLocal() as session:
        result = await session.execute(delete(User).where(User.id == user_id))
        await session.commit()

        logger.info(f"Deleted user {user_id} ({email})")
        return {
            "message": "User deleted from both Firebase and the database",
            "deleted_count": result.rowcount,
        }
