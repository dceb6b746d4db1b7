from typing import Optional, Dict
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.utils.security import decode_access_token
from app.utils.errors import Forbidden
from app.services.user_service import get_user_by_email

security = HTTPBearer(auto_error=False)


async def get_current_user_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """Extract the caller's email from the bearer token"""
    token = credentials.credentials if credentials else None
    payload = decode_access_token(token)
    return payload["email"]


def require_role(role: str):
    """Role check, re-resolved from the store on every request"""
    async def role_checker(email: str = Depends(get_current_user_email)) -> Dict:
        user = await get_user_by_email(email)
        if not user or user["role"] != role:
            raise Forbidden("Forbidden access")
        return user

    return role_checker


async def _body_email(request: Request) -> Optional[str]:
    if "application/json" not in request.headers.get("content-type", ""):
        return None
    try:
        body = await request.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("email")
    return None


async def verify_token_email(
    request: Request,
    email: str = Depends(get_current_user_email),
) -> str:
    """
    Email ownership: an email in the path, query or JSON body must match the token's.
    Checked against whichever is present.
    """
    requested_email = (
        request.path_params.get("email")
        or request.query_params.get("email")
        or await _body_email(request)
    )

    if requested_email is not None and str(requested_email).lower() != email.lower():
        raise Forbidden("Forbidden access: Email mismatch")

    return email
