from fastapi import APIRouter
from app.schemas.auth import TokenRequest, TokenResponse
from app.utils.security import create_access_token

router = APIRouter(tags=["Authentication"])


@router.post("/jwt", response_model=TokenResponse)
async def issue_token(request: TokenRequest):
    """Issue a session token for a signed-in user (7 day lifetime)"""
    claims = {"email": request.email.lower()}
    if request.name:
        claims["name"] = request.name

    token = create_access_token(data=claims)
    return TokenResponse(token=token, token_type="bearer")
