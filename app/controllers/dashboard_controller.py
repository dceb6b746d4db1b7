"""
Dashboard Controller - one summary endpoint, shaped by the caller's role
"""
from fastapi import APIRouter, Depends
from typing import Union
from app.schemas.dashboard import UserDashboardResponse, AgentDashboardResponse, AdminDashboardResponse
from app.services.dashboard_service import get_dashboard_summary
from app.services.user_service import ROLE_AGENT, ROLE_ADMIN
from app.utils.dependencies import verify_token_email

router = APIRouter(prefix="/api", tags=["Dashboard"])


@router.get(
    "/dashboard-summary",
    response_model=Union[AgentDashboardResponse, AdminDashboardResponse, UserDashboardResponse],
    dependencies=[Depends(verify_token_email)],
)
async def dashboard_summary(email: str):
    """
    Counts, recent items and chart data for the dashboard
    Agents and admins get their own payload, everyone else the user payload
    """
    summary = await get_dashboard_summary(email.lower())

    if summary["role"] == ROLE_AGENT:
        return AgentDashboardResponse(**summary)
    if summary["role"] == ROLE_ADMIN:
        return AdminDashboardResponse(**summary)
    return UserDashboardResponse(**summary)
