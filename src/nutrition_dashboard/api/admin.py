"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from nutrition_dashboard.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])
_logger = logging.getLogger(__name__)


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.delete("/cache/goals", dependencies=[Depends(require_admin)])
async def clear_goals_cache(
    request: Request, user_id: str | None = None
) -> dict[str, object]:
    """Drop cached nutrition goals for one user or for everyone."""
    container: AppContainer = request.app.state.container
    container.goals_service.clear_cache(user_id)
    _logger.info("Cleared nutrition goals cache (user=%s)", user_id or "*")
    return {"cleared": user_id or "all"}
