"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from hydra_tracker.api.schemas import DayRecordResponse

if TYPE_CHECKING:
    from hydra_tracker.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


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


@router.get("/history", dependencies=[Depends(require_admin)])
async def full_history(request: Request) -> dict[str, object]:
    """Return every ledger record, oldest first."""
    container: AppContainer = request.app.state.container
    history = container.history_ledger.all()
    return {
        "history": [
            DayRecordResponse.from_record(history[day]) for day in sorted(history)
        ]
    }
