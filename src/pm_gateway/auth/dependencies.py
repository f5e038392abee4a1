"""FastAPI dependencies: get_caller, get_service and RequestId.

Authentication is external to the engine; the gateway passes the
already-authenticated account id in the X-Account-Id header and the engine
only compares it against owner / oracle / provider identities.

Usage in any router:
    from src.pm_gateway.auth.dependencies import get_caller, get_service

    @router.post("/buy")
    async def buy(caller: str = Depends(get_caller), ...):
        ...
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from src.pm_market.application.service import MarketApplicationService


async def get_caller(
    x_account_id: str | None = Header(default=None, max_length=128),
) -> str:
    """Return the caller identity, or HTTP 401 when the header is missing or blank."""
    if x_account_id is None or not x_account_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Account-Id header required",
        )
    return x_account_id.strip()


def get_service(request: Request) -> MarketApplicationService:
    return request.app.state.service


def get_request_id(request: Request) -> str | None:
    """Request ID injected by RequestLogMiddleware, if it ran."""
    return getattr(request.state, "request_id", None)


RequestId = Annotated[str | None, Depends(get_request_id)]
