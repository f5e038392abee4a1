"""pm_market REST endpoints.

GET  /market                    — market detail (status, outcome, supplies)
POST /market/buy                — mint GREEN/RED 1:1 for stablecoin
POST /market/sell               — sell GREEN/RED back to the pool
POST /market/resolve            — oracle-only resolution
POST /market/redeem             — burn winning tokens for a payout
GET  /market/payout             — payout preview for a token amount
GET  /market/balances/{account} — asset balances and LP shares
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.pm_common.response import ApiResponse, success_response
from src.pm_gateway.auth.dependencies import RequestId, get_caller, get_service
from src.pm_market.application.schemas import RedeemRequest, ResolveRequest, TradeRequest
from src.pm_market.application.service import MarketApplicationService

router = APIRouter(prefix="/market", tags=["market"])

Service = Annotated[MarketApplicationService, Depends(get_service)]
Caller = Annotated[str, Depends(get_caller)]


@router.get("")
async def get_market(request_id: RequestId, service: Service) -> ApiResponse:
    return success_response(service.get_market().model_dump(mode="json"), request_id)


@router.post("/buy")
async def buy_tokens(
    body: TradeRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.buy_tokens(caller, body.token, body.amount)
    return success_response(result.model_dump(), request_id)


@router.post("/sell")
async def sell_tokens(
    body: TradeRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.sell_tokens(caller, body.token, body.amount)
    return success_response(result.model_dump(), request_id)


@router.post("/resolve")
async def resolve_market(
    body: ResolveRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.resolve(caller, body.outcome)
    return success_response(result.model_dump(), request_id)


@router.post("/redeem")
async def redeem_tokens(
    body: RedeemRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.redeem(caller, body.token)
    return success_response(result.model_dump(), request_id)


@router.get("/payout")
async def calculate_payout(
    request_id: RequestId,
    service: Service,
    token: str = Query(..., min_length=1, max_length=16),
    amount: str = Query(..., min_length=1, max_length=64),
) -> ApiResponse:
    return success_response(service.calculate_payout(token, amount).model_dump(), request_id)


@router.get("/balances/{account}")
async def get_balances(account: str, request_id: RequestId, service: Service) -> ApiResponse:
    return success_response(service.get_balances(account).model_dump(), request_id)
