"""pm_pool REST endpoints.

GET  /pool                   — reserves, LP shares, fee, providers
GET  /pool/quote             — read-only swap quote
POST /pool/providers         — register the caller as a liquidity provider
POST /pool/fund              — owner-only funding
POST /pool/liquidity/add     — proportional deposit by a registered provider
POST /pool/liquidity/remove  — burn LP shares for a pro-rata withdrawal
POST /pool/swap              — GREEN <-> RED
POST /pool/buy               — stablecoin -> GREEN/RED
POST /pool/sell              — GREEN/RED -> stablecoin
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.pm_common.response import ApiResponse, success_response
from src.pm_gateway.auth.dependencies import RequestId, get_caller, get_service
from src.pm_market.application.service import MarketApplicationService
from src.pm_pool.application.schemas import (
    FundRequest,
    RemoveLiquidityRequest,
    StableTradeRequest,
    SwapRequest,
)

router = APIRouter(prefix="/pool", tags=["pool"])

Service = Annotated[MarketApplicationService, Depends(get_service)]
Caller = Annotated[str, Depends(get_caller)]


@router.get("")
async def get_pool(request_id: RequestId, service: Service) -> ApiResponse:
    return success_response(service.get_pool().model_dump(), request_id)


@router.get("/quote")
async def get_quote(
    request_id: RequestId,
    service: Service,
    asset_in: str = Query(..., min_length=1, max_length=16),
    amount: str = Query(..., min_length=1, max_length=64),
    asset_out: str = Query("STABLECOIN", min_length=1, max_length=16),
) -> ApiResponse:
    return success_response(service.quote(asset_in, asset_out, amount).model_dump(), request_id)


@router.post("/providers")
async def register_provider(
    request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    service.register_provider(caller)
    return success_response({"provider": caller, "registered": True}, request_id)


@router.post("/fund")
async def fund_pool(
    body: FundRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.fund_pool(caller, body.green, body.red, body.stable)
    return success_response(result.model_dump(), request_id)


@router.post("/liquidity/add")
async def add_liquidity(
    body: FundRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.add_liquidity(caller, body.green, body.red, body.stable)
    return success_response(result.model_dump(), request_id)


@router.post("/liquidity/remove")
async def remove_liquidity(
    body: RemoveLiquidityRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.remove_liquidity(caller, body.shares)
    return success_response(result.model_dump(), request_id)


@router.post("/swap")
async def swap(
    body: SwapRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.swap(caller, body.token_in, body.amount)
    return success_response(result.model_dump(), request_id)


@router.post("/buy")
async def buy_with_stablecoin(
    body: StableTradeRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.pool_buy(caller, body.token, body.amount)
    return success_response(result.model_dump(), request_id)


@router.post("/sell")
async def sell_to_stablecoin(
    body: StableTradeRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.pool_sell(caller, body.token, body.amount)
    return success_response(result.model_dump(), request_id)
