# src/pm_admin/api/router.py
"""Admin REST API: owner-only operations and invariant checks."""
from typing import Annotated

from fastapi import APIRouter, Depends

from src.pm_common.response import ApiResponse, success_response
from src.pm_gateway.auth.dependencies import RequestId, get_caller, get_service
from src.pm_market.application.schemas import FaucetRequest, SetOracleRequest
from src.pm_market.application.service import MarketApplicationService
from src.pm_pool.application.schemas import FundRequest

router = APIRouter(prefix="/admin", tags=["admin"])

Service = Annotated[MarketApplicationService, Depends(get_service)]
Caller = Annotated[str, Depends(get_caller)]


@router.post("/faucet")
async def faucet(
    body: FaucetRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.faucet(caller, body.account, body.amount)
    return success_response(result.model_dump(), request_id)


@router.post("/oracle")
async def set_oracle(
    body: SetOracleRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    service.set_oracle(caller, body.oracle)
    return success_response({"oracle": body.oracle}, request_id)


@router.post("/pre-fund")
async def pre_fund_pool(
    body: FundRequest, request_id: RequestId, caller: Caller, service: Service
) -> ApiResponse:
    result = service.pre_fund_pool(caller, body.green, body.red, body.stable)
    return success_response(result.model_dump(), request_id)


@router.get("/invariants")
async def verify_invariants(request_id: RequestId, service: Service) -> ApiResponse:
    return success_response(service.verify_invariants(), request_id)
