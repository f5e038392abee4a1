"""Tests for pm_common.errors and pm_common.response."""

from src.pm_common.errors import (
    AlreadyRegisteredError,
    AlreadyResolvedError,
    AppError,
    InsufficientBalanceError,
    InsufficientReserveError,
    InternalError,
    InvalidAmountError,
    InvalidOutcomeError,
    MarketClosedError,
    NotRegisteredProviderError,
    NotResolvedError,
    NotWinningTokenError,
    PoolEmptyError,
    ReservedAccountError,
    TooEarlyError,
    UnauthorizedError,
    UnknownAssetError,
)
from src.pm_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_custom_http_status(self) -> None:
        err = AppError(code=6003, message="Already registered", http_status=409)
        assert err.http_status == 409

    def test_is_exception(self) -> None:
        err = AppError(code=1006, message="test")
        assert isinstance(err, Exception)
        assert str(err) == "test"


class TestSpecificErrors:
    def test_insufficient_balance(self) -> None:
        err = InsufficientBalanceError("STABLECOIN", required=6500, available=3000)
        assert err.code == 2001
        assert err.http_status == 422
        assert "STABLECOIN" in err.message
        assert "6500" in err.message
        assert "3000" in err.message

    def test_unauthorized(self) -> None:
        err = UnauthorizedError("mallory", "oracle")
        assert err.code == 1006
        assert err.http_status == 403
        assert "mallory" in err.message

    def test_reserved_account(self) -> None:
        err = ReservedAccountError("POOL")
        assert isinstance(err, UnauthorizedError)
        assert err.code == 1006
        assert err.http_status == 403
        assert "reserved" in err.message

    def test_unknown_asset(self) -> None:
        err = UnknownAssetError("BLUE")
        assert err.code == 2003
        assert err.http_status == 400

    def test_invalid_amount_detail(self) -> None:
        err = InvalidAmountError(-1)
        assert err.code == 2004
        assert "positive" in err.message
        assert "rounds" in InvalidAmountError(1, "output rounds to zero").message

    def test_market_errors(self) -> None:
        assert MarketClosedError().code == 3002
        assert TooEarlyError("2026-01-08").code == 3003
        assert InvalidOutcomeError("PENDING").code == 3004
        assert AlreadyResolvedError().http_status == 409
        assert NotResolvedError().code == 3006
        assert NotWinningTokenError("RED").code == 3007

    def test_pool_errors(self) -> None:
        err = InsufficientReserveError("STABLECOIN", requested=10, reserve=5)
        assert err.code == 6001
        assert PoolEmptyError().code == 6002
        assert AlreadyRegisteredError("alice").code == 6003
        assert NotRegisteredProviderError("bob").http_status == 403

    def test_internal(self) -> None:
        assert InternalError().code == 9002

    def test_all_are_app_errors(self) -> None:
        for err in (MarketClosedError(), PoolEmptyError(), UnknownAssetError("X")):
            assert isinstance(err, AppError)


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"ok": True})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"ok": True}
        assert resp.request_id.startswith("req_")

    def test_error(self) -> None:
        resp = error_response(3002, "Market closed")
        assert resp.code == 3002
        assert resp.data is None

    def test_model_dump_keys(self) -> None:
        dumped = ApiResponse().model_dump()
        assert set(dumped) == {"code", "message", "data", "timestamp", "request_id"}
