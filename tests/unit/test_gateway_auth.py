"""Unit tests for the credential gate: UserService.authenticate and dependencies."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPBasicCredentials
from starlette.requests import Request

from src.cc_common.errors import AccountDisabledError, InvalidCredentialsError, RoleRequiredError
from src.cc_gateway.auth import dependencies
from src.cc_gateway.auth.dependencies import get_current_principal, require_card_owner
from src.cc_gateway.user.db_models import UserModel
from src.cc_gateway.user.service import Principal, UserService


def _make_user(is_active: bool = True, role: str = "CARD-OWNER") -> UserModel:
    user = UserModel()
    user.username = "sarah1"
    user.password_hash = "$2b$12$fakehash"
    user.role = role
    user.is_active = is_active
    return user


def _mock_db(user: UserModel | None) -> AsyncMock:
    """Build an AsyncMock db that returns *user* from scalar_one_or_none()."""
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = user
    mock_db = AsyncMock()
    mock_db.execute.return_value = mock_result
    return mock_db


def _request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/cashcards", "headers": []})


class TestAuthenticate:
    async def test_valid_credentials_return_principal(self) -> None:
        db = _mock_db(_make_user())
        with patch("src.cc_gateway.user.service.verify_password", return_value=True):
            principal = await UserService().authenticate("sarah1", "abc123", db)

        assert principal == Principal(name="sarah1", role="CARD-OWNER")

    async def test_unknown_user_raises_credentials_error(self) -> None:
        db = _mock_db(None)
        with patch("src.cc_gateway.user.service.verify_password", return_value=False) as vp:
            with pytest.raises(InvalidCredentialsError):
                await UserService().authenticate("BAD_USER", "abc123", db)
        # Unknown users still pay for a bcrypt check
        vp.assert_called_once_with("abc123", None)

    async def test_wrong_password_raises_credentials_error(self) -> None:
        db = _mock_db(_make_user())
        with patch("src.cc_gateway.user.service.verify_password", return_value=False):
            with pytest.raises(InvalidCredentialsError):
                await UserService().authenticate("sarah1", "BAD_PASSWORD", db)

    async def test_disabled_user_raises(self) -> None:
        db = _mock_db(_make_user(is_active=False))
        with patch("src.cc_gateway.user.service.verify_password", return_value=True):
            with pytest.raises(AccountDisabledError):
                await UserService().authenticate("sarah1", "abc123", db)


class TestGetCurrentPrincipal:
    async def test_bad_credentials_become_401_with_challenge(self) -> None:
        request = _request()
        creds = HTTPBasicCredentials(username="sarah1", password="nope")
        with patch.object(
            dependencies._user_service,
            "authenticate",
            AsyncMock(side_effect=InvalidCredentialsError()),
        ):
            with pytest.raises(HTTPException) as exc_info:
                await get_current_principal(request, credentials=creds, db=AsyncMock())

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers["WWW-Authenticate"].startswith("Basic")
        assert not hasattr(request.state, "username")

    async def test_returns_principal(self) -> None:
        request = _request()
        creds = HTTPBasicCredentials(username="sarah1", password="abc123")
        expected = Principal(name="sarah1", role="CARD-OWNER")
        with patch.object(
            dependencies._user_service,
            "authenticate",
            AsyncMock(return_value=expected),
        ):
            principal = await get_current_principal(request, credentials=creds, db=AsyncMock())

        assert principal is expected
        assert request.state.username == "sarah1"


class TestRequireCardOwner:
    async def test_card_owner_passes(self) -> None:
        principal = Principal(name="sarah1", role="CARD-OWNER")
        assert await require_card_owner(principal=principal) is principal

    async def test_other_role_rejected(self) -> None:
        principal = Principal(name="hank-owns-no-cards", role="NON-OWNER")
        with pytest.raises(RoleRequiredError) as exc_info:
            await require_card_owner(principal=principal)
        assert exc_info.value.http_status == 403
