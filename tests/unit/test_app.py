"""App-level wiring that needs no database: health, 401 challenge, error rendering."""

from httpx import AsyncClient
from starlette.requests import Request

from src.cc_common.errors import AccountDisabledError, CashCardNotFoundError, RoleRequiredError
from src.main import app_error_handler


def _request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": []})


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "version": "0.1.0"}


async def test_cashcards_without_credentials_is_401(client: AsyncClient) -> None:
    resp = await client.get("/cashcards")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"].startswith("Basic")


async def test_not_found_renders_empty_body() -> None:
    resp = await app_error_handler(_request(), CashCardNotFoundError(99))
    assert resp.status_code == 404
    assert resp.body == b""


async def test_other_errors_render_envelope() -> None:
    resp = await app_error_handler(_request(), RoleRequiredError("CARD-OWNER"))
    assert resp.status_code == 403
    assert b'"code":1006' in resp.body


async def test_unauthorized_errors_carry_basic_challenge() -> None:
    resp = await app_error_handler(_request(), AccountDisabledError())
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"].startswith("Basic")
    assert b'"code":1004' in resp.body


async def test_other_errors_have_no_challenge() -> None:
    resp = await app_error_handler(_request(), RoleRequiredError("CARD-OWNER"))
    assert "www-authenticate" not in resp.headers
