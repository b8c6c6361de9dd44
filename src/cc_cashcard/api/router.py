"""cc_cashcard REST endpoints — all require HTTP Basic auth and the card-owner role.

GET    /cashcards/{requested_id}   — one card (404 if absent or not owned)
POST   /cashcards                  — create, 201 + Location, empty body
GET    /cashcards                  — page content as a bare JSON array
PUT    /cashcards/{requested_id}   — replace amount, 204
DELETE /cashcards/{requested_id}   — delete, 204

Responses are NOT wrapped in ApiResponse; only errors use the envelope.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cc_cashcard.application.schemas import (
    CashCardRequest,
    CashCardResponse,
    parse_sort,
)
from src.cc_cashcard.application.service import CashCardApplicationService
from src.cc_cashcard.domain.models import BIGINT_MAX, BIGINT_MIN
from src.cc_common.database import get_db_session
from src.cc_gateway.auth.dependencies import require_card_owner
from src.cc_gateway.user.service import Principal

router = APIRouter(prefix="/cashcards", tags=["cashcards"])

_service = CashCardApplicationService()

# Ids outside the BIGINT range cannot exist in the store; reject them as 422
CardId = Annotated[int, Path(ge=BIGINT_MIN, le=BIGINT_MAX)]

# Largest page whose OFFSET (page * size) still fits in a BIGINT
_MAX_PAGE = BIGINT_MAX // settings.MAX_PAGE_SIZE


@router.get("/{requested_id}", response_model=CashCardResponse)
async def get_cash_card(
    requested_id: CardId,
    principal: Annotated[Principal, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> CashCardResponse:
    return await _service.get_cash_card(db, requested_id, principal.name)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_cash_card(
    body: CashCardRequest,
    request: Request,
    principal: Annotated[Principal, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> Response:
    saved = await _service.create_cash_card(db, body, principal.name)
    location = request.url_for("get_cash_card", requested_id=str(saved.id))
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": str(location)},
    )


@router.get("", response_model=list[CashCardResponse])
async def list_cash_cards(
    principal: Annotated[Principal, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    page: int = Query(0, ge=0, le=_MAX_PAGE, description="Zero-based page number"),
    size: int = Query(
        settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"
    ),
    sort: list[str] | None = Query(
        None, description="property[,asc|desc]; repeatable. Default: amount,asc"
    ),
) -> list[CashCardResponse]:
    return await _service.list_cash_cards(
        db, principal.name, page, size, parse_sort(sort)
    )


@router.put("/{requested_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_cash_card(
    requested_id: CardId,
    body: CashCardRequest,
    principal: Annotated[Principal, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> Response:
    await _service.update_cash_card(db, requested_id, body, principal.name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{requested_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cash_card(
    requested_id: CardId,
    principal: Annotated[Principal, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> Response:
    await _service.delete_cash_card(db, requested_id, principal.name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
