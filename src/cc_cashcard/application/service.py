"""CashCardApplicationService — ownership-scoped CRUD over one owner's cards.

The caller (router) passes the db session and the authenticated owner name;
the owner is never taken from a request payload. Create, update and delete
commit on success and roll back on any exception. Reads run without an
explicit transaction.

Concurrent updates to the same card are last-write-wins: there is no version
column, so no conflict is detected.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_cashcard.application.schemas import CashCardRequest, CashCardResponse
from src.cc_cashcard.domain.models import CashCard, PageRequest, SortOrder
from src.cc_cashcard.domain.repository import CashCardRepositoryProtocol
from src.cc_cashcard.infrastructure.persistence import CashCardRepository
from src.cc_common.errors import CashCardNotFoundError

logger = logging.getLogger(__name__)


class CashCardApplicationService:
    def __init__(self, repo: CashCardRepositoryProtocol | None = None) -> None:
        self._repo: CashCardRepositoryProtocol = repo or CashCardRepository()

    async def get_cash_card(
        self, db: AsyncSession, cash_card_id: int, owner: str
    ) -> CashCardResponse:
        card = await self._repo.find_by_id_and_owner(db, cash_card_id, owner)
        if card is None:
            raise CashCardNotFoundError(cash_card_id)
        return CashCardResponse.from_domain(card)

    async def create_cash_card(
        self, db: AsyncSession, body: CashCardRequest, owner: str
    ) -> CashCard:
        """Persist a new card for *owner*. Returns the saved card with its id."""
        new_card = CashCard(id=None, amount_cents=body.amount_cents, owner=owner)
        try:
            saved = await self._repo.save(db, new_card)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Created cash card id=%s owner=%s", saved.id, owner)
        return saved

    async def list_cash_cards(
        self,
        db: AsyncSession,
        owner: str,
        page: int,
        size: int,
        sort: tuple[SortOrder, ...],
    ) -> list[CashCardResponse]:
        # Page content only: total count and page metadata are not returned
        cards = await self._repo.find_page_by_owner(
            db, owner, PageRequest(page=page, size=size, sort=sort)
        )
        return [CashCardResponse.from_domain(c) for c in cards]

    async def update_cash_card(
        self, db: AsyncSession, cash_card_id: int, body: CashCardRequest, owner: str
    ) -> None:
        try:
            existing = await self._repo.find_by_id_and_owner(db, cash_card_id, owner)
            if existing is None:
                raise CashCardNotFoundError(cash_card_id)
            # id and owner come from the stored row, only amount from the payload
            updated = CashCard(
                id=existing.id,
                amount_cents=body.amount_cents,
                owner=existing.owner,
            )
            await self._repo.save(db, updated)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Updated cash card id=%s owner=%s", cash_card_id, owner)

    async def delete_cash_card(
        self, db: AsyncSession, cash_card_id: int, owner: str
    ) -> None:
        try:
            if not await self._repo.exists_by_id_and_owner(db, cash_card_id, owner):
                raise CashCardNotFoundError(cash_card_id)
            if not await self._repo.delete_by_id_and_owner(db, cash_card_id, owner):
                raise CashCardNotFoundError(cash_card_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Deleted cash card id=%s owner=%s", cash_card_id, owner)
