"""Repository Protocol — dependency inversion for testability.

Every query is scoped by owner except ``save``, whose input already carries
the owner. Unit tests inject a mock that conforms to this Protocol;
infrastructure provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_cashcard.domain.models import CashCard, PageRequest


class CashCardRepositoryProtocol(Protocol):
    async def find_by_id_and_owner(
        self, db: AsyncSession, cash_card_id: int, owner: str
    ) -> CashCard | None: ...

    async def find_page_by_owner(
        self, db: AsyncSession, owner: str, page: PageRequest
    ) -> list[CashCard]: ...

    async def exists_by_id_and_owner(
        self, db: AsyncSession, cash_card_id: int, owner: str
    ) -> bool: ...

    async def save(self, db: AsyncSession, card: CashCard) -> CashCard: ...

    async def delete_by_id_and_owner(
        self, db: AsyncSession, cash_card_id: int, owner: str
    ) -> bool: ...
