"""CashCardRepository — concrete implementation of CashCardRepositoryProtocol.

All queries use raw text() SQL with bound parameters. The statements stay
within the subset PostgreSQL and SQLite share (including RETURNING), so route
tests can run on aiosqlite.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from sqlalchemy import TextClause, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_cashcard.domain.models import CashCard, PageRequest, SortOrder
from src.cc_common.errors import CashCardNotFoundError, InternalError, InvalidSortError

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_FIND_BY_ID_AND_OWNER_SQL = text("""
    SELECT id, amount_cents, owner
    FROM cash_card
    WHERE id = :id AND owner = :owner
""")

_EXISTS_BY_ID_AND_OWNER_SQL = text("""
    SELECT 1
    FROM cash_card
    WHERE id = :id AND owner = :owner
""")

_INSERT_SQL = text("""
    INSERT INTO cash_card (amount_cents, owner)
    VALUES (:amount_cents, :owner)
    RETURNING id, amount_cents, owner
""")

# owner is part of the predicate so a save can never move a row across owners
_UPDATE_SQL = text("""
    UPDATE cash_card
    SET amount_cents = :amount_cents
    WHERE id = :id AND owner = :owner
    RETURNING id, amount_cents, owner
""")

_DELETE_BY_ID_AND_OWNER_SQL = text("""
    DELETE FROM cash_card
    WHERE id = :id AND owner = :owner
    RETURNING id
""")

# ORDER BY cannot be parameterized; only these column names are interpolated
_SORT_COLUMNS: dict[str, str] = {
    "id": "id",
    "amount": "amount_cents",
    "owner": "owner",
}


def _order_by_clause(sort: tuple[SortOrder, ...]) -> str:
    terms: list[str] = []
    seen: set[str] = set()
    for order in sort:
        column = _SORT_COLUMNS.get(order.property)
        if column is None:
            raise InvalidSortError(order.property)
        if column in seen:
            continue
        seen.add(column)
        terms.append(f"{column} {'ASC' if order.ascending else 'DESC'}")
    # Final tie-breaker keeps equal sort keys in a stable order
    if "id" not in seen:
        terms.append("id ASC")
    return ", ".join(terms)


def _find_page_sql(sort: tuple[SortOrder, ...]) -> TextClause:
    return text(f"""
        SELECT id, amount_cents, owner
        FROM cash_card
        WHERE owner = :owner
        ORDER BY {_order_by_clause(sort)}
        LIMIT :limit OFFSET :offset
    """)


# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_cash_card(row: object) -> CashCard:
    return CashCard(
        id=row.id,  # type: ignore[attr-defined]
        amount_cents=row.amount_cents,  # type: ignore[attr-defined]
        owner=row.owner,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class CashCardRepository:
    """Concrete repository — every read and delete is filtered by owner."""

    async def find_by_id_and_owner(
        self, db: AsyncSession, cash_card_id: int, owner: str
    ) -> CashCard | None:
        result = await db.execute(
            _FIND_BY_ID_AND_OWNER_SQL, {"id": cash_card_id, "owner": owner}
        )
        row = result.fetchone()
        return _row_to_cash_card(row) if row else None

    async def find_page_by_owner(
        self, db: AsyncSession, owner: str, page: PageRequest
    ) -> list[CashCard]:
        result = await db.execute(
            _find_page_sql(page.sort),
            {"owner": owner, "limit": page.size, "offset": page.offset},
        )
        return [_row_to_cash_card(row) for row in result.fetchall()]

    async def exists_by_id_and_owner(
        self, db: AsyncSession, cash_card_id: int, owner: str
    ) -> bool:
        result = await db.execute(
            _EXISTS_BY_ID_AND_OWNER_SQL, {"id": cash_card_id, "owner": owner}
        )
        return result.fetchone() is not None

    async def save(self, db: AsyncSession, card: CashCard) -> CashCard:
        """Insert when ``card.id`` is None (id assigned by the store), else update."""
        if card.id is None:
            result = await db.execute(
                _INSERT_SQL, {"amount_cents": card.amount_cents, "owner": card.owner}
            )
            row = result.fetchone()
            if row is None:
                raise InternalError("Cash card insert returned no rows — this should never happen")
            return _row_to_cash_card(row)

        result = await db.execute(
            _UPDATE_SQL,
            {"id": card.id, "amount_cents": card.amount_cents, "owner": card.owner},
        )
        row = result.fetchone()
        if row is None:
            # Deleted between lookup and save
            raise CashCardNotFoundError(card.id)
        return _row_to_cash_card(row)

    async def delete_by_id_and_owner(
        self, db: AsyncSession, cash_card_id: int, owner: str
    ) -> bool:
        result = await db.execute(
            _DELETE_BY_ID_AND_OWNER_SQL, {"id": cash_card_id, "owner": owner}
        )
        return result.fetchone() is not None
