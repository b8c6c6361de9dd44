"""Pydantic schemas and sort-parameter parsing for the cc_cashcard API."""

from pydantic import BaseModel, Field, field_validator

from src.cc_cashcard.domain.models import SORTABLE_PROPERTIES, CashCard, SortOrder
from src.cc_common.cents import amount_to_cents, cents_to_amount
from src.cc_common.errors import InvalidSortError

DEFAULT_SORT: tuple[SortOrder, ...] = (SortOrder("amount", ascending=True),)

_DIRECTIONS = {"asc": True, "desc": False}

# ---------------------------------------------------------------------------
# Sort parsing
# ---------------------------------------------------------------------------


def parse_sort(values: list[str] | None) -> tuple[SortOrder, ...]:
    """Parse repeated ``sort`` query values into SortOrders.

    Each value is ``property[,property...][,asc|desc]``; the trailing
    direction applies to every property in that value. No usable value
    means DEFAULT_SORT.
    """
    orders: list[SortOrder] = []
    for value in values or []:
        parts = [p.strip() for p in value.split(",") if p.strip()]
        if not parts:
            continue
        ascending = True
        if parts[-1].lower() in _DIRECTIONS:
            ascending = _DIRECTIONS[parts.pop().lower()]
        if not parts:
            raise InvalidSortError(f"missing property in '{value}'")
        for prop in parts:
            if prop not in SORTABLE_PROPERTIES:
                raise InvalidSortError(prop)
            orders.append(SortOrder(prop, ascending))
    return tuple(orders) or DEFAULT_SORT


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CashCardRequest(BaseModel):
    """Write payload for POST and PUT.

    ``id`` and ``owner`` are accepted so clients can send a full card, but the
    service never reads them.
    """

    id: int | None = None
    amount: float = Field(..., description="Amount with at most two decimal places")
    owner: str | None = None

    @field_validator("amount")
    @classmethod
    def amount_has_cent_precision(cls, v: float) -> float:
        amount_to_cents(v)
        return v

    @property
    def amount_cents(self) -> int:
        return amount_to_cents(self.amount)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CashCardResponse(BaseModel):
    id: int | None
    amount: float
    owner: str

    @classmethod
    def from_domain(cls, card: CashCard) -> "CashCardResponse":
        return cls(
            id=card.id,
            amount=cents_to_amount(card.amount_cents),
            owner=card.owner,
        )
