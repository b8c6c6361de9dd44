"""Domain models for cc_cashcard — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field

SORTABLE_PROPERTIES: frozenset[str] = frozenset({"id", "amount", "owner"})

# Range of the store's BIGINT columns (id, amount_cents) and of OFFSET
BIGINT_MIN = -(2**63)
BIGINT_MAX = 2**63 - 1


@dataclass(frozen=True)
class CashCard:
    id: int | None           # None until the store assigns one
    amount_cents: int
    owner: str


@dataclass(frozen=True)
class SortOrder:
    property: str            # one of SORTABLE_PROPERTIES
    ascending: bool = True


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page selection over one owner's cards."""

    page: int
    size: int
    sort: tuple[SortOrder, ...] = field(default_factory=tuple)

    @property
    def offset(self) -> int:
        return self.page * self.size
