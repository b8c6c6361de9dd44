"""SQLAlchemy ORM model for the cash_card table.

persistence.py queries with raw text() SQL; this mapping is the column
reference and lets tests create the table with Base.metadata.create_all.
Alembic migration 002_create_cash_card.py is the authoritative DDL source.
"""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.cc_common.database import Base


class CashCardORM(Base):
    __tablename__ = "cash_card"

    # SQLite only autoincrements an INTEGER PRIMARY KEY
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    amount_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    owner: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
