"""Transaction model module."""
from typing import Optional

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from sales_api.database.database import Base


class _Verbatim(TypeDecorator):
    """Numeric column whose values are bound and read without conversion.

    The column keeps its numeric affinity, but a non-numeric upstream value
    such as ``"N/A"`` is stored and returned as-is instead of failing.
    """

    cache_ok = True

    def bind_processor(self, dialect):
        return None

    def result_processor(self, dialect, coltype):
        return None


class VerbatimFloat(_Verbatim):
    impl = Float


class VerbatimInteger(_Verbatim):
    impl = Integer


class Transaction(Base):
    """Product sale record imported from the upstream dataset.

    Rows are stored exactly as received, so every attribute except the
    primary key may be NULL, and ``price``/``sold`` may hold text.
    """

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[float]] = mapped_column(VerbatimFloat, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sold: Mapped[Optional[int]] = mapped_column(VerbatimInteger, nullable=True)
    # Upstream ISO timestamp kept verbatim; month filters use strftime on it
    date_of_sale: Mapped[Optional[str]] = mapped_column("dateOfSale", String, nullable=True)
