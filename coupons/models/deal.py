"""Deal model.

A single promotional offer of a store: coupon code or direct link.

Discount payload depends on the type:
- PERCENTAGE: discount_percentage only
- FIXED_AMOUNT: discount_amount only
- FREE_SHIPPING / BOGO / OTHER: neither

`is_expired` is stored, not derived from `expiration_date`. The two can drift;
catalog reads trust the flag.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coupons.services.discounts import DealType
from coupons.stores.postgres import Base

if TYPE_CHECKING:
    from coupons.models.store import Store


class Deal(Base):
    """Promotional offer belonging to a store."""

    __tablename__ = "deals"
    __table_args__ = (
        CheckConstraint(
            "(type = 'PERCENTAGE' AND discount_amount IS NULL)"
            " OR (type = 'FIXED_AMOUNT' AND discount_percentage IS NULL)"
            " OR (discount_percentage IS NULL AND discount_amount IS NULL)",
            name="ck_deals_discount_payload",
        ),
        CheckConstraint("usage_count >= 0", name="ck_deals_usage_count_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    # Relations
    store_id: Mapped[int] = mapped_column(
        ForeignKey("stores.id", ondelete="CASCADE"),
        index=True,
    )
    store: Mapped["Store"] = relationship(back_populates="deals")

    # Content
    title: Mapped[str] = mapped_column(String(300))
    description: Mapped[str] = mapped_column(Text, default="")
    code: Mapped[str | None] = mapped_column(String(100))  # None = no code, direct link

    # Discount
    type: Mapped[DealType] = mapped_column(Enum(DealType, name="deal_type"))
    discount_percentage: Mapped[int | None] = mapped_column()
    discount_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))

    # Lifecycle
    expiration_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    is_expired: Mapped[bool] = mapped_column(default=False, index=True)
    featured: Mapped[bool] = mapped_column(default=False)
    usage_count: Mapped[int] = mapped_column(default=0)

    # Browser extension support
    auto_applicable: Mapped[bool] = mapped_column(default=False)
    extension_priority: Mapped[int] = mapped_column(default=0)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Deal {self.id} {self.type.value} store={self.store_id}>"
