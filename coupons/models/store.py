"""Store model.

A merchant with zero or more deals, owned by exactly one category.
Stores are maintained by an external admin process; the catalog only reads them.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ARRAY, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coupons.stores.postgres import Base

if TYPE_CHECKING:
    from coupons.models.category import Category
    from coupons.models.deal import Deal


class Store(Base):
    """Merchant listed in the catalog."""

    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Identification
    name: Mapped[str] = mapped_column(String(200), index=True)
    slug: Mapped[str] = mapped_column(String(200), unique=True, index=True)

    # Display
    logo_url: Mapped[str] = mapped_column(Text)
    description: Mapped[str] = mapped_column(Text, default="")
    website_url: Mapped[str] = mapped_column(Text)
    featured: Mapped[bool] = mapped_column(default=False)

    # Browser extension support
    domains: Mapped[list[str]] = mapped_column(ARRAY(String(200)), default=list)
    extension_enabled: Mapped[bool] = mapped_column(default=False)

    # Relations
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"),
        index=True,
    )
    category: Mapped["Category"] = relationship(back_populates="stores")
    deals: Mapped[list["Deal"]] = relationship(back_populates="store")

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
        return f"<Store {self.slug}>"
