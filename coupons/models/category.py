"""Category model.

Groups stores for browsing (e.g. "Electronics", "Fashion & Apparel").
Featured categories are highlighted on the categories page.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coupons.stores.postgres import Base

if TYPE_CHECKING:
    from coupons.models.store import Store


class Category(Base):
    """Store category with display icon."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(100))
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    icon: Mapped[str | None] = mapped_column(String(16))  # emoji glyph
    featured: Mapped[bool] = mapped_column(default=False, index=True)

    stores: Mapped[list["Store"]] = relationship(back_populates="category")

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
        return f"<Category {self.slug}>"
