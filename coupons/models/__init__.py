"""SQLAlchemy ORM models.

Models represent database tables:
- categories: Store groupings with icon and featured flag
- stores: Merchants, each owned by one category
- deals: Promotional offers, each owned by one store
- users, favorite_stores, favorite_deals: Accounts and saved items
"""

from coupons.models.category import Category
from coupons.models.store import Store
from coupons.models.deal import Deal
from coupons.models.user import FavoriteDeal, FavoriteStore, User

__all__ = ["Category", "Store", "Deal", "User", "FavoriteStore", "FavoriteDeal"]
