"""In-memory catalog rows for tests (transient ORM objects, no database)."""

from datetime import datetime, timezone

from coupons.models import Category, Deal, Store
from coupons.services.discounts import DealType

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_category(id: int = 1, slug: str = "electronics", featured: bool = True) -> Category:
    return Category(id=id, name=slug.replace("-", " ").title(), slug=slug, icon="💻", featured=featured)


def make_store(id: int, name: str, category: Category) -> Store:
    slug = name.lower().replace(" ", "-")
    return Store(
        id=id,
        name=name,
        slug=slug,
        logo_url=f"https://logo.example.com/{slug}.png",
        description=f"{name} deals",
        website_url=f"https://www.{slug}.com",
        featured=False,
        domains=[f"{slug}.com"],
        extension_enabled=False,
        category_id=category.id,
        category=category,
    )


def make_deal(id: int, store: Store, **overrides) -> Deal:
    fields = {
        "id": id,
        "store_id": store.id,
        "title": f"Deal {id}",
        "description": "",
        "code": None,
        "type": DealType.OTHER,
        "discount_percentage": None,
        "discount_amount": None,
        "expiration_date": None,
        "is_expired": False,
        "featured": False,
        "usage_count": 0,
    }
    fields.update(overrides)
    return Deal(**fields)
