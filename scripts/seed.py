#!/usr/bin/env python3
"""Seed database with demo catalog data.

Creates:
- Store categories (8, four of them featured)
- Stores with logos, domains and extension flags
- Deals of every type, one of them already expired
- Demo users

Seed script is idempotent: categories and stores are matched by slug, deals by
(store, title), users by email. Set SEED_RESET=1 to wipe catalog tables first.

Usage:
    alembic upgrade head
    python -m scripts.seed
"""

import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from coupons.models import Category, Deal, FavoriteDeal, FavoriteStore, Store, User
from coupons.services.discounts import DealType
from coupons.settings import get_settings

load_dotenv()


# =============================================================================
# Categories
# =============================================================================

CATEGORIES = [
    {"name": "Fashion & Apparel", "slug": "fashion-apparel", "icon": "👕", "featured": True},
    {"name": "Electronics", "slug": "electronics", "icon": "💻", "featured": True},
    {"name": "Home & Garden", "slug": "home-garden", "icon": "🏠", "featured": True},
    {"name": "Beauty & Health", "slug": "beauty-health", "icon": "💄", "featured": False},
    {"name": "Food & Grocery", "slug": "food-grocery", "icon": "🍔", "featured": False},
    {"name": "Sports & Outdoors", "slug": "sports-outdoors", "icon": "⚽", "featured": True},
    {"name": "Travel & Hotels", "slug": "travel-hotels", "icon": "✈️", "featured": False},
    {"name": "Entertainment", "slug": "entertainment", "icon": "🎮", "featured": False},
]


# =============================================================================
# Stores
# =============================================================================


def _store(
    name: str,
    slug: str,
    domain: str,
    category: str,
    description: str,
    featured: bool = False,
    extension_enabled: bool = False,
) -> dict:
    return {
        "name": name,
        "slug": slug,
        "logo_url": f"https://logo.clearbit.com/{domain}",
        "description": description,
        "website_url": f"https://www.{domain}",
        "category": category,
        "featured": featured,
        "domains": [domain, f"www.{domain}"],
        "extension_enabled": extension_enabled,
    }


STORES = [
    # Fashion
    _store(
        "Nike", "nike", "nike.com", "fashion-apparel",
        "Just Do It. Find athletic shoes, clothing and gear for the whole family.",
        featured=True, extension_enabled=True,
    ),
    _store(
        "Adidas", "adidas", "adidas.com", "fashion-apparel",
        "Impossible is Nothing. Shop for shoes, clothing and accessories.",
        featured=True, extension_enabled=True,
    ),
    _store(
        "H&M", "hm", "hm.com", "fashion-apparel",
        "Fashion and quality at the best price in a sustainable way.",
    ),
    _store(
        "Zara", "zara", "zara.com", "fashion-apparel",
        "Latest trends in fashion for women, men and kids.",
    ),
    # Electronics
    _store(
        "Best Buy", "best-buy", "bestbuy.com", "electronics",
        "Shop electronics, computers, appliances, cell phones, video games & more.",
        featured=True, extension_enabled=True,
    ),
    _store(
        "Amazon", "amazon", "amazon.com", "electronics",
        "Online shopping from a great selection of electronics, books, and more.",
        featured=True, extension_enabled=True,
    ),
    _store(
        "Newegg", "newegg", "newegg.com", "electronics",
        "Buy computer parts, laptops, electronics and more online.",
    ),
    # Home
    _store(
        "IKEA", "ikea", "ikea.com", "home-garden",
        "Affordable furniture and home furnishing inspiration for all sizes of wallets.",
        featured=True,
    ),
    _store(
        "Wayfair", "wayfair", "wayfair.com", "home-garden",
        "Shop furniture, home decor, cookware & more.",
        extension_enabled=True,
    ),
    # Beauty
    _store(
        "Sephora", "sephora", "sephora.com", "beauty-health",
        "Beauty products, makeup, skincare, fragrance & more.",
        featured=True,
    ),
    _store(
        "Ulta Beauty", "ulta", "ulta.com", "beauty-health",
        "Shop makeup, skincare, haircare and fragrance.",
    ),
    # Sports
    _store(
        "Dick's Sporting Goods", "dicks-sporting-goods", "dickssportinggoods.com", "sports-outdoors",
        "Shop a wide selection of sports gear, equipment, apparel and footwear.",
    ),
]


# =============================================================================
# Deals (expiration is relative to seed time, in days)
# =============================================================================

DEALS = [
    # Nike
    {
        "store": "nike",
        "title": "20% Off Sitewide",
        "description": "Get 20% off your entire purchase. Valid on sale items too!",
        "code": "NIKE20",
        "type": DealType.PERCENTAGE,
        "discount_percentage": 20,
        "expires_in_days": 30,
        "featured": True,
        "auto_applicable": True,
        "extension_priority": 1,
    },
    {
        "store": "nike",
        "title": "Free Shipping on Orders Over $50",
        "description": "No code needed. Free standard shipping automatically applied.",
        "type": DealType.FREE_SHIPPING,
        "expires_in_days": 60,
    },
    {
        "store": "nike",
        "title": "$25 Off Orders $100+",
        "description": "Save $25 when you spend $100 or more.",
        "code": "SAVE25",
        "type": DealType.FIXED_AMOUNT,
        "discount_amount": Decimal("25"),
        "expires_in_days": 15,
    },
    # Adidas
    {
        "store": "adidas",
        "title": "30% Off Summer Collection",
        "description": "Summer sale! Get 30% off selected items.",
        "code": "SUMMER30",
        "type": DealType.PERCENTAGE,
        "discount_percentage": 30,
        "expires_in_days": 20,
        "featured": True,
        "auto_applicable": True,
        "extension_priority": 1,
    },
    {
        "store": "adidas",
        "title": "Buy One Get One 50% Off",
        "description": "Buy any item and get second item at 50% off.",
        "code": "BOGO50",
        "type": DealType.BOGO,
        "expires_in_days": 25,
    },
    # Best Buy
    {
        "store": "best-buy",
        "title": "$100 Off Laptops Over $799",
        "description": "Save big on laptops. Minimum purchase $799.",
        "code": "LAPTOP100",
        "type": DealType.FIXED_AMOUNT,
        "discount_amount": Decimal("100"),
        "expires_in_days": 10,
        "featured": True,
        "auto_applicable": True,
        "extension_priority": 1,
    },
    {
        "store": "best-buy",
        "title": "15% Off TVs and Home Theater",
        "description": "Upgrade your entertainment system and save.",
        "code": "TV15",
        "type": DealType.PERCENTAGE,
        "discount_percentage": 15,
        "expires_in_days": 45,
    },
    # Amazon
    {
        "store": "amazon",
        "title": "Prime Members: Extra 20% Off",
        "description": "Exclusive deal for Prime members on electronics.",
        "code": "PRIME20",
        "type": DealType.PERCENTAGE,
        "discount_percentage": 20,
        "expires_in_days": 35,
        "featured": True,
    },
    {
        "store": "amazon",
        "title": "Lightning Deal: $30 Off $150+",
        "description": "Limited time offer. Hurry while stocks last!",
        "code": "LIGHTNING30",
        "type": DealType.FIXED_AMOUNT,
        "discount_amount": Decimal("30"),
        "expires_in_days": 2,  # expiring soon
        "featured": True,
    },
    # IKEA
    {
        "store": "ikea",
        "title": "25% Off Kitchen Furniture",
        "description": "Redesign your kitchen with our amazing deals.",
        "code": "KITCHEN25",
        "type": DealType.PERCENTAGE,
        "discount_percentage": 25,
        "expires_in_days": 40,
    },
    {
        "store": "ikea",
        "title": "Free Delivery on Orders Over $299",
        "description": "Get free home delivery on large orders.",
        "type": DealType.FREE_SHIPPING,
        "expires_in_days": 90,
    },
    # Sephora
    {
        "store": "sephora",
        "title": "20% Off First Purchase",
        "description": "New customers get 20% off their first order.",
        "code": "WELCOME20",
        "type": DealType.PERCENTAGE,
        "discount_percentage": 20,
        "expires_in_days": 365,
        "featured": True,
    },
    {
        "store": "sephora",
        "title": "Free Samples with Every Order",
        "description": "Choose 3 free samples at checkout.",
        "type": DealType.OTHER,
        "expires_in_days": 180,
    },
    # H&M (expired)
    {
        "store": "hm",
        "title": "Black Friday: 50% Off Everything",
        "description": "This deal has expired.",
        "code": "EXPIRED50",
        "type": DealType.PERCENTAGE,
        "discount_percentage": 50,
        "expires_in_days": -10,
        "is_expired": True,
    },
]


USERS = [
    {"email": "demo@example.com", "name": "Demo User"},
    {"email": "john@example.com", "name": "John Doe"},
]


async def seed_database() -> None:
    """Seed database with demo data."""
    settings = get_settings()
    engine = create_async_engine(
        settings.async_database_url,
        echo=False,
    )
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        print("🌱 Seeding database...")

        if os.getenv("SEED_RESET") == "1":
            print("\n🧹 Clearing existing data...")
            await reset_catalog(session)

        # 1. Seed Categories
        print("\n🗂️  Creating Categories...")
        category_map = await seed_categories(session)

        # 2. Seed Stores
        print("\n🏪 Creating Stores...")
        store_map = await seed_stores(session, category_map)

        # 3. Seed Deals
        print("\n🏷️  Creating Deals...")
        await seed_deals(session, store_map)

        # 4. Seed Users
        print("\n👤 Creating Users...")
        await seed_users(session)

        await session.commit()
        print("\n✅ Database seeded successfully!")

    await engine.dispose()


async def reset_catalog(session: AsyncSession) -> None:
    """Delete all catalog rows, children first."""
    for model in (FavoriteDeal, FavoriteStore, Deal, Store, Category, User):
        await session.execute(delete(model))
    await session.flush()


async def seed_categories(session: AsyncSession) -> dict[str, int]:
    """Seed categories and return mapping of slug -> id."""
    category_map: dict[str, int] = {}

    for c in CATEGORIES:
        result = await session.execute(select(Category).where(Category.slug == c["slug"]))
        existing = result.scalar_one_or_none()

        if existing:
            print(f"  ⏭️  {c['slug']} (exists)")
            category_map[c["slug"]] = existing.id
        else:
            category = Category(**c)
            session.add(category)
            await session.flush()
            category_map[c["slug"]] = category.id
            print(f"  ✅ {c['icon']} {c['name']}")

    return category_map


async def seed_stores(session: AsyncSession, category_map: dict[str, int]) -> dict[str, int]:
    """Seed stores and return mapping of slug -> id."""
    store_map: dict[str, int] = {}

    for s in STORES:
        result = await session.execute(select(Store).where(Store.slug == s["slug"]))
        existing = result.scalar_one_or_none()

        if existing:
            print(f"  ⏭️  {s['name']} (exists)")
            store_map[s["slug"]] = existing.id
            continue

        fields = {k: v for k, v in s.items() if k != "category"}
        store = Store(**fields, category_id=category_map[s["category"]])
        session.add(store)
        await session.flush()
        store_map[s["slug"]] = store.id
        print(f"  ✅ {s['name']} ({s['category']})")

    return store_map


async def seed_deals(session: AsyncSession, store_map: dict[str, int]) -> None:
    """Seed sample deals."""
    now = datetime.now(timezone.utc)

    for d in DEALS:
        store_id = store_map.get(d["store"])
        if not store_id:
            print(f"  ⚠️  Store not found: {d['store']}")
            continue

        result = await session.execute(
            select(Deal.id).where(Deal.store_id == store_id, Deal.title == d["title"])
        )
        if result.scalar_one_or_none() is not None:
            print(f"  ⏭️  {d['store']}: {d['title']} (exists)")
            continue

        deal = Deal(
            store_id=store_id,
            title=d["title"],
            description=d["description"],
            code=d.get("code"),
            type=d["type"],
            discount_percentage=d.get("discount_percentage"),
            discount_amount=d.get("discount_amount"),
            expiration_date=now + timedelta(days=d["expires_in_days"]),
            is_expired=d.get("is_expired", False),
            featured=d.get("featured", False),
            usage_count=0,
            auto_applicable=d.get("auto_applicable", False),
            extension_priority=d.get("extension_priority", 0),
        )
        session.add(deal)
        print(f"  ✅ {d['store']}: {d['title']}")

    await session.flush()


async def seed_users(session: AsyncSession) -> None:
    """Seed demo users."""
    for u in USERS:
        result = await session.execute(select(User.id).where(User.email == u["email"]))
        if result.scalar_one_or_none() is not None:
            print(f"  ⏭️  {u['email']} (exists)")
            continue

        session.add(User(**u))
        print(f"  ✅ {u['email']}")

    await session.flush()


if __name__ == "__main__":
    asyncio.run(seed_database())
