#!/usr/bin/env python3
"""Seed the reference catalog.

Creates the database tables and inserts the reference categories and
products. Does nothing if any category already exists.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --admin
"""

import argparse
import asyncio

from shop.application.admin_service import ensure_admin_account
from shop.catalog.service import CatalogService, SeedResult
from shop.catalog.stores import open_stores
from shop.infrastructure.config import settings
from shop.infrastructure.database import create_tables


async def seed(with_admin: bool) -> tuple[SeedResult, bool]:
    """Seed the catalog and optionally the admin account.

    Args:
        with_admin: Whether to create the configured admin account.

    Returns:
        Seeding result and whether an admin account was created.
    """
    async with open_stores() as stores:
        result = await CatalogService(stores.categories, stores.products).seed_catalog()
        admin_created = False
        if with_admin:
            admin_created = await ensure_admin_account(
                stores.admins, settings.admin_username, settings.admin_password
            )
        return result, admin_created


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the reference catalog")
    parser.add_argument(
        "--admin",
        action="store_true",
        help="Also create the configured admin account (ADMIN_USERNAME/ADMIN_PASSWORD)",
    )
    args = parser.parse_args()

    print("=" * 60)
    print("Shop Catalog Seeder")
    print("=" * 60)
    print(f"Database: {settings.database_url}")
    print()

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    result, admin_created = await seed(with_admin=args.admin)

    if result.skipped:
        print("  - Categories already present, nothing seeded")
    else:
        print(f"  ✓ Categories: {result.categories_created}")
        print(f"  ✓ Products: {result.products_created}")
    if args.admin:
        print(f"  ✓ Admin account: {'created' if admin_created else 'already present'}")

    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
