#!/usr/bin/env python3
"""
Catalog seeding script

Loads products from a JSON file into the products table. Products whose
name already exists are skipped, so the script can be re-run safely.

Input format (see docs/products.example.json):
    [
      {"name": "Linen Shirt", "price": 39.90, "image_url": "img/linen.jpg",
       "category": "Shirts", "stock": 12},
      ...
    ]

Usage:
    python tools/seed_products.py docs/products.example.json
    python tools/seed_products.py products.json --db-url sqlite+aiosqlite:///data/shop.db
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pydantic import ValidationError

import config
from db import build_engine, build_session_maker, create_db_and_tables, session_commit
from models.product import ProductDTO
from repositories.product import ProductRepository

logger = logging.getLogger("seed_products")


def load_products(path: Path) -> list[ProductDTO]:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON list of products")

    products = []
    for index, entry in enumerate(raw, start=1):
        try:
            product = ProductDTO.model_validate(entry)
        except ValidationError as e:
            raise ValueError(f"Product #{index} is invalid: {e}") from e
        if not product.name or product.price is None:
            raise ValueError(f"Product #{index} needs at least a name and a price")
        if product.price < 0 or (product.stock or 0) < 0:
            raise ValueError(f"Product #{index} ({product.name}) has a negative price or stock")
        products.append(product.model_copy(update={"id": None, "stock": product.stock or 0}))
    return products


async def seed(products: list[ProductDTO], db_url: str) -> int:
    engine = build_engine(db_url)
    try:
        await create_db_and_tables(engine)
        async with build_session_maker(engine)() as session:
            existing = await ProductRepository.get_existing_names([p.name for p in products], session)

            new_products = []
            seen = set(existing)
            for product in products:
                if product.name in seen:
                    logger.info(f"⏭️  Skipping existing product: {product.name}")
                    continue
                seen.add(product.name)
                new_products.append(product)

            if new_products:
                await ProductRepository.bulk_create(new_products, session)
                await session_commit(session)
            return len(new_products)
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Load storefront products from a JSON file")
    parser.add_argument("input_file", type=Path, help="JSON list of products")
    parser.add_argument("--db-url", default=config.DB_URL, help="Database URL (default: DB_URL from .env)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    if not args.input_file.exists():
        logger.error(f"❌ Input file not found: {args.input_file}")
        sys.exit(1)

    try:
        products = load_products(args.input_file)
    except (ValueError, json.JSONDecodeError) as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    created = asyncio.run(seed(products, args.db_url))
    logger.info(f"✅ Seeded {created} of {len(products)} products")


if __name__ == "__main__":
    main()
