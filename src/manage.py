"""Kartflow database management CLI.

Usage:
    python src/manage.py setup-db                      # Create all tables
    python src/manage.py drop-db                       # Drop all tables
    python src/manage.py seed-products products.json   # Load catalogue products
"""

import argparse
import json
import sys
from pathlib import Path


def setup_database():
    from shopping.domain import shopping
    from shopping.utils.db import setup_db

    print("Initializing shopping domain...")
    shopping.init()
    print("Creating shopping database schema...")
    setup_db(shopping)
    print("Done.")


def drop_database():
    from shopping.domain import shopping
    from shopping.utils.db import drop_db

    print("Initializing shopping domain...")
    shopping.init()
    print("Dropping shopping database schema...")
    drop_db(shopping)
    print("Done.")


def seed_products(path):
    """Load products from a JSON array of {id, name, category, cost, rating, image} objects."""
    from shopping.catalogue.product import Product
    from shopping.domain import shopping

    records = json.loads(Path(path).read_text(encoding="utf-8"))

    shopping.init()
    with shopping.domain_context():
        repo = shopping.repository_for(Product)
        for record in records:
            repo.add(Product(**record))
            print(f"  {record.get('name')} added.")

    print(f"Seeded {len(records)} products.")


def main():
    parser = argparse.ArgumentParser(description="Kartflow database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-products", help="Load products from a JSON file")
    seed_parser.add_argument("path", help="JSON file holding a list of products")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-products":
        seed_products(args.path)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
