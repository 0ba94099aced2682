"""Marketplace database management CLI.

Creates and drops the database schemas of the Identity and Ordering domains,
and seeds a catalogue for load testing. Only relational providers are
touched, so run it with ``PROTEAN_ENV=production``.

Usage:
    python src/manage.py setup-db                      # Create all tables
    python src/manage.py drop-db --domain ordering     # Drop one domain's tables
    python src/manage.py seed-catalogue --products 20  # Seller, store and products
"""

import argparse
import json
import sys
import uuid
from pathlib import Path

from protean.utils.globals import current_domain
from shared.db import drop_db, setup_db

DOMAIN_NAMES = ["identity", "ordering"]

SEED_PASSWORD = "loadtest-pass"


def _domains(names=None):
    from identity.domain import identity
    from ordering.domain import ordering

    all_domains = {"identity": identity, "ordering": ordering}
    return {name: all_domains[name] for name in names} if names else all_domains


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def seed_catalogue(product_count=20, stock=100, hot_stock=10):
    """Register a seller, open their store and list products.

    Returns the seed description the load tests read: seller credentials,
    every product id and the single low-stock "hot" product.
    """
    domains = _domains()
    for domain in domains.values():
        domain.init()

    from identity.user.registration import register_user
    from ordering.catalogue.management import save_store
    from ordering.catalogue.product import Product

    email = f"seller.{uuid.uuid4().hex[:8]}@loadtest.example.com"
    with domains["identity"].domain_context():
        seller = register_user(email, SEED_PASSWORD, "seller", "Load Test Seller")
        principal = seller.to_principal()

    with domains["ordering"].domain_context():
        store = save_store(principal, "Load Test Store", "Seeded for load testing")
        repo = current_domain.repository_for(Product)

        products = []
        for index in range(product_count):
            product = Product.create(
                seller_id=principal.user_id,
                store_id=str(store.id),
                name=f"Load Test Product {index + 1}",
                price=round(5 + index * 1.25, 2),
                stock_quantity=stock,
            )
            repo.add(product)
            products.append({"id": str(product.id), "stock": stock})

        hot = Product.create(
            seller_id=principal.user_id,
            store_id=str(store.id),
            name="Limited Edition",
            price=99.0,
            stock_quantity=hot_stock,
        )
        repo.add(hot)

    return {
        "seller": {"email": email, "password": SEED_PASSWORD, "id": principal.user_id},
        "store_id": str(store.id),
        "products": products,
        "hot_product": {"id": str(hot.id), "stock": hot_stock},
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Marketplace database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--domain",
            choices=DOMAIN_NAMES,
            nargs="*",
            help="Specific domain(s) to act on (default: all)",
        )

    seed = subparsers.add_parser("seed-catalogue", help="Seed a seller, store and products for load tests")
    seed.add_argument("--products", type=int, default=20, help="Number of regular products")
    seed.add_argument("--stock", type=int, default=100, help="Stock of each regular product")
    seed.add_argument("--hot-stock", type=int, default=10, help="Stock of the contended product")
    seed.add_argument("--output", default="loadtests/catalogue.json", help="Where to write the seed file")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed-catalogue":
        seeded = seed_catalogue(args.products, args.stock, args.hot_stock)
        output = Path(args.output)
        output.write_text(json.dumps(seeded, indent=2))
        print(f"Seeded {len(seeded['products']) + 1} products for {seeded['seller']['email']} into {output}")
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
