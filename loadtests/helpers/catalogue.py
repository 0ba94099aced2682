"""Access to the catalogue written by ``marketplace-manage seed-catalogue``.

Products have no HTTP surface, so load tests run against a catalogue
seeded straight into the database. The seed file names the seller's
credentials and the product ids to shop from.
"""

import json
import os
from functools import lru_cache
from pathlib import Path

DEFAULT_SEED_FILE = Path(__file__).resolve().parent.parent / "catalogue.json"


@lru_cache(maxsize=1)
def seeded_catalogue() -> dict:
    path = Path(os.getenv("LOADTEST_CATALOGUE", DEFAULT_SEED_FILE))
    if not path.exists():
        raise RuntimeError(
            f"No seeded catalogue at {path}. Run `marketplace-manage seed-catalogue --output {path}` first."
        )
    return json.loads(path.read_text())


def product_ids() -> list[str]:
    return [product["id"] for product in seeded_catalogue()["products"]]


def hot_product_id() -> str:
    """The low-stock product all contention users fight over."""
    return seeded_catalogue()["hot_product"]["id"]


def seller_credentials() -> dict:
    return seeded_catalogue()["seller"]
