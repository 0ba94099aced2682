"""Store aggregate — a seller's storefront. A seller has at most one store."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text

from ordering.catalogue.events import StoreSaved
from ordering.domain import ordering


@ordering.aggregate
class Store:
    seller_id = Identifier(required=True, unique=True)
    name = String(required=True, max_length=255, sanitize=False)
    description = Text(sanitize=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def open(cls, seller_id, name, description=None):
        now = datetime.now(UTC)
        store = cls(
            seller_id=seller_id,
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )
        store.raise_(
            StoreSaved(
                store_id=str(store.id),
                seller_id=str(seller_id),
                name=name,
                created=True,
                saved_at=now,
            )
        )
        return store

    def update_details(self, name, description=None):
        now = datetime.now(UTC)
        self.name = name
        self.description = description
        self.updated_at = now
        self.raise_(
            StoreSaved(
                store_id=str(self.id),
                seller_id=str(self.seller_id),
                name=name,
                created=False,
                saved_at=now,
            )
        )


@ordering.repository(part_of=Store)
class StoreRepository:
    def for_seller(self, seller_id) -> Store | None:
        stores = self._dao.query.filter(seller_id=str(seller_id)).all().items
        return stores[0] if stores else None
