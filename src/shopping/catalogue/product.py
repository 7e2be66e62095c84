"""Product aggregate and the read-only catalogue accessor used by carts.

Products are reference data here: carts look them up by identifier and copy
the name and cost into their lines. Nothing in the shopping domain changes a
product once it exists.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, String, Text

from shopping.domain import shopping
from shopping.shared.persistence import storage_errors


@shopping.aggregate
class Product:
    name = String(required=True, max_length=255)
    category = String(max_length=100)
    cost = Float(required=True, min_value=0.0)
    rating = Float(min_value=0.0, max_value=5.0)
    image = Text()


@shopping.repository(part_of=Product)
class ProductRepository:
    def find_by_id(self, product_id) -> Product | None:
        """Return the product, or ``None`` when no product has that identifier."""
        if not product_id:
            return None
        with storage_errors("find product by id"):
            try:
                return self.get(str(product_id))
            except ObjectNotFoundError:
                return None

    def list_all(self) -> list[Product]:
        with storage_errors("list products"):
            return self._dao.query.all().items
