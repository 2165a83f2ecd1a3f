# storefront/domain/cart.py
from decimal import Decimal
from typing import Iterable, List

from storefront.domain.schemas import CartItem, ProductSnapshot
from storefront.utils.identifiers import normalize_product_id


def has_valid_price(item: CartItem) -> bool:
    price = item.product.price
    return isinstance(price, Decimal) and price.is_finite() and price >= 0


class CartStore:
    """
    Koszyk jednej sesji (w pamieci).

    - add / update_quantity / remove / clear modyfikuja stan
    - total_items / total_price liczone przy kazdym odczycie, bez cache
    - linie z niepoprawna cena nie wchodza do total_price, ale wchodza do total_items
    - linie porownywane po znormalizowanym id (UUID w dowolnym zapisie, stare id tekstowe)
    - items i wartosci zwracane z add / update_quantity to kopie, stan zmienia sie tylko przez metody
    """

    def __init__(self, items: Iterable[CartItem] = ()):
        self._items: List[CartItem] = [item.model_copy(deep=True) for item in items]

    @property
    def items(self) -> List[CartItem]:
        return [i.model_copy(deep=True) for i in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def _find(self, product_id: str) -> CartItem | None:
        key = normalize_product_id(product_id)
        for item in self._items:
            if normalize_product_id(item.product.id) == key:
                return item
        return None

    def find(self, product_id: str) -> CartItem | None:
        item = self._find(product_id)
        return item.model_copy(deep=True) if item else None

    def add(self, product: ProductSnapshot, quantity: int = 1) -> CartItem:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        existing = self._find(product.id)
        if existing:
            existing.quantity += quantity
            return existing.model_copy(deep=True)

        item = CartItem(product=product, quantity=quantity)
        self._items.append(item)
        return item.model_copy(deep=True)

    def update_quantity(self, product_id: str, quantity: int) -> CartItem:
        # niedodatnia ilosc jest odrzucana, linia zostaje bez zmian (usuwanie tylko przez remove)
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0, use remove to delete the line")

        item = self._find(product_id)
        if not item:
            raise LookupError(f"Product {product_id} is not in the cart")

        item.quantity = quantity
        return item.model_copy(deep=True)

    def remove(self, product_id: str) -> None:
        key = normalize_product_id(product_id)
        self._items = [i for i in self._items if normalize_product_id(i.product.id) != key]

    def clear(self) -> None:
        self._items = []

    @property
    def total_items(self) -> int:
        return sum(i.quantity for i in self._items)

    @property
    def total_price(self) -> Decimal:
        return sum(
            (i.product.price * i.quantity for i in self._items if has_valid_price(i)),
            Decimal("0.00"),
        )

    def invalid_lines(self) -> List[CartItem]:
        return [i.model_copy(deep=True) for i in self._items if not has_valid_price(i)]
