# storefront/services/cart_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.domain.cart import CartStore
from storefront.domain.schemas import ProductSnapshot
from storefront.repos.catalog_repo import CatalogRepo
from storefront.services.session_store import SessionStore
from storefront.utils.identifiers import normalize_product_id
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def cart_to_dict(session_id: str, cart: CartStore) -> Dict[str, Any]:
    return {
        "session_id": session_id,
        "items": [
            {
                "product_id": i.product.id,
                "name": i.product.name,
                "quantity": i.quantity,
                "price": i.product.price,
                "image": i.product.image,
            }
            for i in cart.items
        ],
        "total_items": cart.total_items,
        "total_price": cart.total_price,
    }


class CartService:
    """
    Use case'y koszyka sesji.
    commands (add, update, remove, clear) modyfikuja stan sesji i zapisuja ja
    query (get) tylko odczyt
    """

    def __init__(self, db: Session, store: SessionStore):
        self.catalog = CatalogRepo(db)
        self.store = store

    #query
    def get_cart(self, session_id: str) -> Dict[str, Any]:
        session = self.store.load(session_id)
        return cart_to_dict(session_id, session.cart)

    #commands
    def add_product(self, session_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
        session = self.store.load(session_id)

        product = self.catalog.get_product(normalize_product_id(product_id))
        if not product:
            raise LookupError(f"Product {product_id} not found")

        snapshot = ProductSnapshot(
            id=str(product.id),
            name=product.name,
            price=product.price,
            category_id=str(product.category_id) if product.category_id else None,
            image=product.image,
        )

        item = session.cart.add(snapshot, quantity)
        self.store.save(session)

        logger.info(f"Session {session_id}: product {snapshot.id} x{quantity}, line quantity now {item.quantity}")
        return cart_to_dict(session_id, session.cart)

    def update_quantity(self, session_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
        session = self.store.load(session_id)
        session.cart.update_quantity(product_id, quantity)
        self.store.save(session)
        return cart_to_dict(session_id, session.cart)

    def remove_product(self, session_id: str, product_id: str) -> Dict[str, Any]:
        session = self.store.load(session_id)
        session.cart.remove(product_id)
        self.store.save(session)

        logger.info(f"Session {session_id}: product {product_id} removed")
        return cart_to_dict(session_id, session.cart)

    def clear_cart(self, session_id: str) -> Dict[str, Any]:
        session = self.store.load(session_id)
        session.cart.clear()
        self.store.save(session)
        return cart_to_dict(session_id, session.cart)
