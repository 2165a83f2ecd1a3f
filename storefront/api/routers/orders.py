# storefront/api/routers/orders.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_order_service
from storefront.domain.schemas import OrderOut
from storefront.services.order_service import OrderService

router = APIRouter(tags=["orders"])


@router.get("/orders/{order_id}", response_model=OrderOut)
def get_order(order_id: UUID, svc: OrderService = Depends(get_order_service)):
    """
    Pobiera szczegóły zamówienia razem z pozycjami.
    """
    try:
        return svc.get_order(order_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/users/{user_id}/orders", response_model=List[OrderOut])
def list_user_orders(user_id: UUID, svc: OrderService = Depends(get_order_service)):
    """
    Historia zamówień użytkownika, najnowsze pierwsze.
    """
    return svc.list_user_orders(user_id)
