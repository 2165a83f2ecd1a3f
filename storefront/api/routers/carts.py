#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_session_store
from storefront.data.database import get_db
from storefront.domain.schemas import CartOut, ItemIn, QuantityIn, SessionOut
from storefront.services.cart_service import CartService
from storefront.services.session_store import SessionStore

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(db: Session, store: SessionStore):
    return CartService(db=db, store=store)


@router.post("/", response_model=SessionOut, status_code=201)
def create_session(store: SessionStore = Depends(get_session_store)):
    session = store.create()
    return {"session_id": session.session_id}


@router.get("/{session_id}", response_model=CartOut)
def get_cart(
    session_id: str,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    svc = get_service(db, store)
    try:
        return svc.get_cart(session_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{session_id}/items", response_model=CartOut)
def add_item(
    session_id: str,
    payload: ItemIn,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    svc = get_service(db, store)
    try:
        return svc.add_product(session_id, payload.product_id, payload.quantity)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{session_id}/items/{product_id}", response_model=CartOut)
def update_item(
    session_id: str,
    product_id: str,
    payload: QuantityIn,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    svc = get_service(db, store)
    try:
        return svc.update_quantity(session_id, product_id, payload.quantity)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{session_id}/items/{product_id}", response_model=CartOut)
def remove_item(
    session_id: str,
    product_id: str,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    svc = get_service(db, store)
    try:
        return svc.remove_product(session_id, product_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{session_id}/items", response_model=CartOut)
def clear_cart(
    session_id: str,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    svc = get_service(db, store)
    try:
        return svc.clear_cart(session_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
