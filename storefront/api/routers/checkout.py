# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_order_service, get_session_store
from storefront.domain.errors import OrderSubmissionError, SchemaNotReadyError
from storefront.domain.schemas import CheckoutOut, DeliveryData, OrderOut, PaymentIn, PersonalData
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService
from storefront.services.session_store import SessionStore

router = APIRouter(prefix="/carts/{session_id}/checkout", tags=["checkout"])


def get_service(
    store: SessionStore = Depends(get_session_store),
    order_service: OrderService = Depends(get_order_service),
) -> CheckoutService:
    return CheckoutService(store=store, order_service=order_service)


@router.get("", response_model=CheckoutOut)
def get_checkout(session_id: str, svc: CheckoutService = Depends(get_service)):
    try:
        return svc.get_checkout(session_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/personal", response_model=CheckoutOut)
def submit_personal(session_id: str, payload: PersonalData, svc: CheckoutService = Depends(get_service)):
    try:
        return svc.submit_personal(session_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/delivery", response_model=CheckoutOut)
def submit_delivery(session_id: str, payload: DeliveryData, svc: CheckoutService = Depends(get_service)):
    try:
        return svc.submit_delivery(session_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/back", response_model=CheckoutOut)
def step_back(session_id: str, svc: CheckoutService = Depends(get_service)):
    try:
        return svc.back(session_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("", response_model=CheckoutOut)
def abandon_checkout(session_id: str, svc: CheckoutService = Depends(get_service)):
    try:
        return svc.abandon(session_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/payment", response_model=OrderOut, status_code=201)
def submit_payment(session_id: str, payload: PaymentIn, svc: CheckoutService = Depends(get_service)):
    """
    Ostatni krok: zapisuje zamowienie.
    Przy bledzie checkout zostaje na kroku platnosci, mozna ponowic.
    """
    try:
        return svc.pay(session_id, payload.payment, payload.user_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SchemaNotReadyError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except OrderSubmissionError as e:
        raise HTTPException(status_code=502, detail=str(e))
