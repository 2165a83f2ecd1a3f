# storefront/api/deps.py
import secrets

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.services.order_service import OrderService
from storefront.services.session_store import SessionStore, build_session_store
from storefront.services.storage_client import StorageClient
from storefront.utils import settings

_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    global _session_store
    if _session_store is None:
        _session_store = build_session_store()
    return _session_store


def get_storage_client() -> StorageClient:
    return StorageClient()


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def require_admin(x_admin_token: str = Header("")) -> None:
    expected = settings.ADMIN_API_TOKEN
    if not expected or not secrets.compare_digest(x_admin_token, expected):
        raise HTTPException(status_code=403, detail="Admin access required")
