# storefront/utils/identifiers.py
"""
Schemat identyfikatorow produktow (wersja 1).

- poprawny UUID (dowolny zapis) -> ten sam UUID
- stary identyfikator tekstowy (np. "prod-1712345678901") -> uuid5(LEGACY_PRODUCT_NAMESPACE, id)

uuid5 jest deterministyczny, wiec ten sam stary identyfikator zawsze daje ten sam UUID.
"""
import uuid

PRODUCT_ID_SCHEME_VERSION = 1
LEGACY_PRODUCT_NAMESPACE = uuid.UUID("5b0f3c1e-8a4d-4c7e-9a51-2f6e3d9c7b10")


def new_id() -> uuid.UUID:
    return uuid.uuid4()


def normalize_product_id(product_id: str | uuid.UUID) -> uuid.UUID:
    if isinstance(product_id, uuid.UUID):
        return product_id

    raw = str(product_id).strip()
    if not raw:
        raise ValueError("Product id must not be empty")

    try:
        return uuid.UUID(raw)
    except ValueError:
        return uuid.uuid5(LEGACY_PRODUCT_NAMESPACE, raw)
