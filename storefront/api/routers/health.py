# storefront/api/routers/health.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.data.migrations import require_schema, LATEST_VERSION
from storefront.domain.errors import SchemaNotReadyError

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        version = require_schema(db)
        return {"status": "ok", "schema_version": version}
    except SchemaNotReadyError as e:
        return {"status": "degraded", "schema_version": None, "expected_schema_version": LATEST_VERSION, "detail": str(e)}
