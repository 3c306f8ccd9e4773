"""
Liveness and readiness probes.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from eligibility_store.errors import StoreError
from eligibility_store.interfaces import StorageInterface

from ..storage_factory import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check():
    """
    Health check endpoint to verify that the server is running.
    """
    return {"status": "ok"}


@router.get("/ready")
def readiness_check(storage: StorageInterface = Depends(get_storage)):
    """
    Readiness check: the server is ready once the store answers a trivial query.
    """
    try:
        storage.ping()
    except StoreError as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(status_code=503, content={"status": "unavailable", "database": "unavailable"})
    return {"status": "ok", "database": "ok"}
