"""
Eligibility lookup router.

Maps lookup results to HTTP responses. Failure bodies are fixed plain-text
messages; causes are only logged.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from eligibility_store.interfaces import StorageInterface

from ..config import Settings, get_settings
from ..lookup import EligibilityResponse, Found, InvalidInput, LookupService, NotFound
from ..storage_factory import get_storage

router = APIRouter(tags=["Eligibility"])


def get_lookup_service(
    storage: StorageInterface = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> LookupService:
    """FastAPI dependency building a lookup service around the request's storage."""
    return LookupService(storage, identity_max_length=settings.identity_max_length)


@router.get(
    "/eligible/{identity:path}",
    response_model=EligibilityResponse,
    summary="Get eligibility details for an identity",
    description="""
Return the award amount, merkle index, contract and merkle proof path for an identity.

- **404** (plain text) if the identity has no eligibility record
- **400** (plain text) if the identity is blank or too long
- **500** (plain text) if the store cannot be reached or a query fails
""",
    responses={
        400: {"content": {"text/plain": {}}, "description": "Invalid identity"},
        404: {"content": {"text/plain": {}}, "description": "Identity not found"},
        500: {"content": {"text/plain": {}}, "description": "Internal server error"},
    },
)
def get_eligible_info(
    identity: str,
    service: LookupService = Depends(get_lookup_service),
) -> EligibilityResponse | Response:
    """Look up an identity's eligibility."""
    result = service.lookup(identity)
    if isinstance(result, Found):
        return result.response
    if isinstance(result, NotFound):
        return PlainTextResponse("Identity not found", status_code=404)
    if isinstance(result, InvalidInput):
        return PlainTextResponse("Invalid identity", status_code=400)
    return PlainTextResponse("Internal server error", status_code=500)
