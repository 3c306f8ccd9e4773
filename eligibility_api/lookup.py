"""
Eligibility lookup: joins an identity's eligibility record with its contract
and merkle path, and assembles the response returned to claimants.

``LookupService.lookup`` never raises for store problems. It returns one of
``Found``, ``NotFound``, ``InvalidInput`` or ``StoreFailure`` so callers
handle every outcome explicitly.
"""

import logging
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from eligibility_store.errors import QueryFailed, StoreError, StoreUnavailable
from eligibility_store.interfaces import StorageInterface

from .config import DEFAULT_IDENTITY_MAX_LENGTH

logger = logging.getLogger(__name__)


class EligibilityResponse(BaseModel):
    """Eligibility details for one identity, as served to clients."""

    model_config = ConfigDict(populate_by_name=True)

    identity: str = Field(description="The identity that was looked up")
    amount: str = Field(description="Award amount (decimal string, exact)")
    merkle_index: str = Field(description="Leaf index in the merkle tree (integer string, exact)")
    contract_address: str = Field(description="Address of the distributing contract")
    contract_type: str = Field(alias="type", description="Contract variant, e.g. vesting")
    merkle_path: list[str] = Field(default_factory=list, description="Proof hashes, leaf to root")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def merkle_path_len(self) -> int:
        """Number of hashes in merkle_path."""
        return len(self.merkle_path)


class FailureKind(str, Enum):
    STORE_UNAVAILABLE = "store_unavailable"
    QUERY_FAILED = "query_failed"


class Found(BaseModel):
    model_config = ConfigDict(frozen=True)

    response: EligibilityResponse


class NotFound(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: str


class InvalidInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: str
    reason: str


class StoreFailure(BaseModel):
    """The store could not answer. ``cause`` is for logs only, never for clients."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: FailureKind
    cause: StoreError


LookupResult = Union[Found, NotFound, InvalidInput, StoreFailure]


def validate_identity(identity: str, max_length: int = DEFAULT_IDENTITY_MAX_LENGTH) -> str | None:
    """
    Return a reason string if ``identity`` is unacceptable, else None.

    Identities are opaque; only emptiness and length are checked.
    """
    if not identity or not identity.strip():
        return "identity is empty"
    if len(identity) > max_length:
        return f"identity longer than {max_length} characters"
    return None


class LookupService:
    """
    Resolves identities against a storage backend.

    A service instance wraps one request-scoped storage; it holds no other state.
    """

    def __init__(self, storage: StorageInterface, identity_max_length: int = DEFAULT_IDENTITY_MAX_LENGTH):
        self._storage = storage
        self._identity_max_length = identity_max_length

    def lookup(self, identity: str) -> LookupResult:
        """
        Look up ``identity`` and assemble its eligibility response.

        The proof path is only queried once the eligibility record is known.
        """
        reason = validate_identity(identity, self._identity_max_length)
        if reason is not None:
            logger.info("Rejected identity lookup: %s", reason)
            return InvalidInput(identity=identity, reason=reason)

        try:
            row = self._storage.find_eligible_by_identity(identity)
            if row is None:
                logger.debug("No eligibility record for identity %r", identity)
                return NotFound(identity=identity)
            merkle_path = list(self._storage.find_proof_fragments(row.eligible.id))
        except StoreUnavailable as e:
            logger.error("Eligibility store unavailable: %s", e, exc_info=e)
            return StoreFailure(kind=FailureKind.STORE_UNAVAILABLE, cause=e)
        except QueryFailed as e:
            logger.error("Eligibility query %s failed: %s", e.query, e, exc_info=e)
            return StoreFailure(kind=FailureKind.QUERY_FAILED, cause=e)

        eligible, contract = row
        return Found(
            response=EligibilityResponse(
                identity=eligible.identity,
                amount=eligible.amount,
                merkle_index=eligible.merkle_index,
                contract_address=contract.contract_address,
                contract_type=contract.contract_type,
                merkle_path=merkle_path,
            )
        )
