"""
Storage interfaces for the eligibility lookup server.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Sequence

from .models import Contract, Eligible


class EligibleWithContract(NamedTuple):
    """An eligibility row joined with the contract it references."""

    eligible: Eligible
    contract: Contract


class StorageInterface(ABC):
    """
    Abstract interface for a read-only eligibility storage backend.

    Implementations raise ``StoreUnavailable`` or ``QueryFailed`` (see
    ``eligibility_store.errors``) instead of leaking driver exceptions.
    """

    @abstractmethod
    def find_eligible_by_identity(self, identity: str) -> Optional[EligibleWithContract]:
        """
        Get the eligibility record for ``identity`` together with its contract.
        Returns None if no record matches.
        """
        pass

    @abstractmethod
    def find_proof_fragments(self, eligible_id: int) -> Sequence[str]:
        """
        Get the merkle path hashes for an eligibility record, ordered by position.
        Returns an empty sequence if the record has no fragments.
        """
        pass

    @abstractmethod
    def ping(self) -> None:
        """
        Check that the store answers a trivial query.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """
        Close connections and clean up resources.
        """
        pass
