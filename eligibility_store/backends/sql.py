"""
SQLAlchemy implementation of the storage interface.

Works against any engine SQLAlchemy supports; production deployments use
PostgreSQL, local development and tests use SQLite.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlmodel import Session, select

from ..errors import DataIntegrityError, QueryFailed, StoreUnavailable
from ..interfaces import EligibleWithContract, StorageInterface
from ..models import Contract, Eligible, MerklePath

logger = logging.getLogger(__name__)


class SQLStorage(StorageInterface):
    """
    Storage backed by a request-scoped SQLModel session.

    The session's connection is checked out of the engine pool on first use
    and returned when ``close`` is called.
    """

    def __init__(self, session: Session):
        self._session = session

    def _acquire(self) -> None:
        # Returns the already checked-out connection when a transaction is open
        try:
            self._session.connection()
        except SQLAlchemyError as exc:
            raise StoreUnavailable("Could not acquire a database connection") from exc

    @contextmanager
    def _query(self, name: str) -> Iterator[None]:
        """Acquire a connection, then translate SQLAlchemy failures raised by the body."""
        self._acquire()
        try:
            yield
        except DBAPIError as exc:
            if exc.connection_invalidated:
                raise StoreUnavailable(f"Connection lost during {name!r}") from exc
            raise QueryFailed(name) from exc
        except SQLAlchemyError as exc:
            raise QueryFailed(name) from exc

    def find_eligible_by_identity(self, identity: str) -> Optional[EligibleWithContract]:
        """
        Get the eligibility record for ``identity`` joined with its contract.

        Identities are unique in a well-formed store. Should several rows match
        anyway, the one with the lowest id is returned and a warning logged.
        """
        statement = (
            select(Eligible, Contract)
            .outerjoin(Contract, Eligible.contract_id == Contract.id)  # type: ignore[arg-type]
            .where(Eligible.identity == identity)
            .order_by(Eligible.id)  # type: ignore[arg-type]
            .limit(2)
        )
        with self._query("find_eligible_by_identity"):
            rows = self._session.exec(statement).all()

        if not rows:
            return None
        if len(rows) > 1:
            logger.warning("Multiple eligibility rows for one identity; using id=%s", rows[0][0].id)

        eligible, contract = rows[0]
        if contract is None:
            raise DataIntegrityError(
                "find_eligible_by_identity",
                f"Eligibility row {eligible.id} references missing contract {eligible.contract_id}",
            )
        return EligibleWithContract(eligible=eligible, contract=contract)

    def find_proof_fragments(self, eligible_id: int) -> Sequence[str]:
        """
        Get the merkle path for an eligibility record, ordered by position.
        """
        statement = (
            select(MerklePath.path)
            .where(MerklePath.eligible_id == eligible_id)
            .order_by(MerklePath.position, MerklePath.id)  # type: ignore[arg-type]
        )
        with self._query("find_proof_fragments"):
            return list(self._session.exec(statement).all())

    def ping(self) -> None:
        with self._query("ping"):
            self._session.connection().execute(text("SELECT 1"))

    def close(self) -> None:
        """
        Return the connection to the pool.
        """
        self._session.close()
