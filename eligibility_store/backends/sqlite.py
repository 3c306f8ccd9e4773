"""
SQLite storage that owns its engine.

Used for local development and tests. Unlike ``SQLStorage``, which wraps a
session handed out by the server's pooled engine, this backend creates the
engine and the schema itself and offers helpers to seed rows.
"""

from typing import Iterable

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from ..models import Contract, Eligible, MerklePath
from .sql import SQLStorage


class SQLiteStorage(SQLStorage):
    """
    SQLite implementation of the storage interface.
    """

    def __init__(self, db_path: str, check_same_thread: bool = True):
        # For databases shared with TestClient (another thread), set check_same_thread=False
        connect_args = {"check_same_thread": check_same_thread}
        if db_path == ":memory:":
            self.engine = create_engine("sqlite://", connect_args=connect_args, poolclass=StaticPool)
        else:
            self.engine = create_engine(f"sqlite:///{db_path}", connect_args=connect_args)
        SQLModel.metadata.create_all(self.engine)
        super().__init__(Session(self.engine))

    def add_contract(self, contract_address: str, contract_type: str) -> Contract:
        """
        Add a contract and return it with its id populated.
        """
        contract = Contract(contract_address=contract_address, contract_type=contract_type)
        self._session.add(contract)
        self._session.commit()
        self._session.refresh(contract)
        return contract

    def add_eligible(self, identity: str, amount: str, merkle_index: str, contract_id: int) -> Eligible:
        """
        Add an eligibility record and return it with its id populated.
        """
        eligible = Eligible(identity=identity, amount=amount, merkle_index=merkle_index, contract_id=contract_id)
        self._session.add(eligible)
        self._session.commit()
        self._session.refresh(eligible)
        return eligible

    def add_proof_fragments(self, eligible_id: int, fragments: Iterable[tuple[int, str]]) -> None:
        """
        Add ``(position, path)`` pairs for an eligibility record.
        Pairs may be given in any order; reads sort by position.
        """
        for position, path in fragments:
            self._session.add(MerklePath(eligible_id=eligible_id, position=position, path=path))
        self._session.commit()

    def close(self) -> None:
        super().close()
        self.engine.dispose()
