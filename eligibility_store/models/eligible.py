"""
Eligibility records: one row per identity entitled to an award.
"""

from typing import Optional

from sqlmodel import Field, SQLModel


class Eligible(SQLModel, table=True):
    """
    An identity's entitlement under a contract.

    ``amount`` and ``merkle_index`` are kept as text so that values outside
    the 64-bit integer range survive storage and transport unchanged.
    """

    __tablename__ = "eligibles"

    id: Optional[int] = Field(default=None, primary_key=True)
    identity: str = Field(index=True, unique=True, description="External identity key (e.g. wallet address)")
    amount: str = Field(description="Award amount, decimal encoded as text")
    merkle_index: str = Field(description="Leaf position in the merkle tree, encoded as text")
    contract_id: int = Field(foreign_key="contracts.id", index=True)
