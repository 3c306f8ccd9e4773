"""
Contract metadata referenced by eligibility records.
"""

from typing import Optional

from sqlmodel import Field, SQLModel


class Contract(SQLModel, table=True):
    """A deployed distribution contract (read-only to this server)."""

    __tablename__ = "contracts"

    id: Optional[int] = Field(default=None, primary_key=True)
    contract_address: str = Field(description="On-chain address of the contract")
    contract_type: str = Field(description="Distribution mechanism variant, e.g. vesting")
