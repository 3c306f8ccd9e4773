"""
Proof fragments: one row per hash in an eligibility record's merkle path.
"""

from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class MerklePath(SQLModel, table=True):
    """One segment of the inclusion proof for an eligibility record."""

    __tablename__ = "merkle_paths"
    __table_args__ = (UniqueConstraint("eligible_id", "position", name="uq_merkle_paths_eligible_position"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    eligible_id: int = Field(foreign_key="eligibles.id", index=True)
    position: int = Field(ge=0, description="Order of this segment within the path, starting at 0")
    path: str = Field(description="Hash value for this level of the proof")
