"""
SQLModel schemas for the eligibility store.
"""

from .contract import Contract
from .eligible import Eligible
from .merkle_path import MerklePath

__all__ = ["Contract", "Eligible", "MerklePath"]
