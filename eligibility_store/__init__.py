"""
Read-only relational store for eligibility records, contracts and merkle paths.
"""

from .errors import DataIntegrityError, QueryFailed, StoreError, StoreUnavailable
from .interfaces import EligibleWithContract, StorageInterface

__all__ = [
    "DataIntegrityError",
    "EligibleWithContract",
    "QueryFailed",
    "StorageInterface",
    "StoreError",
    "StoreUnavailable",
]
