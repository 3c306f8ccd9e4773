"""
Storage backends.
"""

from .sql import SQLStorage
from .sqlite import SQLiteStorage

__all__ = ["SQLStorage", "SQLiteStorage"]
