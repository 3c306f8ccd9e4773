"""
HTTP lookup service for claim eligibility records.
"""

__version__ = "0.1.0"
