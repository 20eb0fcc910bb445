"""
Accounts component - Caller identity and profiles.
"""

from ._impl import PROFILES, AccountService

__all__ = ["AccountService", "PROFILES"]
