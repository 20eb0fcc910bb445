"""
Trials component - Free trial requests.
"""

from ._impl import REQUIRED_FIELDS, TRIAL_REQUESTS, TrialService

__all__ = [
    "TrialService",
    "REQUIRED_FIELDS",
    "TRIAL_REQUESTS",
]
