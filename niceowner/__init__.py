"""
niceowner - Own a value, even if it comes from a reference. No cloning.

This is the main package that exports the public API.
"""

__version__ = "0.1.0"

from niceowner.core.owner import (
    EmptyOwnerError,
    Loan,
    OccupiedOwnerError,
    OverwriteWarning,
    Owner,
    OwnerContractError,
    OwnerError,
)

__all__ = [
    "__version__",
    "EmptyOwnerError",
    "Loan",
    "OccupiedOwnerError",
    "OverwriteWarning",
    "Owner",
    "OwnerContractError",
    "OwnerError",
]
