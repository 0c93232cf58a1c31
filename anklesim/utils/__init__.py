"""
Shared utilities: type aliases, exceptions and plotting helpers.
"""

from anklesim.utils.exceptions import (
    AnkleSimError,
    IntegrationFailureError,
    RootFindDivergenceError,
    SingularMatrixError,
)

__all__ = [
    "AnkleSimError",
    "IntegrationFailureError",
    "RootFindDivergenceError",
    "SingularMatrixError",
]
