"""
Muscle domain components.

This module contains the CE/PE/SE force curves and the Hill-type muscle model.
"""

from .force_curves import (
    ForceCurves,
    build_force_curves,
    force_length_ce,
    force_length_pe,
    force_length_se,
    force_velocity_ce,
    get_default_force_curves,
)
from .muscle import HillTypeMuscle, IsometricResult, MuscleParameters

__all__ = [
    "ForceCurves",
    "build_force_curves",
    "get_default_force_curves",
    "force_length_ce",
    "force_velocity_ce",
    "force_length_se",
    "force_length_pe",
    "HillTypeMuscle",
    "IsometricResult",
    "MuscleParameters",
]
