"""
Core components for the simulator package.

This module contains the core classes and functions that are used across
the simulator package, organized to eliminate circular dependencies.
"""

from .regression import RegressionModel, fit_regression
from .muscle import HillTypeMuscle
from .exoskeleton import ExoskeletonSpring
from .dynamics import AnkleDynamicsSystem, simulate

__all__ = [
    "RegressionModel",
    "fit_regression",
    "HillTypeMuscle",
    "ExoskeletonSpring",
    "AnkleDynamicsSystem",
    "simulate",
]
