"""
AnkleSim Simulator Module

This module provides the muscle, exoskeleton and ankle dynamics models together
with the high-level simulation functions.
"""

from anklesim.simulator.core.regression import RegressionModel, fit_regression
from anklesim.simulator.core.muscle import (
    ForceCurves,
    HillTypeMuscle,
    IsometricResult,
    MuscleParameters,
    get_default_force_curves,
)
from anklesim.simulator.core.exoskeleton import ExoskeletonSpring
from anklesim.simulator.core.dynamics import (
    ActivationPolicy,
    AnkleDynamicsSystem,
    ConstantActivation,
    FootDropActivation,
    GaitCycleActivation,
    SimulationResult,
    simulate,
    simulate_exoskeleton_sweep,
)
from anklesim.simulator.core.settings import IntegratorSettings, VelocitySolverSettings

__all__ = [
    "RegressionModel",
    "fit_regression",
    "ForceCurves",
    "get_default_force_curves",
    "HillTypeMuscle",
    "IsometricResult",
    "MuscleParameters",
    "ExoskeletonSpring",
    "ActivationPolicy",
    "AnkleDynamicsSystem",
    "ConstantActivation",
    "FootDropActivation",
    "GaitCycleActivation",
    "SimulationResult",
    "simulate",
    "simulate_exoskeleton_sweep",
    "IntegratorSettings",
    "VelocitySolverSettings",
]
