"""
Ankle dynamics domain components.

This module contains the activation policies, the ankle equations of motion and
the simulation entry points.
"""

from .activation import (
    ActivationPolicy,
    ConstantActivation,
    FootDropActivation,
    GaitCycleActivation,
    policy_for_control_mode,
)
from .ankle import AnkleDynamicsSystem, INITIAL_STATE
from .simulation import SimulationResult, simulate, simulate_exoskeleton_sweep

__all__ = [
    "ActivationPolicy",
    "ConstantActivation",
    "FootDropActivation",
    "GaitCycleActivation",
    "policy_for_control_mode",
    "AnkleDynamicsSystem",
    "INITIAL_STATE",
    "SimulationResult",
    "simulate",
    "simulate_exoskeleton_sweep",
]
