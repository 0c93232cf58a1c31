"""
Regression domain components.

This module contains the radial-basis ridge regression used to build the
empirical muscle force curves.
"""

from .regression import RegressionModel, fit_regression

__all__ = ["RegressionModel", "fit_regression"]
