"""
Muscle Force Curves
===============================

The **contractile element** of a Hill-type muscle is described by two empirical curves: **force-length** and **force-velocity**.

Neither has a convenient analytical form, so both are learned from experimental data with **Gaussian radial-basis ridge regression**.
"""

##############################################################################
# Import Libraries
# -----------------

import matplotlib.pyplot as plt

from anklesim.simulator.core.muscle import build_force_curves
from anklesim.simulator.core.muscle.training_data import (
    FORCE_LENGTH__DATA,
    FORCE_VELOCITY__DATA,
    normalize_force_length_data,
)
from anklesim.utils.plotting import plot_force_curves, plot_force_velocity_curve

##############################################################################
# Fit the Curves
# -----------------
#
# ``build_force_curves`` fits both regressions from the baked-in training data:
#
# - **force-length**: 147 digitised samples from Winters et al. (2011), normalised so the optimum is at (1, 1)
# - **force-velocity**: 23 samples from Millard et al. (2013)
#
# .. note::
#    The simulator fits these curves once per process with ``get_default_force_curves``.
#    Building them explicitly is only needed to inspect them.

force_curves = build_force_curves()

lengths, forces = normalize_force_length_data(
    FORCE_LENGTH__DATA[:, 0], FORCE_LENGTH__DATA[:, 1]
)

##############################################################################
# Plot Force-Length Curves
# ------------------------
#
# Together with the fitted **CE** curve we plot the analytical **PE** (parallel elastic) and **SE** (tendon) curves,
# and the force of an exoskeleton spring acting in parallel with the muscle.

fig, ax = plt.subplots(figsize=(6, 4))
ax.plot(lengths, forces, "o", color="gray", markersize=3, label="data")
plot_force_curves(ax, force_curves, exo_stiffness=1.0)
plt.tight_layout()
plt.show()

##############################################################################
# Plot Force-Velocity Curve
# -------------------------

fig, ax = plt.subplots(figsize=(6, 4))
ax.plot(*FORCE_VELOCITY__DATA.T, "o", color="gray", markersize=3)
plot_force_velocity_curve(ax, force_curves)
plt.tight_layout()
plt.show()
