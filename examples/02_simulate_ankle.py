"""
Ankle Postural Stability
===============================

The body is modelled as an **inverted pendulum** rotating about the ankle, actuated by the **soleus** and the **tibialis anterior**.

An optional **exoskeleton spring** in parallel with the tibialis anterior helps hold the foot up.
"""

##############################################################################
# Import Libraries
# -----------------

import matplotlib.pyplot as plt
import numpy as np

from anklesim.simulator import simulate, simulate_exoskeleton_sweep
from anklesim.utils.plotting import plot_ankle_torques, plot_body_angle

##############################################################################
# Uncontrolled Model
# ------------------
#
# With ``control_mode=0`` both muscles receive a fixed activation.

result = simulate(control_mode=0, exo_stiffness=0.0, horizon__s=5.0, verbose=True)

fig, axs = plt.subplots(2, 1, figsize=(6, 6), sharex=True)
plot_body_angle(result, axs[0])
plot_ankle_torques(result, axs[1])
plt.tight_layout()
plt.show()

##############################################################################
# Foot Drop
# -----------------
#
# With ``control_mode=1`` the tibialis anterior is almost silent and the soleus drive depends on the body angle,
# which mimics **foot drop**.

foot_drop = simulate(control_mode=1, exo_stiffness=0.0, horizon__s=5.0, verbose=True)

fig, axs = plt.subplots(2, 1, figsize=(6, 6), sharex=True)
plot_body_angle(foot_drop, axs[0])
plot_ankle_torques(foot_drop, axs[1])
plt.tight_layout()
plt.show()

##############################################################################
# Exoskeleton Sweep
# -----------------
#
# Each run is independent, so a sweep over spring constants can use several workers.
#
# .. note::
#    ``n_jobs=-1`` uses all available cores.

exo_stiffnesses = np.linspace(0.0, 2000.0, 5)
results = simulate_exoskeleton_sweep(
    exo_stiffnesses, control_mode=1, horizon__s=5.0, n_jobs=-1
)

fig, ax = plt.subplots(figsize=(6, 4))
for exo_stiffness, sweep_result in zip(exo_stiffnesses, results):
    plot_body_angle(
        sweep_result,
        ax,
        apply_default_formatting=False,
        label=f"k = {exo_stiffness:.0f}",
    )
ax.set_xlabel("Time (s)")
ax.set_ylabel("Body Angle (rad)")
ax.legend()
plt.tight_layout()
plt.show()
