"""
Isometric Contraction
===============================

Before assembling the ankle model, a single **Hill-type muscle** can be checked in isolation.

Holding the muscle-tendon length fixed and stepping the activation, the contractile element shortens
and stretches the tendon until both transmit the same force.
"""

##############################################################################
# Import Libraries
# -----------------

import matplotlib.pyplot as plt
import seaborn as sns

from anklesim.simulator import HillTypeMuscle

##############################################################################
# Create Muscle
# -----------------
#
# The muscle is defined by three scale factors:
#
# - ``max_isometric_force__N``: Maximum isometric force
# - ``resting_length_ce__m``: Resting length of the contractile element
# - ``resting_length_se__m``: Resting length of the series elastic element (tendon)

muscle = HillTypeMuscle(
    max_isometric_force__N=100.0,
    resting_length_ce__m=0.3,
    resting_length_se__m=0.1,
)

##############################################################################
# Simulate
# -----------------
#
# Activation steps from 0 to 1 at 0.5 s.

result = muscle.simulate_isometric(horizon__s=2.0, activation=1.0, onset__s=0.5)

print(f"Final tendon force: {result.tendon_force__N[-1]:.1f} N")

##############################################################################
# Plot Results
# -----------------

fig, axs = plt.subplots(2, 1, figsize=(6, 6), sharex=True)

axs[0].plot(result.time__s, result.ce_length__m, "black")
axs[0].set_ylabel("CE length (m)")

axs[1].plot(result.time__s, result.tendon_force__N, "black")
axs[1].set_ylabel("Tendon force (N)")
axs[1].set_xlabel("Time (s)")

for ax in axs:
    sns.despine(ax=ax, top=True, right=True, trim=True, offset=0)

plt.tight_layout()
plt.show()
