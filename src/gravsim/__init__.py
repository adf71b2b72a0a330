"""
gravsim: real-time 2D gravitational particle simulator

Point masses attract one another with an inverse-square law and are advanced
with a variable-timestep Verlet integrator. Clicking spawns new masses.

Layers:
- core: particle store, gravity pass, integrator, spawner, simulation step
- analysis: energy, momentum and trajectory diagnostics
- viz: matplotlib viewer and static plots
"""

__version__ = "0.1.0"
