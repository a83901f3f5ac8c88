"""PoisonSim: xenon and samarium poisoning transients.

This package provides the I-135/Xe-135 and Pm-149/Sm-149 balance equations,
a fixed-step transient integrator, and an equilibrium solver with a
post-shutdown xenon peak search, suitable for teaching and visualization.

Run the CLI with: python -m poisonsim.cli
"""

__all__ = [
    "constants",
    "config",
    "engine",
    "equilibrium",
    "session",
]

__version__ = "0.1.0"
