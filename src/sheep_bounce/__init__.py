"""
Sheep Bounce: a side-view arcade simulation. Sheep hop under an
energy-driven kinematic model and a tilt-controlled bounce pad has to
catch the ones that jump too high.
"""

__version__ = "1.0.0"
