"""Kinematics, dynamics and computed-torque control for a planar five-bar linkage robot."""

__version__ = "0.1.0"
__all__ = ["control", "dynamics", "kinematics"]