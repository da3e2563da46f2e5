"""Filters, trajectories, LQR, orientation helpers and a super-capacitor frame decoder for competition robots."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "filters",
    "kalman_filter",
    "linear_interpolation",
    "lp_filter",
    "lqr",
    "ori_tool",
    "supercapacitor",
    "traj_gen",
]