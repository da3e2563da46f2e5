"""Orientation helpers: quaternions, Euler angles and rotation matrices."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np

__all__ = [
    "Quaternion",
    "quat_to_rpy",
    "yaw_from_quat",
    "average_quaternion",
    "rotation_matrix_to_quaternion",
]


@dataclass(frozen=True)
class Quaternion:
    """Quaternion stored as ``x, y, z, w``."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __mul__(self, scale: float) -> "Quaternion":
        return Quaternion(self.x * scale, self.y * scale, self.z * scale, self.w * scale)

    __rmul__ = __mul__

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z, self.w))

    def norm(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)


def quat_to_rpy(q: Quaternion) -> tuple[float, float, float]:
    """Convert a quaternion to ``(roll, pitch, yaw)`` using ZYX order."""
    as_ = min(-2.0 * (q.x * q.z - q.w * q.y), 0.99999)
    yaw = math.atan2(2 * (q.x * q.y + q.w * q.z), q.w**2 + q.x**2 - q.y**2 - q.z**2)
    pitch = math.asin(as_) if as_ >= -1.0 else math.nan
    roll = math.atan2(2 * (q.y * q.z + q.w * q.x), q.w**2 - q.x**2 - q.y**2 + q.z**2)
    return roll, pitch, yaw


def yaw_from_quat(q: Quaternion) -> float:
    """Return the yaw angle of ``q``."""
    return quat_to_rpy(q)[2]


def average_quaternion(
    quaternions: Sequence[Quaternion], weights: Sequence[float]
) -> Quaternion:
    """Weighted average orientation (principal eigenvector of the weighted outer products)."""
    if len(quaternions) != len(weights):
        raise ValueError("quaternions and weights must have the same length")
    if not quaternions:
        raise ValueError("at least one quaternion is required")
    q_mat = np.array([list(q * w) for q, w in zip(quaternions, weights)], dtype=float).T
    values, vectors = np.linalg.eigh(q_mat @ q_mat.T)
    vec = vectors[:, int(np.argmax(values))]
    vec = vec / np.linalg.norm(vec)
    return Quaternion(*(float(v) for v in vec))


def rotation_matrix_to_quaternion(rot) -> Quaternion:
    """Quaternion of the transpose of the 3x3 matrix ``rot``."""
    r = np.asarray(rot, dtype=float).reshape(3, 3).T
    diag_sum = float(r[0, 0] + r[1, 1] + r[2, 2])
    if diag_sum > 0.0:
        s = math.sqrt(diag_sum + 1.0) * 2.0
        return Quaternion(
            (r[2, 1] - r[1, 2]) / s, (r[0, 2] - r[2, 0]) / s, (r[1, 0] - r[0, 1]) / s, 0.25 * s
        )
    if r[0, 0] > r[1, 1] and r[0, 0] > r[2, 2]:
        s = math.sqrt(1.0 + r[0, 0] - r[1, 1] - r[2, 2]) * 2.0
        return Quaternion(
            0.25 * s, (r[0, 1] + r[1, 0]) / s, (r[0, 2] + r[2, 0]) / s, (r[2, 1] - r[1, 2]) / s
        )
    if r[1, 1] > r[2, 2]:
        s = math.sqrt(1.0 + r[1, 1] - r[0, 0] - r[2, 2]) * 2.0
        return Quaternion(
            (r[0, 1] + r[1, 0]) / s, (r[0, 1] + r[1, 0]) / s, 0.25 * s, (r[0, 2] - r[2, 0]) / s
        )
    s = math.sqrt(1.0 + r[2, 2] - r[0, 0] - r[1, 1]) * 2.0
    return Quaternion(
        (r[0, 2] + r[2, 0]) / s, (r[1, 2] + r[2, 1]) / s, 0.25 * s, (r[1, 0] - r[0, 1]) / s
    )