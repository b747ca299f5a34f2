"""Vector, quaternion and matrix helpers for camera math.

All functions take array-likes and return new numpy arrays; inputs are never
written to. Quaternions are stored as (x, y, z, w). Matrices use column
vectors, so points are transformed as ``m @ v`` and the translation lives in
``m[:3, 3]``.
"""
from __future__ import annotations

import math
from typing import Sequence

import numpy as np

# Same cut-off wgpu-matrix/gl-matrix use before dividing by a length.
EPSILON = 1e-5


def vec(values: Sequence[float]) -> np.ndarray:
    """Return a float64 copy of *values*."""
    return np.array(values, dtype=np.float64)


def calculate_norm(vector: Sequence[float]) -> float:
    """
    Calculate the norm of a vector.

    :param vector: Vector of any dimension
    :return: Magnitude of the vector
    """
    return float(np.linalg.norm(vector))


def calculate_distance(start_point: Sequence[float], end_point: Sequence[float]) -> float:
    """
    Calculate the distance between two points.

    :param start_point: Starting point
    :param end_point: Ending point
    :return: Distance between the two points
    """
    return calculate_norm(vec(end_point) - vec(start_point))


def normalize_vector(vector: Sequence[float]) -> np.ndarray:
    """
    Normalize a vector.

    Vectors shorter than EPSILON normalize to the zero vector.

    :param vector: Vector of any dimension
    :return: Normalized copy
    """
    v = vec(vector)
    norm = np.linalg.norm(v)
    if norm > EPSILON:
        return v / norm
    return np.zeros_like(v)


def lerp(a: Sequence[float], b: Sequence[float], t: float) -> np.ndarray:
    """Linear interpolation between *a* and *b*."""
    a = vec(a)
    return a + (vec(b) - a) * t


def clamp(value: float, lower: float, upper: float) -> float:
    return lower if value < lower else upper if value > upper else value


def translation(offset: Sequence[float]) -> np.ndarray:
    """
    Build a 4x4 translation matrix.

    :param offset: (x, y, z); extra components are ignored
    :return: 4x4 matrix
    """
    m = np.identity(4)
    m[:3, 3] = vec(offset)[:3]
    return m


def transform(matrix: np.ndarray, vector: Sequence[float]) -> np.ndarray:
    """Multiply a 4-vector by a 4x4 matrix."""
    return np.asarray(matrix, dtype=np.float64) @ vec(vector)


def invert(matrix: np.ndarray) -> np.ndarray:
    return np.linalg.inv(matrix)


# =====================================================
# Quaternions
# =====================================================

def quat_identity() -> np.ndarray:
    return vec((0.0, 0.0, 0.0, 1.0))


def quat_multiply(a: Sequence[float], b: Sequence[float]) -> np.ndarray:
    """
    Hamilton product ``a * b``.

    :param a: Quaternion (x, y, z, w)
    :param b: Quaternion (x, y, z, w)
    :return: Product quaternion (x, y, z, w)
    """
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return vec((
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    ))


def quat_normalize(q: Sequence[float]) -> np.ndarray:
    return normalize_vector(q)


def quat_from_mat3(m: np.ndarray) -> np.ndarray:
    """
    Convert a 3x3 rotation matrix to a quaternion.

    Picks the largest diagonal term as pivot so the square root argument
    stays well away from zero.

    :param m: Orthonormal 3x3 rotation matrix
    :return: Unit quaternion (x, y, z, w)
    """
    m = np.asarray(m, dtype=np.float64)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        s = math.sqrt(trace + 1.0) * 2.0
        q = (
            (m[2, 1] - m[1, 2]) / s,
            (m[0, 2] - m[2, 0]) / s,
            (m[1, 0] - m[0, 1]) / s,
            0.25 * s,
        )
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        s = math.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2]) * 2.0
        q = (
            0.25 * s,
            (m[0, 1] + m[1, 0]) / s,
            (m[0, 2] + m[2, 0]) / s,
            (m[2, 1] - m[1, 2]) / s,
        )
    elif m[1, 1] > m[2, 2]:
        s = math.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2]) * 2.0
        q = (
            (m[0, 1] + m[1, 0]) / s,
            0.25 * s,
            (m[1, 2] + m[2, 1]) / s,
            (m[0, 2] - m[2, 0]) / s,
        )
    else:
        s = math.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1]) * 2.0
        q = (
            (m[0, 2] + m[2, 0]) / s,
            (m[1, 2] + m[2, 1]) / s,
            0.25 * s,
            (m[1, 0] - m[0, 1]) / s,
        )
    return quat_normalize(q)


def mat4_from_quat(q: Sequence[float]) -> np.ndarray:
    """
    Build a 4x4 rotation matrix from a quaternion.

    :param q: Unit quaternion (x, y, z, w)
    :return: 4x4 homogeneous rotation matrix
    """
    x, y, z, w = q
    m = np.identity(4)
    m[:3, :3] = (
        (1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - z * w), 2.0 * (x * z + y * w)),
        (2.0 * (x * y + z * w), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - x * w)),
        (2.0 * (x * z - y * w), 2.0 * (y * z + x * w), 1.0 - 2.0 * (x * x + y * y)),
    )
    return m
