"""Linear Kalman filter on numpy arrays."""

from __future__ import annotations

import numpy as np

__all__ = ["KalmanFilter"]


def _matrix(value) -> np.ndarray:
    return np.atleast_2d(np.asarray(value, dtype=float))


class KalmanFilter:
    """Discrete Kalman filter for ``x' = A x + B u`` observed as ``z = H x``.

    Predict and update do nothing until :meth:`clear` has set an initial state.
    """

    def __init__(self, a, b, h, q, r) -> None:
        self._a = _matrix(a)
        self._b = _matrix(b)
        self._h = _matrix(h)
        self._q = _matrix(q)
        self._r = _matrix(r)
        n = self._a.shape[0]
        m = self._h.shape[0]
        if self._a.shape != (n, n):
            raise ValueError("A should be square matrix")
        if self._h.shape[1] != n:
            raise ValueError("H columns should be equal to A columns")
        if self._b.shape[0] != n:
            raise ValueError("B rows should be equal to A columns")
        if self._q.shape != (n, n):
            raise ValueError("The rows and columns of Q should be equal to the columns of A")
        if self._r.shape != (m, m):
            raise ValueError("The rows and columns of R should be equal to the rows of H")
        self._n = n
        self._m = m
        self._x = np.zeros(n)
        self._p = np.zeros((n, n))
        self._p_new = np.zeros((n, n))
        self._k = np.zeros((n, m))
        self._identity = np.eye(n)
        self._inited = False

    def clear(self, x) -> None:
        """Set the state to ``x`` and zero the covariance."""
        x = np.asarray(x, dtype=float).reshape(-1)
        if x.shape[0] != self._n:
            raise ValueError(f"state must have {self._n} elements")
        self._x = x.copy()
        self._inited = True
        self._k = np.zeros((self._n, self._m))
        self._p = np.zeros((self._n, self._m))
        self._p_new = np.zeros((self._n, self._n))

    def update(self, z, r=None) -> None:
        """Correct the state with measurement ``z``, optionally replacing R."""
        if not self._inited:
            return
        if r is not None:
            self._r = _matrix(r)
        z = np.asarray(z, dtype=float).reshape(-1)
        h = self._h
        self._k = self._p_new @ h.T @ np.linalg.inv(h @ self._p_new @ h.T + self._r)
        self._x = self._x + self._k @ (z - h @ self._x)
        self._p = (self._identity - self._k @ h) @ self._p_new

    def predict(self, u, q=None) -> None:
        """Propagate the state with input ``u``, optionally replacing Q."""
        if not self._inited:
            return
        if q is not None:
            self._q = _matrix(q)
        u = np.asarray(u, dtype=float).reshape(-1)
        self._x = self._a @ self._x + self._b @ u
        self._p_new = self._a @ self._p @ self._a.T + self._q

    def state(self) -> np.ndarray:
        """Return a copy of the current state estimate."""
        return self._x.copy()